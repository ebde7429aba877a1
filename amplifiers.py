import logging
import threading
from itertools import permutations
from typing import Callable, Iterable, List, Optional, Sequence, Union

from channels import BufferInput
from channels import CHANNEL_CAPACITY
from channels import Channel
from channels import Latch
from channels import SeededInput
from errors import ReadInputError
from memory import Memory
from serialize import parse_program
from vm import Computer

logger = logging.getLogger("amplifiers")

Program = Union[Memory, Sequence[int], str]


def _as_memory(program: Program) -> Memory:
    if isinstance(program, Memory):
        return program
    if isinstance(program, str):
        return Memory(parse_program(program))
    return Memory(program)


class AmplifierStage:
    """One amplifier of a feedback loop, running on its own thread."""

    def __init__(self, index: int, memory: Memory, source, channel: Channel, sink: Channel,
                 on_failure: Optional[Callable[[BaseException], None]] = None):
        self.index = index
        self.computer = Computer(memory, input=source, output=sink)
        self.channel = channel
        self.sink = sink
        self.on_failure = on_failure
        self.error: Optional[BaseException] = None
        self.thread = threading.Thread(target=self._run, name=f"amplifier-{index}", daemon=True)

    def start(self):
        self.thread.start()

    def join(self):
        self.thread.join()

    def _run(self):
        try:
            self.computer.run()
        except Exception as e:
            self.error = e
            if self.on_failure is not None:
                self.on_failure(e)
            # Predecessor blocked on a full input channel gets WriteOutputError
            self.channel.close()
        finally:
            # Successor sees end of stream instead of waiting forever
            self.sink.close()


# --------------------------
# Linear Chain
# --------------------------

def run_chain(program: Program, phases: Iterable[int], signal: int = 0) -> int:
    """Feed ``signal`` through one fresh amplifier per phase setting, in order."""
    memory = _as_memory(program)
    for phase in phases:
        output = Latch()
        Computer(memory.copy(), input=BufferInput([phase, signal]), output=output).run()
        if output.value is None:
            raise ReadInputError()
        signal = output.value
    return signal


# --------------------------
# Feedback Loop
# --------------------------

def run_feedback_loop(program: Program, phases: Sequence[int], signal: int = 0,
                      capacity: int = CHANNEL_CAPACITY) -> int:
    """
    Run one amplifier per phase setting concurrently, wired in a ring.

    Channel ``i`` feeds stage ``i``; stage ``i`` writes to channel ``i + 1``
    and the last stage writes back to channel 0. Every stage reads its phase
    setting first, and the first stage additionally receives ``signal``.
    Returns the last value the final stage sent back around the loop.

    A failing stage closes both of its channels, so its neighbours stop
    too. The error raised is the one that failed first, not the ones it
    caused downstream or upstream.
    """
    memory = _as_memory(program)
    channels: List[Channel] = [Channel(capacity, name=f"amplifier-{i}-in") for i in range(len(phases))]

    failures: List[BaseException] = []
    lock = threading.Lock()

    def record_failure(error: BaseException):
        with lock:
            failures.append(error)

    stages = []
    for index, phase in enumerate(phases):
        seeds = [phase, signal] if index == 0 else [phase]
        source = SeededInput(seeds, channels[index])
        sink = channels[(index + 1) % len(channels)]
        stages.append(AmplifierStage(index, memory.copy(), source, channels[index], sink, record_failure))

    for stage in stages:
        stage.start()
    for stage in stages:
        stage.join()

    if failures:
        raise failures[0]

    remaining = channels[0].drain()
    if not remaining:
        raise ReadInputError()
    return remaining[-1]


# --------------------------
# Phase Setting Search
# --------------------------

def max_thruster_signal(program: Program, phases: Iterable[int] = range(5)) -> int:
    memory = _as_memory(program)
    best = None
    for order in permutations(phases):
        result = run_chain(memory, order)
        logger.debug(f"Chain {order} -> {result}")
        if best is None or result > best:
            best = result
    logger.info(f"Best chain signal: {best}")
    return best


def max_feedback_signal(program: Program, phases: Iterable[int] = range(5, 10)) -> int:
    memory = _as_memory(program)
    best = None
    for order in permutations(phases):
        result = run_feedback_loop(memory, order)
        logger.debug(f"Feedback loop {order} -> {result}")
        if best is None or result > best:
            best = result
    logger.info(f"Best feedback signal: {best}")
    return best
