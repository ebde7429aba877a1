import threading

import pytest

from amplifiers import max_feedback_signal
from amplifiers import max_thruster_signal
from amplifiers import run_chain
from amplifiers import run_feedback_loop
from errors import ReadInputError
from errors import UnknownOpCode
from memory import Memory

CHAIN_EXAMPLES = [
    ("3,15,3,16,1002,16,10,16,1,16,15,15,4,15,99,0,0", [4, 3, 2, 1, 0], 43210),
    ("3,23,3,24,1002,24,10,24,1002,23,-1,23,101,5,23,23,1,24,23,23,4,23,99,0,0",
     [0, 1, 2, 3, 4], 54321),
    ("3,31,3,32,1002,32,10,32,1001,31,-2,31,1007,31,0,33,1002,33,7,33,1,33,31,31,1,32,31,31,4,31,99,0,0,0",
     [1, 0, 4, 3, 2], 65210),
]

FEEDBACK_EXAMPLES = [
    ("3,26,1001,26,-4,26,3,27,1002,27,2,27,1,27,26,27,4,27,1001,28,-1,28,1005,28,6,99,0,0,5",
     [9, 8, 7, 6, 5], 139629729),
    ("3,52,1001,52,-5,52,3,53,1,52,56,54,1007,54,5,55,1005,55,26,1001,54,-5,54,1105,1,12,1,53,54,53,"
     "1008,54,0,55,1001,55,1,55,2,53,55,53,4,53,1001,56,-1,56,1005,56,6,99,0,0,0,0,10",
     [9, 7, 8, 5, 6], 18216),
]

# Reads a phase; phase 5 crashes, any other phase echoes one signal and halts
CRASH_ON_FIVE = [3, 20, 1008, 20, 5, 21, 1005, 21, 17, 3, 22, 4, 22, 99, 0, 0, 0, 98]

# Reads a phase; phase 6 crashes, any other phase echoes one signal three times
CRASH_ON_SIX = [3, 20, 1008, 20, 6, 21, 1005, 21, 19, 3, 22, 4, 22, 4, 22, 4, 22, 99, 0, 98, 0, 0, 0]


@pytest.mark.parametrize("program, phases, expected", CHAIN_EXAMPLES)
def test_run_chain(program, phases, expected):
    assert run_chain(program, phases) == expected


@pytest.mark.parametrize("program, phases, expected", CHAIN_EXAMPLES)
def test_max_thruster_signal(program, phases, expected):
    assert max_thruster_signal(program) == expected


def test_chain_does_not_modify_program():
    memory = Memory([3, 15, 3, 16, 1002, 16, 10, 16, 1, 16, 15, 15, 4, 15, 99, 0, 0])
    before = memory.base
    run_chain(memory, [4, 3, 2, 1, 0])
    assert memory.base == before


@pytest.mark.parametrize("program, phases, expected", FEEDBACK_EXAMPLES)
def test_run_feedback_loop(program, phases, expected):
    assert run_feedback_loop(program, phases) == expected


@pytest.mark.parametrize("program, phases, expected", FEEDBACK_EXAMPLES)
def test_max_feedback_signal(program, phases, expected):
    assert max_feedback_signal(program) == expected


def test_feedback_loop_is_repeatable():
    program, phases, expected = FEEDBACK_EXAMPLES[0]
    results = {run_feedback_loop(program, phases) for _ in range(5)}
    assert results == {expected}


def test_feedback_loop_without_output():
    with pytest.raises(ReadInputError):
        run_feedback_loop([99], [5, 6])


def test_feedback_loop_failure_cascades():
    # Stage 0 crashes; stage 1 then sees its input channel closed
    with pytest.raises(UnknownOpCode):
        run_feedback_loop(CRASH_ON_FIVE, [5, 6])


def test_chain_without_output():
    with pytest.raises(ReadInputError):
        run_chain([3, 0, 3, 0, 99], [1])


def test_feedback_loop_failure_unblocks_writer():
    # Stage 1 crashes while stage 0 is blocked writing into its full input
    result = {}

    def run():
        try:
            run_feedback_loop(CRASH_ON_SIX, [5, 6])
        except Exception as e:
            result["error"] = e

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert isinstance(result.get("error"), UnknownOpCode)
    assert result["error"].address == 19
