"""
Input sources and output sinks for the Intcode computer.

A source is any object with ``read() -> Optional[int]`` where ``None``
means the stream has ended. A sink is any object with ``write(value)``.
The computer only ever calls these two methods, so the backings below are
interchangeable: a fixed buffer for tests, a log or a latch for collecting
results, and a bounded ``Channel`` for wiring computers together across
threads.
"""
import logging
import queue
import threading
from collections import deque
from typing import Iterable, List, Optional

from errors import WriteOutputError

logger = logging.getLogger("channels")

CHANNEL_CAPACITY = 1


class BufferInput:
    """Finite input: yields each value once, then end of stream."""

    def __init__(self, values: Iterable[int] = ()):
        self._values = deque(values)

    def read(self) -> Optional[int]:
        if not self._values:
            return None
        return self._values.popleft()

    def remaining(self) -> List[int]:
        return list(self._values)


class SeededInput:
    """Yields the seed values first, then everything from ``source``."""

    def __init__(self, seeds: Iterable[int], source):
        self._seeds = deque(seeds)
        self.source = source

    def read(self) -> Optional[int]:
        if self._seeds:
            return self._seeds.popleft()
        return self.source.read()


class OutputLog:
    def __init__(self):
        self.values: List[int] = []

    def write(self, value: int):
        self.values.append(value)

    @property
    def last(self) -> Optional[int]:
        return self.values[-1] if self.values else None


class Latch:
    """Holds only the most recent output."""

    def __init__(self):
        self.value: Optional[int] = None

    def write(self, value: int):
        self.value = value


class Channel:
    """
    Bounded FIFO between threads.

    ``read`` blocks until a value is available, or returns ``None`` once
    the channel is closed and drained. ``write`` blocks while the channel
    is full and raises ``WriteOutputError`` after ``close``. Values written
    before ``close`` are always delivered. Both ends poll the closed flag
    every ``POLL_INTERVAL`` seconds while they wait.
    """
    POLL_INTERVAL = 0.05

    def __init__(self, capacity: int = CHANNEL_CAPACITY, name: Optional[str] = None):
        if capacity <= 0:
            raise ValueError("Channel capacity must be at least 1")
        self.capacity = capacity
        self.name = name or f"channel-{id(self):x}"
        self._queue = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def read(self) -> Optional[int]:
        while True:
            try:
                return self._queue.get(timeout=self.POLL_INTERVAL)
            except queue.Empty:
                if not self._closed.is_set():
                    continue
            # Closed: anything written before close is still in the queue
            try:
                return self._queue.get_nowait()
            except queue.Empty:
                return None

    def write(self, value: int):
        while True:
            if self._closed.is_set():
                raise WriteOutputError(f"{self.name} is closed")
            try:
                self._queue.put(value, timeout=self.POLL_INTERVAL)
                return
            except queue.Full:
                continue

    def close(self):
        if not self._closed.is_set():
            self._closed.set()
            logger.debug(f"{self.name} closed")

    def drain(self) -> List[int]:
        """Remove and return every pending value without blocking."""
        values = []
        while True:
            try:
                values.append(self._queue.get_nowait())
            except queue.Empty:
                return values

    def __repr__(self):
        state = "closed" if self.closed else "open"
        return f"Channel({self.name}, capacity={self.capacity}, {state})"
