import threading

import pytest

from channels import BufferInput
from channels import Channel
from channels import Latch
from channels import OutputLog
from channels import SeededInput
from errors import WriteOutputError


def test_buffer_input():
    source = BufferInput([0, 1, 2])
    assert [source.read(), source.read()] == [0, 1]
    assert source.remaining() == [2]
    assert source.read() == 2
    assert source.read() is None


def test_seeded_input():
    source = SeededInput([5, 0], BufferInput([7]))
    assert [source.read(), source.read(), source.read(), source.read()] == [5, 0, 7, None]


def test_output_log_and_latch():
    log = OutputLog()
    latch = Latch()
    assert log.last is None
    for value in (1, 2, 3):
        log.write(value)
        latch.write(value)
    assert log.values == [1, 2, 3]
    assert log.last == 3
    assert latch.value == 3


def test_channel_preserves_order_across_threads():
    channel = Channel(capacity=1)
    received = []

    def consume():
        while True:
            value = channel.read()
            if value is None:
                return
            received.append(value)

    consumer = threading.Thread(target=consume)
    consumer.start()
    for value in range(200):
        channel.write(value)
    channel.close()
    consumer.join(timeout=10)

    assert not consumer.is_alive()
    assert received == list(range(200))


def test_closed_channel_delivers_pending_values():
    channel = Channel(capacity=2)
    channel.write(1)
    channel.write(2)
    channel.close()
    assert channel.read() == 1
    assert channel.read() == 2
    assert channel.read() is None


def test_write_to_closed_channel():
    channel = Channel()
    channel.close()
    assert channel.closed
    with pytest.raises(WriteOutputError):
        channel.write(1)


def test_writer_blocks_until_reader_drains():
    channel = Channel(capacity=1)
    channel.write(1)
    done = threading.Event()

    def produce():
        channel.write(2)
        done.set()

    producer = threading.Thread(target=produce)
    producer.start()
    assert not done.wait(timeout=0.2)
    assert channel.read() == 1
    assert done.wait(timeout=5)
    producer.join()
    assert channel.drain() == [2]


def test_invalid_capacity():
    with pytest.raises(ValueError):
        Channel(capacity=0)
