from itertools import islice

import pytest

from errors import UnknownOpCode
from errors import UnknownParameterMode
from instruction import decode
from opcodes import MODE_IMMEDIATE
from opcodes import MODE_POSITION
from opcodes import MODE_RELATIVE
from opcodes import OP_HALT
from opcodes import OP_MULTIPLY


def test_decode_opcode_and_modes():
    instruction = decode(1002)
    assert instruction.opcode == OP_MULTIPLY
    assert list(islice(instruction.modes, 3)) == [MODE_POSITION, MODE_IMMEDIATE, MODE_POSITION]


def test_modes_are_padded_with_position():
    instruction = decode(21101)
    assert list(islice(instruction.modes, 5)) == [
        MODE_IMMEDIATE, MODE_IMMEDIATE, MODE_RELATIVE, MODE_POSITION, MODE_POSITION,
    ]


def test_halt():
    assert decode(99).opcode == OP_HALT


@pytest.mark.parametrize("word", [0, 10, 98, 100])
def test_unknown_opcode(word):
    with pytest.raises(UnknownOpCode):
        decode(word)


def test_unknown_mode_raises_lazily():
    instruction = decode(30001)
    # Only the third parameter carries the bad digit
    assert next(instruction.modes) == MODE_POSITION
    assert next(instruction.modes) == MODE_POSITION
    with pytest.raises(UnknownParameterMode) as info:
        next(instruction.modes)
    assert info.value.value == 3
