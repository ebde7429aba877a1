from typing import Iterator
from typing import NamedTuple

from errors import UnknownOpCode
from errors import UnknownParameterMode
from opcodes import ARITY
from opcodes import PARAMETER_MODES

# --------------------------
# Instruction Decoding
# --------------------------

class Instruction(NamedTuple):
    opcode: int
    modes: Iterator[int]


def parameter_modes(digits: int) -> Iterator[int]:
    """
    Yields one parameter mode per decimal digit, least significant first.

    The stream never ends: once the encoded digits run out every further
    parameter is in position mode. An unknown digit raises when it is
    reached, not before.
    """
    while True:
        mode = digits % 10
        if mode not in PARAMETER_MODES:
            raise UnknownParameterMode(mode)
        yield mode
        digits //= 10


def decode(word: int) -> Instruction:
    """Splits a raw instruction word into its opcode and a lazy mode stream."""
    if word < 0:
        raise UnknownOpCode(-(-word % 100))
    opcode = word % 100
    if opcode not in ARITY:
        raise UnknownOpCode(opcode)
    return Instruction(opcode, parameter_modes(word // 100))
