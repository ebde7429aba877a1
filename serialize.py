import re
from typing import Iterable, List

from errors import ParseProgramError
from opcodes import VALUE_MAX
from opcodes import VALUE_MIN

_TOKEN = re.compile(r'[+-]?\d+')


def parse_program(text: str) -> List[int]:
    """Parse Intcode program text into a list of integers.

    The program is a single line of base-10 signed integers separated by
    commas. Surrounding whitespace of the whole text and of each token is
    ignored.

    Args:
        text: Program source, usually the contents of a puzzle input file.

    Returns:
        List[int]: The program values in order.

    Raises:
        ParseProgramError: If a token is not an integer or does not fit in
            a signed 64-bit value.
    """
    values = []
    for position, token in enumerate(text.strip().split(',')):
        token = token.strip()
        if not _TOKEN.fullmatch(token):
            raise ParseProgramError(token, position)
        value = int(token)
        if not VALUE_MIN <= value <= VALUE_MAX:
            raise ParseProgramError(token, position)
        values.append(value)
    return values


def serialize_program(values: Iterable[int]) -> str:
    """Inverse of parse_program: comma separated, no whitespace."""
    return ','.join(str(value) for value in values)
