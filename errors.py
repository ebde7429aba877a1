from typing import Optional


# --- Custom Exceptions ---
class ComputerError(Exception):
    """Base class for every error that aborts an Intcode run."""

    def __init__(self, message: str, address: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.address = address

    def __str__(self):
        if self.address is None:
            return self.message
        return f"{self.message} (instruction at {self.address})"


class UnknownOpCode(ComputerError):
    """The two low digits of an instruction word are not a known opcode."""

    def __init__(self, value: int, address: Optional[int] = None):
        super().__init__(f"unknown op code: {value}", address)
        self.value = value


class UnknownParameterMode(ComputerError):
    """A parameter mode digit is not 0, 1 or 2."""

    def __init__(self, value: int, address: Optional[int] = None):
        super().__init__(f"unknown parameter mode: {value}", address)
        self.value = value


class WriteInImmediateMode(ComputerError):
    def __init__(self, address: Optional[int] = None):
        super().__init__("parameter write in immediate mode", address)


class ExpectedParameter(ComputerError):
    def __init__(self, address: Optional[int] = None):
        super().__init__("expected parameter, but the memory stops here", address)


class ReadInputError(ComputerError):
    """No input source is attached, or the attached source is exhausted."""

    def __init__(self, address: Optional[int] = None):
        super().__init__("expected input", address)


class WriteOutputError(ComputerError):
    """The attached output sink refused the value (e.g. a closed channel)."""

    def __init__(self, message: str = "output sink is closed", address: Optional[int] = None):
        super().__init__(message, address)


class ReadOutsideOfMemory(ComputerError):
    def __init__(self, target: int, address: Optional[int] = None):
        super().__init__(f"attempted to read outside of memory at {target}", address)
        self.value = target


class WriteOutsideOfMemory(ComputerError):
    def __init__(self, target: int, address: Optional[int] = None):
        super().__init__(f"attempted to write outside of memory at {target}", address)
        self.value = target


class ArithmeticOverflowError(ComputerError):
    """A result left the signed 64-bit value range."""

    def __init__(self, value: int, address: Optional[int] = None):
        super().__init__(f"arithmetic overflow: {value}", address)
        self.value = value


class InvalidJump(ComputerError):
    def __init__(self, target: int, address: Optional[int] = None):
        super().__init__(f"invalid jump target: {target}", address)
        self.value = target


class ParseProgramError(ComputerError):
    """Program text contains a token that is not a 64-bit signed integer."""

    def __init__(self, token: str, position: int):
        super().__init__(f"could not parse token {token!r} at position {position}")
        self.token = token
        self.position = position
