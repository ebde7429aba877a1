import logging
from enum import Enum, auto
from itertools import islice
from typing import Iterable, Iterator, List, Tuple, Union

from channels import BufferInput
from channels import OutputLog
from errors import ArithmeticOverflowError
from errors import ComputerError
from errors import ExpectedParameter
from errors import InvalidJump
from errors import ReadInputError
from errors import ReadOutsideOfMemory
from errors import WriteInImmediateMode
from errors import WriteOutsideOfMemory
from instruction import decode
from memory import Memory
from opcodes import *
from serialize import parse_program

logger = logging.getLogger("intcode")

# (mode, raw value) as read from the cell after the instruction word
Parameter = Tuple[int, int]


class ComputerState(Enum):
    RUNNING = auto()
    HALTED = auto()
    FAILED = auto()


# --- Intcode Computer ---
class Computer:

    # --- Initialization ---
    def __init__(self, program: Union[Memory, Iterable[int], str], input=None, output=None, verbose=False):
        """
        Load a program into a fresh computer.

        ``program`` may be a Memory (used as is, not copied), a sequence of
        integers, or program text. ``input`` needs a ``read()`` method and
        ``output`` a ``write(value)`` method; either may be attached later.
        """
        if isinstance(program, Memory):
            self.memory = program
        elif isinstance(program, str):
            self.memory = Memory(parse_program(program))
        else:
            self.memory = Memory(program)

        self.input = input
        self.output = output
        self.verbose = verbose

        self.instruction_pointer = 0
        self.relative_base = 0
        self.state = ComputerState.RUNNING

        # Operation Dispatch Table (Maps opcode to method)
        self.operations = {
            # Arithmetic
            OP_ADD: self.add_op,
            OP_MULTIPLY: self.mul_op,
            # I/O
            OP_INPUT: self.in_op,
            OP_OUTPUT: self.out_op,
            # Flow control
            OP_JUMP_IF_TRUE: self.jump_if_true,
            OP_JUMP_IF_FALSE: self.jump_if_false,
            # Comparison
            OP_LESS_THAN: self.less_than,
            OP_EQUALS: self.equals,
            # Registers
            OP_ADJUST_RELATIVE_BASE: self.adjust_relative_base,
            # HLT is handled directly in step()
        }

    def set_input(self, source):
        self.input = source

    def set_output(self, sink):
        self.output = sink

    @property
    def halted(self) -> bool:
        return self.state is ComputerState.HALTED

    # --- Public Interface & Execution ---

    def run(self):
        """Execute until the program halts. Any error aborts the run and is raised."""
        while self.step():
            pass

    def step(self) -> bool:
        """
        Execute a single instruction.

        Returns False once the program has halted, True otherwise. A computer
        that failed is left as it was at the point of failure and cannot be
        stepped again.
        """
        if self.state is ComputerState.HALTED:
            return False
        if self.state is ComputerState.FAILED:
            raise ComputerError("computer failed earlier and cannot be resumed", self.instruction_pointer)

        address = self.instruction_pointer
        try:
            instruction = decode(self._advance_pointer())
            if instruction.opcode == OP_HALT:
                self.state = ComputerState.HALTED
                if self.verbose:
                    logger.debug(f"[IP:{address:04d}] HLT")
                return False

            parameters = self._fetch_parameters(address, instruction.modes, ARITY[instruction.opcode])
            if self.verbose:
                logger.debug(f"[IP:{address:04d}] {OPCODE_NAMES[instruction.opcode]} {parameters}")
            self.operations[instruction.opcode](*parameters)
            if self.verbose:
                logger.debug(f"  {self.format_state()}")

        except ComputerError as e:
            if e.address is None:
                e.address = address
            self.state = ComputerState.FAILED
            logger.warning(f"Intcode run aborted: {e}")
            raise
        except Exception:
            # Raised by an attached source or sink
            self.state = ComputerState.FAILED
            raise
        return True

    def base_memory(self) -> List[int]:
        return self.memory.base

    def format_state(self) -> str:
        return (f"IP={self.instruction_pointer} RB={self.relative_base} "
                f"state={self.state.name} {self.memory!r}")

    # --- Arithmetic Operations ---

    def add_op(self, a: Parameter, b: Parameter, dest: Parameter):
        result = self.get_parameter(a) + self.get_parameter(b)
        self.set_parameter(dest, self._checked(result))

    def mul_op(self, a: Parameter, b: Parameter, dest: Parameter):
        result = self.get_parameter(a) * self.get_parameter(b)
        self.set_parameter(dest, self._checked(result))

    # --- I/O Operations ---

    def in_op(self, dest: Parameter):
        """IN: Pull the next value from the input source; may block."""
        if self.input is None:
            raise ReadInputError()
        value = self.input.read()
        if value is None:
            raise ReadInputError()
        self.set_parameter(dest, value)

    def out_op(self, src: Parameter):
        """OUT: Push a value to the output sink; a missing sink drops it."""
        value = self.get_parameter(src)
        if self.output is not None:
            self.output.write(value)

    # --- Flow Control ---

    def jump_if_true(self, condition: Parameter, target: Parameter):
        if self.get_parameter(condition) != 0:
            self._jump(self.get_parameter(target))

    def jump_if_false(self, condition: Parameter, target: Parameter):
        if self.get_parameter(condition) == 0:
            self._jump(self.get_parameter(target))

    # --- Comparison ---

    def less_than(self, a: Parameter, b: Parameter, dest: Parameter):
        self.set_parameter(dest, 1 if self.get_parameter(a) < self.get_parameter(b) else 0)

    def equals(self, a: Parameter, b: Parameter, dest: Parameter):
        self.set_parameter(dest, 1 if self.get_parameter(a) == self.get_parameter(b) else 0)

    def adjust_relative_base(self, offset: Parameter):
        self.relative_base = self._checked(self.relative_base + self.get_parameter(offset))

    # --- Parameter Resolution ---

    def get_parameter(self, parameter: Parameter) -> int:
        mode, raw = parameter
        if mode == MODE_IMMEDIATE:
            return raw
        address = self._resolve_address(mode, raw)
        if address < 0:
            raise ReadOutsideOfMemory(address)
        return self.memory.get(address)

    def set_parameter(self, parameter: Parameter, value: int):
        mode, raw = parameter
        if mode == MODE_IMMEDIATE:
            raise WriteInImmediateMode()
        address = self._resolve_address(mode, raw)
        if address < 0:
            raise WriteOutsideOfMemory(address)
        self.memory.set(address, value)

    def _resolve_address(self, mode: int, raw: int) -> int:
        if mode == MODE_RELATIVE:
            return self.relative_base + raw
        return raw

    # --- Internal Helpers ---

    def _advance_pointer(self) -> int:
        value = self.memory.get(self.instruction_pointer)
        self.instruction_pointer += 1
        return value

    def _fetch_parameters(self, address: int, modes: Iterator[int], count: int) -> List[Parameter]:
        parameters = []
        for mode in islice(modes, count):
            # An instruction inside the program must not run past its end
            if address in self.memory and self.instruction_pointer not in self.memory:
                raise ExpectedParameter()
            parameters.append((mode, self._advance_pointer()))
        return parameters

    def _jump(self, target: int):
        if target < 0:
            raise InvalidJump(target)
        self.instruction_pointer = target

    @staticmethod
    def _checked(value: int) -> int:
        if not VALUE_MIN <= value <= VALUE_MAX:
            raise ArithmeticOverflowError(value)
        return value

    def __repr__(self):
        return f"Computer({self.format_state()})"


def run_program(program: Union[Memory, Iterable[int], str], inputs: Iterable[int] = ()) -> List[int]:
    """Run a program to completion on a fresh computer and return its outputs."""
    output = OutputLog()
    Computer(program, input=BufferInput(inputs), output=output).run()
    return output.values
