"""
Intcode Opcodes and Parameter Modes

This module defines constants for the Intcode instruction set.
An instruction word encodes its opcode in the two lowest decimal digits and
one parameter mode per remaining digit (least significant first).

Reference: https://adventofcode.com/2019/day/9
"""

# --------------------------
# Value Range
# --------------------------
VALUE_BITS = 64
VALUE_MIN = -(1 << (VALUE_BITS - 1))
VALUE_MAX = (1 << (VALUE_BITS - 1)) - 1

# --------------------------
# Arithmetic Operations
# --------------------------
OP_ADD = 1
OP_MULTIPLY = 2

# --------------------------
# I/O Operations
# --------------------------
OP_INPUT = 3
OP_OUTPUT = 4

# --------------------------
# Flow Control and Logic
# --------------------------
OP_JUMP_IF_TRUE = 5
OP_JUMP_IF_FALSE = 6
OP_LESS_THAN = 7
OP_EQUALS = 8
OP_ADJUST_RELATIVE_BASE = 9
OP_HALT = 99

# --------------------------
# Parameter Modes
# --------------------------
MODE_POSITION = 0
MODE_IMMEDIATE = 1
MODE_RELATIVE = 2

PARAMETER_MODES = (MODE_POSITION, MODE_IMMEDIATE, MODE_RELATIVE)

# Number of parameters consumed by each opcode
ARITY = {
    OP_ADD: 3,
    OP_MULTIPLY: 3,
    OP_INPUT: 1,
    OP_OUTPUT: 1,
    OP_JUMP_IF_TRUE: 2,
    OP_JUMP_IF_FALSE: 2,
    OP_LESS_THAN: 3,
    OP_EQUALS: 3,
    OP_ADJUST_RELATIVE_BASE: 1,
    OP_HALT: 0,
}

OPCODE_NAMES = {
    OP_ADD: 'ADD',
    OP_MULTIPLY: 'MUL',
    OP_INPUT: 'IN',
    OP_OUTPUT: 'OUT',
    OP_JUMP_IF_TRUE: 'JNZ',
    OP_JUMP_IF_FALSE: 'JZ',
    OP_LESS_THAN: 'LT',
    OP_EQUALS: 'EQ',
    OP_ADJUST_RELATIVE_BASE: 'ARB',
    OP_HALT: 'HLT',
}

MODE_NAMES = {
    MODE_POSITION: 'position',
    MODE_IMMEDIATE: 'immediate',
    MODE_RELATIVE: 'relative',
}
