"""
Solutions for the Intcode puzzles of Advent of Code 2019.

Every part takes the raw program text and returns its answer.
"""
from typing import Callable, Dict, List, Tuple

from amplifiers import max_feedback_signal
from amplifiers import max_thruster_signal
from arcade import count_blocks
from arcade import play
from hull_robot import WHITE
from hull_robot import paint_hull
from memory import Memory
from repair_droid import explore
from repair_droid import fill_minutes
from repair_droid import shortest_path_length
from serialize import parse_program
from vm import Computer
from vm import run_program

GRAVITY_ASSIST_TARGET = 19690720


class DiagnosticError(ValueError):
    pass


# --------------------------
# Day 2: 1202 Program Alarm
# --------------------------

def restore_gravity_assist(program: List[int], noun: int, verb: int) -> int:
    memory = Memory(program)
    memory[1] = noun
    memory[2] = verb
    computer = Computer(memory)
    computer.run()
    return memory[0]


def find_noun_verb(program: List[int], target: int = GRAVITY_ASSIST_TARGET) -> Tuple[int, int]:
    for noun in range(100):
        for verb in range(100):
            if restore_gravity_assist(program, noun, verb) == target:
                return noun, verb
    raise ValueError(f"No noun and verb produce {target}")


def day_2_part_1(text: str) -> int:
    return restore_gravity_assist(parse_program(text), 12, 2)


def day_2_part_2(text: str) -> int:
    noun, verb = find_noun_verb(parse_program(text))
    return 100 * noun + verb


# --------------------------
# Day 5: Sunny with a Chance of Asteroids
# --------------------------

def run_diagnostic(text: str, system_id: int) -> int:
    """Return the diagnostic code; every output before it must be 0."""
    outputs = run_program(text, [system_id])
    if not outputs:
        raise DiagnosticError("The diagnostic program produced no output")
    *checks, code = outputs
    if any(checks):
        raise DiagnosticError(f"Diagnostic tests failed: {checks}")
    return code


def day_5_part_1(text: str) -> int:
    return run_diagnostic(text, 1)


def day_5_part_2(text: str) -> int:
    return run_diagnostic(text, 5)


# --------------------------
# Day 7: Amplification Circuit
# --------------------------

def day_7_part_1(text: str) -> int:
    return max_thruster_signal(text)


def day_7_part_2(text: str) -> int:
    return max_feedback_signal(text)


# --------------------------
# Day 9: Sensor Boost
# --------------------------

def run_boost(text: str, mode: int) -> int:
    outputs = run_program(text, [mode])
    if len(outputs) != 1:
        raise DiagnosticError(f"BOOST reported malfunctioning opcodes: {outputs[:-1]}")
    return outputs[0]


def day_9_part_1(text: str) -> int:
    return run_boost(text, 1)


def day_9_part_2(text: str) -> int:
    return run_boost(text, 2)


# --------------------------
# Day 11: Space Police
# --------------------------

def day_11_part_1(text: str) -> int:
    return paint_hull(text).painted_count()


def day_11_part_2(text: str) -> str:
    return paint_hull(text, start_color=WHITE).render()


# --------------------------
# Day 13: Care Package
# --------------------------

def day_13_part_1(text: str) -> int:
    return count_blocks(text)


def day_13_part_2(text: str) -> int:
    return play(text)


# --------------------------
# Day 15: Oxygen System
# --------------------------

def day_15_part_1(text: str) -> int:
    return shortest_path_length(explore(text))


def day_15_part_2(text: str) -> int:
    return fill_minutes(explore(text))


SOLUTIONS: Dict[int, Tuple[Callable[[str], object], Callable[[str], object]]] = {
    2: (day_2_part_1, day_2_part_2),
    5: (day_5_part_1, day_5_part_2),
    7: (day_7_part_1, day_7_part_2),
    9: (day_9_part_1, day_9_part_2),
    11: (day_11_part_1, day_11_part_2),
    13: (day_13_part_1, day_13_part_2),
    15: (day_15_part_1, day_15_part_2),
}
