import argparse
import logging
import sys

from errors import ComputerError
from puzzle_input import PuzzleInputError
from puzzle_input import load_input
from puzzle_input import read_input
from puzzles import SOLUTIONS
from repair_droid import OxygenSystemNotFound


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the Intcode puzzles of Advent of Code 2019.")
    parser.add_argument("day", type=int, choices=sorted(SOLUTIONS), help="Puzzle day")
    parser.add_argument("--part", type=int, choices=(1, 2), help="Run only this part")
    parser.add_argument("--input", help="Path to the program text (default: input/day<N>)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        text = read_input(args.input) if args.input else load_input(args.day)
        parts = [args.part] if args.part else [1, 2]
        for part in parts:
            answer = SOLUTIONS[args.day][part - 1](text)
            print(f"Day {args.day} part {part}:")
            print(answer)
    except (ComputerError, PuzzleInputError, OxygenSystemNotFound, ValueError) as e:
        print(f"Error: {type(e).__name__} - {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
