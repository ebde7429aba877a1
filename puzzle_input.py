"""
Puzzle input loading with a local cache and an optional download from
adventofcode.com.
"""
import logging
import os
from typing import Optional

import requests

logger = logging.getLogger("puzzle_input")

INPUT_DIR = os.environ.get("AOC_INPUT_DIR", "input")
AOC_URL = "https://adventofcode.com/2019/day/{day}/input"
REQUEST_TIMEOUT = 30


class PuzzleInputError(Exception):
    pass


def input_path(day: int, input_dir: Optional[str] = None) -> str:
    return os.path.join(input_dir or INPUT_DIR, f"day{day}")


def read_input(path: str) -> str:
    try:
        with open(path, 'r') as f:
            return f.read()
    except OSError as e:
        raise PuzzleInputError(f"Could not read puzzle input '{path}': {e}")


def fetch_input(day: int, session: str) -> str:
    """Download the personal puzzle input for ``day`` using a session token."""
    url = AOC_URL.format(day=day)
    try:
        response = requests.get(url, cookies={'session': session}, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise PuzzleInputError(f"Download of {url} failed: {e}")
    logger.info(f"Downloaded input for day {day} ({len(response.text)} bytes)")
    return response.text


def load_input(day: int, input_dir: Optional[str] = None, session: Optional[str] = None) -> str:
    """
    Return the puzzle input for ``day``.

    The cached file ``<input_dir>/day<N>`` wins. Without it the input is
    downloaded, which needs a session token either passed in or set as
    ``AOC_SESSION``, and the download is written to the cache.
    """
    path = input_path(day, input_dir)
    if os.path.exists(path):
        return read_input(path)

    session = session or os.environ.get("AOC_SESSION")
    if not session:
        raise PuzzleInputError(f"No input at '{path}' and no AOC_SESSION token to download it")

    text = fetch_input(day, session)
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, 'w') as f:
        f.write(text)
    logger.debug(f"Cached input for day {day} at {path}")
    return text
