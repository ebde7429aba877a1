import logging
from collections import deque
from threading import Lock
from typing import Dict, List, Optional, Tuple

from memory import Memory
from serialize import parse_program
from vm import Computer

logger = logging.getLogger("repair_droid")

# --------------------------
# Movement Commands
# --------------------------
NORTH = 1
SOUTH = 2
WEST = 3
EAST = 4

MOVES = {
    NORTH: (0, -1),
    SOUTH: (0, 1),
    WEST: (-1, 0),
    EAST: (1, 0),
}

REVERSE = {NORTH: SOUTH, SOUTH: NORTH, WEST: EAST, EAST: WEST}

# --------------------------
# Status Codes
# --------------------------
STATUS_WALL = 0
STATUS_MOVED = 1
STATUS_OXYGEN = 2

# --------------------------
# Map Tiles
# --------------------------
WALL = '#'
OPEN = '.'
OXYGEN = 'O'

Point = Tuple[int, int]


class DroidProtocolError(ValueError):
    pass


class OxygenSystemNotFound(Exception):
    pass


def _step(position: Point, command: int) -> Point:
    dx, dy = MOVES[command]
    return position[0] + dx, position[1] + dy


class RepairDroid:
    """
    Depth-first explorer for the repair droid.

    ``read`` hands the computer the next movement command: a step into the
    nearest unknown neighbour if there is one, otherwise a step back along
    the path taken so far. ``write`` records the resulting status. Once the
    droid is back at the origin with nothing left to explore, ``done`` is
    set and the whole reachable area is in ``area``.
    """

    def __init__(self):
        self.position: Point = (0, 0)
        self.area: Dict[Point, str] = {self.position: OPEN}
        self.oxygen_system: Optional[Point] = None
        self.done = False
        self._path: List[int] = []
        self._pending: Optional[Tuple[int, bool]] = None
        self._lock = Lock()

    def read(self) -> Optional[int]:
        with self._lock:
            if self.done:
                return None
            for command in (NORTH, EAST, SOUTH, WEST):
                if _step(self.position, command) not in self.area:
                    self._pending = (command, False)
                    return command
            # Nothing left here; _update_done guarantees the path is non-empty
            command = REVERSE[self._path[-1]]
            self._pending = (command, True)
            return command

    def write(self, status: int):
        with self._lock:
            if status not in (STATUS_WALL, STATUS_MOVED, STATUS_OXYGEN):
                raise DroidProtocolError(f"Unknown status code: {status}")
            if self._pending is None:
                raise DroidProtocolError(f"Status {status} without a movement command")
            command, backtracking = self._pending
            self._pending = None
            target = _step(self.position, command)

            if backtracking:
                if status == STATUS_WALL:
                    raise DroidProtocolError(f"Hit a wall while backtracking to {target}")
                self._path.pop()
                self.position = target
            elif status == STATUS_WALL:
                self.area[target] = WALL
            else:
                self.area[target] = OPEN if status == STATUS_MOVED else OXYGEN
                if status == STATUS_OXYGEN:
                    self.oxygen_system = target
                self._path.append(command)
                self.position = target
            self._update_done()

    def _update_done(self):
        if self._path:
            return
        self.done = all(_step(self.position, c) in self.area for c in MOVES)
        if self.done:
            logger.info(f"Exploration finished: {len(self.area)} cells mapped")

    def render(self) -> str:
        xs = [x for x, _ in self.area]
        ys = [y for _, y in self.area]
        rows = []
        for y in range(min(ys), max(ys) + 1):
            row = []
            for x in range(min(xs), max(xs) + 1):
                if (x, y) == self.position:
                    row.append('D')
                else:
                    row.append(self.area.get((x, y), ' '))
            rows.append(''.join(row))
        return '\n'.join(rows) + '\n'


# --------------------------
# Search
# --------------------------

def _distances(area: Dict[Point, str], start: Point) -> Dict[Point, int]:
    distances = {start: 0}
    frontier = deque([start])
    while frontier:
        current = frontier.popleft()
        for command in MOVES:
            neighbour = _step(current, command)
            if neighbour in distances or area.get(neighbour, WALL) == WALL:
                continue
            distances[neighbour] = distances[current] + 1
            frontier.append(neighbour)
    return distances


def shortest_path_length(droid: RepairDroid) -> int:
    """Fewest movement commands from the origin to the oxygen system."""
    if droid.oxygen_system is None:
        raise OxygenSystemNotFound("The droid never reached the oxygen system")
    return _distances(droid.area, (0, 0))[droid.oxygen_system]


def fill_minutes(droid: RepairDroid) -> int:
    """Minutes until oxygen spreading one cell per minute fills the area."""
    if droid.oxygen_system is None:
        raise OxygenSystemNotFound("The droid never reached the oxygen system")
    return max(_distances(droid.area, droid.oxygen_system).values())


def explore(program) -> RepairDroid:
    """
    Drive the droid program one instruction at a time until the droid has
    mapped everything it can reach. The program itself never halts.
    """
    if isinstance(program, Memory):
        memory = program.copy()
    elif isinstance(program, str):
        memory = Memory(parse_program(program))
    else:
        memory = Memory(program)

    droid = RepairDroid()
    computer = Computer(memory, input=droid, output=droid)
    while not droid.done:
        if not computer.step():
            break
    return droid
