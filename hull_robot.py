from threading import Lock
from typing import Dict, Optional, Tuple

from memory import Memory
from vm import Computer

BLACK = 0
WHITE = 1

TURN_LEFT = 0
TURN_RIGHT = 1

# Screen coordinates: y grows downwards
UP = (0, -1)
RIGHT = (1, 0)
DOWN = (0, 1)
LEFT = (-1, 0)

# Clockwise order, so a right turn is +1 and a left turn is -1
DIRECTIONS = [UP, RIGHT, DOWN, LEFT]

Point = Tuple[int, int]


class RobotProtocolError(ValueError):
    pass


class Hull:
    def __init__(self):
        self.panels: Dict[Point, int] = {}

    def paint(self, position: Point, color: int):
        self.panels[position] = color

    def color_at(self, position: Point) -> int:
        return self.panels.get(position, BLACK)

    def painted_count(self) -> int:
        """Number of panels painted at least once, whatever their colour."""
        return len(self.panels)

    def render(self, white: str = '#', black: str = ' ') -> str:
        if not self.panels:
            return ''
        xs = [x for x, _ in self.panels]
        ys = [y for _, y in self.panels]
        rows = []
        for y in range(min(ys), max(ys) + 1):
            row = ''.join(
                white if self.color_at((x, y)) == WHITE else black
                for x in range(min(xs), max(xs) + 1)
            )
            rows.append(row)
        return '\n'.join(rows) + '\n'

    def __str__(self):
        return self.render()


class PaintingRobot:
    """
    Emergency hull painting robot.

    Serves as both the computer's input (the camera reports the colour of
    the panel under the robot) and its output (each pair of values is a
    colour to paint followed by a turn, after which the robot moves one
    panel forward).
    """

    def __init__(self, hull: Hull):
        self.hull = hull
        self.position: Point = (0, 0)
        self.direction = 0
        self._pending_color: Optional[int] = None
        self._lock = Lock()

    # Camera
    def read(self) -> int:
        with self._lock:
            return self.hull.color_at(self.position)

    # Instructions
    def write(self, value: int):
        with self._lock:
            if self._pending_color is None:
                if value not in (BLACK, WHITE):
                    raise RobotProtocolError(f"Invalid colour: {value}")
                self._pending_color = value
                return

            if value not in (TURN_LEFT, TURN_RIGHT):
                raise RobotProtocolError(f"Invalid rotation: {value}")
            self.hull.paint(self.position, self._pending_color)
            self._pending_color = None
            self._turn(value)
            self._move()

    def _turn(self, turn: int):
        step = 1 if turn == TURN_RIGHT else -1
        self.direction = (self.direction + step) % len(DIRECTIONS)

    def _move(self):
        dx, dy = DIRECTIONS[self.direction]
        x, y = self.position
        self.position = (x + dx, y + dy)


def paint_hull(program, start_color: int = BLACK) -> Hull:
    """Run the robot program until it halts and return the painted hull."""
    memory = program.copy() if isinstance(program, Memory) else program
    hull = Hull()
    if start_color != BLACK:
        hull.paint((0, 0), start_color)
    robot = PaintingRobot(hull)
    Computer(memory, input=robot, output=robot).run()
    return hull
