from threading import Lock
from typing import Dict, List, Optional, Tuple

from memory import Memory
from serialize import parse_program
from vm import Computer

# --------------------------
# Tile Ids
# --------------------------
TILE_EMPTY = 0
TILE_WALL = 1
TILE_BLOCK = 2
TILE_PADDLE = 3
TILE_BALL = 4

TILE_CHARS = {
    TILE_EMPTY: ' ',
    TILE_WALL: '#',
    TILE_BLOCK: '=',
    TILE_PADDLE: '-',
    TILE_BALL: 'o',
}

# (-1, 0, score) updates the segment display instead of drawing a tile
SCORE_POSITION = (-1, 0)

JOYSTICK_LEFT = -1
JOYSTICK_NEUTRAL = 0
JOYSTICK_RIGHT = 1

FREE_PLAY_ADDRESS = 0
FREE_PLAY_QUARTERS = 2

Point = Tuple[int, int]


class ArcadeProtocolError(ValueError):
    pass


class ArcadeCabinet:
    """
    Screen, score display and joystick of the arcade cabinet.

    Output values arrive in triples ``(x, y, tile)``. When asked for input
    the cabinet tilts the joystick towards the ball so the paddle follows it.
    """

    def __init__(self):
        self.screen: Dict[Point, int] = {}
        self.score = 0
        self._pending: List[int] = []
        self._lock = Lock()

    def write(self, value: int):
        with self._lock:
            self._pending.append(value)
            if len(self._pending) < 3:
                return
            x, y, tile = self._pending
            self._pending = []
            self._draw(x, y, tile)

    def _draw(self, x: int, y: int, tile: int):
        if (x, y) == SCORE_POSITION:
            self.score = tile
            return
        if x < 0 or y < 0:
            raise ArcadeProtocolError(f"Invalid screen position: {(x, y)}")
        if tile not in TILE_CHARS:
            raise ArcadeProtocolError(f"Unknown tile id: {tile}")
        self.screen[(x, y)] = tile

    def read(self) -> int:
        with self._lock:
            ball = self._find(TILE_BALL)
            paddle = self._find(TILE_PADDLE)
        if ball is None or paddle is None:
            return JOYSTICK_NEUTRAL
        if ball[0] < paddle[0]:
            return JOYSTICK_LEFT
        if ball[0] > paddle[0]:
            return JOYSTICK_RIGHT
        return JOYSTICK_NEUTRAL

    def _find(self, tile: int) -> Optional[Point]:
        for position, value in self.screen.items():
            if value == tile:
                return position
        return None

    def block_count(self) -> int:
        with self._lock:
            return sum(1 for tile in self.screen.values() if tile == TILE_BLOCK)

    def render(self) -> str:
        with self._lock:
            if not self.screen:
                return ''
            width = max(x for x, _ in self.screen) + 1
            height = max(y for _, y in self.screen) + 1
            rows = [
                ''.join(TILE_CHARS[self.screen.get((x, y), TILE_EMPTY)] for x in range(width))
                for y in range(height)
            ]
        return '\n'.join(rows) + '\n'


def _load(program) -> Memory:
    if isinstance(program, Memory):
        return program.copy()
    if isinstance(program, str):
        return Memory(parse_program(program))
    return Memory(program)


def count_blocks(program) -> int:
    """Run the game without input and count the block tiles left on screen."""
    cabinet = ArcadeCabinet()
    Computer(_load(program), output=cabinet).run()
    return cabinet.block_count()


def play(program, free_play: bool = True) -> int:
    """Play the game to the end and return the final score."""
    memory = _load(program)
    if free_play:
        memory[FREE_PLAY_ADDRESS] = FREE_PLAY_QUARTERS
    cabinet = ArcadeCabinet()
    Computer(memory, input=cabinet, output=cabinet).run()
    return cabinet.score
