import pytest

from arcade import JOYSTICK_NEUTRAL
from arcade import TILE_BALL
from arcade import TILE_PADDLE
from arcade import ArcadeCabinet
from arcade import ArcadeProtocolError
from arcade import count_blocks
from arcade import play
from vm import Computer

# Paddle at (3, 0), ball at (5, 0), then reports the joystick as the score
JOYSTICK_ECHO = [104, 3, 104, 0, 104, 3, 104, 5, 104, 0, 104, 4, 3, 100, 104, -1, 104, 0, 4, 100, 99]


def test_draw_tiles():
    cabinet = ArcadeCabinet()
    Computer([104, 1, 104, 2, 104, 3, 104, 6, 104, 5, 104, 4, 99], output=cabinet).run()
    assert cabinet.screen == {(1, 2): TILE_PADDLE, (6, 5): TILE_BALL}


def test_count_blocks():
    program = "104,0,104,0,104,2,104,1,104,0,104,2,104,2,104,0,104,1,99"
    assert count_blocks(program) == 2


def test_render():
    cabinet = ArcadeCabinet()
    for value in (0, 0, 1, 1, 0, 2, 2, 0, 4):
        cabinet.write(value)
    assert cabinet.render() == "#=o\n"


def test_joystick_follows_ball():
    assert play(JOYSTICK_ECHO, free_play=False) == 1


def test_joystick_neutral_without_ball():
    assert ArcadeCabinet().read() == JOYSTICK_NEUTRAL


def test_free_play_patches_address_zero():
    # Address 0 is an opcode: free play turns the add into a multiply
    program = [1, 0, 0, 0, 104, -1, 104, 0, 4, 0, 99]
    assert play(program) == 4
    assert play(program, free_play=False) == 2


@pytest.mark.parametrize("program", [
    [104, 0, 104, 0, 104, 9, 99],
    [104, -2, 104, 0, 104, 1, 99],
])
def test_protocol_errors(program):
    with pytest.raises(ArcadeProtocolError):
        count_blocks(program)
