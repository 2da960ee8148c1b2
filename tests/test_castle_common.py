import pytest

from labsuite.castle_common import (
    DIRECTION_INFO,
    NUM_DIRECTIONS,
    ROOM_NAMES,
    CommandParseResult,
    CommandType,
    Content,
    Direction,
    Position,
    Room,
)

REAL_DIRECTIONS = [d for d in Direction if d != Direction.ERROR]


def test_all_directions_set_num_directions_bits():
    room = Room()
    for direction in REAL_DIRECTIONS:
        room.add_direction(direction)
    assert bin(room.type).count("1") == NUM_DIRECTIONS
    assert not room.has_direction(Direction.ERROR) or NUM_DIRECTIONS == len(REAL_DIRECTIONS)


@pytest.mark.parametrize("direction", REAL_DIRECTIONS)
def test_add_direction_sets_its_bit_mask(direction):
    room = Room()
    room.add_direction(direction)
    assert room.type == direction.info.bit_mask == 1 << direction
    assert DIRECTION_INFO[direction].direction is direction


def test_direction_names_match_neighbors():
    origin = Position(5, 5, 5)
    moved = {d.info.name: origin.neighbor(d) for d in REAL_DIRECTIONS}
    assert moved == {
        "east": Position(5, 6, 5),
        "south": Position(6, 5, 5),
        "west": Position(5, 4, 5),
        "north": Position(4, 5, 5),
        "up": Position(5, 5, 6),
        "down": Position(5, 5, 4),
    }


def test_room_names_for_room_types():
    assert ROOM_NAMES[Room().type] == "jail"
    room = Room()
    for direction in (Direction.EAST, Direction.SOUTH, Direction.WEST, Direction.NORTH):
        room.add_direction(direction)
    assert ROOM_NAMES[room.type] == "corridor"
    assert len(ROOM_NAMES) == 16


def test_command_parse_result_defaults():
    result = CommandParseResult()
    assert result.type is CommandType.ERROR
    assert result.direction is Direction.ERROR


def test_neighbor_offsets():
    pos = Position(2, 3, 1)
    assert pos.neighbor(Direction.EAST) == Position(2, 4, 1)
    assert pos.neighbor(Direction.SOUTH) == Position(3, 3, 1)
    assert pos.neighbor(Direction.UP) == Position(2, 3, 2)
    assert pos.neighbor(Direction.DOWN) == Position(2, 3, 0)


def test_neighbor_error_stays():
    pos = Position(1, 1, 1)
    assert pos.neighbor(Direction.ERROR) == pos


@pytest.mark.parametrize("direction", REAL_DIRECTIONS)
def test_neighbor_round_trip(direction):
    pos = Position(5, 5, 5)
    assert pos.neighbor(direction).neighbor(direction.opposite) == pos
    assert pos.neighbor(direction) != pos


def test_room_directions():
    room = Room()
    room.add_direction(Direction.EAST)
    room.add_direction(Direction.UP)
    assert room.has_direction(Direction.EAST)
    assert room.has_direction(Direction.UP)
    assert not room.has_direction(Direction.WEST)
    assert room.type == Direction.EAST.info.bit_mask | Direction.UP.info.bit_mask


def test_room_error_direction_ignored():
    room = Room()
    room.add_direction(Direction.ERROR)
    assert room.type == 0
    assert not room.has_direction(Direction.ERROR)


def test_room_content_add_remove():
    room = Room()
    room.add_content(Content.KNIGHT | Content.PRINCESS)
    room.add_content(Content.EXIT)
    assert room.content == Content.KNIGHT | Content.PRINCESS | Content.EXIT
    room.remove_content(Content.KNIGHT | Content.PRINCESS)
    assert room.content == Content.EXIT
    room.remove_content(Content.EXIT)
    assert room.content == Content.EMPTY