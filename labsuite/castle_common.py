"""Shared types of the castle game: directions, contents, positions and rooms."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Content(enum.IntFlag):
    """Bit flags for the things a room can hold."""

    EMPTY = 0x00
    KNIGHT = 0x01
    PRINCESS = 0x02
    MONSTER = 0x04
    EXIT = 0x08
    STAIR = 0x10


class Direction(enum.IntEnum):
    """A direction of movement; ERROR stands for no valid direction."""

    EAST = 0
    SOUTH = 1
    WEST = 2
    NORTH = 3
    UP = 4
    DOWN = 5
    ERROR = 6

    @property
    def info(self) -> DirectionInfo:
        return DIRECTION_INFO[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


class GameStatus(enum.Enum):
    PREPARE = 0
    RUNNING1 = 1
    RUNNING2 = 2
    WIN = 3
    LOSE = 4
    QUIT = 5


class CommandType(enum.Enum):
    MOVE = 0
    QUIT = 1
    RESTART = 2
    ERROR = 3


@dataclass(frozen=True)
class CommandParseResult:
    """The outcome of parsing one player command."""

    type: CommandType = CommandType.ERROR
    direction: Direction = Direction.ERROR


@dataclass(frozen=True)
class DirectionInfo:
    """Static facts about one direction."""

    direction: Direction
    bit_mask: int
    name: str
    x_offset: int
    y_offset: int
    level_offset: int


DIRECTION_INFO: tuple[DirectionInfo, ...] = (
    DirectionInfo(Direction.EAST, 0x01, "east", 0, 1, 0),
    DirectionInfo(Direction.SOUTH, 0x02, "south", 1, 0, 0),
    DirectionInfo(Direction.WEST, 0x04, "west", 0, -1, 0),
    DirectionInfo(Direction.NORTH, 0x08, "north", -1, 0, 0),
    DirectionInfo(Direction.UP, 0x10, "up", 0, 0, 1),
    DirectionInfo(Direction.DOWN, 0x20, "down", 0, 0, -1),
    DirectionInfo(Direction.ERROR, 0x00, "error", 0, 0, 0),
)

NUM_DIRECTIONS = len(DIRECTION_INFO) - 1

_OPPOSITES = {
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.SOUTH: Direction.NORTH,
    Direction.NORTH: Direction.SOUTH,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.ERROR: Direction.ERROR,
}

# Room names indexed by the room type (the bit set of its level exits).
ROOM_NAMES: tuple[str, ...] = (
    "jail",
    "garage",
    "basement",
    "bathroom",
    "bedroom",
    "kitchen",
    "attic",
    "gym",
    "library",
    "office",
    "laundry",
    "dining room",
    "nursery",
    "lounge",
    "guest room",
    "corridor",
)


@dataclass(frozen=True)
class Position:
    """Coordinates of a room: row ``x``, column ``y`` and ``level``."""

    x: int = 0
    y: int = 0
    level: int = 0

    def neighbor(self, direction: Direction) -> Position:
        """Return the adjacent position in ``direction``."""
        if direction == Direction.ERROR:
            return self
        info = DIRECTION_INFO[direction]
        return Position(
            self.x + info.x_offset,
            self.y + info.y_offset,
            self.level + info.level_offset,
        )


@dataclass
class Room:
    """A room: its exits (``type``), its contents and its position."""

    type: int = 0
    content: Content = Content.EMPTY
    pos: Position = field(default_factory=Position)

    def add_direction(self, direction: Direction) -> None:
        if direction != Direction.ERROR:
            self.type |= 1 << direction

    def has_direction(self, direction: Direction) -> bool:
        return bool(self.type & (1 << direction))

    def add_content(self, content: Content) -> None:
        self.content = Content(self.content | content)

    def remove_content(self, content: Content) -> None:
        self.content = Content(self.content & ~content)