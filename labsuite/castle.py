"""A randomly generated multi-level maze castle."""

from __future__ import annotations

import copy
import random
from dataclasses import replace

from labsuite.castle_common import Content, Direction, GameStatus, Position, Room
from labsuite.disjoint_set import DisjointSet

CONTENT_CHARS = "KPMES"


def room_content_str(content: int) -> str:
    """Three-character cell text for a room's contents."""
    raw = "".join(ch for i, ch in enumerate(CONTENT_CHARS) if content & (1 << i))
    if len(raw) == 0:
        return "   "
    if len(raw) == 1:
        return f" {raw} "
    if len(raw) == 2:
        return f"{raw[0]} {raw[1]}"
    return raw[:3]


class Castle:
    """Rooms laid out in ``level`` floors of ``height`` rows by ``width`` columns."""

    def __init__(
        self, width: int, height: int, level: int, rng: random.Random | None = None
    ) -> None:
        if width < 1 or height < 1 or level < 1:
            raise ValueError("castle dimensions must be positive")
        self.width = width
        self.height = height
        self.level = level
        self._rng = rng if rng is not None else random.Random()
        self._rooms = [
            Room(pos=Position(x, y, lvl))
            for lvl in range(level)
            for x in range(height)
            for y in range(width)
        ]
        self._ready = False
        self.exit_pos = Position()
        self.princess_pos = Position()
        self.monster_pos = Position()
        self.knight_pos = Position()

    @property
    def ready(self) -> bool:
        return self._ready

    def _index(self, pos: Position) -> int:
        return pos.level * self.width * self.height + pos.x * self.width + pos.y

    def is_valid_position(self, pos: Position) -> bool:
        return (
            0 <= pos.x < self.height
            and 0 <= pos.y < self.width
            and 0 <= pos.level < self.level
        )

    def _room_at(self, pos: Position) -> Room:
        if not self.is_valid_position(pos):
            raise IndexError(f"position outside the castle: {pos}")
        return self._rooms[self._index(pos)]

    def room(self, pos: Position) -> Room:
        """Return a copy of the room at ``pos``."""
        return replace(self._room_at(pos))

    def _add_direction(self, pos: Position, direction: Direction) -> None:
        if self.is_valid_position(pos):
            self._room_at(pos).add_direction(direction)

    def _add_content(self, pos: Position, content: Content) -> None:
        if self.is_valid_position(pos):
            self._room_at(pos).add_content(content)

    def _remove_content(self, pos: Position, content: Content) -> None:
        if self.is_valid_position(pos):
            self._room_at(pos).remove_content(content)

    def move_knight(self, direction: Direction) -> bool:
        """Move the knight, with the princess if they have met; report success."""
        content = Content.KNIGHT
        if self.knight_pos == self.princess_pos:
            content |= Content.PRINCESS
        return self._move_content(content, self.knight_pos, direction)

    def _move_content(self, content: Content, src: Position, direction: Direction) -> bool:
        if not self.is_valid_position(src):
            return False
        if not self._room_at(src).has_direction(direction):
            return False
        dst = src.neighbor(direction)
        if not self.is_valid_position(dst):
            return False
        self._remove_content(src, content)
        self._add_content(dst, content)
        if content & Content.KNIGHT:
            self.knight_pos = self.knight_pos.neighbor(direction)
        if content & Content.PRINCESS:
            self.princess_pos = self.princess_pos.neighbor(direction)
        return True

    def _construct_level(self, lvl: int) -> None:
        """Carve a spanning-tree maze into one level."""
        width, height = self.width, self.height
        upper = width * height * 4
        rng = self._rng
        edges: list[tuple[int, int, int, Direction]] = []
        for i in range(width - 1):
            for j in range(height):
                u = j * width + i
                edges.append((rng.randint(0, upper), u, u + 1, Direction.EAST))
        for i in range(height - 1):
            for j in range(width):
                u = i * width + j
                edges.append((rng.randint(0, upper), u, u + width, Direction.SOUTH))
        edges.sort(key=lambda edge: edge[0])

        dset = DisjointSet(width * height)
        base = lvl * width * height
        for _, u, v, direction in edges:
            if not dset.is_in_same_set(u, v):
                self._rooms[base + u].add_direction(direction)
                self._rooms[base + v].add_direction(direction.opposite)
                dset.merge(u, v)

    def generate(self) -> None:
        """Build every level, link levels by stairs and place the contents."""
        for lvl in range(self.level):
            self._construct_level(lvl)

        rng = self._rng
        cells = self.width * self.height
        for lvl in range(self.level - 1):
            num_stairs = min(rng.randint(1, 3), cells)
            for cell in rng.sample(range(cells), num_stairs):
                pos = Position(cell // self.width, cell % self.width, lvl)
                upstairs = pos.neighbor(Direction.UP)
                self._add_direction(pos, Direction.UP)
                self._add_direction(upstairs, Direction.DOWN)
                self._add_content(pos, Content.STAIR)
                self._add_content(upstairs, Content.STAIR)

        def random_pos(level: int) -> Position:
            return Position(rng.randrange(self.height), rng.randrange(self.width), level)

        self.exit_pos = random_pos(0)
        self.princess_pos = random_pos(rng.randrange(self.level))
        self.monster_pos = random_pos(rng.randrange(self.level))
        self.knight_pos = self.exit_pos

        self._add_content(self.exit_pos, Content.EXIT)
        self._add_content(self.princess_pos, Content.PRINCESS)
        self._add_content(self.monster_pos, Content.MONSTER)
        self._add_content(self.knight_pos, Content.KNIGHT)
        self._ready = True

    def render(self, lvl: int) -> str:
        """Draw one level with box-drawing characters."""
        if not 0 <= lvl < self.level:
            raise IndexError(f"level out of range: {lvl}")
        width, height = self.width, self.height
        lines = ["┌" + "───┬" * (width - 1) + "───┐"]
        for x in range(height):
            last_row = x == height - 1
            rooms = [self._room_at(Position(x, y, lvl)) for y in range(width)]
            row = ["│"]
            for room in rooms:
                row.append(room_content_str(room.content))
                row.append(" " if room.has_direction(Direction.EAST) else "│")
            lines.append("".join(row))

            walls = ["└" if last_row else "├"]
            for y, room in enumerate(rooms):
                walls.append("   " if room.has_direction(Direction.SOUTH) else "───")
                if y == width - 1:
                    walls.append("┘" if last_row else "┤")
                else:
                    walls.append("┴" if last_row else "┼")
            lines.append("".join(walls))
        return "\n".join(lines) + "\n"

    def game_status(self) -> GameStatus:
        if not self._ready:
            return GameStatus.PREPARE
        if self.knight_pos == self.princess_pos and self.knight_pos == self.exit_pos:
            return GameStatus.WIN
        if self.knight_pos == self.monster_pos:
            return GameStatus.LOSE
        if self.knight_pos == self.princess_pos:
            return GameStatus.RUNNING2
        return GameStatus.RUNNING1

    def copy(self) -> Castle:
        """Return an independent copy, marked ready to play."""
        duplicate = copy.deepcopy(self)
        duplicate._ready = True
        return duplicate