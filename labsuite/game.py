"""Interactive rescue-the-princess game played in a maze castle."""

from __future__ import annotations

import argparse
import random
import subprocess
import sys
from typing import Callable

from labsuite.castle import Castle
from labsuite.castle_common import (
    DIRECTION_INFO,
    NUM_DIRECTIONS,
    ROOM_NAMES,
    CommandParseResult,
    CommandType,
    Content,
    Direction,
    GameStatus,
    Room,
)

_LEVEL_EXITS_MASK = 0x0F


def room_name(room: Room) -> str:
    """Name shown to the player for ``room``."""
    if room.content & Content.EXIT:
        return "lobby"
    if room.type & ~_LEVEL_EXITS_MASK:
        return "stairwells"
    return ROOM_NAMES[room.type]


def parse_command(cmd: str) -> CommandParseResult:
    """Turn a line typed by the player into a command."""
    words = cmd.split()
    op = words[0] if words else ""
    if op == "go":
        name = words[1] if len(words) > 1 else ""
        for info in DIRECTION_INFO[:NUM_DIRECTIONS]:
            if info.name == name:
                return CommandParseResult(CommandType.MOVE, info.direction)
    elif op in ("quit", "exit"):
        return CommandParseResult(CommandType.QUIT)
    elif op == "restart":
        return CommandParseResult(CommandType.RESTART)
    return CommandParseResult(CommandType.ERROR)


def game_message(status: GameStatus, prev_status: GameStatus = GameStatus.PREPARE) -> str:
    """Message for reaching ``status`` from ``prev_status``; empty if none."""
    if status == GameStatus.WIN:
        return "Congratulations! You win!\n"
    if status == GameStatus.LOSE:
        return "Sorry, you lose!\n"
    if status == GameStatus.QUIT:
        return "Goodbye!\n"
    if status == GameStatus.RUNNING2 and prev_status == GameStatus.RUNNING1:
        return (
            "Knight: I come to save you!\n"
            "Princess: Thank you, brave knight!\n"
            "Knight: My pleasure. Let's return to the entrance.\n"
        )
    return ""


def _clear_terminal() -> None:
    """Clear the screen when standard output is a terminal."""
    if not sys.stdout.isatty():
        return
    sys.stdout.flush()
    try:
        subprocess.run(["clear"], check=False)
    except OSError:
        pass


def _read_stdin_line() -> str:
    line = sys.stdin.readline()
    if line == "":
        raise EOFError
    return line.rstrip("\n")


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class Game:
    """One game: a generated castle, its initial state and a step counter."""

    def __init__(
        self,
        width: int,
        height: int,
        level: int,
        rng: random.Random | None = None,
        clear_screen: Callable[[], None] = _clear_terminal,
    ) -> None:
        self.castle = Castle(width, height, level, rng)
        self.castle.generate()
        self._initial = self.castle.copy()
        self.steps = 0
        self._clear_screen = clear_screen

    def restart(self) -> None:
        """Return the castle to its initial state and reset the steps."""
        self.castle = self._initial.copy()
        self.steps = 0

    def prompt(self) -> str:
        """Describe the knight's room and its exits, then ask for a command."""
        room = self.castle.room(self.castle.knight_pos)
        exits = [
            info.name
            for info in DIRECTION_INFO[:NUM_DIRECTIONS]
            if room.type & info.bit_mask
        ]
        text = f"Welcome to the {room_name(room)}. There are {len(exits)} exits"
        if len(exits) == 1:
            text += f": {exits[0]}"
        elif len(exits) >= 2:
            text += ": " + ", ".join(exits[:-1]) + " and " + exits[-1]
        return text + ".\nEnter your command: "

    def move_player(self, direction: Direction) -> bool:
        """Move the knight; report whether the move was possible."""
        return self.castle.move_knight(direction)

    def render(self) -> str:
        """The knight's level of the castle followed by the step count."""
        return self.castle.render(self.castle.knight_pos.level) + f"Steps: {self.steps}\n"

    def _show(self, write: Callable[[str], None]) -> None:
        self._clear_screen()
        write(self.render())

    def mainloop(
        self,
        read_line: Callable[[], str] | None = None,
        write: Callable[[str], None] | None = None,
    ) -> GameStatus:
        """Play until the game is won, lost or quit; return the final status.

        ``read_line`` returns one command per call and raises EOFError when
        input runs out, which ends the game like a quit command.
        """
        read_line = read_line if read_line is not None else _read_stdin_line
        write = write if write is not None else _write_stdout

        prev_status = self.castle.game_status()
        self._show(write)
        while True:
            write(self.prompt())
            try:
                command = read_line()
            except EOFError:
                command = "quit"
            result = parse_command(command)

            if result.type == CommandType.ERROR:
                write("Invalid command. Please try again.\n")
                continue
            if result.type == CommandType.QUIT:
                write(game_message(GameStatus.QUIT))
                return GameStatus.QUIT
            if result.type == CommandType.RESTART:
                self.restart()
                self._show(write)
                continue
            if result.direction == Direction.ERROR:
                continue

            if self.move_player(result.direction):
                self.steps += 1

            self._show(write)
            status = self.castle.game_status()
            write(game_message(status, prev_status))
            if status in (GameStatus.WIN, GameStatus.LOSE):
                return status
            prev_status = status


def main(argv: list[str] | None = None) -> int:
    """Ask for the castle size on standard input and play a game."""
    parser = argparse.ArgumentParser(description="Rescue the princess from the castle.")
    parser.add_argument("--seed", type=int, default=None, help="random seed for the castle")
    args = parser.parse_args(argv)

    print("Welcome to the game!")
    _write_stdout("Enter castle size (format: width height level): ")

    tokens: list[str] = []
    while len(tokens) < 3:
        line = sys.stdin.readline()
        if not line:
            break
        tokens.extend(line.split())
    if len(tokens) < 3:
        print("error: expected three numbers", file=sys.stderr)
        return 1
    try:
        height, width, level = (int(token) for token in tokens[:3])
        rng = random.Random(args.seed) if args.seed is not None else None
        game = Game(width, height, level, rng)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    game.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())