"""Fixed-width score table for students with three course scores each."""

from __future__ import annotations

import argparse
import math
import re
import struct
import sys
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator

NUM_SCORE = 3
BASE_WIDTH = 8

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _f32(value: float) -> float:
    """Round a number to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "nan"
    return f"{value:g}"


def _strip(text: str) -> str:
    return text.strip(" ")


def _parse_int(text: str) -> int:
    """Parse the leading integer of ``text``, ignoring anything after it."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _cell(value: object, width: int) -> str:
    return str(value).ljust(width)


def _name_width(max_name_length: int) -> int:
    return max(max_name_length + 1, BASE_WIDTH)


@dataclass
class StatPack:
    """Average, minimum and maximum of one course's scores."""

    avg_score: float = 0.0
    min_score: int = 5
    max_score: int = 0


@dataclass
class Record:
    """One student: id, name and three scores."""

    name: str = ""
    id: int = 0
    scores: list[int] = field(default_factory=lambda: [0] * NUM_SCORE)

    def __post_init__(self) -> None:
        self.scores = list(self.scores)
        if len(self.scores) != NUM_SCORE:
            raise ValueError(f"a record holds exactly {NUM_SCORE} scores")

    @property
    def avg_score(self) -> float:
        total = 0.0
        for score in self.scores:
            total = _f32(total + _f32(score))
        return _f32(total / NUM_SCORE)

    def read_string(self, line: str, delimiter: str = ",") -> None:
        """Fill the record from ``name<d>score<d>score<d>score``."""
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        fields = line.split(delimiter)
        raw_scores = fields[1 : 1 + NUM_SCORE]
        raw_scores += [""] * (NUM_SCORE - len(raw_scores))
        scores = [_parse_int(_strip(raw)) for raw in raw_scores]
        self.name = _strip(fields[0])
        self.scores = scores

    def format_line(self, max_name_length: int) -> str:
        """Return the record as one aligned table row."""
        cells = [
            _cell(self.id, BASE_WIDTH),
            _cell(self.name, _name_width(max_name_length)),
            *(_cell(score, BASE_WIDTH) for score in self.scores),
            _cell(_format_float(self.avg_score), BASE_WIDTH),
        ]
        return "".join(cells)


class RecordTable:
    """An ordered table of student records with per-course statistics."""

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._records: list[Record] = []
        for record in records:
            self.add(record)

    @property
    def records(self) -> tuple[Record, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    @property
    def max_name_length(self) -> int:
        return max((len(record.name) for record in self._records), default=0)

    def add(self, record: Record) -> Record:
        """Append a copy of ``record`` numbered after the existing rows."""
        stored = replace(record, id=len(self._records) + 1, scores=list(record.scores))
        self._records.append(stored)
        return stored

    def stat(self, score_num: int) -> StatPack:
        """Statistics of course ``score_num`` (0 to 2) over all records."""
        if not 0 <= score_num < NUM_SCORE:
            raise IndexError(f"course index out of range: {score_num}")
        pack = StatPack()
        total = 0.0
        for record in self._records:
            score = record.scores[score_num]
            total = _f32(total + _f32(score))
            pack.min_score = min(pack.min_score, score)
            pack.max_score = max(pack.max_score, score)
        pack.avg_score = _f32(total / len(self._records)) if self._records else math.nan
        return pack

    def format_header(self, max_name_length: int) -> str:
        cells = [
            _cell("no", BASE_WIDTH),
            _cell("name", _name_width(max_name_length)),
            *(_cell(f"score{i}", BASE_WIDTH) for i in range(1, NUM_SCORE + 1)),
            _cell("average", BASE_WIDTH),
        ]
        return "".join(cells)

    def format_stat(self, max_name_length: int) -> str:
        """Return the average, min and max rows, separated by newlines."""
        packs = [self.stat(i) for i in range(NUM_SCORE)]
        name_width = _name_width(max_name_length)
        rows = (
            ("average", [_format_float(p.avg_score) for p in packs]),
            ("min", [p.min_score for p in packs]),
            ("max", [p.max_score for p in packs]),
        )
        lines = []
        for label, values in rows:
            cells = [_cell("", BASE_WIDTH), _cell(label, name_width)]
            cells.extend(_cell(value, BASE_WIDTH) for value in values)
            lines.append("".join(cells))
        return "\n".join(lines)

    def render(self) -> str:
        """Return the whole table: header, records and statistics."""
        width = self.max_name_length
        lines = [self.format_header(width)]
        lines.extend(record.format_line(width) for record in self._records)
        lines.append(self.format_stat(width))
        return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Read a count and that many records from stdin; print the table."""
    parser = argparse.ArgumentParser(
        description="Print a score table read from standard input."
    )
    parser.parse_args(argv)

    stdin = sys.stdin
    table = RecordTable()
    try:
        count = _parse_int(stdin.readline())
        for _ in range(count):
            record = Record()
            record.read_string(stdin.readline().rstrip("\n"), ",")
            table.add(record)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(table.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())