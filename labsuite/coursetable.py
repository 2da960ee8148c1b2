"""Fixed-width score table for students who each choose their own courses."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator

from labsuite.scoretable import (
    BASE_WIDTH,
    _cell,
    _f32,
    _format_float,
    _name_width,
    _parse_int,
    _strip,
)

NO_CHOSEN_STUDENT = -1
NOT_AVAILABLE = "N/A"


def _course_width(course_name: str) -> int:
    return max(len(course_name) + 1, BASE_WIDTH)


@dataclass
class CourseStat:
    """Statistics of one course over the students who chose it."""

    avg_score: float = 0.0
    min_score: int = 5
    max_score: int = 0
    chosen_students: int = 0
    width: int = BASE_WIDTH


@dataclass
class CourseRecord:
    """One student: id, name and a score for every chosen course."""

    name: str = ""
    id: int = 0
    scores: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.scores = dict(self.scores)

    @property
    def avg_score(self) -> float | None:
        """Mean of the chosen courses' scores, or None if none is chosen."""
        if not self.scores:
            return None
        total = 0.0
        for course in sorted(self.scores):
            total = _f32(total + _f32(self.scores[course]))
        return _f32(total / len(self.scores))

    @property
    def courses(self) -> frozenset[str]:
        return frozenset(self.scores)

    def read_string(self, line: str, delimiter: str = ",") -> None:
        """Fill the record from ``name<d>course:score<d>course:score...``.

        Pieces that are empty or carry no score are skipped; scores read
        here are merged into the scores already held.
        """
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        name, *pieces = line.split(delimiter)
        parsed: dict[str, int] = {}
        for piece in pieces:
            if not piece:
                continue
            course_name, _, score_text = piece.partition(":")
            score_text = _strip(score_text.split("\n", 1)[0])
            if score_text:
                parsed[_strip(course_name)] = _parse_int(score_text)
        self.name = _strip(name)
        self.scores.update(parsed)

    def score(self, course_name: str) -> int | None:
        """Score in ``course_name``, or None if the course was not chosen."""
        return self.scores.get(course_name)

    def format_line(self, max_name_length: int, courses: Iterable[str] = ()) -> str:
        """Return the record as one aligned row over the given courses."""
        cells = [
            _cell(self.id, BASE_WIDTH),
            _cell(self.name, _name_width(max_name_length)),
        ]
        for course in sorted(set(courses)):
            value = self.scores.get(course, NOT_AVAILABLE)
            cells.append(_cell(value, _course_width(course)))
        avg = self.avg_score
        avg_text = NOT_AVAILABLE if avg is None or avg < 0 else _format_float(avg)
        cells.append(_cell(avg_text, BASE_WIDTH))
        return "".join(cells)


class CourseTable:
    """An ordered table of course records with per-course statistics."""

    def __init__(self, records: Iterable[CourseRecord] = ()) -> None:
        self._records: list[CourseRecord] = []
        self._courses: set[str] = set()
        for record in records:
            self.add(record)

    @property
    def records(self) -> tuple[CourseRecord, ...]:
        return tuple(self._records)

    @property
    def courses(self) -> tuple[str, ...]:
        """Every course chosen by any student, in sorted order."""
        return tuple(sorted(self._courses))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CourseRecord]:
        return iter(self._records)

    @property
    def max_name_length(self) -> int:
        return max((len(record.name) for record in self._records), default=0)

    def add(self, record: CourseRecord) -> CourseRecord:
        """Append a copy of ``record`` numbered after the existing rows."""
        stored = replace(record, id=len(self._records) + 1, scores=dict(record.scores))
        self._records.append(stored)
        self._courses.update(stored.scores)
        return stored

    def add_line(self, line: str, delimiter: str = ",") -> CourseRecord:
        """Parse ``line`` into a new record and append it."""
        record = CourseRecord()
        record.read_string(line, delimiter)
        return self.add(record)

    def stat(self, course_name: str) -> CourseStat:
        """Statistics of ``course_name`` over the students who chose it."""
        pack = CourseStat(width=_course_width(course_name))
        total = 0.0
        for record in self._records:
            score = record.score(course_name)
            # A score of -1 counts as "not chosen", like a missing course.
            if score is None or score == -1:
                continue
            total = _f32(total + _f32(score))
            pack.min_score = min(pack.min_score, score)
            pack.max_score = max(pack.max_score, score)
            pack.chosen_students += 1
        if pack.chosen_students == 0:
            pack.avg_score = NO_CHOSEN_STUDENT
            pack.min_score = NO_CHOSEN_STUDENT
            pack.max_score = NO_CHOSEN_STUDENT
        else:
            pack.avg_score = _f32(total / pack.chosen_students)
        return pack

    def format_header(self, max_name_length: int) -> str:
        cells = [
            _cell("no", BASE_WIDTH),
            _cell("name", _name_width(max_name_length)),
            *(_cell(course, _course_width(course)) for course in self.courses),
            _cell("average", BASE_WIDTH),
        ]
        return "".join(cells)

    def format_stat(self, max_name_length: int) -> str:
        """Return the average, min and max rows, separated by newlines."""
        packs = [self.stat(course) for course in self.courses]
        name_width = _name_width(max_name_length)
        rows = (
            ("average", lambda p: _format_float(p.avg_score)),
            ("min", lambda p: p.min_score),
            ("max", lambda p: p.max_score),
        )
        lines = []
        for label, value_of in rows:
            cells = [_cell("", BASE_WIDTH), _cell(label, name_width)]
            for pack in packs:
                value = NOT_AVAILABLE if pack.chosen_students == 0 else value_of(pack)
                cells.append(_cell(value, pack.width))
            lines.append("".join(cells))
        return "\n".join(lines)

    def render(self) -> str:
        """Return the whole table: header, records and statistics."""
        width = self.max_name_length
        courses = self.courses
        lines = [self.format_header(width)]
        lines.extend(record.format_line(width, courses) for record in self._records)
        lines.append(self.format_stat(width))
        return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Read a count and that many records from stdin; print the table."""
    parser = argparse.ArgumentParser(
        description="Print a per-course score table read from standard input."
    )
    parser.parse_args(argv)

    stdin = sys.stdin
    table = CourseTable()
    try:
        count = _parse_int(stdin.readline())
        for _ in range(count):
            table.add_line(stdin.readline().rstrip("\n"), ",")
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(table.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())