# labsuite

A small collection of console programs and the libraries behind them:

- **Score table** (`labsuite.scoretable`): reads student records with three
  scores each and prints a formatted table with per-student averages and
  per-course average, minimum and maximum.
- **Course table** (`labsuite.coursetable`): the same idea, but each student
  lists any number of `course:score` pairs; courses a student has not taken
  show as `N/A`.
- **Castle** (`labsuite.castle`, `labsuite.castle_common`, `labsuite.game`):
  a text maze game. The knight starts in the lobby on the ground level, must
  find the princess, avoid the monster and bring her back to the lobby.
- **Disjoint set** (`labsuite.disjoint_set`): union-find with path compression
  and union by size, used to carve the castle mazes.
- **Paged data file** (`labsuite.page_table`, `labsuite.buffer`,
  `labsuite.datafile`, `labsuite.metadata`): a page table, a page buffer with
  dirty tracking and a data file manager that stores pages of 1024 bytes
  behind a `PDIARY` header.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Score table

Input is a count followed by one line per student: a name and exactly three
integer scores, separated by commas.

```
2
Alice, 5, 4, 3
Bob, 3, 4, 5
```

```
labsuite-scores < students.txt
```

Students are numbered from 1 in input order. Each column is at least 8
characters wide; the name column is one wider than the longest name. Below the
records come `average`, `min` and `max` rows for each course. A malformed
count or score prints `error: ...` on standard error and exits with status 1.

From Python:

```python
from labsuite.scoretable import Record, RecordTable

table = RecordTable()
record = Record()
record.read_string("Alice, 5, 4, 3", ",")
table.add(record)
print(table.stat(0))
print(table.render(), end="")
```

`RecordTable.add` stores a copy of the record with its number set;
`format_header`, `format_stat` and `Record.format_line` return the individual
rows that `render` joins.

## Course table

```
2
Alice, math:5, physics:4
Bob, math:3, art:5
```

```
labsuite-courses < courses.txt
```

Course columns are listed in alphabetical order. A student without a score in
a course shows `N/A` there, and a course nobody took shows `N/A` in the
statistics rows.

```python
from labsuite.coursetable import CourseTable

table = CourseTable()
table.add_line("Alice, math:5, physics:4", ",")
print(table.stat("math"))
print(table.courses)
print(table.render(), end="")
```

`CourseRecord.score(name)` returns `None` for a course that was not chosen,
and `CourseRecord.avg_score` is `None` for a student with no courses.

## Castle

```
labsuite-castle
labsuite-castle --seed 42
```

The program asks for the castle size and reads three numbers, taken as height,
width and level count. `--seed` makes the generated castle repeatable. Each
level is a connected maze, and one to three stairs link each level to the one
above. Commands:

- `go east`, `go south`, `go west`, `go north`, `go up`, `go down`
- `restart`: return to the starting state of the same castle
- `quit` or `exit` (end of input also quits)

Rooms are named by their exits; rooms with stairs are stairwells and the
starting room is the lobby. When standard output is a terminal the screen is
cleared before each redraw.

In the drawing, `K` is the knight, `P` the princess, `M` the monster, `E` the
exit and `S` a stair.

```python
import random

from labsuite.castle import Castle
from labsuite.castle_common import Direction

castle = Castle(4, 4, 2, rng=random.Random(1))
castle.generate()
print(castle.render(0), end="")
castle.move_knight(Direction.EAST)
print(castle.game_status())
```

`labsuite.game.Game` wraps a castle with a step counter; `Game.mainloop`
accepts `read_line` and `write` callables so a game can be driven without a
terminal, and returns the final `GameStatus`. `parse_command`, `room_name` and
`game_message` are available on their own.

## Paged data file

```python
from labsuite.datafile import DataFileManager
from labsuite.page_table import PageType

manager = DataFileManager()
page = manager.allocate_page(PageType.DATA)
manager.write_page(page, b"hello")
manager.save("diary.bin")

manager = DataFileManager("diary.bin")
print(manager.read_page(page)[:5])
```

A new file has a header page (page 0) and one page-table page (page 1), which
holds 256 entries of 4 bytes each. The header holds the 8-byte file type
`PDIARY`, the number of page-table pages and their indexes, as little-endian
64-bit integers. Saving back to the file that was loaded writes only the pages
marked dirty in the `Buffer`.

`PageTable` keeps one entry per page and a list of free pages; a freed page is
the next one handed out. Errors raise `PageTableError` or `DataFileError`.

## What it does not do

The data file stores pages only. There is no command for adding, listing,
showing or removing diary entries, and the `Diary`, `Metadata` and
`MetadataList` classes in `labsuite.metadata` are in-memory records that are
not written to the data file.