"""Paged data file with a header page and an on-disk page table."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from pathlib import Path

from labsuite.buffer import Buffer
from labsuite.page_table import (
    PAGE_SIZE,
    PageTable,
    PageTableEntry,
    PageType,
)

HEADER_PAGE = 0
FILE_TYPE_LENGTH = 8
FILE_TYPE = "PDIARY"

_ENTRY = struct.Struct("<I")
ENTRIES_PER_PAGE = PAGE_SIZE // _ENTRY.size


class DataFileError(Exception):
    """Raised when a data file cannot be read, written or used."""


@dataclass
class Header:
    """The file identifier and the pages that hold the page table."""

    file_type: str = ""
    size_page_table: int = 0
    page_table_index: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        encoded = self.file_type.encode("latin-1")[:FILE_TYPE_LENGTH]
        self.file_type = encoded.split(b"\0", 1)[0].decode("latin-1")
        self.page_table_index = list(self.page_table_index)

    def check_file_identifier(self) -> bool:
        return self.file_type == FILE_TYPE

    def check_valid_structure(self) -> bool:
        return self.size_page_table > 0 and len(self.page_table_index) > 0


class DataFileManager:
    """Holds a whole data file in memory and writes back the changed pages."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path: Path | None = None
        if path is not None:
            self.load(path)
            return
        self.buffer = Buffer(PAGE_SIZE * 2)
        self.header = Header(FILE_TYPE, 1, [1])
        self.page_table = PageTable()
        self.page_table.create_initial()
        capacity = ENTRIES_PER_PAGE * len(self.header.page_table_index)
        for _ in range(capacity - len(self.page_table)):
            self.page_table.load_entry(PageTableEntry(PageType.FREE))
        self.page_table.initialize_free_pages()

    def load(self, path: str | os.PathLike[str]) -> None:
        """Read the file at ``path``, its header and its page table."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise DataFileError(f"Error occurs when reading file {path}") from exc
        buffer = Buffer.from_bytes(data)
        buffer.resize(-(-len(data) // PAGE_SIZE) * PAGE_SIZE)
        header = self._read_header(buffer)
        page_table = self._read_page_table(buffer, header)
        self.path = path
        self.buffer = buffer
        self.header = header
        self.page_table = page_table

    @staticmethod
    def _read_header(buffer: Buffer) -> Header:
        pos = HEADER_PAGE * PAGE_SIZE
        try:
            raw_type = buffer.read_bytes(pos, FILE_TYPE_LENGTH)
            pos += FILE_TYPE_LENGTH
            size = buffer.read_u64(pos)
            pos += 8
            header = Header(raw_type.decode("latin-1"), size, [])
            if not header.check_file_identifier():
                raise DataFileError("Invalid data file for Personal Diary")
            for _ in range(size):
                header.page_table_index.append(buffer.read_u64(pos))
                pos += 8
        except IndexError as exc:
            raise DataFileError("Failed to read header") from exc
        if not header.check_valid_structure():
            raise DataFileError("Invalid data file structure")
        return header

    @staticmethod
    def _read_page_table(buffer: Buffer, header: Header) -> PageTable:
        page_table = PageTable()
        for page_index in header.page_table_index:
            try:
                page = buffer.read_bytes(page_index * PAGE_SIZE, PAGE_SIZE)
            except IndexError as exc:
                raise DataFileError("Failed to read page table") from exc
            for (value,) in _ENTRY.iter_unpack(page):
                try:
                    page_type = PageType(value)
                except ValueError as exc:
                    raise DataFileError("Failed to load page entity") from exc
                page_table.load_entry(PageTableEntry(page_type))
        page_table.initialize_free_pages()
        return page_table

    def _write_header(self) -> None:
        header = self.header
        raw_type = header.file_type.encode("latin-1")[:FILE_TYPE_LENGTH]
        pos = HEADER_PAGE * PAGE_SIZE
        try:
            self.buffer.write_bytes(pos, raw_type.ljust(FILE_TYPE_LENGTH, b"\0"))
            pos += FILE_TYPE_LENGTH
            self.buffer.write_u64(pos, header.size_page_table)
            pos += 8
            for page_index in header.page_table_index:
                self.buffer.write_u64(pos, page_index)
                pos += 8
        except IndexError as exc:
            raise DataFileError("Header does not fit in its page") from exc
        self.buffer.set_dirty(HEADER_PAGE, True)

    def _write_page_table(self) -> None:
        pages = self.header.page_table_index
        if not pages:
            raise DataFileError("No page holds the page table")
        entries = self.page_table.entries
        if len(entries) > ENTRIES_PER_PAGE * len(pages):
            raise DataFileError("Page table does not fit in its pages")
        for number, page_index in enumerate(pages):
            chunk = entries[number * ENTRIES_PER_PAGE : (number + 1) * ENTRIES_PER_PAGE]
            if not chunk and number > 0:
                break
            data = b"".join(_ENTRY.pack(int(entry.page_type)) for entry in chunk)
            try:
                self.buffer.write_bytes(page_index * PAGE_SIZE, data)
            except IndexError as exc:
                raise DataFileError("Page table page lies outside the file") from exc
            self.buffer.set_dirty(page_index, True)

    def _check_page(self, page_index: int, action: str) -> None:
        if self.page_table.is_free_page(page_index):
            raise DataFileError(f"{action} free page index")
        if not 0 <= page_index < self.buffer.page_count:
            raise DataFileError(f"Page index outside the file: {page_index}")

    def read_page(self, page_index: int) -> bytes:
        """Return the contents of an allocated page."""
        self._check_page(page_index, "Read")
        return self.buffer.read_bytes(page_index * PAGE_SIZE, PAGE_SIZE)

    def write_page(self, page_index: int, data: bytes) -> None:
        """Overwrite the start of an allocated page with ``data``."""
        if len(data) > PAGE_SIZE:
            raise ValueError(f"page data longer than {PAGE_SIZE} bytes")
        self._check_page(page_index, "Write to")
        self.buffer.write_bytes(page_index * PAGE_SIZE, data)
        self.buffer.set_dirty(page_index, True)

    def allocate_page(self, page_type: PageType) -> int:
        """Allocate a page of ``page_type``, growing the file if needed.

        Raises PageTableError when no page is free.
        """
        page_index = self.page_table.allocate_page(page_type)
        end = (page_index + 1) * PAGE_SIZE
        if len(self.buffer) < end:
            self.buffer.resize(end)
        return page_index

    def free_page(self, page_index: int) -> None:
        """Release a page; raises PageTableError if it cannot be freed."""
        self.page_table.free_page(page_index)

    def save(self, path: str | os.PathLike[str] | None = None) -> None:
        """Write the file, to ``path`` or to the file it was loaded from."""
        target = Path(path) if path is not None else self.path
        if target is None:
            raise DataFileError("No file to save to")
        self._write_header()
        self._write_page_table()
        in_place = (
            self.path is not None
            and target.exists()
            and self.path.exists()
            and os.path.samefile(target, self.path)
        )
        try:
            if in_place:
                with open(target, "r+b") as stream:
                    for page_index in self.buffer.dirty_pages:
                        stream.seek(page_index * PAGE_SIZE)
                        stream.write(self.buffer.read_bytes(page_index * PAGE_SIZE, PAGE_SIZE))
                    stream.truncate(len(self.buffer))
            else:
                target.write_bytes(bytes(self.buffer))
        except OSError as exc:
            raise DataFileError(f"Error occurs when writing file {target}") from exc
        for page_index in range(self.buffer.page_count):
            self.buffer.set_dirty(page_index, False)
        self.path = target