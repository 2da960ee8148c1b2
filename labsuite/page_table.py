"""Page table of a paged data file: page types and a free-page list."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass, replace

PAGE_SIZE = 1024
INVALID_PAGE = 0xFFFFFFFFFFFFFFFF


class PageTableError(Exception):
    """Raised when the page table cannot perform a request."""


class PageType(enum.IntEnum):
    FREE = 0
    HEADER = 1
    PAGE_TABLE = 2
    DATA = 3


@dataclass
class PageTableEntry:
    """What one page of the file is used for."""

    page_type: PageType = PageType.FREE


class PageTable:
    """Entries for every page plus the list of pages ready to allocate."""

    def __init__(self) -> None:
        self._entries: list[PageTableEntry] = []
        self._free_pages: deque[int] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[PageTableEntry, ...]:
        return tuple(self._entries)

    def create_initial(self) -> None:
        """Add the header page and the first page-table page."""
        self._entries.append(PageTableEntry(PageType.HEADER))
        self._entries.append(PageTableEntry(PageType.PAGE_TABLE))

    def load_entry(self, entry: PageTableEntry, page_index: int | None = None) -> None:
        """Append ``entry``, or replace the entry at ``page_index``."""
        if page_index is None:
            self._entries.append(replace(entry))
            return
        if not 0 <= page_index < len(self._entries):
            raise PageTableError(f"page index out of range: {page_index}")
        self._entries[page_index] = replace(entry)

    def initialize_free_pages(self) -> None:
        """Rebuild the free list from the entries marked free, in page order."""
        self._free_pages = deque(
            index
            for index, entry in enumerate(self._entries)
            if entry.page_type == PageType.FREE
        )

    def allocate_page(self, page_type: PageType) -> int:
        """Take a free page, mark it with ``page_type`` and return its index."""
        if not self._free_pages:
            raise PageTableError("No free pages available")
        if page_type == PageType.FREE:
            raise ValueError("cannot allocate a page as free")
        page_index = self._free_pages.popleft()
        self._entries[page_index].page_type = PageType(page_type)
        return page_index

    def free_page(self, page_index: int) -> None:
        """Mark a page free; it is the next one handed out."""
        if not 0 <= page_index < len(self._entries):
            raise PageTableError("Invalid page index")
        if self.is_free_page(page_index):
            raise PageTableError("This page is already free")
        self._entries[page_index].page_type = PageType.FREE
        self._free_pages.appendleft(page_index)

    def has_free_pages(self) -> bool:
        return bool(self._free_pages)

    def is_free_page(self, page_index: int) -> bool:
        """True if the page exists and is marked free."""
        if not 0 <= page_index < len(self._entries):
            return False
        return self._entries[page_index].page_type == PageType.FREE