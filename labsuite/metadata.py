"""Diary metadata records and the diary entry that carries them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator

from labsuite.page_table import INVALID_PAGE


@dataclass
class MetadataBasis:
    """Identity, date and title of a diary entry."""

    diary_id: int = 0
    date: int = 0
    title: str = ""


@dataclass
class Metadata(MetadataBasis):
    """Metadata with the pages holding the entry and a link to the next record."""

    next_metadata_page: int = INVALID_PAGE
    page_index_list: list[int] = field(default_factory=list)

    @property
    def title_size(self) -> int:
        return len(self.title)

    @property
    def page_index_list_size(self) -> int:
        return len(self.page_index_list)


class MetadataList:
    """An ordered collection of metadata records."""

    def __init__(self) -> None:
        self._items: list[Metadata] = []

    def add(self, metadata: Metadata) -> None:
        """Append a copy of ``metadata``."""
        self._items.append(replace(metadata, page_index_list=list(metadata.page_index_list)))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Metadata]:
        return iter(self._items)


@dataclass
class Diary:
    """A diary entry: its metadata and its text."""

    metadata: MetadataBasis = field(default_factory=MetadataBasis)
    content: str = ""