"""Byte buffer divided into fixed-size pages, each with a dirty flag."""

from __future__ import annotations

import struct

from labsuite.page_table import PAGE_SIZE

_U64 = struct.Struct("<Q")
_U64_MAX = 2**64 - 1


def _pages_for(size: int) -> int:
    return (size + PAGE_SIZE - 1) // PAGE_SIZE


class Buffer:
    """A resizable byte buffer that tracks which pages have been changed."""

    def __init__(self, size: int = 0) -> None:
        if size < 0:
            raise ValueError("buffer size must not be negative")
        self._data = bytearray(size)
        self._dirty = [False] * _pages_for(size)

    @classmethod
    def from_bytes(cls, data: bytes) -> Buffer:
        """Create a buffer holding a copy of ``data``, with no page dirty."""
        buffer = cls()
        buffer._data = bytearray(data)
        buffer._dirty = [False] * _pages_for(len(data))
        return buffer

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    @property
    def page_count(self) -> int:
        """Number of pages that carry a dirty flag."""
        return len(self._dirty)

    @property
    def dirty_pages(self) -> tuple[int, ...]:
        return tuple(index for index, flag in enumerate(self._dirty) if flag)

    def resize(self, size: int) -> None:
        """Grow with zero bytes or shrink to ``size``; keep existing dirty flags."""
        if size < 0:
            raise ValueError("buffer size must not be negative")
        if size > len(self._data):
            self._data.extend(bytes(size - len(self._data)))
        else:
            del self._data[size:]
        pages = _pages_for(size)
        self._dirty = self._dirty[:pages] + [False] * (pages - len(self._dirty))

    def set_dirty(self, page_index: int, flag: bool = True) -> None:
        """Set a page's dirty flag; pages outside the buffer are ignored."""
        if 0 <= page_index < len(self._dirty):
            self._dirty[page_index] = bool(flag)

    def is_dirty(self, page_index: int) -> bool:
        """The page's dirty flag; False for pages outside the buffer."""
        if 0 <= page_index < len(self._dirty):
            return self._dirty[page_index]
        return False

    def _check_range(self, pos: int, size: int, action: str) -> None:
        if pos < 0 or size < 0 or pos + size > len(self._data):
            raise IndexError(f"Out of range when {action} buffer")

    def read_bytes(self, pos: int, size: int) -> bytes:
        """Return ``size`` bytes starting at ``pos``."""
        self._check_range(pos, size, "extracting data from")
        return bytes(self._data[pos : pos + size])

    def write_bytes(self, pos: int, data: bytes) -> None:
        """Overwrite bytes starting at ``pos`` with ``data``."""
        data = bytes(data)
        self._check_range(pos, len(data), "updating data in")
        self._data[pos : pos + len(data)] = data

    def read_u64(self, pos: int) -> int:
        """Read an unsigned 64-bit little-endian integer at ``pos``."""
        self._check_range(pos, _U64.size, "extracting data from")
        return _U64.unpack_from(self._data, pos)[0]

    def write_u64(self, pos: int, value: int) -> None:
        """Write ``value`` as an unsigned 64-bit little-endian integer at ``pos``."""
        if not 0 <= value <= _U64_MAX:
            raise ValueError(f"value does not fit in 64 bits: {value}")
        self._check_range(pos, _U64.size, "updating data in")
        _U64.pack_into(self._data, pos, value)