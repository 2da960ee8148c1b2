import pytest

from labsuite.buffer import Buffer
from labsuite.page_table import PAGE_SIZE


def test_new_buffer_is_zeroed_and_clean():
    buffer = Buffer(PAGE_SIZE * 2)
    assert len(buffer) == PAGE_SIZE * 2
    assert bytes(buffer) == bytes(PAGE_SIZE * 2)
    assert buffer.page_count == 2
    assert buffer.dirty_pages == ()


def test_partial_page_counts_as_a_page():
    buffer = Buffer(PAGE_SIZE + 1)
    assert buffer.page_count == 2


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Buffer(-1)


def test_u64_round_trip():
    buffer = Buffer(PAGE_SIZE)
    buffer.write_u64(16, 0xFFFFFFFFFFFFFFFF)
    buffer.write_u64(24, 123456789)
    assert buffer.read_u64(16) == 0xFFFFFFFFFFFFFFFF
    assert buffer.read_u64(24) == 123456789


def test_u64_is_little_endian():
    buffer = Buffer(8)
    buffer.write_u64(0, 1)
    assert buffer.read_bytes(0, 8) == b"\x01\x00\x00\x00\x00\x00\x00\x00"


def test_u64_out_of_range_value():
    buffer = Buffer(8)
    with pytest.raises(ValueError):
        buffer.write_u64(0, 2**64)
    with pytest.raises(ValueError):
        buffer.write_u64(0, -1)


def test_read_past_end_raises():
    buffer = Buffer(8)
    with pytest.raises(IndexError):
        buffer.read_u64(1)
    with pytest.raises(IndexError):
        buffer.read_bytes(4, 5)
    with pytest.raises(IndexError):
        buffer.read_bytes(-1, 1)


def test_write_past_end_raises_and_leaves_data():
    buffer = Buffer(8)
    with pytest.raises(IndexError):
        buffer.write_u64(4, 7)
    with pytest.raises(IndexError):
        buffer.write_bytes(6, b"abc")
    assert bytes(buffer) == bytes(8)


def test_bytes_round_trip():
    buffer = Buffer(PAGE_SIZE)
    buffer.write_bytes(100, b"PDIARY")
    assert buffer.read_bytes(100, 6) == b"PDIARY"


def test_from_bytes_copies_and_is_clean():
    data = bytearray(b"x" * (PAGE_SIZE + 10))
    buffer = Buffer.from_bytes(data)
    data[0] = 0
    assert buffer.read_bytes(0, 1) == b"x"
    assert buffer.page_count == 2
    assert buffer.dirty_pages == ()


def test_dirty_flags():
    buffer = Buffer(PAGE_SIZE * 3)
    buffer.set_dirty(1, True)
    assert buffer.is_dirty(1)
    assert not buffer.is_dirty(0)
    assert buffer.dirty_pages == (1,)
    buffer.set_dirty(1, False)
    assert buffer.dirty_pages == ()


def test_dirty_flags_outside_buffer_are_ignored():
    buffer = Buffer(PAGE_SIZE)
    buffer.set_dirty(5, True)
    assert not buffer.is_dirty(5)
    assert not buffer.is_dirty(-1)
    assert buffer.dirty_pages == ()


def test_resize_grow_keeps_data_and_flags():
    buffer = Buffer(PAGE_SIZE)
    buffer.write_bytes(0, b"abc")
    buffer.set_dirty(0, True)
    buffer.resize(PAGE_SIZE * 3)
    assert len(buffer) == PAGE_SIZE * 3
    assert buffer.read_bytes(0, 3) == b"abc"
    assert buffer.read_bytes(PAGE_SIZE, PAGE_SIZE) == bytes(PAGE_SIZE)
    assert buffer.page_count == 3
    assert buffer.dirty_pages == (0,)


def test_resize_shrink_drops_flags():
    buffer = Buffer(PAGE_SIZE * 3)
    buffer.set_dirty(2, True)
    buffer.resize(PAGE_SIZE)
    assert len(buffer) == PAGE_SIZE
    assert buffer.page_count == 1
    assert buffer.dirty_pages == ()