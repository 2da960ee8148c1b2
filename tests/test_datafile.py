import pytest

from labsuite.datafile import (
    FILE_TYPE,
    DataFileError,
    DataFileManager,
    Header,
)
from labsuite.page_table import PAGE_SIZE, PageTableError, PageType


def test_header_checks():
    header = Header(FILE_TYPE, 1, [1])
    assert header.check_file_identifier()
    assert header.check_valid_structure()
    assert not Header("OTHER", 1, [1]).check_file_identifier()
    assert not Header(FILE_TYPE, 0, [1]).check_valid_structure()
    assert not Header(FILE_TYPE, 1, []).check_valid_structure()


def test_header_file_type_truncated_to_field():
    header = Header("PDIARYXYZ", 1, [1])
    assert header.file_type == "PDIARYXY"
    assert not header.check_file_identifier()


def test_new_file_round_trip(tmp_path):
    path = tmp_path / "diary.dat"
    manager = DataFileManager()
    manager.save(path)
    assert path.stat().st_size == PAGE_SIZE * 2
    data = path.read_bytes()
    assert data[:8] == b"PDIARY\x00\x00"

    loaded = DataFileManager(path)
    assert loaded.header == Header(FILE_TYPE, 1, [1])
    assert loaded.page_table.entries[0].page_type == PageType.HEADER
    assert loaded.page_table.entries[1].page_type == PageType.PAGE_TABLE
    assert loaded.page_table.has_free_pages()


def test_allocate_write_save_load(tmp_path):
    path = tmp_path / "diary.dat"
    manager = DataFileManager()
    page = manager.allocate_page(PageType.DATA)
    assert page == 2
    manager.write_page(page, b"hello diary")
    manager.save(path)

    loaded = DataFileManager(path)
    assert loaded.read_page(page)[:11] == b"hello diary"
    assert loaded.page_table.entries[page].page_type == PageType.DATA
    assert loaded.allocate_page(PageType.DATA) != page


def test_in_place_save_keeps_other_pages(tmp_path):
    path = tmp_path / "diary.dat"
    manager = DataFileManager()
    first = manager.allocate_page(PageType.DATA)
    manager.write_page(first, b"first")
    manager.save(path)

    loaded = DataFileManager(path)
    second = loaded.allocate_page(PageType.DATA)
    loaded.write_page(second, b"second")
    loaded.save()

    again = DataFileManager(path)
    assert again.read_page(first)[:5] == b"first"
    assert again.read_page(second)[:6] == b"second"


def test_read_page_returns_whole_page():
    manager = DataFileManager()
    page = manager.allocate_page(PageType.DATA)
    assert manager.read_page(page) == bytes(PAGE_SIZE)


def test_read_and_write_free_page_raise():
    manager = DataFileManager()
    page = manager.allocate_page(PageType.DATA)
    manager.free_page(page)
    with pytest.raises(DataFileError):
        manager.read_page(page)
    with pytest.raises(DataFileError):
        manager.write_page(page, b"x")


def test_write_page_too_long():
    manager = DataFileManager()
    page = manager.allocate_page(PageType.DATA)
    with pytest.raises(ValueError):
        manager.write_page(page, bytes(PAGE_SIZE + 1))


def test_freed_page_is_reused():
    manager = DataFileManager()
    first = manager.allocate_page(PageType.DATA)
    manager.allocate_page(PageType.DATA)
    manager.free_page(first)
    assert manager.allocate_page(PageType.DATA) == first


def test_free_page_twice_raises():
    manager = DataFileManager()
    page = manager.allocate_page(PageType.DATA)
    manager.free_page(page)
    with pytest.raises(PageTableError):
        manager.free_page(page)


def test_allocate_until_full():
    manager = DataFileManager()
    pages = set()
    while manager.page_table.has_free_pages():
        pages.add(manager.allocate_page(PageType.DATA))
    assert len(pages) == len(manager.page_table) - 2
    assert len(manager.buffer) == len(manager.page_table) * PAGE_SIZE
    with pytest.raises(PageTableError):
        manager.allocate_page(PageType.DATA)


def test_save_without_path_raises():
    with pytest.raises(DataFileError):
        DataFileManager().save()


def test_load_missing_file(tmp_path):
    with pytest.raises(DataFileError):
        DataFileManager(tmp_path / "missing.dat")


def test_load_wrong_identifier(tmp_path):
    path = tmp_path / "bad.dat"
    path.write_bytes(b"NOTADIAR" + bytes(PAGE_SIZE * 2 - 8))
    with pytest.raises(DataFileError, match="Invalid data file for Personal Diary"):
        DataFileManager(path)


def test_load_invalid_structure(tmp_path):
    path = tmp_path / "bad.dat"
    path.write_bytes(b"PDIARY\x00\x00" + bytes(PAGE_SIZE * 2 - 8))
    with pytest.raises(DataFileError, match="Invalid data file structure"):
        DataFileManager(path)


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.dat"
    path.write_bytes(b"")
    with pytest.raises(DataFileError):
        DataFileManager(path)


def test_load_page_table_outside_file(tmp_path):
    good = tmp_path / "good.dat"
    DataFileManager().save(good)
    data = good.read_bytes()[:PAGE_SIZE]
    bad = tmp_path / "short.dat"
    bad.write_bytes(data)
    with pytest.raises(DataFileError):
        DataFileManager(bad)