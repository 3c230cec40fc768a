import struct

import pytest

from rmstore.page import INVALID_PAGE_ID, PAGE_SIZE, Page, PageId


def test_page_id_defaults_to_invalid_page():
    assert PageId(3).page_no == INVALID_PAGE_ID


def test_page_id_str():
    assert str(PageId(3, 7)) == "{fd: 3 page_no: 7}"


def test_page_id_key_combines_fields():
    pid = PageId(3, 7)
    assert pid.key() >> 16 == 3
    assert pid.key() & 0xFFFF == 7


def test_page_id_equality_and_hash():
    assert PageId(1, 2) == PageId(1, 2)
    table = {PageId(1, 2): "a"}
    assert table[PageId(1, 2)] == "a"


def test_page_id_ordering():
    assert PageId(1, 9) < PageId(2, 0)
    assert PageId(2, 1) < PageId(2, 5)
    assert not PageId(2, 5) < PageId(2, 1)


def test_new_page_is_zeroed_and_clean():
    page = Page()
    assert len(page.data) == PAGE_SIZE
    assert page.data == bytes(PAGE_SIZE)
    assert page.is_dirty is False
    assert page.pin_count == 0


def test_page_lsn_roundtrip():
    page = Page()
    page.page_lsn = 12345
    assert page.page_lsn == 12345
    page.page_lsn = -1
    assert page.page_lsn == -1


def test_page_lsn_lives_at_page_start():
    page = Page()
    page.page_lsn = 1
    assert page.data[Page.OFFSET_LSN : Page.OFFSET_PAGE_HDR] == (1).to_bytes(4, "little")


def test_reset_memory():
    page = Page()
    page.data[:5] = b"Hello"
    page.reset_memory()
    assert page.data == bytes(PAGE_SIZE)
    assert len(page.data) == PAGE_SIZE