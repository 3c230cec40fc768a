import threading

from rmstore.defs import Rid
from rmstore.log_records import INVALID_LSN
from rmstore.page import Page, PageId
from rmstore.transaction import Transaction
from rmstore.txn_defs import IsolationLevel, TransactionState, WriteRecord, WType


def test_defaults():
    txn = Transaction(3)
    assert txn.txn_id == 3
    assert txn.isolation_level is IsolationLevel.SERIALIZABLE
    assert txn.state is TransactionState.DEFAULT
    assert txn.prev_lsn == INVALID_LSN
    assert txn.thread_id == threading.get_ident()
    assert len(txn.write_set) == 0
    assert txn.lock_set == set()


def test_append_write_record_keeps_order():
    txn = Transaction(1)
    first = WriteRecord(WType.INSERT_TUPLE, "a", Rid(1, 0))
    second = WriteRecord(WType.DELETE_TUPLE, "a", Rid(1, 1), b"x")
    txn.append_write_record(first)
    txn.append_write_record(second)
    assert list(txn.write_set) == [first, second]
    assert list(reversed(txn.write_set)) == [second, first]


def test_append_index_pages():
    txn = Transaction(1)
    latched = Page(page_id=PageId(2, 0))
    deleted = Page(page_id=PageId(2, 1))
    txn.append_index_latch_page(latched)
    txn.append_index_deleted_page(deleted)
    assert list(txn.index_latch_page_set) == [latched]
    assert list(txn.index_deleted_page_set) == [deleted]


def test_sets_not_shared_between_transactions():
    a = Transaction(1)
    b = Transaction(2)
    a.append_write_record(WriteRecord(WType.INSERT_TUPLE, "t", Rid(0, 0)))
    assert len(b.write_set) == 0


def test_state_and_mode_assignable():
    txn = Transaction(4, IsolationLevel.READ_COMMITTED)
    txn.state = TransactionState.COMMITTED
    txn.txn_mode = True
    assert txn.state is TransactionState.COMMITTED
    assert txn.txn_mode is True
    assert txn.isolation_level is IsolationLevel.READ_COMMITTED