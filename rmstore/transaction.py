"""A single transaction and the resources it has acquired."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field

from rmstore.log_records import INVALID_LSN
from rmstore.page import Page
from rmstore.txn_defs import IsolationLevel, LockDataId, TransactionState, WriteRecord


@dataclass
class Transaction:
    """State of one transaction.

    ``txn_mode`` is True for an explicit transaction and False for the
    implicit transaction around a single statement.
    """

    txn_id: int
    isolation_level: IsolationLevel = IsolationLevel.SERIALIZABLE
    state: TransactionState = TransactionState.DEFAULT
    txn_mode: bool = False
    start_ts: int = 0
    prev_lsn: int = INVALID_LSN
    thread_id: int = field(default_factory=threading.get_ident)
    write_set: deque[WriteRecord] = field(default_factory=deque)
    lock_set: set[LockDataId] = field(default_factory=set)
    index_latch_page_set: deque[Page] = field(default_factory=deque)
    index_deleted_page_set: deque[Page] = field(default_factory=deque)

    def append_write_record(self, write_record: WriteRecord) -> None:
        """Remember a write so it can be undone."""
        self.write_set.append(write_record)

    def append_index_deleted_page(self, page: Page) -> None:
        """Remember an index page deleted by this transaction."""
        self.index_deleted_page_set.append(page)

    def append_index_latch_page(self, page: Page) -> None:
        """Remember an index page latched by this transaction."""
        self.index_latch_page_set.append(page)