"""The lock table for table- and record-level locks.

Every request is granted immediately; the manager keeps the lock table and
each transaction's lock set up to date so that locks can be released on
commit or abort.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from functools import reduce

from rmstore.defs import Rid
from rmstore.transaction import Transaction
from rmstore.txn_defs import LockDataId


class LockMode(Enum):
    SHARED = 0
    EXCLUSIVE = 1
    INTENTION_SHARED = 2
    INTENTION_EXCLUSIVE = 3
    S_IX = 4


class GroupLockMode(Enum):
    """The most exclusive mode among the requests queued on one object."""

    NON_LOCK = 0
    IS = 1
    IX = 2
    S = 3
    X = 4
    SIX = 5


_GROUP_OF = {
    LockMode.SHARED: GroupLockMode.S,
    LockMode.EXCLUSIVE: GroupLockMode.X,
    LockMode.INTENTION_SHARED: GroupLockMode.IS,
    LockMode.INTENTION_EXCLUSIVE: GroupLockMode.IX,
    LockMode.S_IX: GroupLockMode.SIX,
}
_MODE_OF = {group: mode for mode, group in _GROUP_OF.items()}


def _combine(a: GroupLockMode, b: GroupLockMode) -> GroupLockMode:
    if a is b:
        return a
    if GroupLockMode.NON_LOCK in (a, b) or GroupLockMode.IS in (a, b):
        return b if a in (GroupLockMode.NON_LOCK, GroupLockMode.IS) else a
    if GroupLockMode.X in (a, b):
        return GroupLockMode.X
    return GroupLockMode.SIX


@dataclass
class LockRequest:
    """One transaction's request for a lock."""

    txn_id: int
    lock_mode: LockMode
    granted: bool = False


@dataclass
class LockRequestQueue:
    """The requests on one lockable object."""

    request_queue: list[LockRequest] = field(default_factory=list)
    cv: threading.Condition = field(default_factory=threading.Condition)
    group_lock_mode: GroupLockMode = GroupLockMode.NON_LOCK

    def _refresh_group_mode(self) -> None:
        self.group_lock_mode = reduce(
            _combine,
            (_GROUP_OF[req.lock_mode] for req in self.request_queue if req.granted),
            GroupLockMode.NON_LOCK,
        )


class LockManager:
    """Grants locks and records them in the lock table."""

    def __init__(self) -> None:
        self._latch = threading.Lock()
        self.lock_table: dict[LockDataId, LockRequestQueue] = {}

    def _lock(self, txn: Transaction, lock_data_id: LockDataId, mode: LockMode) -> bool:
        with self._latch:
            queue = self.lock_table.setdefault(lock_data_id, LockRequestQueue())
            for request in queue.request_queue:
                if request.txn_id == txn.txn_id:
                    merged = _combine(_GROUP_OF[request.lock_mode], _GROUP_OF[mode])
                    request.lock_mode = _MODE_OF[merged]
                    request.granted = True
                    break
            else:
                queue.request_queue.append(LockRequest(txn.txn_id, mode, granted=True))
            queue._refresh_group_mode()
            txn.lock_set.add(lock_data_id)
            return True

    def lock_shared_on_record(self, txn: Transaction, rid: Rid, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId.record(tab_fd, rid), LockMode.SHARED)

    def lock_exclusive_on_record(self, txn: Transaction, rid: Rid, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId.record(tab_fd, rid), LockMode.EXCLUSIVE)

    def lock_shared_on_table(self, txn: Transaction, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId.table(tab_fd), LockMode.SHARED)

    def lock_exclusive_on_table(self, txn: Transaction, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId.table(tab_fd), LockMode.EXCLUSIVE)

    def lock_is_on_table(self, txn: Transaction, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId.table(tab_fd), LockMode.INTENTION_SHARED)

    def lock_ix_on_table(self, txn: Transaction, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId.table(tab_fd), LockMode.INTENTION_EXCLUSIVE)

    def unlock(self, txn: Transaction, lock_data_id: LockDataId) -> bool:
        """Release the transaction's lock on an object.

        The transaction's own lock set is left for the caller to clear once
        all its locks are released.
        """
        with self._latch:
            queue = self.lock_table.get(lock_data_id)
            if queue is None:
                return True
            queue.request_queue = [r for r in queue.request_queue if r.txn_id != txn.txn_id]
            if queue.request_queue:
                queue._refresh_group_mode()
            else:
                del self.lock_table[lock_data_id]
            with queue.cv:
                queue.cv.notify_all()
            return True