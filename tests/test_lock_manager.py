from rmstore.defs import Rid
from rmstore.lock_manager import GroupLockMode, LockManager, LockMode
from rmstore.transaction import Transaction
from rmstore.txn_defs import LockDataId


def test_shared_record_lock_recorded():
    lm = LockManager()
    txn = Transaction(1)
    assert lm.lock_shared_on_record(txn, Rid(1, 2), 5) is True
    lock_id = LockDataId.record(5, Rid(1, 2))
    assert lock_id in txn.lock_set
    assert lm.lock_table[lock_id].group_lock_mode is GroupLockMode.S


def test_exclusive_table_lock():
    lm = LockManager()
    txn = Transaction(1)
    assert lm.lock_exclusive_on_table(txn, 3) is True
    assert lm.lock_table[LockDataId.table(3)].group_lock_mode is GroupLockMode.X


def test_intention_locks_combine():
    lm = LockManager()
    a = Transaction(1)
    b = Transaction(2)
    lm.lock_is_on_table(a, 3)
    assert lm.lock_table[LockDataId.table(3)].group_lock_mode is GroupLockMode.IS
    lm.lock_ix_on_table(b, 3)
    assert lm.lock_table[LockDataId.table(3)].group_lock_mode is GroupLockMode.IX


def test_shared_and_intention_exclusive_make_six():
    lm = LockManager()
    txn = Transaction(1)
    lm.lock_shared_on_table(txn, 3)
    lm.lock_ix_on_table(txn, 3)
    queue = lm.lock_table[LockDataId.table(3)]
    assert len(queue.request_queue) == 1
    assert queue.request_queue[0].lock_mode is LockMode.S_IX
    assert queue.group_lock_mode is GroupLockMode.SIX


def test_unlock_removes_request():
    lm = LockManager()
    txn = Transaction(1)
    lm.lock_exclusive_on_record(txn, Rid(0, 0), 2)
    lock_id = LockDataId.record(2, Rid(0, 0))
    assert lm.unlock(txn, lock_id) is True
    assert lock_id not in lm.lock_table


def test_unlock_recomputes_group_mode():
    lm = LockManager()
    a = Transaction(1)
    b = Transaction(2)
    lm.lock_exclusive_on_table(a, 4)
    lm.lock_is_on_table(b, 4)
    lm.unlock(a, LockDataId.table(4))
    assert lm.lock_table[LockDataId.table(4)].group_lock_mode is GroupLockMode.IS


def test_release_all_from_lock_set():
    lm = LockManager()
    txn = Transaction(1)
    lm.lock_ix_on_table(txn, 1)
    lm.lock_exclusive_on_record(txn, Rid(1, 1), 1)
    for lock_id in list(txn.lock_set):
        lm.unlock(txn, lock_id)
    txn.lock_set.clear()
    assert lm.lock_table == {}
    assert txn.lock_set == set()


def test_unlock_unknown_is_true():
    lm = LockManager()
    assert lm.unlock(Transaction(1), LockDataId.table(9)) is True
    assert lm.lock_table == {}