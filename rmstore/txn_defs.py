"""Transaction states, write records, lock identifiers and abort errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from rmstore.defs import Rid

_MASK64 = (1 << 64) - 1
_SIGN64 = 1 << 63


class TransactionState(Enum):
    DEFAULT = 0
    GROWING = 1
    SHRINKING = 2
    COMMITTED = 3
    ABORTED = 4


class IsolationLevel(Enum):
    READ_UNCOMMITTED = 0
    REPEATABLE_READ = 1
    READ_COMMITTED = 2
    SERIALIZABLE = 3


class WType(IntEnum):
    """Kind of write a transaction performed."""

    INSERT_TUPLE = 0
    DELETE_TUPLE = 1
    UPDATE_TUPLE = 2


@dataclass
class WriteRecord:
    """A write made by a transaction, kept so that it can be rolled back.

    ``record`` holds the tuple for deletes and updates; ``old_record`` holds
    the previous image of an updated tuple.
    """

    wtype: WType
    tab_name: str
    rid: Rid
    record: bytes = b""
    old_record: bytes = b""


class LockDataType(IntEnum):
    """Granularity of a lock: a whole table or one record."""

    TABLE = 0
    RECORD = 1


@dataclass(frozen=True)
class LockDataId:
    """Identifies the object a lock is held on."""

    fd: int
    rid: Rid = field(default_factory=lambda: Rid(-1, -1))
    type: LockDataType = LockDataType.TABLE

    @classmethod
    def table(cls, fd: int) -> "LockDataId":
        """A table-level lock target."""
        return cls(fd, Rid(-1, -1), LockDataType.TABLE)

    @classmethod
    def record(cls, fd: int, rid: Rid) -> "LockDataId":
        """A record-level lock target."""
        return cls(fd, rid, LockDataType.RECORD)

    def key(self) -> int:
        """A signed 64-bit integer identifying the target."""
        if self.type is LockDataType.TABLE:
            return self.fd
        raw = (
            (int(self.type) << 63)
            | ((self.fd << 31) & _MASK64)
            | ((self.rid.page_no << 16) & _MASK64)
            | (self.rid.slot_no & _MASK64)
        ) & _MASK64
        return raw - (1 << 64) if raw & _SIGN64 else raw

    def __hash__(self) -> int:
        return hash(self.key())


class AbortReason(IntEnum):
    LOCK_ON_SHIRINKING = 0
    UPGRADE_CONFLICT = 1
    DEADLOCK_PREVENTION = 2


class TransactionAbortException(Exception):
    """Raised when a transaction must be rolled back."""

    def __init__(self, txn_id: int, abort_reason: AbortReason) -> None:
        self.txn_id = txn_id
        self.abort_reason = abort_reason
        super().__init__(self.info())

    def info(self) -> str:
        """A description of why the transaction was aborted."""
        if self.abort_reason is AbortReason.LOCK_ON_SHIRINKING:
            return (
                f"Transaction {self.txn_id} aborted because it cannot request locks on SHRINKING phase\n"
            )
        if self.abort_reason is AbortReason.UPGRADE_CONFLICT:
            return (
                f"Transaction {self.txn_id} aborted because another transaction is waiting for upgrading\n"
            )
        if self.abort_reason is AbortReason.DEADLOCK_PREVENTION:
            return f"Transaction {self.txn_id} aborted for deadlock prevention\n"
        return "Transaction aborted\n"

    def __str__(self) -> str:
        return self.info()