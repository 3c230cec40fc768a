"""Write-ahead log records, their binary layout and the log buffer."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntEnum

from rmstore.defs import Rid
from rmstore.page import PAGE_SIZE

INVALID_LSN = -1
INVALID_TXN_ID = -1
LOG_BUFFER_SIZE = 1024 * PAGE_SIZE
FLUSH_TIMEOUT = timedelta(seconds=3)

# Header: log type, lsn, total length, transaction id, previous lsn.
_HEADER = struct.Struct("<iiIii")
_INT = struct.Struct("<i")
_RID = struct.Struct("<ii")
_SIZE = struct.Struct("<Q")

OFFSET_LOG_TYPE = 0
OFFSET_LSN = 4
OFFSET_LOG_TOT_LEN = 8
OFFSET_LOG_TID = 12
OFFSET_PREV_LSN = 16
OFFSET_LOG_DATA = _HEADER.size
LOG_HEADER_SIZE = OFFSET_LOG_DATA


class LogType(IntEnum):
    UPDATE = 0
    INSERT = 1
    DELETE = 2
    BEGIN = 3
    COMMIT = 4
    ABORT = 5


def _unpack(layout: struct.Struct, data: bytes, offset: int) -> tuple:
    try:
        return layout.unpack_from(data, offset)
    except struct.error as exc:
        raise ValueError(f"log record truncated at offset {offset}") from exc


@dataclass
class LogRecord:
    """The header shared by every log record."""

    log_type: LogType
    lsn: int = INVALID_LSN
    log_tot_len: int = LOG_HEADER_SIZE
    log_tid: int = INVALID_TXN_ID
    prev_lsn: int = INVALID_LSN

    def serialize(self) -> bytes:
        """The record's bytes; the base class writes the header only."""
        return _HEADER.pack(int(self.log_type), self.lsn, self.log_tot_len, self.log_tid, self.prev_lsn)

    @classmethod
    def deserialize(cls, data: bytes) -> "LogRecord":
        """Read a record of this class from the start of ``data``."""
        log_type, lsn, tot_len, tid, prev_lsn = _unpack(_HEADER, data, 0)
        record = object.__new__(cls)
        LogRecord.__init__(record, LogType(log_type), lsn, tot_len, tid, prev_lsn)
        return record

    def format(self) -> str:
        """A readable, multi-line description for debugging."""
        return (
            "Print Log Record:\n"
            f"log_type_: {self.log_type.name}\n"
            f"lsn: {self.lsn}\n"
            f"log_tot_len: {self.log_tot_len}\n"
            f"log_tid: {self.log_tid}\n"
            f"prev_lsn: {self.prev_lsn}\n"
        )


class BeginLogRecord(LogRecord):
    """Marks the start of a transaction."""

    def __init__(self, txn_id: int = INVALID_TXN_ID) -> None:
        super().__init__(LogType.BEGIN, log_tid=txn_id)


@dataclass(init=False)
class InsertLogRecord(LogRecord):
    """Records a tuple inserted into a table at a given rid."""

    insert_value: bytes = b""
    rid: Rid = field(default_factory=lambda: Rid(-1, -1))
    table_name: str = ""

    def __init__(self, txn_id: int, insert_value: bytes, rid: Rid, table_name: str) -> None:
        self.insert_value = bytes(insert_value)
        self.rid = rid
        self.table_name = table_name
        name_len = len(table_name.encode("utf-8"))
        tot_len = (
            LOG_HEADER_SIZE + _INT.size + len(self.insert_value) + _RID.size + _SIZE.size + name_len
        )
        super().__init__(LogType.INSERT, log_tot_len=tot_len, log_tid=txn_id)

    def serialize(self) -> bytes:
        name = self.table_name.encode("utf-8")
        return b"".join(
            (
                super().serialize(),
                _INT.pack(len(self.insert_value)),
                self.insert_value,
                _RID.pack(self.rid.page_no, self.rid.slot_no),
                _SIZE.pack(len(name)),
                name,
            )
        )

    @classmethod
    def deserialize(cls, data: bytes) -> "InsertLogRecord":
        record = super().deserialize(data)
        offset = OFFSET_LOG_DATA
        (size,) = _unpack(_INT, data, offset)
        offset += _INT.size
        if size < 0 or offset + size > len(data):
            raise ValueError("log record truncated in insert value")
        record.insert_value = bytes(data[offset : offset + size])
        offset += size
        page_no, slot_no = _unpack(_RID, data, offset)
        record.rid = Rid(page_no, slot_no)
        offset += _RID.size
        (name_len,) = _unpack(_SIZE, data, offset)
        offset += _SIZE.size
        if offset + name_len > len(data):
            raise ValueError("log record truncated in table name")
        record.table_name = bytes(data[offset : offset + name_len]).decode("utf-8")
        return record

    def format(self) -> str:
        value = self.insert_value.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return (
            "insert record\n"
            + super().format()
            + f"insert_value: {value}\n"
            + f"insert rid: {self.rid.page_no}, {self.rid.slot_no}\n"
            + f"table name: {self.table_name}\n"
        )


@dataclass
class LogBuffer:
    """The single in-memory buffer log records are appended to."""

    buffer: bytearray = field(default_factory=lambda: bytearray(LOG_BUFFER_SIZE + 1))
    offset: int = 0

    def is_full(self, append_size: int) -> bool:
        """Whether appending ``append_size`` bytes would overflow the buffer."""
        return self.offset + append_size > LOG_BUFFER_SIZE