"""Basic shared definitions: record ids, column types and record scans."""

from __future__ import annotations

import abc
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True)
class Rid:
    """Location of a record: page number and slot number."""

    page_no: int
    slot_no: int


class ColType(IntEnum):
    INT = 0
    FLOAT = 1
    STRING = 2
    NULL = 3
    DATE = 4


def col_type_can_hold(rhs: ColType, lhs: ColType) -> bool:
    """Whether values of the two types are compatible; INT and FLOAT mix."""
    return lhs == rhs or {lhs, rhs} == {ColType.INT, ColType.FLOAT}


_COL_TYPE_NAMES = {
    ColType.INT: "INT",
    ColType.FLOAT: "FLOAT",
    ColType.STRING: "STRING",
    ColType.NULL: "NULL",
    ColType.DATE: "DATE",
}


def coltype_to_str(col_type: ColType) -> str:
    """Return the display name of a column type."""
    return _COL_TYPE_NAMES[ColType(col_type)]


class RecScan(abc.ABC):
    """A cursor over record ids."""

    @abc.abstractmethod
    def next(self) -> None:
        """Advance to the next record."""

    @abc.abstractmethod
    def is_end(self) -> bool:
        """Whether the scan is exhausted."""

    @abc.abstractmethod
    def rid(self) -> Rid:
        """The record id at the current position."""

    def __iter__(self) -> Iterator[Rid]:
        while not self.is_end():
            yield self.rid()
            self.next()