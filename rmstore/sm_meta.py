"""Catalog metadata: columns, indexes, tables and databases.

The catalog is stored as whitespace-separated text. Columns are written as
``tab_name name type len offset index``, with the type as its integer value
and the index flag as 0 or 1.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from rmstore.defs import ColType
from rmstore.errors import ColumnNotFoundError, IndexNotFoundError, TableNotFoundError


def _next_token(tokens: Iterator[str]) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise ValueError("catalog text ends unexpectedly") from None


def _next_int(tokens: Iterator[str]) -> int:
    return int(_next_token(tokens))


@dataclass
class ColMeta:
    """A column of a table."""

    tab_name: str
    name: str
    type: ColType
    len: int
    offset: int
    alias: str = ""
    index: bool = False

    def _dump(self) -> str:
        return f"{self.tab_name} {self.name} {int(self.type)} {self.len} {self.offset} {int(self.index)}"

    @classmethod
    def _read(cls, tokens: Iterator[str]) -> "ColMeta":
        tab_name = _next_token(tokens)
        name = _next_token(tokens)
        col_type = ColType(_next_int(tokens))
        length = _next_int(tokens)
        offset = _next_int(tokens)
        index = bool(_next_int(tokens))
        return cls(tab_name=tab_name, name=name, type=col_type, len=length, offset=offset, index=index)


@dataclass
class IndexMeta:
    """An index over one or more columns of a table."""

    tab_name: str
    col_tot_len: int
    cols: list[ColMeta] = field(default_factory=list)

    @property
    def col_num(self) -> int:
        return len(self.cols)

    def has_col(self, col_name: str) -> bool:
        """Whether the index covers a column of this name."""
        return any(col.name == col_name for col in self.cols)

    def _matches(self, col_names: list[str]) -> bool:
        return [col.name for col in self.cols] == col_names

    def _dump(self) -> str:
        head = f"{self.tab_name} {self.col_tot_len} {self.col_num}"
        return head + "".join("\n" + col._dump() for col in self.cols)

    @classmethod
    def _read(cls, tokens: Iterator[str]) -> "IndexMeta":
        tab_name = _next_token(tokens)
        col_tot_len = _next_int(tokens)
        col_num = _next_int(tokens)
        cols = [ColMeta._read(tokens) for _ in range(col_num)]
        return cls(tab_name=tab_name, col_tot_len=col_tot_len, cols=cols)


@dataclass
class TabMeta:
    """A table: its columns and the indexes built on it."""

    name: str = ""
    cols: list[ColMeta] = field(default_factory=list)
    indexes: list[IndexMeta] = field(default_factory=list)

    def is_col(self, col_name: str) -> bool:
        """Whether the table has a column of this name."""
        return any(col.name == col_name for col in self.cols)

    def is_index(self, col_names: Iterable[str]) -> bool:
        """Whether an index exists on exactly these columns, in this order."""
        names = list(col_names)
        return any(index._matches(names) for index in self.indexes)

    def get_index_meta(self, col_names: Iterable[str]) -> IndexMeta:
        """The index on exactly these columns, in this order."""
        names = list(col_names)
        for index in self.indexes:
            if index._matches(names):
                return index
        raise IndexNotFoundError(self.name, names)

    def get_col(self, col_name: str) -> ColMeta:
        """The column of this name."""
        for col in self.cols:
            if col.name == col_name:
                return col
        raise ColumnNotFoundError(col_name)

    def _dump(self) -> str:
        parts = [f"{self.name}\n{len(self.cols)}\n"]
        parts.extend(col._dump() + "\n" for col in self.cols)
        parts.append(f"{len(self.indexes)}\n")
        parts.extend(index._dump() + "\n" for index in self.indexes)
        return "".join(parts)

    @classmethod
    def _read(cls, tokens: Iterator[str]) -> "TabMeta":
        name = _next_token(tokens)
        cols = [ColMeta._read(tokens) for _ in range(_next_int(tokens))]
        indexes = [IndexMeta._read(tokens) for _ in range(_next_int(tokens))]
        return cls(name=name, cols=cols, indexes=indexes)


@dataclass
class DbMeta:
    """A database: its name and tables, kept in name order when written."""

    name: str = ""
    tabs: dict[str, TabMeta] = field(default_factory=dict)

    def is_table(self, tab_name: str) -> bool:
        return tab_name in self.tabs

    def set_table(self, tab_name: str, meta: TabMeta) -> None:
        self.tabs[tab_name] = meta

    def get_table(self, tab_name: str) -> TabMeta:
        try:
            return self.tabs[tab_name]
        except KeyError:
            raise TableNotFoundError(tab_name) from None

    def to_text(self) -> str:
        """Serialise the catalog to its text form."""
        parts = [f"{self.name}\n{len(self.tabs)}\n"]
        parts.extend(self.tabs[tab_name]._dump() + "\n" for tab_name in sorted(self.tabs))
        return "".join(parts)

    @classmethod
    def from_text(cls, text: str) -> "DbMeta":
        """Parse a catalog written by :meth:`to_text`.

        Raises ValueError when the text is truncated or malformed.
        """
        tokens = iter(text.split())
        name = _next_token(tokens)
        db = cls(name=name)
        for _ in range(_next_int(tokens)):
            tab = TabMeta._read(tokens)
            db.tabs[tab.name] = tab
        return db