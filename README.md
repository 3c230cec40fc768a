# rmstore

This package holds the in-memory building blocks of a small relational
database engine. It is a library only and has no command-line entry point.

## Modules

- `rmstore.page` provides `PageId`, which identifies a page by file descriptor
  and page number, and `Page`, a frame of `PAGE_SIZE` (4096) bytes. A `Page`
  carries a dirty flag, a pin count and a `page_lsn` property that is stored in
  the first four bytes of the page.
- `rmstore.lru_replacer` provides the abstract `Replacer` and `LRUReplacer`.
  `LRUReplacer` evicts the frame that was unpinned longest ago. Its methods are
  thread-safe.
- `rmstore.sm_meta` provides the catalog classes `ColMeta`, `IndexMeta`,
  `TabMeta` and `DbMeta`. `DbMeta.to_text()` writes the catalog as
  whitespace-separated text with the tables in name order, and
  `DbMeta.from_text()` reads that text back.
- `rmstore.log_records` provides `LogType`, `LogRecord`, `BeginLogRecord`,
  `InsertLogRecord` and `LogBuffer`. The records have a little-endian binary
  layout, written with `serialize()` and read with `deserialize()`, and a
  `format()` method that produces a readable dump.
- `rmstore.txn_defs` provides the transaction states, isolation levels, the
  `WriteRecord` used for rollback, `LockDataId` for table and record lock
  targets, and `TransactionAbortException`.
- `rmstore.transaction` provides `Transaction`, which holds a transaction's
  state, write set, lock set and index page sets.
- `rmstore.lock_manager` provides `LockManager`, which keeps the lock table.
- `rmstore.defs` provides `Rid`, `ColType`, `col_type_can_hold`,
  `coltype_to_str` and the abstract cursor `RecScan`. A `RecScan` can be
  iterated to get record ids.
- `rmstore.errors` holds the exception hierarchy. Every exception derives from
  `RMDBError`, and every message begins with `"Error: "`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### LRU replacement

```python
from rmstore.lru_replacer import LRUReplacer

lru = LRUReplacer(7)
for frame in (1, 2, 3):
    lru.unpin(frame)
assert lru.victim() == 1
assert len(lru) == 2
```

When no frame can be evicted, `victim()` returns `None`. Unpinning a frame id
that lies outside `0 .. num_pages - 1` raises `InternalError`.

### Pages

```python
from rmstore.page import Page, PageId

page = Page(page_id=PageId(3, 7))
page.page_lsn = 42
assert page.page_lsn == 42
assert PageId(3, 7).key() == (3 << 16) | 7
```

### Catalog

```python
from rmstore.defs import ColType
from rmstore.sm_meta import ColMeta, DbMeta, TabMeta

db = DbMeta(name="shop")
db.set_table("items", TabMeta(
    name="items",
    cols=[ColMeta("items", "id", ColType.INT, 4, 0),
          ColMeta("items", "name", ColType.STRING, 16, 4)],
))
text = db.to_text()
assert DbMeta.from_text(text) == db
assert db.get_table("items").get_col("name").offset == 4
```

`get_table`, `get_col` and `get_index_meta` raise `TableNotFoundError`,
`ColumnNotFoundError` and `IndexNotFoundError` when the name they are given
does not exist.

### Log records

```python
from rmstore.defs import Rid
from rmstore.log_records import InsertLogRecord

rec = InsertLogRecord(1, b"abc", Rid(0, 1), "items")
data = rec.serialize()
assert len(data) == rec.log_tot_len
assert InsertLogRecord.deserialize(data) == rec
```

### Locks

```python
from rmstore.lock_manager import LockManager
from rmstore.transaction import Transaction
from rmstore.txn_defs import LockDataId

locks = LockManager()
txn = Transaction(1)
assert locks.lock_shared_on_table(txn, 5)
assert LockDataId.table(5) in txn.lock_set
locks.unlock(txn, LockDataId.table(5))
```

## Limitations

- The package does no disk I/O. It has no page file manager, no buffer pool
  that moves `Page` frames to and from files, and no log file. Pages, catalogs
  and log records stay in memory unless the caller stores the bytes or text
  these classes produce.
- `LockManager` grants every request at once. It records requests in the lock
  table and in the transaction's lock set, but it never blocks and never
  detects conflicts or deadlocks.
- The package has no SQL parser, no query executor, no recovery and no network
  server.