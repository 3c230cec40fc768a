import errno
import os

from rmstore.errors import (
    AmbiguousColumnError,
    ColumnNotFoundError,
    DatabaseExistsError,
    FileAlreadyExistsError,
    FileMissingError,
    FileNotOpenError,
    IncompatibleTypeError,
    IndexExistsError,
    IndexKeyDuplicateError,
    IndexNotFoundError,
    InternalError,
    PageNotExistError,
    RecordNotFoundError,
    RMDBError,
    TableNotFoundError,
    UnixError,
)


def test_base_message_prefix():
    assert str(RMDBError()) == "Error: "
    assert str(RMDBError("boom")) == "Error: boom"


def test_internal_error_is_rmdb_error():
    err = InternalError("bad state")
    assert issubclass(InternalError, RMDBError)
    assert str(err) == "Error: bad state"


def test_file_errors():
    assert str(FileNotOpenError(7)) == "Error: Invalid file descriptor: 7"
    assert str(FileAlreadyExistsError("a.txt")) == "Error: File already exists: a.txt"
    assert str(FileMissingError("a.txt")) == "Error: File not found: a.txt"


def test_record_not_found_format():
    assert str(RecordNotFoundError(3, 4)) == "Error: Record not found: (3,4)"


def test_table_and_column_errors():
    assert str(TableNotFoundError("t")) == "Error: Table not found: t"
    assert str(ColumnNotFoundError("c")) == "Error: Column not found: c"
    assert str(DatabaseExistsError("db")) == "Error: Database already exists: db"
    assert str(AmbiguousColumnError("x")) == "Error: Ambiguous column: x"


def test_index_errors_join_columns():
    assert str(IndexNotFoundError("t", ["a", "b"])) == "Error: Index not found: t.(a, b)"
    assert str(IndexExistsError("t", ["a"])) == "Error: Index already exists: t.(a)"
    assert str(IndexKeyDuplicateError()) == "Error: Index key duplicate."


def test_incompatible_type():
    err = IncompatibleTypeError("INT", "STRING")
    assert str(err) == "Error: Incompatible type error: lhs INT, rhs STRING"


def test_page_not_exist():
    assert str(PageNotExistError("t", 2)) == "Error: Page 2 in table tnot exits"


def test_unix_error_uses_strerror():
    err = UnixError(errno.ENOENT)
    assert str(err) == "Error: " + os.strerror(errno.ENOENT)
    assert UnixError.from_os_error(FileNotFoundError(errno.ENOENT, "x")).code == errno.ENOENT