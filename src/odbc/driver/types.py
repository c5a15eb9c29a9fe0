# coding:utf-8
#
# PROGRAM/MODULE: odbc-driver
# FILE:           odbc/driver/types.py
# DESCRIPTION:    Types for ODBC driver
# CREATED:        18.10.2026
#
# The contents of this file are subject to the MIT License
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Copyright (c) 2026 odbc-driver contributors
# All Rights Reserved.
#
# Contributor(s): ______________________________________

"""odbc-driver - Types for ODBC driver
"""

from __future__ import annotations
from typing import Tuple, Any, Optional, Protocol, Union
import datetime
from dataclasses import dataclass
from enum import Enum, IntEnum
from firebird.base.types import Error

# Exceptions required by Python Database API 2.0

class InterfaceError(Error):
    """Exception raised for errors that are reported by the driver rather than
    the ODBC driver manager or data source.
    """

class InvalidHandleError(InterfaceError):
    """Exception raised when a call was issued against a handle that is not valid.

    Important:
        This is a programming defect, not an environmental failure. The handle was
        already released or never successfully allocated. The enclosing operation
        must be abandoned, never retried.
    """

class UnknownReturnCodeError(InterfaceError):
    """Exception raised when the native library returns a status code outside the
    set defined by ODBC. Like `InvalidHandleError`, this is a fatal condition.
    """

class StillExecuting(Error):
    """Signals that an asynchronously executing operation has not completed yet.

    This is not a failure. The caller must re-issue the same operation later (or
    cancel it). The driver never retries on its own.

    Attributes:
        operation (str): Name of the pending operation.
    """

class DatabaseError(Error):
    """Exception raised for all errors reported through ODBC diagnostic records.
    """

    #: SQLSTATE of the first diagnostic record, or None
    sqlstate: str = None
    #: Native (vendor) error code of the first diagnostic record, or None
    native_error: int = None
    #: Tuple with all diagnostic records posted at the moment of failure
    diagnostics: Tuple[DiagnosticRecord, ...] = ()
    #: Name of the failed operation
    operation: str = None

class DataError(DatabaseError):
    """Exception raised for errors that are due to problems with the processed
    data like division by zero, numeric value out of range, etc.
    """

class OperationalError(DatabaseError):
    """Exception raised for errors that are related to the database's operation
    and not necessarily under the control of the programmer, e.g. an unexpected
    disconnect occurs, a timeout expired, the operation was canceled, etc.
    """

class IntegrityError(DatabaseError):
    """Exception raised when the relational integrity of the database is affected,
    e.g. a foreign key check fails.
    """

class InternalError(DatabaseError):
    """Exception raised when the database encounters an internal error.

    Important:
        This exceptions is never directly thrown by ODBC driver.
    """

class ProgrammingError(DatabaseError):
    """Exception raised for programming errors, e.g. table not found or already
    exists, syntax error in the SQL statement, wrong number of parameters specified,
    function sequence error etc.
    """

class NotSupportedError(DatabaseError):
    """Exception raised in case a method or database API was used which is not
    supported by the driver or data source.
    """

# Enums

class SqlReturn(IntEnum):
    """Status codes returned by ODBC functions.
    """
    SUCCESS = 0
    SUCCESS_WITH_INFO = 1
    ERROR = -1
    INVALID_HANDLE = -2
    STILL_EXECUTING = 2
    NEED_DATA = 99
    NO_DATA = 100

class HandleType(IntEnum):
    """ODBC handle kinds.
    """
    ENV = 1
    DBC = 2
    STMT = 3
    DESC = 4

class SqlState(str, Enum):
    """Well-known SQLSTATE values the driver inspects or maps.
    """
    GENERAL_WARNING = '01000'
    STRING_DATA_RIGHT_TRUNCATED = '01004'
    OPTION_VALUE_CHANGED = '01S02'
    WRONG_NUMBER_OF_PARAMETERS = '07001'
    INVALID_DESCRIPTOR_INDEX = '07009'
    CONNECTION_NOT_OPEN = '08003'
    COMMUNICATION_LINK_FAILURE = '08S01'
    STRING_DATA_LENGTH_EXCEEDED = '22001'
    NUMERIC_VALUE_OUT_OF_RANGE = '22003'
    DIVISION_BY_ZERO = '22012'
    INTEGRITY_CONSTRAINT_VIOLATION = '23000'
    INVALID_CURSOR_STATE = '24000'
    INVALID_TRANSACTION_STATE = '25000'
    INVALID_AUTHORIZATION = '28000'
    INVALID_CURSOR_NAME = '34000'
    SERIALIZATION_FAILURE = '40001'
    SYNTAX_ERROR_OR_ACCESS_VIOLATION = '42000'
    TABLE_NOT_FOUND = '42S02'
    COLUMN_NOT_FOUND = '42S22'
    GENERAL_ERROR = 'HY000'
    MEMORY_ALLOCATION_ERROR = 'HY001'
    OPERATION_CANCELED = 'HY008'
    INVALID_USE_OF_NULL_POINTER = 'HY009'
    FUNCTION_SEQUENCE_ERROR = 'HY010'
    INVALID_ATTRIBUTE_VALUE = 'HY024'
    INVALID_STRING_OR_BUFFER_LENGTH = 'HY090'
    INVALID_ATTRIBUTE_IDENTIFIER = 'HY092'
    OPTIONAL_FEATURE_NOT_IMPLEMENTED = 'HYC00'
    TIMEOUT_EXPIRED = 'HYT00'
    CONNECTION_TIMEOUT_EXPIRED = 'HYT01'
    DRIVER_DOES_NOT_SUPPORT_FUNCTION = 'IM001'

class SqlType(IntEnum):
    """SQL data types.

    Note:
        `UNKNOWN_TYPE` doubles as `SQL_ALL_TYPES` for `Statement.get_type_info()`.
    """
    UNKNOWN_TYPE = 0
    CHAR = 1
    NUMERIC = 2
    DECIMAL = 3
    INTEGER = 4
    SMALLINT = 5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    DATETIME = 9
    INTERVAL = 10
    VARCHAR = 12
    TYPE_DATE = 91
    TYPE_TIME = 92
    TYPE_TIMESTAMP = 93
    LONGVARCHAR = -1
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    BIGINT = -5
    TINYINT = -6
    BIT = -7
    WCHAR = -8
    WVARCHAR = -9
    WLONGVARCHAR = -10
    GUID = -11

class CType(IntEnum):
    """C data types used for buffers exchanged with the driver.
    """
    CHAR = 1
    WCHAR = -8
    BINARY = -2
    BIT = -7
    STINYINT = -26
    UTINYINT = -28
    SSHORT = -15
    USHORT = -17
    SLONG = -16
    ULONG = -18
    SBIGINT = -25
    UBIGINT = -27
    FLOAT = 7
    DOUBLE = 8
    TYPE_DATE = 91
    TYPE_TIME = 92
    TYPE_TIMESTAMP = 93
    def is_sequence(self) -> bool:
        "Returns True for variable-length targets whose raw bytes are the value."
        return self in (CType.CHAR, CType.WCHAR, CType.BINARY)
    @property
    def terminator_size(self) -> int:
        "Size of the null terminator the driver appends to values of this type."
        if self is CType.CHAR:
            return 1
        if self is CType.WCHAR:
            return 2
        return 0

class Nullable(IntEnum):
    """Nullability of columns and parameters.
    """
    NO_NULLS = 0
    NULLABLE = 1
    UNKNOWN = 2

class Searchable(IntEnum):
    """How a column can be used in a WHERE clause.
    """
    NONE = 0
    LIKE_ONLY = 1
    ALL_EXCEPT_LIKE = 2
    SEARCHABLE = 3

class Updatable(IntEnum):
    """Updatability of a result set column.
    """
    READONLY = 0
    WRITE = 1
    READWRITE_UNKNOWN = 2

class InputOutputType(IntEnum):
    """Parameter direction for `Statement.bind_parameter()`.
    """
    INPUT = 1
    INPUT_OUTPUT = 2
    OUTPUT = 4
    INPUT_OUTPUT_STREAM = 8
    OUTPUT_STREAM = 16

class FetchOrientation(IntEnum):
    """Fetch direction for `Statement.fetch_scroll()`.
    """
    NEXT = 1
    FIRST = 2
    LAST = 3
    PRIOR = 4
    ABSOLUTE = 5
    RELATIVE = 6
    BOOKMARK = 8

class BulkOperation(IntEnum):
    """Operations for `Statement.bulk_operations()`.
    """
    ADD = 4
    UPDATE_BY_BOOKMARK = 5
    DELETE_BY_BOOKMARK = 6
    FETCH_BY_BOOKMARK = 7

class CursorOperation(IntEnum):
    """Operations for `Statement.set_pos()`.
    """
    POSITION = 0
    REFRESH = 1
    UPDATE = 2
    DELETE = 3

class LockType(IntEnum):
    """Row lock requested by `Statement.set_pos()`.
    """
    NO_CHANGE = 0
    EXCLUSIVE = 1
    UNLOCK = 2

class ColumnIdentifierType(IntEnum):
    """Column identifier kinds for `Statement.special_columns()`.
    """
    BEST_ROWID = 1
    ROWVER = 2

class RowIdScope(IntEnum):
    """Minimum required scope of the row id for `Statement.special_columns()`.
    """
    CURRENT_ROW = 0
    TRANSACTION = 1
    SESSION = 2

class Reserved(IntEnum):
    """Importance of CARDINALITY and PAGES for `Statement.statistics()`.
    """
    QUICK = 0
    ENSURE = 1

class FreeStmtOption(IntEnum):
    """Options for SQLFreeStmt.
    """
    CLOSE = 0
    UNBIND = 2
    RESET_PARAMS = 3

# Snapshots

@dataclass(frozen=True)
class DiagnosticRecord:
    """One ODBC diagnostic record.

    Arguments:
        sqlstate: Five-character SQLSTATE code.
        native_error: Driver or data source specific error code.
        message: Diagnostic message text.
    """
    sqlstate: str
    native_error: int
    message: str
    def __str__(self):
        return f'[{self.sqlstate}] ({self.native_error}) {self.message}'

@dataclass
class ColumnDescriptor:
    """Shape of one result set column, as returned by `Statement.describe_column()`.

    Valid only until the statement is executed again.
    """
    #: Column name
    name: str
    #: SQL data type (raw `int` for driver-specific types)
    data_type: Union[SqlType, int]
    #: Column size
    size: int
    #: Number of decimal digits
    decimal_digits: int
    #: Nullability
    nullable: Nullable

@dataclass
class ParameterDescriptor:
    """Shape of one parameter marker, as returned by `Statement.describe_parameter()`.

    Valid only until the statement is prepared again.
    """
    #: SQL data type (raw `int` for driver-specific types)
    data_type: Union[SqlType, int]
    #: Parameter size
    size: int
    #: Number of decimal digits
    decimal_digits: int
    #: Nullability
    nullable: Nullable

# Collaborators

class ParentConnection(Protocol):  # pragma: no cover
    """Protocol for objects that can own statement handles.
    """
    #: Native connection handle (SQLHDBC)
    handle: Any
    def get_diagnostic_records(self) -> list[DiagnosticRecord]:
        "Returns diagnostic records currently posted on the connection handle."

class Allocator(Protocol):  # pragma: no cover
    """Protocol for buffer allocators used by operations that need scratch memory.
    """
    def create(self, size: int) -> Any:
        "Returns new zero-filled ctypes character array of `size` bytes."
    def release(self, buffer: Any) -> None:
        "Releases buffer obtained from `create()`."

#: Type of values returned by `Statement.get_data()`
DATA_VALUE = Optional[Union[bytes, int, float, bool, datetime.date, datetime.time,
                            datetime.datetime]]

def to_enum(cls: type[IntEnum], value: int) -> Union[IntEnum, int]:
    """Returns `cls` member for value, or the value itself when it's not a member.
    """
    try:
        return cls(value)
    except ValueError:
        return value
