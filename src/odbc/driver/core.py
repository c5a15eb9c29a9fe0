# coding:utf-8
#
# PROGRAM/MODULE: odbc-driver
# FILE:           odbc/driver/core.py
# DESCRIPTION:    Main driver code (statement handle wrapper)
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

"""odbc-driver - Main driver code (statement handle wrapper)
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import datetime
import ctypes
from ctypes import byref, sizeof
from warnings import warn
from firebird.base.logging import LoggingIdMixin, get_logger
from firebird.base.buffer import CTypesBufferFactory
from .types import InvalidHandleError, UnknownReturnCodeError, \
     StillExecuting, DatabaseError, SqlReturn, HandleType, SqlState, SqlType, CType, \
     Nullable, InputOutputType, FetchOrientation, BulkOperation, CursorOperation, LockType, \
     ColumnIdentifierType, RowIdScope, Reserved, FreeStmtOption, DiagnosticRecord, \
     ColumnDescriptor, ParameterDescriptor, ParentConnection, Allocator, DATA_VALUE, to_enum
from .attributes import StatementAttribute, ColumnAttribute, AttributeShape, AttributeValue, \
     spec_of, encode, decode, decode_integer
from .hooks import StatementHook, register_class, get_callbacks
from .config import driver_config
from . import diagnostics
from . import odbcapi as a

#: Status codes that denote successful call
_OK = frozenset([SqlReturn.SUCCESS, SqlReturn.SUCCESS_WITH_INFO])

#: ctypes used to reinterpret fixed-width values retrieved by `Statement.get_data()`
_SCALAR_TYPES = {CType.BIT: ctypes.c_ubyte,
                 CType.STINYINT: ctypes.c_byte,
                 CType.UTINYINT: ctypes.c_ubyte,
                 CType.SSHORT: ctypes.c_short,
                 CType.USHORT: ctypes.c_ushort,
                 CType.SLONG: ctypes.c_int,
                 CType.ULONG: ctypes.c_uint,
                 CType.SBIGINT: ctypes.c_longlong,
                 CType.UBIGINT: ctypes.c_ulonglong,
                 CType.FLOAT: ctypes.c_float,
                 CType.DOUBLE: ctypes.c_double,
                 }

def decode_return(code: int) -> SqlReturn:
    """Returns status for raw return code of ODBC call.

    Raises:
        UnknownReturnCodeError: For codes not defined by ODBC.
    """
    try:
        return SqlReturn(code)
    except ValueError:
        raise UnknownReturnCodeError(f"ODBC call returned unknown code {code}") from None

def _check_number(value: int, name: str, minimum: int=1) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"Argument '{name}' must be int, not {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"Argument '{name}' must be >= {minimum}, got {value}")

def _check_buffer(value: Any, name: str) -> None:
    if not isinstance(value, ctypes.Array):
        raise TypeError(f"Argument '{name}' must be ctypes array, not {type(value).__name__}")

def _check_indicator(value: Any, name: str) -> None:
    if value is None or isinstance(value, a.SQLLEN):
        return
    if isinstance(value, ctypes.Array) and value._type_ is a.SQLLEN:
        return
    raise TypeError(f"Argument '{name}' must be SQLLEN, array of SQLLEN or None")

def _encode(value: Optional[str]) -> Tuple[Optional[bytes], int]:
    if value is None:
        return (None, 0)
    data = value.encode(*driver_config.text_codec)
    return (data, len(data))

def _names(*values: Optional[str]) -> List[Any]:
    result = []
    for value in values:
        result.extend(_encode(value))
    return result

def _decode(value: bytes) -> str:
    return value.decode(*driver_config.text_codec)

def _convert(target: CType, data: bytes) -> DATA_VALUE:
    if target.is_sequence():
        return bytes(data)
    if target is CType.TYPE_DATE:
        value = a.DATE_STRUCT.from_buffer_copy(data)
        return datetime.date(value.year, value.month, value.day)
    if target is CType.TYPE_TIME:
        value = a.TIME_STRUCT.from_buffer_copy(data)
        return datetime.time(value.hour, value.minute, value.second)
    if target is CType.TYPE_TIMESTAMP:
        value = a.TIMESTAMP_STRUCT.from_buffer_copy(data)
        return datetime.datetime(value.year, value.month, value.day, value.hour,
                                 value.minute, value.second, value.fraction // 1000)
    value = _SCALAR_TYPES[target].from_buffer_copy(data).value
    return bool(value) if target is CType.BIT else value

class CTypesAllocator:
    """Allocator that provides zero-filled ctypes character arrays.

    Released buffers are cleared, so no data retrieved from the driver lingers in
    memory after the operation that used them.
    """
    def __init__(self):
        self._factory: CTypesBufferFactory = CTypesBufferFactory()
    def create(self, size: int) -> ctypes.Array:
        "Returns new zero-filled buffer of `size` bytes."
        return self._factory.create(size)
    def release(self, buffer: ctypes.Array) -> None:
        "Releases buffer obtained from `create()`."
        self._factory.clear(buffer)

class ConnectionHandle:
    """Parent connection for statements, created from connection handle (SQLHDBC)
    allocated elsewhere.

    Arguments:
        handle: Native connection handle.
        api: ODBC call surface. Default is the loaded ODBC library.
    """
    def __init__(self, handle: Any, *, api: a.ODBCAPI=None):
        #: Native connection handle
        self.handle: Any = handle
        self._api: a.ODBCAPI = api
    def __repr__(self):
        return f'ConnectionHandle({self.handle!r})'
    def get_diagnostic_records(self) -> List[DiagnosticRecord]:
        "Returns diagnostic records currently posted on the connection handle."
        return diagnostics.get_diagnostic_records(HandleType.DBC, self.handle, api=self._api)

class Statement(LoggingIdMixin):
    """ODBC statement handle.

    Arguments:
        connection: Parent connection that provides connection handle and its diagnostics.
        api: ODBC call surface. Default is the loaded ODBC library.
        allocator: Allocator for scratch buffers. Default is `CTypesAllocator`.

    Raises:
        InvalidHandleError: When connection reports invalid handle.
        DatabaseError: When handle could not be allocated.

    Important:
        Buffers bound with `bind_column()`, `bind_parameter()` or array-pointer
        attributes are borrowed by the driver until they are unbound, re-bound or
        the statement is freed. The statement keeps references to them for that time,
        but they must not be resized or otherwise reallocated.

        Calls against one statement must be serialized by the caller.

    Note:
        Implements context manager protocol to call `.free()` automatically.

    Hooks:
        Event `.StatementHook.ALLOCATED`: Executed after statement handle is allocated.
        Hook routine must have signature: `hook_func(statement)`. Any value returned by
        hook is ignored.

        Event `.StatementHook.FREED`: Executed after statement handle is released.
        Hook routine must have signature: `hook_func(statement)`. Any value returned by
        hook is ignored.
    """
    def __init__(self, connection: ParentConnection, *, api: a.ODBCAPI=None,
                 allocator: Allocator=None):
        self._handle: Optional[a.SQLHSTMT] = None
        self._connection: ParentConnection = connection
        self._api: a.ODBCAPI = a.get_api() if api is None else api
        self._allocator: Allocator = CTypesAllocator() if allocator is None else allocator
        #: Buffers borrowed by the driver
        self._bound: Dict[Tuple[str, int], Any] = {}
        handle = a.SQLHSTMT()
        rc = decode_return(self._api.SQLAllocHandle(HandleType.STMT, connection.handle,
                                                    byref(handle)))
        if rc == SqlReturn.INVALID_HANDLE:
            raise InvalidHandleError("Statement.open passed invalid connection handle")
        if rc not in _OK:
            raise diagnostics.exception_from_diagnostics(connection.get_diagnostic_records(),
                                                         'Statement.open')
        self._handle = handle
        get_logger(self).debug("Statement handle allocated")
        for hook in get_callbacks(StatementHook.ALLOCATED, self):
            hook(self)
    def __enter__(self) -> Statement:
        return self
    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.free()
    def __del__(self):
        if getattr(self, '_handle', None) is not None:
            warn(f"Statement '{self.logging_id}' disposed without prior free()", ResourceWarning)
            self.free()
    def __str__(self):
        return f'{self.logging_id}[{self._handle.value if self._handle else None}]'
    def __repr__(self):
        return str(self)
    def _check(self, rc: int, operation: str, accept=_OK) -> SqlReturn:
        """Decodes return code of ODBC call, and raises exception when it's not accepted.
        """
        result = decode_return(rc)
        if result in accept:
            return result
        name = f'Statement.{operation}'
        if result == SqlReturn.INVALID_HANDLE:
            raise InvalidHandleError(f"{name} passed invalid handle")
        if result == SqlReturn.STILL_EXECUTING:
            raise StillExecuting(f"{name} is still executing", operation=name)
        error = diagnostics.exception_from_diagnostics(self.get_diagnostic_records(), name)
        get_logger(self).debug(f"{name} failed with SQLSTATE {error.sqlstate}")
        raise error
    def _get_allocator(self, allocator: Optional[Allocator]) -> Allocator:
        return self._allocator if allocator is None else allocator
    def _two_phase(self, operation: str, call: Callable[[Any, int], int], length: Any,
                   allocator: Allocator) -> str:
        """Retrieves string of unknown length. First call reports the length, second
        call fills buffer of that size (plus terminator).
        """
        self._check(call(None, 0), operation)
        buffer = allocator.create(length.value + 1)
        try:
            self._check(call(buffer, len(buffer)), operation)
            return _decode(buffer.raw[:min(length.value, len(buffer) - 1)])
        finally:
            allocator.release(buffer)
    def free(self) -> None:
        """Release the statement handle.

        Raises:
            InvalidHandleError: When the handle was already invalid at release time.
            DatabaseError: When the driver could not release the handle.

        Important:
            The statement SHALL NOT be used after call to this method.

        Note:
            Unlike other operations, repeated call on released statement is no-op, so
            explicit `free()` can be combined with context manager.
        """
        if self._handle is None:
            return
        self._check(self._api.SQLFreeHandle(HandleType.STMT, self._handle), 'free')
        self._handle = None
        self._bound.clear()
        get_logger(self).debug("Statement handle released")
        for hook in get_callbacks(StatementHook.FREED, self):
            hook(self)
    def is_freed(self) -> bool:
        "Returns True if statement handle was released."
        return self._handle is None
    # Binding
    def bind_column(self, column_number: int, target_type: CType, target_buffer: ctypes.Array,
                    indicator: Union[a.SQLLEN, ctypes.Array, None],
                    column_size: int=None) -> None:
        """Binds application buffer to result set column.

        Arguments:
            column_number: Column number, starting at 1.
            target_type: C type of the buffer.
            target_buffer: Buffer (ctypes array) that receives column values.
            indicator: Length/indicator buffer (`SQLLEN` or array of `SQLLEN` for
                block cursors), or None.
            column_size: Buffer length in bytes. Default is size of `target_buffer`.

        Important:
            The driver writes into `target_buffer` and `indicator` on every fetch until
            the column is unbound or statement is freed.
        """
        _check_number(column_number, 'column_number')
        _check_buffer(target_buffer, 'target_buffer')
        _check_indicator(indicator, 'indicator')
        buffer_len = sizeof(target_buffer) if column_size is None else column_size
        self._check(self._api.SQLBindCol(self.handle, column_number, CType(target_type),
                                         target_buffer, buffer_len, indicator), 'bind_column')
        self._bound[('column', column_number)] = (target_buffer, indicator)
    def bind_parameter(self, parameter_number: int, io_type: InputOutputType, value_type: CType,
                       parameter_type: SqlType, value: ctypes._SimpleCData | ctypes.Array,
                       indicator: Optional[a.SQLLEN], *, column_size: int=None,
                       decimal_digits: int=None) -> None:
        """Binds application buffer to parameter marker in SQL statement.

        Arguments:
            parameter_number: Parameter number, starting at 1.
            io_type: Parameter direction.
            value_type: C type of the value buffer.
            parameter_type: SQL type of the parameter.
            value: Buffer (ctypes object) with parameter value.
            indicator: Length/indicator buffer, or None.
            column_size: Column size of the parameter. Default is size of `value`.
            decimal_digits: Decimal digits of the parameter. Default is zero.
        """
        _check_number(parameter_number, 'parameter_number')
        if not isinstance(value, (ctypes._SimpleCData, ctypes.Array, ctypes.Structure)):
            raise TypeError(f"Argument 'value' must be ctypes object, not {type(value).__name__}")
        _check_indicator(indicator, 'indicator')
        self._check(self._api.SQLBindParameter(self.handle, parameter_number,
                                               InputOutputType(io_type), CType(value_type),
                                               int(parameter_type),
                                               sizeof(value) if column_size is None else column_size,
                                               0 if decimal_digits is None else decimal_digits,
                                               byref(value), sizeof(value), indicator),
                    'bind_parameter')
        self._bound[('parameter', parameter_number)] = (value, indicator)
    def unbind_columns(self) -> None:
        "Releases all column buffers bound by `bind_column()`."
        self._check(self._api.SQLFreeStmt(self.handle, FreeStmtOption.UNBIND), 'unbind_columns')
        for key in [key for key in self._bound if key[0] == 'column']:
            del self._bound[key]
    def reset_parameters(self) -> None:
        "Releases all parameter buffers bound by `bind_parameter()`."
        self._check(self._api.SQLFreeStmt(self.handle, FreeStmtOption.RESET_PARAMS),
                    'reset_parameters')
        for key in [key for key in self._bound if key[0] == 'parameter']:
            del self._bound[key]
    # Execution
    def prepare(self, sql: str) -> None:
        "Prepares SQL statement for execution."
        self._check(self._api.SQLPrepare(self.handle, *_encode(sql)), 'prepare')
    def execute(self) -> bool:
        """Executes prepared statement.

        Returns:
            True when data for data-at-execution parameters must be supplied with
            `param_data()` and `put_data()`, False otherwise.
        """
        rc = self._check(self._api.SQLExecute(self.handle), 'execute',
                         _OK | {SqlReturn.NEED_DATA, SqlReturn.NO_DATA})
        return rc == SqlReturn.NEED_DATA
    def execute_direct(self, sql: str) -> bool:
        """Executes SQL statement without prior preparation.

        Returns:
            True when data for data-at-execution parameters must be supplied with
            `param_data()` and `put_data()`, False otherwise.
        """
        rc = self._check(self._api.SQLExecDirect(self.handle, *_encode(sql)), 'execute_direct',
                         _OK | {SqlReturn.NEED_DATA, SqlReturn.NO_DATA})
        return rc == SqlReturn.NEED_DATA
    def param_data(self) -> Optional[int]:
        """Returns token of the next data-at-execution parameter that needs data, or
        None when all parameters were supplied and the statement was executed.
        """
        token = a.SQLPOINTER()
        rc = self._check(self._api.SQLParamData(self.handle, byref(token)), 'param_data',
                         _OK | {SqlReturn.NEED_DATA, SqlReturn.NO_DATA})
        if rc == SqlReturn.NEED_DATA:
            return token.value or 0
        return None
    def put_data(self, data: Union[None, bytes, str, ctypes._SimpleCData, ctypes.Array],
                 length: int=None) -> None:
        """Sends part of data-at-execution parameter value.

        Arguments:
            data: Data to send. None sends NULL. Strings are encoded with configured encoding.
            length: Length of data in bytes. Default is length (size) of `data`.
        """
        if data is None:
            self._check(self._api.SQLPutData(self.handle, None, a.SQL_NULL_DATA), 'put_data')
            return
        if isinstance(data, str):
            data = data.encode(*driver_config.text_codec)
        if isinstance(data, bytes):
            ptr = data
            size = len(data)
        elif isinstance(data, (ctypes._SimpleCData, ctypes.Array, ctypes.Structure)):
            ptr = byref(data)
            size = sizeof(data)
        else:
            raise TypeError(f"Unsupported data type {type(data).__name__}")
        self._check(self._api.SQLPutData(self.handle, ptr, size if length is None else length),
                    'put_data')
    def cancel(self) -> None:
        "Cancels processing on statement."
        self._check(self._api.SQLCancel(self.handle), 'cancel')
    def close_cursor(self) -> None:
        "Closes open cursor and discards pending results."
        self._check(self._api.SQLCloseCursor(self.handle), 'close_cursor')
    def bulk_operations(self, operation: BulkOperation) -> None:
        "Performs bulk insert or bookmark operation."
        self._check(self._api.SQLBulkOperations(self.handle, BulkOperation(operation)),
                    'bulk_operations')
    def set_pos(self, row_number: int, operation: CursorOperation, lock_type: LockType) -> None:
        """Sets cursor position in rowset and refreshes, updates or deletes data.

        Arguments:
            row_number: Row in rowset, starting at 1. Zero applies operation to all rows.
            operation: Operation to perform.
            lock_type: Lock to apply on the row.
        """
        _check_number(row_number, 'row_number', 0)
        self._check(self._api.SQLSetPos(self.handle, row_number, CursorOperation(operation),
                                        LockType(lock_type)), 'set_pos')
    # Results
    def fetch(self) -> bool:
        "Fetches next row. Returns False when there are no more rows."
        rc = self._check(self._api.SQLFetch(self.handle), 'fetch', _OK | {SqlReturn.NO_DATA})
        return rc != SqlReturn.NO_DATA
    def fetch_scroll(self, orientation: FetchOrientation, offset: int=0) -> bool:
        "Fetches rowset in specified direction. Returns False when there are no rows."
        rc = self._check(self._api.SQLFetchScroll(self.handle, FetchOrientation(orientation),
                                                  offset), 'fetch_scroll',
                         _OK | {SqlReturn.NO_DATA})
        return rc != SqlReturn.NO_DATA
    def more_results(self) -> bool:
        "Moves to the next result set. Returns False when there are no more results."
        rc = self._check(self._api.SQLMoreResults(self.handle), 'more_results',
                         _OK | {SqlReturn.NO_DATA})
        return rc != SqlReturn.NO_DATA
    def row_count(self) -> int:
        "Returns number of rows affected by UPDATE, INSERT or DELETE statement."
        count = a.SQLLEN(0)
        self._check(self._api.SQLRowCount(self.handle, byref(count)), 'row_count')
        return count.value
    def num_params(self) -> int:
        "Returns number of parameters in prepared statement."
        count = a.SQLSMALLINT(0)
        self._check(self._api.SQLNumParams(self.handle, byref(count)), 'num_params')
        return count.value
    def num_result_columns(self) -> int:
        "Returns number of columns in result set, or zero if there is no result set."
        count = a.SQLSMALLINT(0)
        self._check(self._api.SQLNumResultCols(self.handle, byref(count)), 'num_result_columns')
        return count.value
    def describe_column(self, column_number: int, *,
                        allocator: Allocator=None) -> ColumnDescriptor:
        """Returns descriptor of result set column.

        Arguments:
            column_number: Column number, starting at 1.
            allocator: Allocator for name buffer. Default is statement allocator.
        """
        _check_number(column_number, 'column_number')
        name_len = a.SQLSMALLINT(0)
        data_type = a.SQLSMALLINT(0)
        size = a.SQLULEN(0)
        digits = a.SQLSMALLINT(0)
        nullable = a.SQLSMALLINT(0)
        def call(buffer, buffer_len: int) -> int:
            return self._api.SQLDescribeCol(self.handle, column_number, buffer, buffer_len,
                                            byref(name_len), byref(data_type), byref(size),
                                            byref(digits), byref(nullable))
        name = self._two_phase('describe_column', call, name_len,
                               self._get_allocator(allocator))
        return ColumnDescriptor(name, to_enum(SqlType, data_type.value), size.value,
                                digits.value, to_enum(Nullable, nullable.value))
    def describe_parameter(self, parameter_number: int) -> ParameterDescriptor:
        """Returns descriptor of parameter marker in prepared statement.

        Arguments:
            parameter_number: Parameter number, starting at 1.
        """
        _check_number(parameter_number, 'parameter_number')
        data_type = a.SQLSMALLINT(0)
        size = a.SQLULEN(0)
        digits = a.SQLSMALLINT(0)
        nullable = a.SQLSMALLINT(0)
        self._check(self._api.SQLDescribeParam(self.handle, parameter_number, byref(data_type),
                                               byref(size), byref(digits), byref(nullable)),
                    'describe_parameter')
        return ParameterDescriptor(to_enum(SqlType, data_type.value), size.value, digits.value,
                                   to_enum(Nullable, nullable.value))
    def get_column_attribute(self, column_number: int, attribute: ColumnAttribute, *,
                             allocator: Allocator=None) -> AttributeValue:
        """Returns value of result set column attribute.

        Arguments:
            column_number: Column number, starting at 1.
            attribute: Attribute identity.
            allocator: Allocator for string values. Default is statement allocator.
        """
        _check_number(column_number, 'column_number')
        if not isinstance(attribute, ColumnAttribute):
            raise TypeError(f"{attribute!r} is not a column attribute")
        if spec_of(attribute).shape is AttributeShape.STRING:
            str_len = a.SQLSMALLINT(0)
            def call(buffer, buffer_len: int) -> int:
                return self._api.SQLColAttribute(self.handle, column_number, attribute, buffer,
                                                 buffer_len, byref(str_len), None)
            return AttributeValue(attribute,
                                  self._two_phase('get_column_attribute', call, str_len,
                                                  self._get_allocator(allocator)))
        number = a.SQLLEN(0)
        self._check(self._api.SQLColAttribute(self.handle, column_number, attribute, None, 0,
                                              None, byref(number)), 'get_column_attribute')
        return decode_integer(attribute, number.value)
    def get_data(self, column_number: int, target_type: CType, *, buffer_size: int=None,
                 allocator: Allocator=None) -> Optional[DATA_VALUE]:
        """Retrieves value of single column in the current row.

        Values larger than scratch buffer are retrieved in chunks.

        Arguments:
            column_number: Column number, starting at 1.
            target_type: C type to which the value should be converted.
            buffer_size: Size of scratch buffer. Default is `driver_config.get_data_buffer_size`.
            allocator: Allocator for scratch buffer. Default is statement allocator.

        Returns:
            None for NULL, `bytes` for CHAR, WCHAR and BINARY targets, otherwise Python
            value of the target type.

        Raises:
            ValueError: When `buffer_size` has no room for one character and terminator.
        """
        _check_number(column_number, 'column_number')
        target = CType(target_type)
        if buffer_size is None:
            buffer_size = driver_config.get_data_buffer_size.value
        # Room for at least one character and terminator
        width = 2 if target is CType.WCHAR else 1
        _check_number(buffer_size, 'buffer_size', target.terminator_size + width)
        allocator = self._get_allocator(allocator)
        # Whole characters delivered in a full buffer
        chunk_size = buffer_size - target.terminator_size
        chunk_size -= chunk_size % width
        indicator = a.SQLLEN(0)
        data = bytearray()
        received = False
        buffer = allocator.create(buffer_size)
        try:
            while True:
                rc = self._check(self._api.SQLGetData(self.handle, column_number, target, buffer,
                                                      len(buffer), byref(indicator)),
                                 'get_data', _OK | {SqlReturn.NO_DATA})
                if rc == SqlReturn.NO_DATA:
                    break
                if indicator.value == a.SQL_NULL_DATA:
                    return None
                received = True
                if rc == SqlReturn.SUCCESS_WITH_INFO \
                   and diagnostics.has_sqlstate(self.get_diagnostic_records(),
                                                SqlState.STRING_DATA_RIGHT_TRUNCATED):
                    # Buffer is full, minus terminator appended by the driver
                    data.extend(buffer.raw[:chunk_size])
                    get_logger(self).debug(f"Statement.get_data continues with column {column_number}")
                    continue
                if indicator.value == a.SQL_NO_TOTAL:
                    data.extend(buffer.raw[:chunk_size])
                else:
                    data.extend(buffer.raw[:min(indicator.value, len(buffer))])
                break
        finally:
            allocator.release(buffer)
        if not received:
            return None
        return _convert(target, data)
    # Cursor name
    def get_cursor_name(self, *, allocator: Allocator=None) -> str:
        "Returns cursor name associated with statement."
        name_len = a.SQLSMALLINT(0)
        def call(buffer, buffer_len: int) -> int:
            return self._api.SQLGetCursorName(self.handle, buffer, buffer_len, byref(name_len))
        return self._two_phase('get_cursor_name', call, name_len, self._get_allocator(allocator))
    def set_cursor_name(self, name: str) -> None:
        "Associates cursor name with statement."
        self._check(self._api.SQLSetCursorName(self.handle, *_encode(name)), 'set_cursor_name')
    # Attributes
    def get_attribute(self, attribute: StatementAttribute, *,
                      allocator: Allocator=None) -> AttributeValue:
        """Returns value of statement attribute.

        Arguments:
            attribute: Attribute identity.
            allocator: Allocator for value buffer. Default is statement allocator.
        """
        if not isinstance(attribute, StatementAttribute):
            raise TypeError(f"{attribute!r} is not a statement attribute")
        allocator = self._get_allocator(allocator)
        buffer = allocator.create(max(driver_config.attribute_buffer_size.value,
                                      sizeof(ctypes.c_void_p)))
        try:
            str_len = a.SQLINTEGER(0)
            self._check(self._api.SQLGetStmtAttr(self.handle, attribute, buffer, len(buffer),
                                                 byref(str_len)), 'get_attribute')
            return decode(attribute, buffer)
        finally:
            allocator.release(buffer)
    def set_attribute(self, value: AttributeValue) -> None:
        """Sets value of statement attribute.

        Important:
            Arrays set to array-pointer attributes are borrowed by the driver. The
            statement keeps reference to them until the attribute is set again or
            the statement is freed.
        """
        if not isinstance(value, AttributeValue):
            raise TypeError(f"Expected AttributeValue, got {type(value).__name__}")
        encoded = encode(value)
        self._check(self._api.SQLSetStmtAttr(self.handle, value.attribute, encoded.value_ptr,
                                             encoded.length), 'set_attribute')
        key = ('attribute', value.attribute)
        if encoded.keep_alive is None:
            self._bound.pop(key, None)
        else:
            self._bound[key] = encoded.keep_alive
    # Catalog
    def tables(self, catalog_name: str=None, schema_name: str=None, table_name: str=None,
               table_type: str=None) -> None:
        "Creates result set with list of tables."
        self._check(self._api.SQLTables(self.handle, *_names(catalog_name, schema_name,
                                                             table_name, table_type)),
                    'tables')
    def columns(self, catalog_name: str=None, schema_name: str=None, table_name: str=None,
                column_name: str=None) -> None:
        "Creates result set with list of columns in specified tables."
        self._check(self._api.SQLColumns(self.handle, *_names(catalog_name, schema_name,
                                                              table_name, column_name)),
                    'columns')
    def column_privileges(self, catalog_name: str=None, schema_name: str=None,
                          table_name: str=None, column_name: str=None) -> None:
        "Creates result set with list of columns and privileges for specified table."
        self._check(self._api.SQLColumnPrivileges(self.handle,
                                                  *_names(catalog_name, schema_name,
                                                          table_name, column_name)),
                    'column_privileges')
    def table_privileges(self, catalog_name: str=None, schema_name: str=None,
                         table_name: str=None) -> None:
        "Creates result set with list of tables and privileges associated with them."
        self._check(self._api.SQLTablePrivileges(self.handle,
                                                 *_names(catalog_name, schema_name, table_name)),
                    'table_privileges')
    def primary_keys(self, catalog_name: str=None, schema_name: str=None,
                     table_name: str=None) -> None:
        "Creates result set with columns that make up the primary key of table."
        self._check(self._api.SQLPrimaryKeys(self.handle,
                                             *_names(catalog_name, schema_name, table_name)),
                    'primary_keys')
    def foreign_keys(self, pk_catalog_name: str=None, pk_schema_name: str=None,
                     pk_table_name: str=None, fk_catalog_name: str=None,
                     fk_schema_name: str=None, fk_table_name: str=None) -> None:
        "Creates result set with foreign keys of table, or foreign keys that refer to table."
        self._check(self._api.SQLForeignKeys(self.handle,
                                             *_names(pk_catalog_name, pk_schema_name,
                                                     pk_table_name, fk_catalog_name,
                                                     fk_schema_name, fk_table_name)),
                    'foreign_keys')
    def procedures(self, catalog_name: str=None, schema_name: str=None,
                   procedure_name: str=None) -> None:
        "Creates result set with list of procedures."
        self._check(self._api.SQLProcedures(self.handle,
                                            *_names(catalog_name, schema_name, procedure_name)),
                    'procedures')
    def procedure_columns(self, catalog_name: str=None, schema_name: str=None,
                          procedure_name: str=None, column_name: str=None) -> None:
        "Creates result set with input and output parameters and result columns of procedures."
        self._check(self._api.SQLProcedureColumns(self.handle,
                                                  *_names(catalog_name, schema_name,
                                                          procedure_name, column_name)),
                    'procedure_columns')
    def special_columns(self, identifier_type: ColumnIdentifierType, catalog_name: str=None,
                        schema_name: str=None, table_name: str=None,
                        row_id_scope: RowIdScope=RowIdScope.CURRENT_ROW,
                        nullable: Nullable=Nullable.NULLABLE) -> None:
        """Creates result set with optimal set of columns that uniquely identifies row,
        or columns updated automatically when any value in the row is updated.
        """
        self._check(self._api.SQLSpecialColumns(self.handle,
                                                ColumnIdentifierType(identifier_type),
                                                *_names(catalog_name, schema_name, table_name),
                                                RowIdScope(row_id_scope), Nullable(nullable)),
                    'special_columns')
    def statistics(self, catalog_name: str=None, schema_name: str=None, table_name: str=None,
                   unique: bool=False, reserved: Reserved=Reserved.QUICK) -> None:
        "Creates result set with statistics about table and its indexes."
        self._check(self._api.SQLStatistics(self.handle,
                                            *_names(catalog_name, schema_name, table_name),
                                            a.SQL_INDEX_UNIQUE if unique else a.SQL_INDEX_ALL,
                                            Reserved(reserved)),
                    'statistics')
    def get_type_info(self, data_type: SqlType=SqlType.UNKNOWN_TYPE) -> None:
        """Creates result set with information about data types supported by data source.
        `SqlType.UNKNOWN_TYPE` (the default) requests all types.
        """
        self._check(self._api.SQLGetTypeInfo(self.handle, int(data_type)), 'get_type_info')
    def get_all_catalogs(self) -> None:
        "Creates result set with list of catalogs."
        self.tables(a.SQL_ALL_CATALOGS, '', '', '')
    def get_all_schemas(self) -> None:
        "Creates result set with list of schemas."
        self.tables('', a.SQL_ALL_SCHEMAS, '', '')
    def get_all_table_types(self) -> None:
        "Creates result set with list of table types."
        self.tables('', '', '', a.SQL_ALL_TABLE_TYPES)
    # Diagnostics
    def get_diagnostic_records(self) -> List[DiagnosticRecord]:
        "Returns diagnostic records currently posted on the statement handle."
        return diagnostics.get_diagnostic_records(HandleType.STMT, self.handle, api=self._api)
    def get_errors(self) -> List[str]:
        "Returns SQLSTATE values of diagnostic records posted on the statement handle."
        return [rec.sqlstate for rec in self.get_diagnostic_records()]
    def get_last_error(self) -> DatabaseError:
        """Returns exception that describes diagnostic records currently posted on the
        statement handle. The exception is returned, not raised.
        """
        return diagnostics.exception_from_diagnostics(self.get_diagnostic_records(), 'Statement')
    # Properties
    @property
    def log_context(self) -> Any:
        return self._connection
    @property
    def handle(self) -> a.SQLHSTMT:
        """Native statement handle.

        Raises:
            InvalidHandleError: When the handle was already released.
        """
        if self._handle is None:
            raise InvalidHandleError("Statement handle was already released")
        return self._handle
    @property
    def connection(self) -> ParentConnection:
        "Parent connection."
        return self._connection

register_class(Statement, set([StatementHook.ALLOCATED, StatementHook.FREED]))
