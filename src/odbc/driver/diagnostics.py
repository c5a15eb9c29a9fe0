# coding:utf-8
#
# PROGRAM/MODULE: odbc-driver
# FILE:           odbc/driver/diagnostics.py
# DESCRIPTION:    Diagnostic records
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

"""odbc-driver - Diagnostic records

Retrieval of diagnostic records posted against ODBC handles, and construction of
exceptions from them.
"""

from __future__ import annotations
from typing import Any, List, Optional, Type
from ctypes import byref, create_string_buffer
from .types import InterfaceError, InvalidHandleError, DatabaseError, DataError, \
     OperationalError, IntegrityError, ProgrammingError, NotSupportedError, \
     DiagnosticRecord, HandleType, SqlReturn, SqlState
from .config import driver_config
from . import odbcapi as a

#: Exceptions for SQLSTATE values that don't follow the class mapping
_STATE_MAP = {'01004': DataError,
              '40002': IntegrityError,
              'HY000': OperationalError, 'HY001': OperationalError,
              'HY008': OperationalError, 'HY013': OperationalError,
              'HY014': OperationalError, 'HY018': OperationalError,
              'HY019': DataError, 'HY020': DataError,
              'HYC00': NotSupportedError, 'HYT00': OperationalError,
              'HYT01': OperationalError, 'IM001': NotSupportedError,
              }

#: Exceptions for SQLSTATE classes (first two characters)
_CLASS_MAP = {'07': ProgrammingError, '08': OperationalError,
              '21': ProgrammingError, '22': DataError, '23': IntegrityError,
              '24': ProgrammingError, '25': OperationalError, '28': OperationalError,
              '34': ProgrammingError, '3C': ProgrammingError, '3D': ProgrammingError,
              '3F': ProgrammingError, '40': OperationalError, '42': ProgrammingError,
              '44': IntegrityError, 'HY': ProgrammingError, 'IM': OperationalError,
              }

def _decode(value: bytes) -> str:
    return value.decode(*driver_config.text_codec)

def get_diagnostic_records(handle_type: HandleType, handle: Any, *,
                           api: a.ODBCAPI=None) -> List[DiagnosticRecord]:
    """Returns all diagnostic records currently posted against handle, in order.

    Arguments:
        handle_type: Kind of handle.
        handle: Native handle value.
        api: ODBC call surface. Default is the loaded ODBC library.

    Raises:
        InvalidHandleError: When the driver manager reports invalid handle.
        InterfaceError: When records could not be retrieved at all.
    """
    if api is None:
        api = a.get_api()
    result = []
    rec_number = 1
    msg_size = driver_config.diag_message_size.value
    while True:
        sqlstate = create_string_buffer(a.SQL_SQLSTATE_SIZE + 1)
        native_error = a.SQLINTEGER(0)
        message = create_string_buffer(msg_size)
        message_len = a.SQLSMALLINT(0)
        rc = api.SQLGetDiagRec(handle_type, handle, rec_number, sqlstate, byref(native_error),
                               message, len(message), byref(message_len))
        if rc == SqlReturn.NO_DATA:
            return result
        if rc == SqlReturn.SUCCESS_WITH_INFO and message_len.value >= len(message):
            # Message truncated, read the same record again with buffer of reported size
            msg_size = message_len.value + 1
            continue
        if rc in (SqlReturn.SUCCESS, SqlReturn.SUCCESS_WITH_INFO):
            result.append(DiagnosticRecord(_decode(sqlstate.value), native_error.value,
                                           _decode(message.value)))
            rec_number += 1
            msg_size = driver_config.diag_message_size.value
        elif rc == SqlReturn.INVALID_HANDLE:
            raise InvalidHandleError("Invalid handle passed to SQLGetDiagRec")
        elif result:
            return result
        else:
            raise InterfaceError(f"SQLGetDiagRec failed with return code {rc}")

def get_errors(handle_type: HandleType, handle: Any, *, api: a.ODBCAPI=None) -> List[str]:
    """Returns SQLSTATE values of all diagnostic records posted against handle.
    """
    return [rec.sqlstate for rec in get_diagnostic_records(handle_type, handle, api=api)]

def has_sqlstate(records: List[DiagnosticRecord], sqlstate: SqlState) -> bool:
    "Returns True if any record carries specified SQLSTATE."
    return any(rec.sqlstate == sqlstate.value for rec in records)

def exception_class_for(sqlstate: Optional[str]) -> Type[DatabaseError]:
    """Returns `DatabaseError` subclass appropriate for SQLSTATE.
    """
    if not sqlstate:
        return DatabaseError
    if (cls := _STATE_MAP.get(sqlstate)) is not None:
        return cls
    return _CLASS_MAP.get(sqlstate[:2], DatabaseError)

def exception_from_diagnostics(records: List[DiagnosticRecord], operation: str) -> DatabaseError:
    """Returns exception that describes failed operation using all diagnostic records.

    The SQLSTATE and native error code of the first record determine the exception
    class and its `sqlstate` and `native_error` attributes.
    """
    if records:
        first = records[0]
        msg = '\n'.join(str(rec) for rec in records)
        cls = exception_class_for(first.sqlstate)
        return cls(f"{operation} failed:\n{msg}", sqlstate=first.sqlstate,
                   native_error=first.native_error, diagnostics=tuple(records),
                   operation=operation)
    return DatabaseError(f"{operation} failed without diagnostic records",
                         diagnostics=(), operation=operation)
