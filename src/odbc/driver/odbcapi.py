# coding:utf-8
#
# PROGRAM/MODULE: odbc-driver
# FILE:           odbc/driver/odbcapi.py
# DESCRIPTION:    ODBC call surface
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

"""odbc-driver - ODBC call surface

Bindings to the ODBC driver manager library made with :mod:`ctypes`. Only the narrow
character (ANSI) entry points used by the statement wrapper are bound.
"""

from __future__ import annotations
from typing import Union
import sys
import ctypes
from ctypes import c_short, c_ushort, c_int, c_uint, c_ssize_t, c_size_t, c_char_p, \
     c_void_p, POINTER, Structure
from ctypes.util import find_library
from pathlib import Path
from contextlib import suppress
from .config import driver_config
from .hooks import APIHook, register_class, get_callbacks

# Types

SQLRETURN = c_short
SQLSMALLINT = c_short
SQLUSMALLINT = c_ushort
SQLINTEGER = c_int
SQLUINTEGER = c_uint
SQLLEN = c_ssize_t
SQLULEN = c_size_t
SQLSETPOSIROW = c_size_t
SQLPOINTER = c_void_p
SQLHANDLE = c_void_p
SQLHDBC = SQLHANDLE
SQLHSTMT = SQLHANDLE
SQLCHAR_P = c_char_p

SQLSMALLINT_PTR = POINTER(SQLSMALLINT)
SQLINTEGER_PTR = POINTER(SQLINTEGER)
SQLLEN_PTR = POINTER(SQLLEN)
SQLULEN_PTR = POINTER(SQLULEN)
SQLHANDLE_PTR = POINTER(SQLHANDLE)

class DATE_STRUCT(Structure):
    "SQL_DATE_STRUCT"
    _fields_ = [('year', SQLSMALLINT), ('month', SQLUSMALLINT), ('day', SQLUSMALLINT)]

class TIME_STRUCT(Structure):
    "SQL_TIME_STRUCT"
    _fields_ = [('hour', SQLUSMALLINT), ('minute', SQLUSMALLINT), ('second', SQLUSMALLINT)]

class TIMESTAMP_STRUCT(Structure):
    "SQL_TIMESTAMP_STRUCT"
    _fields_ = [('year', SQLSMALLINT), ('month', SQLUSMALLINT), ('day', SQLUSMALLINT),
                ('hour', SQLUSMALLINT), ('minute', SQLUSMALLINT), ('second', SQLUSMALLINT),
                ('fraction', SQLUINTEGER)]

# Constants

SQL_NULL_HANDLE = None

SQL_TRUE = 1
SQL_FALSE = 0

SQL_NAMED = 0
SQL_UNNAMED = 1

# Length/indicator values
SQL_NULL_DATA = -1
SQL_DATA_AT_EXEC = -2
SQL_NTS = -3
SQL_NO_TOTAL = -4

SQL_IS_POINTER = -4
SQL_IS_UINTEGER = -5
SQL_IS_INTEGER = -6

SQL_MAX_MESSAGE_LENGTH = 512
SQL_SQLSTATE_SIZE = 5

# SQLStatistics unique option
SQL_INDEX_UNIQUE = 0
SQL_INDEX_ALL = 1

# Catalog search patterns for SQLTables
SQL_ALL_CATALOGS = '%'
SQL_ALL_SCHEMAS = '%'
SQL_ALL_TABLE_TYPES = '%'

# Client library

class ODBCAPI:
    """ODBC driver manager interface object. Loads the driver manager library and binds
    statement, handle and diagnostic functions. Uses :ref:`ctypes <python:module-ctypes>`
    for bindings.

    Every bound function returns raw `SQLRETURN` status code. Interpretation of status
    codes is left to the caller.

    Arguments:
        filename (`~pathlib.Path`): ODBC driver manager library to be loaded. If it's not
            provided, the driver uses :func:`~ctypes.util.find_library()` to locate the library.

    Attributes:
        client_library (`~ctypes.CDLL`): Loaded ODBC library :mod:`ctypes` handler
        client_library_name (`~pathlib.Path`): Path to loaded ODBC library
    """
    def __init__(self, filename: Path = None):
        if filename is None:
            if sys.platform == 'darwin':
                filename = find_library('iodbc') or find_library('odbc')
            elif sys.platform == 'win32':
                filename = find_library('odbc32')
            else:
                filename = find_library('odbc')
                if not filename:
                    with suppress(OSError):
                        ctypes.CDLL('libodbc.so.2')
                        filename = 'libodbc.so.2'
            if not filename:
                raise Exception("The location of ODBC driver manager library could not be determined.")
        elif not filename.exists():
            file_name = find_library(filename.name)
            if not file_name:
                raise Exception(f"ODBC driver manager library '{filename}' not found")
            filename = file_name
        self.client_library: ctypes.CDLL = None
        if sys.platform in ('win32', 'cygwin'):
            self.client_library: ctypes.CDLL = ctypes.WinDLL(str(filename))
        else:
            self.client_library: ctypes.CDLL = ctypes.CDLL(str(filename))
        #
        self.client_library_name: Path = Path(filename)
        # Handles
        self.SQLAllocHandle = self._bind('SQLAllocHandle', SQLSMALLINT, SQLHANDLE, SQLHANDLE_PTR)
        self.SQLFreeHandle = self._bind('SQLFreeHandle', SQLSMALLINT, SQLHANDLE)
        self.SQLFreeStmt = self._bind('SQLFreeStmt', SQLHSTMT, SQLUSMALLINT)
        # Diagnostics
        self.SQLGetDiagRec = self._bind('SQLGetDiagRec', SQLSMALLINT, SQLHANDLE, SQLSMALLINT,
                                        SQLCHAR_P, SQLINTEGER_PTR, SQLCHAR_P, SQLSMALLINT,
                                        SQLSMALLINT_PTR)
        # Binding
        self.SQLBindCol = self._bind('SQLBindCol', SQLHSTMT, SQLUSMALLINT, SQLSMALLINT,
                                     SQLPOINTER, SQLLEN, SQLLEN_PTR)
        self.SQLBindParameter = self._bind('SQLBindParameter', SQLHSTMT, SQLUSMALLINT,
                                           SQLSMALLINT, SQLSMALLINT, SQLSMALLINT, SQLULEN,
                                           SQLSMALLINT, SQLPOINTER, SQLLEN, SQLLEN_PTR)
        # Execution
        self.SQLPrepare = self._bind('SQLPrepare', SQLHSTMT, SQLCHAR_P, SQLINTEGER)
        self.SQLExecute = self._bind('SQLExecute', SQLHSTMT)
        self.SQLExecDirect = self._bind('SQLExecDirect', SQLHSTMT, SQLCHAR_P, SQLINTEGER)
        self.SQLParamData = self._bind('SQLParamData', SQLHSTMT, POINTER(SQLPOINTER))
        self.SQLPutData = self._bind('SQLPutData', SQLHSTMT, SQLPOINTER, SQLLEN)
        self.SQLCancel = self._bind('SQLCancel', SQLHSTMT)
        self.SQLCloseCursor = self._bind('SQLCloseCursor', SQLHSTMT)
        self.SQLBulkOperations = self._bind('SQLBulkOperations', SQLHSTMT, SQLUSMALLINT)
        self.SQLSetPos = self._bind('SQLSetPos', SQLHSTMT, SQLSETPOSIROW, SQLUSMALLINT,
                                    SQLUSMALLINT)
        # Results
        self.SQLFetch = self._bind('SQLFetch', SQLHSTMT)
        self.SQLFetchScroll = self._bind('SQLFetchScroll', SQLHSTMT, SQLSMALLINT, SQLLEN)
        self.SQLMoreResults = self._bind('SQLMoreResults', SQLHSTMT)
        self.SQLRowCount = self._bind('SQLRowCount', SQLHSTMT, SQLLEN_PTR)
        self.SQLNumParams = self._bind('SQLNumParams', SQLHSTMT, SQLSMALLINT_PTR)
        self.SQLNumResultCols = self._bind('SQLNumResultCols', SQLHSTMT, SQLSMALLINT_PTR)
        self.SQLDescribeCol = self._bind('SQLDescribeCol', SQLHSTMT, SQLUSMALLINT, SQLCHAR_P,
                                         SQLSMALLINT, SQLSMALLINT_PTR, SQLSMALLINT_PTR,
                                         SQLULEN_PTR, SQLSMALLINT_PTR, SQLSMALLINT_PTR)
        self.SQLDescribeParam = self._bind('SQLDescribeParam', SQLHSTMT, SQLUSMALLINT,
                                           SQLSMALLINT_PTR, SQLULEN_PTR, SQLSMALLINT_PTR,
                                           SQLSMALLINT_PTR)
        self.SQLColAttribute = self._bind('SQLColAttribute', SQLHSTMT, SQLUSMALLINT,
                                          SQLUSMALLINT, SQLPOINTER, SQLSMALLINT,
                                          SQLSMALLINT_PTR, SQLLEN_PTR)
        self.SQLGetData = self._bind('SQLGetData', SQLHSTMT, SQLUSMALLINT, SQLSMALLINT,
                                     SQLPOINTER, SQLLEN, SQLLEN_PTR)
        # Cursor name and attributes
        self.SQLGetCursorName = self._bind('SQLGetCursorName', SQLHSTMT, SQLCHAR_P,
                                           SQLSMALLINT, SQLSMALLINT_PTR)
        self.SQLSetCursorName = self._bind('SQLSetCursorName', SQLHSTMT, SQLCHAR_P,
                                           SQLSMALLINT)
        self.SQLGetStmtAttr = self._bind('SQLGetStmtAttr', SQLHSTMT, SQLINTEGER, SQLPOINTER,
                                         SQLINTEGER, SQLINTEGER_PTR)
        self.SQLSetStmtAttr = self._bind('SQLSetStmtAttr', SQLHSTMT, SQLINTEGER, SQLPOINTER,
                                         SQLINTEGER)
        # Catalog
        self.SQLTables = self._bind('SQLTables', SQLHSTMT, *self._names(4))
        self.SQLColumns = self._bind('SQLColumns', SQLHSTMT, *self._names(4))
        self.SQLColumnPrivileges = self._bind('SQLColumnPrivileges', SQLHSTMT, *self._names(4))
        self.SQLTablePrivileges = self._bind('SQLTablePrivileges', SQLHSTMT, *self._names(3))
        self.SQLPrimaryKeys = self._bind('SQLPrimaryKeys', SQLHSTMT, *self._names(3))
        self.SQLForeignKeys = self._bind('SQLForeignKeys', SQLHSTMT, *self._names(6))
        self.SQLProcedures = self._bind('SQLProcedures', SQLHSTMT, *self._names(3))
        self.SQLProcedureColumns = self._bind('SQLProcedureColumns', SQLHSTMT, *self._names(4))
        self.SQLSpecialColumns = self._bind('SQLSpecialColumns', SQLHSTMT, SQLUSMALLINT,
                                            *self._names(3), SQLUSMALLINT, SQLUSMALLINT)
        self.SQLStatistics = self._bind('SQLStatistics', SQLHSTMT, *self._names(3),
                                        SQLUSMALLINT, SQLUSMALLINT)
        self.SQLGetTypeInfo = self._bind('SQLGetTypeInfo', SQLHSTMT, SQLSMALLINT)
    @staticmethod
    def _names(count: int) -> list:
        return [SQLCHAR_P, SQLSMALLINT] * count
    def _bind(self, name: str, *argtypes):
        func = getattr(self.client_library, name)
        func.restype = SQLRETURN
        func.argtypes = list(argtypes)
        return func

def has_api() -> bool:
    """Returns True if ODBC API is already loaded.
    """
    return api is not None

def load_api(filename: Union[None, str, Path] = None) -> None:
    """Initializes bindings to ODBC driver manager library unless they are already
    initialized. Called automatically by `get_api()`.

    Args:
        filename: Path to ODBC driver manager library.
        When it's not specified, driver does its best to locate appropriate library.

    Hooks:
        Event `.APIHook.LOADED`: Executed after api is initialized.
        Hook routine must have signature: `hook_func(api)`. Any value returned by
        hook is ignored.
    """
    if not has_api():
        if filename is None:
            filename = driver_config.odbc_library.value
        if filename and not isinstance(filename, Path):
            filename = Path(filename)
        _api = ODBCAPI(filename)
        setattr(sys.modules[__name__], 'api', _api)
        for hook in get_callbacks(APIHook.LOADED, _api):
            hook(_api)

def get_api() -> ODBCAPI:
    """Returns ODBC API. Loads the API if needed.
    """
    if not has_api():
        load_api()
    return api

api: ODBCAPI = None

register_class(ODBCAPI, set([APIHook.LOADED]))
