# coding:utf-8
#
# PROGRAM/MODULE: odbc-driver
# FILE:           odbc/driver/__init__.py
# DESCRIPTION:    ODBC statement driver for Python 3
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

"""odbc-driver - ODBC statement driver for Python 3

Typed wrapper around ODBC statement handles: status decoding, diagnostic records,
data retrieval in chunks and statement attributes.
"""

from .hooks import APIHook, StatementHook
from .config import DriverConfig, driver_config
from .odbcapi import load_api, get_api
from .core import Statement, ConnectionHandle, CTypesAllocator, decode_return
from .attributes import StatementAttribute, ColumnAttribute, AttributeShape, AttributeValue, \
     CursorType, Concurrency, CursorSensitivity, SimulateCursor, UseBookmarks, \
     ParamOperation, ParamStatus, RowOperation, RowStatus
from .types import Error, InterfaceError, InvalidHandleError, UnknownReturnCodeError, \
     StillExecuting, DatabaseError, DataError, OperationalError, IntegrityError, \
     InternalError, ProgrammingError, NotSupportedError, \
     SqlReturn, HandleType, SqlState, SqlType, CType, Nullable, Searchable, Updatable, \
     InputOutputType, FetchOrientation, BulkOperation, CursorOperation, LockType, \
     ColumnIdentifierType, RowIdScope, Reserved, \
     DiagnosticRecord, ColumnDescriptor, ParameterDescriptor

#: Current driver version, SEMVER string.
__VERSION__ = '0.1.0'
