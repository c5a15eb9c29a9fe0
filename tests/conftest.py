# SPDX-FileCopyrightText: 2026-present odbc-driver contributors
#
# SPDX-License-Identifier: MIT
#
#   PROGRAM/MODULE: odbc-driver
#   FILE:           tests/conftest.py
#   DESCRIPTION:    Shared fixtures and scripted ODBC call surface
#   CREATED:        18.10.2026
#
#  Software distributed under the License is distributed AS IS,
#  WITHOUT WARRANTY OF ANY KIND, either express or implied.
#  See the License for the specific language governing rights
#  and limitations under the License.
#
#  Copyright (c) 2026 odbc-driver contributors
#  and all contributors signed below.
#
#  All Rights Reserved.
#  Contributor(s): ______________________________________.

from __future__ import annotations

import ctypes
import pytest
from firebird.base.config import ConfigProto
from odbc.driver import driver_config, ConnectionHandle, CTypesAllocator, Statement, SqlReturn

def _value(handle):
    if isinstance(handle, ctypes.c_void_p):
        return handle.value
    return handle

class FakeODBC:
    """Scripted stand-in for ODBC driver manager library.

    Every `SQL*` entry point records its arguments in `calls`. Responses scripted
    with `script()` are consumed in order, and each is either a return code or
    callable that receives call arguments and returns the code. Unscripted calls
    return SQL_SUCCESS.

    Handles are allocated and released for real, so calls against released handle
    return SQL_INVALID_HANDLE. Diagnostic records posted with `post()` are served by
    `SQLGetDiagRec` and cleared by the next call issued against the same handle.
    """
    def __init__(self):
        self.calls = []
        self.responses = {}
        self.diagnostics = {}
        self.handles = set()
        self._last_handle = 0x1000
    def __getattr__(self, name):
        if not name.startswith('SQL'):
            raise AttributeError(name)
        def entry_point(*args):
            self.calls.append((name, args))
            handle = _value(args[0])
            self.diagnostics.pop(handle, None)
            if handle not in self.handles:
                return SqlReturn.INVALID_HANDLE
            return self._respond(name, args, SqlReturn.SUCCESS)
        return entry_point
    def _respond(self, name, args, default):
        queue = self.responses.get(name)
        if queue:
            response = queue.pop(0)
            return response(*args) if callable(response) else response
        return default
    @staticmethod
    def deref(ptr):
        "Returns ctypes object passed by reference."
        return getattr(ptr, '_obj', ptr)
    @staticmethod
    def write(buffer, data: bytes) -> None:
        "Copies data into ctypes buffer."
        ctypes.memmove(buffer, data, len(data))
    def new_handle(self) -> int:
        self._last_handle += 0x10
        self.handles.add(self._last_handle)
        return self._last_handle
    def script(self, name: str, *responses) -> None:
        self.responses.setdefault(name, []).extend(responses)
    def post(self, handle, sqlstate: str, native_error: int=0, message: str='') -> None:
        self.diagnostics.setdefault(_value(handle), []).append((sqlstate, native_error, message))
    def called(self, name: str) -> list:
        "Returns arguments of all recorded calls of entry point."
        return [args for call, args in self.calls if call == name]
    # Built-in entry points
    def SQLAllocHandle(self, handle_type, parent, output):
        self.calls.append(('SQLAllocHandle', (handle_type, parent, output)))
        if _value(parent) not in self.handles:
            return SqlReturn.INVALID_HANDLE
        if self.responses.get('SQLAllocHandle'):
            return self._respond('SQLAllocHandle', (handle_type, parent, output), None)
        self.deref(output).value = self.new_handle()
        return SqlReturn.SUCCESS
    def SQLFreeHandle(self, handle_type, handle):
        self.calls.append(('SQLFreeHandle', (handle_type, handle)))
        handle = _value(handle)
        if handle not in self.handles:
            return SqlReturn.INVALID_HANDLE
        if self.responses.get('SQLFreeHandle'):
            return self._respond('SQLFreeHandle', (handle_type, handle), None)
        self.handles.remove(handle)
        self.diagnostics.pop(handle, None)
        return SqlReturn.SUCCESS
    def SQLGetDiagRec(self, handle_type, handle, rec_number, sqlstate, native_error, message,
                      buffer_len, text_len):
        self.calls.append(('SQLGetDiagRec', (handle_type, handle, rec_number)))
        if self.responses.get('SQLGetDiagRec'):
            return self._respond('SQLGetDiagRec', (handle_type, handle, rec_number), None)
        records = self.diagnostics.get(_value(handle), [])
        if rec_number > len(records):
            return SqlReturn.NO_DATA
        state, native, text = records[rec_number - 1]
        self.write(sqlstate, state.encode())
        self.deref(native_error).value = native
        data = text.encode()
        self.deref(text_len).value = len(data)
        if len(data) >= buffer_len:
            self.write(message, data[:buffer_len - 1])
            return SqlReturn.SUCCESS_WITH_INFO
        self.write(message, data)
        return SqlReturn.SUCCESS

class TrackingAllocator(CTypesAllocator):
    "Allocator that keeps track of buffers that were not released."
    def __init__(self):
        super().__init__()
        self.sizes = []
        self.live = []
    def create(self, size: int):
        buffer = super().create(size)
        self.sizes.append(size)
        self.live.append(buffer)
        return buffer
    def release(self, buffer) -> None:
        assert any(item is buffer for item in self.live), "Buffer released twice"
        self.live = [item for item in self.live if item is not buffer]
        super().release(buffer)

@pytest.fixture()
def driver_cfg(tmp_path_factory):
    proto = ConfigProto()
    driver_config.save_proto(proto)
    yield driver_config
    driver_config.load_proto(proto)

@pytest.fixture
def api():
    return FakeODBC()

@pytest.fixture
def connection(api):
    return ConnectionHandle(api.new_handle(), api=api)

@pytest.fixture
def allocator():
    return TrackingAllocator()

@pytest.fixture
def statement(api, connection, allocator, driver_cfg):
    stmt = Statement(connection, api=api, allocator=allocator)
    yield stmt
    if not stmt.is_freed():
        if _value(stmt.handle) in api.handles:
            stmt.free()
        else:
            stmt._handle = None
