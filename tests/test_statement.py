# SPDX-FileCopyrightText: 2026-present odbc-driver contributors
#
# SPDX-License-Identifier: MIT
#
#   PROGRAM/MODULE: odbc-driver
#   FILE:           tests/test_statement.py
#   DESCRIPTION:    Tests for Statement lifecycle and call wrappers
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

import gc
import ctypes
import pytest
from odbc.driver import Statement, ConnectionHandle, SqlReturn, HandleType, SqlType, Nullable, \
     ParameterDescriptor, FetchOrientation, BulkOperation, CursorOperation, LockType, \
     InvalidHandleError, UnknownReturnCodeError, StillExecuting, DatabaseError, \
     ProgrammingError, OperationalError

def _set(api, ptr, value):
    api.deref(ptr).value = value
    return SqlReturn.SUCCESS

def test_open(api, connection, statement):
    assert not statement.is_freed()
    handle_type, parent, _ = api.called('SQLAllocHandle')[0]
    assert handle_type == HandleType.STMT
    assert parent == connection.handle
    assert statement.handle.value in api.handles
    assert statement.connection is connection
    assert statement.log_context is connection

def test_open_invalid_connection(api, driver_cfg):
    with pytest.raises(InvalidHandleError, match="Statement.open"):
        Statement(ConnectionHandle(0xDEAD, api=api), api=api)

def test_open_failure(api, connection, driver_cfg):
    api.post(connection.handle, 'HY001', 0, 'Memory allocation error')
    api.script('SQLAllocHandle', SqlReturn.ERROR)
    with pytest.raises(OperationalError) as cm:
        Statement(connection, api=api)
    assert cm.value.sqlstate == 'HY001'
    assert cm.value.operation == 'Statement.open'
    assert api.called('SQLGetDiagRec')[0][:2] == (HandleType.DBC, connection.handle)

def test_free(api, statement):
    handle = statement.handle.value
    statement.free()
    assert statement.is_freed()
    assert handle not in api.handles
    assert api.called('SQLFreeHandle')[0][0] == HandleType.STMT
    with pytest.raises(InvalidHandleError, match="already released"):
        statement.handle
    with pytest.raises(InvalidHandleError):
        statement.fetch()
    with pytest.raises(InvalidHandleError):
        statement.execute_direct('SELECT name FROM t')
    assert api.called('SQLFetch') == []
    # Repeated release does nothing
    statement.free()
    assert len(api.called('SQLFreeHandle')) == 1

def test_free_invalid_handle(api, statement):
    api.handles.remove(statement.handle.value)
    with pytest.raises(InvalidHandleError, match="Statement.free passed invalid handle"):
        statement.free()

def test_free_error(api, statement):
    def fail(handle_type, handle):
        api.post(handle, 'HY010', 0, 'Function sequence error')
        return SqlReturn.ERROR
    api.script('SQLFreeHandle', fail)
    with pytest.raises(ProgrammingError) as cm:
        statement.free()
    assert cm.value.sqlstate == 'HY010'
    assert not statement.is_freed()

def test_context_manager(api, connection, driver_cfg):
    with Statement(connection, api=api) as stmt:
        handle = stmt.handle.value
    assert stmt.is_freed()
    assert handle not in api.handles

def test_free_in_context_manager(api, connection, driver_cfg):
    with Statement(connection, api=api) as stmt:
        stmt.free()
    assert stmt.is_freed()
    assert len(api.called('SQLFreeHandle')) == 1
    with pytest.raises(InvalidHandleError):
        stmt.get_cursor_name()

def test_disposed_without_free(api, connection, driver_cfg):
    stmt = Statement(connection, api=api)
    handle = stmt.handle.value
    with pytest.warns(ResourceWarning, match="disposed without prior free"):
        del stmt
        gc.collect()
    assert handle not in api.handles

def test_str(statement):
    assert str(statement) == f'Statement[{statement.handle.value}]'

def test_select_and_fetch(api, connection, driver_cfg):
    api.script('SQLFetch', SqlReturn.SUCCESS, SqlReturn.SUCCESS_WITH_INFO, SqlReturn.NO_DATA)
    stmt = Statement(connection, api=api)
    assert stmt.execute_direct('SELECT name FROM t') is False
    _, text, length = api.called('SQLExecDirect')[0]
    assert (text, length) == (b'SELECT name FROM t', 18)
    rows = 0
    while stmt.fetch():
        rows += 1
    assert rows == 2
    stmt.free()
    assert stmt.is_freed()

def test_execute_syntax_error(api, statement):
    def fail(handle, text, length):
        api.post(handle, '42000', 102, "Incorrect syntax near 'SELEKT'.")
        api.post(handle, '42000', 8180, 'Statement(s) could not be prepared.')
        return SqlReturn.ERROR
    api.script('SQLExecDirect', fail)
    with pytest.raises(ProgrammingError) as cm:
        statement.execute_direct('SELEKT name FROM t')
    error = cm.value
    assert error.sqlstate == '42000'
    assert error.native_error == 102
    assert len(error.diagnostics) == 2
    assert error.diagnostics[1].native_error == 8180
    assert error.operation == 'Statement.execute_direct'

def test_error_without_diagnostics(api, statement):
    api.script('SQLExecute', SqlReturn.ERROR)
    with pytest.raises(DatabaseError, match="Statement.execute failed without diagnostic"):
        statement.execute()

def test_invalid_handle_on_call(api, statement):
    api.handles.remove(statement.handle.value)
    with pytest.raises(InvalidHandleError, match="Statement.fetch passed invalid handle"):
        statement.fetch()

def test_still_executing(api, statement):
    api.script('SQLExecute', SqlReturn.STILL_EXECUTING)
    with pytest.raises(StillExecuting) as cm:
        statement.execute()
    assert cm.value.operation == 'Statement.execute'
    assert not isinstance(cm.value, DatabaseError)
    assert api.called('SQLGetDiagRec') == []
    # Caller re-issues the same operation
    assert statement.execute() is False

def test_unknown_return_code(api, statement):
    api.script('SQLFetch', 42)
    with pytest.raises(UnknownReturnCodeError):
        statement.fetch()

def test_prepare_and_execute(api, statement):
    api.script('SQLExecute', SqlReturn.NEED_DATA, SqlReturn.NO_DATA, SqlReturn.SUCCESS_WITH_INFO)
    statement.prepare('UPDATE t SET name = ? WHERE id = 1')
    assert api.called('SQLPrepare')[0][1:] == (b'UPDATE t SET name = ? WHERE id = 1', 34)
    assert statement.execute() is True
    # Searched UPDATE that affected no rows
    assert statement.execute() is False
    assert statement.execute() is False

def test_data_at_execution(api, statement):
    def need_data(handle, token):
        api.deref(token).value = 2
        return SqlReturn.NEED_DATA
    api.script('SQLExecDirect', SqlReturn.NEED_DATA)
    api.script('SQLParamData', need_data, SqlReturn.SUCCESS)
    assert statement.execute_direct('INSERT INTO t (doc) VALUES (?)') is True
    assert statement.param_data() == 2
    statement.put_data(b'chunk-1')
    statement.put_data('chunk-2')
    statement.put_data(None)
    assert statement.param_data() is None
    puts = api.called('SQLPutData')
    assert [args[1:] for args in puts] == [(b'chunk-1', 7), (b'chunk-2', 7), (None, -1)]

def test_put_data_ctypes(api, statement):
    value = ctypes.c_int(7)
    statement.put_data(value)
    _, ptr, size = api.called('SQLPutData')[0]
    assert size == ctypes.sizeof(ctypes.c_int)
    assert api.deref(ptr) is value
    statement.put_data(b'abcdef', 3)
    assert api.called('SQLPutData')[1][1:] == (b'abcdef', 3)
    with pytest.raises(TypeError):
        statement.put_data(3.5)

def test_counts(api, statement):
    api.script('SQLRowCount', lambda handle, count: _set(api, count, 25))
    api.script('SQLNumParams', lambda handle, count: _set(api, count, 3))
    api.script('SQLNumResultCols', lambda handle, count: _set(api, count, 7))
    assert statement.row_count() == 25
    assert statement.num_params() == 3
    assert statement.num_result_columns() == 7

def test_more_results(api, statement):
    api.script('SQLMoreResults', SqlReturn.SUCCESS, SqlReturn.NO_DATA)
    assert statement.more_results() is True
    assert statement.more_results() is False

def test_fetch_scroll(api, statement):
    api.script('SQLFetchScroll', SqlReturn.SUCCESS, SqlReturn.NO_DATA)
    assert statement.fetch_scroll(FetchOrientation.ABSOLUTE, 10) is True
    assert statement.fetch_scroll(FetchOrientation.NEXT) is False
    calls = api.called('SQLFetchScroll')
    assert calls[0][1:] == (FetchOrientation.ABSOLUTE, 10)
    assert calls[1][1:] == (FetchOrientation.NEXT, 0)

def test_simple_calls(api, statement):
    statement.cancel()
    statement.close_cursor()
    statement.bulk_operations(BulkOperation.ADD)
    statement.set_pos(1, CursorOperation.REFRESH, LockType.NO_CHANGE)
    statement.set_pos(0, CursorOperation.DELETE, LockType.NO_CHANGE)
    names = [name for name, _ in api.calls]
    assert names[-5:] == ['SQLCancel', 'SQLCloseCursor', 'SQLBulkOperations', 'SQLSetPos',
                          'SQLSetPos']
    assert api.called('SQLBulkOperations')[0][1] == BulkOperation.ADD
    assert api.called('SQLSetPos')[0][1:] == (1, CursorOperation.REFRESH, LockType.NO_CHANGE)
    with pytest.raises(ValueError):
        statement.set_pos(-1, CursorOperation.POSITION, LockType.NO_CHANGE)

def test_cancel_error(api, statement):
    def fail(handle):
        api.post(handle, 'HY008', 0, 'Operation canceled')
        return SqlReturn.ERROR
    api.script('SQLCancel', fail)
    with pytest.raises(OperationalError):
        statement.cancel()

def test_describe_parameter(api, statement):
    def describe(handle, number, data_type, size, digits, nullable):
        api.deref(data_type).value = SqlType.DECIMAL
        api.deref(size).value = 18
        api.deref(digits).value = 4
        api.deref(nullable).value = Nullable.NULLABLE
        return SqlReturn.SUCCESS
    api.script('SQLDescribeParam', describe)
    desc = statement.describe_parameter(1)
    assert desc == ParameterDescriptor(SqlType.DECIMAL, 18, 4, Nullable.NULLABLE)
    assert api.called('SQLDescribeParam')[0][1] == 1
    with pytest.raises(ValueError):
        statement.describe_parameter(0)
    with pytest.raises(TypeError):
        statement.describe_parameter('1')

def test_describe_parameter_error(api, statement):
    def fail(handle, *args):
        api.post(handle, '07009', 0, 'Invalid descriptor index')
        return SqlReturn.ERROR
    api.script('SQLDescribeParam', fail)
    with pytest.raises(ProgrammingError) as cm:
        statement.describe_parameter(5)
    assert cm.value.sqlstate == '07009'

def test_last_error(api, statement):
    def fail(handle):
        api.post(handle, '24000', 0, 'Invalid cursor state')
        return SqlReturn.ERROR
    api.script('SQLFetch', fail)
    with pytest.raises(ProgrammingError):
        statement.fetch()
    # Records stay posted until the next call issued against the handle
    assert statement.get_errors() == ['24000']
    error = statement.get_last_error()
    assert isinstance(error, ProgrammingError)
    assert error.sqlstate == '24000'
    assert statement.get_diagnostic_records()[0].message == 'Invalid cursor state'
