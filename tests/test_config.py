# SPDX-FileCopyrightText: 2026-present odbc-driver contributors
#
# SPDX-License-Identifier: MIT
#
#   PROGRAM/MODULE: odbc-driver
#   FILE:           tests/test_config.py
#   DESCRIPTION:    Tests for driver configuration
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

import io
import pytest
from odbc.driver import driver_config, SqlReturn, CType, HandleType
from odbc.driver.diagnostics import get_diagnostic_records

def test_defaults(driver_cfg):
    assert driver_cfg.odbc_library.value is None
    assert driver_cfg.encoding.value == 'utf-8'
    assert driver_cfg.encoding_errors.value == 'strict'
    assert driver_cfg.get_data_buffer_size.value == 500
    assert driver_cfg.attribute_buffer_size.value == 100
    assert driver_cfg.diag_message_size.value == 512
    assert driver_cfg.text_codec == ('utf-8', 'strict')

def test_read_string(driver_cfg):
    driver_cfg.read_string("""
[odbc.driver]
odbc_library = /usr/lib/libodbc.so.2
encoding = cp1250
get_data_buffer_size = 4096
""")
    assert driver_cfg.odbc_library.value == '/usr/lib/libodbc.so.2'
    assert driver_cfg.encoding.value == 'cp1250'
    assert driver_cfg.get_data_buffer_size.value == 4096
    assert driver_cfg.attribute_buffer_size.value == 100

def test_read_dict(driver_cfg):
    driver_cfg.read_dict({'odbc.driver': {'encoding_errors': 'replace',
                                          'diag_message_size': '1024'}})
    assert driver_cfg.encoding_errors.value == 'replace'
    assert driver_cfg.diag_message_size.value == 1024

def test_read_file(driver_cfg):
    driver_cfg.read_file(io.StringIO("[odbc.driver]\nattribute_buffer_size = 256\n"))
    assert driver_cfg.attribute_buffer_size.value == 256

def test_read(driver_cfg, tmp_path):
    path = tmp_path / 'odbc-driver.conf'
    path.write_text("[odbc.driver]\nencoding = latin-1\n")
    assert driver_cfg.read([str(path), str(tmp_path / 'missing.conf')]) == [str(path)]
    assert driver_cfg.encoding.value == 'latin-1'
    assert driver_cfg.read(str(tmp_path / 'missing.conf')) == []

def test_restored_by_fixture():
    assert driver_config.encoding.value == 'utf-8'

def test_encoding_used_for_text(api, statement, driver_cfg):
    driver_cfg.encoding.value = 'latin-1'
    statement.prepare('SELECT * FROM t WHERE name = \'Müller\'')
    text, length = api.called('SQLPrepare')[0][1:]
    assert text == 'SELECT * FROM t WHERE name = \'Müller\''.encode('latin-1')
    assert length == len(text)

def test_encoding_used_for_diagnostics(api, driver_cfg):
    driver_cfg.encoding.value = 'latin-1'
    driver_cfg.encoding_errors.value = 'replace'
    handle = api.new_handle()
    api.post(handle, 'HY000', 0, 'Ungültig')
    # Fake driver posts UTF-8, decoded as Latin-1
    assert get_diagnostic_records(HandleType.STMT, handle, api=api)[0].message == 'UngÃ¼ltig'

def test_encoding_errors(api, statement, driver_cfg):
    driver_cfg.encoding.value = 'ascii'
    with pytest.raises(UnicodeEncodeError):
        statement.prepare('SELECT \'Müller\'')
    assert api.called('SQLPrepare') == []
