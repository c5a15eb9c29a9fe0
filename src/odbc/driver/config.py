# coding:utf-8
#
# PROGRAM/MODULE: odbc-driver
# FILE:           odbc/driver/config.py
# DESCRIPTION:    Driver configuration
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

"""odbc-driver - Driver configuration
"""

from __future__ import annotations
from typing import Dict, Union, Iterable
from configparser import ConfigParser, ExtendedInterpolation
from firebird.base.config import Config, StrOption, IntOption

class DriverConfig(Config):
    """ODBC driver configuration.
    """
    def __init__(self, name: str):
        super().__init__(name)
        #: Path to ODBC driver manager library
        self.odbc_library: StrOption = \
            StrOption('odbc_library', "Path to ODBC driver manager library")
        #: Encoding used for text exchanged with the driver
        self.encoding: StrOption = \
            StrOption('encoding', "Encoding used for text exchanged with the driver",
                      default='utf-8')
        #: Handler used for encoding errors. See `codecs error handlers <codecs>` for details.
        self.encoding_errors: StrOption = \
            StrOption('encoding_errors', "Handler used for encoding errors", default='strict')
        #: Size of scratch buffer used to retrieve column data in chunks
        self.get_data_buffer_size: IntOption = \
            IntOption('get_data_buffer_size',
                      "Size of scratch buffer used to retrieve column data in chunks",
                      default=500)
        #: Size of buffer used to read statement attributes
        self.attribute_buffer_size: IntOption = \
            IntOption('attribute_buffer_size', "Size of buffer used to read statement attributes",
                      default=100)
        #: Initial size of buffer for diagnostic messages
        self.diag_message_size: IntOption = \
            IntOption('diag_message_size', "Initial size of buffer for diagnostic messages",
                      default=512)
    def read(self, filenames: Union[str, Iterable], encoding: str=None):
        """Read configuration from a filename or an iterable of filenames.

        Files that cannot be opened are silently ignored; this is
        designed so that you can specify an iterable of potential
        configuration file locations (e.g. current directory, user's
        home directory, systemwide directory), and all existing
        configuration files in the iterable will be read.  A single
        filename may also be given.

        Return list of successfully read files.
        """
        parser = ConfigParser(interpolation=ExtendedInterpolation())
        read_ok = parser.read(filenames, encoding)
        if read_ok:
            self.load_config(parser)
        return read_ok
    def read_file(self, f):
        """Read configuration from a file-like object.

        The `f` argument must be iterable, returning one line at a time.
        """
        parser = ConfigParser(interpolation=ExtendedInterpolation())
        parser.read_file(f)
        self.load_config(parser)
    def read_string(self, string: str) -> None:
        """Read configuration from a given string.
        """
        parser = ConfigParser(interpolation=ExtendedInterpolation())
        parser.read_string(string)
        self.load_config(parser)
    def read_dict(self, dictionary: Dict) -> None:
        """Read configuration from a dictionary.

        Keys are section names, values are dictionaries with keys and values
        that should be present in the section.
        """
        parser = ConfigParser(interpolation=ExtendedInterpolation())
        parser.read_dict(dictionary)
        self.load_config(parser)
    @property
    def text_codec(self) -> tuple[str, str]:
        "Tuple with encoding and error handler for text exchanged with the driver."
        return (self.encoding.value, self.encoding_errors.value)

# Configuration

driver_config: DriverConfig = DriverConfig('odbc.driver')
