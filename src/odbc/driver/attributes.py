# coding:utf-8
#
# PROGRAM/MODULE: odbc-driver
# FILE:           odbc/driver/attributes.py
# DESCRIPTION:    Statement and column attributes
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

"""odbc-driver - Statement and column attributes

ODBC exchanges attribute values through a single untyped buffer regardless of
the attribute's logical type. This module keeps the table that binds every attribute
identity to exactly one value shape, and the codec that converts values between
that shape and the native representation.

Adding new attribute requires only new entry in `STATEMENT_ATTRIBUTE_SPECS`
or `COLUMN_ATTRIBUTE_SPECS`.
"""

from __future__ import annotations
from typing import Any, Dict, NamedTuple, Optional, Type, Union
import ctypes
from ctypes import sizeof, addressof, c_void_p
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from .types import SqlType, Nullable, Searchable, Updatable, to_enum
from . import odbcapi as a

class StatementAttribute(IntEnum):
    """Statement attribute identities (SQLGetStmtAttr / SQLSetStmtAttr).
    """
    QUERY_TIMEOUT = 0
    MAX_ROWS = 1
    NOSCAN = 2
    MAX_LENGTH = 3
    ASYNC_ENABLE = 4
    ROW_BIND_TYPE = 5
    CURSOR_TYPE = 6
    CONCURRENCY = 7
    KEYSET_SIZE = 8
    SIMULATE_CURSOR = 10
    RETRIEVE_DATA = 11
    USE_BOOKMARKS = 12
    ROW_NUMBER = 14
    ENABLE_AUTO_IPD = 15
    FETCH_BOOKMARK_PTR = 16
    PARAM_BIND_OFFSET_PTR = 17
    PARAM_BIND_TYPE = 18
    PARAM_OPERATION_PTR = 19
    PARAM_STATUS_PTR = 20
    PARAMS_PROCESSED_PTR = 21
    PARAMSET_SIZE = 22
    ROW_BIND_OFFSET_PTR = 23
    ROW_OPERATION_PTR = 24
    ROW_STATUS_PTR = 25
    ROWS_FETCHED_PTR = 26
    ROW_ARRAY_SIZE = 27
    CURSOR_SCROLLABLE = -1
    CURSOR_SENSITIVITY = -2
    APP_ROW_DESC = 10010
    APP_PARAM_DESC = 10011
    IMP_ROW_DESC = 10012
    IMP_PARAM_DESC = 10013
    METADATA_ID = 10014

class ColumnAttribute(IntEnum):
    """Column attribute identities (SQLColAttribute field identifiers).
    """
    COUNT = 1001
    TYPE = 1002
    LENGTH = 1003
    PRECISION = 1005
    SCALE = 1006
    NULLABLE = 1008
    NAME = 1011
    UNNAMED = 1012
    OCTET_LENGTH = 1013
    CONCISE_TYPE = 2
    DISPLAY_SIZE = 6
    UNSIGNED = 8
    FIXED_PREC_SCALE = 9
    UPDATABLE = 10
    AUTO_UNIQUE_VALUE = 11
    CASE_SENSITIVE = 12
    SEARCHABLE = 13
    TYPE_NAME = 14
    TABLE_NAME = 15
    SCHEMA_NAME = 16
    CATALOG_NAME = 17
    LABEL = 18
    BASE_COLUMN_NAME = 22
    BASE_TABLE_NAME = 23
    LITERAL_PREFIX = 27
    LITERAL_SUFFIX = 28
    LOCAL_TYPE_NAME = 29
    NUM_PREC_RADIX = 32

# Enumerated attribute values

class CursorType(IntEnum):
    FORWARD_ONLY = 0
    KEYSET_DRIVEN = 1
    DYNAMIC = 2
    STATIC = 3

class Concurrency(IntEnum):
    READ_ONLY = 1
    LOCK = 2
    ROWVER = 3
    VALUES = 4

class CursorSensitivity(IntEnum):
    UNSPECIFIED = 0
    INSENSITIVE = 1
    SENSITIVE = 2

class SimulateCursor(IntEnum):
    NON_UNIQUE = 0
    TRY_UNIQUE = 1
    UNIQUE = 2

class UseBookmarks(IntEnum):
    OFF = 0
    VARIABLE = 2

class ParamOperation(IntEnum):
    "Values of array elements set by `StatementAttribute.PARAM_OPERATION_PTR`."
    PROCEED = 0
    IGNORE = 1

class ParamStatus(IntEnum):
    "Values of array elements set by `StatementAttribute.PARAM_STATUS_PTR`."
    SUCCESS = 0
    DIAG_UNAVAILABLE = 1
    ERROR = 5
    SUCCESS_WITH_INFO = 6
    UNUSED = 7

class RowOperation(IntEnum):
    "Values of array elements set by `StatementAttribute.ROW_OPERATION_PTR`."
    PROCEED = 0
    IGNORE = 1

class RowStatus(IntEnum):
    "Values of array elements set by `StatementAttribute.ROW_STATUS_PTR`."
    SUCCESS = 0
    DELETED = 1
    UPDATED = 2
    NOROW = 3
    ADDED = 4
    ERROR = 5
    SUCCESS_WITH_INFO = 6

# Shapes

class AttributeShape(Enum):
    """Logical value shapes of attributes.
    """
    #: `bool`, stored as SQL_TRUE / SQL_FALSE
    BOOLEAN = auto()
    #: `int`
    INTEGER = auto()
    #: `IntEnum` member decoded from integer
    ENUM = auto()
    #: `str`, retrieved with two-phase length query
    STRING = auto()
    #: Opaque pointer or handle, passed through unchanged
    POINTER = auto()
    #: Pointer to contiguous array of elements owned by the application
    ARRAY_POINTER = auto()

class AttributeSpec(NamedTuple):
    """Value shape of one attribute identity.
    """
    #: Value shape
    shape: AttributeShape
    #: Enumeration for `AttributeShape.ENUM`
    enum: Optional[Type[IntEnum]] = None
    #: ctypes element type for `AttributeShape.ARRAY_POINTER`
    element: Optional[Type] = None

_BOOL = AttributeSpec(AttributeShape.BOOLEAN)
_INT = AttributeSpec(AttributeShape.INTEGER)
_STR = AttributeSpec(AttributeShape.STRING)
_PTR = AttributeSpec(AttributeShape.POINTER)

def _enum(cls: Type[IntEnum]) -> AttributeSpec:
    return AttributeSpec(AttributeShape.ENUM, enum=cls)

def _array(element: Type) -> AttributeSpec:
    return AttributeSpec(AttributeShape.ARRAY_POINTER, element=element)

#: Statement attribute shapes
STATEMENT_ATTRIBUTE_SPECS: Dict[StatementAttribute, AttributeSpec] = {
    StatementAttribute.QUERY_TIMEOUT: _INT,
    StatementAttribute.MAX_ROWS: _INT,
    StatementAttribute.NOSCAN: _BOOL,
    StatementAttribute.MAX_LENGTH: _INT,
    StatementAttribute.ASYNC_ENABLE: _BOOL,
    StatementAttribute.ROW_BIND_TYPE: _INT,
    StatementAttribute.CURSOR_TYPE: _enum(CursorType),
    StatementAttribute.CONCURRENCY: _enum(Concurrency),
    StatementAttribute.KEYSET_SIZE: _INT,
    StatementAttribute.SIMULATE_CURSOR: _enum(SimulateCursor),
    StatementAttribute.RETRIEVE_DATA: _BOOL,
    StatementAttribute.USE_BOOKMARKS: _enum(UseBookmarks),
    StatementAttribute.ROW_NUMBER: _INT,
    StatementAttribute.ENABLE_AUTO_IPD: _BOOL,
    StatementAttribute.FETCH_BOOKMARK_PTR: _PTR,
    StatementAttribute.PARAM_BIND_OFFSET_PTR: _array(a.SQLLEN),
    StatementAttribute.PARAM_BIND_TYPE: _INT,
    StatementAttribute.PARAM_OPERATION_PTR: _array(a.SQLUSMALLINT),
    StatementAttribute.PARAM_STATUS_PTR: _array(a.SQLUSMALLINT),
    StatementAttribute.PARAMS_PROCESSED_PTR: _array(a.SQLULEN),
    StatementAttribute.PARAMSET_SIZE: _INT,
    StatementAttribute.ROW_BIND_OFFSET_PTR: _array(a.SQLLEN),
    StatementAttribute.ROW_OPERATION_PTR: _array(a.SQLUSMALLINT),
    StatementAttribute.ROW_STATUS_PTR: _array(a.SQLUSMALLINT),
    StatementAttribute.ROWS_FETCHED_PTR: _array(a.SQLULEN),
    StatementAttribute.ROW_ARRAY_SIZE: _INT,
    StatementAttribute.CURSOR_SCROLLABLE: _BOOL,
    StatementAttribute.CURSOR_SENSITIVITY: _enum(CursorSensitivity),
    StatementAttribute.APP_ROW_DESC: _PTR,
    StatementAttribute.APP_PARAM_DESC: _PTR,
    StatementAttribute.IMP_ROW_DESC: _PTR,
    StatementAttribute.IMP_PARAM_DESC: _PTR,
    StatementAttribute.METADATA_ID: _BOOL,
}

#: Column attribute shapes. Identities share values with statement attributes, so
#: the tables must stay separate.
COLUMN_ATTRIBUTE_SPECS: Dict[ColumnAttribute, AttributeSpec] = {
    ColumnAttribute.AUTO_UNIQUE_VALUE: _BOOL,
    ColumnAttribute.BASE_COLUMN_NAME: _STR,
    ColumnAttribute.BASE_TABLE_NAME: _STR,
    ColumnAttribute.CASE_SENSITIVE: _BOOL,
    ColumnAttribute.CATALOG_NAME: _STR,
    ColumnAttribute.CONCISE_TYPE: _enum(SqlType),
    ColumnAttribute.COUNT: _INT,
    ColumnAttribute.DISPLAY_SIZE: _INT,
    ColumnAttribute.FIXED_PREC_SCALE: _BOOL,
    ColumnAttribute.LABEL: _STR,
    ColumnAttribute.LENGTH: _INT,
    ColumnAttribute.LITERAL_PREFIX: _STR,
    ColumnAttribute.LITERAL_SUFFIX: _STR,
    ColumnAttribute.LOCAL_TYPE_NAME: _STR,
    ColumnAttribute.NAME: _STR,
    ColumnAttribute.NULLABLE: _enum(Nullable),
    ColumnAttribute.NUM_PREC_RADIX: _INT,
    ColumnAttribute.OCTET_LENGTH: _INT,
    ColumnAttribute.PRECISION: _INT,
    ColumnAttribute.SCALE: _INT,
    ColumnAttribute.SCHEMA_NAME: _STR,
    ColumnAttribute.SEARCHABLE: _enum(Searchable),
    ColumnAttribute.TABLE_NAME: _STR,
    ColumnAttribute.TYPE: _enum(SqlType),
    ColumnAttribute.TYPE_NAME: _STR,
    ColumnAttribute.UNNAMED: _BOOL,  # SQL_UNNAMED equals SQL_TRUE
    ColumnAttribute.UNSIGNED: _BOOL,
    ColumnAttribute.UPDATABLE: _enum(Updatable),
}

def spec_of(attribute: Union[StatementAttribute, ColumnAttribute]) -> AttributeSpec:
    """Returns value shape of attribute identity.

    Raises:
        TypeError: When argument is not an attribute identity.
    """
    if isinstance(attribute, StatementAttribute):
        return STATEMENT_ATTRIBUTE_SPECS[attribute]
    if isinstance(attribute, ColumnAttribute):
        return COLUMN_ATTRIBUTE_SPECS[attribute]
    raise TypeError(f"Unknown attribute identity {attribute!r}")

def _check_array(attribute, spec: AttributeSpec, value: Any) -> None:
    if not isinstance(value, ctypes.Array):
        raise TypeError(f"Attribute {attribute.name} requires ctypes array of "
                        f"{spec.element.__name__}, got {type(value).__name__}")
    if value._type_ is not spec.element:
        raise TypeError(f"Attribute {attribute.name} requires array of {spec.element.__name__}, "
                        f"got array of {value._type_.__name__}")

@dataclass(frozen=True)
class AttributeValue:
    """Attribute identity together with value of the shape the identity requires.

    The value is validated against the attribute shape tables on construction.

    Arguments:
        attribute: Attribute identity.
        value: Value. For `AttributeShape.ARRAY_POINTER` identities it must be a
            ctypes array of the required element type when used to set the attribute,
            while values read from the driver hold the array address as `int`, or `None`.
            For `AttributeShape.POINTER` identities it's an `int` address or `None`.

    Raises:
        TypeError: When value does not match the shape of the attribute.
    """
    attribute: Union[StatementAttribute, ColumnAttribute]
    value: Any
    def __post_init__(self):
        spec = spec_of(self.attribute)
        value = self.value
        shape = spec.shape
        if shape is AttributeShape.BOOLEAN:
            ok = isinstance(value, bool)
        elif shape is AttributeShape.INTEGER:
            ok = isinstance(value, int) and not isinstance(value, (bool, IntEnum))
        elif shape is AttributeShape.ENUM:
            ok = isinstance(value, spec.enum) or (isinstance(value, int)
                                                   and not isinstance(value, (bool, IntEnum)))
        elif shape is AttributeShape.STRING:
            ok = isinstance(value, str)
        elif shape is AttributeShape.POINTER:
            ok = value is None or (isinstance(value, int) and not isinstance(value, bool))
        elif value is None or (isinstance(value, int) and not isinstance(value, bool)):
            ok = True
        else:
            _check_array(self.attribute, spec, value)
            ok = True
        if not ok:
            raise TypeError(f"Attribute {self.attribute.name} requires {shape.name} value, "
                            f"got {type(value).__name__}")
    def __expect(self, *shapes: AttributeShape) -> Any:
        if self.shape not in shapes:
            raise TypeError(f"Attribute {self.attribute.name} has {self.shape.name} value")
        return self.value
    @property
    def shape(self) -> AttributeShape:
        "Value shape of attribute"
        return spec_of(self.attribute).shape
    def as_bool(self) -> bool:
        "Returns value of BOOLEAN attribute."
        return self.__expect(AttributeShape.BOOLEAN)
    def as_int(self) -> int:
        "Returns value of INTEGER attribute."
        return self.__expect(AttributeShape.INTEGER)
    def as_enum(self) -> Union[IntEnum, int]:
        "Returns value of ENUM attribute."
        return self.__expect(AttributeShape.ENUM)
    def as_str(self) -> str:
        "Returns value of STRING attribute."
        return self.__expect(AttributeShape.STRING)
    def as_pointer(self) -> Any:
        "Returns value of POINTER or ARRAY_POINTER attribute."
        return self.__expect(AttributeShape.POINTER, AttributeShape.ARRAY_POINTER)

class EncodedAttribute(NamedTuple):
    """Native arguments for SQLSetStmtAttr.
    """
    #: ValuePtr argument
    value_ptr: c_void_p
    #: StringLength argument
    length: int
    #: Object that must be kept alive while the attribute is set (bound array), or None
    keep_alive: Any = None

def _word_from_int(value: int) -> int:
    # Scalars are written to a pointer-sized scratch buffer and read back as
    # unsigned machine word, the way ODBC expects them in the ValuePtr argument.
    scratch = ctypes.create_string_buffer(sizeof(c_void_p))
    a.SQLLEN.from_buffer(scratch).value = value
    return a.SQLULEN.from_buffer(scratch).value

def encode(value: AttributeValue) -> EncodedAttribute:
    """Encodes attribute value into SQLSetStmtAttr arguments.

    Array pointers and pointers are passed through unchanged, scalar values are
    reinterpreted as pointer-sized machine word. Declared length is always zero.

    Raises:
        TypeError: When attribute is not a statement attribute or has STRING shape.
    """
    if not isinstance(value.attribute, StatementAttribute):
        raise TypeError(f"{value.attribute!r} is not a statement attribute")
    spec = spec_of(value.attribute)
    v = value.value
    if spec.shape is AttributeShape.ARRAY_POINTER:
        if isinstance(v, ctypes.Array):
            return EncodedAttribute(c_void_p(addressof(v)), 0, v)
        return EncodedAttribute(c_void_p(v), 0)
    if spec.shape is AttributeShape.POINTER:
        return EncodedAttribute(c_void_p(v), 0)
    if spec.shape is AttributeShape.BOOLEAN:
        word = a.SQL_TRUE if v else a.SQL_FALSE
    elif spec.shape in (AttributeShape.INTEGER, AttributeShape.ENUM):
        word = int(v)
    else:
        raise TypeError(f"Attribute {value.attribute.name} can't be set")
    return EncodedAttribute(c_void_p(_word_from_int(word) or None), 0)

def decode_integer(attribute: Union[StatementAttribute, ColumnAttribute],
                   number: int) -> AttributeValue:
    """Returns attribute value decoded from integer reported by the driver.

    Raises:
        TypeError: When attribute has STRING shape.
    """
    spec = spec_of(attribute)
    if spec.shape is AttributeShape.BOOLEAN:
        return AttributeValue(attribute, number == a.SQL_TRUE)
    if spec.shape is AttributeShape.INTEGER:
        return AttributeValue(attribute, number)
    if spec.shape is AttributeShape.ENUM:
        return AttributeValue(attribute, to_enum(spec.enum, number))
    if spec.shape in (AttributeShape.POINTER, AttributeShape.ARRAY_POINTER):
        return AttributeValue(attribute, a.SQLULEN(number).value or None)
    raise TypeError(f"Attribute {attribute.name} has STRING value")

def decode(attribute: StatementAttribute, buffer: Any) -> AttributeValue:
    """Decodes statement attribute value from buffer filled by SQLGetStmtAttr.

    Arguments:
        attribute: Attribute identity.
        buffer: Writable buffer (ctypes array or bytearray) at least pointer-sized.
    """
    spec = spec_of(attribute)
    if spec.shape in (AttributeShape.POINTER, AttributeShape.ARRAY_POINTER):
        number = a.SQLULEN.from_buffer_copy(buffer).value
    else:
        number = a.SQLLEN.from_buffer_copy(buffer).value
    return decode_integer(attribute, number)
