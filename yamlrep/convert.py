"""Element type conversion for collection mappers.

Collection mappers declare the native type their elements must have. Each
child node is constructed through its own mapper, so the value it yields may
not be of that type; change_type() widens or narrows it where that is
lossless and fails otherwise.
"""

import enum
from collections.abc import Mapping


class NativeType(enum.Enum):
    """Closed set of element types a collection mapper can require."""

    ANY = 'any'
    STR = 'str'
    INT = 'int'
    FLOAT = 'float'
    BOOL = 'bool'
    NONE = 'none'
    LIST = 'list'
    DICT = 'dict'

    @classmethod
    def of(cls, python_type):
        """Return the member for a Python type (or a member, unchanged).

        Raises:
            TypeError: if python_type is not one of the supported types
        """
        if isinstance(python_type, NativeType):
            return python_type
        try:
            return _PYTHON_TYPES[python_type]
        except (KeyError, TypeError):
            raise TypeError("unsupported element type: %r" % (python_type,)) from None


_PYTHON_TYPES = {
    object: NativeType.ANY,
    None: NativeType.ANY,
    str: NativeType.STR,
    int: NativeType.INT,
    float: NativeType.FLOAT,
    bool: NativeType.BOOL,
    type(None): NativeType.NONE,
    list: NativeType.LIST,
    dict: NativeType.DICT,
}


def _to_str(value):
    if isinstance(value, str):
        return value
    raise TypeError("expected a string, but found %s" % type(value).__name__)


def _to_int(value):
    if isinstance(value, bool):
        raise TypeError("expected an integer, but found bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise TypeError("expected an integer, but found %r" % (value,))


def _to_float(value):
    if isinstance(value, bool):
        raise TypeError("expected a float, but found bool")
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        return float(value)
    raise TypeError("expected a float, but found %s" % type(value).__name__)


def _to_bool(value):
    if isinstance(value, bool):
        return value
    raise TypeError("expected a bool, but found %s" % type(value).__name__)


def _to_none(value):
    if value is None:
        return None
    raise TypeError("expected null, but found %s" % type(value).__name__)


def _to_list(value):
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    raise TypeError("expected a list, but found %s" % type(value).__name__)


def _to_dict(value):
    if isinstance(value, dict):
        return value
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError("expected a dict, but found %s" % type(value).__name__)


_CONVERTERS = {
    NativeType.ANY: lambda value: value,
    NativeType.STR: _to_str,
    NativeType.INT: _to_int,
    NativeType.FLOAT: _to_float,
    NativeType.BOOL: _to_bool,
    NativeType.NONE: _to_none,
    NativeType.LIST: _to_list,
    NativeType.DICT: _to_dict,
}


def change_type(value, native_type):
    """Coerce value to native_type.

    Args:
        value: A constructed native value
        native_type: NativeType (or a supported Python type)

    Returns:
        The value, widened or narrowed as needed

    Raises:
        TypeError: if the value cannot be represented as native_type
    """
    return _CONVERTERS[NativeType.of(native_type)](value)
