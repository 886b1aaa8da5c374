"""Anchor labels.

An anchor marks a node so that aliases elsewhere in the same document can
refer back to it. Labels may not be empty and may not contain the flow
indicators ``[ ] { } ,``.
"""

import re

from yamlrep.error import InvalidAnchorError


# https://yaml.org/spec/1.2.2/#rule-ns-anchor-char
_ANCHOR_REGEXP = re.compile(r'^[^\[\]{},]+$')


class Anchor:
    """A validated anchor label, or the empty anchor.

    Anchor.EMPTY stands for "no anchor". It compares equal only to itself
    and its value cannot be read.
    """

    __slots__ = ('_value',)

    EMPTY = None  # set below

    def __init__(self, value):
        if value is None:
            raise TypeError("anchor value must be a string, not None")
        if not isinstance(value, str):
            raise TypeError("anchor value must be a string, not %s"
                            % type(value).__name__)
        if not _ANCHOR_REGEXP.fullmatch(value):
            raise InvalidAnchorError(
                "anchor cannot be empty or contain disallowed characters: "
                "[]{}, (got %r)" % value)
        object.__setattr__(self, '_value', value)

    @classmethod
    def _empty(cls):
        anchor = object.__new__(cls)
        object.__setattr__(anchor, '_value', None)
        return anchor

    @classmethod
    def coerce(cls, value):
        """Return an Anchor for value: None, a label, or an Anchor."""
        if value is None:
            return cls.EMPTY
        if isinstance(value, Anchor):
            return value
        return cls(value)

    @property
    def is_empty(self):
        return self._value is None

    @property
    def value(self):
        if self._value is None:
            raise InvalidAnchorError("cannot read the value of an empty anchor")
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError("Anchor is immutable")

    def __eq__(self, other):
        if not isinstance(other, Anchor):
            return NotImplemented
        return self._value == other._value

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((Anchor, self._value))

    def __bool__(self):
        return self._value is not None

    def __str__(self):
        return self._value if self._value is not None else '[empty]'

    def __repr__(self):
        if self._value is None:
            return 'Anchor.EMPTY'
        return 'Anchor(%r)' % self._value

    def __reduce__(self):
        if self._value is None:
            return (Anchor.coerce, (None,))
        return (Anchor, (self._value,))


Anchor.EMPTY = Anchor._empty()
