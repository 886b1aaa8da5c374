"""Tag names.

A TagName is an opaque, namespaced identifier for the semantic type of a
node. Built-in tags use the ``tag:yaml.org,2002:<name>`` form.
"""

YAML_TAG_PREFIX = 'tag:yaml.org,2002:'


class TagName:
    """Immutable tag identifier with structural equality."""

    __slots__ = ('_value',)

    def __init__(self, value):
        if isinstance(value, TagName):
            value = value._value
        if not isinstance(value, str):
            raise TypeError("tag must be a string, not %s" % type(value).__name__)
        if not value:
            raise ValueError("tag cannot be empty")
        object.__setattr__(self, '_value', value)

    @classmethod
    def expand(cls, tag):
        """Expand the '!!' secondary handle into the yaml.org namespace.

        Args:
            tag: A tag string such as '!!int' or a full tag URI

        Returns:
            TagName for the expanded tag
        """
        if isinstance(tag, str) and tag.startswith('!!'):
            return cls(YAML_TAG_PREFIX + tag[2:])
        return cls(tag)

    @property
    def value(self):
        return self._value

    @property
    def is_non_specific(self):
        return self._value == '!'

    def __setattr__(self, name, value):
        raise AttributeError("TagName is immutable")

    def __eq__(self, other):
        if isinstance(other, TagName):
            return self._value == other._value
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((TagName, self._value))

    def __str__(self):
        return self._value

    def __repr__(self):
        if self._value.startswith(YAML_TAG_PREFIX):
            return 'TagName(!!%s)' % self._value[len(YAML_TAG_PREFIX):]
        return 'TagName(%r)' % self._value

    def __reduce__(self):
        return (TagName, (self._value,))


NON_SPECIFIC = TagName('!')

STR = TagName(YAML_TAG_PREFIX + 'str')
SEQ = TagName(YAML_TAG_PREFIX + 'seq')
MAP = TagName(YAML_TAG_PREFIX + 'map')
NULL = TagName(YAML_TAG_PREFIX + 'null')
BOOL = TagName(YAML_TAG_PREFIX + 'bool')
INT = TagName(YAML_TAG_PREFIX + 'int')
FLOAT = TagName(YAML_TAG_PREFIX + 'float')


def as_tag(tag):
    """Return tag as a TagName, or None when tag is None."""
    if tag is None or isinstance(tag, TagName):
        return tag
    return TagName(tag)
