"""Schemas: implicit tag resolution for untagged nodes.

A schema holds, for scalars, an ordered list of (tag, regexp) rules tried
top to bottom, first match wins, and a default tag per node shape. Only
plain scalars are matched against content; quoted and block scalars are
strings. Sequence and mapping starts always get the shape default.

Three schemas are built in, following YAML 1.2 chapter 10:

- FailsafeSchema: every scalar is a string.
- JsonSchema: only exact JSON literals; any other plain scalar is an error.
- CoreSchema: JSON plus the usual case variants, ~, empty nulls, 0o/0x
  integers and .inf/.nan floats; anything else is a string.
"""

import re

from yamlrep.error import YAMLSyntaxError
from yamlrep.events import ScalarEvent, SequenceStartEvent, MappingStartEvent
from yamlrep.mappers import (
    StringMapper, SequenceMapper, MappingMapper,
    NullMapper, BoolMapper, IntMapper, FloatMapper,
)
from yamlrep.registry import TagRegistry
from yamlrep.tags import STR, SEQ, MAP, NULL, BOOL, INT, FLOAT, as_tag


class Schema:
    """Ordered implicit resolution rules plus default tags.

    Args:
        scalar_rules: Iterable of (tag, regexp) pairs; regexp may be a
            string or a compiled pattern
        strict: When True, a plain scalar matching no rule raises
            YAMLSyntaxError instead of getting the default scalar tag
        name: Display name of the schema
    """

    DEFAULT_SCALAR_TAG = STR
    DEFAULT_SEQUENCE_TAG = SEQ
    DEFAULT_MAPPING_TAG = MAP

    name = 'custom'

    def __init__(self, scalar_rules=(), strict=False, name=None):
        rules = []
        for tag, regexp in scalar_rules:
            if isinstance(regexp, str):
                regexp = re.compile(regexp)
            rules.append((as_tag(tag), regexp))
        self._scalar_rules = tuple(rules)
        self._strict = strict
        if name is not None:
            self.name = name

    @property
    def scalar_rules(self):
        return self._scalar_rules

    @property
    def strict(self):
        return self._strict

    def resolve_scalar(self, value, style=None, start_mark=None, end_mark=None):
        """Return the tag for an untagged scalar.

        Args:
            value: Scalar source text
            style: None for plain scalars, else the quoting/block style
            start_mark: Mark used when reporting a syntax error

        Raises:
            YAMLSyntaxError: in a strict schema, for a plain scalar that
                matches no rule
        """
        if style:
            return self.DEFAULT_SCALAR_TAG
        for tag, regexp in self._scalar_rules:
            if regexp.fullmatch(value):
                return tag
        if self._strict:
            raise YAMLSyntaxError(
                "while resolving a plain scalar with the %s schema" % self.name,
                start_mark,
                "found %r, which is not a valid literal; "
                "strings must be quoted" % value,
                start_mark)
        return self.DEFAULT_SCALAR_TAG

    def resolve_sequence(self):
        return self.DEFAULT_SEQUENCE_TAG

    def resolve_mapping(self):
        return self.DEFAULT_MAPPING_TAG

    def apply(self, event):
        """Return event with its implicit tag resolved.

        Tagged events and events that are not node starts are returned
        unchanged. The non-specific tag '!' on a scalar means string.
        """
        if isinstance(event, ScalarEvent):
            if event.tag is None:
                return event.with_tag(self.resolve_scalar(
                    event.value, event.style, event.start_mark, event.end_mark))
            if event.tag.is_non_specific:
                return event.with_tag(self.DEFAULT_SCALAR_TAG)
        elif isinstance(event, SequenceStartEvent):
            if event.tag is None or event.tag.is_non_specific:
                return event.with_tag(self.resolve_sequence())
        elif isinstance(event, MappingStartEvent):
            if event.tag is None or event.tag.is_non_specific:
                return event.with_tag(self.resolve_mapping())
        return event

    def create_registry(self):
        """Return a new TagRegistry holding this schema's mappers."""
        return TagRegistry([
            (StringMapper.DEFAULT, (str,)),
            (SequenceMapper.default(), (list, tuple)),
            (MappingMapper(MAP), (dict,)),
        ])

    def __repr__(self):
        return '%s()' % self.__class__.__name__


class FailsafeSchema(Schema):
    """Every scalar resolves to tag:yaml.org,2002:str."""

    name = 'failsafe'

    def __init__(self):
        super().__init__()


# YAML 1.2 section 10.2.1.2 to 10.2.1.4
_JSON_RULES = (
    (NULL, r'^null$'),
    (BOOL, r'^(?:true|false)$'),
    (INT, r'^-?(?:0|[1-9][0-9]*)$'),
    (FLOAT, r'^-?(?:0|[1-9][0-9]*)(?:\.[0-9]*)?(?:[eE][-+]?[0-9]+)?$'),
)

_JSON_INT_REGEXP = re.compile(_JSON_RULES[2][1])
_JSON_FLOAT_REGEXP = re.compile(_JSON_RULES[3][1])


def _parse_json_null(text):
    if text != 'null':
        raise ValueError("not a JSON null")
    return None


def _parse_json_bool(text):
    if text == 'true':
        return True
    if text == 'false':
        return False
    raise ValueError("not a JSON boolean")


def _parse_json_int(text):
    if not _JSON_INT_REGEXP.fullmatch(text):
        raise ValueError("not a JSON integer")
    return int(text)


def _parse_json_float(text):
    if not _JSON_FLOAT_REGEXP.fullmatch(text):
        raise ValueError("not a JSON number")
    return float(text)


class JsonSchema(Schema):
    """Case-sensitive JSON literals only; other plain scalars are errors."""

    name = 'json'

    def __init__(self):
        super().__init__(_JSON_RULES, strict=True)

    def create_registry(self):
        registry = super().create_registry()
        registry.add(NullMapper(NULL, _parse_json_null), (type(None),))
        registry.add(BoolMapper(BOOL, _parse_json_bool), (bool,))
        registry.add(IntMapper(INT, _parse_json_int), (int,))
        registry.add(FloatMapper(FLOAT, _parse_json_float), (float,))
        return registry


# YAML 1.2 section 10.3.2
_CORE_RULES = (
    (NULL, r'^(?:~|null|Null|NULL|)$'),
    (BOOL, r'^(?:true|True|TRUE|false|False|FALSE)$'),
    (INT, r'^[-+]?[0-9]+$'),
    (INT, r'^[-+]?0o[0-7]+$'),
    (INT, r'^[-+]?0x[0-9a-fA-F]+$'),
    (FLOAT, r'^[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?$'),
    (FLOAT, r'^[-+]?\.(?:inf|Inf|INF)$'),
    (FLOAT, r'^\.(?:nan|NaN|NAN)$'),
)


class CoreSchema(Schema):
    """YAML 1.2 Core schema; unmatched plain scalars are strings."""

    name = 'core'

    def __init__(self):
        super().__init__(_CORE_RULES)

    def create_registry(self):
        registry = super().create_registry()
        registry.add(NullMapper(NULL), (type(None),))
        registry.add(BoolMapper(BOOL), (bool,))
        registry.add(IntMapper(INT), (int,))
        registry.add(FloatMapper(FLOAT), (float,))
        return registry


_SCHEMAS = {
    'failsafe': FailsafeSchema,
    'json': JsonSchema,
    'core': CoreSchema,
}


def get_schema(schema=None):
    """Return a schema instance.

    Args:
        schema: A Schema (returned as is), a name ('failsafe', 'json',
            'core', case-insensitive), or None for the Core schema

    Raises:
        ValueError: for an unknown schema name
    """
    if schema is None:
        return CoreSchema()
    if isinstance(schema, Schema):
        return schema
    try:
        return _SCHEMAS[schema.lower()]()
    except (KeyError, AttributeError):
        raise ValueError("unknown schema: %r (expected one of %s)"
                         % (schema, ', '.join(sorted(_SCHEMAS)))) from None
