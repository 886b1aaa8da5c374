"""
yamlrep - YAML tag resolution and native mapping

This package sits between a YAML event parser and application data. It
resolves the tags of untagged nodes through a schema (Failsafe, JSON or
Core), builds immutable node trees bound to per-tag mappers, and converts
those trees to native Python values and back.

Example:
    >>> import yamlrep
    >>> yamlrep.load("port: 0x1F\\nhosts: [a, b]")
    {'port': 31, 'hosts': ['a', 'b']}
    >>> yamlrep.load("answer: 42", schema='failsafe')
    {'answer': '42'}
    >>> print(yamlrep.dump({'version': '1.0'}), end='')
    version: '1.0'
"""

from yamlrep.anchor import Anchor
from yamlrep.composer import Composer
from yamlrep.convert import NativeType, change_type
from yamlrep.error import (
    Mark, YAMLError, MarkedYAMLError, YAMLSyntaxError, ReaderError,
    ComposerError, ConstructorError, ShapeMismatchError, TypeConversionError,
    RepresenterError, SerializerError, InvalidAnchorError,
)
from yamlrep.factories import CollectionFactory, FixedArray, factory_for
from yamlrep.mappers import (
    NodeMapper, UndefinedMapper, StringMapper, ScalarMapper,
    NullMapper, BoolMapper, IntMapper, FloatMapper,
    SequenceMapper, MappingMapper,
)
from yamlrep.nodes import (
    Node, ScalarNode, CollectionNode, SequenceNode, MappingNode,
    NodeHandle, SequenceNodeBuilder, MappingNodeBuilder,
)
from yamlrep.parser import EventSource, EventStream, SchemaEnforcingParser
from yamlrep.reader import PyYAMLEventSource, emit
from yamlrep.registry import TagRegistry
from yamlrep.representer import SchemaIterator
from yamlrep.representer import represent as _represent
from yamlrep.schemas import Schema, FailsafeSchema, JsonSchema, CoreSchema, get_schema
from yamlrep.serializer import Serializer
from yamlrep.tags import TagName


__version__ = "0.1.0"


def _session(schema, registry):
    schema = get_schema(schema)
    if registry is None:
        registry = schema.create_registry()
    return schema, registry


def _source(stream):
    if isinstance(stream, EventSource):
        return stream
    return PyYAMLEventSource(stream)


def parse(stream, schema=None):
    """
    Parse a YAML stream and yield events with every node tag resolved.

    Args:
        stream: str, bytes, file-like object, or an EventSource
        schema: Schema instance or name ('failsafe', 'json', 'core');
            defaults to Core

    Yields:
        yamlrep events

    Raises:
        YAMLSyntaxError: for plain scalars the JSON schema rejects
        ReaderError: for malformed YAML
    """
    parser = SchemaEnforcingParser(_source(stream), get_schema(schema))
    for event in parser:
        yield event


def compose(stream, schema=None, registry=None):
    """
    Compose the single document of a stream into a node tree.

    Args:
        stream: str, bytes, file-like object, or an EventSource
        schema: Schema instance or name; defaults to Core
        registry: TagRegistry binding tags to mappers; defaults to the
            schema's own registry

    Returns:
        The root Node, or None for an empty stream
    """
    schema, registry = _session(schema, registry)
    composer = Composer(SchemaEnforcingParser(_source(stream), schema), registry)
    return composer.get_single_node()


def compose_all(stream, schema=None, registry=None):
    """Compose every document of a stream, yielding root nodes."""
    schema, registry = _session(schema, registry)
    composer = Composer(SchemaEnforcingParser(_source(stream), schema), registry)
    while composer.check_node():
        yield composer.get_node()


def construct(node):
    """Construct the native value of a node tree (None for no node)."""
    if node is None:
        return None
    return node.mapper.construct(node)


def load(stream, schema=None, registry=None):
    """
    Load the single document of a YAML stream into native values.

    Example:
        >>> yamlrep.load("[0o10, 0x3A, .inf, ~]")
        [8, 58, inf, None]
    """
    return construct(compose(stream, schema, registry))


def load_all(stream, schema=None, registry=None):
    """Load every document of a YAML stream, yielding native values."""
    for node in compose_all(stream, schema, registry):
        yield construct(node)


def represent(data, schema=None, registry=None, ignore_aliases=None):
    """
    Represent native data as a node tree.

    Args:
        data: Native value (dict, list, str, int, float, bool, None, ...)
        schema: Schema instance or name; defaults to Core
        registry: TagRegistry to pick mappers from; defaults to the
            schema's own registry
        ignore_aliases: Predicate for values never shared between nodes

    Returns:
        The root Node
    """
    schema, registry = _session(schema, registry)
    return _represent(data, registry, ignore_aliases)


def serialize(node, stream=None, schema=None, **kwargs):
    """Serialize a node tree as YAML text (returned when stream is None)."""
    serializer = Serializer(get_schema(schema),
                            explicit_start=kwargs.pop('explicit_start', None),
                            explicit_end=kwargs.pop('explicit_end', None))
    return emit(serializer.serialize_all([node]), stream, **kwargs)


def dump(data, stream=None, schema=None, registry=None, **kwargs):
    """
    Dump native data as YAML text.

    Args:
        data: Native value to dump
        stream: Optional file-like object; when None the text is returned
        schema: Schema instance or name; defaults to Core
        registry: TagRegistry to pick mappers from
        **kwargs: explicit_start, explicit_end, and PyYAML emitter options
            (canonical, indent, width, allow_unicode, line_break)

    Returns:
        The YAML text when stream is None, else None
    """
    schema, registry = _session(schema, registry)
    return serialize(_represent(data, registry), stream, schema, **kwargs)


__all__ = [
    "Anchor",
    "CollectionFactory",
    "Composer",
    "CoreSchema",
    "EventSource",
    "EventStream",
    "FailsafeSchema",
    "FixedArray",
    "JsonSchema",
    "NativeType",
    "NodeMapper",
    "PyYAMLEventSource",
    "Schema",
    "SchemaEnforcingParser",
    "SchemaIterator",
    "SequenceMapper",
    "Serializer",
    "StringMapper",
    "TagName",
    "TagRegistry",
    "change_type",
    "compose",
    "compose_all",
    "construct",
    "dump",
    "emit",
    "factory_for",
    "get_schema",
    "load",
    "load_all",
    "parse",
    "represent",
    "serialize",
]
