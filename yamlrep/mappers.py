"""Node mappers.

A NodeMapper converts between nodes of one tag and native Python values:
construct() turns a node into a value, represent() turns a value into a node.
Mappers hold configuration only (their tag, and for collections a factory
and element types) and are shared by every node of their tag.
"""

import math
import re

from yamlrep import factories
from yamlrep.convert import NativeType, change_type
from yamlrep.error import ConstructorError, RepresenterError, TypeConversionError
from yamlrep.nodes import ScalarNode, SequenceNode, MappingNode
from yamlrep.tags import TagName, STR, SEQ, MAP, NULL, BOOL, INT, FLOAT


class NodeMapper:
    """Base class for mappers; subclasses implement construct and represent."""

    def __init__(self, tag):
        if tag is None:
            raise TypeError("a mapper must serve a tag")
        self.tag = TagName(tag)

    def construct(self, node):
        """Construct a native value from node."""
        raise NotImplementedError

    def represent(self, native, iterator):
        """Represent native as a node; iterator is the SchemaIterator context."""
        raise NotImplementedError

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, str(self.tag))


class UndefinedMapper(NodeMapper):
    """Bound to nodes whose tag has no registered mapper."""

    def construct(self, node):
        raise ConstructorError(
            None, None,
            "could not determine a constructor for the tag %r" % str(self.tag),
            node.start_mark)

    def represent(self, native, iterator):
        raise RepresenterError("cannot represent an object with the undefined tag %r: %r"
                               % (str(self.tag), native))


class StringMapper(NodeMapper):
    """The tag:yaml.org,2002:str tag; native type is str."""

    DEFAULT = None  # set below

    def construct(self, node):
        return node.expect(ScalarNode).value

    def represent(self, native, iterator):
        if not isinstance(native, str):
            raise RepresenterError("cannot represent %r as a string" % (native,))
        return ScalarNode(self, native)


StringMapper.DEFAULT = StringMapper(STR)


class ScalarMapper(NodeMapper):
    """Base for mappers of scalars with a lexical grammar.

    Subclasses provide parse(text) -> value, raising ValueError on text
    outside the grammar, and format(value) -> text.
    """

    def __init__(self, tag, parse=None):
        super().__init__(tag)
        if parse is not None:
            self.parse = parse

    def parse(self, text):
        raise NotImplementedError

    def format(self, native):
        raise NotImplementedError

    def construct(self, node):
        scalar = node.expect(ScalarNode)
        try:
            return self.parse(scalar.value)
        except ValueError as exc:
            raise ConstructorError(
                "while constructing %s" % str(self.tag), scalar.start_mark,
                "found invalid scalar %r (%s)" % (scalar.value, exc),
                scalar.start_mark) from exc

    def represent(self, native, iterator):
        return ScalarNode(self, self.format(native))


_NULL_LITERALS = frozenset(['', '~', 'null', 'Null', 'NULL'])
_TRUE_LITERALS = frozenset(['true', 'True', 'TRUE'])
_FALSE_LITERALS = frozenset(['false', 'False', 'FALSE'])


class NullMapper(ScalarMapper):

    def parse(self, text):
        if text not in _NULL_LITERALS:
            raise ValueError("not a null literal")
        return None

    def format(self, native):
        if native is not None:
            raise RepresenterError("cannot represent %r as null" % (native,))
        return 'null'


class BoolMapper(ScalarMapper):

    def parse(self, text):
        if text in _TRUE_LITERALS:
            return True
        if text in _FALSE_LITERALS:
            return False
        raise ValueError("not a boolean literal")

    def format(self, native):
        if not isinstance(native, bool):
            raise RepresenterError("cannot represent %r as a boolean" % (native,))
        return 'true' if native else 'false'


_INT_REGEXP = re.compile(r'''^(?P<sign>[-+]?)(?:
        0o(?P<oct>[0-7]+)
      | 0x(?P<hex>[0-9a-fA-F]+)
      | (?P<dec>[0-9]+))$''', re.X)


def parse_core_int(text):
    """Parse a Core schema integer: decimal, 0o octal or 0x hex, signed."""
    match = _INT_REGEXP.fullmatch(text)
    if match is None:
        raise ValueError("not an integer literal")
    if match.group('oct') is not None:
        value = int(match.group('oct'), 8)
    elif match.group('hex') is not None:
        value = int(match.group('hex'), 16)
    else:
        value = int(match.group('dec'), 10)
    if match.group('sign') == '-':
        value = -value
    return value


class IntMapper(ScalarMapper):

    def parse(self, text):
        return parse_core_int(text)

    def format(self, native):
        if isinstance(native, bool) or not isinstance(native, int):
            raise RepresenterError("cannot represent %r as an integer" % (native,))
        return str(native)


_FLOAT_REGEXP = re.compile(
    r'^[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?$')
_INF_REGEXP = re.compile(r'^(?P<sign>[-+]?)\.(?:inf|Inf|INF)$')
_NAN_REGEXP = re.compile(r'^\.(?:nan|NaN|NAN)$')


def parse_core_float(text):
    """Parse a Core schema float, including .inf and .nan forms."""
    match = _INF_REGEXP.fullmatch(text)
    if match is not None:
        return float('-inf') if match.group('sign') == '-' else float('inf')
    if _NAN_REGEXP.fullmatch(text):
        return float('nan')
    if not _FLOAT_REGEXP.fullmatch(text):
        raise ValueError("not a float literal")
    return float(text)


class FloatMapper(ScalarMapper):

    def parse(self, text):
        return parse_core_float(text)

    def format(self, native):
        if isinstance(native, bool) or not isinstance(native, (int, float)):
            raise RepresenterError("cannot represent %r as a float" % (native,))
        native = float(native)
        if math.isnan(native):
            return '.nan'
        if math.isinf(native):
            return '.inf' if native > 0 else '-.inf'
        return repr(native)


class SequenceMapper(NodeMapper):
    """Maps sequence nodes to native collections.

    Args:
        tag: Tag served by this mapper
        factory: CollectionFactory (or a collection type known to
            factories.factory_for) creating the native collection
        element_type: NativeType (or Python type) each item is coerced to
    """

    _defaults = {}

    def __init__(self, tag=SEQ, factory=factories.LIST, element_type=NativeType.ANY):
        super().__init__(tag)
        if factory is None:
            raise TypeError("factory cannot be None")
        self.factory = factories.factory_for(factory)
        self.element_type = NativeType.of(element_type)

    @classmethod
    def default(cls, element_type=NativeType.ANY):
        """Shared list-backed mapper for tag:yaml.org,2002:seq."""
        element_type = NativeType.of(element_type)
        mapper = cls._defaults.get((cls, element_type))
        if mapper is None:
            mapper = cls._defaults[(cls, element_type)] = cls(SEQ, factories.LIST, element_type)
        return mapper

    @classmethod
    def create(cls, sequence_type, element_type=NativeType.ANY, tag=SEQ):
        """Mapper producing sequence_type collections (list, tuple, set, ...)."""
        return cls(tag, factories.factory_for(sequence_type), element_type)

    def _construct_item(self, sequence, child, index):
        item = child.mapper.construct(child)
        try:
            return change_type(item, self.element_type)
        except TypeError as exc:
            raise TypeConversionError(
                "while constructing a sequence", sequence.start_mark,
                "cannot convert item %d: %s" % (index, exc), child.start_mark,
                index=index) from exc

    def construct(self, node):
        sequence = node.expect(SequenceNode)
        collection = self.factory(len(sequence))

        # Pre-allocated and fixed-size collections are filled by position
        if self.factory.fill_in_place(collection):
            capacity = len(collection)
            for index, child in enumerate(sequence):
                if index >= capacity:
                    raise TypeConversionError(
                        "while constructing a sequence", sequence.start_mark,
                        "item %d does not fit a collection of %d items"
                        % (index, capacity), child.start_mark,
                        index=index)
                collection[index] = self._construct_item(sequence, child, index)
        else:
            for index, child in enumerate(sequence):
                item = self._construct_item(sequence, child, index)
                try:
                    self.factory.add(collection, item)
                except (TypeError, AttributeError) as exc:
                    raise TypeConversionError(
                        "while constructing a sequence", sequence.start_mark,
                        "cannot add item %d: %s" % (index, exc), child.start_mark,
                        index=index) from exc
        return self.factory.complete(collection)

    def represent(self, native, iterator):
        if isinstance(native, (str, bytes, dict)) or not hasattr(native, '__iter__'):
            raise RepresenterError("cannot represent %r as a sequence" % (native,))
        # Handle must exist before items are entered
        builder = iterator.sequence_builder(self)
        for index, item in enumerate(native):
            item_iterator, item_mapper = iterator.enter_value(item, builder.handle, index)
            builder.append(item_mapper.represent(item, item_iterator))
        return builder.build()


class MappingMapper(NodeMapper):
    """Maps mapping nodes to native dicts.

    Args:
        tag: Tag served by this mapper
        factory: CollectionFactory (or dict / OrderedDict)
        key_type: NativeType each key is coerced to
        value_type: NativeType each value is coerced to
        sort_keys: Sort keys when representing, when they are comparable
    """

    def __init__(self, tag=MAP, factory=factories.DICT, key_type=NativeType.ANY,
                 value_type=NativeType.ANY, sort_keys=False):
        super().__init__(tag)
        if factory is None:
            raise TypeError("factory cannot be None")
        self.factory = factories.factory_for(factory)
        self.key_type = NativeType.of(key_type)
        self.value_type = NativeType.of(value_type)
        self.sort_keys = sort_keys

    def _convert(self, mapping, child, index, native_type, what):
        value = child.mapper.construct(child)
        try:
            return change_type(value, native_type)
        except TypeError as exc:
            raise TypeConversionError(
                "while constructing a mapping", mapping.start_mark,
                "cannot convert %s of entry %d: %s" % (what, index, exc),
                child.start_mark, index=index) from exc

    def construct(self, node):
        mapping = node.expect(MappingNode)
        collection = self.factory(len(mapping))
        for index, (key_node, value_node) in enumerate(mapping):
            key = self._convert(mapping, key_node, index, self.key_type, 'key')
            value = self._convert(mapping, value_node, index, self.value_type, 'value')
            try:
                self.factory.add(collection, (key, value))
            except TypeError as exc:
                raise TypeConversionError(
                    "while constructing a mapping", mapping.start_mark,
                    "found unhashable key", key_node.start_mark,
                    index=index) from exc
        return self.factory.complete(collection)

    def represent(self, native, iterator):
        if not hasattr(native, 'items'):
            raise RepresenterError("cannot represent %r as a mapping" % (native,))
        items = list(native.items())
        if self.sort_keys:
            try:
                items = sorted(items)
            except TypeError:
                pass
        builder = iterator.mapping_builder(self)
        for index, (key, value) in enumerate(items):
            key_iterator, key_mapper = iterator.enter_value(key, builder.handle, index)
            key_node = key_mapper.represent(key, key_iterator)
            value_iterator, value_mapper = iterator.enter_value(value, builder.handle, key_node)
            builder.append(key_node, value_mapper.represent(value, value_iterator))
        return builder.build()
