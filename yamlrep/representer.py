"""Representation of native values as node trees.

represent() walks a native value with a SchemaIterator. For every nested
value the iterator picks the mapper from the registry, and it remembers the
collections already represented so that an object reached twice becomes one
shared node (the serializer later emits it as an anchor and aliases).
"""

from yamlrep.error import RepresenterError
from yamlrep.nodes import SequenceNodeBuilder, MappingNodeBuilder

_MISSING = object()


def _default_ignore_aliases(data):
    if data is None:
        return True
    if data == ():
        return True
    if isinstance(data, (str, bytes, bool, int, float)):
        return True
    return False


class _SharedNodeMapper:
    """Stands in for the mapper of a value already represented."""

    def __init__(self, node):
        self.node = node
        self.tag = node.tag

    def represent(self, native, iterator):
        return self.node


class _Session:

    def __init__(self, registry, ignore_aliases):
        self.registry = registry
        self.ignore_aliases = ignore_aliases
        # id(value) -> (value, handle); value is kept so the id stays unique
        self.handles = {}


class SchemaIterator:
    """Per-value context passed to NodeMapper.represent.

    Args:
        registry: TagRegistry used to pick mappers for nested values
        ignore_aliases: Predicate returning True for values that must never
            be shared; defaults to scalars (None, str, bytes, bool, int, float)
            and the empty tuple
    """

    def __init__(self, registry, ignore_aliases=None, _session=None,
                 _parent=None, _index=None, _value=_MISSING):
        if _session is None:
            _session = _Session(registry, ignore_aliases or _default_ignore_aliases)
        self._session = _session
        self.parent = _parent
        self.index = _index
        self.value = _value

    @property
    def registry(self):
        return self._session.registry

    @property
    def path(self):
        """Handles of the enclosing collections, from the root down."""
        if self.parent is None:
            return ()
        return self.parent.path

    def _tracked(self, value):
        return value is not _MISSING and not self._session.ignore_aliases(value)

    def enter_value(self, value, parent=None, index=None):
        """Return (iterator, mapper) for representing a nested value.

        Args:
            value: The native value about to be represented
            parent: NodeHandle of the enclosing collection, if any
            index: Position of value in the parent (key node for mapping values)

        Raises:
            RepresenterError: if value encloses itself, or no mapper fits it
        """
        iterator = SchemaIterator(self.registry, _session=self._session,
                                  _parent=parent, _index=index, _value=value)
        node = self.represented(value)
        if node is not None:
            return iterator, _SharedNodeMapper(node)
        return iterator, self.registry.mapper_for_value(value)

    def represented(self, value):
        """Return the node already built for value, or None.

        Raises:
            RepresenterError: if value is still being represented (a cycle)
        """
        if not self._tracked(value):
            return None
        entry = self._session.handles.get(id(value))
        if entry is None:
            return None
        handle = entry[1]
        if not handle.is_built:
            raise RepresenterError("found recursive object: %r" % (value,))
        return handle.node

    def _register(self, builder):
        if self._tracked(self.value):
            self._session.handles[id(self.value)] = (self.value, builder.handle)
        return builder

    def sequence_builder(self, mapper, flow_style=None):
        """Start the sequence node for the current value."""
        return self._register(SequenceNodeBuilder(
            mapper, flow_style=flow_style, parent=self.parent, index=self.index))

    def mapping_builder(self, mapper, flow_style=None):
        """Start the mapping node for the current value."""
        return self._register(MappingNodeBuilder(
            mapper, flow_style=flow_style, parent=self.parent, index=self.index))


def represent(data, registry, ignore_aliases=None):
    """Represent data as a node tree using the mappers in registry."""
    root = SchemaIterator(registry, ignore_aliases)
    iterator, mapper = root.enter_value(data)
    return mapper.represent(data, iterator)
