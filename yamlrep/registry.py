"""Tag registry.

A TagRegistry maps each tag to the NodeMapper serving it, and native types
to the mapper that represents them. Registries are plain objects owned by
the caller; each schema builds a fresh one with Schema.create_registry().
"""

from yamlrep.error import RepresenterError
from yamlrep.mappers import NodeMapper, UndefinedMapper
from yamlrep.tags import as_tag


class TagRegistry:
    """Mapping from TagName to NodeMapper, plus native type dispatch."""

    def __init__(self, mappers=()):
        self._mappers = {}
        self._representers = {}
        self._multi_representers = []
        for entry in mappers:
            if isinstance(entry, NodeMapper):
                self.add(entry)
            else:
                mapper, native_types = entry
                self.add(mapper, native_types)

    def add(self, mapper, native_types=()):
        """Register mapper under its tag.

        Args:
            mapper: The NodeMapper to register
            native_types: Python types this mapper represents (exact match)

        Raises:
            ValueError: if another mapper already serves the same tag
        """
        if not isinstance(mapper, NodeMapper):
            raise TypeError("expected a NodeMapper, got %r" % (mapper,))
        existing = self._mappers.get(mapper.tag)
        if existing is not None and existing is not mapper:
            raise ValueError("tag %r is already served by %r" % (str(mapper.tag), existing))
        self._mappers[mapper.tag] = mapper
        for native_type in native_types:
            self._representers[native_type] = mapper

    def add_multi_representer(self, native_type, mapper):
        """Represent instances of native_type (and subclasses) with mapper."""
        if mapper.tag not in self._mappers:
            self.add(mapper)
        self._multi_representers.append((native_type, mapper))

    def get(self, tag):
        """Return the mapper for tag; raises KeyError when there is none."""
        return self._mappers[as_tag(tag)]

    def lookup(self, tag):
        """Return the mapper for tag, or an UndefinedMapper bound to it."""
        tag = as_tag(tag)
        mapper = self._mappers.get(tag)
        if mapper is None:
            mapper = UndefinedMapper(tag)
        return mapper

    def mapper_for_value(self, value):
        """Return the mapper that represents value.

        Exact type registrations win over multi-representers, which are
        tried in registration order.
        """
        mapper = self._representers.get(type(value))
        if mapper is not None:
            return mapper
        for native_type, mapper in self._multi_representers:
            if isinstance(value, native_type):
                return mapper
        raise RepresenterError("cannot represent an object: %r" % (value,))

    def tags(self):
        return list(self._mappers)

    def copy(self):
        registry = TagRegistry()
        registry._mappers = dict(self._mappers)
        registry._representers = dict(self._representers)
        registry._multi_representers = list(self._multi_representers)
        return registry

    def __contains__(self, tag):
        try:
            return as_tag(tag) in self._mappers
        except (TypeError, ValueError):
            return False

    def __iter__(self):
        return iter(self._mappers.values())

    def __len__(self):
        return len(self._mappers)

    def __repr__(self):
        return 'TagRegistry(%s)' % ', '.join(str(tag) for tag in self._mappers)
