"""Tests for the tag registry."""

from collections import OrderedDict

import pytest

from yamlrep import TagRegistry, RepresenterError
from yamlrep.mappers import (
    StringMapper, IntMapper, UndefinedMapper, MappingMapper,
)
from yamlrep.tags import TagName, STR, INT, MAP


class TestTagRegistry:
    """Test registering and looking up mappers."""

    def test_get(self):
        """get() accepts a TagName or its text."""
        registry = TagRegistry([StringMapper.DEFAULT])
        assert registry.get(STR) is StringMapper.DEFAULT
        assert registry.get('tag:yaml.org,2002:str') is StringMapper.DEFAULT

    def test_get_missing(self):
        """get() raises KeyError for unknown tags."""
        with pytest.raises(KeyError):
            TagRegistry().get(INT)

    def test_lookup_unknown_tag(self):
        """Unknown tags resolve to an UndefinedMapper bound to the tag."""
        mapper = TagRegistry().lookup(TagName('!point'))
        assert isinstance(mapper, UndefinedMapper)
        assert mapper.tag == TagName('!point')

    def test_conflicting_mapper(self):
        """Two different mappers cannot serve one tag."""
        registry = TagRegistry([IntMapper(INT)])
        with pytest.raises(ValueError):
            registry.add(IntMapper(INT))

    def test_same_mapper_twice(self):
        """Same mapper twice."""
        mapper = IntMapper(INT)
        registry = TagRegistry([mapper])
        registry.add(mapper, (int,))
        assert len(registry) == 1

    def test_only_mappers(self):
        """Only NodeMapper instances can be registered."""
        with pytest.raises(TypeError):
            TagRegistry().add('not a mapper')

    def test_contains(self):
        """Membership is by tag."""
        registry = TagRegistry([StringMapper.DEFAULT])
        assert STR in registry
        assert INT not in registry
        assert 42 not in registry

    def test_iter_and_tags(self):
        """Iteration yields mappers in registration order."""
        int_mapper = IntMapper(INT)
        registry = TagRegistry([StringMapper.DEFAULT, int_mapper])
        assert list(registry) == [StringMapper.DEFAULT, int_mapper]
        assert registry.tags() == [STR, INT]

    def test_copy_is_independent(self):
        """Copy is independent."""
        registry = TagRegistry([StringMapper.DEFAULT])
        clone = registry.copy()
        clone.add(IntMapper(INT))
        assert INT in clone
        assert INT not in registry


class TestRepresenterDispatch:
    """Test choosing a mapper for a native value."""

    def test_exact_type(self):
        """Values dispatch on their exact type."""
        registry = TagRegistry([(StringMapper.DEFAULT, (str,))])
        assert registry.mapper_for_value('x') is StringMapper.DEFAULT

    def test_bool_does_not_use_int_mapper(self):
        """Exact type matching keeps bool apart from int."""
        registry = TagRegistry([(IntMapper(INT), (int,))])
        with pytest.raises(RepresenterError):
            registry.mapper_for_value(True)

    def test_multi_representer(self):
        """Multi-representers match subclasses."""
        mapper = MappingMapper(MAP)
        registry = TagRegistry()
        registry.add_multi_representer(dict, mapper)
        assert registry.mapper_for_value(OrderedDict()) is mapper
        assert MAP in registry

    def test_no_mapper(self):
        """Values without a mapper raise RepresenterError."""
        with pytest.raises(RepresenterError):
            TagRegistry().mapper_for_value(object())
