"""Tests for composing node trees from YAML text."""

import pytest

import yamlrep
from yamlrep import (
    Anchor, Composer, ComposerError, ConstructorError, CoreSchema,
    EventStream, PyYAMLEventSource,
)
from yamlrep.events import (
    StreamStartEvent, StreamEndEvent,
    DocumentStartEvent, DocumentEndEvent, ScalarEvent,
)
from yamlrep.mappers import UndefinedMapper
from yamlrep.nodes import ScalarNode, SequenceNode, MappingNode
from yamlrep.tags import TagName, STR, SEQ, MAP, INT, NULL


class TestCompose:
    """Test building node trees."""

    def test_mapping(self):
        """Compose a mapping with nested sequence."""
        node = yamlrep.compose('a: 1\nb: [x, 2]')
        assert isinstance(node, MappingNode)
        assert node.tag == MAP
        (key_a, value_a), (key_b, value_b) = node.value
        assert key_a.value == 'a'
        assert value_a.tag == INT
        assert value_a.value == '1'
        assert isinstance(value_b, SequenceNode)
        assert [child.tag for child in value_b] == [STR, INT]

    def test_nodes_bound_to_registry_mappers(self):
        """Nodes bound to registry mappers."""
        registry = CoreSchema().create_registry()
        node = yamlrep.compose('[1, a]', registry=registry)
        assert node.mapper is registry.get(SEQ)
        assert node[0].mapper is registry.get(INT)

    def test_marks(self):
        """Nodes carry source marks."""
        node = yamlrep.compose('a: 1\nb: 2')
        key = node.value[1][0]
        assert key.start_mark.line == 1
        assert node.start_mark.line == 0

    def test_styles_kept(self):
        """Scalar and collection styles are kept."""
        node = yamlrep.compose('- "x"\n- [1]\n')
        assert node.flow_style is False
        assert node[0].style == '"'
        assert node[1].flow_style is True

    def test_empty_stream(self):
        """An empty stream composes to None."""
        assert yamlrep.compose('') is None

    def test_empty_document(self):
        """An empty document is a null scalar."""
        node = yamlrep.compose('---\n')
        assert node.tag == NULL
        assert node.value == ''

    def test_unknown_tag(self):
        """Unregistered tags compose; constructing them fails."""
        node = yamlrep.compose('!point 1,2')
        assert isinstance(node.mapper, UndefinedMapper)
        assert node.tag == TagName('!point')
        with pytest.raises(ConstructorError):
            yamlrep.construct(node)

    def test_explicit_tag_on_quoted_scalar(self):
        """Explicit tag on quoted scalar."""
        assert yamlrep.load('!!int "12"') == 12

    def test_non_specific_tag(self):
        """The non-specific tag loads as a string."""
        assert yamlrep.load('! 12') == '12'

    def test_single_document_expected(self):
        """Single document expected."""
        with pytest.raises(ComposerError):
            yamlrep.compose('a\n---\nb\n')

    def test_compose_all(self):
        """Compose every document of a stream."""
        nodes = list(yamlrep.compose_all('a\n---\nb\n'))
        assert [node.value for node in nodes] == ['a', 'b']


class TestAnchors:
    """Test anchors and aliases."""

    def test_alias_shares_node(self):
        """Alias shares node."""
        node = yamlrep.compose('x: &a [1]\ny: *a\n')
        first = node.value[0][1]
        second = node.value[1][1]
        assert first is second
        assert first.anchor == Anchor('a')

    def test_scalar_alias(self):
        """Aliases to scalars share the node."""
        node = yamlrep.compose('[&s hello, *s]')
        assert node[0] is node[1]

    def test_undefined_alias(self):
        """Aliases must refer to a defined anchor."""
        with pytest.raises(ComposerError) as exc_info:
            yamlrep.compose('a: *missing')
        assert 'undefined alias' in str(exc_info.value)

    def test_duplicate_anchor(self):
        """An anchor cannot be defined twice."""
        with pytest.raises(ComposerError) as exc_info:
            yamlrep.compose('a: &x 1\nb: &x 2\n')
        assert 'duplicate anchor' in str(exc_info.value)

    def test_recursive_alias(self):
        """An alias to a collection that is still open is rejected."""
        with pytest.raises(ComposerError) as exc_info:
            yamlrep.compose('&a [*a]')
        assert 'recursive' in str(exc_info.value)

    def test_anchors_are_per_document(self):
        """Anchors are per document."""
        with pytest.raises(ComposerError):
            list(yamlrep.compose_all('&a x\n---\n*a\n'))


class TestComposerDirect:
    """Test the Composer on its own."""

    def test_requires_resolved_tags(self):
        """Events must be tagged before they reach the composer."""
        composer = Composer(PyYAMLEventSource('1'), CoreSchema().create_registry())
        with pytest.raises(ComposerError):
            composer.get_single_node()

    def test_event_stream(self):
        """Compose from a plain event list."""
        events = [StreamStartEvent(), DocumentStartEvent(),
                  ScalarEvent(tag=STR, value='x'),
                  DocumentEndEvent(), StreamEndEvent()]
        composer = Composer(EventStream(events), CoreSchema().create_registry())
        node = composer.get_single_node()
        assert isinstance(node, ScalarNode)
        assert node.value == 'x'

    def test_truncated_stream(self):
        """A truncated event stream is an error."""
        events = [StreamStartEvent(), DocumentStartEvent()]
        composer = Composer(EventStream(events), CoreSchema().create_registry())
        with pytest.raises(ComposerError):
            composer.get_single_node()
