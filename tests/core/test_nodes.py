"""Tests for the node model and node builders."""

import pytest

from yamlrep import Anchor, ShapeMismatchError, StringMapper, SequenceMapper, MappingMapper
from yamlrep.nodes import (
    ScalarNode, SequenceNode, MappingNode,
    SequenceNodeBuilder, MappingNodeBuilder, NodeHandle,
)
from yamlrep.tags import STR, SEQ, MAP


def scalar(text):
    return ScalarNode(StringMapper.DEFAULT, text)


class TestScalarNode:
    """Test scalar nodes."""

    def test_tag_comes_from_mapper(self):
        """Tag comes from mapper."""
        node = scalar('hello')
        assert node.tag == STR
        assert node.mapper is StringMapper.DEFAULT
        assert node.value == 'hello'
        assert node.id == 'scalar'

    def test_defaults(self):
        """Style, anchor and marks default to absent."""
        node = scalar('x')
        assert node.style is None
        assert node.anchor is Anchor.EMPTY
        assert node.start_mark is None

    def test_anchor_coerced(self):
        """A string anchor is converted to an Anchor."""
        node = ScalarNode(StringMapper.DEFAULT, 'x', anchor='a1')
        assert node.anchor == Anchor('a1')

    def test_immutable(self):
        """Nodes cannot be changed after construction."""
        node = scalar('x')
        with pytest.raises(AttributeError):
            node.value = 'y'
        with pytest.raises(AttributeError):
            node.style = "'"

    def test_value_must_be_text(self):
        """Value must be text."""
        with pytest.raises(TypeError):
            ScalarNode(StringMapper.DEFAULT, 42)

    def test_mapper_required(self):
        """Every node needs a mapper."""
        with pytest.raises(TypeError):
            ScalarNode(None, 'x')


class TestExpect:
    """Test Node.expect()."""

    def test_expect_matching_kind(self):
        """Expect matching kind."""
        node = scalar('x')
        assert node.expect(ScalarNode) is node

    def test_expect_wrong_kind(self):
        """A mismatch raises ShapeMismatchError naming both kinds."""
        builder = MappingNodeBuilder(MappingMapper())
        node = builder.build()
        with pytest.raises(ShapeMismatchError) as exc_info:
            node.expect(SequenceNode)
        assert 'expected a sequence node, but found mapping' in str(exc_info.value)


class TestSequenceNodeBuilder:
    """Test building sequence nodes."""

    def test_build(self):
        """Appended children become the node's children."""
        builder = SequenceNodeBuilder(SequenceMapper.default())
        builder.append(scalar('a'))
        builder.append(scalar('b'))
        node = builder.build()
        assert isinstance(node, SequenceNode)
        assert node.tag == SEQ
        assert len(node) == 2
        assert [child.value for child in node] == ['a', 'b']
        assert node[1].value == 'b'

    def test_children_are_a_tuple(self):
        """The built node does not expose a mutable child list."""
        builder = SequenceNodeBuilder(SequenceMapper.default())
        builder.append(scalar('a'))
        node = builder.build()
        assert isinstance(node.value, tuple)

    def test_handle_available_before_children(self):
        """The handle exists before population and resolves after build."""
        builder = SequenceNodeBuilder(SequenceMapper.default())
        handle = builder.handle
        assert isinstance(handle, NodeHandle)
        assert not handle.is_built
        with pytest.raises(RuntimeError):
            handle.node
        node = builder.build()
        assert handle.is_built
        assert handle.node is node

    def test_build_once(self):
        """A builder produces exactly one node."""
        builder = SequenceNodeBuilder(SequenceMapper.default())
        builder.build()
        with pytest.raises(RuntimeError):
            builder.build()
        with pytest.raises(RuntimeError):
            builder.append(scalar('late'))

    def test_items_must_be_nodes(self):
        """Items must be nodes."""
        builder = SequenceNodeBuilder(SequenceMapper.default())
        with pytest.raises(TypeError):
            builder.append('not a node')

    def test_handle_path(self):
        """Handles chain to their parents."""
        outer = SequenceNodeBuilder(SequenceMapper.default())
        inner = SequenceNodeBuilder(SequenceMapper.default(),
                                    parent=outer.handle, index=0)
        assert inner.handle.path == (outer.handle, inner.handle)
        assert inner.handle.index == 0


class TestMappingNodeBuilder:
    """Test building mapping nodes."""

    def test_build_keeps_duplicate_keys(self):
        """Key uniqueness is not enforced on nodes."""
        builder = MappingNodeBuilder(MappingMapper())
        builder.append(scalar('k'), scalar('1'))
        builder.append(scalar('k'), scalar('2'))
        node = builder.build()
        assert isinstance(node, MappingNode)
        assert node.tag == MAP
        assert [(k.value, v.value) for k, v in node] == [('k', '1'), ('k', '2')]

    def test_pairs_must_be_nodes(self):
        """Pairs must be nodes."""
        builder = MappingNodeBuilder(MappingMapper())
        with pytest.raises(TypeError):
            builder.append(scalar('k'), 'v')
