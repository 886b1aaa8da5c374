"""Node model.

Nodes form an immutable, tagged tree. Each node is bound to the NodeMapper
that serves its tag, so ``node.mapper.construct(node)`` turns it into a
native value and ``node.tag`` is the mapper's tag.

Sequence and mapping nodes are assembled through builders: the builder is
owned by whoever is populating it, hands out a NodeHandle for path
bookkeeping before any child exists, and produces the immutable node once
all children are known.
"""

from yamlrep.anchor import Anchor
from yamlrep.error import ShapeMismatchError


class Node:
    """Base class for YAML nodes."""

    __slots__ = ('mapper', 'value', 'anchor', 'start_mark', 'end_mark')

    id = None

    def __init__(self, mapper, value, anchor=None, start_mark=None, end_mark=None):
        if mapper is None:
            raise TypeError("a node must be bound to a mapper")
        object.__setattr__(self, 'mapper', mapper)
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'anchor', Anchor.coerce(anchor))
        object.__setattr__(self, 'start_mark', start_mark)
        object.__setattr__(self, 'end_mark', end_mark)

    def __setattr__(self, name, value):
        raise AttributeError("%s is immutable" % self.__class__.__name__)

    def __delattr__(self, name):
        raise AttributeError("%s is immutable" % self.__class__.__name__)

    @property
    def tag(self):
        return self.mapper.tag

    def expect(self, kind):
        """Return self if it is a node of the given kind.

        Raises:
            ShapeMismatchError: if the node is of another kind
        """
        if not isinstance(self, kind):
            raise ShapeMismatchError(
                None, None,
                "expected a %s node, but found %s" % (kind.id, self.id),
                self.start_mark)
        return self

    def __repr__(self):
        value = self.value
        if isinstance(value, tuple):
            value = list(value)
        return '%s(tag=%r, value=%r)' % (self.__class__.__name__, str(self.tag), value)


class ScalarNode(Node):
    """Scalar node (strings, numbers, etc.)."""

    __slots__ = ('style',)

    id = 'scalar'

    def __init__(self, mapper, value, style=None, anchor=None,
                 start_mark=None, end_mark=None):
        if not isinstance(value, str):
            raise TypeError("scalar value must be a string, not %s"
                            % type(value).__name__)
        super().__init__(mapper, value, anchor, start_mark, end_mark)
        object.__setattr__(self, 'style', style)


class CollectionNode(Node):
    """Base class for collection nodes."""

    __slots__ = ('flow_style',)

    def __init__(self, mapper, value, flow_style=None, anchor=None,
                 start_mark=None, end_mark=None):
        super().__init__(mapper, tuple(value), anchor, start_mark, end_mark)
        object.__setattr__(self, 'flow_style', flow_style)

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]


class SequenceNode(CollectionNode):
    """Sequence node; value is a tuple of child nodes."""

    __slots__ = ()

    id = 'sequence'


class MappingNode(CollectionNode):
    """Mapping node; value is a tuple of (key, value) node pairs."""

    __slots__ = ()

    id = 'mapping'


class NodeHandle:
    """Forward reference to a collection node that is still being built.

    Attributes:
        tag: Tag of the node under construction
        parent: Handle of the enclosing collection, or None at the root
        index: Position within the parent (a key node for mapping values)
    """

    __slots__ = ('tag', 'parent', 'index', '_node')

    def __init__(self, tag, parent=None, index=None):
        self.tag = tag
        self.parent = parent
        self.index = index
        self._node = None

    @property
    def is_built(self):
        return self._node is not None

    @property
    def node(self):
        if self._node is None:
            raise RuntimeError("node for %r is still under construction" % str(self.tag))
        return self._node

    @property
    def path(self):
        """Tuple of handles from the root down to this one."""
        handles = []
        handle = self
        while handle is not None:
            handles.append(handle)
            handle = handle.parent
        return tuple(reversed(handles))

    def __repr__(self):
        return 'NodeHandle(%r, index=%r)' % (str(self.tag), self.index)


class _CollectionNodeBuilder:

    node_class = None

    def __init__(self, mapper, flow_style=None, anchor=None,
                 start_mark=None, parent=None, index=None):
        self.mapper = mapper
        self.flow_style = flow_style
        self.anchor = Anchor.coerce(anchor)
        self.start_mark = start_mark
        self.handle = NodeHandle(mapper.tag, parent, index)
        self._items = []
        self._built = False

    def __len__(self):
        return len(self._items)

    def _check_open(self):
        if self._built:
            raise RuntimeError("%s node has already been built" % self.node_class.id)

    def build(self, end_mark=None):
        """Freeze the collected children into an immutable node."""
        self._check_open()
        self._built = True
        node = self.node_class(self.mapper, self._items,
                               flow_style=self.flow_style, anchor=self.anchor,
                               start_mark=self.start_mark, end_mark=end_mark)
        self._items = None
        self.handle._node = node
        return node


class SequenceNodeBuilder(_CollectionNodeBuilder):
    """Collects child nodes for a SequenceNode."""

    node_class = SequenceNode

    def append(self, child):
        self._check_open()
        if not isinstance(child, Node):
            raise TypeError("sequence items must be nodes, not %s"
                            % type(child).__name__)
        self._items.append(child)


class MappingNodeBuilder(_CollectionNodeBuilder):
    """Collects (key, value) node pairs for a MappingNode."""

    node_class = MappingNode

    def append(self, key, value):
        self._check_open()
        if not isinstance(key, Node) or not isinstance(value, Node):
            raise TypeError("mapping keys and values must be nodes")
        self._items.append((key, value))
