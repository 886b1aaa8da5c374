"""Serializer: turns node trees back into events.

Nodes reachable more than once in a tree get an anchor on their first
occurrence and become aliases afterwards. The events are ready for
yamlrep.reader.emit().
"""

from yamlrep.anchor import Anchor
from yamlrep.error import SerializerError, YAMLSyntaxError
from yamlrep.events import (
    StreamStartEvent, StreamEndEvent,
    DocumentStartEvent, DocumentEndEvent,
    AliasEvent, ScalarEvent,
    SequenceStartEvent, SequenceEndEvent,
    MappingStartEvent, MappingEndEvent,
)
from yamlrep.nodes import ScalarNode, SequenceNode, MappingNode
from yamlrep.schemas import CoreSchema
from yamlrep.tags import STR, SEQ, MAP


class Serializer:
    """Node tree to event list.

    Args:
        schema: Schema deciding which tags can stay implicit; a scalar's tag
            is left out when the schema resolves its plain text to the same
            tag. Defaults to the Core schema.
        anchor_template: Pattern for generated anchors
        explicit_start: Mark documents with '---'
        explicit_end: Mark documents with '...'
    """

    ANCHOR_TEMPLATE = 'id%03d'

    def __init__(self, schema=None, anchor_template=None,
                 explicit_start=None, explicit_end=None):
        self._schema = schema if schema is not None else CoreSchema()
        if anchor_template is not None:
            self.ANCHOR_TEMPLATE = anchor_template
        self._explicit_start = explicit_start
        self._explicit_end = explicit_end
        self._events = []
        self._serialized_nodes = {}
        self._anchors = {}
        self._anchor_count = 0

    def serialize(self, node):
        """Return the events of one document holding node."""
        self._events = []
        self._events.append(DocumentStartEvent(explicit=self._explicit_start))
        self._anchor_node(node)
        self._serialize_node(node)
        self._events.append(DocumentEndEvent(explicit=self._explicit_end))
        events = self._events
        self._events = []
        self._serialized_nodes = {}
        self._anchors = {}
        self._anchor_count = 0
        return events

    def serialize_all(self, nodes):
        """Return the events of a whole stream holding one document per node."""
        events = [StreamStartEvent()]
        for node in nodes:
            events.extend(self.serialize(node))
        events.append(StreamEndEvent())
        return events

    def _generate_anchor(self):
        while True:
            self._anchor_count += 1
            anchor = Anchor(self.ANCHOR_TEMPLATE % self._anchor_count)
            if anchor not in self._used_anchors:
                return anchor

    @property
    def _used_anchors(self):
        return set(anchor for anchor in self._anchors.values() if anchor)

    def _anchor_node(self, node):
        """Pre-pass to detect nodes appearing more than once."""
        node_id = id(node)
        if node_id in self._anchors:
            if not self._anchors[node_id]:
                self._anchors[node_id] = node.anchor or self._generate_anchor()
        else:
            self._anchors[node_id] = node.anchor
            if isinstance(node, SequenceNode):
                for item in node.value:
                    self._anchor_node(item)
            elif isinstance(node, MappingNode):
                for key_node, val_node in node.value:
                    self._anchor_node(key_node)
                    self._anchor_node(val_node)

    def _scalar_implicit(self, node):
        tag = node.tag
        try:
            plain_tag = self._schema.resolve_scalar(node.value)
        except YAMLSyntaxError:
            plain_tag = None
        return (plain_tag == tag, tag == STR)

    def _serialize_node(self, node):
        node_id = id(node)
        anchor = self._anchors.get(node_id, Anchor.EMPTY)
        if node_id in self._serialized_nodes:
            self._events.append(AliasEvent(anchor=anchor))
            return
        self._serialized_nodes[node_id] = True
        if isinstance(node, ScalarNode):
            self._events.append(ScalarEvent(
                anchor=anchor, tag=node.tag, implicit=self._scalar_implicit(node),
                value=node.value, style=node.style))
        elif isinstance(node, SequenceNode):
            self._events.append(SequenceStartEvent(
                anchor=anchor, tag=node.tag, implicit=node.tag == SEQ,
                flow_style=node.flow_style))
            for item in node.value:
                self._serialize_node(item)
            self._events.append(SequenceEndEvent())
        elif isinstance(node, MappingNode):
            self._events.append(MappingStartEvent(
                anchor=anchor, tag=node.tag, implicit=node.tag == MAP,
                flow_style=node.flow_style))
            for key_node, val_node in node.value:
                self._serialize_node(key_node)
                self._serialize_node(val_node)
            self._events.append(MappingEndEvent())
        else:
            raise SerializerError("cannot serialize %r" % (node,))
