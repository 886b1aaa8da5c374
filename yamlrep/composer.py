"""Composer: groups tagged events into node trees.

Composer reads events from an EventSource (normally a SchemaEnforcingParser,
so every node event is already tagged) and builds one node tree per
document, binding each node to the mapper the registry holds for its tag.
Children are complete before their parent node is built.
"""

from yamlrep.error import ComposerError
from yamlrep.events import (
    StreamStartEvent, StreamEndEvent,
    DocumentStartEvent, DocumentEndEvent,
    AliasEvent, ScalarEvent,
    SequenceStartEvent, SequenceEndEvent,
    MappingStartEvent, MappingEndEvent,
)
from yamlrep.nodes import ScalarNode, NodeHandle, SequenceNodeBuilder, MappingNodeBuilder


class Composer:
    """YAML composer - converts a tagged event stream to Node trees.

    Args:
        source: EventSource providing check_event/get_event/peek_event
        registry: TagRegistry used to bind nodes to mappers
    """

    def __init__(self, source, registry):
        self.source = source
        self.registry = registry
        self.anchors = {}

    def check_event(self, *choices):
        return self.source.check_event(*choices)

    def peek_event(self):
        return self.source.peek_event()

    def get_event(self):
        event = self.source.get_event()
        if event is None:
            raise ComposerError(None, None, "unexpected end of the event stream", None)
        return event

    def check_node(self):
        # Drop StreamStartEvent
        if self.check_event(StreamStartEvent):
            self.get_event()
        return self.check_event() and not self.check_event(StreamEndEvent)

    def get_node(self):
        if self.check_node():
            return self.compose_document()
        return None

    def get_single_node(self):
        # Drop StreamStartEvent
        if self.check_event(StreamStartEvent):
            self.get_event()
        document = None
        if not self.check_event(StreamEndEvent):
            document = self.compose_document()
        if not self.check_event(StreamEndEvent):
            event = self.get_event()
            raise ComposerError(
                "expected a single document in the stream",
                document.start_mark if document is not None else None,
                "but found another document", event.start_mark)
        # Drop StreamEndEvent
        self.get_event()
        return document

    def compose_document(self):
        # Drop DocumentStartEvent
        if self.check_event(DocumentStartEvent):
            self.get_event()
        node = self.compose_node(None, None)
        # Drop DocumentEndEvent
        if self.check_event(DocumentEndEvent):
            self.get_event()
        self.anchors = {}
        return node

    def compose_node(self, parent, index):
        if self.check_event(AliasEvent):
            event = self.get_event()
            anchor = event.anchor
            if anchor not in self.anchors:
                raise ComposerError(
                    None, None,
                    "found undefined alias %r" % str(anchor),
                    event.start_mark)
            first_mark, target = self.anchors[anchor]
            if isinstance(target, NodeHandle):
                if not target.is_built:
                    raise ComposerError(
                        "while composing the node anchored as %r" % str(anchor),
                        first_mark,
                        "found a recursive alias", event.start_mark)
                target = target.node
            return target
        event = self.peek_event()
        if event is None:
            raise ComposerError(None, None, "unexpected end of the event stream", None)
        anchor = getattr(event, 'anchor', None)
        if anchor:
            if anchor in self.anchors:
                raise ComposerError(
                    "found duplicate anchor %r; first occurrence" % str(anchor),
                    self.anchors[anchor][0],
                    "second occurrence", event.start_mark)
        if self.check_event(ScalarEvent):
            return self.compose_scalar_node(anchor)
        elif self.check_event(SequenceStartEvent):
            return self.compose_sequence_node(anchor, parent, index)
        elif self.check_event(MappingStartEvent):
            return self.compose_mapping_node(anchor, parent, index)
        raise ComposerError(
            None, None,
            "expected a node event, but found %s" % event.__class__.__name__,
            event.start_mark)

    def _mapper(self, event):
        if event.tag is None or event.tag.is_non_specific:
            raise ComposerError(
                None, None,
                "found a node without a resolved tag; "
                "the events must pass through a schema first",
                event.start_mark)
        return self.registry.lookup(event.tag)

    def compose_scalar_node(self, anchor):
        event = self.get_event()
        node = ScalarNode(self._mapper(event), event.value,
                          style=event.style, anchor=anchor,
                          start_mark=event.start_mark,
                          end_mark=event.end_mark)
        if anchor:
            self.anchors[anchor] = (event.start_mark, node)
        return node

    def compose_sequence_node(self, anchor, parent=None, index=None):
        start_event = self.get_event()
        builder = SequenceNodeBuilder(self._mapper(start_event),
                                      flow_style=start_event.flow_style,
                                      anchor=anchor,
                                      start_mark=start_event.start_mark,
                                      parent=parent, index=index)
        if anchor:
            self.anchors[anchor] = (start_event.start_mark, builder.handle)
        position = 0
        while not self.check_event(SequenceEndEvent):
            builder.append(self.compose_node(builder.handle, position))
            position += 1
        end_event = self.get_event()
        return builder.build(end_event.end_mark)

    def compose_mapping_node(self, anchor, parent=None, index=None):
        start_event = self.get_event()
        builder = MappingNodeBuilder(self._mapper(start_event),
                                     flow_style=start_event.flow_style,
                                     anchor=anchor,
                                     start_mark=start_event.start_mark,
                                     parent=parent, index=index)
        if anchor:
            self.anchors[anchor] = (start_event.start_mark, builder.handle)
        while not self.check_event(MappingEndEvent):
            key_node = self.compose_node(builder.handle, None)
            value_node = self.compose_node(builder.handle, key_node)
            builder.append(key_node, value_node)
        end_event = self.get_event()
        return builder.build(end_event.end_mark)
