"""Parsing events.

The event classes mirror PyYAML's: a stream is a flat sequence of
stream/document/node start and end events. Node events carry an Anchor and
an optional TagName; a node event whose tag is None has not been resolved
yet.
"""

import copy

from yamlrep.anchor import Anchor
from yamlrep.tags import as_tag


class Event:
    """Base class for parsing events."""

    def __init__(self, start_mark=None, end_mark=None):
        self.start_mark = start_mark
        self.end_mark = end_mark

    def __repr__(self):
        attributes = [key for key in ['anchor', 'tag', 'implicit', 'value']
                      if hasattr(self, key)]
        arguments = ', '.join(['%s=%r' % (key, getattr(self, key))
                               for key in attributes])
        return '%s(%s)' % (self.__class__.__name__, arguments)


class NodeEvent(Event):
    """Event that starts or stands for a node; may carry an anchor."""

    def __init__(self, anchor=None, start_mark=None, end_mark=None):
        super().__init__(start_mark, end_mark)
        self.anchor = Anchor.coerce(anchor)


class CollectionStartEvent(NodeEvent):

    def __init__(self, anchor=None, tag=None, implicit=True,
                 start_mark=None, end_mark=None, flow_style=None):
        super().__init__(anchor, start_mark, end_mark)
        self.tag = as_tag(tag)
        self.implicit = implicit
        self.flow_style = flow_style

    def with_tag(self, tag):
        """Return a copy of this event carrying tag."""
        event = copy.copy(self)
        event.tag = as_tag(tag)
        return event


class CollectionEndEvent(Event):
    pass


class StreamStartEvent(Event):

    def __init__(self, start_mark=None, end_mark=None, encoding=None):
        super().__init__(start_mark, end_mark)
        self.encoding = encoding


class StreamEndEvent(Event):
    pass


class DocumentStartEvent(Event):

    def __init__(self, start_mark=None, end_mark=None,
                 explicit=None, version=None, tags=None):
        super().__init__(start_mark, end_mark)
        self.explicit = explicit
        self.version = version
        self.tags = tags


class DocumentEndEvent(Event):

    def __init__(self, start_mark=None, end_mark=None, explicit=None):
        super().__init__(start_mark, end_mark)
        self.explicit = explicit


class AliasEvent(NodeEvent):
    pass


class ScalarEvent(NodeEvent):
    """Scalar event.

    Attributes:
        tag: TagName, or None when the scalar had no explicit tag
        implicit: (plain_implicit, quoted_implicit) pair as PyYAML reports it
        value: Source text of the scalar
        style: None for plain, or one of "'", '"', '|', '>'
    """

    def __init__(self, anchor=None, tag=None, implicit=(True, False), value='',
                 start_mark=None, end_mark=None, style=None):
        super().__init__(anchor, start_mark, end_mark)
        self.tag = as_tag(tag)
        self.implicit = implicit
        self.value = value
        self.style = style

    @property
    def is_plain(self):
        return not self.style

    def with_tag(self, tag):
        """Return a copy of this event carrying tag."""
        event = copy.copy(self)
        event.tag = as_tag(tag)
        return event


class SequenceStartEvent(CollectionStartEvent):
    pass


class SequenceEndEvent(CollectionEndEvent):
    pass


class MappingStartEvent(CollectionStartEvent):
    pass


class MappingEndEvent(CollectionEndEvent):
    pass
