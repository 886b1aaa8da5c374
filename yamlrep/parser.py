"""Pull-based event sources and the schema-enforcing parser.

An EventSource exposes move_next() / current: move_next() advances to the
next event and returns False once the stream is exhausted. Sources can be
stacked; SchemaEnforcingParser is one such layer, attaching schema-resolved
tags to untagged node events as they go by.
"""

from yamlrep.events import NodeEvent


class EventSource:
    """Base class for pull-based event sources.

    Subclasses implement move_next() and set current. The check/peek/get
    helpers give the PyYAML-style lookahead interface on top of them.
    """

    current = None
    _pending = False

    def move_next(self):
        raise NotImplementedError

    def _fill(self):
        if not self._pending:
            self._pending = self.move_next()
        return self._pending

    def check_event(self, *choices):
        """Return True if the next event is one of choices (any, if empty)."""
        if not self._fill():
            return False
        if not choices:
            return True
        return isinstance(self.current, choices)

    def peek_event(self):
        """Return the next event without consuming it, or None at the end."""
        if not self._fill():
            return None
        return self.current

    def get_event(self):
        """Consume and return the next event, or None at the end."""
        if not self._fill():
            return None
        self._pending = False
        return self.current

    def __iter__(self):
        while True:
            event = self.get_event()
            if event is None:
                return
            yield event


class EventStream(EventSource):
    """Adapts any iterable of events into an EventSource."""

    def __init__(self, events):
        self._events = iter(events)
        self.current = None

    def move_next(self):
        for event in self._events:
            self.current = event
            return True
        return False


class SchemaEnforcingParser(EventSource):
    """Resolves the tags of untagged node events through a schema.

    Wraps exactly one inner EventSource. Each move_next() pulls one event
    from it; untagged scalar, sequence-start and mapping-start events are
    replaced by a copy carrying the tag the schema resolves, everything
    else passes through unchanged. Errors raised by the schema propagate
    from the move_next() call that pulled the offending event.
    """

    def __init__(self, inner, schema):
        if inner is None:
            raise TypeError("inner event source cannot be None")
        if schema is None:
            raise TypeError("schema cannot be None")
        self._inner = inner
        self._schema = schema
        self.current = None

    @property
    def schema(self):
        return self._schema

    def move_next(self):
        if not self._inner.move_next():
            return False
        event = self._inner.current
        if isinstance(event, NodeEvent):
            event = self._schema.apply(event)
        self.current = event
        return True
