"""Tests for event sources and the schema-enforcing parser."""

import io

import pytest

import yamlrep
from yamlrep import (
    EventStream, SchemaEnforcingParser, PyYAMLEventSource,
    CoreSchema, JsonSchema, FailsafeSchema, YAMLSyntaxError, ReaderError,
)
from yamlrep.events import (
    StreamStartEvent, StreamEndEvent,
    DocumentStartEvent, DocumentEndEvent,
    ScalarEvent, SequenceStartEvent, SequenceEndEvent,
    MappingStartEvent, MappingEndEvent, AliasEvent,
)
from yamlrep.tags import STR, SEQ, MAP, INT, FLOAT, BOOL, NULL


def document(*node_events):
    return ([StreamStartEvent(), DocumentStartEvent()] + list(node_events)
            + [DocumentEndEvent(), StreamEndEvent()])


class TestEventStream:
    """Test adapting plain iterables."""

    def test_move_next(self):
        """move_next() advances through the events."""
        first, second = StreamStartEvent(), StreamEndEvent()
        source = EventStream([first, second])
        assert source.current is None
        assert source.move_next()
        assert source.current is first
        assert source.move_next()
        assert source.current is second
        assert not source.move_next()

    def test_lookahead(self):
        """check, peek and get share one lookahead."""
        source = EventStream(document(ScalarEvent(value='x')))
        assert source.check_event(StreamStartEvent)
        assert not source.check_event(ScalarEvent)
        assert isinstance(source.peek_event(), StreamStartEvent)
        assert isinstance(source.get_event(), StreamStartEvent)
        assert isinstance(source.get_event(), DocumentStartEvent)
        assert source.check_event()

    def test_exhausted(self):
        """An empty stream has no events."""
        source = EventStream([])
        assert not source.check_event()
        assert source.peek_event() is None
        assert source.get_event() is None


class TestSchemaEnforcingParser:
    """Test tag resolution on the event stream."""

    def test_none_arguments(self):
        """None arguments raise TypeError."""
        with pytest.raises(TypeError):
            SchemaEnforcingParser(None, CoreSchema())
        with pytest.raises(TypeError):
            SchemaEnforcingParser(EventStream([]), None)

    def test_current_before_first_advance(self):
        """Current before first advance."""
        parser = SchemaEnforcingParser(EventStream(document()), CoreSchema())
        assert parser.current is None
        assert parser.schema.name == 'core'

    def test_untagged_events_resolved(self):
        """Untagged events resolved."""
        events = document(
            MappingStartEvent(),
            ScalarEvent(value='a'), ScalarEvent(value='1'),
            ScalarEvent(value='b'), SequenceStartEvent(),
            ScalarEvent(value='1.5'), ScalarEvent(value='true'),
            ScalarEvent(value='~'), SequenceEndEvent(),
            MappingEndEvent())
        parser = SchemaEnforcingParser(EventStream(events), CoreSchema())
        tags = [event.tag for event in parser if hasattr(event, 'tag')]
        assert tags == [MAP, STR, INT, STR, SEQ, FLOAT, BOOL, NULL]

    def test_other_events_pass_through(self):
        """Stream, document, end and alias events are not replaced."""
        events = document(SequenceStartEvent(anchor='a'), AliasEvent(anchor='a'),
                          SequenceEndEvent())
        parser = SchemaEnforcingParser(EventStream(events), CoreSchema())
        results = list(parser)
        assert len(results) == len(events)
        for original, result in zip(events, results):
            if not isinstance(original, SequenceStartEvent):
                assert result is original

    def test_tagged_event_unchanged(self):
        """Tagged event unchanged."""
        event = ScalarEvent(tag=INT, value='x')
        parser = SchemaEnforcingParser(EventStream([event]), CoreSchema())
        assert parser.move_next()
        assert parser.current is event

    def test_exhaustion_matches_inner(self):
        """Exhaustion matches inner."""
        parser = SchemaEnforcingParser(EventStream([StreamStartEvent()]), CoreSchema())
        assert parser.move_next()
        assert not parser.move_next()

    def test_pulls_one_event_per_advance(self):
        """Pulls one event per advance."""
        inner = EventStream(document(ScalarEvent(value='1')))
        parser = SchemaEnforcingParser(inner, CoreSchema())
        parser.move_next()
        assert inner.current is parser.current

    def test_error_propagates_from_move_next(self):
        """A rejected scalar fails on the advance that pulls it."""
        events = document(ScalarEvent(value='invalid'))
        parser = SchemaEnforcingParser(EventStream(events), JsonSchema())
        assert parser.move_next()
        assert parser.move_next()
        with pytest.raises(YAMLSyntaxError):
            parser.move_next()

    def test_stacked_parsers(self):
        """A parser can wrap another parser."""
        inner = SchemaEnforcingParser(EventStream(document(ScalarEvent(value='1'))),
                                      FailsafeSchema())
        outer = SchemaEnforcingParser(inner, CoreSchema())
        scalars = [event for event in outer if isinstance(event, ScalarEvent)]
        assert scalars[0].tag == STR


class TestPyYAMLEventSource:
    """Test reading YAML text through PyYAML."""

    def test_events(self):
        """PyYAML events are converted."""
        events = list(PyYAMLEventSource('a: [1, "2"]'))
        assert [type(event) for event in events] == [
            StreamStartEvent, DocumentStartEvent, MappingStartEvent,
            ScalarEvent, SequenceStartEvent, ScalarEvent, ScalarEvent,
            SequenceEndEvent, MappingEndEvent, DocumentEndEvent, StreamEndEvent]
        scalars = [event for event in events if isinstance(event, ScalarEvent)]
        assert [event.tag for event in scalars] == [None, None, None]
        assert [event.style for event in scalars] == [None, None, '"']

    def test_explicit_tag_expanded(self):
        """Explicit tag expanded."""
        scalars = [event for event in PyYAMLEventSource('!!int 7')
                   if isinstance(event, ScalarEvent)]
        assert scalars[0].tag == INT

    def test_marks(self):
        """Marks point into the source."""
        scalars = [event for event in PyYAMLEventSource('a: 1\nb: 2')
                   if isinstance(event, ScalarEvent)]
        assert scalars[2].start_mark.line == 1
        assert scalars[2].start_mark.column == 0

    def test_bytes_and_files(self):
        """Bytes and files."""
        for stream in (b'x', b'\xef\xbb\xbfx', io.StringIO('x')):
            scalars = [event for event in PyYAMLEventSource(stream)
                       if isinstance(event, ScalarEvent)]
            assert scalars[0].value == 'x'

    def test_malformed_yaml(self):
        """Parser errors become ReaderError."""
        with pytest.raises(ReaderError) as exc_info:
            list(PyYAMLEventSource('a: [1'))
        assert exc_info.value.problem_mark is not None


class TestParse:
    """Test yamlrep.parse()."""

    def test_resolved_tags(self):
        """parse() yields resolved tags."""
        scalars = [event for event in yamlrep.parse('[1, "1", one, ~]')
                   if isinstance(event, ScalarEvent)]
        assert [event.tag for event in scalars] == [INT, STR, STR, NULL]

    def test_json_rejects_bare_words(self):
        """JSON rejects bare words with the scalar's mark."""
        with pytest.raises(YAMLSyntaxError) as exc_info:
            list(yamlrep.parse('[1, one]', schema='json'))
        assert exc_info.value.problem_mark.column == 4
