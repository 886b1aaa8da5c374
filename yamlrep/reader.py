"""Boundary with PyYAML's scanner, parser and emitter.

PyYAMLEventSource turns the events of ``yaml.parse`` into yamlrep events,
and emit() turns yamlrep events back into YAML text with ``yaml.emit``.
Text formatting is left entirely to PyYAML.
"""

import codecs

import yaml
from yaml import events as _yaml_events

from yamlrep import events
from yamlrep.error import Mark, ReaderError
from yamlrep.parser import EventSource


def _mark(mark):
    """Convert a PyYAML Mark to a yamlrep Mark, or None."""
    if mark is None:
        return None
    return Mark(mark.name, mark.index, mark.line, mark.column,
                mark.buffer, mark.pointer)


def _decode_bytes_stream(stream):
    """Decode bytes using a BOM when present, else UTF-8."""
    if stream.startswith(codecs.BOM_UTF32_LE) or stream.startswith(codecs.BOM_UTF32_BE):
        return stream.decode('utf-32')
    if stream.startswith(codecs.BOM_UTF16_LE) or stream.startswith(codecs.BOM_UTF16_BE):
        return stream.decode('utf-16')
    if stream.startswith(codecs.BOM_UTF8):
        return stream[len(codecs.BOM_UTF8):].decode('utf-8')
    return stream.decode('utf-8')


def _convert_event(event):
    """Convert a PyYAML event to the matching yamlrep event."""
    start_mark = _mark(event.start_mark)
    end_mark = _mark(event.end_mark)
    if isinstance(event, _yaml_events.ScalarEvent):
        return events.ScalarEvent(
            anchor=event.anchor, tag=event.tag, implicit=event.implicit,
            value=event.value, start_mark=start_mark, end_mark=end_mark,
            style=event.style)
    elif isinstance(event, _yaml_events.SequenceStartEvent):
        return events.SequenceStartEvent(
            anchor=event.anchor, tag=event.tag, implicit=event.implicit,
            start_mark=start_mark, end_mark=end_mark,
            flow_style=event.flow_style)
    elif isinstance(event, _yaml_events.MappingStartEvent):
        return events.MappingStartEvent(
            anchor=event.anchor, tag=event.tag, implicit=event.implicit,
            start_mark=start_mark, end_mark=end_mark,
            flow_style=event.flow_style)
    elif isinstance(event, _yaml_events.AliasEvent):
        return events.AliasEvent(anchor=event.anchor,
                                 start_mark=start_mark, end_mark=end_mark)
    elif isinstance(event, _yaml_events.SequenceEndEvent):
        return events.SequenceEndEvent(start_mark, end_mark)
    elif isinstance(event, _yaml_events.MappingEndEvent):
        return events.MappingEndEvent(start_mark, end_mark)
    elif isinstance(event, _yaml_events.DocumentStartEvent):
        return events.DocumentStartEvent(
            start_mark, end_mark, explicit=event.explicit,
            version=event.version, tags=event.tags)
    elif isinstance(event, _yaml_events.DocumentEndEvent):
        return events.DocumentEndEvent(start_mark, end_mark, explicit=event.explicit)
    elif isinstance(event, _yaml_events.StreamStartEvent):
        return events.StreamStartEvent(start_mark, end_mark,
                                       encoding=getattr(event, 'encoding', None))
    elif isinstance(event, _yaml_events.StreamEndEvent):
        return events.StreamEndEvent(start_mark, end_mark)
    raise ValueError("Unknown event type: %s" % type(event).__name__)


class PyYAMLEventSource(EventSource):
    """EventSource reading YAML text with PyYAML's parser.

    Args:
        stream: str, bytes, or a file-like object with read()

    Tags come out exactly as written (already expanded, e.g. '!!int'
    becomes 'tag:yaml.org,2002:int'); untagged nodes have tag None.
    """

    def __init__(self, stream):
        if hasattr(stream, 'read'):
            stream = stream.read()
        if isinstance(stream, bytes):
            stream = _decode_bytes_stream(stream)
        if stream is None:
            stream = ''
        self._events = yaml.parse(stream, Loader=yaml.SafeLoader)
        self.current = None

    def move_next(self):
        try:
            event = next(self._events, None)
        except yaml.MarkedYAMLError as exc:
            raise ReaderError(exc.context, _mark(exc.context_mark),
                              exc.problem, _mark(exc.problem_mark),
                              exc.note) from exc
        except yaml.YAMLError as exc:
            raise ReaderError(None, None, str(exc), None) from exc
        if event is None:
            return False
        self.current = _convert_event(event)
        return True


def _to_yaml_event(event):
    """Convert a yamlrep event to the matching PyYAML event."""
    if isinstance(event, events.NodeEvent):
        anchor = event.anchor.value if event.anchor else None
    if isinstance(event, events.ScalarEvent):
        tag = str(event.tag) if event.tag is not None else None
        return _yaml_events.ScalarEvent(anchor, tag, event.implicit, event.value,
                                        style=event.style)
    elif isinstance(event, events.SequenceStartEvent):
        tag = str(event.tag) if event.tag is not None else None
        return _yaml_events.SequenceStartEvent(anchor, tag, event.implicit,
                                               flow_style=event.flow_style)
    elif isinstance(event, events.MappingStartEvent):
        tag = str(event.tag) if event.tag is not None else None
        return _yaml_events.MappingStartEvent(anchor, tag, event.implicit,
                                              flow_style=event.flow_style)
    elif isinstance(event, events.AliasEvent):
        return _yaml_events.AliasEvent(anchor)
    elif isinstance(event, events.SequenceEndEvent):
        return _yaml_events.SequenceEndEvent()
    elif isinstance(event, events.MappingEndEvent):
        return _yaml_events.MappingEndEvent()
    elif isinstance(event, events.DocumentStartEvent):
        return _yaml_events.DocumentStartEvent(explicit=event.explicit,
                                               version=event.version, tags=event.tags)
    elif isinstance(event, events.DocumentEndEvent):
        return _yaml_events.DocumentEndEvent(explicit=event.explicit)
    elif isinstance(event, events.StreamStartEvent):
        return _yaml_events.StreamStartEvent(encoding=event.encoding)
    elif isinstance(event, events.StreamEndEvent):
        return _yaml_events.StreamEndEvent()
    raise ValueError("Unknown event type: %s" % type(event).__name__)


def emit(event_list, stream=None, **kwargs):
    """Emit yamlrep events as YAML text with PyYAML's emitter.

    Args:
        event_list: Iterable of yamlrep events, stream events included
        stream: Optional file-like object; when None the text is returned
        **kwargs: Emitter options (canonical, indent, width, allow_unicode,
            line_break) passed to yaml.emit

    Returns:
        The YAML text when stream is None, else None
    """
    return yaml.emit([_to_yaml_event(event) for event in event_list],
                     stream, Dumper=yaml.SafeDumper, **kwargs)
