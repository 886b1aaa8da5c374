"""Error types for yamlrep.

Marks and marked errors render the way PyYAML renders them, so messages
coming from the underlying parser and from tag resolution look alike. The
subclasses below name the stage that failed.
"""

_LINE_BREAKS = '\0\r\n\x85\u2028\u2029'


class Mark:
    """A position in a YAML stream (line and column are 0-indexed).

    buffer and pointer are optional; when both are set, str() includes the
    source line with a caret under the position.
    """

    def __init__(self, name, index, line, column, buffer=None, pointer=None):
        self.name = name
        self.index = index
        self.line = line
        self.column = column
        self.buffer = buffer
        self.pointer = pointer

    def get_snippet(self, indent=4, max_length=75):
        if self.buffer is None or self.pointer is None:
            return None
        half = max_length // 2 - 1
        start = self.pointer
        while start > 0 and self.buffer[start - 1] not in _LINE_BREAKS:
            start -= 1
        end = self.pointer
        while end < len(self.buffer) and self.buffer[end] not in _LINE_BREAKS:
            end += 1
        head = tail = ''
        if self.pointer - start > half:
            head, start = ' ... ', self.pointer - half + 5
        if end - self.pointer > half:
            tail, end = ' ... ', self.pointer + half - 5
        caret = ' ' * (indent + len(head) + self.pointer - start) + '^'
        return '%s%s%s%s\n%s' % (' ' * indent, head, self.buffer[start:end], tail, caret)

    def same_position(self, other):
        return (other is not None and self.name == other.name
                and self.line == other.line and self.column == other.column)

    def __str__(self):
        where = '  in "%s", line %d, column %d' % (self.name, self.line + 1, self.column + 1)
        snippet = self.get_snippet()
        if snippet is None:
            return where
        return where + ':\n' + snippet

    def __repr__(self):
        return 'Mark(%r, line=%d, column=%d)' % (self.name, self.line, self.column)


class YAMLError(Exception):
    pass


class MarkedYAMLError(YAMLError):
    """Error with an optional context and problem, each with its own mark.

    The context mark is left out of the message when it points at the
    same place as the problem mark.
    """

    def __init__(self, context=None, context_mark=None,
                 problem=None, problem_mark=None, note=None):
        super().__init__(context, context_mark, problem, problem_mark, note)
        self.context = context
        self.context_mark = context_mark
        self.problem = problem
        self.problem_mark = problem_mark
        self.note = note

    def __str__(self):
        context_mark = self.context_mark
        if context_mark is not None and self.problem is not None \
                and context_mark.same_position(self.problem_mark):
            context_mark = None
        parts = (self.context, context_mark, self.problem, self.problem_mark, self.note)
        return '\n'.join(str(part) for part in parts if part is not None)


class YAMLSyntaxError(MarkedYAMLError):
    """Scalar content rejected by a schema that has no string fallback."""
    pass


class ReaderError(MarkedYAMLError):
    """Malformed YAML reported by the underlying event parser."""
    pass


class ComposerError(MarkedYAMLError):
    """YAML composer error (e.g., undefined alias)."""
    pass


class ConstructorError(MarkedYAMLError):
    """YAML constructor error."""
    pass


class ShapeMismatchError(ConstructorError):
    """A mapper was given a node of the wrong kind."""
    pass


class TypeConversionError(ConstructorError):
    """A child value could not be coerced to the collection's element type.

    Attributes:
        index: Position of the offending child (a key node's position for
            mappings), or None when unknown
    """

    def __init__(self, context=None, context_mark=None,
                 problem=None, problem_mark=None, note=None, index=None):
        super().__init__(context, context_mark, problem, problem_mark, note)
        self.index = index


class RepresenterError(YAMLError):
    pass


class SerializerError(YAMLError):
    pass


class InvalidAnchorError(YAMLError, ValueError):
    """Anchor label is empty or contains a flow indicator."""
    pass
