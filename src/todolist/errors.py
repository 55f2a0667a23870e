"""Errors raised by the todo list store."""


class TodoError(Exception):
    """Base class for fatal todo list errors."""


class ConfigError(TodoError):
    pass


class IndexIntegrityError(TodoError):
    """The stored indexes are not exactly 1..N in file order."""

    def __init__(self, expected: int, found: int) -> None:
        super().__init__(f"incorrect index found: expected {expected}, got {found}")
        self.expected = expected
        self.found = found


class MalformedRecordError(TodoError):
    """A line could not be decoded into (index, text, done)."""

    def __init__(self, line_num: int, reason: str) -> None:
        super().__init__(f"malformed record on line {line_num}: {reason}")
        self.line_num = line_num
        self.reason = reason
