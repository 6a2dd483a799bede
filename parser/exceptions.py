# parser/exceptions.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Exceptions raised while compiling patterns and parsing raw logs

"""Domain-specific exceptions for log parsing.

Every exception keeps its structured context (pattern text, line number,
offending clock text, execution label) as attributes next to a plain
message, so callers can present the failure however they like. All of
them derive from LogParseError and abort the parse that raised them.
"""

from typing import Optional


class LogParseError(RuntimeError):
    """Base class for every failure raised while parsing a raw log."""

    pass


class PatternError(LogParseError):
    """A user pattern is invalid or lacks required named groups.

    Attributes:
        pattern: The pattern text as supplied by the user
        missing: Required group names that the pattern does not define
    """

    def __init__(self, message: str, pattern: str, missing: Optional[list] = None):
        super().__init__(message)
        self.pattern = pattern
        self.missing = list(missing or [])


class ClockError(LogParseError):
    """Base class for vector clocks that cannot be turned into timestamps.

    Attributes:
        line_number: 1-indexed source line of the offending event
        clock_text: The raw `clock` capture
        label: Label of the execution being parsed
    """

    def __init__(self, message: str, line_number: int, clock_text: str, label: str = ""):
        super().__init__(message)
        self.line_number = line_number
        self.clock_text = clock_text
        self.label = label


class ClockSyntaxError(ClockError):
    """The `clock` capture is not a JSON object."""

    pass


class ClockValidityError(ClockError):
    """The clock parsed but does not form a valid timestamp for its host."""

    pass


class DuplicateExecutionError(LogParseError):
    """Two executions in one log resolve to the same label."""

    def __init__(self, message: str, label: str):
        super().__init__(message)
        self.label = label


class EmptyExecutionError(LogParseError):
    """The event pattern matched nothing in an execution."""

    def __init__(self, message: str, label: str):
        super().__init__(message)
        self.label = label
