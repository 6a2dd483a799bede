# parser/__init__.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Pattern compilation and raw log parsing components

"""Parsing of vector-clock annotated logs.

This package turns raw log text into LogEvents. A user-supplied event
pattern names the `clock`, `host` and `event` captures of each logged
event; an optional delimiter pattern separates several executions kept in
the same text and may label them with a `trace` capture.

Core Functions:
    parse_log: Compile the patterns and parse a raw log in one call

Core Classes:
    NamedRegExp: Pattern with (?<name>...) captures and ordered group names
    LogParser: Splits raw text into executions and collects their events
    ExecutionParser: Extracts the events of a single execution

Example:
    >>> from parser import parse_log
    >>> log = parse_log('a {"a":1}\\nstarted', r"(?<host>\\S+) (?<clock>{.*})\\n(?<event>.*)")
    >>> [event.text for event in log.get_log_events("")]
    ['started']
"""

import re
from typing import Optional

from model.log_event import IdAllocator
from utils.logger import get_logger

from .exceptions import (
    ClockError,
    ClockSyntaxError,
    ClockValidityError,
    DuplicateExecutionError,
    EmptyExecutionError,
    LogParseError,
    PatternError,
)
from .log_parser import ExecutionParser, LogParser
from .named_regexp import NamedRegExp


def parse_log(
    raw: str,
    pattern: str,
    delimiter: Optional[str] = None,
    flags: int = re.MULTILINE,
    allocator: Optional[IdAllocator] = None,
) -> LogParser:
    """Compile the patterns and parse `raw`.

    Args:
        raw: Raw log text
        pattern: Event pattern with clock, host and event captures
        delimiter: Optional execution delimiter pattern; empty means none
        flags: `re` flags for both patterns
        allocator: Source of event ids shared with other parses

    Returns:
        LogParser holding every parsed execution

    Raises:
        LogParseError: Any pattern or parsing failure; the subclass names it
    """
    logger = get_logger()

    regexp = NamedRegExp(pattern.strip(), flags)
    delimiter_regexp = NamedRegExp(delimiter, flags) if delimiter else None

    try:
        return LogParser(raw, delimiter_regexp, regexp, allocator)
    except LogParseError as exc:
        logger.debug(f"{type(exc).__name__} while parsing log: {exc}")
        raise


__all__ = [
    "parse_log",
    "NamedRegExp",
    "LogParser",
    "ExecutionParser",
    "LogParseError",
    "PatternError",
    "ClockError",
    "ClockSyntaxError",
    "ClockValidityError",
    "DuplicateExecutionError",
    "EmptyExecutionError",
]
