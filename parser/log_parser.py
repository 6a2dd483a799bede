# parser/log_parser.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Splits raw log text into executions and extracts timestamped events

"""Raw log text to LogEvents.

LogParser divides the raw text into executions using an optional delimiter
pattern and hands each execution to an ExecutionParser, which applies the
event pattern and builds one LogEvent per match.

The event pattern must name three captures:
    clock: the vector clock as a JSON object of host -> integer
    host:  the host that logged the event
    event: the event description
Any other named capture is kept as a field of the event.

Labels are taken from a `trace` capture in the delimiter pattern. Text that
is not preceded by a delimiter belongs to the execution labelled "".

Events of one execution are returned in the order they appear in the text.
That order is taken as each host's local causal order; it is not a global
chronological order across hosts.
"""

import json
from typing import Dict, List, Optional, Tuple

from model.log_event import IdAllocator, LogEvent
from model.vector_timestamp import VectorTimestamp, VectorTimestampError
from utils.logger import get_logger

from .exceptions import (
    ClockSyntaxError,
    ClockValidityError,
    DuplicateExecutionError,
    EmptyExecutionError,
    PatternError,
)
from .named_regexp import NamedRegExp

REQUIRED_GROUPS = ("clock", "host", "event")
RESERVED_GROUPS = ("clock", "event")
LABEL_GROUP = "trace"


class ExecutionParser:
    """Parses the text of a single execution.

    Attributes:
        label: Label of the execution
        log_events: Events in source order
    """

    def __init__(
        self,
        raw: str,
        label: str,
        regexp: NamedRegExp,
        allocator: IdAllocator,
        start: int = 0,
        end: Optional[int] = None,
    ):
        """Parse `raw[start:end]` as one execution.

        Line numbers are computed against the whole of `raw`, so events keep
        their real source line even when the execution starts mid-text.

        Raises:
            ClockSyntaxError: A clock capture is not a JSON object
            ClockValidityError: A clock is not valid for its host
            EmptyExecutionError: The pattern captured no events
        """
        logger = get_logger()

        self.label = label
        self.log_events: List[LogEvent] = []

        end = len(raw) if end is None else end
        field_names = [name for name in regexp.names if name not in RESERVED_GROUPS]

        line = raw.count("\n", 0, start) + 1
        offset = start

        for match in regexp.finditer(raw, start, end):
            line += raw.count("\n", offset, match.start())
            offset = match.start()

            clock_text = match.group("clock")
            timestamp = self._parse_timestamp(clock_text, match.group("host"), line)

            fields = {
                name: match.group(name)
                for name in field_names
                if match.group(name) is not None
            }

            self.log_events.append(
                LogEvent(
                    event_id=allocator.next_id(),
                    text=match.group("event") or "",
                    timestamp=timestamp,
                    line_number=line,
                    fields=fields,
                )
            )

        if not self.log_events:
            raise EmptyExecutionError(
                f"The pattern does not capture any events for the execution {label!r}",
                label,
            )

        hosts = {event.host for event in self.log_events}
        logger.execution_parsed(label, len(self.log_events), len(hosts))

    def _parse_timestamp(self, clock_text: Optional[str], host: Optional[str], line: int) -> VectorTimestamp:
        clock_text = clock_text or ""
        try:
            clock = json.loads(clock_text)
        except json.JSONDecodeError as exc:
            raise ClockSyntaxError(
                f"Could not parse the vector timestamp on line {line}: {exc.msg}",
                line,
                clock_text,
                self.label,
            ) from exc

        if not isinstance(clock, dict):
            raise ClockSyntaxError(
                f"The vector timestamp on line {line} is not a JSON object",
                line,
                clock_text,
                self.label,
            )

        try:
            return VectorTimestamp(clock, host or "")
        except VectorTimestampError as exc:
            raise ClockValidityError(
                f"Invalid vector timestamp on line {line}: {exc}",
                line,
                clock_text,
                self.label,
            ) from exc


class LogParser:
    """Divides raw log text into executions and parses each of them.

    Attributes:
        raw: The raw log text
        delimiter: Optional pattern separating executions
        regexp: Event pattern with clock, host and event captures
    """

    def __init__(
        self,
        raw: str,
        delimiter: Optional[NamedRegExp],
        regexp: NamedRegExp,
        allocator: Optional[IdAllocator] = None,
    ):
        """Parse every execution in `raw`.

        Args:
            raw: Raw log text
            delimiter: Pattern whose matches separate executions, or None
            regexp: Event pattern
            allocator: Source of event ids; a fresh one is used when omitted

        Raises:
            PatternError: The event pattern lacks a required capture
            DuplicateExecutionError: Two executions share a label
            ClockSyntaxError, ClockValidityError, EmptyExecutionError:
                Propagated from the failing execution
        """
        logger = get_logger()

        self.raw = raw
        self.delimiter = delimiter
        self.regexp = regexp
        self.allocator = allocator if allocator is not None else IdAllocator()

        self._labels: List[str] = []
        self._executions: Dict[str, ExecutionParser] = {}

        missing = [name for name in REQUIRED_GROUPS if not regexp.has_name(name)]
        if missing:
            raise PatternError(
                "The event pattern does not have the necessary named capture groups: "
                + ", ".join(missing),
                regexp.source,
                missing,
            )

        logger.parse_started(len(raw), regexp.source, delimiter.source if delimiter else None)

        for label, start, end in self._segments():
            if not raw[start:end].strip():
                continue
            if label in self._executions:
                message = f"Execution names must be unique. There are multiple executions called {label!r}"
                if not label:
                    message += " (give the delimiter a trace group to label them)"
                raise DuplicateExecutionError(message, label)
            self._executions[label] = ExecutionParser(
                raw, label, regexp, self.allocator, start, end
            )
            self._labels.append(label)

    def _segments(self) -> List[Tuple[str, int, int]]:
        """(label, start, end) for the text before, between and after delimiters."""
        if self.delimiter is None:
            return [("", 0, len(self.raw))]

        segments = []
        label, start = "", 0
        for match in self.delimiter.finditer(self.raw):
            # zero-width delimiters would split between every character
            if match.end() == match.start():
                continue
            segments.append((label, start, match.start()))
            label = ""
            if self.delimiter.has_name(LABEL_GROUP):
                label = match.group(LABEL_GROUP) or ""
            start = match.end()
        segments.append((label, start, len(self.raw)))
        return segments

    @property
    def labels(self) -> List[str]:
        """Execution labels in the order they appear in the raw text."""
        return list(self._labels)

    def get_log_events(self, label: str) -> Optional[List[LogEvent]]:
        """Events of the execution `label` in source order, or None if unknown."""
        execution = self._executions.get(label)
        if execution is None:
            return None
        return list(execution.log_events)

    def get_all_log_events(self) -> List[LogEvent]:
        """Events of every execution, executions in label order."""
        events: List[LogEvent] = []
        for label in self._labels:
            events.extend(self._executions[label].log_events)
        return events
