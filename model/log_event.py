# model/log_event.py

"""
LogEvent
========

Immutable record of one matched log line: the event text, the vector
timestamp it was logged with, the line it came from and any extra fields
captured by the user's pattern. The owning host is taken from the
timestamp.

Identifiers come from an IdAllocator owned by whoever creates the events
(normally a LogParser), so independent parses never share a counter.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from itertools import count
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from .vector_timestamp import VectorTimestamp


class IdAllocator:
    """Monotonic identifier source scoped to one parse or graph."""

    def __init__(self, start: int = 0) -> None:
        self._counter: Iterator[int] = count(start)

    def next_id(self) -> int:
        return next(self._counter)


@dataclass(frozen=True, eq=False)
class LogEvent:
    event_id: int
    text: str
    timestamp: VectorTimestamp
    line_number: int
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # private copy so the caller's dict cannot change us later
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def host(self) -> str:
        return self.timestamp.host

    @property
    def own_time(self) -> int:
        return self.timestamp.own_time

    def get_field(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the captured field `name`, or `default` if it was not captured."""
        return self.fields.get(name, default)

    def __str__(self) -> str:
        return f"#{self.event_id}@{self.host}:{self.timestamp.clock} {self.text!r} (line {self.line_number})"
