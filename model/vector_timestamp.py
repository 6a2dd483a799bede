# model/vector_timestamp.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Immutable vector timestamp owned by a single host

"""Vector timestamps for events recorded by one host.

A VectorTimestamp pairs a Mattern-Fidge vector clock with the host that
produced it. Zero-valued entries are dropped at construction so that two
timestamps describing the same causal history compare equal regardless of
how many idle hosts the logger chose to print.

Supports:
  •  Join (update) and local increment, both returning new instances.
  •  Partial-order comparison over shared hosts (compare_to).
  •  The host-difference queries used to resolve happened-before edges.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Tuple


class VectorTimestampError(ValueError):
    """Raised when a clock cannot form a valid timestamp for its host."""

    def __init__(self, message: str, host: str):
        super().__init__(message)
        self.host = host


@dataclass(frozen=True, eq=False)
class VectorTimestamp:
    """Vector clock value as observed by `host`.

    Attributes:
        host: Host the timestamp belongs to
        own_time: The clock value of `host` itself
        entries: (host, value) pairs with non-zero values, in the order the
            clock was supplied
    """

    host: str
    own_time: int
    entries: Tuple[Tuple[str, int], ...]

    def __init__(self, clock: Mapping[str, int], host: str) -> None:
        """Build a timestamp from a host -> value mapping.

        Args:
            clock: Mapping of host names to non-negative integer clock values
            host: Host that owns the timestamp; must be a key of `clock`

        Raises:
            VectorTimestampError: If `host` is missing from `clock` or a value
                is not a non-negative integer
        """
        if host not in clock:
            raise VectorTimestampError(
                f'Local host "{host}" is missing from timestamp', host
            )

        for name, value in clock.items():
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise VectorTimestampError(
                    f'Clock value for host "{name}" must be a non-negative integer, got {value!r}',
                    host,
                )

        object.__setattr__(self, "host", host)
        object.__setattr__(self, "own_time", clock[host])
        object.__setattr__(
            self,
            "entries",
            tuple((name, value) for name, value in clock.items() if value != 0),
        )

    @property
    def clock(self) -> Dict[str, int]:
        """Return a copy of the non-zero clock entries."""
        return dict(self.entries)

    def get(self, host: str, default: int = 0) -> int:
        """Clock value recorded for `host`; missing entries read as `default`."""
        for name, value in self.entries:
            if name == host:
                return value
        return default

    def has_entry(self, host: str) -> bool:
        return any(name == host for name, _ in self.entries)

    def hosts(self) -> List[str]:
        return [name for name, _ in self.entries]

    def update(self, other: VectorTimestamp) -> VectorTimestamp:
        """
        Component-wise maximum of the two clocks. The result belongs to
        this timestamp's host.
        """
        merged = self.clock
        merged.setdefault(self.host, self.own_time)
        for name, value in other.entries:
            merged[name] = max(merged.get(name, 0), value)
        return VectorTimestamp(merged, self.host)

    def increment(self) -> VectorTimestamp:
        """Return a copy with this host's own clock advanced by one."""
        clock = self.clock
        clock[self.host] = self.own_time + 1
        return VectorTimestamp(clock, self.host)

    def compare_to(self, other: VectorTimestamp) -> int:
        """Compare two timestamps over the hosts they share.

        Returns -1 if self happened before other, 1 if other happened
        before self, and 0 if the two are concurrent or equal. Only hosts
        present in both clocks are considered, so this is a partial order
        and callers must not sort with it.
        """
        this_clock = self.clock
        other_clock = other.clock

        this_first = any(
            name in other_clock and value < other_clock[name]
            for name, value in this_clock.items()
        )
        other_first = any(
            name in this_clock and value < this_clock[name]
            for name, value in other_clock.items()
        )

        if this_first and not other_first:
            return -1
        if other_first and not this_first:
            return 1
        return 0

    def compare_to_local(self, other: VectorTimestamp) -> int:
        """Signed difference of local clocks; 0 when the hosts differ."""
        if self.host != other.host:
            return 0
        return self.own_time - other.own_time

    def compare_updated_hosts(self, other: VectorTimestamp) -> List[str]:
        """
        Hosts, other than this timestamp's own, whose entry was added or
        changed relative to `other`. Order follows this clock's entries.
        """
        other_clock = other.clock
        return [
            name
            for name, value in self.entries
            if name != self.host and other_clock.get(name) != value
        ]

    def compare_hosts(self, other: VectorTimestamp, hosts: Iterable[str]) -> bool:
        """True if both clocks hold the same entry for every host in `hosts`."""
        this_clock = self.clock
        other_clock = other.clock
        for name in hosts:
            if name not in this_clock or name not in other_clock:
                return False
            if this_clock[name] != other_clock[name]:
                return False
        return True

    def concurrent(self, other: VectorTimestamp) -> bool:
        """True if neither timestamp precedes the other and they differ."""
        return self.compare_to(other) == 0 and self != other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self.host == other.host and self.clock == other.clock

    def __hash__(self) -> int:
        return hash((self.host, tuple(sorted(self.entries))))

    def __str__(self) -> str:
        items = ", ".join(f"{name}:{value}" for name, value in self.entries)
        return f"{self.host}[{items}]"

    __repr__ = __str__
