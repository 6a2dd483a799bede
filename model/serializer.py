# model/serializer.py

"""
Text serialization of vector timestamps.

The format string is applied to every timestamp, replacing the `HOST` and
`CLOCK` placeholders with the owning host and the compact JSON clock. The
rendered items are joined with the separator and wrapped in header and
footer, e.g. format="`HOST`:`CLOCK`", separator=",", header="[", footer="]"
renders two timestamps as  [a:{"a":1},b:{"b":1,"a":1}]
"""

import json
from dataclasses import dataclass
from typing import Iterable

from .vector_timestamp import VectorTimestamp

HOST_PLACEHOLDER = "`HOST`"
CLOCK_PLACEHOLDER = "`CLOCK`"


@dataclass(frozen=True)
class VectorTimestampSerializer:
    format: str = f"{HOST_PLACEHOLDER} {CLOCK_PLACEHOLDER}"
    separator: str = "\n"
    header: str = ""
    footer: str = ""

    def serialize_one(self, timestamp: VectorTimestamp) -> str:
        clock = json.dumps(timestamp.clock, separators=(",", ":"))
        return self.format.replace(HOST_PLACEHOLDER, timestamp.host).replace(
            CLOCK_PLACEHOLDER, clock
        )

    def serialize(self, timestamps: Iterable[VectorTimestamp]) -> str:
        """Serialize `timestamps` in iteration order."""
        body = self.separator.join(self.serialize_one(ts) for ts in timestamps)
        return f"{self.header}{body}{self.footer}"
