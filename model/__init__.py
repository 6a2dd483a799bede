# model/__init__.py

"""
Domain objects for vector-clock annotated logs: vector timestamps, the
immutable log events that carry them, identifier allocation, and text
serialization of timestamps. These types carry no parsing or graph logic.
"""

from .vector_timestamp import VectorTimestamp, VectorTimestampError
from .log_event import IdAllocator, LogEvent
from .serializer import VectorTimestampSerializer

__all__ = [
    "VectorTimestamp",
    "VectorTimestampError",
    "LogEvent",
    "IdAllocator",
    "VectorTimestampSerializer",
]
