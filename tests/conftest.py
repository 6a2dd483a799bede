# tests/conftest.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for Causeway tests.

This module provides pytest configuration, fixtures, and utilities for testing
log parsing and causal graph construction. It ensures proper module path
setup and provides common test infrastructure for all test modules.

The configuration handles:
- Python path setup for module imports
- Test environment initialization
- Event factories and standard patterns shared by the suites
"""

import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from model.log_event import IdAllocator, LogEvent  # noqa: E402
from model.vector_timestamp import VectorTimestamp  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Initialize test environment and verify module availability.

    Skips the entire test session if the project packages cannot be
    imported (for example when sly is not installed).

    Yields:
        None: Control to test execution
    """
    try:
        import core
        import model
        import parser
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


@pytest.fixture
def make_event():
    """Factory building LogEvents with ids from one allocator.

    Returns:
        Callable[[str, dict], LogEvent]: host, clock (and optional text and
        line number) to LogEvent
    """
    allocator = IdAllocator()

    def _make(host: str, clock: dict, text: str = "", line: int = 0) -> LogEvent:
        return LogEvent(
            event_id=allocator.next_id(),
            text=text or f"{host}{clock.get(host, 0)}",
            timestamp=VectorTimestamp(clock, host),
            line_number=line,
        )

    return _make


@pytest.fixture
def two_line_pattern():
    """Event pattern for '<host> <clock>' followed by an event line.

    Returns:
        str: Pattern with host, clock and event groups
    """
    return r"^(?<host>\S+) (?<clock>\{.*\})\n(?<event>.*)$"


@pytest.fixture
def examples_dir():
    """Directory holding the bundled example catalog and logs."""
    return project_root / "data"
