# utils/logger.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Logging utility for log parsing and causal graph construction

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for Causeway."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class CausewayLogger:
    """Centralized logger for parsing and graph construction with structured output."""

    def __init__(self, name: str = "causeway", level: LogLevel = LogLevel.INFO):
        """Initialize the Causeway logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(CausewayFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    def set_stream(self, stream):
        """Point the console handlers at `stream` and return the previous one."""
        previous = None
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                previous = handler.setStream(stream) or previous
        return previous

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for parsing and graph construction
    def parse_started(self, length: int, pattern: str, delimiter: Optional[str] = None):
        """Log the start of a raw log parse."""
        self.debug(f"Parsing {length} characters with pattern {pattern!r}")
        if delimiter:
            self.debug(f"  Execution delimiter: {delimiter!r}")

    def execution_parsed(self, label: str, event_count: int, host_count: int):
        """Log a completed execution."""
        shown = label if label else "<unlabelled>"
        self.debug(f"  Execution {shown}: {event_count} events on {host_count} hosts")

    def edge_resolved(self, event: str, kind: str, target: Optional[str] = None):
        """Log a resolved happened-before edge."""
        if target:
            self.debug(f"    {event} ← {kind} ← {target}")
        else:
            self.debug(f"    {event} has no predecessor")

    def rank_assigned(self, event: str, rank: int, reason: str):
        """Log a vertical rank assignment."""
        self.debug(f"    rank {rank:>4} → {event} ({reason})")

    def graph_built(self, node_count: int, edge_count: int, host_count: int, max_rank: int):
        """Log a summary of a finished causal graph."""
        self.debug(
            f"Causal graph: {node_count} nodes, {edge_count} external edges, "
            f"{host_count} hosts, max rank {max_rank}"
        )

    def structure_changed(self, description: str):
        """Log a structural change reported by a graph node."""
        self.debug(f"      ⤷ {description}")

    def validation_result(self, success: bool, message: str = ""):
        """Log validation results."""
        if success:
            self.debug(f"✅ {message}" if message else "✅ Validation successful")
        else:
            self.error(f"❌ {message}" if message else "❌ Validation failed")


class CausewayFormatter(logging.Formatter):
    """Custom formatter with clean output for INFO and above."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[CausewayLogger] = None


def get_logger(name: str = "causeway") -> CausewayLogger:
    """Get or create the global Causeway logger instance.

    Args:
        name: Logger name (default: "causeway")

    Returns:
        CausewayLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = CausewayLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    logger = get_logger()
    logger.set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
