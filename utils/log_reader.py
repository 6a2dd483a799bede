# utils/log_reader.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Log file reader for vector-clock annotated executions

from pathlib import Path
from typing import Dict, List, Optional, Union

from model.log_event import LogEvent
from parser import LogParseError, LogParser, parse_log
from utils.logger import get_logger


class LogFileError(Exception):
    """Exception raised when a log file cannot be read or parsed."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


def read_log_text(filepath: Union[str, Path]) -> str:
    """Read the raw text of a log file.

    Args:
        filepath: Path to the log file

    Returns:
        The file contents decoded as UTF-8

    Raises:
        LogFileError: If the file does not exist or cannot be read
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise LogFileError(f"Log file not found: {filepath}", str(filepath))

    logger.debug(f"Reading log file: {filepath}")

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LogFileError(f"Error reading log file: {e}", str(filepath)) from e


def read_log(
    filepath: Union[str, Path], pattern: str, delimiter: Optional[str] = None
) -> LogParser:
    """Read and parse a log file.

    Args:
        filepath: Path to the log file
        pattern: Event pattern with clock, host and event captures
        delimiter: Optional execution delimiter pattern

    Returns:
        LogParser with every execution of the file

    Raises:
        LogFileError: If the file cannot be read
        LogParseError: If the patterns or the log content are invalid
    """
    raw = read_log_text(filepath)
    return parse_log(raw, pattern, delimiter)


def read_executions(
    filepath: Union[str, Path], pattern: str, delimiter: Optional[str] = None
) -> Dict[str, List[LogEvent]]:
    """Read a log file and return its events keyed by execution label."""
    parsed = read_log(filepath, pattern, delimiter)
    return {label: parsed.get_log_events(label) for label in parsed.labels}


def validate_log_file(
    filepath: Union[str, Path], pattern: str, delimiter: Optional[str] = None
) -> int:
    """Validate that a log file parses completely.

    Args:
        filepath: Path to the log file to validate
        pattern: Event pattern
        delimiter: Optional execution delimiter pattern

    Returns:
        Number of events found across all executions

    Raises:
        LogFileError: If the file cannot be read
        LogParseError: If validation fails
    """
    logger = get_logger()
    logger.debug(f"Validating log file: {filepath}")

    try:
        parsed = read_log(filepath, pattern, delimiter)
    except LogParseError as e:
        logger.validation_result(False, f"Log validation failed: {e}")
        raise

    count = len(parsed.get_all_log_events())
    logger.validation_result(True, f"Log validation successful: {count} events")
    return count
