# utils/__init__.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Utility module exports
#
# utils.log_reader depends on the parser package, which itself logs through
# utils.logger, so it is imported directly rather than re-exported here.

from .logger import LogLevel, configure_logging, get_logger, set_log_level
from .catalog import CatalogEntry, CatalogFormatError, find_entry, load_catalog
from .log_generator import DEFAULT_PATTERN, generate_log, generate_log_file

__all__ = [
    "LogLevel",
    "configure_logging",
    "get_logger",
    "set_log_level",
    "CatalogEntry",
    "CatalogFormatError",
    "find_entry",
    "load_catalog",
    "DEFAULT_PATTERN",
    "generate_log",
    "generate_log_file",
]
