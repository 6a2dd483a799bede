# tests/utils_tests/test_log_reader.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Tests for reading and validating log files

import pytest
from parser import ClockSyntaxError, PatternError
from utils.log_reader import (
    LogFileError,
    read_executions,
    read_log,
    read_log_text,
    validate_log_file,
)

PATTERN = r"^(?<host>\S+) (?<clock>\{.*\})\n(?<event>.*)$"
DELIMITER = r"^=== run (?<trace>\w+) ===$"


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "run.log"
    path.write_text('a {"a":1}\nstart\nb {"b":1,"a":1}\nreceive\n', encoding="utf-8")
    return path


class TestReadLog:
    def test_read_text(self, log_file):
        assert read_log_text(log_file).startswith('a {"a":1}')

    def test_missing_file(self, tmp_path):
        with pytest.raises(LogFileError) as exc_info:
            read_log_text(tmp_path / "missing.log")
        assert exc_info.value.path.endswith("missing.log")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.log"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(LogFileError):
            read_log_text(path)

    def test_read_log(self, log_file):
        parsed = read_log(log_file, PATTERN)
        assert [e.text for e in parsed.get_log_events("")] == ["start", "receive"]

    def test_read_executions(self, examples_dir):
        executions = read_executions(examples_dir / "log" / "three_hosts.log", PATTERN, DELIMITER)
        assert list(executions) == ["warmup", "retry"]
        assert len(executions["warmup"]) == 8
        assert len(executions["retry"]) == 5


class TestValidate:
    def test_returns_event_count(self, log_file):
        assert validate_log_file(log_file, PATTERN) == 2

    def test_invalid_clock_propagates(self, tmp_path):
        path = tmp_path / "bad.log"
        path.write_text("a {broken}\nstart\n", encoding="utf-8")
        with pytest.raises(ClockSyntaxError):
            validate_log_file(path, PATTERN)

    def test_invalid_pattern_propagates(self, log_file):
        with pytest.raises(PatternError):
            validate_log_file(log_file, r"(?<host>\S+)")
