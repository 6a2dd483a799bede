# tests/utils_tests/test_log_generator.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Tests for synthetic log generation

import json

import pytest
from parser import parse_log
from utils.log_generator import DEFAULT_PATTERN, generate_log, generate_log_file


class TestGenerateLog:
    def test_two_lines_per_event(self):
        text = generate_log(10, ["a", "b"], seed=5)
        lines = text.splitlines()
        assert len(lines) == 20
        for header in lines[::2]:
            host, clock = header.split(" ", 1)
            assert host in ("a", "b")
            assert json.loads(clock)[host] >= 1

    def test_reproducible_with_seed(self):
        assert generate_log(30, ["a", "b", "c"], seed=11) == generate_log(30, ["a", "b", "c"], seed=11)

    def test_own_clock_counts_host_events(self):
        text = generate_log(40, ["a", "b", "c"], 0.5, seed=2)
        seen = {}
        for header in text.splitlines()[::2]:
            host, clock = header.split(" ", 1)
            seen[host] = seen.get(host, 0) + 1
            assert json.loads(clock)[host] == seen[host]

    def test_parses_with_default_pattern(self):
        text = generate_log(25, ["a", "b"], seed=9)
        events = parse_log(text, DEFAULT_PATTERN).get_log_events("")
        assert len(events) == 25
        assert [e.line_number for e in events] == list(range(1, 50, 2))

    def test_single_host_never_sends(self):
        text = generate_log(10, ["solo"], send_probability=1.0, seed=1)
        assert "sent" not in text

    def test_no_hosts(self):
        with pytest.raises(ValueError):
            generate_log(5, [])

    def test_write_file(self, tmp_path):
        path = tmp_path / "generated.log"
        generate_log_file(path, 6, ["a", "b"], seed=4)
        assert path.read_text(encoding="utf-8") == generate_log(6, ["a", "b"], seed=4)
