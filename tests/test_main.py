"""Tests for the command-line entry point."""
import io
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from unittest.mock import patch

import pytest

from smarttable.config import Config
from smarttable.main import main, run_demo, run_shell
from smarttable.store import TrackedStore


def make_config(tmp_path):
    with patch('smarttable.config.CONFIG_FILE', tmp_path / "config.json"):
        return Config()


def test_demo_output(tmp_path):
    out = io.StringIO()
    smart = run_demo(make_config(tmp_path).make_store(), out=out)
    lines = out.getvalue().splitlines()

    assert lines[0] == "SmartTable demonstration:"
    assert "    name: 'John'" in lines
    assert "    age: 26" in lines
    assert "    city: 'New York'" in lines
    assert "    2. age: <absent> -> 25" in lines
    assert "    3. age: 25 -> 26" in lines
    assert "    4. city: <absent> -> 'New York'" in lines
    assert lines[-1] == "  After reverting 1 step, age = 26"
    assert len(smart.get_history()) == 3


def test_shell_exit_codes():
    out = io.StringIO()
    assert run_shell(TrackedStore(), lines=["set a 1", "get a"], out=out) == 0
    assert out.getvalue() == "1\n"
    assert run_shell(TrackedStore(), lines=["bogus"], out=io.StringIO()) == 1


def test_shell_keeps_going_after_oversized_number():
    store = TrackedStore()
    out = io.StringIO()
    big = "9" * 5000
    assert run_shell(store, lines=["set big " + big, "set ok 1", "get ok"], out=out) == 0
    assert out.getvalue() == "1\n"
    assert str(store.get("big")) == big


def test_main_runs_demo_by_default(tmp_path, capsys):
    with patch('smarttable.config.CONFIG_FILE', tmp_path / "config.json"):
        main([])
    assert "After reverting 1 step, age = 26" in capsys.readouterr().out


def test_main_shell_reads_stdin(tmp_path, capsys):
    with patch('smarttable.config.CONFIG_FILE', tmp_path / "config.json"), \
            patch('sys.stdin', io.StringIO("set x 5\nget x\n")):
        with pytest.raises(SystemExit) as exc:
            main(["--shell"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.endswith("5\n")


def test_main_rejects_bad_clock(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"timestamp_clock": "sundial"}')
    with patch('smarttable.config.CONFIG_FILE', path):
        with pytest.raises(SystemExit) as exc:
            main([])
    assert exc.value.code == 2


def test_main_shell_value_errors_are_not_config_errors(tmp_path, capsys):
    stdin = io.StringIO("set big " + "9" * 5000 + "\nset ok 1\nget ok\n")
    with patch('smarttable.config.CONFIG_FILE', tmp_path / "config.json"), \
            patch('sys.stdin', stdin):
        with pytest.raises(SystemExit) as exc:
            main(["--shell"])
    assert exc.value.code == 0
    captured = capsys.readouterr()
    assert captured.out.endswith("1\n")
    assert "bad configuration" not in captured.err


def test_main_rejects_non_integer_max_history(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"max_history": "lots"}')
    with patch('smarttable.config.CONFIG_FILE', path):
        with pytest.raises(SystemExit) as exc:
            main([])
    assert exc.value.code == 2
