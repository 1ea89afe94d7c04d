import io
import sys

import pytest

from sim8085.cli import main
from sim8085.memory import MEMORY_LINES


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run(monkeypatch, text):
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))
    return main([])


def test_creates_memory_file(workdir, monkeypatch, capsys):
    assert run(monkeypatch, "") == 0
    data = (workdir / "memory").read_bytes()
    assert len(data) == 3 * MEMORY_LINES
    assert "creating `memory' file...done" in capsys.readouterr().err


def test_prints_registers(workdir, monkeypatch, capsys):
    assert run(monkeypatch, "mvi a 5\nmvi l 1c\n") == 0
    out = capsys.readouterr().out
    assert out.count("Registers(in hex):") == 2
    assert "    A: 5\n" in out
    assert "L: 1c\n" in out


def test_store_writes_memory(workdir, monkeypatch):
    assert run(monkeypatch, "mvi a 2a\nsta 0010\n") == 0
    lines = (workdir / "memory").read_bytes().split(b"\n")
    assert lines[0x10] == b"2a"


def test_hlt_exits(workdir, monkeypatch, capsys):
    assert run(monkeypatch, "hlt\nmvi a 1\n") == 0
    captured = capsys.readouterr()
    assert "hlt instruction. exiting." in captured.err
    assert "Registers" not in captured.out


def test_invalid_instruction_fails(workdir, monkeypatch, capsys):
    assert run(monkeypatch, "bogus a\n") == 1
    assert "invalid instruction" in capsys.readouterr().err