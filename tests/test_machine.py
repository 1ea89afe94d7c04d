import io

import pytest

from sim8085.instructions import Halt
from sim8085.machine import Machine
from sim8085.memory import MemoryFile


@pytest.fixture
def machine():
    return Machine(MemoryFile(io.BytesIO(b"00\n" * 32)))


def test_feed_executes(machine):
    machine.feed("mvi a 05")
    assert machine.registers.a == 5
    assert len(machine.program) == 1


def test_backward_loop(machine):
    for line in ["mvi b 03", "mvi a 00", "loop: adi 02", "dcr b", "jnz loop"]:
        machine.feed(line)
    assert machine.registers.b == 0
    assert machine.registers.a == 6
    assert machine.registers.zero is True


def test_forward_jump_halts_until_label(machine):
    machine.feed("jmp skip")
    assert machine.halted is True
    assert machine.waiting == ["skip"]
    machine.feed("mvi a 07")
    assert machine.registers.a == 0
    machine.feed("skip: mvi b 01")
    assert machine.halted is False
    assert machine.registers.b == 1


def test_run_from_resolves_waiting_label(machine):
    machine.feed("jmp later")
    machine.feed("later: mvi a 01")
    assert machine.program[0].target is None
    machine.run_from(0)
    assert machine.program[0].target == 1
    assert machine.registers.a == 1


def test_find_label(machine):
    machine.feed("nop")
    machine.feed("here: nop")
    assert machine.find_label("here") == 1
    assert machine.find_label("missing") is None


def test_duplicate_label_keeps_first(machine):
    machine.set_label("x")
    machine.feed("nop")
    machine.set_label("x")
    assert machine.find_label("x") == 0


def test_add_waiting_returns_index(machine):
    assert machine.add_waiting("a") == 0
    assert machine.add_waiting("b") == 1


def test_hlt_raises(machine):
    with pytest.raises(Halt):
        machine.feed("hlt")


def test_memory_register(machine):
    machine.feed("lxi h 0002")
    machine.feed("mvi m 3f")
    assert machine.memory.read(2) == 0x3F
    machine.feed("mov c m")
    assert machine.registers.c == 0x3F


def test_jump_to_position(machine):
    machine.feed("mvi a 00")
    machine.feed("inr a")
    machine.jump(1)
    assert machine.registers.a == 2