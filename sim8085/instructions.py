"""Instruction semantics of the simulated 8085 subset."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, NamedTuple, Protocol

from .registers import Registers

if TYPE_CHECKING:
    from .memory import MemoryFile


class ArgKind(enum.Enum):
    """Shape of the operands an instruction takes."""

    REG_REG = enum.auto()
    NONE = enum.auto()
    REG_VAL = enum.auto()
    VAL = enum.auto()
    REG = enum.auto()
    VAL_VAL = enum.auto()
    LABEL = enum.auto()
    PAIR = enum.auto()
    PAIR_VAL = enum.auto()


@dataclass
class Instruction:
    """One assembled instruction.

    ``register`` is the first register or pair operand, ``source`` the second
    register of ``mov``, ``value`` an immediate or address, ``label`` the jump
    label and ``target`` the instruction position it resolves to.
    """

    mnemonic: str
    register: str | None = None
    source: str | None = None
    value: int = 0
    label: str | None = None
    target: int | None = None


class Halt(Exception):
    """Raised by ``hlt`` to stop the simulation."""


class _Processor(Protocol):
    registers: Registers
    memory: MemoryFile

    def jump(self, target: int | str) -> None:
        """Continue at position ``target``, or wait for label ``target``."""


def instruction_address(ins: Instruction) -> int:
    """Return the 16-bit address operand of ``ins``."""
    return ins.value & 0xFFFF


def _compare(regs: Registers, value: int) -> None:
    acc = regs.a
    regs.carry = acc < value
    regs.zero = acc == value


def _expect_no_operands(ins: Instruction) -> None:
    if ins.register is not None or ins.source is not None or ins.label is not None:
        raise ValueError(f"{ins.mnemonic} takes no operands")


def nop(cpu: _Processor, ins: Instruction) -> None:
    """Leave the machine state unchanged; the instruction must carry no operands."""
    _expect_no_operands(ins)


def hlt(cpu: _Processor, ins: Instruction) -> None:
    """Stop execution by raising :class:`Halt`."""
    _expect_no_operands(ins)
    raise Halt(f"{ins.mnemonic} instruction")


def rrc(cpu: _Processor, ins: Instruction) -> None:
    """Rotate the accumulator right; bit 0 goes to bit 7 and carry."""
    regs = cpu.registers
    low_bit = regs.a & 1
    regs.a = (regs.a >> 1) | (low_bit << 7)
    regs.carry = bool(low_bit)


def xchg(cpu: _Processor, ins: Instruction) -> None:
    """Exchange HL with DE."""
    regs = cpu.registers
    old_h, old_l = regs.h, regs.l
    regs.set_pair("h", regs.d, regs.e)
    regs.d, regs.e = old_h, old_l


def jmp(cpu: _Processor, ins: Instruction) -> None:
    """Jump to the label's position, or wait for an undefined label."""
    cpu.jump(ins.label if ins.target is None else ins.target)


def jnc(cpu: _Processor, ins: Instruction) -> None:
    """Jump when carry is clear."""
    if not cpu.registers.carry:
        jmp(cpu, ins)


def jc(cpu: _Processor, ins: Instruction) -> None:
    """Jump when carry is set."""
    if cpu.registers.carry:
        jmp(cpu, ins)


def jz(cpu: _Processor, ins: Instruction) -> None:
    """Jump when zero is set."""
    if cpu.registers.zero:
        jmp(cpu, ins)


def jnz(cpu: _Processor, ins: Instruction) -> None:
    """Jump when zero is clear."""
    if not cpu.registers.zero:
        jmp(cpu, ins)


def add(cpu: _Processor, ins: Instruction) -> None:
    """Add a register to the accumulator."""
    regs = cpu.registers
    regs.add_with_carry("a", regs.get(ins.register))


def inr(cpu: _Processor, ins: Instruction) -> None:
    """Increment a register."""
    regs = cpu.registers
    regs.set(ins.register, regs.get(ins.register) + 1)


def dcr(cpu: _Processor, ins: Instruction) -> None:
    """Decrement a register and set zero from the result."""
    regs = cpu.registers
    regs.set(ins.register, regs.get(ins.register) - 1)
    regs.zero = regs.get(ins.register) == 0


def mov(cpu: _Processor, ins: Instruction) -> None:
    """Copy the source register into the destination register."""
    regs = cpu.registers
    regs.set(ins.register, regs.get(ins.source))


def mvi(cpu: _Processor, ins: Instruction) -> None:
    """Load an immediate byte into a register."""
    cpu.registers.set(ins.register, ins.value & 0xFF)


def lxi(cpu: _Processor, ins: Instruction) -> None:
    """Load an immediate 16-bit value into a register pair."""
    value = ins.value & 0xFFFF
    cpu.registers.set_pair(ins.register, value >> 8, value & 0xFF)


def inx(cpu: _Processor, ins: Instruction) -> None:
    """Increment a register pair; zero and carry are set when it wraps."""
    regs = cpu.registers
    value = (regs.get_pair(ins.register) + 1) & 0xFFFF
    regs.set_pair(ins.register, value >> 8, value & 0xFF)
    regs.zero = value == 0
    regs.carry = value == 0


def dcx(cpu: _Processor, ins: Instruction) -> None:
    """Decrement a register pair and set zero from the result."""
    regs = cpu.registers
    value = (regs.get_pair(ins.register) - 1) & 0xFFFF
    regs.set_pair(ins.register, value >> 8, value & 0xFF)
    regs.zero = value == 0


def adi(cpu: _Processor, ins: Instruction) -> None:
    """Add an immediate byte to the accumulator."""
    regs = cpu.registers
    regs.add_with_carry("a", ins.value & 0xFF)
    regs.zero = regs.a == 0


def lda(cpu: _Processor, ins: Instruction) -> None:
    """Load the accumulator from an address."""
    regs = cpu.registers
    regs.a = cpu.memory.read(instruction_address(ins))
    regs.zero = regs.a == 0


def ldax(cpu: _Processor, ins: Instruction) -> None:
    """Load the accumulator from the address in a register pair."""
    regs = cpu.registers
    regs.a = cpu.memory.read(regs.get_pair(ins.register))
    regs.zero = regs.a == 0


def lhld(cpu: _Processor, ins: Instruction) -> None:
    """Load H from an address and L from the next one."""
    regs = cpu.registers
    address = instruction_address(ins)
    regs.h = cpu.memory.read(address)
    regs.l = cpu.memory.read((address + 1) & 0xFFFF)


def sta(cpu: _Processor, ins: Instruction) -> None:
    """Store the accumulator at an address."""
    regs = cpu.registers
    cpu.memory.write(instruction_address(ins), regs.a)
    regs.zero = regs.a == 0


def stax(cpu: _Processor, ins: Instruction) -> None:
    """Store the accumulator at the address in a register pair."""
    regs = cpu.registers
    cpu.memory.write(regs.get_pair(ins.register), regs.a)
    regs.zero = regs.a == 0


def shld(cpu: _Processor, ins: Instruction) -> None:
    """Store L at an address and H at the next one."""
    regs = cpu.registers
    address = instruction_address(ins)
    cpu.memory.write(address, regs.l)
    cpu.memory.write((address + 1) & 0xFFFF, regs.h)


def cpi(cpu: _Processor, ins: Instruction) -> None:
    """Compare the accumulator with an immediate byte."""
    _compare(cpu.registers, ins.value & 0xFF)


def cmp(cpu: _Processor, ins: Instruction) -> None:
    """Compare the accumulator with a register."""
    regs = cpu.registers
    _compare(regs, regs.get(ins.register))


class _Operation(NamedTuple):
    name: str
    execute: Callable[[_Processor, Instruction], None]
    kind: ArgKind


_OPERATIONS = {
    op.name: op
    for op in (
        _Operation("rrc", rrc, ArgKind.NONE),
        _Operation("nop", nop, ArgKind.NONE),
        _Operation("hlt", hlt, ArgKind.NONE),
        _Operation("xchg", xchg, ArgKind.NONE),
        _Operation("inr", inr, ArgKind.REG),
        _Operation("dcr", dcr, ArgKind.REG),
        _Operation("jmp", jmp, ArgKind.LABEL),
        _Operation("jnc", jnc, ArgKind.LABEL),
        _Operation("jc", jc, ArgKind.LABEL),
        _Operation("jz", jz, ArgKind.LABEL),
        _Operation("jnz", jnz, ArgKind.LABEL),
        _Operation("mvi", mvi, ArgKind.REG_VAL),
        _Operation("adi", adi, ArgKind.VAL),
        _Operation("lxi", lxi, ArgKind.PAIR_VAL),
        _Operation("inx", inx, ArgKind.PAIR),
        _Operation("dcx", dcx, ArgKind.PAIR),
        _Operation("mov", mov, ArgKind.REG_REG),
        _Operation("add", add, ArgKind.REG),
        _Operation("lda", lda, ArgKind.VAL_VAL),
        _Operation("ldax", ldax, ArgKind.PAIR),
        _Operation("lhld", lhld, ArgKind.VAL_VAL),
        _Operation("sta", sta, ArgKind.VAL_VAL),
        _Operation("stax", stax, ArgKind.PAIR),
        _Operation("shld", shld, ArgKind.VAL_VAL),
        _Operation("cpi", cpi, ArgKind.VAL),
        _Operation("cmp", cmp, ArgKind.REG),
    )
}


def lookup(mnemonic: str) -> _Operation:
    """Return the operation for ``mnemonic``, ignoring case."""
    try:
        return _OPERATIONS[mnemonic.lower()]
    except KeyError:
        raise KeyError(f"invalid instruction: {mnemonic}") from None