"""The simulated machine: program store, labels and execution."""

from __future__ import annotations

import logging
from typing import Optional

from .assembler import build_instruction, parse_line
from .instructions import Instruction, lookup
from .memory import MemoryFile
from .registers import Registers

_log = logging.getLogger(__name__)


class Machine:
    """Executes instructions as they are fed in, keeping them for later jumps.

    A jump to a label that is not yet defined halts execution until a line
    defining that label is fed in.
    """

    def __init__(self, memory: Optional[MemoryFile] = None) -> None:
        self.memory = memory
        self.registers = Registers(memory=memory)
        self.program: list[Instruction] = []
        self.labels: dict[str, int] = {}
        self.waiting: list[str] = []
        self.halted = False
        self.awaited: Optional[str] = None
        self._running = False
        self._next = 0

    def feed(self, line: str) -> Instruction:
        """Assemble ``line``, store it, and execute it unless halted."""
        source = parse_line(line)
        if source.label is not None:
            self.set_label(source.label)
        ins = build_instruction(source, self.find_label)
        if ins.label is not None and ins.target is None:
            self.add_waiting(ins.label)
        self.program.append(ins)
        if not self.halted:
            self._execute(ins)
        return ins

    def set_label(self, name: str) -> None:
        """Define ``name`` at the next program position; resume if it was awaited."""
        self.labels.setdefault(name, len(self.program))
        if self.halted and name == self.awaited:
            _log.info("label %s found, continuing execution", name)
            self.halted = False
            self.awaited = None

    def find_label(self, name: str) -> Optional[int]:
        """Return the program position of label ``name``, or None."""
        return self.labels.get(name)

    def add_waiting(self, name: str) -> int:
        """Record a reference to an undefined label and return its index."""
        self.waiting.append(name)
        _log.info("unknown label is: %s", name)
        return len(self.waiting) - 1

    def jump(self, target: int | str) -> None:
        """Continue at position ``target``; a label name halts until it is defined."""
        if isinstance(target, str):
            self.halted = True
            self.awaited = target
            _log.info("unknown label %s, not executing until it is defined", target)
        elif self._running:
            self._next = target
        else:
            self.run_from(target)

    def run_from(self, position: int) -> None:
        """Run the stored program from ``position`` to its end."""
        pc = position
        self._running = True
        try:
            while 0 <= pc < len(self.program):
                ins = self.program[pc]
                self._next = pc + 1
                if not self.halted:
                    if ins.label is not None and ins.target is None:
                        ins.target = self.find_label(ins.label)
                    self._execute(ins)
                pc = self._next
        finally:
            self._running = False

    def _execute(self, ins: Instruction) -> None:
        lookup(ins.mnemonic).execute(self, ins)