"""Register file of the simulated 8085."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .memory import MemoryFile

_SINGLE = frozenset("abcdehl")
_PAIRS = {"b": ("b", "c"), "d": ("d", "e"), "h": ("h", "l")}


class RegisterError(ValueError):
    """Raised for an unknown register or register pair."""


def _normalise(name: str) -> str:
    if not isinstance(name, str) or len(name) != 1:
        raise RegisterError(f"invalid register: {name!r}")
    return name.lower()


@dataclass
class Registers:
    """General registers, flags and the memory behind the ``m`` pseudo-register."""

    a: int = 0
    b: int = 0
    c: int = 0
    d: int = 0
    e: int = 0
    h: int = 0
    l: int = 0  # noqa: E741
    carry: bool = False
    zero: bool = False
    sign: bool = False
    parity: bool = False
    auxiliary: bool = False
    memory: MemoryFile | None = field(default=None, repr=False, compare=False)

    def _memory(self) -> MemoryFile:
        if self.memory is None:
            raise RegisterError("register m needs a memory")
        return self.memory

    def get(self, name: str) -> int:
        """Return the value of register ``name``; ``m`` reads memory at HL."""
        key = _normalise(name)
        if key == "m":
            return self._memory().read(self.get_pair("h"))
        if key not in _SINGLE:
            raise RegisterError(f"invalid register to get: {name!r}")
        return getattr(self, key)

    def set(self, name: str, value: int) -> None:
        """Store ``value`` (masked to a byte) in register ``name``."""
        key = _normalise(name)
        value &= 0xFF
        if key == "m":
            self._memory().write(self.get_pair("h"), value)
        elif key in _SINGLE:
            setattr(self, key, value)
        else:
            raise RegisterError(f"invalid register to set: {name!r}")

    def _pair(self, name: str) -> tuple[str, str]:
        key = _normalise(name)
        try:
            return _PAIRS[key]
        except KeyError:
            raise RegisterError(f"invalid register pair: {name!r}") from None

    def get_pair(self, name: str) -> int:
        """Return the 16-bit value of pair ``b``, ``d`` or ``h``."""
        high, low = self._pair(name)
        return (getattr(self, high) << 8) | getattr(self, low)

    def set_pair(self, name: str, high: int, low: int) -> None:
        """Store ``high`` and ``low`` bytes in pair ``b``, ``d`` or ``h``."""
        high_name, low_name = self._pair(name)
        self.set(high_name, high)
        self.set(low_name, low)

    def add_with_carry(self, name: str, value: int) -> None:
        """Add ``value`` to register ``name``, setting carry on overflow."""
        total = self.get(name) + (value & 0xFF)
        self.carry = total > 0xFF
        self.set(name, total)

    def dump(self) -> str:
        """Return the register listing in hex."""
        return (
            "Registers(in hex):\n"
            f"    A: {self.a:x}\n"
            f"B: {self.b:x}\t"
            f"C: {self.c:x}\n"
            f"D: {self.d:x}\t"
            f"E: {self.e:x}\n"
            f"H: {self.h:x}\t"
            f"L: {self.l:x}\n"
        )