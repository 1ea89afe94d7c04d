"""Line-oriented memory image: one two-digit hex byte per line."""

from __future__ import annotations

import random
from pathlib import Path
from typing import BinaryIO

LINE_WIDTH = 3
MEMORY_LINES = 0xFFFF
_HEX_DIGITS = "0123456789abcdefABCDEF"


class MemoryFormatError(ValueError):
    """Raised when a memory line is missing or malformed."""


def _leading_hex(text: bytes) -> int:
    """Parse the leading hex number of ``text`` leniently; no digits gives 0."""
    body = text.lstrip().decode("ascii", errors="replace")
    negative = body.startswith("-")
    if body[:1] in ("-", "+"):
        body = body[1:]
    digits = ""
    for char in body:
        if char not in _HEX_DIGITS:
            break
        digits += char
    value = int(digits, 16) if digits else 0
    return (-value if negative else value) & 0xFF


class MemoryFile:
    """Byte-addressed memory backed by a seekable binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def __enter__(self) -> MemoryFile:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._stream.close()

    def read(self, address: int) -> int:
        """Return the byte stored at ``address``."""
        offset = (address & 0xFFFF) * LINE_WIDTH
        self._stream.seek(offset)
        line = self._stream.read(LINE_WIDTH)
        if len(line) != LINE_WIDTH:
            raise MemoryFormatError(
                f"short memory line at position {offset} ({offset:x} h)"
            )
        if line[2:] != b"\n":
            raise MemoryFormatError(
                f"expected newline at position {offset} ({offset:x} h)"
            )
        return _leading_hex(line[:2])

    def write(self, address: int, value: int) -> None:
        """Store ``value`` (masked to a byte) at ``address``."""
        self._stream.seek((address & 0xFFFF) * LINE_WIDTH)
        self._stream.write(f"{value & 0xFF:2x}".encode("ascii"))
        self._stream.flush()


def create_memory_image(stream: BinaryIO, rng: random.Random | None = None) -> None:
    """Fill ``stream`` with a full memory image of random hex bytes."""
    rng = rng or random.Random()
    digits = iter(rng.choices(_HEX_DIGITS, k=2 * MEMORY_LINES))
    image = "".join(f"{high}{low}\n" for high, low in zip(digits, digits))
    stream.write(image.encode("ascii"))
    stream.flush()


def open_memory(path: str | Path, rng: random.Random | None = None) -> MemoryFile:
    """Open the memory image at ``path``, creating a random one if it is missing."""
    path = Path(path)
    try:
        stream = path.open("r+b")
    except FileNotFoundError:
        stream = path.open("w+b")
        try:
            create_memory_image(stream, rng)
        except BaseException:
            stream.close()
            raise
    return MemoryFile(stream)