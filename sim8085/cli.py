"""Command line: read instructions from standard input and run them."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .assembler import ParseError
from .instructions import Halt
from .machine import Machine
from .memory import MemoryFormatError, open_memory
from .registers import RegisterError

PROGNAME = "s8085"
MEMORY_FILE = "memory"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulator on standard input; return the exit status."""
    parser = argparse.ArgumentParser(
        prog=PROGNAME, description="Read 8085 instructions from standard input."
    )
    parser.parse_args(argv)

    path = Path(MEMORY_FILE)
    creating = not path.exists()
    if creating:
        print("creating `memory' file...", end="", file=sys.stderr)
    try:
        memory = open_memory(path)
    except OSError as exc:
        print(f"\nmemory file: {exc}", file=sys.stderr)
        return 1
    if creating:
        print("done", file=sys.stderr)

    with memory:
        machine = Machine(memory)
        for line in sys.stdin:
            try:
                machine.feed(line)
            except Halt:
                print("hlt instruction. exiting.", file=sys.stderr)
                return 0
            except ParseError as exc:
                print(exc, file=sys.stderr)
                return 1
            except MemoryFormatError as exc:
                print(exc, file=sys.stderr)
                return 1
            except RegisterError as exc:
                print(exc, file=sys.stderr)
            sys.stdout.write(machine.registers.dump())
    return 0