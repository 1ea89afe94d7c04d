# sim8085

An interactive simulator for a subset of the Intel 8085 instruction set.
You type one instruction per line. Each instruction runs as soon as it is
read, and the registers are printed after it.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

```
sim8085
```

The command reads instructions from standard input. It takes no arguments
apart from `--help`. Memory is kept in a text file named `memory` in the
current directory. Each line of that file holds one byte as two hex digits,
and the line number is the address. If the file does not exist, it is
created and filled with random hex digits. While the file is being created,
`creating `memory' file...done` is printed to standard error.

A line has the form `[label:] mnemonic [operands]`. Only the first four
words on a line are read. Mnemonics are not case sensitive. Numbers are
hexadecimal with no suffix, and a leading `0x` is accepted. An example
session:

```
mvi a 05
loop: dcr a
jnz loop
hlt
```

After each instruction the registers A, B, C, D, E, H and L are printed in
hex. How errors are handled:

- `hlt` prints `hlt instruction. exiting.` to standard error and ends with status 0.
- A line that cannot be parsed ends the program with status 1. This covers an
  unknown mnemonic, the wrong number of operands, and a register pair other
  than `b`, `d` or `h`.
- A malformed line in the memory file also ends the program with status 1.
- An invalid register name is reported to standard error, and reading goes on.

### Jumps and labels

Every instruction that is read is stored. A jump to a known label runs the
stored instructions from that label to the end of the program, so loops
written line by line work as you would expect. A jump to a label that is not
yet defined stops execution. Later lines are still stored, but they are not
run. Execution starts again once a line defines the awaited label. Messages
about these events are logged through the `sim8085.machine` logger.

### Supported instructions

| Kind | Mnemonics |
|------|-----------|
| No operand | `nop`, `hlt`, `rrc`, `xchg` |
| Register | `inr`, `dcr`, `add`, `cmp` |
| Register, value | `mvi` |
| Register, register | `mov` |
| Value | `adi`, `cpi` |
| Address | `lda`, `sta`, `lhld`, `shld` |
| Register pair (`b`, `d`, `h`) | `inx`, `dcx`, `ldax`, `stax` |
| Pair, 16-bit value | `lxi` |
| Label | `jmp`, `jc`, `jnc`, `jz`, `jnz` |

Register `m` refers to the memory byte addressed by the `HL` pair.

## What it does not do

- Only the instructions listed above are supported.
- Only the carry and zero flags are ever changed. `Registers` has sign,
  parity and auxiliary-carry fields, but no instruction updates them.
- There is no stack, no subroutine call or return, and no I/O port.
- Programs cannot be loaded from a file given as an argument. Pipe the file
  into standard input instead.

## Library use

The parts can also be used on their own:

- `sim8085.memory`: `MemoryFile` (reads and writes bytes in a seekable binary
  stream), `create_memory_image`, `open_memory` and `MemoryFormatError`.
- `sim8085.registers`: `Registers` and `RegisterError`.
- `sim8085.instructions`: `Instruction`, `ArgKind`, `lookup`, `Halt`, and one
  function per mnemonic.
- `sim8085.assembler`: `parse_line`, `parse_hex`, `build_instruction`,
  `SourceLine` and `ParseError`.
- `sim8085.machine`: `Machine`, which stores and runs the instructions fed to it.
- `sim8085.cli`: `main`, the command-line entry point.

```python
import io
from sim8085.memory import MemoryFile
from sim8085.machine import Machine

memory = MemoryFile(io.BytesIO(b"00\n" * 0x10000))
machine = Machine(memory)
machine.feed("mvi a 2a")
print(machine.registers.dump())
```