"""Parsing of source lines into instructions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .instructions import ArgKind, Instruction, lookup

MAX_TOKENS = 4
_PAIR_NAMES = frozenset("bdh")
_HEX_DIGITS = "0123456789abcdefABCDEF"

# Number of tokens, mnemonic included, that each operand shape requires.
_TOKEN_COUNTS = {
    ArgKind.REG_REG: 3,
    ArgKind.REG: 2,
    ArgKind.REG_VAL: 3,
    ArgKind.VAL: 2,
    ArgKind.VAL_VAL: 2,
    ArgKind.LABEL: 2,
    ArgKind.PAIR_VAL: 3,
    ArgKind.PAIR: 2,
    ArgKind.NONE: 1,
}


class ParseError(ValueError):
    """Raised when a source line cannot be turned into an instruction."""


@dataclass(frozen=True)
class SourceLine:
    """A tokenised source line: optional label, mnemonic and operands."""

    label: Optional[str]
    mnemonic: str
    operands: tuple[str, ...] = ()


def parse_hex(text: str) -> int:
    """Parse the leading hexadecimal number of ``text``; no digits gives 0."""
    body = text.lstrip()
    sign = -1 if body.startswith("-") else 1
    if body[:1] in ("-", "+"):
        body = body[1:]
    if body[:2].lower() == "0x" and body[2:3] and body[2] in _HEX_DIGITS:
        body = body[2:]
    digits = []
    for char in body:
        if char not in _HEX_DIGITS:
            break
        digits.append(char)
    return sign * int("".join(digits), 16) if digits else 0


def parse_line(line: str) -> SourceLine:
    """Split ``line`` into at most four tokens and detect a leading label."""
    tokens = line.split()[:MAX_TOKENS]
    if not tokens:
        raise ParseError("can't parse the instruction")
    label = None
    if len(tokens) > 1 and tokens[0].endswith(":"):
        label = tokens[0][:-1]
        tokens = tokens[1:]
    return SourceLine(label, tokens[0], tuple(tokens[1:]))


def _pair_name(token: str) -> str:
    lowered = token[0].lower()
    if lowered not in _PAIR_NAMES:
        raise ParseError(f"register pair must be b, d or h, got: {lowered}")
    return lowered


def build_instruction(
    source: SourceLine, resolver: Callable[[str], Optional[int]]
) -> Instruction:
    """Build the instruction for ``source``; ``resolver`` maps labels to positions."""
    try:
        operation = lookup(source.mnemonic)
    except KeyError:
        raise ParseError(f"invalid instruction: {source.mnemonic}") from None

    kind = operation.kind
    if len(source.operands) + 1 != _TOKEN_COUNTS[kind]:
        raise ParseError(f"incomplete instruction: {source.mnemonic}")

    ins = Instruction(operation.name)
    ops = source.operands
    if kind is ArgKind.REG_REG:
        ins.register, ins.source = ops[0][0], ops[1][0]
    elif kind is ArgKind.REG:
        ins.register = ops[0][0]
    elif kind is ArgKind.REG_VAL:
        ins.register = ops[0][0]
        ins.value = parse_hex(ops[1]) & 0xFF
    elif kind is ArgKind.VAL:
        ins.value = parse_hex(ops[0]) & 0xFF
    elif kind is ArgKind.VAL_VAL:
        ins.value = parse_hex(ops[0]) & 0xFFFF
    elif kind is ArgKind.LABEL:
        ins.label = ops[0]
        ins.target = resolver(ops[0])
    elif kind is ArgKind.PAIR_VAL:
        ins.value = parse_hex(ops[1]) & 0xFFFF
        ins.register = _pair_name(ops[0])
    elif kind is ArgKind.PAIR:
        ins.register = _pair_name(ops[0])
    return ins