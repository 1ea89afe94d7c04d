import pytest

from sim8085.assembler import ParseError, SourceLine, build_instruction, parse_hex, parse_line


def no_labels(name):
    return None


@pytest.mark.parametrize(
    "text, expected",
    [("ff", 255), ("0x1A", 26), ("zz", 0), ("  -1", -1), ("12g", 0x12), ("", 0)],
)
def test_parse_hex(text, expected):
    assert parse_hex(text) == expected


def test_parse_line_with_label():
    assert parse_line("loop: mvi a 05\n") == SourceLine("loop", "mvi", ("a", "05"))


def test_lone_label_is_not_a_label():
    source = parse_line("loop:")
    assert source.label is None
    assert source.mnemonic == "loop:"


def test_parse_line_keeps_four_tokens():
    assert parse_line("mov a b c d").operands == ("a", "b", "c")


def test_parse_empty_line():
    with pytest.raises(ParseError):
        parse_line("   \n")


def test_build_mvi():
    ins = build_instruction(parse_line("MVI a 05"), no_labels)
    assert (ins.mnemonic, ins.register, ins.value) == ("mvi", "a", 5)


def test_build_mvi_masks_to_byte():
    ins = build_instruction(parse_line("mvi b 1ff"), no_labels)
    assert ins.value == 0xFF


def test_build_mov():
    ins = build_instruction(parse_line("mov a m"), no_labels)
    assert (ins.register, ins.source) == ("a", "m")


def test_build_address():
    ins = build_instruction(parse_line("lda 1234"), no_labels)
    assert ins.value == 0x1234


def test_build_lxi():
    ins = build_instruction(parse_line("lxi H 2050"), no_labels)
    assert (ins.register, ins.value) == ("h", 0x2050)


@pytest.mark.parametrize("line", ["lxi x 10", "inx a", "dcx"])
def test_bad_pair(line):
    with pytest.raises(ParseError):
        build_instruction(parse_line(line), no_labels)


@pytest.mark.parametrize("line", ["mvi a", "nop a", "mov a", "adi", "jmp"])
def test_wrong_operand_count(line):
    with pytest.raises(ParseError):
        build_instruction(parse_line(line), no_labels)


def test_unknown_mnemonic():
    with pytest.raises(ParseError):
        build_instruction(parse_line("foo a"), no_labels)


def test_label_resolved():
    ins = build_instruction(parse_line("jnz loop"), {"loop": 3}.get)
    assert (ins.label, ins.target) == ("loop", 3)


def test_label_unresolved():
    ins = build_instruction(parse_line("jmp later"), no_labels)
    assert ins.label == "later"
    assert ins.target is None