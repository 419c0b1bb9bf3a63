import pytest

from nidc.asm_lexer import tokenize
from nidc.asm_parser import op_to_bin, parse_tokens


@pytest.mark.parametrize(
    "name,code",
    [("nop", "000000"), ("ld", "000001"), ("ldi", "000010"), ("blt", "100000")],
)
def test_opcodes(name, code):
    assert op_to_bin(name) == code


def test_unknown_operation():
    with pytest.raises(ValueError, match="lsl"):
        op_to_bin("lsl")


def test_nop_gets_default_amode():
    assert parse_tokens(tokenize("nop\n")) == [op_to_bin("nop") + "00"]


def test_instruction_layout():
    numeric = tokenize("ldi r1 5\n")[2].value
    (line,) = parse_tokens(tokenize("ldi r1 5\n"))
    assert line.startswith(op_to_bin("ldi") + "00")
    assert line.endswith(numeric)
    register_bits = line[8:12]
    assert int(register_bits, 2) == 1


def test_explicit_amode_replaces_default():
    (line,) = parse_tokens(tokenize("ld a2 r1 3\n"))
    assert line.startswith(op_to_bin("ld") + "2")


def test_unterminated_line_is_dropped():
    assert parse_tokens(tokenize("nop")) == []


def test_one_line_per_eol():
    source = "nop\nldi r2 9\nret\n"
    assert len(parse_tokens(tokenize(source))) == source.count("\n")


def test_empty_input():
    assert parse_tokens([]) == []