import pytest

from nidc.asm_lexer import (
    AsmToken,
    AsmTokenType,
    export_tokens,
    remove_comments,
    strip_comments,
    tokenize,
)
from nidc.errors import LexError


def test_tokenize_simple_instruction():
    tokens = tokenize("ldi r1, 5\n")
    assert [t.token_type for t in tokens] == [
        AsmTokenType.OPERATION,
        AsmTokenType.REGISTER,
        AsmTokenType.NUMERIC,
        AsmTokenType.EOL,
    ]
    assert tokens[0].value == "ldi"
    assert tokens[1].value == "1"


def test_numeric_is_sixteen_bit_binary():
    numeric = tokenize("ldi r0 5\n")[2]
    assert len(numeric.value) == 16
    assert int(numeric.value, 2) == 5


def test_amode_token():
    tokens = tokenize("ld a2 r3 7\n")
    assert tokens[1] == AsmToken("2", AsmTokenType.AMODE)
    assert tokens[2] == AsmToken("3", AsmTokenType.REGISTER)


def test_comments_are_ignored():
    tokens = tokenize("nop ; do nothing here\n")
    assert tokens == [AsmToken("nop", AsmTokenType.OPERATION), AsmToken("", AsmTokenType.EOL)]


def test_routine_name():
    tokens = tokenize("loop:\n")
    assert tokens[0] == AsmToken("loop", AsmTokenType.ROUTINE_NAME)
    assert tokens[1].token_type is AsmTokenType.EOL


def test_one_eol_per_line():
    source = "nop\nnop\nret\n"
    eols = [t for t in tokenize(source) if t.token_type is AsmTokenType.EOL]
    assert len(eols) == source.count("\n")


def test_invalid_word():
    with pytest.raises(LexError, match="Invalid word"):
        tokenize("bogus r1\n")


def test_invalid_character_reports_line():
    with pytest.raises(LexError) as info:
        tokenize("nop\n$\n")
    assert info.value.line == 2


def test_strip_comments_keeps_newlines():
    assert strip_comments("a;b\nc") == "a\nc"


def test_remove_comments_joins_lines():
    assert remove_comments("a;b\nc;d") == "ac"


def test_export_tokens_prints_each(capsys):
    export_tokens(tokenize("nop\n"))
    out = capsys.readouterr().out
    assert out.count("Token: ") == 2