import pytest

from nidc.errors import LexError
from nidc.lexer import Token, TokenType, export_tokens, remove_comments, tokenize


def types(tokens):
    return [t.token_type for t in tokens]


def values(tokens):
    return [t.value for t in tokens]


def test_assignment_statement():
    tokens = tokenize("int x = 5;")
    assert tokens == [
        Token("int", TokenType.TYPE_INDICATOR),
        Token("x", TokenType.IDENTIFIER),
        Token("=", TokenType.ASSIGNMENT),
        Token("5", TokenType.INTEGER),
        Token(";", TokenType.EOL),
    ]


def test_brackets_and_separators():
    tokens = tokenize("(){}[],.")
    assert types(tokens) == [
        TokenType.OPEN_PAREN,
        TokenType.CLOSE_PAREN,
        TokenType.OPEN_SCOPE,
        TokenType.CLOSE_SCOPE,
        TokenType.ARRAY_ACCESS_OPEN,
        TokenType.ARRAY_ACCESS_CLOSE,
        TokenType.SEPARATOR,
        TokenType.MEMBER,
    ]
    assert "".join(values(tokens)) == "(){}[],."


def test_comparison_versus_assignment():
    assert tokenize("a == b")[1] == Token("==", TokenType.COMPARISON)
    assert tokenize("a = b")[1] == Token("=", TokenType.ASSIGNMENT)


@pytest.mark.parametrize("op", ["!", "!=", "<", "<=", ">", ">=", "||"])
def test_logic_operators(op):
    tokens = tokenize(f"a {op} b")
    assert tokens[1] == Token(op, TokenType.LOGIC_OPERATOR)
    assert len(tokens) == 3


@pytest.mark.parametrize("op", ["+", "-", "/", "*"])
def test_binary_operators(op):
    tokens = tokenize(f"1 {op} 2")
    assert tokens[1] == Token(op, TokenType.BINARY_OPERATOR)


def test_pointer_and_reference():
    assert tokenize("*ptr")[0] == Token("*ptr", TokenType.POINTER)
    # The character after '&' is consumed before the name is read.
    assert tokenize("&&name")[0] == Token("&name", TokenType.REFERENCE)


def test_single_pipe_is_an_error():
    with pytest.raises(LexError):
        tokenize("a | b")


def test_string_and_char_literals():
    tokens = tokenize('"hello world" \'c\'')
    assert tokens == [
        Token("hello world", TokenType.STRING),
        Token("c", TokenType.CHAR),
    ]


def test_unterminated_string_is_an_error():
    with pytest.raises(LexError):
        tokenize('"never closed')


def test_multi_char_literal_is_an_error():
    with pytest.raises(LexError, match="More than one char"):
        tokenize("'ab'")


def test_numbers_integer_and_floating():
    assert tokenize("42")[0] == Token("42", TokenType.INTEGER)
    assert tokenize("3.14")[0] == Token("3.14", TokenType.FLOATING)


def test_keywords_builtins_and_identifiers():
    tokens = tokenize("while if else return asm true false sleep move_to is_pressed foo")
    assert types(tokens) == [
        TokenType.LOOP,
        TokenType.BRANCH,
        TokenType.BRANCH,
        TokenType.RETURN,
        TokenType.ASM,
        TokenType.BOOL,
        TokenType.BOOL,
        TokenType.BUILTIN,
        TokenType.BUILTIN,
        TokenType.BUILTIN,
        TokenType.IDENTIFIER,
    ]


@pytest.mark.parametrize("word", ["void", "int", "float", "string", "char", "bool"])
def test_type_indicators(word):
    assert tokenize(word) == [Token(word, TokenType.TYPE_INDICATOR)]


def test_macro():
    assert tokenize("#PREALLOC") == [Token("PREALLOC", TokenType.MACRO)]


def test_identifier_stops_at_digit():
    tokens = tokenize("x1")
    assert tokens == [Token("x", TokenType.IDENTIFIER), Token("1", TokenType.INTEGER)]


def test_whitespace_is_skipped():
    assert tokenize(" \r\n  ") == []


def test_invalid_character_raises():
    with pytest.raises(LexError, match="Invalid char"):
        tokenize("x = $;")


def test_remove_comments_joins_lines():
    text = "int x = 1; // set x\nint y = 2;\r\n// whole line\n"
    assert remove_comments(text) == "int x = 1; int y = 2;"


def test_remove_comments_then_tokenize():
    tokens = tokenize(remove_comments("x = 1; // comment\ny = 2;"))
    assert values(tokens) == ["x", "=", "1", ";", "y", "=", "2", ";"]


def test_export_tokens_prints_each(capsys):
    tokens = tokenize("a;")
    export_tokens(tokens)
    out = capsys.readouterr().out.splitlines()
    assert len(out) == len(tokens)
    assert all(line.startswith("Token: ") for line in out)