"""Breaks NID source text into tokens for the parser."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, auto

from nidc.errors import LexError


class TokenType(Enum):
    INTEGER = auto()
    FLOATING = auto()
    STRING = auto()
    CHAR = auto()
    BOOL = auto()
    IDENTIFIER = auto()
    ASSIGNMENT = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    OPEN_SCOPE = auto()
    CLOSE_SCOPE = auto()
    ARRAY_ACCESS_OPEN = auto()
    ARRAY_ACCESS_CLOSE = auto()
    BINARY_OPERATOR = auto()
    COMPARISON = auto()
    LOGIC_OPERATOR = auto()
    TYPE_INDICATOR = auto()
    LOOP = auto()
    BRANCH = auto()
    SEPARATOR = auto()
    MEMBER = auto()
    POINTER = auto()
    REFERENCE = auto()
    RETURN = auto()
    ASM = auto()
    EOL = auto()
    EOF = auto()
    MACRO = auto()
    BUILTIN = auto()


@dataclass(frozen=True)
class Token:
    value: str
    token_type: TokenType


_SINGLE_CHARS = {
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "{": TokenType.OPEN_SCOPE,
    "}": TokenType.CLOSE_SCOPE,
    "[": TokenType.ARRAY_ACCESS_OPEN,
    "]": TokenType.ARRAY_ACCESS_CLOSE,
    ",": TokenType.SEPARATOR,
    ".": TokenType.MEMBER,
    ";": TokenType.EOL,
    "+": TokenType.BINARY_OPERATOR,
    "-": TokenType.BINARY_OPERATOR,
    "/": TokenType.BINARY_OPERATOR,
}

_KEYWORDS = {
    "void": TokenType.TYPE_INDICATOR,
    "int": TokenType.TYPE_INDICATOR,
    "float": TokenType.TYPE_INDICATOR,
    "string": TokenType.TYPE_INDICATOR,
    "char": TokenType.TYPE_INDICATOR,
    "bool": TokenType.TYPE_INDICATOR,
    "true": TokenType.BOOL,
    "false": TokenType.BOOL,
    "if": TokenType.BRANCH,
    "else": TokenType.BRANCH,
    "while": TokenType.LOOP,
    "return": TokenType.RETURN,
    "asm": TokenType.ASM,
}

BUILTINS = frozenset({"sleep", "move_to", "is_pressed"})

_WHITESPACE = frozenset(" \n\r")


def _is_letter(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_num(char: str) -> bool:
    return char.isnumeric()


def _is_num_part(char: str) -> bool:
    return _is_num(char) or char == "."


class _Cursor:
    """Read position over the source with one character of lookahead."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self.line = 1

    def __bool__(self) -> bool:
        return self._pos < len(self._text)

    def peek(self) -> str:
        return self._text[self._pos] if self else ""

    def advance(self) -> str:
        char = self.peek()
        if char:
            self._pos += 1
            if char == "\n":
                self.line += 1
        return char

    def take_while(self, pred: Callable[[str], bool]) -> str:
        start = self._pos
        while self and pred(self._text[self._pos]):
            self._pos += 1
        return self._text[start:self._pos]

    def take_if(self, expected: str) -> bool:
        if self.peek() == expected:
            self._pos += 1
            return True
        return False


def export_tokens(tokens: Iterable[Token]) -> None:
    """Print every token, for debugging."""
    for token in tokens:
        print(f"Token: {token}")


def remove_comments(text: str) -> str:
    """Drop everything after '//' on each line and join the lines together."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return "".join(line.removesuffix("\r").split("//", 1)[0] for line in lines)


def _word_token(word: str) -> Token:
    if word in _KEYWORDS:
        return Token(word, _KEYWORDS[word])
    if word in BUILTINS:
        return Token(word, TokenType.BUILTIN)
    return Token(word, TokenType.IDENTIFIER)


def _string_literal(cursor: _Cursor) -> str:
    chars: list[str] = []
    line = cursor.line
    while True:
        if not cursor:
            raise LexError("Unterminated string literal!", line)
        char = cursor.advance()
        if char == '"':
            return "".join(chars)
        chars.append(char)


def _char_literal(cursor: _Cursor) -> str:
    if not cursor:
        raise LexError("Unterminated char literal!", cursor.line)
    value = cursor.advance()
    if cursor.advance() != "'":
        raise LexError("More than one char not allowed!", cursor.line)
    return value


def _next_token(cursor: _Cursor, char: str) -> Token | None:
    if char in _SINGLE_CHARS:
        return Token(char, _SINGLE_CHARS[char])
    if char == "=":
        if cursor.take_if("="):
            return Token("==", TokenType.COMPARISON)
        return Token("=", TokenType.ASSIGNMENT)
    if char == "*":
        if _is_letter(cursor.peek()):
            return Token("*" + cursor.take_while(_is_letter), TokenType.POINTER)
        return Token("*", TokenType.BINARY_OPERATOR)
    if char == "&":
        cursor.advance()
        return Token("&" + cursor.take_while(_is_letter), TokenType.REFERENCE)
    if char in "!<>":
        value = char + "=" if cursor.take_if("=") else char
        return Token(value, TokenType.LOGIC_OPERATOR)
    if char == "|":
        if cursor.advance() != "|":
            raise LexError("Missing second | in logical OR operation!", cursor.line)
        return Token("||", TokenType.LOGIC_OPERATOR)
    if char == '"':
        return Token(_string_literal(cursor), TokenType.STRING)
    if char == "'":
        return Token(_char_literal(cursor), TokenType.CHAR)
    if char == "#":
        return Token(cursor.take_while(_is_letter), TokenType.MACRO)
    if _is_letter(char):
        return _word_token(char + cursor.take_while(_is_letter))
    if _is_num(char):
        value = char + cursor.take_while(_is_num_part)
        kind = TokenType.FLOATING if "." in value else TokenType.INTEGER
        return Token(value, kind)
    if char in _WHITESPACE:
        return None
    raise LexError(f"Invalid char supplied: {char}", cursor.line)


def tokenize(text: str) -> list[Token]:
    """Turn NID source into a list of tokens."""
    cursor = _Cursor(text)
    tokens: list[Token] = []
    while cursor:
        char = cursor.advance()
        token = _next_token(cursor, char)
        if token is not None:
            tokens.append(token)
    return tokens