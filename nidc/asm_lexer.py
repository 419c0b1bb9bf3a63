"""Breaks assembly text into tokens the assembler understands."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, auto

from nidc.errors import LexError

OPERATIONS = frozenset(
    {
        "nop", "ld", "ldi", "st", "psh", "pop", "add", "addi", "sub", "subi",
        "cmp", "cmpi", "mul", "muli", "div", "divi", "and", "andi", "or", "ori",
        "not", "xor", "xori", "call", "ret", "jmp", "jmpi", "beq", "bne", "bpr",
        "bnr", "bge", "blt",
    }
)


class AsmTokenType(Enum):
    OPERATION = auto()
    AMODE = auto()
    REGISTER = auto()
    NUMERIC = auto()
    ROUTINE_NAME = auto()
    EOL = auto()


@dataclass(frozen=True)
class AsmToken:
    value: str
    token_type: AsmTokenType


class _Cursor:
    """Read position over a string with one character of lookahead."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def __bool__(self) -> bool:
        return self._pos < len(self._text)

    def peek(self) -> str:
        return self._text[self._pos] if self else ""

    def advance(self) -> str:
        char = self.peek()
        if char:
            self._pos += 1
        return char

    def take_while(self, pred: Callable[[str], bool]) -> str:
        start = self._pos
        while self and pred(self._text[self._pos]):
            self._pos += 1
        return self._text[start:self._pos]


def _is_letter(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_num(char: str) -> bool:
    return char.isnumeric()


def export_tokens(tokens: Iterable[AsmToken]) -> None:
    """Print every token, for debugging."""
    for token in tokens:
        print(f"Token: {token}")


def remove_comments(text: str) -> str:
    """Drop everything after ';' on each line and join the lines together."""
    return "".join(line.split(";", 1)[0] for line in text.splitlines())


def strip_comments(code: str) -> str:
    """Drop everything after ';' on each line, keeping the line breaks."""
    return "\n".join(line.split(";", 1)[0] for line in code.split("\n"))


def tokenize(text: str) -> list[AsmToken]:
    """Turn assembly source into a list of tokens."""
    cursor = _Cursor(strip_comments(text))
    tokens: list[AsmToken] = []
    line = 1

    while cursor:
        char = cursor.peek()
        if char == "\n":
            cursor.advance()
            tokens.append(AsmToken("", AsmTokenType.EOL))
            line += 1
        elif char in ", ":
            cursor.advance()
        elif _is_letter(char):
            word = cursor.take_while(_is_letter)
            following = cursor.peek()
            if char == "r" and _is_num(following):
                tokens.append(AsmToken(cursor.take_while(_is_num), AsmTokenType.REGISTER))
            elif char == "a" and _is_num(following):
                tokens.append(AsmToken(cursor.take_while(_is_num), AsmTokenType.AMODE))
            elif word in OPERATIONS:
                tokens.append(AsmToken(word, AsmTokenType.OPERATION))
            elif following == ":":
                cursor.advance()
                tokens.append(AsmToken(word, AsmTokenType.ROUTINE_NAME))
            else:
                raise LexError(f"Invalid word found! | {word}", line)
        elif _is_num(char):
            digits = cursor.take_while(_is_num)
            try:
                number = int(digits)
            except ValueError as exc:
                raise LexError(f"Invalid number | {digits}", line) from exc
            tokens.append(AsmToken(format(number, "016b"), AsmTokenType.NUMERIC))
        else:
            raise LexError(f"Invalid token detected! | {char}", line)

    return tokens