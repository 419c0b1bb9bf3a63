"""Turns assembly tokens into lines of binary digits."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import zip_longest

from nidc.asm_lexer import AsmToken, AsmTokenType

_OPCODES = {
    "nop": "000000",
    "ld": "000001",
    "ldi": "000010",
    "st": "000011",
    "psh": "000100",
    "pop": "000101",
    "add": "000110",
    "addi": "000111",
    "sub": "001000",
    "subi": "001001",
    "cmp": "001010",
    "cmpi": "001011",
    "mul": "001100",
    "muli": "001101",
    "div": "001110",
    "divi": "001111",
    "and": "010000",
    "andi": "010001",
    "or": "010010",
    "ori": "010011",
    "not": "010100",
    "xor": "010101",
    "xori": "010110",
    "call": "010111",
    "ret": "011000",
    "jmp": "011001",
    "jmpi": "011010",
    "beq": "011011",
    "bne": "011100",
    "bpr": "011101",
    "bnr": "011110",
    "bge": "011111",
    "blt": "100000",
}


def op_to_bin(name: str) -> str:
    """Return the six-bit opcode of an operation."""
    try:
        return _OPCODES[name]
    except KeyError:
        raise ValueError(f"Unknown operation: {name}") from None


def parse_tokens(tokens: Iterable[AsmToken]) -> list[str]:
    """Build one binary string per line; a line is only kept once it ends."""
    tokens = list(tokens)
    program: list[str] = []
    parts: list[str] = []

    for token, following in zip_longest(tokens, tokens[1:]):
        kind = token.token_type
        if kind is AsmTokenType.OPERATION:
            parts.append(op_to_bin(token.value))
            # Addressing mode defaults to 00 when none follows the operation.
            if following is not None and following.token_type is not AsmTokenType.AMODE:
                parts.append("00")
        elif kind is AsmTokenType.AMODE:
            parts.append(token.value)
        elif kind is AsmTokenType.REGISTER:
            parts.append(format(int(token.value), "04b"))
        elif kind is AsmTokenType.NUMERIC:
            parts.append(token.value)
        elif kind is AsmTokenType.EOL:
            program.append("".join(parts))
            parts.clear()

    return program