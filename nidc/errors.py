"""Error types raised while lexing, parsing and generating code."""

from __future__ import annotations


class NidError(Exception):
    """Base error, optionally tied to a line of the source being processed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class LexError(NidError):
    """Raised when source text cannot be broken into tokens."""


class CompileError(NidError):
    """Raised when a program cannot be turned into assembly or binary."""