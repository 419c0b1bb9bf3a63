"""Lexers, syntax tree, code generator and assembler helpers for NID and ASS."""

__version__ = "0.1.0"