"""Writing assembled words to a file, as bytes or as text."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from pathlib import Path

_WORD = struct.Struct("<I")


def _pack(word: int) -> bytes:
    try:
        return _WORD.pack(word)
    except struct.error as exc:
        raise ValueError(f"Not a 32-bit unsigned word: {word!r}") from exc


def write_as_bin(path: str | Path, binary: Iterable[int]) -> None:
    """Write each word as four little-endian bytes."""
    data = b"".join(_pack(word) for word in binary)
    Path(path).write_bytes(data)


def write_as_str(path: str | Path, binary: Iterable[int]) -> None:
    """Write each word as 32 binary digits, all on one line."""
    text = "".join(format(word, "032b") for word in binary if _pack(word))
    Path(path).write_text(text, encoding="ascii")