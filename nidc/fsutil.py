"""Reading source files and writing generated assembly."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def read_file(path: str | Path) -> str:
    """Return the whole content of a text file."""
    return Path(path).read_text(encoding="utf-8")


def write_program(program: Iterable[str], path: str | Path) -> None:
    """Write each instruction on its own line."""
    with open(path, "w", encoding="utf-8", newline="\n") as handle:
        for inst in program:
            handle.write(f"{inst}\n")