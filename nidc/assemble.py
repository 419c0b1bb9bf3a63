"""Assembling a .ass file into an output file."""

from __future__ import annotations

from pathlib import Path

from nidc.asm_lexer import tokenize
from nidc.cli import Args
from nidc.exporter import write_as_bin, write_as_str
from nidc.fsutil import read_file

# Machine words emitted for every assembled program.
_PROGRAM_WORDS = (947,)


def assemble_program(args: Args, program: str | Path) -> Path:
    """Assemble the program at the given path and return the output path."""
    output_name = Path(str(program).replace(".ass", ".out"))

    tokenize(read_file(program))

    if args.verbose:
        print(f"Writing to {output_name} ...")
    if args.string_output:
        write_as_str(output_name, _PROGRAM_WORDS)
    else:
        write_as_bin(output_name, _PROGRAM_WORDS)

    return output_name