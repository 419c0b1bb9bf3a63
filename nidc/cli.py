"""Command line options of the compiler."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Args:
    """Options the compiler was started with."""

    filename: str = ""
    verbose: bool = False
    help: bool = False
    hardware_conf: Path | None = None
    compile_only: bool = False
    assemble_only: bool = False
    string_output: bool = False


def build_args(argv: Sequence[str] | None = None) -> Args:
    """Parse command line arguments; defaults to the process arguments."""
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)
    args = Args()

    for i, arg in enumerate(argv):
        if ".nid" in arg or ".ass" in arg:
            args.filename = arg
        if arg in ("--verbose", "-v"):
            args.verbose = True
        if arg in ("--help", "-h"):
            args.help = True
        if arg in ("--hardware-conf", "-hc"):
            if i + 1 >= len(argv):
                raise ValueError("Error getting path from --hardware-conf!")
            args.hardware_conf = Path(argv[i + 1])
        if arg in ("--string-output", "-s"):
            args.string_output = True
        if arg in ("--compile-only", "-c"):
            args.compile_only = True
        if arg in ("--assemble-only", "-a"):
            args.assemble_only = True

    return args


def help_text() -> str:
    """Return the usage message."""
    return (
        "nidc [options] [target].nid\n"
        "Options:\n"
        "-h  | --help                  Prints this message.\n"
        "-v  | --verbose               Run compiler in verbose mode.\n"
        "-hc | --hardware-conf         Specify custom hardware configuration.\n"
        "-s  | --string-output         Output binary as a text file, rather than actual binary file.\n"
        "-c  | --compile-only          Compile to ASS, without assembling to binary.\n"
        "-a  | --assemble-only         Only assemble a .ass file.\n"
    )


def print_help() -> None:
    """Write the usage message, followed by a blank line, to standard output."""
    out = sys.stdout
    out.write(f"{help_text()}\n")
    out.flush()