"""Assembly snippets for the built-in functions of the language."""

from __future__ import annotations

_U16_MAX = 0xFFFF


def _check_u16(name: str, value: int) -> None:
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must be between 0 and {_U16_MAX}, got {value}")


def is_pressed(scancode: int, branch_name: str) -> list[str]:
    """Test a keyboard scancode and branch when it is pressed."""
    _check_u16("scancode", scancode)
    return [f"kbd, {scancode}", f"byk {branch_name}"]


def sleep(ms: int) -> list[str]:
    """Wait for the given number of milliseconds."""
    _check_u16("ms", ms)
    return [f"wait, {ms}"]