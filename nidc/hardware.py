"""Hardware description that the compiler targets, read from TOML."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

_U16_MAX = 0xFFFF
_U8_MAX = 0xFF


def _check_uint(name: str, value: object, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} must be between 0 and {maximum}, got {value}")


@dataclass(frozen=True)
class Hardware:
    """Memory size, register count and instruction set of the target CPU."""

    mem_addresses: int = 255
    registers: int = 8
    extended_instructions: bool = False

    def __post_init__(self) -> None:
        _check_uint("mem_addresses", self.mem_addresses, _U16_MAX)
        _check_uint("registers", self.registers, _U8_MAX)
        if not isinstance(self.extended_instructions, bool):
            raise ValueError(
                f"extended_instructions must be a boolean, got {self.extended_instructions!r}"
            )


def load_hardware(path: str | Path) -> Hardware:
    """Read a hardware configuration from a TOML file."""
    content = Path(path).read_text(encoding="utf-8")
    try:
        data = tomllib.loads(content.strip())
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse toml as hardware config! | {exc}") from exc

    fields = ("mem_addresses", "registers", "extended_instructions")
    missing = [name for name in fields if name not in data]
    if missing:
        raise ValueError(
            "Failed to parse toml as hardware config! missing: " + ", ".join(missing)
        )
    return Hardware(**{name: data[name] for name in fields})