"""Bookkeeping of data memory and registers during code generation."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from nidc.errors import CompileError

_U16_MAX = 0xFFFF
_U8_MAX = 0xFF


@dataclass(frozen=True)
class MemoryItem:
    """A variable and where it lives: an address, and possibly a register."""

    var_id: int
    reg: int | None
    addr: int


def read_from_dm(register: int, addr: int) -> str:
    """Load from a data memory address into a register."""
    return f"ld, r{register}, {addr}"


def load_const(register: int, value: int) -> str:
    """Load a constant into a register."""
    return f"ldi, r{register}, {value}"


class MemoryManager:
    """Tracks the data memory stack, variable addresses and register usage."""

    def __init__(self, max_addr: int, max_regs: int) -> None:
        if not 0 <= max_addr <= _U16_MAX:
            raise ValueError(f"max_addr must be between 0 and {_U16_MAX}, got {max_addr}")
        if not 0 <= max_regs <= _U8_MAX:
            raise ValueError(f"max_regs must be between 0 and {_U8_MAX}, got {max_regs}")
        self.max_addr = max_addr
        self.max_regs = max_regs
        self.stack_ptr = 0
        # Range reserved by the user that the compiler must not allocate in.
        self.prealloc_start = _U16_MAX
        self.prealloc_end = _U16_MAX
        self._mem_map: list[MemoryItem] = []
        self._reg_map: deque[MemoryItem] = deque()

    def _in_prealloc(self) -> bool:
        return self.prealloc_start <= self.stack_ptr <= self.prealloc_end

    def push_to_stack(self, register: int) -> str:
        """Store a register at the next free stack position."""
        if self._in_prealloc() and self.prealloc_end < self.max_addr:
            self.stack_ptr = self.prealloc_end + 1
        if self._in_prealloc():
            raise CompileError("Trying to allocated memory inside user defined range!")
        if self.stack_ptr >= self.max_addr:
            raise CompileError("Trying to allocated outside of MAX_ADDR!")
        output = f"st, r{register}, {self.stack_ptr}"
        self.stack_ptr += 1
        return output

    def pop_from_stack(self, register: int) -> str:
        """Load the top stack position into a register."""
        if self._in_prealloc() and self.prealloc_start > 0:
            self.stack_ptr = self.prealloc_start - 1
        output = f"ld, r{register}, {self.stack_ptr}"
        self.decrement_stack_ptr()
        return output

    def write_to_dm(self, register: int, addr: int) -> str:
        """Store a register at a data memory address."""
        if addr >= self.max_addr:
            raise CompileError("Trying to allocated outside of MAX_ADDR!")
        return f"st, r{register}, {addr}"

    def decrement_stack_ptr(self) -> None:
        """Move the stack pointer down one position."""
        if self.stack_ptr == 0:
            raise CompileError("Stack pointer underflow!")
        self.stack_ptr -= 1

    def push_to_mem_map(self, var_id: int, address: int) -> None:
        """Record the address of a variable."""
        if address >= self.max_addr:
            raise CompileError("Trying to allocate outside of MAX_ADDR!")
        self._mem_map.append(MemoryItem(var_id, None, address))

    def read_from_mem_map(self, var_id: int) -> int | None:
        """Return the address of a variable, or None if it has none."""
        return next((item.addr for item in self._mem_map if item.var_id == var_id), None)

    def remove_from_mem_map(self, var_id: int) -> None:
        """Forget the most recently recorded address of a variable."""
        for index in reversed(range(len(self._mem_map))):
            if self._mem_map[index].var_id == var_id:
                del self._mem_map[index]
                return

    def remove_mem_from_compiler(self, start: int | None, end: int | None) -> None:
        """Reserve a memory range the compiler must not allocate in."""
        if start is None:
            return
        end_addr = self.max_addr if end is None else end
        if start > end_addr:
            raise CompileError("Invalid memory range set with PREALLOC macro!")
        self.prealloc_start = start
        self.prealloc_end = end_addr

    def use_reg(self, item: MemoryItem) -> None:
        """Mark a register as the most recently used holder of a variable."""
        if item.reg is None:
            raise CompileError(
                "Trying to use new item item in REG_MAP without a set reg field!"
            )
        for index in reversed(range(len(self._reg_map))):
            if self._reg_map[index] == item:
                del self._reg_map[index]
                break
        self._reg_map.append(item)

    def get_reg(self, var_id: int | None) -> int:
        """Return the register holding a variable, or the best one to reuse."""
        if var_id is not None:
            for item in self._reg_map:
                if item.var_id == var_id:
                    return item.reg  # type: ignore[return-value]
        if len(self._reg_map) == self.max_regs:
            evicted = self._reg_map.popleft()
            return evicted.reg  # type: ignore[return-value]
        return len(self._reg_map)

    def get_var_id_from_addr(self, addr: int) -> int | None:
        """Return the variable stored at an address, if any."""
        return next((item.var_id for item in self._mem_map if item.addr == addr), None)

    def already_in_reg(self, var_id: int) -> int | None:
        """Return the register a variable is loaded in, if any."""
        return next((item.reg for item in self._reg_map if item.var_id == var_id), None)