"""The move_to built-in: placing a variable at a chosen memory address."""

from __future__ import annotations

import warnings

from nidc.errors import CompileError
from nidc.memory import MemoryManager, read_from_dm


def move_to(memory: MemoryManager, var_id: int, addr: int) -> list[str]:
    """Store a variable at a specific address and record its new location."""
    if memory.prealloc_start > addr or memory.prealloc_end < addr:
        warnings.warn(
            "Trying to allocate memory inside compiler space! "
            "This may result in memory being overwritten/corrupted!",
            RuntimeWarning,
            stacklevel=2,
        )
    if addr > memory.max_addr:
        raise CompileError(f"addr outside MAX_ADDR! | {addr} > {memory.max_addr}")

    instructions: list[str] = []
    reg = memory.already_in_reg(var_id)
    if reg is None:
        reg = memory.get_reg(var_id)
        var_addr = memory.read_from_mem_map(var_id)
        if var_addr is None:
            raise CompileError("Invalid var_id supplied to write_to()!")
        instructions.append(read_from_dm(reg, var_addr))
    instructions.append(f"st, r{reg}, {addr}")

    memory.remove_from_mem_map(var_id)
    memory.push_to_mem_map(var_id, addr)
    return instructions