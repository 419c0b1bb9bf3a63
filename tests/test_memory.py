import pytest

from nidc.errors import CompileError
from nidc.memory import MemoryItem, MemoryManager, load_const, read_from_dm


def test_read_from_dm_format():
    assert read_from_dm(2, 40) == "ld, r2, 40"


def test_load_const_format():
    assert load_const(1, -5) == "ldi, r1, -5"


def test_push_to_stack_advances_pointer():
    memory = MemoryManager(10, 4)
    assert memory.push_to_stack(3) == "st, r3, 0"
    assert memory.stack_ptr == 1
    assert memory.push_to_stack(4) == "st, r4, 1"
    assert memory.stack_ptr == 2


def test_push_to_stack_skips_reserved_range():
    memory = MemoryManager(10, 4)
    memory.remove_mem_from_compiler(0, 4)
    assert memory.push_to_stack(1) == "st, r1, 5"
    assert memory.stack_ptr == 6


def test_push_into_reserved_range_to_end_raises():
    memory = MemoryManager(10, 4)
    memory.remove_mem_from_compiler(0, None)
    assert memory.prealloc_end == memory.max_addr
    with pytest.raises(CompileError):
        memory.push_to_stack(1)


def test_push_past_max_addr_raises():
    memory = MemoryManager(2, 4)
    memory.push_to_stack(0)
    memory.push_to_stack(0)
    with pytest.raises(CompileError):
        memory.push_to_stack(0)


def test_write_to_dm_bounds():
    memory = MemoryManager(10, 4)
    assert memory.write_to_dm(1, 9) == "st, r1, 9"
    with pytest.raises(CompileError):
        memory.write_to_dm(1, 10)


def test_decrement_stack_ptr():
    memory = MemoryManager(10, 4)
    with pytest.raises(CompileError):
        memory.decrement_stack_ptr()
    memory.push_to_stack(0)
    memory.decrement_stack_ptr()
    assert memory.stack_ptr == 0


def test_pop_from_stack_reads_current_pointer():
    memory = MemoryManager(10, 4)
    memory.push_to_stack(0)
    memory.push_to_stack(1)
    before = memory.stack_ptr
    assert memory.pop_from_stack(5) == f"ld, r5, {before}"
    assert memory.stack_ptr == before - 1


def test_mem_map_round_trip():
    memory = MemoryManager(10, 4)
    assert memory.read_from_mem_map(7) is None
    memory.push_to_mem_map(7, 3)
    assert memory.read_from_mem_map(7) == 3
    assert memory.get_var_id_from_addr(3) == 7
    assert memory.get_var_id_from_addr(4) is None
    memory.remove_from_mem_map(7)
    assert memory.read_from_mem_map(7) is None


def test_push_to_mem_map_out_of_range():
    memory = MemoryManager(10, 4)
    with pytest.raises(CompileError):
        memory.push_to_mem_map(1, 10)


def test_remove_from_mem_map_removes_latest_entry():
    memory = MemoryManager(10, 4)
    memory.push_to_mem_map(1, 3)
    memory.push_to_mem_map(1, 5)
    memory.remove_from_mem_map(1)
    assert memory.read_from_mem_map(1) == 3


def test_remove_mem_from_compiler():
    memory = MemoryManager(10, 4)
    before = (memory.prealloc_start, memory.prealloc_end)
    memory.remove_mem_from_compiler(None, 4)
    assert (memory.prealloc_start, memory.prealloc_end) == before
    memory.remove_mem_from_compiler(2, 6)
    assert (memory.prealloc_start, memory.prealloc_end) == (2, 6)
    with pytest.raises(CompileError):
        memory.remove_mem_from_compiler(7, 6)


def test_use_reg_requires_register():
    memory = MemoryManager(10, 4)
    with pytest.raises(CompileError):
        memory.use_reg(MemoryItem(1, None, 0))


def test_get_reg_hands_out_next_free_register():
    memory = MemoryManager(10, 4)
    assert memory.get_reg(None) == 0
    memory.use_reg(MemoryItem(1, 0, 0))
    assert memory.get_reg(None) == 1
    assert memory.get_reg(1) == 0
    assert memory.already_in_reg(1) == 0
    assert memory.already_in_reg(2) is None


def test_get_reg_evicts_least_recently_used():
    memory = MemoryManager(10, 2)
    memory.use_reg(MemoryItem(1, 0, 0))
    memory.use_reg(MemoryItem(2, 1, 1))
    assert memory.get_reg(None) == 0
    assert memory.already_in_reg(1) is None
    assert memory.already_in_reg(2) == 1


def test_use_reg_refreshes_existing_item():
    memory = MemoryManager(10, 2)
    first = MemoryItem(1, 0, 0)
    memory.use_reg(first)
    memory.use_reg(MemoryItem(2, 1, 1))
    memory.use_reg(first)
    assert memory.get_reg(None) == 1
    assert memory.already_in_reg(1) == 0


@pytest.mark.parametrize("max_addr, max_regs", [(-1, 4), (0x10000, 4), (10, 256), (10, -1)])
def test_init_validates_limits(max_addr, max_regs):
    with pytest.raises(ValueError):
        MemoryManager(max_addr, max_regs)