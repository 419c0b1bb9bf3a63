"""Assembly for arithmetic and comparisons between two operands."""

from __future__ import annotations

from nidc.errors import CompileError
from nidc.memory import MemoryManager, read_from_dm

_I16_MIN = -0x8000
_I16_MAX = 0x7FFF


def _i16(value: int) -> int:
    if not _I16_MIN <= value <= _I16_MAX:
        raise CompileError(f"Constant expression overflows 16 bits: {value}")
    return value


def _trunc_div(left: int, right: int) -> int:
    if right == 0:
        raise CompileError("Division by zero in constant expression!")
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


class Arithmetic:
    """Generates arithmetic instructions and remembers the latest result register.

    Each operation expects exactly two of its operands to be set; when only one
    register, address or constant is used, it is the first one.
    """

    def __init__(self, memory: MemoryManager) -> None:
        self.memory = memory
        self.latest_result = 0

    def _fold(self, value: int) -> list[str]:
        reg = self.memory.get_reg(None)
        self.latest_result = reg
        return [f"ldi, {reg}, {_i16(value)}"]

    def add(self, reg1, reg2, addr1, addr2, const1, const2) -> list[str]:
        """Add two operands."""
        if const1 is not None and const2 is not None:
            return self._fold(const1 + const2)
        op = "addi" if const1 is not None else "add"
        return self._perform_op(op, reg1, reg2, addr1, addr2, const1)

    def sub(self, reg1, reg2, addr1, addr2, const1, const2) -> list[str]:
        """Subtract the second operand from the first."""
        if const1 is not None and const2 is not None:
            return self._fold(const1 - const2)
        op = "subi" if const1 is not None else "sub"
        return self._perform_op(op, reg1, reg2, addr1, addr2, const1)

    def mul(self, reg1, reg2, addr1, addr2, const1, const2) -> list[str]:
        """Multiply two operands; multiplying by 2 becomes a shift."""
        if const1 is not None and const2 is not None:
            return self._fold(const1 * const2)
        if const1 is not None:
            if const1 == 2:
                return [self.lsl(self._require_reg(reg1))]
            return self._perform_op("muli", reg1, reg2, addr1, addr2, const1)
        return self._perform_op("mul", reg1, reg2, addr1, addr2, const1)

    def div(self, reg1, reg2, addr1, addr2, const1, const2) -> list[str]:
        """Divide the first operand by the second; dividing by 2 becomes a shift."""
        if const1 is not None and const2 is not None:
            return self._fold(_trunc_div(const1, const2))
        if const1 is not None:
            if const1 == 2:
                return [self.lsr(self._require_reg(reg1))]
            return self._perform_op("divi", reg1, reg2, addr1, addr2, const1)
        return self._perform_op("div", reg1, reg2, addr1, addr2, const1)

    def cmp(self, reg1, reg2, addr1, addr2, const1, const2) -> list[str]:
        """Compare two operands, affecting only the ALU flags."""
        if const1 is not None and const2 is not None:
            raise CompileError(
                "Compiler error! Two constants should not have entered the cmp() function!"
            )
        op = "cmpi" if const1 is not None else "cmp"
        return self._perform_op(op, reg1, reg2, addr1, addr2, const1)

    def lsl(self, register: int) -> str:
        """Logical shift left."""
        self.latest_result = register
        return f"lsl, r{register}"

    def lsr(self, register: int) -> str:
        """Logical shift right."""
        self.latest_result = register
        return f"lsr, r{register}"

    @staticmethod
    def _require_reg(register: int | None) -> int:
        if register is None:
            raise CompileError("No register set to work on!")
        return register

    def _perform_op(self, op, reg1, reg2, addr1, addr2, const1) -> list[str]:
        instructions: list[str] = []
        work_reg = reg1
        asm_addr = None
        const_val = None

        # A second register has to be pushed to the stack.
        if reg2 is not None:
            instructions.append(self.memory.push_to_stack(reg2))

        if reg1 is None and reg2 is None:
            if addr1 is not None:
                instructions.append(read_from_dm(0, addr1))
                var_id = self.memory.get_var_id_from_addr(addr1)
                work_reg = self.memory.get_reg(var_id)
                if addr2 is not None:
                    asm_addr = addr2
        elif reg2 is None:
            asm_addr = addr1

        if asm_addr is None and const1 is not None:
            const_val = const1

        if work_reg is None:
            raise CompileError("No register set to work on!")
        if asm_addr is None and const_val is None:
            raise CompileError("Second operand not set!")

        operand = asm_addr if asm_addr is not None else const_val
        instructions.append(f"{op}, r{work_reg}, {operand}")

        if reg2 is not None:
            self.memory.decrement_stack_ptr()

        self.latest_result = work_reg
        return instructions