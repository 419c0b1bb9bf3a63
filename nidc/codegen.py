"""Turns a syntax tree into lines of assembly."""

from __future__ import annotations

import random
import string
from collections.abc import Sequence

from nidc.arithmetic import Arithmetic
from nidc.errors import CompileError
from nidc.hardware import Hardware
from nidc.memory import MemoryItem, MemoryManager, load_const, read_from_dm
from nidc.nodes import (
    Asm,
    Assignment,
    BinaryExpression,
    BinaryOperator,
    Branch,
    Builtin,
    Condition,
    ConditionalOperator,
    Loop,
    Macro,
    MacroType,
    Node,
    Return,
    Value,
    Variable,
)
from nidc.stdlib import is_pressed, sleep
from nidc.stdlib_mem import move_to

# The last addresses of memory are kept free for the call stack.
_CALL_STACK_SIZE = 20
_BRANCH_NAME_LENGTH = 16
_ALPHANUMERIC = string.ascii_letters + string.digits
_U16_MASK = 0xFFFF
_U32_MAX = 0xFFFFFFFF

_BRANCH_OPS = {
    ConditionalOperator.NOT: "beq",
    ConditionalOperator.NOT_EQ: "bne",
    ConditionalOperator.EQ: "beq",
    ConditionalOperator.LESS_THAN: "bmi",
    ConditionalOperator.LESS_EQ: "blt",
    ConditionalOperator.GREAT_THAN: "bpl",
    ConditionalOperator.GREAT_EQ: "bge",
}


def random_branch_name(rng: random.Random | None = None) -> str:
    """Return a fresh label: '#' followed by sixteen letters."""
    source = rng if rng is not None else random
    chars = source.choices(_ALPHANUMERIC, k=_BRANCH_NAME_LENGTH)
    return "#" + "".join(c if c.isalpha() else "a" for c in chars)


def get_op(operator: ConditionalOperator, false_body: bool) -> str:
    """Return the branch instruction taken when a condition holds."""
    # Both cases currently share one table; the flag is kept for callers.
    return _BRANCH_OPS[operator]


def _var_id(var: Variable) -> int:
    ident = var.identifier
    if not (ident.isascii() and ident.isdigit()) or int(ident) > _U32_MAX:
        raise CompileError(f"Invalid variable id: {ident!r}")
    return int(ident)


def _value_param(node: Node, message: str) -> int:
    if not isinstance(node, Value):
        raise CompileError(message)
    return node.as_int()


class CodeGenerator:
    """Generates assembly for one program, tracking memory and registers."""

    def __init__(self, hardware: Hardware | None = None, rng: random.Random | None = None) -> None:
        hardware = hardware if hardware is not None else Hardware()
        if hardware.mem_addresses < _CALL_STACK_SIZE:
            raise CompileError(
                f"Hardware needs at least {_CALL_STACK_SIZE} memory addresses, "
                f"got {hardware.mem_addresses}"
            )
        self.hardware = hardware
        self.rng = rng if rng is not None else random.Random()
        self.memory = MemoryManager(hardware.mem_addresses - _CALL_STACK_SIZE, hardware.registers)
        self.arithmetic = Arithmetic(self.memory)

    def _branch_name(self) -> str:
        return random_branch_name(self.rng)

    def _store_variable(self, var_id: int, register: int) -> list[str]:
        """Write a register to a variable's address, allocating one if needed."""
        addr = self.memory.read_from_mem_map(var_id)
        if addr is not None:
            instructions = [self.memory.write_to_dm(register, addr)]
        else:
            instructions = [self.memory.push_to_stack(register)]
            addr = self.memory.stack_ptr - 1
            self.memory.push_to_mem_map(var_id, addr)
        self.memory.use_reg(MemoryItem(var_id, register, addr))
        return instructions

    def parse_assignment(self, assign: Assignment) -> list[str]:
        """Assembly for assigning a value, variable or expression to a variable."""
        if not isinstance(assign.var, Variable):
            raise CompileError("No variable to assign!")
        var_id = _var_id(assign.var)
        register = self.memory.get_reg(var_id)
        expression = assign.expression

        if isinstance(expression, Value):
            instructions = [load_const(register, expression.as_int())]
            instructions.extend(self._store_variable(var_id, register))
            return instructions

        if isinstance(expression, Variable):
            addr = self.memory.read_from_mem_map(_var_id(expression))
            if addr is None:
                return []
            instructions = [read_from_dm(register, addr)]
            instructions.extend(self._store_variable(var_id, register))
            return instructions

        if isinstance(expression, BinaryExpression):
            instructions = self._binary_expression(expression)
            write_addr = self.memory.read_from_mem_map(var_id)
            if write_addr is None:
                raise CompileError("Trying to write to uninitialized variable!")
            instructions.append(
                self.memory.write_to_dm(self.arithmetic.latest_result, write_addr)
            )
            return instructions

        raise CompileError(
            "Trying to assign variable to something that is niether a value, "
            "variable or binary expression!"
        )

    def parse_builtin(self, builtin: Builtin) -> list[str]:
        """Assembly for a call to a built-in function."""
        params = builtin.params
        if builtin.identifier == "sleep":
            if len(params) != 1:
                raise CompileError("Wrong number of arguments supplied to sleep()")
            time = _value_param(params[0], "Invalid type passed as argument to sleep()!")
            return sleep(time & _U16_MASK)
        if builtin.identifier == "move_to":
            if len(params) != 2:
                raise CompileError("Wrong number of arguments supplied to move_to()")
            var = params[0]
            if not isinstance(var, Variable):
                raise CompileError("Invalid type passed as first argument to move_to()!")
            addr = _value_param(params[1], "Invalid type passed as second argument to move_to()!")
            return move_to(self.memory, _var_id(var), addr & _U16_MASK)
        raise CompileError("Invalid builtin function supplied!")

    def parse_branch(self, branch: Branch) -> list[str]:
        """Assembly for an if statement with an optional else block."""
        skip_branch = self._branch_name()
        true_branch = self._branch_name()

        instructions = self._condition(
            branch.condition, true_branch, branch.false_body is not None
        )
        if branch.false_body is not None:
            instructions.extend(self.generate_body(branch.false_body.statements))
        instructions.append(f"jmp {skip_branch}")
        instructions.append(true_branch)
        instructions.extend(self.generate_body(branch.true_body.statements))
        instructions.append(skip_branch)
        return instructions

    def parse_loop(self, nid_loop: Loop) -> list[str]:
        """Assembly for a while loop; empty when the loop can never run."""
        while_body = self._branch_name()
        loop_branch = self._branch_name()
        loop_done = self._branch_name()

        condition = self._condition(nid_loop.condition, while_body, False)
        if not condition:
            return []

        instructions = [loop_branch, *condition, f"jmp {loop_done}", while_body]
        instructions.extend(self.generate_body(nid_loop.body.statements))
        instructions.append(f"jmp {loop_branch}")
        instructions.append(loop_done)
        return instructions

    def generate_body(self, body: Sequence[Node]) -> list[str]:
        """Assembly for a sequence of statements."""
        program: list[str] = []
        for node in body:
            match node:
                case Asm(code=code):
                    program.extend(token.value for token in code)
                case Assignment():
                    program.extend(self.parse_assignment(node))
                case Branch():
                    program.extend(self.parse_branch(node))
                case Builtin():
                    program.extend(self.parse_builtin(node))
                case Loop():
                    program.extend(self.parse_loop(node))
                case Return():
                    pass
                case _:
                    raise CompileError(
                        f"Unhandled Node: {node.name!r} of type: {node.ast_type.value}"
                    )
        return program

    def generate(self, program_body: Sequence[Node], entry_point: int) -> list[str]:
        """Assembly for a whole program, starting from its entry function."""
        prealloc_start: int | None = None
        prealloc_end: int | None = None
        for node in program_body:
            if isinstance(node, Macro):
                if node.macro_type is MacroType.PRE_ALLOC_START:
                    prealloc_start = node.macro_value
                elif node.macro_type is MacroType.PRE_ALLOC_END:
                    prealloc_end = node.macro_value

        self.memory.remove_mem_from_compiler(prealloc_start, prealloc_end)
        return self.generate_body(program_body[entry_point].statements)

    def _binary_expression(self, bin_exp: BinaryExpression) -> list[str]:
        reg1 = None
        addr1 = addr2 = None
        const1 = const2 = None

        if isinstance(bin_exp.left, Variable):
            left_id = _var_id(bin_exp.left)
            reg1 = self.memory.already_in_reg(left_id)
            if reg1 is None:
                addr1 = self.memory.read_from_mem_map(left_id)

        if isinstance(bin_exp.right, Variable):
            right_addr = self.memory.read_from_mem_map(_var_id(bin_exp.right))
            if addr1 is None:
                addr1 = right_addr
            else:
                addr2 = right_addr

        if isinstance(bin_exp.left, Value):
            const1 = bin_exp.left.as_int()
        if isinstance(bin_exp.right, Value):
            if const1 is None:
                const1 = bin_exp.right.as_int()
            else:
                const2 = bin_exp.right.as_int()

        operation = {
            BinaryOperator.ADD: self.arithmetic.add,
            BinaryOperator.SUB: self.arithmetic.sub,
            BinaryOperator.MUL: self.arithmetic.mul,
            BinaryOperator.DIV: self.arithmetic.div,
        }[bin_exp.op]
        return operation(reg1, None, addr1, addr2, const1, const2)

    def _condition(self, condition: Condition, branch_name: str, false_body: bool) -> list[str]:
        """Compare and jump to branch_name when the condition holds.

        An empty result means the condition can never hold.
        """
        if isinstance(condition.right, Builtin):
            params = condition.right.params
            if len(params) != 1:
                raise CompileError("Invalid number of arguments sent to is_pressed()!")
            scancode = _value_param(params[0], "Invalid argument passed to is_pressed()!")
            return is_pressed(scancode & _U16_MASK, branch_name)

        instructions: list[str] = []
        reg1 = None
        addr1 = None
        const1 = const2 = None
        op = get_op(condition.operator, false_body)

        left = condition.left
        if isinstance(left, Value):
            const1 = left.as_int()
        elif isinstance(left, Variable):
            left_id = _var_id(left)
            reg1 = self.memory.already_in_reg(left_id)
            if reg1 is None:
                addr1 = self.memory.read_from_mem_map(left_id)
            if reg1 is None and addr1 is None:
                raise CompileError("Didn't find addr of variable in mem_map!")

        right = condition.right
        if isinstance(right, Value):
            if const1 is None:
                const1 = right.as_int()
            else:
                const2 = right.as_int()
        elif isinstance(right, Variable):
            right_id = _var_id(right)
            if reg1 is None:
                reg1 = self.memory.already_in_reg(right_id)
                if reg1 is None:
                    reg1 = self.memory.get_reg(right_id)
                    right_addr = self.memory.read_from_mem_map(right_id)
                    if right_addr is None:
                        raise CompileError("Didn't find addr of variable in mem_map!")
                    instructions.append(read_from_dm(reg1, right_addr))
            else:
                addr1 = self.memory.read_from_mem_map(right_id)
        else:
            raise CompileError("Could not parse right operand!")

        if const1 is not None and const2 is not None:
            if const1 != const2:
                return []
            op = "jmp"
        else:
            instructions.extend(
                self.arithmetic.cmp(reg1, None, addr1, None, const1, const2)
            )

        instructions.append(f"{op} {branch_name}")
        return instructions


def generate_ass(
    program_body: Sequence[Node], entry_point: int, hardware: Hardware | None = None
) -> list[str]:
    """Assembly for a whole program on the given hardware."""
    return CodeGenerator(hardware).generate(program_body, entry_point)