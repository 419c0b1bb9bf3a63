"""Syntax tree nodes of the NID language and a tree printer for them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from nidc.errors import CompileError
from nidc.lexer import Token

TreeEntry = tuple[str, list]

_I16_MIN = -0x8000
_I16_MAX = 0x7FFF
_U16_MAX = 0xFFFF

# Words that start a new line when inline assembly tokens are merged.
_ASM_INSTRUCTIONS = frozenset(
    {
        "nop", "ldi", "ld", "st", "psh", "pop", "add", "addi", "sub", "subi",
        "cmp", "cmpi", "and", "andi", "or", "ori", "jmp", "jsr", "ret", "beq",
        "bne", "bpl", "bmi", "bge", "blt",
    }
)


class ValueType(Enum):
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    CHAR = "Char"
    BOOL = "Bool"
    VOID = "Void"


class BinaryOperator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class ConditionalOperator(Enum):
    NOT = "Not"
    NOT_EQ = "NotEq"
    EQ = "Eq"
    GREAT_THAN = "GreatThan"
    LESS_THAN = "LessThan"
    GREAT_EQ = "GreatEq"
    LESS_EQ = "LessEq"


class MacroType(Enum):
    PRE_ALLOC_START = "PreAllocStart"
    PRE_ALLOC_END = "PreAllocEnd"


class AstType(Enum):
    ASM = "Asm"
    ASSIGNMENT = "Assignment"
    BINARY_EXPRESSION = "BinaryExpression"
    BLOCK = "Block"
    BRANCH = "Branch"
    CONDITION = "Condition"
    FUNCTION = "Function"
    LOOP = "Loop"
    RETURN = "Return"
    TYPE = "Type"
    VARIABLE = "Variable"
    VALUE = "Value"
    MACRO = "Macro"
    DEBUG = "Debug"
    BUILTIN = "Builtin"


def _quote(text: str, quote: str) -> str:
    escaped = text.replace("\\", "\\\\").replace(quote, "\\" + quote)
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return f"{quote}{escaped}{quote}"


def _format_value(kind: ValueType, value: object) -> str:
    if kind is ValueType.VOID:
        return kind.value
    if kind is ValueType.BOOL:
        return f"{kind.value}({'true' if value else 'false'})"
    if kind is ValueType.STRING:
        return f"{kind.value}({_quote(str(value), chr(34))})"
    if kind is ValueType.CHAR:
        return f"{kind.value}({_quote(str(value), chr(39))})"
    if kind is ValueType.FLOAT:
        return f"{kind.value}({float(value)!r})"
    return f"{kind.value}({value})"


class Node(ABC):
    """A node of the syntax tree."""

    ast_type: ClassVar[AstType]
    is_block: ClassVar[bool] = False

    @abstractmethod
    def display(self) -> str:
        """Short human readable description of the node."""

    @abstractmethod
    def tree_entries(self) -> list[TreeEntry]:
        """Entries this node adds to a printed tree, as (label, children) pairs."""

    @property
    def name(self) -> str:
        return ""

    @property
    def statements(self) -> Sequence[Node]:
        return ()

    def __str__(self) -> str:
        return self.display()


def _body_entry(statements: Sequence[Node], label: str) -> TreeEntry:
    children: list[TreeEntry] = []
    for node in statements:
        if isinstance(node, Function):
            children.append(_body_entry(node.statements, node.name))
        if node.is_block:
            children.append(_body_entry(node.statements, node.name))
        else:
            children.extend(node.tree_entries())
    return (label, children)


def _entries(node: Node | None) -> list[TreeEntry]:
    return [] if node is None else node.tree_entries()


@dataclass
class Asm(Node):
    """Inline assembly."""

    code: list[Token] = field(default_factory=list)
    ast_type: ClassVar[AstType] = AstType.ASM

    def display(self) -> str:
        return "Asm"

    def tree_entries(self) -> list[TreeEntry]:
        return [("Asm", [(token.value, []) for token in self.code])]

    def merge_lines(self) -> None:
        """Join the tokens of each assembly instruction into one token."""
        merged: list[Token] = []
        parts: list[str] | None = None
        last: Token | None = None
        for token in self.code:
            if token.value in _ASM_INSTRUCTIONS:
                if parts is not None and last is not None:
                    merged.append(Token("".join(parts), last.token_type))
                parts = [token.value]
                last = token
            elif parts is not None:
                parts.append(token.value)
                last = token
        if parts is not None and last is not None:
            merged.append(Token("".join(parts), last.token_type))
        self.code = merged


@dataclass
class Assignment(Node):
    """Assigning an expression to a variable, optionally declaring its type."""

    var: Node
    expression: Node
    type_dec: Node | None = None
    ast_type: ClassVar[AstType] = AstType.ASSIGNMENT

    def display(self) -> str:
        return "Assignment"

    def tree_entries(self) -> list[TreeEntry]:
        children = _entries(self.type_dec) + _entries(self.var) + _entries(self.expression)
        return [("Assignment", children)]


@dataclass
class BinaryExpression(Node):
    left: Node
    op: BinaryOperator
    right: Node
    ast_type: ClassVar[AstType] = AstType.BINARY_EXPRESSION

    def display(self) -> str:
        return "BinaryExpression"

    def tree_entries(self) -> list[TreeEntry]:
        children = _entries(self.left) + [(self.op.value, [])] + _entries(self.right)
        return [("BinaryExpression", children)]


@dataclass
class Block(Node):
    """A scope of statements."""

    body: list[Node] = field(default_factory=list)
    ast_type: ClassVar[AstType] = AstType.BLOCK
    is_block: ClassVar[bool] = True

    def display(self) -> str:
        return "Block"

    @property
    def name(self) -> str:
        return "Block"

    @property
    def statements(self) -> Sequence[Node]:
        return self.body

    def tree_entries(self) -> list[TreeEntry]:
        return [_body_entry(self.body, "Block")]


@dataclass
class Condition(Node):
    """A comparison used by branches and loops; the left operand is optional."""

    operator: ConditionalOperator
    left: Node | None
    right: Node
    ast_type: ClassVar[AstType] = AstType.CONDITION

    def display(self) -> str:
        return "Condition"

    def tree_entries(self) -> list[TreeEntry]:
        children = (
            _entries(self.left)
            + [(f"OP: {self.operator.value}", [])]
            + _entries(self.right)
        )
        return [("Condition", children)]


@dataclass
class Branch(Node):
    """An if statement with an optional else block."""

    condition: Condition
    true_body: Block
    false_body: Block | None = None
    ast_type: ClassVar[AstType] = AstType.BRANCH

    def display(self) -> str:
        return "Branch"

    def tree_entries(self) -> list[TreeEntry]:
        children = (
            self.condition.tree_entries()
            + self.true_body.tree_entries()
            + _entries(self.false_body)
        )
        return [("Branch", children)]


@dataclass
class Builtin(Node):
    """A call to a built-in function."""

    identifier: str
    params: list[Node] = field(default_factory=list)
    ast_type: ClassVar[AstType] = AstType.BUILTIN

    def display(self) -> str:
        return "Builtin"

    def tree_entries(self) -> list[TreeEntry]:
        children: list[TreeEntry] = [(f"Identifier: {_quote(self.identifier, chr(34))}", [])]
        children.extend((f"Param: {param.display()}", []) for param in self.params)
        return [("Builtin", children)]


@dataclass
class Function(Node):
    identifier: str
    params: list[Node]
    body: Block
    ast_type: ClassVar[AstType] = AstType.FUNCTION

    @property
    def name(self) -> str:
        return self.identifier

    @property
    def statements(self) -> Sequence[Node]:
        return self.body.body

    def display_params(self) -> str:
        """Parameters as shown in the function's description."""
        output = ""
        separated = (AstType.TYPE, AstType.VARIABLE, AstType.VALUE)
        for param in self.params:
            if output and param.ast_type in separated:
                output += ", "
            output += f" {param.display()} "
        return output

    def display(self) -> str:
        return f"{self.name}({self.display_params()})"

    def tree_entries(self) -> list[TreeEntry]:
        return [(self.display(), [])]


@dataclass
class Loop(Node):
    """A while loop."""

    condition: Condition
    body: Block
    ast_type: ClassVar[AstType] = AstType.LOOP

    def display(self) -> str:
        return "Loop"

    def tree_entries(self) -> list[TreeEntry]:
        return [("Loop", self.condition.tree_entries() + self.body.tree_entries())]


@dataclass
class Macro(Node):
    """A compiler directive, such as a memory range the compiler must not use."""

    macro_type: MacroType
    macro_value: int
    ast_type: ClassVar[AstType] = AstType.MACRO

    def __post_init__(self) -> None:
        if not 0 <= self.macro_value <= _U16_MAX:
            raise ValueError(f"Macro value out of range: {self.macro_value}")

    def display(self) -> str:
        return "Macro"

    def tree_entries(self) -> list[TreeEntry]:
        return [
            (
                "Macro",
                [(f"Type: {self.macro_type.value}", []), (f"Value: {self.macro_value}", [])],
            )
        ]


@dataclass
class Return(Node):
    return_value: Node | None = None
    ast_type: ClassVar[AstType] = AstType.RETURN

    def display(self) -> str:
        return "Return"

    def tree_entries(self) -> list[TreeEntry]:
        children = _entries(self.return_value) if self.return_value else [("None", [])]
        return [("Return", children)]


@dataclass
class Type(Node):
    type_value: ValueType
    ast_type: ClassVar[AstType] = AstType.TYPE

    def display(self) -> str:
        return f"Type: {self.type_value.value}"

    def tree_entries(self) -> list[TreeEntry]:
        return [(self.display(), [])]


@dataclass
class Variable(Node):
    identifier: str
    var_type: ValueType | None = None
    ast_type: ClassVar[AstType] = AstType.VARIABLE

    def display(self) -> str:
        return f"Variable: {self.identifier}"

    def tree_entries(self) -> list[TreeEntry]:
        return [(self.display(), [])]


@dataclass
class Value(Node):
    """A literal value."""

    value_type: ValueType
    value: object = None
    ast_type: ClassVar[AstType] = AstType.VALUE

    def __post_init__(self) -> None:
        if self.value_type is ValueType.INT:
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise ValueError(f"Int value must be an integer, got {self.value!r}")
            if not _I16_MIN <= self.value <= _I16_MAX:
                raise ValueError(f"Int value out of 16-bit range: {self.value}")

    def as_int(self) -> int:
        """The value as a 16-bit integer; booleans become 1 or 0."""
        if self.value_type is ValueType.INT:
            return int(self.value)
        if self.value_type is ValueType.BOOL:
            return 1 if self.value else 0
        raise CompileError("Types other than 16-bit integer not currently supported!")

    def display(self) -> str:
        return f"Value: {_format_value(self.value_type, self.value)}"

    def tree_entries(self) -> list[TreeEntry]:
        return [(self.display(), [])]


@dataclass
class DebugNode(Node):
    ast_type: ClassVar[AstType] = AstType.DEBUG

    def display(self) -> str:
        return "Debugging Node"

    def tree_entries(self) -> list[TreeEntry]:
        return [("DEBUGGING NODE!", [])]


class Ast:
    """A whole program, with the index of its main function."""

    def __init__(self, body: Sequence[Node]) -> None:
        self.body = list(body)
        for index, node in enumerate(self.body):
            if node.name == "main":
                self.entry_point = index
                break
        else:
            raise CompileError("main() not found!")

    def __repr__(self) -> str:
        return f"Ast(entry_point={self.entry_point}, body={self.body!r})"


def _render_entry(label: str, children: list[TreeEntry]) -> list[str]:
    lines = [label]
    for index, (child_label, grandchildren) in enumerate(children):
        last = index == len(children) - 1
        sub = _render_entry(child_label, grandchildren)
        lines.append(("└─ " if last else "├─ ") + sub[0])
        prefix = "   " if last else "│  "
        lines.extend(prefix + line for line in sub[1:])
    return lines


def render_ast(ast: Ast) -> str:
    """Draw the functions of a program as a text tree."""
    children = [
        _body_entry(node.statements, node.display())
        for node in ast.body
        if node.ast_type is AstType.FUNCTION
    ]
    return "\n".join(_render_entry("program", children))


def export_ast(ast: Ast) -> None:
    """Print the tree of a program, for debugging."""
    print("AST:")
    print(render_ast(ast))