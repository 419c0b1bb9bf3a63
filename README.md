# nidc

`nidc` is a small toolchain library for the NID language. It turns a NID
syntax tree into ASS assembly code for a simple register machine, tokenizes
ASS assembly and turns it into binary instruction strings, and writes 32-bit
machine words to a file as raw little-endian bytes or as a string of binary
digits. It needs nothing beyond the standard library.

## Modules

Compiler side:

- `nidc.lexer`: `tokenize` splits NID source text into `Token`s, each with a
  `value` and a `TokenType`; `remove_comments` drops everything after `//` on
  each line and joins the lines together; `export_tokens` prints tokens.
- `nidc.nodes`: the syntax tree. `Ast`, `Function`, `Block`, `Assignment`,
  `BinaryExpression`, `Branch`, `Loop`, `Condition`, `Builtin`, `Macro`,
  `Return`, `Variable`, `Value`, `Type`, `Asm` and `DebugNode`, with the enums
  `ValueType`, `BinaryOperator`, `ConditionalOperator`, `MacroType` and
  `AstType`. An `Ast` looks up its `entry_point`, the node named `main`, when
  it is created, and raises `CompileError` if there is none. `render_ast`
  draws the functions of a program as a text tree; `export_ast` prints it.
  `Asm.merge_lines` joins the tokens of each inline assembly instruction into
  one token.
- `nidc.memory`: `MemoryManager` tracks the data-memory stack pointer, the
  address of each variable, a memory range reserved by the user, and which
  registers hold which variables (the least recently used register is reused
  first). `read_from_dm` and `load_const` format `ld` and `ldi` instructions.
- `nidc.arithmetic`: `Arithmetic` emits `add`/`sub`/`mul`/`div`/`cmp` and
  their immediate forms, folds expressions of two constants into one `ldi`,
  turns a constant 2 in `mul`/`div` into `lsl`/`lsr`, and remembers the
  register of the latest result.
- `nidc.stdlib` and `nidc.stdlib_mem`: the built-in functions `sleep`,
  `is_pressed` and `move_to`.
- `nidc.codegen`: `CodeGenerator` and `generate_ass` walk the body of the
  entry point and return a list of ASS instructions. Branch labels come from
  `random_branch_name` (`#` and sixteen letters); pass a seeded
  `random.Random` to `CodeGenerator` for repeatable labels. `get_op` gives the
  branch instruction for a `ConditionalOperator`.

Assembler side:

- `nidc.asm_lexer`: `tokenize` turns ASS text into `AsmToken`s (operations,
  addressing modes `aN`, registers `rN`, numbers as 16 binary digits, routine
  names followed by `:`, and end-of-line markers). Comments start with `;`.
- `nidc.asm_parser`: `parse_tokens` turns tokens into one binary string per
  completed line; `op_to_bin` gives the 6-bit opcode of an operation.
- `nidc.exporter`: `write_as_bin` and `write_as_str` write 32-bit words.
- `nidc.assemble`: `assemble_program` reads and tokenizes a `.ass` file and
  writes a `.out` file next to it.

Support:

- `nidc.hardware`: `Hardware` describes the target machine; the defaults are
  255 memory addresses, 8 registers and no extended instructions.
  `load_hardware` reads the same three fields from a TOML file. The code
  generator keeps the last 20 memory addresses back as a call stack.
- `nidc.cli`: `Args`, `build_args` and `help_text`/`print_help` for the
  options `-h/--help`, `-v/--verbose`, `-hc/--hardware-conf`,
  `-s/--string-output`, `-c/--compile-only` and `-a/--assemble-only`.
- `nidc.fsutil`: `read_file` and `write_program` (one instruction per line).
- `nidc.timing`: `time_now` and `elapsed_since`.
- `nidc.errors`: `NidError` and its subclasses `LexError` and
  `CompileError`. Invalid input raises one of these (or `ValueError` for
  bad configuration values) instead of stopping the process.

## Examples

Tokenizing NID source:

```python
from nidc.lexer import remove_comments, tokenize

source = "int main() { int x = 5; } // entry point"
for token in tokenize(remove_comments(source)):
    print(token.token_type, token.value)
```

Turning ASS text into binary instruction strings:

```python
from nidc.asm_lexer import tokenize
from nidc.asm_parser import parse_tokens

print(parse_tokens(tokenize("ldi r1 5 ; load five\n")))
```

Writing machine words:

```python
from nidc.exporter import write_as_bin, write_as_str

write_as_bin("program.out", [947])   # b"\xb3\x03\x00\x00"
write_as_str("program.txt", [947])   # 32 binary digits
```

Generating ASS code from a syntax tree:

```python
from nidc.codegen import generate_ass
from nidc.hardware import Hardware
from nidc.nodes import Assignment, Ast, Block, Function, Value, ValueType, Variable

main = Function("main", [], Block([
    Assignment(Variable("0"), Value(ValueType.INT, 5)),
]))
ast = Ast([main])
print(generate_ass(ast.body, ast.entry_point, Hardware()))
# ['ldi, r0, 5', 'st, r0, 0']
```

Variables in the code generator are identified by decimal numbers in
`Variable.identifier`.

## What it does not do

- There is no parser from NID tokens to a syntax tree: trees are built from
  the classes in `nidc.nodes`.
- There is no `nidc` command. `nidc.cli` parses options, but nothing runs the
  whole pipeline from a `.nid` file to a binary.
- `assemble_program` only checks that the input tokenizes; the file it
  writes always holds the single word 947, not the assembled program. Use
  `parse_tokens` to get the binary strings of a program.