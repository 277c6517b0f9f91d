# instakod

instakod runs programs written in a small line-oriented language. A program
works with four signed 64-bit integer variables, `A`, `B`, `C` and `D`. Each
one starts at zero. Arithmetic that goes past the 64-bit range wraps around.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Usage

```
instakod program.ik
```

The program reads its input from standard input and writes its output to
standard output. The command prints a message to standard error and exits
with status 1 when:

- no file name is given,
- the file cannot be read or is not valid UTF-8,
- a line fails to parse, in which case the message names the line number,
- the program fails while running, for example when `LTV` reads input that is
  not a non-negative integer.

Otherwise the command exits with status 0.

## The language

Each line holds one command. Everything after a `#` on a line is a comment.
Every line must hold a command, so blank lines and lines that contain only a
comment are rejected. Jump destinations are line numbers counted from 1.

| Command | Meaning |
|---|---|
| `PVR X` | print the value of variable `X` (with no newline) |
| `PTX "text"` | print the text; `\"` and `\\` are the only escapes, and anything after the closing quote is ignored |
| `NLN` | print a newline |
| `LTV X` | read a line from standard input and store the non-negative integer on it in `X` |
| `SET X V` | set `X` to `V` |
| `ADD X V` | add `V` to `X` |
| `SUB X V` | subtract `V` from `X` |
| `JMP D` | jump to `D` |
| `IFJ X OP V THEN ELSE` | jump to `THEN` if the condition holds, otherwise to `ELSE` (`IF` is accepted as well) |

`X` is one of the variables `A`, `B`, `C` and `D`. `V` is a variable or a
number from 0 to 4294967295. Parts of a command are separated by single
spaces.

A jump destination `D` is a positive line number, `NXT` or `NEXT` for the
following line, or `END` to stop the program. Jumping to a line number past
the last line also stops the program. Line number 0 is rejected.

The comparison `OP` is one of `<`, `<=`, `=`, `!=`, `>` and `>=`. The word
forms `LT`, `LE`, `EQ`, `NE`, `GT` and `GE` are accepted as well.

### Example

This program counts down from a number that it reads from the input:

```
PTX "Start from: "
LTV A
PVR A
NLN
SUB A 1
IFJ A > 0 3 END
```

## Library use

```python
import io
from instakod.parser import Variable, parse_lines
from instakod.executor import run

program = parse_lines(["SET A 2", "ADD A 3", "PVR A"])
out = io.StringIO()
state = run(program, io.StringIO(), out)
assert out.getvalue() == "5"
assert state.get(Variable.A) == 5
```

The `instakod.parser` module turns text into commands:

- `parse_file(path)` parses a program from a UTF-8 file.
- `parse_lines(lines)` parses an iterable of program lines.
- `parse_command(text)` parses a single command.

Commands are frozen dataclasses: `PrintVar`, `PrintText`, `Newline`,
`ReadVar`, `Set`, `Add`, `Sub`, `IfJump` and `Jump`. When a line cannot be
parsed, `parse_lines` and `parse_file` raise `ParseError`, whose `line`
attribute holds the 1-based line number and whose `reason` holds the
underlying `CommandSyntaxError`.

The `instakod.executor` module runs commands. `run(commands, stdin, stdout)`
and `Executor(commands, stdin, stdout).execute()` run a program and return the
final `State`; when `stdin` or `stdout` is left out, the process's standard
streams are used. Errors while a program runs, such as input that is not a
valid number, raise `ExecutionError`.