"""Turning instakod source text into a list of commands."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Optional, Union

_U32_MAX = 2**32 - 1
_USIZE_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


class CommandSyntaxError(ValueError):
    """A piece of source text is not a valid command or command part."""


class ParseError(Exception):
    """A line of a program could not be parsed."""

    def __init__(self, line: int, reason: CommandSyntaxError) -> None:
        super().__init__(f"Failed to parse a command at line {line}")
        self.line = line
        self.reason = reason


class Variable(enum.Enum):
    """One of the four registers of the machine."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Comp(enum.Enum):
    """A comparison operator used in conditions."""

    LT = "<"
    LE = "<="
    EQ = "="
    NE = "!="
    GT = ">"
    GE = ">="


_COMP_WORDS = {
    "LT": Comp.LT,
    "LE": Comp.LE,
    "EQ": Comp.EQ,
    "NE": Comp.NE,
    "GT": Comp.GT,
    "GE": Comp.GE,
}


class JumpKind(enum.Enum):
    """Where a jump goes: the next line, past the end, or a numbered line."""

    NEXT = "next"
    END = "end"
    NTH = "nth"


@dataclass(frozen=True)
class JumpDest:
    """A jump destination; ``line`` is the 1-based target for ``NTH``."""

    kind: JumpKind
    line: Optional[int] = None


Operand = Union[Variable, int]


@dataclass(frozen=True)
class Condition:
    """``left comp right`` where the right side is a register or a number."""

    left: Variable
    comp: Comp
    right: Operand


@dataclass(frozen=True)
class PrintVar:
    variable: Variable


@dataclass(frozen=True)
class PrintText:
    text: str


@dataclass(frozen=True)
class Newline:
    pass


@dataclass(frozen=True)
class ReadVar:
    variable: Variable


@dataclass(frozen=True)
class Set:
    variable: Variable
    operand: Operand


@dataclass(frozen=True)
class Add:
    variable: Variable
    operand: Operand


@dataclass(frozen=True)
class Sub:
    variable: Variable
    operand: Operand


@dataclass(frozen=True)
class IfJump:
    condition: Condition
    then: JumpDest
    otherwise: JumpDest


@dataclass(frozen=True)
class Jump:
    dest: JumpDest


Command = Union[PrintVar, PrintText, Newline, ReadVar, Set, Add, Sub, IfJump, Jump]

_VARIABLES = {variable.value: variable for variable in Variable}
_ARITHMETIC = {"SET": Set, "ADD": Add, "SUB": Sub}


def _parse_unsigned(text: str, limit: int) -> Optional[int]:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= limit else None


def parse_variable(text: str) -> Variable:
    """Parse a register name: exactly ``A``, ``B``, ``C`` or ``D``."""
    try:
        return _VARIABLES[text]
    except KeyError:
        raise CommandSyntaxError(
            f"Invalid variable {text!r}: variable has to be A, B, C or D"
        ) from None


def parse_var_or_num(text: str) -> Operand:
    """Parse a register name or an unsigned 32-bit number."""
    if text in _VARIABLES:
        return _VARIABLES[text]
    value = _parse_unsigned(text, _U32_MAX)
    if value is None:
        raise CommandSyntaxError(f"Invalid variable or number: {text!r}")
    return value


def parse_jump_dest(text: str) -> JumpDest:
    """Parse ``NXT``/``NEXT``, ``END`` or a positive line number."""
    if text in ("NXT", "NEXT"):
        return JumpDest(JumpKind.NEXT)
    if text == "END":
        return JumpDest(JumpKind.END)
    value = _parse_unsigned(text, _USIZE_MAX)
    if value is None:
        raise CommandSyntaxError(f"Invalid jump destination: {text!r}")
    if value == 0:
        raise CommandSyntaxError("Jump destination cannot be zero")
    return JumpDest(JumpKind.NTH, value)


def parse_comp(text: str) -> Comp:
    """Parse a comparison, either as a symbol or as a two-letter word."""
    try:
        return Comp(text)
    except ValueError:
        pass
    try:
        return _COMP_WORDS[text]
    except KeyError:
        raise CommandSyntaxError(f"Invalid comparison statement: {text!r}") from None


def parse_condition(text: str) -> Condition:
    """Parse ``<variable> <comp> <variable or number>``."""
    parts = text.split(" ", 2)
    left = parse_variable(parts[0])
    if len(parts) < 2:
        raise CommandSyntaxError("Not enough segments in condition")
    comp = parse_comp(parts[1])
    if len(parts) < 3:
        raise CommandSyntaxError("Not enough segments in condition")
    right = parse_var_or_num(parts[2])
    return Condition(left, comp, right)


def parse_text_literal(text: str) -> str:
    """Parse a double-quoted string; ``\\"`` and ``\\\\`` are the only escapes.

    Anything after the closing quote is ignored.
    """
    body = text.strip()
    if not body.startswith('"'):
        raise CommandSyntaxError("Invalid string: not delimited with quotation marks")
    chars = []
    escaped = False
    for ch in body[1:]:
        if escaped:
            if ch not in ('"', "\\"):
                raise CommandSyntaxError(f"Invalid string: invalid escape sequence \\{ch}")
            chars.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            return "".join(chars)
        else:
            chars.append(ch)
    raise CommandSyntaxError("Invalid string: not delimited with quotation marks")


def parse_command(text: str) -> Command:
    """Parse a single, already trimmed, command."""
    name, sep, rest = text.partition(" ")
    if not sep:
        if text == "NLN":
            return Newline()
        raise CommandSyntaxError("Invalid command name")

    if name == "PVR":
        return PrintVar(parse_variable(rest))
    if name == "PTX":
        return PrintText(parse_text_literal(rest))
    if name == "LTV":
        return ReadVar(parse_variable(rest))
    if name in _ARITHMETIC:
        variable, sep, operand = rest.partition(" ")
        if not sep:
            raise CommandSyntaxError(f"Invalid {name.lower()} invocation")
        return _ARITHMETIC[name](parse_variable(variable), parse_var_or_num(operand))
    if name in ("IFJ", "IF"):
        parts = rest.rsplit(" ", 2)
        otherwise = parse_jump_dest(parts[-1])
        if len(parts) < 2:
            raise CommandSyntaxError("Invalid ifj invocation")
        then = parse_jump_dest(parts[-2])
        if len(parts) < 3:
            raise CommandSyntaxError("Invalid ifj invocation")
        return IfJump(parse_condition(parts[0]), then, otherwise)
    if name == "JMP":
        return Jump(parse_jump_dest(rest))
    raise CommandSyntaxError("Invalid command name")


def parse_lines(lines: Iterable[str]) -> list[Command]:
    """Parse program lines; ``#`` starts a comment. Every line must hold a command."""
    commands = []
    for number, line in enumerate(lines, start=1):
        code = line.split("#", 1)[0].strip()
        try:
            commands.append(parse_command(code))
        except CommandSyntaxError as err:
            raise ParseError(number, err) from err
    return commands


def parse_file(path: Union[str, PathLike]) -> list[Command]:
    """Read and parse a UTF-8 program file."""
    with open(path, encoding="utf-8", newline="") as handle:
        content = handle.read()
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return parse_lines(line[:-1] if line.endswith("\r") else line for line in lines)