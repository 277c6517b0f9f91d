"""Running parsed instakod programs."""

from __future__ import annotations

import operator
import re
import sys
from dataclasses import dataclass, field
from typing import Iterable, Optional, TextIO

from .parser import (
    Add,
    Command,
    Comp,
    Condition,
    IfJump,
    Jump,
    JumpDest,
    JumpKind,
    Newline,
    Operand,
    PrintText,
    PrintVar,
    ReadVar,
    Set,
    Sub,
    Variable,
)

_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")

_COMPARATORS = {
    Comp.LT: operator.lt,
    Comp.LE: operator.le,
    Comp.EQ: operator.eq,
    Comp.NE: operator.ne,
    Comp.GT: operator.gt,
    Comp.GE: operator.ge,
}


def _wrap_i64(value: int) -> int:
    return (value + 2**63) % 2**64 - 2**63


class ExecutionError(Exception):
    """A program failed while running."""


@dataclass
class State:
    """The four signed 64-bit registers, all starting at zero."""

    registers: dict = field(default_factory=lambda: dict.fromkeys(Variable, 0))

    def get(self, variable: Variable) -> int:
        return self.registers[variable]

    def set(self, variable: Variable, value: int) -> None:
        """Store a value, wrapping it to a signed 64-bit integer."""
        self.registers[variable] = _wrap_i64(value)

    def value_of(self, operand: Operand) -> int:
        if isinstance(operand, Variable):
            return self.get(operand)
        return operand

    def evaluate(self, condition: Condition) -> bool:
        return _COMPARATORS[condition.comp](
            self.get(condition.left), self.value_of(condition.right)
        )


class Executor:
    """Runs a list of commands against fresh registers."""

    def __init__(
        self,
        commands: Iterable[Command],
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.commands = list(commands)
        self.stdin = stdin
        self.stdout = stdout
        self.state = State()

    def execute(self) -> State:
        """Run the program to its end and return the final registers."""
        stdin = self.stdin if self.stdin is not None else sys.stdin
        stdout = self.stdout if self.stdout is not None else sys.stdout
        state = self.state
        end = len(self.commands)
        pc = 0
        while pc < end:
            command = self.commands[pc]
            pc += 1
            match command:
                case PrintVar(variable):
                    stdout.write(str(state.get(variable)))
                case PrintText(text):
                    stdout.write(text)
                case Newline():
                    stdout.write("\n")
                case ReadVar(variable):
                    state.set(variable, self._read_number(stdin, stdout))
                case Set(variable, operand):
                    state.set(variable, state.value_of(operand))
                case Add(variable, operand):
                    state.set(variable, state.get(variable) + state.value_of(operand))
                case Sub(variable, operand):
                    state.set(variable, state.get(variable) - state.value_of(operand))
                case IfJump(condition, then, otherwise):
                    dest = then if state.evaluate(condition) else otherwise
                    pc = self._target(dest, pc, end)
                case Jump(dest):
                    pc = self._target(dest, pc, end)
        return state

    @staticmethod
    def _target(dest: JumpDest, pc: int, end: int) -> int:
        if dest.kind is JumpKind.NEXT:
            return pc
        if dest.kind is JumpKind.END:
            return end
        return dest.line - 1

    @staticmethod
    def _read_number(stdin: TextIO, stdout: TextIO) -> int:
        try:
            stdout.flush()
            line = stdin.readline()
        except OSError as err:
            raise ExecutionError("Io error") from err
        text = line.strip()
        if not _UNSIGNED.fullmatch(text) or int(text) > _U64_MAX:
            raise ExecutionError("Failed to parse a number")
        return int(text)


def run(
    commands: Iterable[Command],
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> State:
    """Execute commands and return the final registers."""
    return Executor(commands, stdin, stdout).execute()