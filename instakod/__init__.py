"""Interpreter for a tiny line-oriented language with four integer variables.

The parser module turns program text into commands, the executor module runs
them, and the cli module provides the ``instakod`` command.
"""

__version__ = "0.1.0"