"""Command line entry point: run a program file."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .executor import ExecutionError, run
from .parser import ParseError, parse_file


def _report(err: BaseException) -> None:
    print(f"Error: {err}", file=sys.stderr)
    causes = []
    cause = err.__cause__
    while cause is not None:
        causes.append(cause)
        cause = cause.__cause__
    if causes:
        print("\nCaused by:", file=sys.stderr)
        for index, cause in enumerate(causes):
            print(f"    {index}: {cause}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the program named by the first argument; return an exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Error: No file name given", file=sys.stderr)
        return 1
    try:
        run(parse_file(args[0]))
    except (ParseError, ExecutionError, OSError, UnicodeDecodeError) as err:
        _report(err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())