"""The interactive read-parse-execute loop."""

from __future__ import annotations

import os
import sys
from typing import Optional, Sequence

from minishell.builtins import ShellExit
from minishell.executor import Executor
from minishell.parser import ParseError, parse_input
from minishell.paths import get_paths
from minishell.prompt import make_prompt
from minishell.state import ShellState, copy_env
from minishell.syntax import ShellSyntaxError


def run_line(line: str, state: ShellState, executor: Executor) -> Optional[int]:
    """Parse and run one command line.

    Returns the exit status, also stored in the state, or None when the
    line could not be parsed and nothing ran. ShellExit propagates.
    """
    try:
        tree = parse_input(line)
    except ShellSyntaxError as exc:
        print(f"Error: {exc}")
        print("Syntax error in command")
        return None
    except ParseError as exc:
        print(exc)
        return None
    state.paths = get_paths(state.environ())
    status = executor.execute(tree)
    state.exit_status = status
    return status


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read command lines until end of input and run them."""
    try:
        import readline  # noqa: F401  (line editing and history for input())
    except ImportError:
        pass
    state = ShellState(envp=copy_env(os.environ))
    executor = Executor(state)
    while True:
        try:
            line = input(make_prompt())
        except EOFError:
            break
        try:
            run_line(line, state, executor)
        except ShellExit as exc:
            return exc.status
    return 0


if __name__ == "__main__":
    sys.exit(main())