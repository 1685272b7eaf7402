"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Optional, TextIO

from minishell.redirections import (
    ReadLine,
    RedirectionError,
    apply_redirections,
    close_redirections,
    remove_heredoc,
)
from minishell.state import ShellState
from minishell.tree import Node

_BUILTINS = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})
# These set up the redirections of their command before running.
_REDIRECTED = frozenset({"echo", "cd", "pwd", "env"})


class ShellExit(Exception):
    """Raised by the ``exit`` builtin to end the shell."""

    def __init__(self, status: int = 1) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def _name_of(entry: str) -> str:
    return entry.partition("=")[0]


def _stdout(out: Optional[TextIO]) -> TextIO:
    return sys.stdout if out is None else out


def is_builtin(args: Sequence[str]) -> bool:
    """Return True when the command named by args[0] is a builtin."""
    return bool(args) and args[0] in _BUILTINS


def builtin_echo(args: Sequence[str], out: Optional[TextIO] = None) -> int:
    """Write the arguments separated by spaces; ``-n`` first drops the newline."""
    out = _stdout(out)
    words = list(args[1:])
    newline = True
    if words and words[0] == "-n":
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def builtin_cd(args: Sequence[str]) -> int:
    """Change the working directory to args[1]."""
    if len(args) < 2:
        print("cd: missing operand", file=sys.stderr)
        return 1
    try:
        os.chdir(args[1])
    except OSError as exc:
        print(f"cd: {args[1]}: {exc.strerror}", file=sys.stderr)
        return 1
    return 0


def builtin_pwd(out: Optional[TextIO] = None) -> int:
    """Write the working directory."""
    out = _stdout(out)
    try:
        cwd = os.getcwd()
    except OSError as exc:
        print(f"getcwd: {exc.strerror}", file=sys.stderr)
        return 1
    out.write(cwd + "\n")
    return 0


def builtin_env(state: ShellState, out: Optional[TextIO] = None) -> int:
    """Write every variable of the shell's environment as ``NAME=value``."""
    out = _stdout(out)
    for entry in state.envp or ():
        name = _name_of(entry)
        value = state.getenv(name)
        if value is None:
            print(f"{name}: no value", file=sys.stderr)
            continue
        out.write(f"{name}={value}\n")
    return 0


def _export_print(state: ShellState, out: TextIO) -> int:
    for entry in sorted(state.envp or ()):
        out.write(f"declare -x {entry}\n")
    return 0


def builtin_export(
    args: Sequence[str], state: ShellState, out: Optional[TextIO] = None
) -> int:
    """Add or set the variable given in args[1], or list the environment.

    ``NAME=value`` replaces an entry of the same name or is appended;
    a bare ``NAME`` is appended when no entry of that name exists.
    """
    out = _stdout(out)
    argument = args[1] if len(args) > 1 else None
    if state.envp is None:
        if argument is None:
            return 1
        state.envp = [argument]
        return 0
    if argument is None:
        return _export_print(state, out)
    name = _name_of(argument)
    positions = [i for i, entry in enumerate(state.envp) if _name_of(entry) == name]
    if "=" in argument:
        if positions:
            state.envp[positions[0]] = argument
        else:
            state.envp.append(argument)
    elif not positions:
        state.envp.append(argument)
    return 0


def builtin_unset(args: Sequence[str], state: ShellState) -> int:
    """Remove every entry of the variable named in args[1]."""
    if state.envp is None:
        return 1
    if len(args) < 2:
        return 0
    name = args[1]
    state.envp = [entry for entry in state.envp if _name_of(entry) != name]
    return 0


@contextmanager
def _output(node: Node) -> Iterator[TextIO]:
    if node.fd_out == 1:
        yield sys.stdout
        return
    with os.fdopen(node.fd_out, "w", closefd=False) as out:
        yield out


def _dispatch(name: str, args: Sequence[str], state: ShellState, out: TextIO) -> int:
    if name == "echo":
        return builtin_echo(args, out)
    if name == "cd":
        return builtin_cd(args)
    if name == "pwd":
        return builtin_pwd(out)
    if name == "env":
        return builtin_env(state, out)
    if name == "export":
        return builtin_export(args, state, out)
    return builtin_unset(args, state)


def run_builtin(node: Node, state: ShellState, read_line: ReadLine = input) -> int:
    """Run the builtin command of node and return its exit status.

    Raises ShellExit for ``exit``.
    """
    if not node.args:
        return 1
    name = node.args[0]
    if name == "exit":
        raise ShellExit(1)
    if name not in _BUILTINS:
        return 1
    if name not in _REDIRECTED:
        with _output(node) as out:
            return _dispatch(name, node.args, state, out)
    try:
        apply_redirections(node, read_line)
    except RedirectionError as exc:
        for message in exc.messages:
            print(message, file=sys.stderr)
        return 1
    try:
        with _output(node) as out:
            return _dispatch(name, node.args, state, out)
    finally:
        close_redirections(node)
        remove_heredoc(node)