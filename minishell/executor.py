"""Run command trees: simple commands, pipelines, ``&&``, ``||`` and subshells."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from collections.abc import Callable, Sequence
from typing import Optional

from minishell.builtins import ShellExit, is_builtin, run_builtin
from minishell.paths import CommandNotFoundError, find_command
from minishell.redirections import (
    ReadLine,
    RedirectionError,
    apply_redirections,
    close_redirections,
    remove_heredoc,
)
from minishell.state import ShellState
from minishell.tree import Node, NodeType

Waiter = Callable[[], int]


def _report(messages: Sequence[str]) -> None:
    for message in messages:
        print(message, file=sys.stderr)


def _exit_status(returncode: int) -> int:
    # A process killed by a signal reports 128 plus the signal number.
    return returncode if returncode >= 0 else 128 - returncode


def _dup(fd: Optional[int]) -> Optional[int]:
    return None if fd is None else os.dup(fd)


def _attach(node: Node, fd_in: Optional[int], fd_out: Optional[int]) -> None:
    """Give node its own copies of the descriptors it reads from and writes to."""
    node.fd_in = 0 if fd_in is None else os.dup(fd_in)
    node.fd_out = 1 if fd_out is None else os.dup(fd_out)


def _stream(fd: int, standard: int) -> Optional[int]:
    return None if fd == standard else fd


class Executor:
    """Execute command trees against a shell state.

    ``stdin`` and ``stdout`` are the descriptors commands read from and
    write to when they have no redirection of their own; None means the
    shell's own standard streams.
    """

    def __init__(
        self,
        state: ShellState,
        read_line: ReadLine = input,
        stdin: Optional[int] = None,
        stdout: Optional[int] = None,
    ) -> None:
        self.state = state
        self.read_line = read_line
        self.stdin = stdin
        self.stdout = stdout

    def execute(self, node: Node) -> int:
        """Run node and return its exit status."""
        if node.type is NodeType.CMD:
            return self.run_command(node)
        if node.type is NodeType.OR_IF and node.children:
            return 0 if any(self.execute(child) == 0 for child in node.children) else 1
        if node.type is NodeType.AND_IF and node.children:
            return 0 if all(self.execute(child) == 0 for child in node.children) else 1
        if node.type is NodeType.PIPE and node.children:
            return self.run_pipeline(node.children)
        if node.type is NodeType.SUBSHELL:
            return self.run_subshell(node)
        return 1

    def run_command(self, node: Node) -> int:
        """Run a simple command, as a builtin or as a separate program."""
        if is_builtin(node.args):
            _attach(node, self.stdin, self.stdout)
            try:
                return run_builtin(node, self.state, self.read_line)
            finally:
                close_redirections(node)
        return self._start_command(node, self.stdin, self.stdout)()

    def run_pipeline(self, children: Sequence[Node]) -> int:
        """Run children concurrently, each one's output feeding the next.

        Returns the exit status of the last stage.
        """
        if not children:
            return 1
        try:
            pipes = [os.pipe() for _ in children[1:]]
        except OSError as exc:
            print(f"pipe: {exc.strerror}", file=sys.stderr)
            return 1
        inputs = [self.stdin, *(read for read, _ in pipes)]
        outputs = [*(write for _, write in pipes), self.stdout]
        waiters: list[Waiter] = []
        try:
            for child, fd_in, fd_out in zip(children, inputs, outputs):
                waiters.append(self._start_stage(child, fd_in, fd_out))
        finally:
            for read, write in pipes:
                os.close(read)
                os.close(write)
        statuses = [wait() for wait in waiters]
        return statuses[-1]

    def run_subshell(self, node: Node) -> int:
        """Run the child of node so that it cannot change this shell's state.

        Environment changes are made on a copy and the working directory
        is restored afterwards.
        """
        if not node.children:
            return 1
        inner = ShellState(
            envp=None if self.state.envp is None else list(self.state.envp),
            paths=list(self.state.paths),
            exit_status=self.state.exit_status,
        )
        executor = Executor(inner, self.read_line, self.stdin, self.stdout)
        cwd = os.getcwd()
        try:
            return executor.execute(node.children[0])
        except ShellExit as exc:
            return exc.status
        finally:
            os.chdir(cwd)

    def _start_stage(
        self, node: Node, fd_in: Optional[int], fd_out: Optional[int]
    ) -> Waiter:
        if node.type is NodeType.CMD:
            return self._start_command(node, fd_in, fd_out)
        stage = Executor(self.state, self.read_line, _dup(fd_in), _dup(fd_out))
        result: list[int] = []

        def work() -> None:
            try:
                result.append(stage.execute(node))
            except ShellExit as exc:
                result.append(exc.status)
            finally:
                for fd in (stage.stdin, stage.stdout):
                    if fd is not None:
                        os.close(fd)

        thread = threading.Thread(target=work, daemon=True)
        thread.start()

        def wait() -> int:
            thread.join()
            return result[0] if result else 1

        return wait

    def _start_command(
        self, node: Node, fd_in: Optional[int], fd_out: Optional[int]
    ) -> Waiter:
        _attach(node, fd_in, fd_out)
        try:
            apply_redirections(node, self.read_line)
        except RedirectionError as exc:
            _report(exc.messages)
            return lambda: 1
        if not node.args:
            close_redirections(node)
            remove_heredoc(node)
            return lambda: 0
        try:
            process = self._spawn(node)
        finally:
            close_redirections(node)

        def wait() -> int:
            try:
                if process is None:
                    return 1
                return _exit_status(process.wait())
            finally:
                remove_heredoc(node)

        return wait

    def _spawn(self, node: Node) -> Optional[subprocess.Popen]:
        try:
            path = find_command(node.args[0], self.state.paths)
        except CommandNotFoundError as exc:
            print(exc, file=sys.stderr)
            return None
        try:
            return subprocess.Popen(
                node.args,
                executable=path,
                stdin=_stream(node.fd_in, 0),
                stdout=_stream(node.fd_out, 1),
                env=self.state.environ(),
            )
        except OSError as exc:
            print(f"execve: {exc.strerror}", file=sys.stderr)
            return None