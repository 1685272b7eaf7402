"""Open, apply and release the redirections of a command node."""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Callable, Iterable
from typing import Optional

from minishell.tree import Node, NodeType

ReadLine = Callable[[str], Optional[str]]

_OUT_FLAGS = {
    NodeType.REDIR_OUT: os.O_TRUNC | os.O_WRONLY | os.O_CREAT,
    NodeType.REDIR_APPEND: os.O_APPEND | os.O_WRONLY | os.O_CREAT,
}


class RedirectionError(OSError):
    """Raised when a redirection of a command could not be set up."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))

    def __str__(self) -> str:
        return "\n".join(self.messages)


def read_heredoc(
    delimiter: str, read_line: ReadLine = input, path: Optional[str] = None
) -> str:
    """Read lines until one equals delimiter and store them in a file.

    End of input also ends the document. Returns the path of the file.
    """
    if path is None:
        fd, path = tempfile.mkstemp(prefix="minishell-heredoc-")
        handle = os.fdopen(fd, "w")
    else:
        handle = open(path, "w")
    with handle:
        while True:
            try:
                line = read_line("> ")
            except EOFError:
                break
            if line is None or line == delimiter:
                break
            handle.write(line + "\n")
    return path


def _set_fd(node: Node, attr: str, fd: int) -> None:
    standard = 0 if attr == "fd_in" else 1
    previous = getattr(node, attr)
    if previous != standard and previous >= 0:
        os.close(previous)
    setattr(node, attr, fd)


def _open_redirection(child: Node, read_line: ReadLine) -> tuple[str, int]:
    if child.type is NodeType.REDIR_IN:
        return "fd_in", os.open(child.file, os.O_RDONLY)
    if child.type in _OUT_FLAGS:
        return "fd_out", os.open(child.file, _OUT_FLAGS[child.type], 0o644)
    child.path = read_heredoc(child.file, read_line)
    return "fd_in", os.open(child.path, os.O_RDONLY)


def apply_redirections(node: Node, read_line: ReadLine = input) -> None:
    """Open every redirection of node in order and set its descriptors.

    Raises RedirectionError, after releasing what was opened, when the
    input or the output finally points to a file that could not be opened.
    """
    errors: list[str] = []
    for child in node.children:
        if child.type not in (
            NodeType.REDIR_IN,
            NodeType.REDIR_OUT,
            NodeType.REDIR_APPEND,
            NodeType.HEREDOC,
        ):
            continue
        attr = "fd_out" if child.type in _OUT_FLAGS else "fd_in"
        try:
            attr, fd = _open_redirection(child, read_line)
        except OSError as exc:
            errors.append(f"{child.file}: {exc.strerror}")
            fd = -1
        _set_fd(node, attr, fd)
    if node.fd_in < 0 or node.fd_out < 0:
        close_redirections(node)
        remove_heredoc(node)
        raise RedirectionError(errors)


def close_redirections(node: Node) -> None:
    """Close the redirected descriptors of node and restore the standard ones."""
    _set_fd(node, "fd_in", 0)
    _set_fd(node, "fd_out", 1)


def remove_heredoc(node: Node) -> None:
    """Delete the files written for the heredocs of node."""
    for child in node.children:
        if child.type is NodeType.HEREDOC and child.path is not None:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(child.path)
            child.path = None