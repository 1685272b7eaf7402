"""Syntax tree nodes produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import takewhile
from typing import Iterable, Optional


class NodeType(Enum):
    """Kinds of node in a command tree."""

    CMD = auto()
    PIPE = auto()
    AND_IF = auto()
    OR_IF = auto()
    REDIR_IN = auto()
    REDIR_OUT = auto()
    REDIR_APPEND = auto()
    HEREDOC = auto()
    SUBSHELL = auto()


REDIRECTION_TYPES = frozenset(
    {NodeType.REDIR_IN, NodeType.REDIR_OUT, NodeType.REDIR_APPEND, NodeType.HEREDOC}
)


@dataclass
class Node:
    """A node of the command tree.

    Command nodes carry their arguments and keep their redirections as
    children; operator and subshell nodes keep their operands as children;
    redirection nodes carry the file (or heredoc delimiter) they refer to.
    """

    type: NodeType
    args: list[str] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    file: Optional[str] = None
    fd_in: int = 0
    fd_out: int = 1
    path: Optional[str] = None


def _present(nodes: Iterable[Optional[Node]]) -> list[Node]:
    # Operands are kept up to the first missing one.
    return list(takewhile(lambda node: node is not None, nodes))


def command_node(args: Iterable[str], redirections: Optional[Iterable[Node]] = None) -> Node:
    """Build a command node with its arguments and redirections."""
    return Node(NodeType.CMD, args=list(args), children=list(redirections or ()))


def operator_node(node_type: NodeType, left: Optional[Node], right: Optional[Node]) -> Node:
    """Build a binary operator node (pipe, ``&&`` or ``||``)."""
    return Node(node_type, children=_present((left, right)))


def subshell_node(child: Optional[Node]) -> Node:
    """Build a subshell node around one child."""
    return Node(NodeType.SUBSHELL, children=_present((child,)))


def redirection_node(node_type: NodeType, file: Optional[str]) -> Node:
    """Build a redirection node for the given file or delimiter."""
    return Node(node_type, file=file)


_LABELS = {
    NodeType.PIPE: "PIPE |",
    NodeType.AND_IF: "AND &&",
    NodeType.OR_IF: "OR ||",
    NodeType.SUBSHELL: "SUBSHELL ()",
}

_REDIRECTION_LABELS = {
    NodeType.REDIR_IN: "REDIRECTION <",
    NodeType.REDIR_OUT: "REDIRECTION >",
    NodeType.REDIR_APPEND: "REDIRECTION >>",
    NodeType.HEREDOC: "HEREDOC <<",
}


def _describe(node: Node) -> str:
    if node.type is NodeType.CMD:
        return "COMMAND:" + "".join(f" {arg}" for arg in node.args)
    if node.type in _REDIRECTION_LABELS:
        file = node.file if node.file is not None else "NULL"
        return f"{_REDIRECTION_LABELS[node.type]} {file}"
    return _LABELS[node.type]


def format_ast(node: Optional[Node], depth: int = 0) -> str:
    """Render a tree as indented lines, two spaces per level."""
    if node is None:
        return ""
    lines = ["  " * depth + _describe(node) + "\n"]
    lines.extend(format_ast(child, depth + 1) for child in node.children)
    return "".join(lines)