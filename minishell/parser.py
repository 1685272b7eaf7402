"""Turn a token list into a command tree."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from minishell.lexer import Token, TokenType, tokenize
from minishell.syntax import check_syntax
from minishell.tree import (
    Node,
    NodeType,
    command_node,
    operator_node,
    redirection_node,
    subshell_node,
)

_OPERATOR_NODES = {
    TokenType.PIPE: NodeType.PIPE,
    TokenType.AND: NodeType.AND_IF,
    TokenType.OR: NodeType.OR_IF,
}

_REDIRECTION_NODES = {
    TokenType.REDIR_IN: NodeType.REDIR_IN,
    TokenType.REDIR_OUT: NodeType.REDIR_OUT,
    TokenType.REDIR_APPEND: NodeType.REDIR_APPEND,
    TokenType.HEREDOC: NodeType.HEREDOC,
}


class ParseError(ValueError):
    """Raised when no command tree can be built from the tokens."""


def operator_precedence(token_type: TokenType) -> int:
    """Return the binding strength of an operator; lower binds more loosely."""
    if token_type in (TokenType.AND, TokenType.OR):
        return 1
    if token_type is TokenType.PIPE:
        return 2
    return 3


def _window(tokens: Sequence[Token], start: int, end: int) -> Sequence[Token]:
    if start < 0 or start > end:
        return []
    return tokens[start:end + 1]


def find_lowest_precedence_op(tokens: Sequence[Token], start: int, end: int) -> int:
    """Return the index of the rightmost loosest operator outside parentheses, or -1."""
    result = -1
    lowest: Optional[int] = None
    level = 0
    for i, token in enumerate(_window(tokens, start, end), start):
        if token.type is TokenType.PAREN_OPEN:
            level += 1
        elif token.type is TokenType.PAREN_CLOSE:
            level -= 1
        if level == 0 and token.type in _OPERATOR_NODES:
            precedence = operator_precedence(token.type)
            if lowest is None or precedence <= lowest:
                lowest = precedence
                result = i
    return result


def matching_parentheses(tokens: Sequence[Token], start: int, end: int) -> bool:
    """Return True when tokens[start..end] is one parenthesised group."""
    window = _window(tokens, start, end)
    if not window or window[0].type is not TokenType.PAREN_OPEN:
        return False
    if end >= len(tokens) or tokens[end].type is not TokenType.PAREN_CLOSE:
        return False
    level = 0
    for i, token in enumerate(window, start):
        if token.type is TokenType.PAREN_OPEN:
            level += 1
        elif token.type is TokenType.PAREN_CLOSE:
            level -= 1
            if level == 0 and i != end:
                return False
    return level == 0


def find_matching_parenthesis(tokens: Sequence[Token], open_pos: int, end: int) -> int:
    """Return the index of the parenthesis closing the one at open_pos, or -1."""
    if not 0 <= open_pos < len(tokens) or tokens[open_pos].type is not TokenType.PAREN_OPEN:
        return -1
    level = 1
    for i, token in enumerate(_window(tokens, open_pos + 1, end), open_pos + 1):
        if token.type is TokenType.PAREN_OPEN:
            level += 1
        elif token.type is TokenType.PAREN_CLOSE:
            level -= 1
            if level == 0:
                return i
    return -1


def extract_args(tokens: Sequence[Token], start: int, end: int) -> list[str]:
    """Return the words of a simple command, leaving out redirection targets."""
    args: list[str] = []
    stream = iter(_window(tokens, start, end))
    for token in stream:
        if token.type is TokenType.WORD:
            args.append(token.content)
        elif token.type in _REDIRECTION_NODES:
            next(stream, None)
    return args


def extract_redirections(tokens: Sequence[Token], start: int, end: int) -> list[Node]:
    """Return a redirection node for each redirection followed by a word."""
    redirections: list[Node] = []
    stream = iter(_window(tokens, start, end))
    for token in stream:
        if token.type not in _REDIRECTION_NODES:
            continue
        target = next(stream, None)
        if target is not None and target.type is TokenType.WORD:
            redirections.append(
                redirection_node(_REDIRECTION_NODES[token.type], target.content)
            )
    return redirections


def parse_simple_command(tokens: Sequence[Token], start: int, end: int) -> Node:
    """Build a command node from tokens[start..end]."""
    return command_node(
        extract_args(tokens, start, end), extract_redirections(tokens, start, end)
    )


def parse_command_line(tokens: Sequence[Token], start: int, end: int) -> Optional[Node]:
    """Build the tree for tokens[start..end], or None for an empty range."""
    if start > end:
        return None
    if matching_parentheses(tokens, start, end):
        return parse_command_line(tokens, start + 1, end - 1)
    op_pos = find_lowest_precedence_op(tokens, start, end)
    if op_pos == -1:
        if start < end and 0 <= start < len(tokens) and tokens[start].type is TokenType.PAREN_OPEN:
            closing = find_matching_parenthesis(tokens, start, end)
            if start < closing <= end:
                return subshell_node(parse_command_line(tokens, start + 1, closing - 1))
        return parse_simple_command(tokens, start, end)
    return operator_node(
        _OPERATOR_NODES[tokens[op_pos].type],
        parse_command_line(tokens, start, op_pos - 1),
        parse_command_line(tokens, op_pos + 1, end),
    )


def build_ast(tokens: Sequence[Token]) -> Node:
    """Build the command tree for a whole token list."""
    tree = parse_command_line(tokens, 0, len(tokens) - 1) if tokens else None
    if tree is None:
        raise ParseError("Failed to create AST")
    return tree


def parse_input(command: str) -> Node:
    """Tokenize, check and parse a command line.

    Raises ShellSyntaxError for malformed input and ParseError when
    nothing can be built (for instance an empty line).
    """
    tokens = tokenize(command)
    check_syntax(tokens)
    return build_ast(tokens)


def format_tokens(tokens: Sequence[Token]) -> str:
    """Render a token list, one line per token."""
    if not tokens:
        return "No tokens to display\n"
    lines = ["--- Token List ---\n"]
    lines.extend(
        f"Token {i} --> Type: {int(token.type)}, Content: '{token.content}'\n"
        for i, token in enumerate(tokens)
    )
    return "".join(lines)