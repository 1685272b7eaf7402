"""Syntax checks run over a token list before it is parsed."""

from collections.abc import Sequence
from typing import Optional

from minishell.lexer import Token, TokenType

_REDIRECTIONS = frozenset(
    {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.REDIR_APPEND,
        TokenType.HEREDOC,
    }
)
_OPERATORS = frozenset({TokenType.PIPE, TokenType.AND, TokenType.OR})


class ShellSyntaxError(ValueError):
    """Raised when a command line is not well formed."""


def quote_syntax_is_valid(tokens: Sequence[Token]) -> bool:
    """Return True when every quote is closed."""
    in_single = in_double = False
    for token in tokens:
        if token.type is TokenType.SINGLE_QUOTE and not in_double:
            in_single = not in_single
        elif token.type is TokenType.DOUBLE_QUOTE and not in_single:
            in_double = not in_double
    return not in_single and not in_double


def _paren_error(tokens: Sequence[Token]) -> Optional[str]:
    depth = 0
    for token, following in zip(tokens, [*tokens[1:], None]):
        if token.type is TokenType.PAREN_OPEN:
            if following is not None and following.type is TokenType.PAREN_CLOSE:
                return "Empty parenthesis in prompt"
            depth += 1
        elif token.type is TokenType.PAREN_CLOSE:
            if depth == 0:
                return "Unmatched parentheses"
            depth -= 1
    if depth:
        return "Unmatched parentheses"
    return None


def paren_syntax_is_valid(tokens: Sequence[Token]) -> bool:
    """Return True when parentheses balance and none is empty."""
    return _paren_error(tokens) is None


def redir_syntax_is_valid(tokens: Sequence[Token]) -> bool:
    """Return True when every redirection is followed by a word."""
    for token, following in zip(tokens, [*tokens[1:], None]):
        if token.type in _REDIRECTIONS and (
            following is None or following.type is not TokenType.WORD
        ):
            return False
    return True


def operator_syntax_is_valid(tokens: Sequence[Token]) -> bool:
    """Return True when every ``|``, ``&&`` and ``||`` has valid operands."""
    for before, token, after in zip([None, *tokens], tokens, [*tokens[1:], None]):
        if token.type not in _OPERATORS:
            continue
        if before is None or after is None:
            return False
        if before.type not in (TokenType.WORD, TokenType.PAREN_CLOSE):
            return False
        if after.type not in (TokenType.WORD, TokenType.PAREN_OPEN):
            return False
    return True


def check_syntax(tokens: Sequence[Token]) -> None:
    """Raise ShellSyntaxError describing the first problem found."""
    if not tokens:
        return
    if not quote_syntax_is_valid(tokens):
        raise ShellSyntaxError("Unmatched quotes")
    paren_error = _paren_error(tokens)
    if paren_error is not None:
        raise ShellSyntaxError(paren_error)
    if not redir_syntax_is_valid(tokens):
        raise ShellSyntaxError("Invalid redirection syntax")
    if not operator_syntax_is_valid(tokens):
        raise ShellSyntaxError("Invalid operator syntax")