"""Split a command line into tokens."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

from minishell.chartypes import (
    find_word_len,
    is_command_char,
    is_operator,
    is_parenthesis,
    is_quote,
    is_redirection,
    is_special_character,
)


class TokenType(IntEnum):
    """Kinds of token the lexer produces."""

    DEFAULT = 0
    WORD = 1
    ASSIGNMENT = 2
    QUOTE = 3
    SINGLE_QUOTE = 4
    DOUBLE_QUOTE = 5
    REDIR = 6
    REDIR_IN = 7
    REDIR_OUT = 8
    REDIR_APPEND = 9
    HEREDOC = 10
    OPERATOR = 11
    PIPE = 12
    AND = 13
    OR = 14
    SEMICOLON = 15
    PARENTHESIS = 16
    PAREN_OPEN = 17
    PAREN_CLOSE = 18
    SPECIAL_CHARACTER = 19
    ENV_VAR = 20
    EXIT_STATUS = 21
    ESCAPE = 22
    COMMENT = 23
    NEWLINE = 24
    EOF = 25
    UNKNOWN = 26


@dataclass(frozen=True)
class Token:
    """A token: its kind and the text it was read from."""

    type: TokenType
    content: str


def get_token_type(c: str) -> TokenType:
    """Classify the character that starts a token."""
    if is_command_char(c):
        return TokenType.WORD
    if is_quote(c):
        return TokenType.QUOTE
    if is_redirection(c):
        return TokenType.REDIR
    if is_operator(c):
        return TokenType.OPERATOR
    if is_parenthesis(c):
        return TokenType.PARENTHESIS
    if is_special_character(c):
        return TokenType.SPECIAL_CHARACTER
    return TokenType.DEFAULT


def _peek(command: str, pos: int) -> str:
    return command[pos] if pos < len(command) else ""


def _read_word(command: str, pos: int) -> tuple[Token, int]:
    length = find_word_len(command[pos:])
    return Token(TokenType.WORD, command[pos:pos + length]), pos + length


def _read_quote(command: str, pos: int) -> tuple[Token, int]:
    c = command[pos]
    kind = TokenType.SINGLE_QUOTE if c == "'" else TokenType.DOUBLE_QUOTE
    return Token(kind, c), pos + 1


def _read_redirection(command: str, pos: int) -> tuple[Token, int]:
    c = command[pos]
    following = _peek(command, pos + 1)
    if is_redirection(following):
        text = c + following
        kind = {
            ">>": TokenType.REDIR_APPEND,
            "<<": TokenType.HEREDOC,
        }.get(text, TokenType.UNKNOWN)
        return Token(kind, text), pos + 2
    kind = TokenType.REDIR_OUT if c == ">" else TokenType.REDIR_IN
    return Token(kind, c), pos + 1


def _read_operator(command: str, pos: int) -> tuple[Token, int]:
    c = command[pos]
    following = _peek(command, pos + 1)
    if is_operator(following):
        text = c + following
        kind = {"&&": TokenType.AND, "||": TokenType.OR}.get(
            text, TokenType.UNKNOWN
        )
        return Token(kind, text), pos + 2
    # A lone "&" has no kind of its own and stays DEFAULT.
    kind = {"|": TokenType.PIPE, ";": TokenType.SEMICOLON}.get(
        c, TokenType.DEFAULT
    )
    return Token(kind, c), pos + 1


def _read_parenthesis(command: str, pos: int) -> tuple[Token, int]:
    c = command[pos]
    kind = TokenType.PAREN_OPEN if c == "(" else TokenType.PAREN_CLOSE
    return Token(kind, c), pos + 1


def _read_special(command: str, pos: int) -> tuple[Token, int]:
    c = command[pos]
    if c == "$":
        following = _peek(command, pos + 1)
        if is_command_char(following):
            kind = TokenType.ENV_VAR
        elif following == "?":
            kind = TokenType.EXIT_STATUS
        else:
            kind = TokenType.UNKNOWN
    else:
        kind = {
            "\\": TokenType.ESCAPE,
            "#": TokenType.COMMENT,
            "\n": TokenType.NEWLINE,
            "\0": TokenType.EOF,
        }[c]
    return Token(kind, c), pos + 1


_READERS: dict[TokenType, Callable[[str, int], tuple[Token, int]]] = {
    TokenType.WORD: _read_word,
    TokenType.QUOTE: _read_quote,
    TokenType.REDIR: _read_redirection,
    TokenType.OPERATOR: _read_operator,
    TokenType.PARENTHESIS: _read_parenthesis,
    TokenType.SPECIAL_CHARACTER: _read_special,
}


def tokenize(command: str) -> list[Token]:
    """Split a command line into tokens; unclassified characters are skipped."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(command):
        category = get_token_type(command[pos])
        if category is TokenType.DEFAULT:
            pos += 1
            continue
        token, pos = _READERS[category](command, pos)
        tokens.append(token)
    return tokens