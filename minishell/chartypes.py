"""Character classes used by the command-line lexer."""

import string
from itertools import takewhile

_SPACES = frozenset("\t\n\v\f ")
_QUOTES = frozenset("'\"")
_REDIRECTIONS = frozenset("<>")
_OPERATORS = frozenset("&|;")
_PARENTHESES = frozenset("()")
_SPECIALS = frozenset("$\\#\n\0")
_COMMAND_CHARS = frozenset(string.ascii_letters + string.digits + "_-.")


def is_space(c: str) -> bool:
    """Return True for tab, newline, vertical tab, form feed and space."""
    return c in _SPACES


def is_quote(c: str) -> bool:
    """Return True for a single or double quote."""
    return c in _QUOTES


def is_redirection(c: str) -> bool:
    """Return True for ``<`` or ``>``."""
    return c in _REDIRECTIONS


def is_operator(c: str) -> bool:
    """Return True for ``&``, ``|`` or ``;``."""
    return c in _OPERATORS


def is_command_char(c: str) -> bool:
    """Return True for characters that may appear in a word."""
    return c in _COMMAND_CHARS


def is_parenthesis(c: str) -> bool:
    """Return True for ``(`` or ``)``."""
    return c in _PARENTHESES


def is_special_character(c: str) -> bool:
    """Return True for ``$``, backslash, ``#``, newline and NUL."""
    return c in _SPECIALS


def find_word_len(text: str) -> int:
    """Return the length of the run of word characters at the start of text."""
    return sum(1 for _ in takewhile(is_command_char, text))