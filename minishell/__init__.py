"""A small interactive shell with pipes, logical operators, subshells, redirections and builtins."""

__version__ = "0.1.0"

__all__ = [
    "builtins",
    "chartypes",
    "cli",
    "executor",
    "lexer",
    "parser",
    "paths",
    "prompt",
    "redirections",
    "state",
    "syntax",
    "tree",
]