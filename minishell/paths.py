"""Locate executables through the PATH variable."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Optional


class CommandNotFoundError(LookupError):
    """Raised when no directory of the search path holds the command."""

    def __init__(self, name: str) -> None:
        super().__init__(f"minishell: {name}: command not found")
        self.name = name


def split_path(text: str, sep: str = ":") -> list[str]:
    """Split a search path into directories, each ending with ``/``.

    Empty elements (leading, trailing or repeated separators) are dropped.
    """
    if not sep:
        return [text + "/"] if text else []
    return [f"{part}/" for part in text.split(sep) if part]


def get_paths(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Return the directories listed in PATH, or an empty list without PATH."""
    env = os.environ if environ is None else environ
    value = env.get("PATH")
    if value is None:
        return []
    return split_path(value, ":")


def find_command(name: str, paths: Iterable[str]) -> str:
    """Return the first existing ``directory + name`` in paths."""
    for directory in paths:
        candidate = directory + name
        if os.access(candidate, os.F_OK):
            return candidate
    raise CommandNotFoundError(name)