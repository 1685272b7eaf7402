"""The prompt shown before each command line."""

from __future__ import annotations

import os
from typing import Optional

_COLOR = "\x1b[1;36m"
_RESET = "\x1b[0m"


def make_prompt(cwd: Optional[str] = None) -> str:
    """Return the last component of the working directory, coloured, then a space."""
    directory = os.getcwd() if cwd is None else cwd
    name = directory[directory.rfind("/") + 1:]
    return f"{_COLOR}{name}{_RESET} "