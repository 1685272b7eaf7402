"""State the shell carries from one command line to the next."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional, Union

EnvSource = Union[Iterable[str], Mapping[str, str]]


def copy_env(envp: Optional[EnvSource]) -> Optional[list[str]]:
    """Return an independent list of ``NAME=value`` entries, or None."""
    if envp is None:
        return None
    if isinstance(envp, Mapping):
        return [f"{name}={value}" for name, value in envp.items()]
    return list(envp)


@dataclass
class ShellState:
    """The shell's own environment, search path and last exit status."""

    envp: Optional[list[str]] = None
    paths: list[str] = field(default_factory=list)
    exit_status: int = 0

    def getenv(self, name: str) -> Optional[str]:
        """Return the value of the first entry called name, or None."""
        prefix = name + "="
        for entry in self.envp or ():
            if entry.startswith(prefix):
                return entry[len(prefix):]
        return None

    def environ(self) -> dict[str, str]:
        """Return the entries that have a value, as a mapping for child processes."""
        result: dict[str, str] = {}
        for entry in self.envp or ():
            name, equal, value = entry.partition("=")
            if equal and name not in result:
                result[name] = value
        return result