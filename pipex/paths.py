"""Locating executables through the PATH variable."""

from __future__ import annotations

import errno
import os
from collections.abc import Iterable, Mapping, Sequence

NOT_FOUND_EXIT_CODE = 127


class CommandNotFoundError(Exception):
    """Raised when a command cannot be resolved to an executable file."""

    def __init__(self, name: str | None, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.message = message
        self.exit_code = NOT_FOUND_EXIT_CODE


def get_path(env: Mapping[str, str] | None = None) -> list[str]:
    """Return the non-empty directories listed in ``PATH``, in order."""
    if env is None:
        env = os.environ
    value = env.get("PATH")
    if value is None:
        return []
    return [part for part in value.split(":") if part]


def _is_executable(path: str) -> bool:
    return os.access(path, os.F_OK | os.X_OK)


def find_binary(directories: Iterable[str] | None, name: str | None) -> str | None:
    """Return the first ``directory/name`` that exists and is executable."""
    if not name or directories is None:
        return None
    for directory in directories:
        candidate = f"{directory}/{name}"
        if _is_executable(candidate):
            return candidate
    return None


def _access_error(path: str) -> str:
    code = errno.EACCES if os.path.exists(path) else errno.ENOENT
    return os.strerror(code)


def resolve_command(argv: Sequence[str], env: Mapping[str, str] | None = None) -> str:
    """Resolve the program named by ``argv[0]`` to a path that can be executed.

    A name found in ``PATH`` wins; otherwise the name itself is used when it
    points at an executable file. Raises ``CommandNotFoundError`` otherwise.
    """
    name = argv[0] if argv else None
    found = find_binary(get_path(env), name)
    if found is not None:
        return found
    if name and _is_executable(name):
        return name
    if not name or "/" not in name:
        shown = "(null)" if name is None else name
        raise CommandNotFoundError(name, f"{shown}: command not found")
    raise CommandNotFoundError(name, f"{name}: {_access_error(name)}")