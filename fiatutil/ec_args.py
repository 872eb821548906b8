"""Storage and retrieval of command-line arguments."""

from __future__ import annotations

import functools
import os
import subprocess
from collections.abc import Iterable, Mapping

__all__ = ["ArgumentRegistry", "executable_path", "DEFAULT_TERMINATOR"]

DEFAULT_TERMINATOR = "-^"
TERMINATOR_VAR = "MPL_CL_TERMINATE"
UNKNOWN_EXECUTABLE = "/unknown/executable"
PS_COMMAND = "/bin/ps"


def _from_proc() -> str | None:
    try:
        return os.readlink(f"/proc/{os.getpid()}/exe") or None
    except OSError:
        return None


def _from_ps() -> str | None:
    if not os.access(PS_COMMAND, os.X_OK):
        return None
    try:
        output = subprocess.run(
            [PS_COMMAND, f"-p{os.getpid()}"],
            capture_output=True,
            text=True,
            check=False,
        ).stdout
    except OSError:
        return None
    lines = output.strip().splitlines()
    if not lines:
        return None
    fields = lines[-1].split()
    if not fields:
        return None
    name = fields[3] if len(fields) > 4 else fields[-1]
    if "/" in name:
        return name
    for directory in os.environ.get("PATH", "").split(":"):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return name


@functools.lru_cache(maxsize=1)
def executable_path() -> str:
    """Return the path of the running executable, as best it can be found."""
    return _from_proc() or _from_ps() or UNKNOWN_EXECUTABLE


class ArgumentRegistry:
    """Command-line arguments registered once, with the program name at index 0."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ
        self._args: list[str | None] | None = None
        self._argv: list[str | None] | None = None
        self._numargs = -1
        self._terminator: str | None = None
        self._program: str | None = None

    def _program_name(self) -> str:
        if self._program is None:
            self._program = executable_path()
        return self._program

    def register(self, argv: Iterable[str | None]) -> None:
        """Register arguments as given to a program's entry point.

        Only the first registration counts. Arguments stop at the first
        ``None`` or at the terminator (``MPL_CL_TERMINATE``, default ``-^``).
        """
        if self._numargs != -1 or self._args is not None:
            return
        given = list(argv)
        if not given:
            return
        if self._terminator is None:
            self._terminator = self._environ.get(TERMINATOR_VAR, DEFAULT_TERMINATOR)
        kept: list[str] = []
        for arg in given:
            if arg is None or arg == self._terminator:
                break
            kept.append(arg)
        if kept:
            self._program = kept[0]
            self._args = list(kept)
            self._numargs = len(kept) - 1
        else:
            self._args = [self._program_name()]
            self._numargs = 0
        self._argv = list(self._args)

    def argc(self) -> int:
        """Return the number of arguments including the program name."""
        return 1 + self._numargs

    def argv(self) -> tuple[str, ...]:
        """Return the arguments, program name first, up to the first unset one."""
        if self._argv is None:
            self._argv = [self._program_name()]
        result: list[str] = []
        for arg in self._argv:
            if arg is None:
                break
            result.append(arg)
        return tuple(result)

    def getarg(self, argno: int) -> str:
        """Return argument *argno*; 0 is the program; ``""`` if unavailable."""
        if argno == 0:
            return self._program_name()
        if self._args is not None and 0 < argno <= self._numargs:
            return self._args[argno] or ""
        return ""

    def putarg(self, argno: int, value: str) -> None:
        """Replace argument *argno* (0..argc-1) with *value*."""
        if self._args is None or not 0 <= argno <= self._numargs:
            raise IndexError(f"argument {argno} out of range 0..{self._numargs}")
        self._args[argno] = value
        if self._argv is None:
            self._argv = [None] * (self._numargs + 1)
        self._argv[argno] = value

    def reset(self, argc: int, terminator: str | None = None) -> None:
        """Discard the arguments and make room for *argc* empty ones."""
        if terminator is not None:
            self._terminator = terminator
        self._numargs = max(argc, 0)
        self._args = [None] * (self._numargs + 1)
        self._argv = [None] * (self._numargs + 1)