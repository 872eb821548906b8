"""Environment, host, process and MPI-launch information helpers."""

from __future__ import annotations

import os
import re
import socket
import sys
import threading
import time
from collections.abc import Iterable, Mapping

__all__ = [
    "environ_entries",
    "putenv_overwrite",
    "putenv_nooverwrite",
    "sleep",
    "microsleep",
    "hostname",
    "padded_hostname",
    "core_id",
    "pid",
    "tid",
    "cpuset_to_string",
    "affinity",
    "mpi_epoch",
    "cpu_model",
    "mpi_rank",
    "mpi_size",
    "set_umask_from_env",
]

CPUINFO_PATH = "/proc/cpuinfo"
MODEL_NAME_PREFIX = "model name\t: "

RANK_VARIABLES = (
    "PMI_FORK_RANK",
    "ALPS_APP_PE",
    "PMIX_RANK",
    "PMI_RANK",
    "OMPI_COMM_WORLD_RANK",
    "EC_FARM_ID",
)

SIZE_VARIABLES = (
    "PMIX_SIZE",
    "PMI_SIZE",
    "OMPI_COMM_WORLD_SIZE",
    "SLURM_NTASKS",
    "SLURM_NPROCS",
    "EC_FARM_SIZE",
)

UMASK_VAR = "EC_SET_UMASK"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_OCTAL = re.compile(r"\s*([+-]?[0-7]+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _first_set(env: Mapping[str, str], names: Iterable[str]) -> str | None:
    return next((env[name] for name in names if name in env), None)


def environ_entries() -> list[str]:
    """Return the active environment as ``NAME=value`` strings."""
    return [f"{name}={value}" for name, value in os.environ.items()]


def _split_assignment(assignment: str) -> tuple[str, str | None] | None:
    text = assignment.rstrip(" ")
    if not text:
        return None
    name, eq, value = text.partition("=")
    return name, (value if eq else None)


def _apply(name: str, value: str | None) -> None:
    if value is None:
        os.environ.pop(name, None)
    else:
        os.environ[name] = value


def putenv_overwrite(assignment: str) -> None:
    """Apply ``NAME=value`` to the environment, replacing any existing value.

    Trailing blanks are ignored; a bare ``NAME`` removes the variable.
    """
    parsed = _split_assignment(assignment)
    if parsed is not None:
        _apply(*parsed)


def putenv_nooverwrite(assignment: str) -> None:
    """Apply ``NAME=value`` only if ``NAME`` is not already set."""
    parsed = _split_assignment(assignment)
    if parsed is None:
        return
    name, value = parsed
    if value is not None and name in os.environ:
        return
    _apply(name, value)


def sleep(seconds: int) -> int:
    """Sleep for *seconds* whole seconds (negative counts as 0); return 0."""
    if seconds > 0:
        time.sleep(seconds)
    return 0


def microsleep(usecs: int) -> None:
    """Sleep for *usecs* microseconds when positive."""
    if usecs > 0:
        time.sleep(usecs / 1_000_000)


def hostname() -> str:
    """Return the host name cut short at its first dot."""
    return socket.gethostname().split(".", 1)[0]


def padded_hostname(length: int, padding: str = " ") -> str:
    """Return the short host name truncated or padded to *length* characters."""
    return hostname()[:length].ljust(length, padding[:1] or " ")


def core_id() -> int:
    """Return the CPU core the calling thread last ran on, or -1 if unknown."""
    try:
        with open(f"/proc/self/task/{threading.get_native_id()}/stat") as fh:
            stat = fh.read()
    except OSError:
        return -1
    fields = stat.rsplit(")", 1)[-1].split()
    # Field 39 of stat is "processor"; the first two fields precede ")".
    try:
        return int(fields[36])
    except (IndexError, ValueError):
        return -1


def pid() -> int:
    """Return the process id."""
    return os.getpid()


def tid() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


def cpuset_to_string(cpus: Iterable[int]) -> str:
    """Render a set of CPU numbers compactly, e.g. runs of 3+ as ``a-b``."""
    ordered = sorted(set(cpus))
    parts: list[str] = []
    start = 0
    while start < len(ordered):
        end = start
        while end + 1 < len(ordered) and ordered[end + 1] == ordered[end] + 1:
            end += 1
        first, last = ordered[start], ordered[end]
        run = end - start
        if run == 0:
            parts.append(str(first))
        elif run == 1:
            parts.append(f"{first},{last}")
        else:
            parts.append(f"{first}-{last}")
        start = end + 1
    return ",".join(parts)


def affinity() -> str:
    """Return the compact CPU affinity of the calling thread."""
    getaffinity = getattr(os, "sched_getaffinity", None)
    if getaffinity is None:
        return ""
    try:
        return cpuset_to_string(getaffinity(0))
    except OSError:
        return ""


def mpi_epoch() -> float:
    """Return the wall-clock time in seconds since the Unix epoch."""
    return time.time()


def cpu_model(cpuinfo_path: str = CPUINFO_PATH) -> str:
    """Return the first ``model name`` entry of *cpuinfo_path*, or ``""``."""
    try:
        with open(cpuinfo_path, encoding="utf-8", errors="replace") as fh:
            for line in fh:
                if line.startswith(MODEL_NAME_PREFIX):
                    return line[len(MODEL_NAME_PREFIX):].split("\n", 1)[0]
    except OSError:
        pass
    return ""


def mpi_rank(environ: Mapping[str, str] | None = None) -> int:
    """Guess this task's MPI rank from launcher variables; 0 if unknown."""
    env = os.environ if environ is None else environ
    value = _first_set(env, RANK_VARIABLES)
    rank = _atoi(value) if value is not None else -1
    return max(rank, 0)


def mpi_size(environ: Mapping[str, str] | None = None) -> int:
    """Guess the number of MPI tasks from launcher variables; 1 if unknown."""
    env = os.environ if environ is None else environ
    value = _first_set(env, SIZE_VARIABLES)
    size = _atoi(value) if value is not None else 0
    return max(size, 1)


def set_umask_from_env(environ: Mapping[str, str] | None = None) -> tuple[int, int] | None:
    """Set the umask from octal ``EC_SET_UMASK``; return (new, old) or None."""
    env = os.environ if environ is None else environ
    value = env.get(UMASK_VAR)
    if value is None:
        return None
    match = _LEADING_OCTAL.match(value)
    if match is None:
        return None
    newmask = int(match.group(1), 8) & 0o777
    oldmask = os.umask(newmask)
    print(
        f"*** EC_SET_UMASK : new/old = {newmask:o}/{oldmask:o} (oct), "
        f"{newmask}/{oldmask} (dec), {newmask:x}/{oldmask:x} (hex)",
        file=sys.stderr,
    )
    return newmask, oldmask