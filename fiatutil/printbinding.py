"""Report which CPU cores each thread of this process is bound to."""

from __future__ import annotations

import argparse
import os
import re
import socket
import threading
from collections.abc import Iterable, Sequence

__all__ = ["format_cores", "format_binding", "collect_binding", "main"]

MAX_PROCS = 256
MAX_THREADS = 256
HOSTNAME_MAX = 99

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def format_cores(cores: Iterable[int]) -> str:
    """Render core numbers compactly: consecutive runs as ``a-b``, others by commas.

    An empty set of cores is shown as ``-1``.
    """
    ordered = sorted(set(cores))
    if not ordered:
        return "-1"
    parts: list[str] = []
    start = prev = ordered[0]
    for core in ordered[1:]:
        if core == prev + 1:
            prev = core
            continue
        parts.append(str(start) if start == prev else f"{start}-{prev}")
        start = prev = core
    parts.append(str(start) if start == prev else f"{start}-{prev}")
    return ",".join(parts)


def format_binding(rank: int, hostname: str, thread_cores: Sequence[Iterable[int]]) -> str:
    """Return the one-line binding report of one rank."""
    header = f"Rank {rank:4d} on {hostname:>16} has {len(thread_cores):3d} threads on cores: "
    return header + "".join(f"({format_cores(cores)})" for cores in thread_cores)


def _default_threads() -> int:
    value = os.environ.get("OMP_NUM_THREADS")
    if value:
        match = _LEADING_INT.match(value)
        if match and int(match.group(1)) > 0:
            return int(match.group(1))
    return 1


def _thread_cores() -> list[int]:
    getaffinity = getattr(os, "sched_getaffinity", None)
    if getaffinity is None:
        return []
    try:
        allowed = getaffinity(0)
    except OSError:
        return []
    online = os.cpu_count() or 0
    return sorted(core for core in allowed if core < online)[:MAX_PROCS]


def collect_binding(nthreads: int | None = None) -> list[list[int]]:
    """Return, for each of *nthreads* threads, the sorted cores it may run on."""
    count = _default_threads() if nthreads is None else nthreads
    if count < 1:
        raise ValueError(f"number of threads must be positive, not {count}")
    count = min(count, MAX_THREADS)
    results: list[list[int]] = [[] for _ in range(count)]

    def worker(index: int) -> None:
        results[index] = _thread_cores()

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """Print the core binding of every thread of this process."""
    parser = argparse.ArgumentParser(
        prog="fiat-printbinding",
        description="Print the CPU cores each thread is bound to.",
    )
    parser.add_argument(
        "-n",
        "--threads",
        type=int,
        default=None,
        help="number of threads (default: OMP_NUM_THREADS or 1)",
    )
    args = parser.parse_args(argv)
    host = socket.gethostname()[:HOSTNAME_MAX]
    try:
        binding = collect_binding(args.threads)
    except ValueError as exc:
        parser.error(str(exc))
    print(format_binding(0, host, binding))
    return 0