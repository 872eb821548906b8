"""Byte-order detection and OpenMP version decoding."""

from __future__ import annotations

import struct

__all__ = ["is_little_endian", "is_big_endian", "openmp_version"]


def is_little_endian() -> bool:
    """Return True when the machine stores integers little-endian."""
    return struct.pack("=I", 0x12345678)[0] == 0x78


def is_big_endian() -> bool:
    """Return True when the machine stores integers big-endian."""
    return not is_little_endian()


_OPENMP_RELEASES = (
    (201511, (4, 5)),
    (201307, (4, 0)),
    (201107, (3, 1)),
    (200805, (3, 0)),
    (200505, (2, 5)),
)


def openmp_version(openmp: int) -> tuple[int, int]:
    """Map an ``_OPENMP`` date value to (version, subversion); (0, 0) if unknown."""
    return next(
        (release for since, release in _OPENMP_RELEASES if openmp >= since),
        (0, 0),
    )