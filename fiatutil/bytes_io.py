"""Unit-numbered access to unblocked binary files.

Files are opened into a table of slots and referred to afterwards by the
slot index ("unit"). Freed slots are reused, lowest first, and the table
grows by doubling when it is full.
"""

from __future__ import annotations

import os
import re
import sys
import warnings
from collections.abc import Mapping
from typing import BinaryIO

__all__ = [
    "BytesIOError",
    "EndOfFileError",
    "UnitTable",
    "parse_mode",
    "buffer_size_from_env",
    "debug_level_from_env",
    "DEFAULT_BUFFER_SIZE",
]

DEFAULT_BUFFER_SIZE = 8192
NAME_MAX_LEN = 256
MODE_MAX_LEN = 10
BUFSIZE_VAR = "BYTES_IO_BUFSIZE"
DEBUG_VAR = "BYTES_IO_DEBUG"

_WHENCE = {0: os.SEEK_SET, 1: os.SEEK_CUR, 2: os.SEEK_END}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class BytesIOError(OSError):
    """An operation on a unit failed; ``code`` is the classic return code."""

    def __init__(self, message: str, code: int = -2) -> None:
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class EndOfFileError(BytesIOError):
    """End of file was reached; ``data`` holds the bytes read before it."""

    def __init__(self, message: str, data: bytes = b"") -> None:
        super().__init__(message, -1)
        self.data = data


def parse_mode(mode: str) -> str:
    """Translate an open mode to ``"a"``, ``"w"``, ``"r"`` or ``"r+"``."""
    mode = mode[:MODE_MAX_LEN]
    first = mode[:1]
    if first in ("a", "A"):
        return "a"
    if first in ("c", "C", "w", "W"):
        return "w"
    if first in ("r", "R"):
        return "r+" if mode[1:2] == "+" else "r"
    raise BytesIOError(f"Invalid open mode specified: {mode!r}", -3)


def _atol(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def buffer_size_from_env(environ: Mapping[str, str] | None = None) -> int:
    """Return the file buffer size given by ``BYTES_IO_BUFSIZE``, or the default."""
    env = os.environ if environ is None else environ
    value = env.get(BUFSIZE_VAR)
    if value is None:
        return DEFAULT_BUFFER_SIZE
    if not all(ch.isdigit() for ch in value):
        raise BytesIOError(
            f"Invalid number string in {BUFSIZE_VAR}: {value}; "
            "it must comprise only digits [0-9]",
            -1,
        )
    size = _atol(value)
    if size <= 0:
        raise BytesIOError(
            f"Invalid buffer size in {BUFSIZE_VAR}: {value}; it must be positive",
            -1,
        )
    return size


def debug_level_from_env(environ: Mapping[str, str] | None = None) -> int:
    """Return the debug level given by ``BYTES_IO_DEBUG``; 0 means off."""
    env = os.environ if environ is None else environ
    value = env.get(DEBUG_VAR)
    if value is None:
        return 0
    if not all(ch.isdigit() for ch in value):
        print(f"Invalid number string in {DEBUG_VAR}: {value}")
        print(f"{DEBUG_VAR} must comprise only digits [0-9].")
    return _atol(value)


class UnitTable:
    """A table of open binary files addressed by integer unit numbers."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ
        self._slots: list[BinaryIO | None] = []
        self._debug_level: int | None = None
        self._buffer_size: int | None = None

    def __enter__(self) -> UnitTable:
        return self

    def __exit__(self, *exc_info: object) -> None:
        for unit, handle in enumerate(self._slots):
            if handle is not None:
                handle.close()
                self._slots[unit] = None

    @property
    def debug(self) -> bool:
        if self._debug_level is None:
            self._debug_level = debug_level_from_env(self._environ)
            if self._debug_level > 0:
                print("BYTES_IO_OPEN: debug switched on")
        return self._debug_level > 0

    def _log(self, message: str) -> None:
        if self.debug:
            print(message)
            sys.stdout.flush()

    def _file(self, unit: int) -> BinaryIO:
        if 0 <= unit < len(self._slots):
            handle = self._slots[unit]
            if handle is not None:
                return handle
        raise BytesIOError(f"Unit {unit} is not open", -2)

    def _free_slot(self) -> int:
        for unit, handle in enumerate(self._slots):
            if handle is None:
                return unit
        old = len(self._slots)
        self._slots.extend([None] * max(2, old))
        return old

    def open(self, name: str, mode: str) -> int:
        """Open *name* with *mode* and return its unit number."""
        _ = self.debug
        path = name[:NAME_MAX_LEN].rstrip(" ")
        self._log(f"BYTES_IO_OPEN: filename = [{path}]")
        flags = parse_mode(mode)
        self._log(f"BYTES_IO_OPEN: file open mode = {flags}")
        if self._buffer_size is None:
            self._buffer_size = buffer_size_from_env(self._environ)
        unit = self._free_slot()
        self._log(f"BYTES_IO_OPEN: fptable slot = {unit}")
        try:
            handle = open(path, flags + "b", buffering=self._buffer_size)
        except OSError as exc:
            raise BytesIOError(f"{path}: {exc.strerror or exc}", -1) from exc
        self._log(f"BYTES_IO_OPEN: file buffer size = {self._buffer_size}")
        self._slots[unit] = handle
        return unit

    def seek(self, unit: int, offset: int, whence: int) -> int:
        """Position *unit* and return the byte offset from the start of file.

        *whence* is 0 (start), 1 (current position) or 2 (end); from the end
        the offset is always taken as negative.
        """
        handle = self._file(unit)
        self._log(
            f"BYTES_IO_SEEK: fptable slot = {unit}, offset = {offset}, "
            f"type of offset = {whence}"
        )
        if whence == 2:
            offset = -abs(offset)
        if whence not in _WHENCE:
            raise BytesIOError(f"bytes_io_seek: invalid whence {whence}", -2)
        try:
            current = handle.tell()
            if not (whence == 0 and current == offset):
                handle.seek(offset, _WHENCE[whence])
            position = handle.tell()
        except (OSError, ValueError) as exc:
            raise BytesIOError(f"bytes_io_seek: {exc}", -2) from exc
        self._log(f"BYTES_IO_SEEK: byte offset from start of file = {position}")
        return position

    def tell(self, unit: int) -> int:
        """Return the current byte offset of *unit*."""
        handle = self._file(unit)
        try:
            position = handle.tell()
        except (OSError, ValueError) as exc:
            raise BytesIOError(f"bytes_io_tell: {exc}", -2) from exc
        self._log(f"BYTES_IO_TELL: fptable slot = {unit}. Byte offset = {position}")
        return position

    def read(self, unit: int, nbytes: int) -> bytes:
        """Read exactly *nbytes* bytes; raise EndOfFileError if fewer remain."""
        handle = self._file(unit)
        self._log(f"BYTES_IO_READ: fptable slot = {unit}. Bytes to read = {nbytes}")
        try:
            data = handle.read(nbytes)
        except (OSError, ValueError) as exc:
            raise BytesIOError(f"bytes_io_read: {exc}", -2) from exc
        if len(data) != nbytes:
            raise EndOfFileError(
                f"bytes_io_read: end of file after {len(data)} of {nbytes} bytes", data
            )
        return data

    def write(self, unit: int, data: bytes) -> int:
        """Write *data* to *unit* and return the number of bytes written."""
        handle = self._file(unit)
        self._log(f"BYTES_IO_WRITE: fptable slot = {unit}. Bytes to write = {len(data)}")
        try:
            written = handle.write(data)
        except (OSError, ValueError) as exc:
            raise BytesIOError(f"bytes_io_write: {exc}", -1) from exc
        if written != len(data):
            raise BytesIOError(
                f"bytes_io_write: wrote {written} of {len(data)} bytes", -1
            )
        return written

    def flush(self, unit: int) -> None:
        """Flush the buffers of *unit* and sync it to storage."""
        handle = self._file(unit)
        self._log(f"BYTES_IO_FLUSH: fptable slot = {unit}")
        try:
            handle.flush()
        except (OSError, ValueError) as exc:
            raise BytesIOError(f"bytes_io_flush: fflush failed: {exc}", -1) from exc
        try:
            os.fsync(handle.fileno())
        except OSError as exc:
            raise BytesIOError(f"bytes_io_flush: Cannot fsync: {exc}", -1) from exc

    def close(self, unit: int) -> None:
        """Flush and close *unit*, freeing its slot; warn if already closed."""
        self._log(f"BYTES_IO_CLOSE: fptable slot = {unit}")
        if not 0 <= unit < len(self._slots):
            raise BytesIOError(f"Unit {unit} is not open", -2)
        handle = self._slots[unit]
        if handle is None:
            warnings.warn(
                f"bytes_io_close: File (fptable slot = {unit}) was already closed.",
                RuntimeWarning,
                stacklevel=2,
            )
            return
        self.flush(unit)
        try:
            handle.close()
        except OSError as exc:
            raise BytesIOError(f"bytes_io_close: {exc}", -1) from exc
        self._slots[unit] = None