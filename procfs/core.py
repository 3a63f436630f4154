"""Error types and small file helpers shared by the rest of the package."""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import IO, Callable, TypeVar

T = TypeVar("T")

PathLike = str | os.PathLike


class ProcError(Exception):
    """Base class for every error raised while reading procfs data."""

    def __init__(self, message: str, path: PathLike | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message} (path: {self.path})"


class ProcNotFoundError(ProcError):
    """The file or process does not exist (ENOENT or ESRCH)."""


class ProcPermissionError(ProcError):
    """Access to the file was denied (EACCES or EPERM)."""


class ProcIoError(ProcError):
    """Any other I/O failure."""

    def __init__(
        self, message: str, path: PathLike | None = None, errno_value: int | None = None
    ) -> None:
        super().__init__(message, path)
        self.errno = errno_value


class ProcInternalError(ProcError):
    """A parsing bug or unexpected data layout inside this package."""


_NOT_FOUND = {errno.ENOENT, errno.ESRCH}
_PERMISSION = {errno.EACCES, errno.EPERM}


def wrap_os_error(error: OSError, path: PathLike) -> ProcError:
    """Convert an ``OSError`` into the matching ``ProcError`` carrying ``path``."""
    message = error.strerror or str(error)
    if error.errno in _NOT_FOUND:
        return ProcNotFoundError(message, path)
    if error.errno in _PERMISSION:
        return ProcPermissionError(message, path)
    return ProcIoError(message, path, error.errno)


def open_file(path: PathLike, mode: str = "rb") -> IO:
    """Open ``path``, raising a ``ProcError`` that records the path on failure."""
    try:
        return open(path, mode)
    except OSError as exc:
        raise wrap_os_error(exc, path) from exc


def read_bytes(path: PathLike) -> bytes:
    """Read the whole of ``path`` as bytes."""
    with open_file(path, "rb") as handle:
        try:
            return handle.read()
        except OSError as exc:
            raise wrap_os_error(exc, path) from exc


def read_file(path: PathLike) -> str:
    """Read the whole of ``path`` as UTF-8 text."""
    data = read_bytes(path)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ProcIoError("stream did not contain valid UTF-8", path) from exc


def write_file(path: PathLike, data: str | bytes) -> None:
    """Write ``data`` to ``path``."""
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    with open_file(path, "wb") as handle:
        try:
            handle.write(payload)
        except OSError as exc:
            raise wrap_os_error(exc, path) from exc


def read_value(path: PathLike, parse: Callable[[str], T] = str) -> T:
    """Read ``path``, strip surrounding whitespace and convert it with ``parse``."""
    text = read_file(path).strip()
    try:
        return parse(text)
    except ValueError as exc:
        raise ProcError(f"failed to parse {text!r}: {exc}", path) from exc


def write_value(path: PathLike, value: object) -> None:
    """Write the string form of ``value`` to ``path``."""
    write_file(path, str(value))