"""Filesystem-related kernel variables under ``/proc/sys/fs``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from .core import ProcInternalError, read_file, read_value, write_value

FS_ROOT = Path("/proc/sys/fs")
EPOLL_ROOT = FS_ROOT / "epoll"

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_unsigned(token: str, bits: int, what: str) -> int:
    if not _UNSIGNED.fullmatch(token):
        raise ProcInternalError(f"failed to parse {what} from {token!r}")
    value = int(token)
    if value >= 1 << bits:
        raise ProcInternalError(f"{what} value {token!r} does not fit in {bits} bits")
    return value


def _fields(s: str, count: int, what: str) -> list[str]:
    parts = s.split()
    if len(parts) < count:
        raise ProcInternalError(
            f"{what}: expected at least {count} fields, found {len(parts)}"
        )
    return parts[:count]


@dataclass(frozen=True)
class DEntryState:
    """Status of the directory cache (dcache)."""

    nr_dentry: int
    nr_unused: int
    age_limit: timedelta
    want_pages: bool

    @classmethod
    def parse(cls, s: str) -> "DEntryState":
        """Parse the contents of ``/proc/sys/fs/dentry-state``."""
        nr_dentry, nr_unused, age, want = (
            _parse_unsigned(token, 32, "dentry-state")
            for token in _fields(s, 4, "dentry-state")
        )
        return cls(
            nr_dentry=nr_dentry,
            nr_unused=nr_unused,
            age_limit=timedelta(seconds=age),
            want_pages=want != 0,
        )


@dataclass(frozen=True)
class FileState:
    """Allocated, free and maximum file handles."""

    allocated: int
    free: int
    max: int

    @classmethod
    def parse(cls, s: str) -> "FileState":
        """Parse the contents of ``/proc/sys/fs/file-nr``."""
        allocated, free, maximum = (
            _parse_unsigned(token, 64, "file-nr") for token in _fields(s, 3, "file-nr")
        )
        return cls(allocated=allocated, free=free, max=maximum)


def dentry_state() -> DEntryState:
    """Current status of the directory cache."""
    return DEntryState.parse(read_file(FS_ROOT / "dentry-state"))


def file_max() -> int:
    """System-wide limit on the number of open files."""
    return read_value(FS_ROOT / "file-max", int)


def set_file_max(value: int) -> None:
    """Set the system-wide limit on the number of open files."""
    write_value(FS_ROOT / "file-max", int(value))


def file_nr() -> FileState:
    """Counts of allocated, free and maximum file handles."""
    return FileState.parse(read_file(FS_ROOT / "file-nr"))


def max_user_watches() -> int:
    """Per-user limit on file descriptors registered across all epoll instances."""
    return read_value(EPOLL_ROOT / "max_user_watches", int)


def set_max_user_watches(value: int) -> None:
    """Set the per-user limit on epoll-registered file descriptors."""
    write_value(EPOLL_ROOT / "max_user_watches", int(value))