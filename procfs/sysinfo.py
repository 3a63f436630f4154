"""Facts about the running system that several procfs values depend on."""

from __future__ import annotations

import mmap
import os
import sys


class SystemInfo:
    """System parameters needed to interpret tick counts, page counts and raw words."""

    def ticks_per_second(self) -> int:
        """Clock ticks per second, from ``sysconf(_SC_CLK_TCK)``."""
        return ticks_per_second()

    def page_size(self) -> int:
        """Memory page size in bytes, from ``sysconf(_SC_PAGESIZE)``."""
        return page_size()

    def is_little_endian(self) -> bool:
        """Whether the machine stores multi-byte integers little-endian."""
        return sys.byteorder == "little"


_LOCAL_SYSTEM_INFO = SystemInfo()


def current_system_info() -> SystemInfo:
    """The shared ``SystemInfo`` describing the local machine."""
    return _LOCAL_SYSTEM_INFO


def ticks_per_second() -> int:
    """Number of clock ticks per second (several procfs fields count in ticks)."""
    return int(os.sysconf("SC_CLK_TCK"))


def page_size() -> int:
    """Memory page size, in bytes."""
    try:
        return int(os.sysconf("SC_PAGESIZE"))
    except (ValueError, OSError):
        return mmap.PAGESIZE