"""Information about the kernel random number generator under ``/proc/sys/kernel/random``."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable

from .core import ProcNotFoundError, read_value, write_value

RANDOM_ROOT = Path("/proc/sys/kernel/random")

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _unsigned(bits: int) -> Callable[[str], int]:
    def parse(text: str) -> int:
        if not _UNSIGNED.fullmatch(text):
            raise ValueError(f"invalid unsigned integer {text!r}")
        value = int(text)
        if value >= 1 << bits:
            raise ValueError(f"{text!r} does not fit in {bits} bits")
        return value

    return parse


def entropy_avail() -> int:
    """Available entropy in bits (0 to 4096)."""
    return read_value(RANDOM_ROOT / "entropy_avail", _unsigned(16))


def poolsize() -> int:
    """Size of the entropy pool in bits."""
    return read_value(RANDOM_ROOT / "poolsize", _unsigned(16))


def read_wakeup_threshold() -> int:
    """Entropy bits needed to wake readers of /dev/random.

    Falls back to ``write_wakeup_threshold`` when ``read_wakeup_threshold`` is absent.
    """
    try:
        return read_value(RANDOM_ROOT / "read_wakeup_threshold", _unsigned(32))
    except ProcNotFoundError:
        return read_value(RANDOM_ROOT / "write_wakeup_threshold", _unsigned(32))


def write_wakeup_threshold(new_value: int) -> None:
    """Set the entropy level below which writers to /dev/random are woken."""
    write_value(RANDOM_ROOT / "write_wakeup_threshold", int(new_value))


def uuid() -> str:
    """A fresh random 128-bit UUID, generated on each read."""
    return read_value(RANDOM_ROOT / "uuid")


def boot_id() -> str:
    """The 128-bit UUID generated at boot."""
    return read_value(RANDOM_ROOT / "boot_id")