"""Registered binary formats under ``/proc/sys/fs/binfmt_misc``."""

from __future__ import annotations

import enum
import os
import re
from dataclasses import dataclass
from pathlib import Path

from .core import ProcInternalError, read_file, read_value, wrap_os_error

BINFMT_ROOT = Path("/proc/sys/fs/binfmt_misc")

_HEX_BYTE = re.compile(r"[0-9a-fA-F]{2}")
_UNSIGNED = re.compile(r"\+?[0-9]+")
_NOT_ENTRIES = {"status", "register"}


def enabled() -> bool:
    """Whether the miscellaneous binary formats system is enabled."""
    return read_value(BINFMT_ROOT / "status") == "enabled"


def hex_to_bytes(hex_string: str) -> bytes:
    """Decode a string of hexadecimal digit pairs."""
    if len(hex_string) % 2 != 0:
        raise ProcInternalError(f"Hex string {hex_string!r} has non-even length")
    data = bytearray()
    for start in range(0, len(hex_string), 2):
        pair = hex_string[start : start + 2]
        if not _HEX_BYTE.fullmatch(pair):
            raise ProcInternalError(f"failed to parse hex byte {pair!r}")
        data.append(int(pair, 16))
    return bytes(data)


class BinFmtFlags(enum.IntFlag):
    """Flags of a binfmt_misc entry."""

    P = 0x01
    """Preserve argv[0]."""
    O = 0x02  # noqa: E741
    """Open the binary and pass its descriptor to the interpreter."""
    C = 0x04
    """Compute credentials from the binary; implies O."""
    F = 0x08
    """Open the interpreter when the entry is installed."""

    @classmethod
    def parse(cls, s: str) -> "BinFmtFlags":
        """Collect the flag letters in ``s``, ignoring any other characters."""
        flags = cls(0)
        for char in s:
            if char in ("P", "O", "C", "F"):
                flags |= cls[char]
        return flags


@dataclass(frozen=True)
class ExtensionData:
    """Match on a file extension (without the leading period)."""

    extension: str


@dataclass(frozen=True)
class MagicData:
    """Match on magic bytes at ``offset``, compared under ``mask``."""

    offset: int
    magic: bytes
    mask: bytes


@dataclass(frozen=True)
class BinFmtEntry:
    """A registered binary format."""

    name: str
    enabled: bool
    interpreter: str
    flags: BinFmtFlags
    data: ExtensionData | MagicData

    @classmethod
    def parse(cls, name: str, data: str) -> "BinFmtEntry":
        """Parse the contents of an entry file named ``name``."""
        is_enabled = False
        interpreter = ""
        extension: str | None = None
        offset = 0
        magic = b""
        mask = b""
        flags = BinFmtFlags(0)

        for raw_line in data.split("\n"):
            line = raw_line.removesuffix("\r")
            if line == "enabled":
                is_enabled = True
            elif line.startswith("interpreter "):
                interpreter = line[len("interpreter ") :]
            elif line.startswith("flags:"):
                flags = BinFmtFlags.parse(line[len("flags:") :])
            elif line.startswith("extension ."):
                extension = line[len("extension .") :]
            elif line.startswith("offset "):
                text = line[len("offset ") :]
                if not _UNSIGNED.fullmatch(text) or int(text) > 0xFF:
                    raise ProcInternalError(f"failed to parse offset {text!r}")
                offset = int(text)
            elif line.startswith("magic "):
                magic = hex_to_bytes(line[len("magic ") :])
            elif line.startswith("mask "):
                mask = hex_to_bytes(line[len("mask ") :])

        if magic and not mask:
            mask = b"\xff" * len(magic)

        entry_data: ExtensionData | MagicData
        if extension is not None:
            entry_data = ExtensionData(extension)
        else:
            entry_data = MagicData(offset=offset, magic=magic, mask=mask)
        return cls(
            name=name,
            enabled=is_enabled,
            interpreter=interpreter,
            flags=flags,
            data=entry_data,
        )


def entries() -> list[BinFmtEntry]:
    """All registered binary format entries."""
    try:
        names = os.listdir(BINFMT_ROOT)
    except OSError as exc:
        raise wrap_os_error(exc, BINFMT_ROOT) from exc
    return [
        BinFmtEntry.parse(name, read_file(BINFMT_ROOT / name))
        for name in names
        if name not in _NOT_ENTRIES
    ]