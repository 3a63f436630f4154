"""Namespaces a process belongs to, from ``/proc/<pid>/ns``."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .core import PathLike, ProcInternalError, wrap_os_error


@dataclass(frozen=True)
class Namespace:
    """One namespace entry: its type, path, inode identifier and device."""

    ns_type: str
    path: Path
    identifier: int
    device_id: int


def read_namespaces(ns_dir: PathLike) -> dict[str, Namespace]:
    """Read every entry of an ``ns`` directory, keyed by namespace type."""
    ns_dir = Path(ns_dir)
    try:
        entries = list(os.scandir(ns_dir))
    except OSError as exc:
        raise wrap_os_error(exc, ns_dir) from exc

    namespaces: dict[str, Namespace] = {}
    for entry in entries:
        path = ns_dir / entry.name
        try:
            info = os.stat(path)
        except OSError as exc:
            raise ProcInternalError(f"Unable to stat {str(path)!r}") from exc
        if entry.name in namespaces:
            raise ProcInternalError(f"NsType appears more than once {entry.name!r}")
        namespaces[entry.name] = Namespace(
            ns_type=entry.name,
            path=path,
            identifier=info.st_ino,
            device_id=info.st_dev,
        )
    return namespaces