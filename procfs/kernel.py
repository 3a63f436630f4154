"""Global kernel information and tuning values under ``/proc/sys/kernel``."""

from __future__ import annotations

import enum
import functools
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .core import ProcError, read_value, write_value

KERNEL_ROOT = Path("/proc/sys/kernel")

THREADS_MIN = 20
"""The minimum value accepted by ``threads-max`` on Linux 4.1 or later."""
THREADS_MAX = 0x3FFF_FFFF
"""The maximum value accepted by ``threads-max`` on Linux 4.1 or later."""

_UNSIGNED = re.compile(r"\+?[0-9]+")
_VERSION_PREFIX = re.compile(r"[0-9.]*")


def _parse_unsigned(token: str, bits: int, message: str) -> int:
    if not _UNSIGNED.fullmatch(token):
        raise ValueError(message)
    value = int(token)
    if value >= 1 << bits:
        raise ValueError(message)
    return value


@dataclass(frozen=True, order=True)
class Version:
    """A kernel version in major.minor.patch form."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, s: str) -> "Version":
        """Parse a version string; anything after the numeric part is ignored."""
        numeric = _VERSION_PREFIX.match(s).group()
        parts = iter(numeric.split("."))
        major = next(parts, None)
        if major is None:
            raise ValueError("Missing major version component")
        minor = next(parts, None)
        if minor is None:
            raise ValueError("Missing minor version component")
        patch = next(parts, None)
        if patch is None:
            raise ValueError("Missing patch version component")
        return cls(
            major=_parse_unsigned(major, 8, "Failed to parse major version"),
            minor=_parse_unsigned(minor, 8, "Failed to parse minor version"),
            patch=_parse_unsigned(patch, 16, "Failed to parse patch version"),
        )

    @classmethod
    def current(cls) -> "Version":
        """The version of the running kernel, from ``/proc/sys/kernel/osrelease``."""
        return read_value(KERNEL_ROOT / "osrelease", cls.parse)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@functools.cache
def _kernel_version_result() -> Version | ProcError:
    try:
        return Version.current()
    except ProcError as exc:
        return exc


def current_kernel_version() -> Version:
    """The running kernel's version, read once and then remembered."""
    result = _kernel_version_result()
    if isinstance(result, ProcError):
        raise result
    return result


@dataclass(frozen=True)
class KernelType:
    """The kernel's system name, such as ``Linux``."""

    sysname: str

    @classmethod
    def parse(cls, s: str) -> "KernelType":
        """Wrap the kernel type string as it is."""
        return cls(sysname=s)

    @classmethod
    def current(cls) -> "KernelType":
        """The running kernel's type, from ``/proc/sys/kernel/ostype``."""
        return read_value(KERNEL_ROOT / "ostype", cls.parse)


_DATE_FORMATS = (
    ("{} +0000", "%a %b %d %H:%M:%S UTC %Y %z"),
    ("{}", "%a, %d %b %Y %H:%M:%S %z"),
)


@dataclass(frozen=True)
class BuildInfo:
    """Kernel build information from ``/proc/sys/kernel/version``."""

    version: str
    flags: frozenset[str] = field(default_factory=frozenset)
    extra: str = ""

    @classmethod
    def parse(cls, s: str) -> "BuildInfo":
        """Parse a string such as ``#1 SMP PREEMPT Thu Sep 30 15:29:01 UTC 2021``."""
        parts = iter(s.split(" "))
        first = next(parts)
        if not first.startswith("#"):
            raise ValueError("Failed to parse kernel build version")
        version = first[1:]
        flags: set[str] = set()
        extra = ""
        for piece in parts:
            if all(c.isupper() for c in piece):
                flags.add(piece)
            else:
                extra = piece + " "
                break
        extra += " ".join(parts)
        return cls(version=version, flags=frozenset(flags), extra=extra)

    @classmethod
    def current(cls) -> "BuildInfo":
        """Build information of the running kernel."""
        return read_value(KERNEL_ROOT / "version", cls.parse)

    def smp(self) -> bool:
        """Whether the kernel was built with SMP."""
        return "SMP" in self.flags

    def preempt(self) -> bool:
        """Whether the kernel was built with PREEMPT."""
        return "PREEMPT" in self.flags

    def preemptrt(self) -> bool:
        """Whether the kernel was built with PREEMPTRT."""
        return "PREEMPTRT" in self.flags

    def version_number(self) -> int:
        """The leading digits of the build version, e.g. 21 for ``21~1``."""
        digits = re.match(r"[0-9]*", self.version).group()
        if not digits or int(digits) >= 1 << 32:
            raise ProcError("Failed to parse version number")
        return int(digits)

    def extra_date(self) -> datetime:
        """Parse the build date in ``extra`` into a local, timezone-aware datetime."""
        for template, fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(template.format(self.extra), fmt)
            except ValueError:
                continue
            return parsed.astimezone()
        raise ProcError("Failed to parse extra field to date")


@dataclass(frozen=True)
class SemaphoreLimits:
    """System V semaphore limits from ``/proc/sys/kernel/sem``."""

    semmsl: int
    semmns: int
    semopm: int
    semmni: int

    @classmethod
    def parse(cls, s: str) -> "SemaphoreLimits":
        """Parse four whitespace-separated limits."""
        names = ("SEMMSL", "SEMMNS", "SEMOPM", "SEMMNI")
        tokens = s.split()
        for index, name in enumerate(names):
            if index >= len(tokens):
                raise ValueError(f"Missing {name}")
        values = [
            _parse_unsigned(token, 64, f"Failed to parse {name}")
            for token, name in zip(tokens, names)
        ]
        return cls(*values)

    @classmethod
    def current(cls) -> "SemaphoreLimits":
        """The current semaphore limits."""
        return read_value(KERNEL_ROOT / "sem", cls.parse)


class AllowedFunctions(enum.IntFlag):
    """SysRq functions that may be individually enabled."""

    ENABLE_CONTROL_LOG_LEVEL = 2
    ENABLE_CONTROL_KEYBOARD = 4
    ENABLE_DEBUGGING_DUMPS = 8
    ENABLE_SYNC_COMMAND = 16
    ENABLE_REMOUNT_READ_ONLY = 32
    ENABLE_SIGNALING_PROCESSES = 64
    ALLOW_REBOOT_POWEROFF = 128
    ALLOW_NICING_REAL_TIME_TASKS = 256


_ALL_ALLOWED = 0
for _flag in AllowedFunctions:
    _ALL_ALLOWED |= int(_flag)


@dataclass(frozen=True)
class SysRq:
    """Which functions the SysRq key may invoke."""

    class Kind(enum.Enum):
        DISABLE = "disable"
        ENABLE = "enable"
        ALLOWED_FUNCTIONS = "allowed_functions"

    kind: "SysRq.Kind"
    functions: AllowedFunctions = AllowedFunctions(0)

    @classmethod
    def parse(cls, s: str) -> "SysRq":
        """Parse the numeric value stored in ``/proc/sys/kernel/sysrq``."""
        number = _parse_unsigned(s, 16, f"invalid sysrq value {s!r}")
        if number == 0:
            return cls(cls.Kind.DISABLE)
        if number == 1:
            return cls(cls.Kind.ENABLE)
        if number & ~_ALL_ALLOWED:
            raise ValueError("Invalid value")
        return cls(cls.Kind.ALLOWED_FUNCTIONS, AllowedFunctions(number))

    def to_number(self) -> int:
        """The numeric form written to ``/proc/sys/kernel/sysrq``."""
        if self.kind is SysRq.Kind.DISABLE:
            return 0
        if self.kind is SysRq.Kind.ENABLE:
            return 1
        return int(self.functions)


def pid_max() -> int:
    """The maximum process ID number."""
    return read_value(KERNEL_ROOT / "pid_max", int)


def shmall() -> int:
    """System-wide limit on the total pages of System V shared memory."""
    return read_value(KERNEL_ROOT / "shmall", int)


def shmmax() -> int:
    """Maximum size of a System V shared memory segment."""
    return read_value(KERNEL_ROOT / "shmmax", int)


def set_shmmax(new_value: int) -> None:
    """Set the maximum size of a System V shared memory segment."""
    write_value(KERNEL_ROOT / "shmmax", int(new_value))


def shmmni() -> int:
    """System-wide maximum number of System V shared memory segments."""
    return read_value(KERNEL_ROOT / "shmmni", int)


def sysrq() -> SysRq:
    """Functions currently allowed to be invoked by the SysRq key."""
    return read_value(KERNEL_ROOT / "sysrq", SysRq.parse)


def set_sysrq(value: SysRq) -> None:
    """Set the functions allowed to be invoked by the SysRq key."""
    write_value(KERNEL_ROOT / "sysrq", value.to_number())


def threads_max() -> int:
    """System-wide limit on the number of threads."""
    return read_value(KERNEL_ROOT / "threads-max", int)


def set_threads_max(new_limit: int) -> None:
    """Set the thread limit; on Linux 4.1+ it must lie in THREADS_MIN..THREADS_MAX."""
    try:
        kernel = current_kernel_version()
    except ProcError:
        kernel = None
    if (
        kernel is not None
        and kernel.major >= 4
        and kernel.minor >= 1
        and not THREADS_MIN <= new_limit <= THREADS_MAX
    ):
        raise ProcError(f"{new_limit} is outside the THREADS_MIN..=THREADS_MAX range")
    write_value(KERNEL_ROOT / "threads-max", int(new_limit))