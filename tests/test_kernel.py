from datetime import datetime, timezone

import pytest

from procfs.core import ProcError
from procfs.kernel import (
    AllowedFunctions,
    BuildInfo,
    KernelType,
    SemaphoreLimits,
    SysRq,
    Version,
    current_kernel_version,
    pid_max,
    shmmni,
    sysrq,
)


@pytest.mark.parametrize("text", ["3.16.0-6-amd64", "3.16.0", "3.16.0_1"])
def test_version_parse(text):
    assert Version.parse(text) == Version(3, 16, 0)


def test_version_ordering():
    assert Version(3, 16, 0) < Version(4, 0, 0)
    assert Version(3, 16, 1) > Version(3, 16, 0)
    assert Version(2, 6, 28) <= Version(2, 6, 28)
    assert str(Version(5, 10, 46)) == "5.10.46"


def test_type():
    assert KernelType.parse("Linux").sysname == "Linux"


def test_build_info_ubuntu():
    info = BuildInfo.parse("#1 SMP PREEMPT Thu Sep 30 15:29:01 UTC 2021")
    assert info.version == "1"
    assert info.version_number() == 1
    assert info.flags == {"SMP", "PREEMPT"}
    assert info.smp()
    assert info.preempt()
    assert not info.preemptrt()
    assert info.extra == "Thu Sep 30 15:29:01 UTC 2021"
    assert info.extra_date() == datetime(2021, 9, 30, 15, 29, 1, tzinfo=timezone.utc)


def test_build_info_arch():
    info = BuildInfo.parse("#1 SMP PREEMPT Fri, 12 Nov 2021 19:22:10 +0000")
    assert info.version == "1"
    assert info.version_number() == 1
    assert info.flags == {"SMP", "PREEMPT"}
    assert info.extra == "Fri, 12 Nov 2021 19:22:10 +0000"
    assert info.smp()
    assert info.preempt()
    assert not info.preemptrt()
    assert info.extra_date() == datetime(2021, 11, 12, 19, 22, 10, tzinfo=timezone.utc)


def test_build_info_debian():
    info = BuildInfo.parse("#1 SMP Debian 5.10.46-4 (2021-08-03)")
    assert info.version == "1"
    assert info.version_number() == 1
    assert info.flags == {"SMP"}
    assert info.extra == "Debian 5.10.46-4 (2021-08-03)"
    assert info.smp()
    assert not info.preempt()
    assert not info.preemptrt()
    with pytest.raises(ProcError):
        info.extra_date()


def test_build_info_version_number_prefix():
    assert BuildInfo.parse("#21~1 SMP x").version_number() == 21


def test_build_info_errors():
    with pytest.raises(ValueError, match="Failed to parse kernel build version"):
        BuildInfo.parse("1 SMP")
    with pytest.raises(ProcError, match="Failed to parse version number"):
        BuildInfo.parse("#abc").version_number()


def test_semaphore_limits():
    limits = SemaphoreLimits.parse("32000\t1024000000\t500\t32000")
    assert limits == SemaphoreLimits(
        semmsl=32_000, semmns=1_024_000_000, semopm=500, semmni=32_000
    )


def test_semaphore_limits_errors():
    with pytest.raises(ValueError, match="^Missing SEMMNS$"):
        SemaphoreLimits.parse("1")
    with pytest.raises(ValueError, match="^Failed to parse SEMMNS$"):
        SemaphoreLimits.parse("1 string 500 3200")


def test_sysrq_parse():
    assert SysRq.parse("0") == SysRq(SysRq.Kind.DISABLE)
    assert SysRq.parse("1") == SysRq(SysRq.Kind.ENABLE)
    parsed = SysRq.parse("6")
    assert parsed.kind is SysRq.Kind.ALLOWED_FUNCTIONS
    assert parsed.functions == (
        AllowedFunctions.ENABLE_CONTROL_LOG_LEVEL
        | AllowedFunctions.ENABLE_CONTROL_KEYBOARD
    )
    assert parsed.to_number() == 6


@pytest.mark.parametrize("text", ["3", "abc", "70000", "512"])
def test_sysrq_parse_invalid(text):
    with pytest.raises(ValueError):
        SysRq.parse(text)


@pytest.mark.parametrize("number", [0, 1, 2, 176, 510])
def test_sysrq_round_trip(number):
    assert SysRq.parse(str(number)).to_number() == number