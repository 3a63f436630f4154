import errno
from pathlib import Path

import pytest

from procfs.core import (
    ProcError,
    ProcInternalError,
    ProcIoError,
    ProcNotFoundError,
    ProcPermissionError,
    open_file,
    read_bytes,
    read_file,
    read_value,
    wrap_os_error,
    write_file,
    write_value,
)


def test_missing_file_is_not_found_with_path():
    with pytest.raises(ProcNotFoundError) as info:
        open_file("/this_should_not_exist")
    assert info.value.path == Path("/this_should_not_exist")


def test_reading_directory_is_io_error_with_path(tmp_path):
    with pytest.raises(ProcIoError) as info:
        read_file(tmp_path)
    assert info.value.path == tmp_path
    assert not isinstance(info.value, ProcNotFoundError)


@pytest.mark.parametrize(
    "code, kind",
    [
        (errno.ENOENT, ProcNotFoundError),
        (errno.ESRCH, ProcNotFoundError),
        (errno.EACCES, ProcPermissionError),
        (errno.EPERM, ProcPermissionError),
        (errno.EIO, ProcIoError),
    ],
)
def test_wrap_os_error_kinds(code, kind):
    err = wrap_os_error(OSError(code, "boom"), "/proc/1/maps")
    assert type(err) is kind
    assert err.path == Path("/proc/1/maps")
    assert isinstance(err, ProcError)


def test_io_error_keeps_errno():
    err = wrap_os_error(OSError(errno.EIO, "boom"), "/x")
    assert err.errno == errno.EIO


def test_error_str_mentions_path():
    err = ProcNotFoundError("gone", "/proc/42/stat")
    assert "/proc/42/stat" in str(err)
    assert str(ProcInternalError("bug")) == "bug"


def test_write_and_read_round_trip(tmp_path):
    target = tmp_path / "value"
    write_file(target, "hello\n")
    assert read_file(target) == "hello\n"
    write_file(target, b"\x00\x01")
    assert read_bytes(target) == b"\x00\x01"


def test_open_file_returns_readable_handle(tmp_path):
    target = tmp_path / "data"
    target.write_bytes(b"abc")
    with open_file(target) as handle:
        assert handle.read() == b"abc"


def test_read_value_strips_and_parses(tmp_path):
    target = tmp_path / "num"
    target.write_text("  65530\n")
    assert read_value(target, int) == 65530
    assert read_value(target) == "65530"


def test_read_value_parse_failure(tmp_path):
    target = tmp_path / "num"
    target.write_text("abc\n")
    with pytest.raises(ProcError) as info:
        read_value(target, int)
    assert info.value.path == target


def test_read_file_invalid_utf8(tmp_path):
    target = tmp_path / "bad"
    target.write_bytes(b"\xff\xfe")
    with pytest.raises(ProcIoError):
        read_file(target)


def test_write_value_uses_str(tmp_path):
    target = tmp_path / "out"
    write_value(target, 42)
    assert target.read_text() == "42"


def test_write_to_missing_directory(tmp_path):
    with pytest.raises(ProcNotFoundError):
        write_value(tmp_path / "nope" / "file", 1)