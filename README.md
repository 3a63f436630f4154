# procfs

A Python library for reading, and where the kernel allows it tuning, the
kernel settings and system information that Linux exposes under `/proc`.
It has no dependencies outside the standard library.

## Modules

- `procfs.core`: the error classes and the small file helpers the other
  modules use (`read_file`, `read_bytes`, `write_file`, `read_value`,
  `write_value`, `open_file`, `wrap_os_error`).
- `procfs.sysinfo`: `ticks_per_second()`, `page_size()` and a `SystemInfo`
  object (`current_system_info()`) that also reports the byte order.
- `procfs.kernel`: `Version`, `KernelType`, `BuildInfo` and `SemaphoreLimits`,
  each with `parse()` and `current()`; the SysRq setting (`SysRq`,
  `AllowedFunctions`, `sysrq()`, `set_sysrq()`); `pid_max()`, `shmall()`,
  `shmmax()`, `set_shmmax()`, `shmmni()`, `threads_max()` and
  `set_threads_max()`; and `current_kernel_version()`, which reads the running
  kernel's version once and remembers it.
- `procfs.random`: `entropy_avail()`, `poolsize()`, `read_wakeup_threshold()`,
  `write_wakeup_threshold()`, `uuid()` and `boot_id()` from
  `/proc/sys/kernel/random`.
- `procfs.sys_fs`: `dentry_state()` (a `DEntryState`), `file_nr()` (a
  `FileState`), `file_max()` / `set_file_max()` and the epoll limit
  `max_user_watches()` / `set_max_user_watches()`.
- `procfs.binfmt_misc`: `enabled()`, `entries()` and the `BinFmtEntry`,
  `BinFmtFlags`, `ExtensionData` and `MagicData` types for registered binary
  formats.
- `procfs.namespaces`: `read_namespaces(ns_dir)` reads an `ns` directory such
  as `/proc/self/ns` into a dict of `Namespace` records keyed by type.

## Examples

```python
from procfs.kernel import BuildInfo, Version, current_kernel_version

version = Version.parse("3.16.0-6-amd64")
print(version.major, version.minor, version.patch)  # 3 16 0

if current_kernel_version() >= Version(4, 1, 0):
    print("threads-max is range-checked on this kernel")

info = BuildInfo.parse("#1 SMP PREEMPT Thu Sep 30 15:29:01 UTC 2021")
print(info.smp(), info.preempt(), info.extra)
```

```python
from procfs.sys_fs import dentry_state, file_nr

print(file_nr().allocated, "file handles allocated")
print(dentry_state().age_limit)
```

```python
from procfs.binfmt_misc import enabled, entries

if enabled():
    for entry in entries():
        print(entry.name, entry.interpreter, entry.flags)
```

```python
from procfs.namespaces import read_namespaces

for ns_type, ns in read_namespaces("/proc/self/ns").items():
    print(ns_type, ns.identifier)
```

## Errors

Every failure while reading or writing is raised as a subclass of
`procfs.core.ProcError`, which carries the path that failed in `.path`:

- `ProcNotFoundError`: the file does not exist (ENOENT or ESRCH).
- `ProcPermissionError`: access was denied (EACCES or EPERM). Writing a
  setting usually needs root.
- `ProcIoError`: any other I/O failure; `.errno` holds the error number.
- `ProcInternalError`: the data had an unexpected layout.

`read_value` raises a plain `ProcError` when the file's contents do not parse.
The `parse()` class methods raise `ValueError` on bad input.

```python
from procfs.core import ProcNotFoundError
from procfs.random import read_wakeup_threshold

try:
    print(read_wakeup_threshold())
except ProcNotFoundError as err:
    print("not available:", err)
```

## What it does not do

This package reads system-wide files only. It has no process objects: it does
not list running processes, nor read a process's command line, environment,
open file descriptors, threads or memory maps. It does not cover
`/proc/sys/vm` or `/proc/sys/kernel/keys`. It has no command-line tool.

Some files exist only on certain kernel versions or configurations. When a
file is missing, the matching function raises `ProcNotFoundError` and does not
return a guessed value.