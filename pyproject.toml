[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procfs"
version = "0.1.0"
description = "Read and tune Linux kernel settings and system information through the /proc filesystem"
requires-python = ">=3.10"
dependencies = []
keywords = ["linux", "proc", "procfs", "sysctl", "kernel", "namespaces", "binfmt_misc", "monitoring"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: System :: Operating System Kernels :: Linux",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["procfs"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
