[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "fifotrigger"
version = "0.1.0"
description = "Wake up and run programs when a named pipe is pulled"
requires-python = ">=3.10"
dependencies = []
keywords = ["fifo", "named pipe", "trigger", "daemon", "notification"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
trigger-listen = "fifotrigger.listen:main"
trigger-pull = "fifotrigger.pull:main"
trigger-wait = "fifotrigger.wait:main"

[tool.setuptools.packages.find]
include = ["fifotrigger*"]

[tool.pytest.ini_options]
addopts = "-ra"
