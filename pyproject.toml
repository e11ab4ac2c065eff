[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fsops"
version = "0.1.0"
description = "Filesystem operations with typed file status, directory iteration and lexical path handling"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "paths", "directory", "symlink", "permissions", "status"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fsops"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
