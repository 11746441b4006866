[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "supertool"
version = "1.0.2"
description = "Maintenance helpers for embedded devices: zip archive handling, update discovery, system time setting and dialog/keypad logic."
requires-python = ">=3.10"
dependencies = []
keywords = ["zip", "archive", "updater", "zipcrypto", "maintenance", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["supertool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
