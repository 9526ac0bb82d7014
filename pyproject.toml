[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mangolog"
version = "0.1.0"
description = "Error codes, token identifiers and event log encoding for a margin trading program"
requires-python = ">=3.10"
dependencies = []
keywords = ["trading", "events", "logs", "base58", "binary", "errors"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mangolog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
