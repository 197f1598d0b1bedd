[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "packwire"
version = "0.1.0"
description = "Low-level MessagePack writing and whole-value reading with direct control over the wire format"
requires-python = ">=3.10"
dependencies = []
keywords = ["msgpack", "messagepack", "serialization", "binary", "encoding", "decoding"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["packwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
