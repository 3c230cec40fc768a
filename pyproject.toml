[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmstore"
version = "0.1.0"
description = "Building blocks of a small relational database: page frames, an LRU frame replacer, catalog metadata, write-ahead log records and transaction and lock bookkeeping."
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "storage", "lru", "page", "catalog", "wal", "transaction", "locking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rmstore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
