[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mnemosyne"
version = "0.1.0"
description = "Byte-signature parsing and pattern scanning over memory buffers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "signature",
    "pattern-scan",
    "byte-pattern",
    "reverse-engineering",
    "wildcard",
    "memory",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Disassemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mnemosyne-bench = "mnemosyne.benchmark:main"

[tool.hatch.build.targets.wheel]
packages = ["mnemosyne"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
