[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spritefsm"
version = "0.7.0"
description = "A basic state machine for managing sprite animations"
requires-python = ">=3.10"
dependencies = []
keywords = ["gamedev", "animation", "sprite", "state-machine"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spritefsm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
