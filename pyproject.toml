[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eontimer"
version = "0.1.0"
description = "Multi-stage countdown timer with delay, second, frame and Entralink calibration for handheld-console RNG manipulation"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "timer",
    "rng",
    "calibration",
    "countdown",
    "gba",
    "nds",
    "3ds",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
eontimer = "eontimer.app:main"

[tool.hatch.build.targets.wheel]
packages = ["eontimer"]

[tool.hatch.build.targets.sdist]
include = ["eontimer", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
