[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cruisectl"
version = "0.1.0"
description = "Simulated motor cruise control over a CAN bus: PID speed loop, encoder filtering and a serial-to-CAN operator interface"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "can",
    "can-bus",
    "pid",
    "cruise-control",
    "motor",
    "encoder",
    "moving-average",
    "simulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems :: Controller Area Network (CAN)",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cruisectl-interface = "cruisectl.interface:main"

[tool.hatch.build.targets.wheel]
packages = ["cruisectl"]

[tool.hatch.build.targets.sdist]
include = ["cruisectl", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
files = ["cruisectl"]
