[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sim8085"
version = "0.1.0"
description = "Interactive simulator for a subset of the Intel 8085 instruction set"
requires-python = ">=3.10"
dependencies = []
keywords = ["8085", "emulator", "simulator", "assembly", "intel"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sim8085 = "sim8085.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sim8085"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
