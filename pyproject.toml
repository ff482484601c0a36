[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neureset"
version = "0.1.0"
description = "Simulator of a neurofeedback treatment device with EEG sites, treatment rounds, a battery and a session log"
requires-python = ">=3.10"
dependencies = []
keywords = ["eeg", "neurofeedback", "simulation", "medical-device"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
neureset = "neureset.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["neureset"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
