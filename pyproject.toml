[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "signalacq"
version = "1.0.1"
description = "Toolkit-independent state and settings models for the panels of a serial and BLE signal acquisition front end"
requires-python = ">=3.10"
dependencies = []
keywords = ["serial", "bluetooth", "data acquisition", "plotting", "settings"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["signalacq"]

[tool.pytest.ini_options]
addopts = "-ra"
