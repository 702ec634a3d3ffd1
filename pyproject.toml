[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphplace"
version = "0.1.0"
description = "Placement of graph nodes on fixed slots: simulated annealing heuristics, node and slot selectors, run statistics and small neural-network building blocks."
requires-python = ">=3.10"
dependencies = []
keywords = ["graph drawing", "simulated annealing", "placement", "crossing minimization", "heuristics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["graphplace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
