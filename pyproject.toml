[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "splakit"
version = "0.1.0"
description = "Typed sparse linear algebra building blocks: element types, scalars, operations, masked vector assignment, storage format conversion, profiling and program assembly"
requires-python = ">=3.10"
dependencies = []
keywords = ["sparse", "linear-algebra", "semiring", "vector", "storage-format", "profiling"]
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["splakit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
