[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fiatutil"
version = "0.1.0"
description = "Calendar arithmetic, unit-based binary file I/O, environment, argument and CPU-binding helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["julian", "calendar", "datetime", "binary-io", "environment", "affinity", "mpi", "openmp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fiat-printbinding = "fiatutil.printbinding:main"

[tool.hatch.build.targets.wheel]
packages = ["fiatutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
