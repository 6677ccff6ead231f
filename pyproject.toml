[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fracbem"
version = "1.0.0"
description = "Building blocks on 1D curves in the plane: meshes, discrete P0/P1 spaces with fractional derivatives, quadrature and Green functions."
requires-python = ">=3.10"
keywords = [
    "boundary element method",
    "finite element method",
    "fractional derivative",
    "Riemann-Liouville",
    "Green function",
    "quadrature",
]
classifiers = [
    "Development Status :: 4 - Beta",
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
dependencies = [
    "numpy>=1.23",
    "scipy>=1.9",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[tool.hatch.build.targets.wheel]
packages = ["fracbem"]

[tool.hatch.build.targets.sdist]
include = ["fracbem", "tests"]

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
ignore_missing_imports = true
