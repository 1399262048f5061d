[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wbtree"
version = "0.1.0"
description = "Immutable weight-balanced binary search trees with ordered iteration, rank/select and set operations"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tree",
    "weight-balanced",
    "binary-search-tree",
    "immutable",
    "persistent",
    "ordered-map",
    "ordered-set",
    "order-statistic",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["wbtree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
