[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "csvtoolbelt"
version = "0.1.0"
description = "Command-line tools and a library for searching, selecting, sorting, slicing, splitting, transposing, tabulating and profiling CSV data."
requires-python = ">=3.10"
dependencies = [
    "python-dateutil",
]
keywords = ["csv", "search", "regex", "sort", "slice", "split", "transpose", "statistics", "table"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Filters",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
csvtb-select = "csvtoolbelt.selection:main"
csvtb-search = "csvtoolbelt.search:main"
csvtb-searchset = "csvtoolbelt.searchset:main"
csvtb-transpose = "csvtoolbelt.transpose:main"
csvtb-table = "csvtoolbelt.table:main"
csvtb-sort = "csvtoolbelt.sort:main"
csvtb-slice = "csvtoolbelt.slicer:main"
csvtb-split = "csvtoolbelt.splitter:main"
csvtb-stats = "csvtoolbelt.stats:main"

[tool.hatch.build.targets.wheel]
packages = ["csvtoolbelt"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
