[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labsuite"
version = "0.1.0"
description = "Score tables, a castle maze game and a paged data file"
requires-python = ">=3.10"
dependencies = []
keywords = ["education", "maze", "game", "grades", "disjoint-set", "paging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
labsuite-scores = "labsuite.scoretable:main"
labsuite-courses = "labsuite.coursetable:main"
labsuite-castle = "labsuite.game:main"

[tool.hatch.build.targets.wheel]
packages = ["labsuite"]

[tool.pytest.ini_options]
addopts = "-ra"
