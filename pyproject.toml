[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "merge2048"
version = "0.1.0"
description = "The 2048 sliding-tile puzzle for the terminal, with accounts, save files and a classic rotating-board variant"
requires-python = ">=3.10"
dependencies = []
keywords = ["2048", "puzzle", "game", "terminal", "sliding tiles"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
merge2048 = "merge2048.app:main"
merge2048-classic = "merge2048.classic:main"

[tool.hatch.build.targets.wheel]
packages = ["merge2048"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
