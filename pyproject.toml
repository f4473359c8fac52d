[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treasurehunt"
version = "0.1.0"
description = "Manage treasure hunts stored as binary record files, with a score tool and an interactive hub"
requires-python = ">=3.10"
dependencies = []
keywords = ["treasure", "hunt", "game", "scores", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
treasure-manager = "treasurehunt.cli:main"
treasure-score = "treasurehunt.score:main"
treasure-hub = "treasurehunt.hub:main"

[tool.hatch.build.targets.wheel]
packages = ["treasurehunt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
