[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mirrorchess"
version = "0.1.0"
description = "Two-player terminal chess that shows the board from both sides at once"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "terminal", "board game", "two player", "ansi"]
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
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mirrorchess = "mirrorchess.game:main"

[tool.hatch.build.targets.wheel]
packages = ["mirrorchess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
