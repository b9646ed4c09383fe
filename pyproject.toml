[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gassybird"
version = "0.1.0"
description = "Game model for a side-scrolling bird game: events, physical actors, resources, obstacles and characters"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "arcade", "side-scroller", "physics", "sprites"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gassybird"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
