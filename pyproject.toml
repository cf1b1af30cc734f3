[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pawnboard"
version = "0.1.0"
description = "A two-player desktop chess game with move validation, chess clocks and optional engine evaluation."
requires-python = ">=3.10"
keywords = ["chess", "board game", "pygame", "game", "chess clock"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
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
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pawnboard = "pawnboard.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pawnboard"]

[tool.pytest.ini_options]
addopts = "-ra"
