[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cordterm"
version = "0.1.0"
description = "Core building blocks for a terminal chat client: configuration, themes, key events, read markers and user commands"
requires-python = ">=3.10"
dependencies = [
    "pygments",
]
keywords = ["chat", "terminal", "tui", "client", "commands", "theme"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cordterm-theme = "cordterm.theme:main"

[tool.hatch.build.targets.wheel]
packages = ["cordterm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
