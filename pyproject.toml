[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "menushell"
version = "0.1.0"
description = "Interactive command shells built from nested menus, with history, completion and schedulers"
requires-python = ">=3.10"
dependencies = []
keywords = ["cli", "shell", "menu", "repl", "command line", "completion", "history"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
menushell-demo = "menushell.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["menushell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
