[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "instakod"
version = "0.1.0"
description = "Interpreter for a tiny line-oriented language with four integer variables"
requires-python = ">=3.10"
dependencies = []
keywords = ["interpreter", "toy-language", "esolang"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
instakod = "instakod.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["instakod"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
