[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pykilo"
version = "0.0.1"
description = "A small terminal text editor driven by VT100 escape sequences"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "terminal", "text", "vt100", "raw-mode"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pykilo = "pykilo.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pykilo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
