[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "daisyplay"
version = "0.1.0"
description = "Tools for reading DAISY talking books: navigation files, SMIL timing, bookmarks and book discovery"
requires-python = ">=3.10"
dependencies = []
keywords = ["daisy", "talking book", "audiobook", "smil", "ncc", "accessibility"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Adaptive Technologies",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
daisyplay = "daisyplay.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["daisyplay"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
