[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osprojects"
version = "0.1.0"
description = "An election registry simulator and a multi-process record sorter"
requires-python = ">=3.10"
dependencies = []
keywords = ["bloom-filter", "red-black-tree", "heapsort", "quicksort", "fork", "elections"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: POSIX",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
runelection = "osprojects.elections.runelection:main"
mysort = "osprojects.forksort.mysort:main"

[tool.hatch.build.targets.wheel]
packages = ["osprojects"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
