[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "subpar"
version = "0.1.0"
description = "New York City subway feed descriptors, manifest CSV reading and station accessibility data"
requires-python = ">=3.10"
dependencies = [
    "httpx",
]
keywords = ["subway", "transit", "gtfs", "elevators", "accessibility", "open-data"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
]

[project.scripts]
subpar-complexlist = "subpar.complexlist:main"

[tool.hatch.build.targets.wheel]
packages = ["subpar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
