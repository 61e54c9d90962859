[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "confbus"
version = "0.1.0"
description = "Serve typed configuration files as objects on an in-process message bus"
requires-python = ">=3.10"
dependencies = []
keywords = ["configuration", "bus", "service", "timeout", "config-files"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
confbus = "confbus.manager:main"

[tool.hatch.build.targets.wheel]
packages = ["confbus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
