[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "opwire"
version = "0.1.0"
description = "A small TCP client and server that exchange length-prefixed messages and value packages"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "socket", "protocol", "client", "server", "serialization"]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
opwire-client = "opwire.client:main"
opwire-server = "opwire.server:main"

[tool.hatch.build.targets.wheel]
packages = ["opwire"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
