[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "microws"
version = "0.1.0"
description = "Building blocks for a small HTTP and WebSocket server: write backpressure, pub/sub topic tree, response caching, in-memory file serving and option parsing."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "http",
    "websocket",
    "server",
    "pubsub",
    "backpressure",
    "getopt",
]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["microws"]

[tool.hatch.build.targets.sdist]
include = ["microws", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
