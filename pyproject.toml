[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "selecthttpd"
version = "0.1.0"
description = "A small single-threaded HTTP/1.1 file server built on select(), with an interactive time-protocol client"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "select", "sockets", "webroot"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
selecthttpd = "selecthttpd.server:main"
selecthttpd-client = "selecthttpd.client:main"

[tool.hatch.build.targets.wheel]
packages = ["selecthttpd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
