[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gzipware"
version = "0.1.0"
description = "WSGI middleware that gzip-compresses responses and can decompress gzip request bodies"
requires-python = ">=3.10"
dependencies = []
keywords = ["wsgi", "middleware", "gzip", "compression", "http"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Middleware",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gzipware"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
