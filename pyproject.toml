[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bindata"
version = "4.0.0"
description = "Building blocks for generating Go source code that embeds file contents"
requires-python = ">=3.10"
dependencies = []
keywords = ["go", "code-generation", "embedding", "assets", "bindata"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bindata"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
