[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "loreleaf"
version = "0.1.0"
description = "EPUB reading toolkit: container and OPF parsing, table of contents navigation, chapter structure and a personal book library"
requires-python = ">=3.10"
dependencies = []
keywords = ["epub", "ebook", "reader", "opf", "ncx", "library"]
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
    "Topic :: Text Processing :: General",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["loreleaf"]

[tool.pytest.ini_options]
addopts = "-ra"
