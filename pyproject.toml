[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yamlops"
version = "0.1.0"
description = "Operations on YAML node trees: adding and merging, boolean logic, anchors, comments, entries, date-times and environment substitution"
requires-python = ">=3.10"
keywords = ["yaml", "merge", "anchors", "aliases", "comments", "envsubst"]
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
    "Topic :: Text Processing",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["yamlops"]

[tool.pytest.ini_options]
addopts = "-ra"
