[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kindutil"
version = "0.1.0"
description = "Utilities for local Kubernetes cluster tooling: kubeconfig merging, YAML patching and a terminal spinner"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["kubernetes", "kubeconfig", "yaml", "json-patch", "merge-patch", "spinner"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kindutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
