[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sbomex"
version = "0.1.0"
description = "Search and pull public SBOMs from a local SQLite catalogue of SBOMs"
requires-python = ">=3.10"
dependencies = []
keywords = ["sbom", "spdx", "cyclonedx", "supply-chain", "catalogue"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sbomex = "sbomex.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sbomex"]

[tool.pytest.ini_options]
addopts = "-ra"
