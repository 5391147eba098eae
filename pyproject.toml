[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ns1api"
version = "0.1.0"
description = "Data models for a managed DNS platform's API: metadata tables, filter chains, data sources and feeds, IPAM addresses, Pulsar jobs and monitoring."
requires-python = ">=3.10"
dependencies = []
keywords = ["dns", "ipam", "monitoring", "metadata", "filters", "pulsar", "api"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ns1api"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
