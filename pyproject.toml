[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "router-hosts"
version = "0.1.0"
description = "Building blocks for managing a router's hosts file: validation, client and server configuration, output formatting, error reporting and import chunking."
requires-python = ">=3.11"
dependencies = [
    "platformdirs",
]
keywords = ["hosts", "dns", "router", "hostname", "validation", "configuration"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["router_hosts"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
