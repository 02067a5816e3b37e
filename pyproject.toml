[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flowsdk"
version = "0.1.0"
description = "Building blocks for the Flow blockchain: addresses, account keys, account proofs, RLP, chain entities and a REST Access API client."
requires-python = ">=3.11"
dependencies = []
keywords = ["flow", "blockchain", "rlp", "address", "access-api", "rest"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flowsdk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
