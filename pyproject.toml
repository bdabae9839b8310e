[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spxsm3"
version = "0.1.0"
description = "SPHINCS+ stateless hash-based signatures instantiated with the SM3 hash function"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["sphincs+", "sm3", "post-quantum", "hash-based signatures", "signature"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["spxsm3"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
