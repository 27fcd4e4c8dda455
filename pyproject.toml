[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keccakkat"
version = "0.1.0"
description = "Keccak-p[1600] permutations, a four-way state, an AES-256 CTR DRBG and known-answer-test request files"
requires-python = ">=3.10"
keywords = ["keccak", "sha3", "permutation", "drbg", "known-answer-test", "kat"]
classifiers = [
    "Development Status :: 4 - Beta",
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
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
keccakkat-genkat = "keccakkat.kat:main"

[tool.hatch.build.targets.wheel]
packages = ["keccakkat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
