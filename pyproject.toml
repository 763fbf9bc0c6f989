[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "doutil"
version = "0.1.0"
description = "Everyday helpers: sequences, retries, single-flight calls, workers, time, signing, TCP forwarding, routing, and Go module and mock-source utilities"
requires-python = ">=3.10"
keywords = [
    "utilities",
    "retry",
    "singleflight",
    "worker-pool",
    "tcp-proxy",
    "state-machine",
    "rsa-signature",
    "go-mod",
    "mock-generation",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["doutil"]

[tool.pytest.ini_options]
addopts = "-ra"
