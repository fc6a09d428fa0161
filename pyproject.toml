[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gaiamods"
version = "0.1.0"
description = "Global fee checks and interchain-account authentication logic for a Cosmos-style hub chain"
requires-python = ">=3.10"
dependencies = []
keywords = ["cosmos", "fees", "gas", "globalfee", "interchain-accounts", "ibc", "bech32"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gaiamods"]

[tool.pytest.ini_options]
addopts = "-ra"
