[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "feedistrib"
version = "1.0.0"
description = "Weekly fee distribution to vote-escrowed token stakers, proportional to voting power"
requires-python = ">=3.10"
dependencies = []
keywords = ["fees", "distribution", "staking", "voting-escrow", "rewards"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["feedistrib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
