[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arbscan"
version = "0.1.0"
description = "Cross-venue WETH/USDC arbitrage analysis: concentrated-liquidity and constant-product swap math, quoting, trade-size optimization and response building."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "arbitrage",
    "dex",
    "amm",
    "concentrated-liquidity",
    "constant-product",
    "swap-simulation",
    "optimizer",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["arbscan"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
