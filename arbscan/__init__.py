"""Cross-venue WETH/USDC arbitrage analysis: swap math, quoting, trade-size optimization and API responses."""

__version__ = "0.1.0"