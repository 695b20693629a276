"""Rebalancing bridge transfers for an arbitrage direction and choice of the cheapest one."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass

from arbscan.analysis import scale_amount_to_smallest_units
from arbscan.profit import ArbDirection

logger = logging.getLogger(__name__)

WETH_DECIMALS = 18
USDC_DECIMALS = 6
USDC_PRICE_USD = 1.0


class BridgeRoute(enum.Enum):
    """Chain pair a bridge transfer moves funds between."""

    BASE_TO_ETHEREUM = "base_to_ethereum"
    ETHEREUM_TO_BASE = "ethereum_to_base"


@dataclass(frozen=True)
class BridgePlan:
    """The two alternative transfers that rebalance inventory after one arbitrage.

    Either WETH goes back to where it was sold, or USDC goes back to where it was
    spent; amounts are in the token's smallest units as decimal strings.
    """

    direction: ArbDirection
    weth_route: BridgeRoute
    weth_amount_wei: str
    weth_price_usd: float
    usdc_route: BridgeRoute
    usdc_amount: str
    usdc_price_usd: float = USDC_PRICE_USD


def bridge_plan(direction: ArbDirection, trade_size_eth: float, cex_price_usd: float) -> BridgePlan:
    """Transfers that would rebalance a trade of trade_size_eth ETH in the given direction."""
    weth_amount_wei = scale_amount_to_smallest_units(trade_size_eth, WETH_DECIMALS)
    usdc_amount = scale_amount_to_smallest_units(trade_size_eth * cex_price_usd, USDC_DECIMALS)

    if direction is ArbDirection.SELL_UNI_BUY_AERO:
        # ETH piles up on Base, USDC piles up on Ethereum.
        weth_route = BridgeRoute.BASE_TO_ETHEREUM
        usdc_route = BridgeRoute.ETHEREUM_TO_BASE
    else:
        # ETH piles up on Ethereum, USDC piles up on Base.
        weth_route = BridgeRoute.ETHEREUM_TO_BASE
        usdc_route = BridgeRoute.BASE_TO_ETHEREUM

    return BridgePlan(
        direction=direction,
        weth_route=weth_route,
        weth_amount_wei=weth_amount_wei,
        weth_price_usd=cex_price_usd,
        usdc_route=usdc_route,
        usdc_amount=usdc_amount,
    )


def _as_fee(value: float | None) -> float:
    if value is None or math.isnan(value):
        return math.inf
    return value


def cheapest_bridge_fee_usd(weth_fee_usd: float | None, usdc_fee_usd: float | None) -> float:
    """Cheaper of two bridge fees in USD; a failed lookup (None) counts as infinite."""
    weth_fee = _as_fee(weth_fee_usd)
    usdc_fee = _as_fee(usdc_fee_usd)
    if not math.isfinite(weth_fee) and not math.isfinite(usdc_fee):
        logger.warning("Both bridge fee lookups failed; treating as prohibitive")
    return min(weth_fee, usdc_fee)