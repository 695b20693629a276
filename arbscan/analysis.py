"""Fixed-size arbitrage analysis from venue quotes, costs and bridge fees."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone

from arbscan.uniswap_pricing import VenueQuotes

U128_MAX = (1 << 128) - 1

ARBITRAGE_DETECTED = "ARBITRAGE_DETECTED"
NO_ARBITRAGE = "NO_ARBITRAGE"


@dataclass
class ArbitrageAnalysis:
    """Both-direction comparison of two venues at one trade size."""

    timestamp_utc: str
    trade_size_eth: float
    reference_cex_price_usd: float

    uni_sell_price: float
    uni_buy_price: float
    uniswap_price_impact: float
    uni_gas_usd: float

    aero_sell_price: float
    aero_buy_price: float
    aerodrome_price_impact: float
    aero_gas_usd: float

    gross_spread_sell_uni_buy_aero: float
    gross_spread_sell_aero_buy_uni: float
    gross_profit_uni_to_aero_usd: float
    gross_profit_aero_to_uni_usd: float
    total_gas_cost_usd: float
    bridge_cost_usd: float
    net_profit_best_usd: float
    recommended_action: str


def scale_amount_to_smallest_units(amount: float, decimals: int) -> str:
    """Human token amount to smallest units as a decimal string.

    Non-finite or non-positive amounts give "0"; the result is rounded to the
    nearest unit and saturates at the largest 128-bit unsigned value.
    """
    if not math.isfinite(amount) or amount <= 0.0:
        return "0"
    scaled = amount * 10.0 ** decimals
    if not math.isfinite(scaled):
        return "0"
    whole = math.floor(scaled)
    if scaled - whole >= 0.5:
        whole += 1
    if whole <= 0:
        return "0"
    return str(min(int(whole), U128_MAX))


def recommended_action(net_profit_usd: float) -> str:
    """Action label for a best-direction net profit."""
    return ARBITRAGE_DETECTED if net_profit_usd > 0.0 else NO_ARBITRAGE


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def analyze_quotes(
    uni: VenueQuotes,
    aero: VenueQuotes,
    trade_size_eth: float,
    cex_price_usd: float,
    gas_eth_usd: float,
    gas_base_usd: float,
    fee_uni_to_aero_usd: float,
    fee_aero_to_uni_usd: float,
    uniswap_price_impact: float,
    aerodrome_price_impact: float,
) -> ArbitrageAnalysis:
    """Compare both arbitrage directions at trade_size_eth and pick the better one."""
    spread_uni_to_aero = uni.sell.price_usdc_per_eth - aero.buy.price_usdc_per_eth
    spread_aero_to_uni = aero.sell.price_usdc_per_eth - uni.buy.price_usdc_per_eth

    gross_uni_to_aero = spread_uni_to_aero * trade_size_eth
    gross_aero_to_uni = spread_aero_to_uni * trade_size_eth

    total_cost_uni_to_aero = gas_eth_usd + gas_base_usd + fee_uni_to_aero_usd
    total_cost_aero_to_uni = gas_eth_usd + gas_base_usd + fee_aero_to_uni_usd

    net_uni_to_aero = gross_uni_to_aero - total_cost_uni_to_aero
    net_aero_to_uni = gross_aero_to_uni - total_cost_aero_to_uni

    best = _fmax(net_uni_to_aero, net_aero_to_uni)
    net_best = best if best > 0.0 else 0.0
    uni_to_aero_wins = net_uni_to_aero >= net_aero_to_uni

    return ArbitrageAnalysis(
        timestamp_utc=datetime.now(timezone.utc).isoformat(),
        trade_size_eth=trade_size_eth,
        reference_cex_price_usd=cex_price_usd,
        uni_sell_price=uni.sell.price_usdc_per_eth,
        uni_buy_price=uni.buy.price_usdc_per_eth,
        uniswap_price_impact=uniswap_price_impact,
        uni_gas_usd=uni.sell.estimated_gas_cost_usd,
        aero_sell_price=aero.sell.price_usdc_per_eth,
        aero_buy_price=aero.buy.price_usdc_per_eth,
        aerodrome_price_impact=aerodrome_price_impact,
        aero_gas_usd=aero.sell.estimated_gas_cost_usd,
        gross_spread_sell_uni_buy_aero=spread_uni_to_aero,
        gross_spread_sell_aero_buy_uni=spread_aero_to_uni,
        gross_profit_uni_to_aero_usd=gross_uni_to_aero,
        gross_profit_aero_to_uni_usd=gross_aero_to_uni,
        total_gas_cost_usd=total_cost_uni_to_aero if uni_to_aero_wins else total_cost_aero_to_uni,
        bridge_cost_usd=fee_uni_to_aero_usd if uni_to_aero_wins else fee_aero_to_uni_usd,
        net_profit_best_usd=net_best,
        recommended_action=recommended_action(best),
    )