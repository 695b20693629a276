"""Optimal-size arbitrage report built from an optimiser result or plain quotes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from arbscan.optimizer import OptimizeResult
from arbscan.profit import ArbDirection
from arbscan.uniswap_pricing import VenueQuotes

SELL_AERODROME_BUY_UNISWAP = "SELL_AERODROME_BUY_UNISWAP"
SELL_UNISWAP_BUY_AERODROME = "SELL_UNISWAP_BUY_AERODROME"
PROFITABLE_ARBITRAGE_FOUND = "PROFITABLE_ARBITRAGE_FOUND"
NO_PROFITABLE_ARBITRAGE = "NO_PROFITABLE_ARBITRAGE"
NO_ARBITRAGE_OPPORTUNITY = "NO_ARBITRAGE_OPPORTUNITY"


def _now_utc() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class OptimalArbitrageAnalysis:
    """Best trade size and direction, with its profit and cost breakdown."""

    reference_cex_price_usd: float
    optimal_trade_size_eth: float
    optimal_direction: str
    net_profit_usd: float
    gross_profit_usd: float
    total_costs_usd: float
    effective_sell_price_usdc_per_eth: float
    effective_buy_price_usdc_per_eth: float
    gas_cost_usd: float
    bridge_cost_usd: float
    recommended_action: str
    timestamp_utc: str = field(default_factory=_now_utc)


def direction_label(direction: ArbDirection) -> str:
    """Report label for an arbitrage direction."""
    if direction is ArbDirection.SELL_AERO_BUY_UNI:
        return SELL_AERODROME_BUY_UNISWAP
    return SELL_UNISWAP_BUY_AERODROME


def optimal_from_result(
    result: OptimizeResult, cex_price_usd: float, live_bridge_fee_usd: float
) -> OptimalArbitrageAnalysis:
    """Report for an optimiser result, replacing its assumed bridge cost with a live fee."""
    total_costs = result.costs_usd - result.bridge_cost_usd + live_bridge_fee_usd
    net = result.proceeds_usd - total_costs
    action = PROFITABLE_ARBITRAGE_FOUND if net > 0.0 else NO_PROFITABLE_ARBITRAGE
    return OptimalArbitrageAnalysis(
        reference_cex_price_usd=cex_price_usd,
        optimal_trade_size_eth=result.optimal_size_eth,
        optimal_direction=direction_label(result.direction),
        net_profit_usd=net,
        gross_profit_usd=result.proceeds_usd,
        total_costs_usd=total_costs,
        effective_sell_price_usdc_per_eth=result.eff_price_sell_usdc_per_eth,
        effective_buy_price_usdc_per_eth=result.eff_price_buy_usdc_per_eth,
        gas_cost_usd=result.gas_usd_total,
        bridge_cost_usd=live_bridge_fee_usd,
        recommended_action=action,
    )


def no_opportunity_analysis(
    uni: VenueQuotes, aero: VenueQuotes, cex_price_usd: float, gas_total_usd: float
) -> OptimalArbitrageAnalysis:
    """Report when no profitable size exists, showing the less bad direction's prices."""
    spread_uni_to_aero = uni.sell.price_usdc_per_eth - aero.buy.price_usdc_per_eth
    spread_aero_to_uni = aero.sell.price_usdc_per_eth - uni.buy.price_usdc_per_eth

    if spread_uni_to_aero > spread_aero_to_uni:
        direction = SELL_UNISWAP_BUY_AERODROME
        sell_price, buy_price = uni.sell.price_usdc_per_eth, aero.buy.price_usdc_per_eth
    else:
        direction = SELL_AERODROME_BUY_UNISWAP
        sell_price, buy_price = aero.sell.price_usdc_per_eth, uni.buy.price_usdc_per_eth

    return OptimalArbitrageAnalysis(
        reference_cex_price_usd=cex_price_usd,
        optimal_trade_size_eth=0.0,
        optimal_direction=direction,
        net_profit_usd=0.0,
        gross_profit_usd=0.0,
        total_costs_usd=0.0,
        effective_sell_price_usdc_per_eth=sell_price,
        effective_buy_price_usdc_per_eth=buy_price,
        gas_cost_usd=gas_total_usd,
        bridge_cost_usd=0.0,
        recommended_action=NO_ARBITRAGE_OPPORTUNITY,
    )