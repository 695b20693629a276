"""Sell and buy quotes for WETH/USDC on a volatile constant-product pool."""

from __future__ import annotations

from dataclasses import dataclass

from arbscan.aerodrome import (
    SwapDirection,
    VolatilePairState,
    from_raw,
    simulate_exact_in_volatile,
    spot_price_out_per_in,
    to_raw,
    volatile_amount_out,
)
from arbscan.uniswap_pricing import GasCost, SideQuote, VenueQuotes

_RAW_INPUT_CAP = 10**30
_SEARCH_STEPS = 64


@dataclass
class AerodromeQuote:
    effective_price_usd: float
    price_impact_percent: float
    estimated_gas_cost_usd: float


def _sell_direction(token0_is_weth: bool) -> SwapDirection:
    return SwapDirection.ZERO_FOR_ONE if token0_is_weth else SwapDirection.ONE_FOR_ZERO


def aerodrome_sell_price_usdc_per_eth(pair: VolatilePairState, token0_is_weth: bool, eth_in: float) -> float:
    """Effective USDC per ETH when selling eth_in ETH (exact input)."""
    return simulate_exact_in_volatile(pair, _sell_direction(token0_is_weth), eth_in)[2]


def aerodrome_buy_price_usdc_per_eth(
    pair: VolatilePairState, token0_is_weth: bool, eth_out_target: float
) -> float:
    """USDC per ETH paid to receive eth_out_target ETH, by bisection on raw USDC input."""
    if eth_out_target <= 0.0:
        return 0.0

    if token0_is_weth:
        rin, rout, din, dout = pair.reserve1, pair.reserve0, pair.decimals1, pair.decimals0
    else:
        rin, rout, din, dout = pair.reserve0, pair.reserve1, pair.decimals0, pair.decimals1

    target_raw = to_raw(eth_out_target, dout)
    if target_raw == 0:
        return 0.0

    spot = spot_price_out_per_in(rin, rout, din, dout)
    approx_usdc = eth_out_target / spot if spot > 0.0 else eth_out_target * 10_000.0
    lo = 0
    hi = min(to_raw(approx_usdc * 4.0, din), _RAW_INPUT_CAP)

    for _ in range(_SEARCH_STEPS):
        mid = (lo + hi) >> 1
        if volatile_amount_out(mid, rin, rout, pair.fee_bps) < target_raw:
            lo = mid + 1
        else:
            hi = mid
    return from_raw(hi, din) / eth_out_target


def quote_aerodrome_both(
    pair: VolatilePairState, token0_is_weth: bool, trade_size_eth: float, gas_cost: GasCost
) -> VenueQuotes:
    """Sell and buy quotes for a trade of trade_size_eth ETH."""
    sell = aerodrome_sell_price_usdc_per_eth(pair, token0_is_weth, trade_size_eth)
    buy = aerodrome_buy_price_usdc_per_eth(pair, token0_is_weth, trade_size_eth)
    return VenueQuotes(
        sell=SideQuote(price_usdc_per_eth=sell, estimated_gas_cost_usd=gas_cost.total_usd),
        buy=SideQuote(price_usdc_per_eth=buy, estimated_gas_cost_usd=gas_cost.total_usd),
    )


def quote_aerodrome(
    pair: VolatilePairState, token0_is_weth: bool, trade_size_eth: float, gas_cost: GasCost
) -> AerodromeQuote:
    """Sell-side quote with price impact against the pool's spot price."""
    _, _, effective_price, spot_price, _ = simulate_exact_in_volatile(
        pair, _sell_direction(token0_is_weth), trade_size_eth
    )
    impact = (effective_price - spot_price) / spot_price * 100.0 if spot_price > 0.0 else 0.0
    return AerodromeQuote(
        effective_price_usd=effective_price,
        price_impact_percent=impact,
        estimated_gas_cost_usd=gas_cost.total_usd,
    )