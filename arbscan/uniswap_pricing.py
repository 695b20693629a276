"""Sell and buy quotes for WETH/USDC on a concentrated-liquidity pool."""

from __future__ import annotations

from dataclasses import dataclass, field

from arbscan.uniswap_math import SwapDirection
from arbscan.uniswap_swap import PoolState, SwapResult, simulate_exact_in_tokens

WETH_DECIMALS = 18
USDC_DECIMALS = 6
_WETH_SCALE = 1e18
_USDC_SCALE = 1e6
_SPOT_PROBE_ETH = 0.0001
_USDC_INPUT_CAP = 1.0e12
_SEARCH_STEPS = 64
_SEARCH_TOLERANCE = 1e-4
LEGACY_FEE_PPM = 3000


@dataclass(frozen=True)
class GasCost:
    """Estimated gas cost of one transaction on one chain."""

    gas_limit: int = 0
    gas_price: int = 0
    l1_data_fee: int = 0
    total_wei: int = 0
    total_eth: float = 0.0
    total_usd: float = 0.0


@dataclass
class SideQuote:
    """Execution price (fee and impact included) and gas estimate for one side."""

    price_usdc_per_eth: float = 0.0
    estimated_gas_cost_usd: float = 0.0


@dataclass
class VenueQuotes:
    """Sell (ETH->USDC exact-in) and buy (USDC->ETH exact-out) quotes for a venue."""

    sell: SideQuote = field(default_factory=SideQuote)
    buy: SideQuote = field(default_factory=SideQuote)


@dataclass
class UniswapQuote:
    effective_price_usd: float
    price_impact_percent: float
    estimated_gas_cost_usd: float


def _to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return float("inf") if value > 0 else float("-inf")


def _sell_direction(token0_is_weth: bool) -> SwapDirection:
    return SwapDirection.ZERO_FOR_ONE if token0_is_weth else SwapDirection.ONE_FOR_ZERO


def _buy_direction(token0_is_weth: bool) -> SwapDirection:
    return SwapDirection.ONE_FOR_ZERO if token0_is_weth else SwapDirection.ZERO_FOR_ONE


def _sold_eth_and_usdc_out(res: SwapResult, token0_is_weth: bool) -> tuple[float, float]:
    """Human (ETH spent, USDC received) for an ETH->USDC swap."""
    if token0_is_weth:
        return _to_float(-res.amount0) / _WETH_SCALE, _to_float(res.amount1) / _USDC_SCALE
    return _to_float(-res.amount1) / _WETH_SCALE, _to_float(res.amount0) / _USDC_SCALE


def _eth_received(res: SwapResult, direction: SwapDirection) -> float:
    """Human ETH received for a USDC->ETH swap in the given direction."""
    if direction is SwapDirection.ONE_FOR_ZERO:
        return _to_float(res.amount0) / _WETH_SCALE
    return _to_float(res.amount1) / _WETH_SCALE


def uniswap_sell_price_usdc_per_eth(
    pool: PoolState, token0_is_weth: bool, eth_in: float, fee_ppm: int | None
) -> float:
    """Effective USDC per ETH when selling eth_in ETH (exact input)."""
    res = simulate_exact_in_tokens(pool, _sell_direction(token0_is_weth), fee_ppm, eth_in, WETH_DECIMALS, None)
    ein, uout = _sold_eth_and_usdc_out(res, token0_is_weth)
    return uout / ein if ein > 0.0 else 0.0


def uniswap_buy_price_usdc_per_eth(
    pool: PoolState, token0_is_weth: bool, eth_out_target: float, fee_ppm: int | None
) -> float:
    """USDC per ETH paid to receive eth_out_target ETH, by bisection on USDC input."""
    if eth_out_target <= 0.0:
        return 0.0
    direction = _buy_direction(token0_is_weth)
    spot_guess = max(uniswap_spot_proxy(pool, token0_is_weth), 1.0)
    lo = 0.0
    hi = min(eth_out_target * spot_guess * 4.0, _USDC_INPUT_CAP)

    for _ in range(_SEARCH_STEPS):
        mid = 0.5 * (lo + hi)
        res = simulate_exact_in_tokens(pool, direction, fee_ppm, mid, USDC_DECIMALS, None)
        if _eth_received(res, direction) >= eth_out_target:
            hi = mid
        else:
            lo = mid
        if hi > 0.0 and (hi - lo) / hi < _SEARCH_TOLERANCE:
            break
    return hi / eth_out_target


def uniswap_spot_proxy(pool: PoolState, token0_is_weth: bool) -> float:
    """Approximate spot USDC per ETH from a tiny sell at the pool's own fee; 0.0 on failure."""
    try:
        res = simulate_exact_in_tokens(
            pool, _sell_direction(token0_is_weth), None, _SPOT_PROBE_ETH, WETH_DECIMALS, None
        )
    except ValueError:
        return 0.0
    ein, uout = _sold_eth_and_usdc_out(res, token0_is_weth)
    return uout / ein if ein > 0.0 else 0.0


def quote_uniswap_v4_both(
    pool: PoolState,
    token0_is_weth: bool,
    trade_size_eth: float,
    gas_cost: GasCost,
    fee_ppm: int | None,
) -> VenueQuotes:
    """Sell and buy quotes for a trade of trade_size_eth ETH."""
    sell = uniswap_sell_price_usdc_per_eth(pool, token0_is_weth, trade_size_eth, fee_ppm)
    buy = uniswap_buy_price_usdc_per_eth(pool, token0_is_weth, trade_size_eth, fee_ppm)
    return VenueQuotes(
        sell=SideQuote(price_usdc_per_eth=sell, estimated_gas_cost_usd=gas_cost.total_usd),
        buy=SideQuote(price_usdc_per_eth=buy, estimated_gas_cost_usd=gas_cost.total_usd),
    )


def quote_uniswap_v4(
    pool: PoolState, token0_is_weth: bool, trade_size_eth: float, gas_cost: GasCost
) -> UniswapQuote:
    """Sell-side quote with price impact against the spot proxy, at the 0.30% fee."""
    res = simulate_exact_in_tokens(
        pool, _sell_direction(token0_is_weth), LEGACY_FEE_PPM, trade_size_eth, WETH_DECIMALS, None
    )
    eth_in, usdc_out = _sold_eth_and_usdc_out(res, token0_is_weth)
    effective_price = usdc_out / eth_in if eth_in > 0.0 else 0.0
    spot_price = uniswap_spot_proxy(pool, token0_is_weth)
    impact = (effective_price - spot_price) / spot_price * 100.0 if spot_price > 0.0 else 0.0
    return UniswapQuote(
        effective_price_usd=effective_price,
        price_impact_percent=impact,
        estimated_gas_cost_usd=gas_cost.total_usd,
    )