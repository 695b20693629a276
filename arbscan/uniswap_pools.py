"""Pool construction helpers, price/tick conversions and best-pool selection."""

from __future__ import annotations

import math

from arbscan.uniswap_math import MAX_TICK, MIN_TICK, Q96, SwapDirection, get_sqrt_ratio_at_tick
from arbscan.uniswap_swap import (
    PoolKey,
    PoolState,
    SwapError,
    SwapResult,
    TickInfo,
    execution_price_out_per_in,
    simulate_exact_in_tokens,
)

ZERO_ADDRESS = "0x" + "00" * 20

_RANGE_WIDTH_BY_FEE = {500: 3000, 3000: 6000, 10000: 10000}
_DEFAULT_RANGE_WIDTH = 6000

# Intended (WETH, USDC) reserves per fee tier, in human units.
_RESERVES_BY_FEE = {
    500: (200.0, 600_000.0),
    3000: (100.0, 300_000.0),
    10000: (50.0, 150_000.0),
}
_DEFAULT_RESERVES = (100.0, 300_000.0)


def _round_half_away(value: float) -> int:
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def _units(amount: float, decimals: int) -> int:
    """Human amount to raw integer token units, rounded half away from zero."""
    return _round_half_away(amount * 10.0 ** decimals)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def best_pool_for_exact_in(
    pools: list[PoolState],
    direction: SwapDirection,
    amount_in_tokens: float,
    in_decimals: int,
    out_decimals: int,
    fee_ppm_override: int | None = None,
) -> tuple[PoolState, SwapResult, float] | None:
    """Pick the pool giving the best execution price for an exact-input swap.

    Returns None if there are no pools or any simulation fails.
    """
    best: tuple[PoolState, SwapResult, float] | None = None
    for pool in pools:
        fee = fee_ppm_override if fee_ppm_override is not None else pool.key.fee_ppm
        try:
            sim = simulate_exact_in_tokens(pool, direction, fee, amount_in_tokens, in_decimals, None)
        except SwapError:
            return None
        px = execution_price_out_per_in(sim, direction, in_decimals, out_decimals)
        if best is None or not px <= best[2]:
            best = (pool, sim, px)
    return best


def liquidity_from_reserves(sa: int, sp: int, sb: int, amount0: int, amount1: int) -> int:
    """Liquidity supported by raw reserves in the range [sa, sb] at price sp."""
    if not sa < sp < sb:
        raise ValueError("expect sa < sp < sb")

    denom0 = (sb - sp) * Q96
    l0 = 0 if denom0 == 0 else (amount0 * sb * sp) // denom0

    sp_minus_sa = sp - sa
    l1 = 0 if sp_minus_sa == 0 else (amount1 * Q96) // sp_minus_sa

    return min(l0, l1)


def create_standard_weth_usdc_pools(weth_address: str, usdc_address: str, initial_price: float) -> list[PoolState]:
    """Three synthetic WETH/USDC pools at the 0.05%, 0.30% and 1.00% fee tiers."""
    return [
        mock_pool_with_addresses(weth_address, usdc_address, initial_price, 500, 10),
        mock_pool_with_addresses(weth_address, usdc_address, initial_price, 3000, 60),
        mock_pool_with_addresses(weth_address, usdc_address, initial_price, 10000, 200),
    ]


def create_pool_with_real_data(
    currency0: str,
    currency1: str,
    fee_ppm: int,
    tick_spacing: int,
    hooks: str,
    sqrt_price_x96: int,
    current_tick: int,
    liquidity: int,
    tick_data: list[tuple[int, int]],
) -> PoolState:
    """Build a pool from on-chain values and (tick, liquidityNet) pairs."""
    ticks = {tick: TickInfo(tick=tick, liquidity_net=net) for tick, net in tick_data}
    return PoolState(
        key=PoolKey(
            currency0=currency0,
            currency1=currency1,
            fee_ppm=fee_ppm,
            tick_spacing=tick_spacing,
            hooks=hooks,
        ),
        sqrt_price_x96=sqrt_price_x96,
        tick=current_tick,
        liquidity=liquidity,
        ticks=ticks,
    )


def mock_pool_with_addresses(
    currency0: str,
    currency1: str,
    price_token1_per_token0: float,
    fee_ppm: int,
    tick_spacing: int,
) -> PoolState:
    """Synthetic WETH(18)/USDC(6) pool with one liquidity range around the price."""
    center_tick = tick_from_price(price_token1_per_token0, 18, 6)
    width = _RANGE_WIDTH_BY_FEE.get(fee_ppm, _DEFAULT_RANGE_WIDTH)
    lower_tick = _trunc_div(center_tick - width, tick_spacing) * tick_spacing
    upper_tick = _trunc_div(center_tick + width, tick_spacing) * tick_spacing

    weth, usdc = _RESERVES_BY_FEE.get(fee_ppm, _DEFAULT_RESERVES)
    amount0 = _units(weth, 18)
    amount1 = _units(usdc, 6)

    sa = get_sqrt_ratio_at_tick(lower_tick)
    sp = get_sqrt_ratio_at_tick(center_tick)
    sb = get_sqrt_ratio_at_tick(upper_tick)
    liquidity = liquidity_from_reserves(sa, sp, sb, amount0, amount1)

    ticks = {
        lower_tick: TickInfo(tick=lower_tick, liquidity_net=liquidity),
        upper_tick: TickInfo(tick=upper_tick, liquidity_net=-liquidity),
    }
    return PoolState(
        key=PoolKey(
            currency0=currency0,
            currency1=currency1,
            fee_ppm=fee_ppm,
            tick_spacing=tick_spacing,
            hooks=ZERO_ADDRESS,
        ),
        sqrt_price_x96=sp,
        tick=center_tick,
        liquidity=liquidity,
        ticks=ticks,
    )


def tick_from_price(price_1_for_0: float, dec0: int, dec1: int) -> int:
    """Tick at or below a human price (token1 per token0), clamped to the valid range."""
    price_raw = price_1_for_0 * 10.0 ** (dec1 - dec0)
    if math.isnan(price_raw) or price_raw < 0:
        return 0
    if price_raw == 0:
        return MIN_TICK
    if math.isinf(price_raw):
        return MAX_TICK
    t = math.floor(math.log(price_raw) / math.log(1.0001))
    return max(MIN_TICK, min(MAX_TICK, t))


def price_from_tick(tick: int, dec0: int, dec1: int) -> float:
    """Human price (token1 per token0) at a tick."""
    s = float(get_sqrt_ratio_at_tick(tick)) / float(Q96)
    return s * s * 10.0 ** (dec0 - dec1)