"""Profit of one cross-venue WETH/USDC round trip at a given ETH size."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from arbscan.aerodrome import (
    SwapDirection as AeroDirection,
    VolatilePairState,
    from_raw,
    simulate_exact_in_volatile,
    spot_price_out_per_in,
    to_raw,
    volatile_amount_out,
)
from arbscan.uniswap_math import SwapDirection as UniDirection
from arbscan.uniswap_pricing import GasCost, uniswap_spot_proxy
from arbscan.uniswap_swap import PoolState, SwapError, SwapResult, simulate_exact_in_tokens

WETH_DECIMALS = 18
USDC_DECIMALS = 6
_WETH_SCALE = 1e18
_USDC_SCALE = 1e6
_RAW_INPUT_CAP = 10**30
_SEARCH_STEPS = 64
_UNI_USDC_CAP = 1.0e12
_UNI_SEARCH_TOLERANCE = 1e-4


class ArbDirection(enum.Enum):
    """Which venue sells ETH for USDC and which buys it back."""

    SELL_AERO_BUY_UNI = "sell_aero_buy_uni"
    SELL_UNI_BUY_AERO = "sell_uni_buy_aero"


@dataclass
class OptimizerInputs:
    """Pool snapshots, costs and search bounds for one optimisation run."""

    uni_pool: PoolState
    uni_token0_is_weth: bool
    uni_fee_ppm_override: int | None
    aero_pair: VolatilePairState
    aero_token0_is_weth: bool
    gas_eth: GasCost
    gas_base: GasCost
    bridge_cost_usd: float
    hint_size_eth: float
    max_size_eth: float

    @property
    def gas_total_usd(self) -> float:
        return self.gas_eth.total_usd + self.gas_base.total_usd


@dataclass(frozen=True)
class ProfitSnapshot:
    """Net profit at one size together with the amounts and prices behind it."""

    net_profit_usd: float
    proceeds_usd: float
    costs_usd: float
    sell_price_usdc_per_eth: float
    buy_price_usdc_per_eth: float


def _to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _weth_in_usdc_out(res: SwapResult, token0_is_weth: bool) -> tuple[float, float]:
    if token0_is_weth:
        return _to_float(-res.amount0) / _WETH_SCALE, _to_float(res.amount1) / _USDC_SCALE
    return _to_float(-res.amount1) / _WETH_SCALE, _to_float(res.amount0) / _USDC_SCALE


def aero_usdc_out_for_weth_in(pair: VolatilePairState, token0_is_weth: bool, eth_in: float) -> tuple[float, float]:
    """USDC received for selling eth_in ETH, and the effective USDC-per-ETH price."""
    direction = AeroDirection.ZERO_FOR_ONE if token0_is_weth else AeroDirection.ONE_FOR_ZERO
    _, amount_out_raw, eff, _, _ = simulate_exact_in_volatile(pair, direction, eth_in)
    out_decimals = pair.decimals1 if token0_is_weth else pair.decimals0
    return from_raw(amount_out_raw, out_decimals), eff


def aero_usdc_in_for_weth_out(pair: VolatilePairState, token0_is_weth: bool, target_eth_out: float) -> float:
    """Smallest USDC input that yields at least target_eth_out ETH."""
    if token0_is_weth:
        rin, rout, din, dout = pair.reserve1, pair.reserve0, pair.decimals1, pair.decimals0
    else:
        rin, rout, din, dout = pair.reserve0, pair.reserve1, pair.decimals0, pair.decimals1

    target_raw = to_raw(target_eth_out, dout)
    if target_raw == 0:
        return 0.0

    spot = spot_price_out_per_in(rin, rout, din, dout)
    if math.isfinite(spot) and spot > 0.0:
        approx_usdc = target_eth_out / spot
    else:
        approx_usdc = target_eth_out * 10_000.0
    lo = 0
    hi = min(to_raw(approx_usdc * 4.0, din), _RAW_INPUT_CAP)

    for _ in range(_SEARCH_STEPS):
        if lo >= hi:
            break
        mid = (lo + hi) >> 1
        if volatile_amount_out(mid, rin, rout, pair.fee_bps) < target_raw:
            lo = mid + 1
        else:
            hi = mid
    return from_raw(hi, din)


def uni_usdc_out_for_weth_in(
    pool: PoolState, token0_is_weth: bool, fee_override_ppm: int | None, eth_in: float
) -> tuple[float, float] | None:
    """USDC received for selling eth_in ETH and the effective price; None if the swap is invalid."""
    direction = UniDirection.ZERO_FOR_ONE if token0_is_weth else UniDirection.ONE_FOR_ZERO
    try:
        res = simulate_exact_in_tokens(pool, direction, fee_override_ppm, eth_in, WETH_DECIMALS, None)
    except SwapError:
        return None
    in_eth, out_usdc = _weth_in_usdc_out(res, token0_is_weth)
    eff = out_usdc / in_eth if in_eth > 0.0 else 0.0
    return out_usdc, eff


def uni_usdc_in_for_weth_out(
    pool: PoolState, token0_is_weth: bool, fee_override_ppm: int | None, target_eth_out: float
) -> tuple[float, float] | None:
    """USDC input needed to receive target_eth_out ETH, and the implied price.

    Returns None if any simulated swap is invalid.
    """
    direction = UniDirection.ONE_FOR_ZERO if token0_is_weth else UniDirection.ZERO_FOR_ONE
    if target_eth_out <= 0.0:
        return 0.0, 0.0

    lo = 0.0
    spot = max(uniswap_spot_proxy(pool, token0_is_weth), 1.0)
    hi = min(target_eth_out * spot * 4.0, _UNI_USDC_CAP)

    for _ in range(_SEARCH_STEPS):
        mid = (lo + hi) * 0.5
        try:
            res = simulate_exact_in_tokens(pool, direction, fee_override_ppm, mid, USDC_DECIMALS, None)
        except SwapError:
            return None
        received = res.amount0 if direction is UniDirection.ONE_FOR_ZERO else res.amount1
        eth_out = _to_float(received) / _WETH_SCALE
        if eth_out >= target_eth_out:
            hi = mid
        else:
            lo = mid
        if (hi - lo) / max(hi, 1.0) < _UNI_SEARCH_TOLERANCE:
            break
    return hi, hi / target_eth_out


def profit_with_snapshot(inputs: OptimizerInputs, direction: ArbDirection, x_eth: float) -> ProfitSnapshot | None:
    """Net profit of trading x_eth ETH in the given direction, with details.

    Returns None for a non-positive size or when a leg cannot be simulated.
    """
    if x_eth <= 0.0:
        return None

    if direction is ArbDirection.SELL_AERO_BUY_UNI:
        proceeds, sell_px = aero_usdc_out_for_weth_in(inputs.aero_pair, inputs.aero_token0_is_weth, x_eth)
        buy = uni_usdc_in_for_weth_out(
            inputs.uni_pool, inputs.uni_token0_is_weth, inputs.uni_fee_ppm_override, x_eth
        )
        if buy is None:
            return None
        costs, buy_px = buy
    else:
        sell = uni_usdc_out_for_weth_in(
            inputs.uni_pool, inputs.uni_token0_is_weth, inputs.uni_fee_ppm_override, x_eth
        )
        if sell is None:
            return None
        proceeds, sell_px = sell
        costs = aero_usdc_in_for_weth_out(inputs.aero_pair, inputs.aero_token0_is_weth, x_eth)
        buy_px = costs / x_eth

    net = proceeds - costs - inputs.gas_total_usd - inputs.bridge_cost_usd
    return ProfitSnapshot(
        net_profit_usd=net,
        proceeds_usd=proceeds,
        costs_usd=costs,
        sell_price_usdc_per_eth=sell_px,
        buy_price_usdc_per_eth=buy_px,
    )


def profit(inputs: OptimizerInputs, direction: ArbDirection, x_eth: float) -> float | None:
    """Net profit in USD at x_eth, or None if it cannot be evaluated or is not finite."""
    snapshot = profit_with_snapshot(inputs, direction, x_eth)
    if snapshot is None or not math.isfinite(snapshot.net_profit_usd):
        return None
    return snapshot.net_profit_usd