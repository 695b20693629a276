"""Search for the ETH trade size that maximises cross-venue arbitrage profit."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

from arbscan.profit import (
    ArbDirection,
    OptimizerInputs,
    ProfitSnapshot,
    profit,
    profit_with_snapshot,
)

_MIN_SIZE_ETH = 1e-9
_BRACKET_STEPS = 16
_SEARCH_STEPS = 24
_SEARCH_TOLERANCE = 1e-3
# Interval-shrinking ratio used by the section search.
_SECTION_RATIO = 0.5 * (math.sqrt(3.0) + 1.0)


@dataclass
class OptimizeResult:
    """Best trade found for one direction, with the amounts behind it."""

    direction: ArbDirection
    optimal_size_eth: float
    proceeds_usd: float
    costs_usd: float
    gas_usd_total: float
    bridge_cost_usd: float
    net_profit_usd: float
    eff_price_sell_usdc_per_eth: float
    eff_price_buy_usdc_per_eth: float


def optimize(inputs: OptimizerInputs) -> OptimizeResult | None:
    """Optimise both directions and return the better one, or None if it is not profitable."""
    a = maximize_direction(inputs, ArbDirection.SELL_AERO_BUY_UNI)
    b = maximize_direction(inputs, ArbDirection.SELL_UNI_BUY_AERO)

    if a is not None and b is not None:
        best = a if a.net_profit_usd >= b.net_profit_usd else b
    elif a is not None:
        best = a
    elif b is not None:
        best = b
    else:
        return None

    return best if best.net_profit_usd > 0.0 else None


def maximize_direction(inputs: OptimizerInputs, direction: ArbDirection) -> OptimizeResult | None:
    """Bracket the profit peak for one direction, then narrow it down."""
    bracket = bracket_profit(inputs, direction, inputs.hint_size_eth, inputs.max_size_eth)
    if bracket is None:
        return None
    found = golden_search(inputs, direction, *bracket)
    if found is None:
        return None
    x_star, p_star, snapshot = found

    return OptimizeResult(
        direction=direction,
        optimal_size_eth=x_star,
        proceeds_usd=snapshot.proceeds_usd,
        costs_usd=snapshot.costs_usd,
        gas_usd_total=inputs.gas_total_usd,
        bridge_cost_usd=inputs.bridge_cost_usd,
        net_profit_usd=p_star,
        eff_price_sell_usdc_per_eth=snapshot.sell_price_usdc_per_eth,
        eff_price_buy_usdc_per_eth=snapshot.buy_price_usdc_per_eth,
    )


def bracket_profit(
    inputs: OptimizerInputs, direction: ArbDirection, x0: float, x_cap: float
) -> tuple[float, float] | None:
    """Grow the size exponentially from x0 until profit stops rising or x_cap is hit.

    Returns an interval (left, right) around the peak, or None if profit cannot be evaluated.
    """
    x0 = max(x0, _MIN_SIZE_ETH)
    best_x = x0
    best_p = profit(inputs, direction, x0)
    if best_p is None:
        return None
    left = max(x0 * 0.5, _MIN_SIZE_ETH)
    right = x0

    for _ in range(_BRACKET_STEPS):
        x_try = min(right * 2.0, x_cap)
        p_try = profit(inputs, direction, x_try)
        if p_try is None:
            return None
        if p_try > best_p:
            best_p = p_try
            best_x = x_try
            left, right = right, x_try
        else:
            return left, x_try
        if abs(x_cap - right) < sys.float_info.epsilon:
            break

    return best_x * 0.5, min(best_x * 2.0, x_cap)


def golden_search(
    inputs: OptimizerInputs, direction: ArbDirection, a: float, b: float
) -> tuple[float, float, ProfitSnapshot] | None:
    """Section search for the maximum profit within [a, b].

    Returns (size, net profit, snapshot at that size), or None if a point cannot be evaluated.
    """
    c = b - (b - a) / _SECTION_RATIO
    d = a + (b - a) / _SECTION_RATIO

    sc = profit_with_snapshot(inputs, direction, c)
    sd = profit_with_snapshot(inputs, direction, d)
    if sc is None or sd is None:
        return None

    for _ in range(_SEARCH_STEPS):
        if (b - a) / max(b, 1.0) < _SEARCH_TOLERANCE:
            break
        if sc.net_profit_usd > sd.net_profit_usd:
            b, d, sd = d, c, sc
            c = b - (b - a) / _SECTION_RATIO
            sc = profit_with_snapshot(inputs, direction, c)
            if sc is None:
                return None
        else:
            a, c, sc = c, d, sd
            d = a + (b - a) / _SECTION_RATIO
            sd = profit_with_snapshot(inputs, direction, d)
            if sd is None:
                return None

    if sc.net_profit_usd > sd.net_profit_usd:
        return c, sc.net_profit_usd, sc
    return d, sd.net_profit_usd, sd