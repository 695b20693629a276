"""Constant-product (x*y=k) swap math with fee for volatile pools, in raw integer units."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

U128_MAX = (1 << 128) - 1
_BPS = 10_000
_MAX_FEE_BPS = 9_999


class SwapDirection(enum.Enum):
    """ZERO_FOR_ONE pays token0 in; ONE_FOR_ZERO pays token1 in."""

    ZERO_FOR_ONE = "zero_for_one"
    ONE_FOR_ZERO = "one_for_zero"


@dataclass
class VolatilePairState:
    """Snapshot of a volatile pool: raw reserves, decimals and fee in bps."""

    token0: str
    token1: str
    reserve0: int
    reserve1: int
    decimals0: int
    decimals1: int
    fee_bps: int

    def is_zero_liquidity(self) -> bool:
        return self.reserve0 == 0 or self.reserve1 == 0


def _round_half_away(value: float) -> int:
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def _u128_to_f64(amount: int) -> float:
    if amount < 0 or amount > U128_MAX:
        raise OverflowError(f"amount does not fit in 128 bits: {amount}")
    return float(amount)


def volatile_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int) -> int:
    """Raw output amount for a raw input: (in*g * R_out) / (R_in + in*g)."""
    if amount_in == 0 or reserve_in == 0 or reserve_out == 0:
        return 0
    fee_bps = min(fee_bps, _MAX_FEE_BPS)
    amount_in_after_fee = amount_in * (_BPS - fee_bps) // _BPS
    return (amount_in_after_fee * reserve_out) // (reserve_in + amount_in_after_fee)


def map_direction(pair: VolatilePairState, direction: SwapDirection) -> tuple[int, int, int, int]:
    """Return (reserve_in, reserve_out, decimals_in, decimals_out) for a direction."""
    if direction is SwapDirection.ZERO_FOR_ONE:
        return pair.reserve0, pair.reserve1, pair.decimals0, pair.decimals1
    return pair.reserve1, pair.reserve0, pair.decimals1, pair.decimals0


def spot_price_out_per_in(reserve_in: int, reserve_out: int, dec_in: int, dec_out: int) -> float:
    """Spot price (tokenOut per tokenIn) normalized by decimals."""
    if reserve_in == 0:
        return 0.0
    num = _u128_to_f64(reserve_out) * _u128_to_f64(10**dec_in)
    den = _u128_to_f64(reserve_in) * _u128_to_f64(10**dec_out)
    return 0.0 if den == 0.0 else num / den


def to_raw(amount_human: float, decimals: int) -> int:
    """Human amount to raw integer units, rounded; non-positive gives 0."""
    if amount_human <= 0.0:
        return 0
    scaled = amount_human * 10.0 ** decimals
    if math.isnan(scaled):
        return 0
    if math.isinf(scaled):
        return U128_MAX
    v = _round_half_away(scaled)
    if v <= 0:
        return 0
    return min(v, U128_MAX)


def from_raw(amount: int, decimals: int) -> float:
    """Raw integer units to a human float."""
    return _u128_to_f64(amount) / 10.0 ** decimals


def simulate_exact_in_volatile(
    pair: VolatilePairState,
    direction: SwapDirection,
    amount_in_human: float,
) -> tuple[int, int, float, float, float]:
    """Simulate an exact-input swap.

    Returns (amount_in_raw, amount_out_raw, effective price, spot price, price impact %).
    """
    reserve_in, reserve_out, dec_in, dec_out = map_direction(pair, direction)
    amount_in_raw = to_raw(amount_in_human, dec_in)
    amount_out_raw = volatile_amount_out(amount_in_raw, reserve_in, reserve_out, pair.fee_bps)

    in_h = from_raw(amount_in_raw, dec_in)
    out_h = from_raw(amount_out_raw, dec_out)
    eff = 0.0 if in_h <= 0.0 else out_h / in_h
    spot = spot_price_out_per_in(reserve_in, reserve_out, dec_in, dec_out)
    impact_pct = (eff / spot - 1.0) * 100.0 if spot > 0.0 else 0.0
    return amount_in_raw, amount_out_raw, eff, spot, impact_pct


def execution_price_out_per_in(pair: VolatilePairState, direction: SwapDirection, amount_in_human: float) -> float:
    """Execution price (tokenOut per tokenIn, human units) for an exact-input swap."""
    return simulate_exact_in_volatile(pair, direction, amount_in_human)[2]


def apply_swap_to_reserves(pair: VolatilePairState, direction: SwapDirection, amount_in_raw: int) -> tuple[int, int]:
    """Reserves (reserve0, reserve1) after a hypothetical swap."""
    rin, rout, _, _ = map_direction(pair, direction)
    out = volatile_amount_out(amount_in_raw, rin, rout, pair.fee_bps)
    fee_num = _BPS - min(pair.fee_bps, _MAX_FEE_BPS)
    in_after_fee = amount_in_raw * fee_num // _BPS

    new_in = rin + in_after_fee
    new_out = rout - out
    if direction is SwapDirection.ZERO_FOR_ONE:
        return new_in, new_out
    return new_out, new_in