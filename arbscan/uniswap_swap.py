"""Exact-input swap simulation over a single concentrated-liquidity pool."""

from __future__ import annotations

import bisect
import math
from dataclasses import dataclass, field

from arbscan.uniswap_math import (
    FEE_DENOMINATOR_PPM,
    MAX_TICK,
    MIN_TICK,
    SwapDirection,
    compute_swap_step,
    default_limit,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)

_I128_MAX = (1 << 127) - 1


class SwapError(ValueError):
    """Raised when swap parameters are invalid."""


@dataclass
class PoolKey:
    currency0: str
    currency1: str
    fee_ppm: int
    tick_spacing: int
    hooks: str

    def pool_id(self) -> str:
        return (
            f"{self.currency0.lower()}-{self.currency1.lower()}-"
            f"{self.fee_ppm}-{self.tick_spacing}-{self.hooks.lower()}"
        )


@dataclass
class TickInfo:
    tick: int
    liquidity_net: int


@dataclass
class PoolState:
    key: PoolKey
    sqrt_price_x96: int
    tick: int
    liquidity: int
    ticks: dict[int, TickInfo] = field(default_factory=dict)


@dataclass
class SwapParams:
    direction: SwapDirection
    amount_specified: int
    sqrt_price_limit_x96: int
    fee_ppm: int


@dataclass
class SwapResult:
    """Signed amounts: negative is spent, positive is received."""

    amount0: int = 0
    amount1: int = 0
    sqrt_price_x96: int = 0
    tick: int = 0
    liquidity: int = 0
    crossed_ticks: int = 0


class HookFee:
    """Pool hook that may add to the swap fee; the default adds nothing."""

    def adjust_fee_ppm(self, pool: PoolState, params: SwapParams, remaining_in: int) -> int:
        return 0


class NoHook(HookFee):
    """Hook that never changes the fee."""


def _next_initialized_tick(sorted_ticks: list[int], current_tick: int, direction: SwapDirection) -> tuple[int, bool]:
    if direction.zero_for_one:
        idx = bisect.bisect_right(sorted_ticks, current_tick)
        return (sorted_ticks[idx - 1], True) if idx > 0 else (MIN_TICK, False)
    idx = bisect.bisect_right(sorted_ticks, current_tick)
    return (sorted_ticks[idx], True) if idx < len(sorted_ticks) else (MAX_TICK, False)


def simulate_swap(pool: PoolState, params: SwapParams, hook: HookFee | None = None) -> SwapResult:
    """Simulate an exact-input swap, crossing initialized ticks as needed."""
    hook = hook or NoHook()
    if params.amount_specified <= 0:
        raise SwapError("amount_specified must be positive (exact input)")

    zero_for_one = params.direction.zero_for_one
    sqrt_price = pool.sqrt_price_x96
    if zero_for_one and params.sqrt_price_limit_x96 >= sqrt_price:
        raise SwapError("price limit must be < current sqrt for ZeroForOne")
    if not zero_for_one and params.sqrt_price_limit_x96 <= sqrt_price:
        raise SwapError("price limit must be > current sqrt for OneForZero")

    sorted_ticks = sorted(pool.ticks)
    amount_remaining = params.amount_specified
    liquidity = pool.liquidity
    current_tick = pool.tick
    amount0_total = 0
    amount1_total = 0
    ticks_crossed = 0

    while amount_remaining > 0 and liquidity > 0:
        hook_adj = hook.adjust_fee_ppm(pool, params, amount_remaining)
        eff_fee_ppm = min(FEE_DENOMINATOR_PPM - 1, params.fee_ppm + hook_adj)

        next_tick, has_next = _next_initialized_tick(sorted_ticks, current_tick, params.direction)
        sqrt_next = get_sqrt_ratio_at_tick(next_tick) if has_next else default_limit(params.direction)

        if zero_for_one:
            target = max(params.sqrt_price_limit_x96, sqrt_next)
        else:
            target = min(params.sqrt_price_limit_x96, sqrt_next)

        sqrt_q, used_in, got_out, fee_amt = compute_swap_step(
            sqrt_price, target, liquidity, amount_remaining, eff_fee_ppm, zero_for_one
        )

        gross = used_in + fee_amt
        if zero_for_one:
            amount0_total -= gross
            amount1_total += got_out
        else:
            amount1_total -= gross
            amount0_total += got_out
        amount_remaining -= gross
        sqrt_price = sqrt_q

        if has_next and sqrt_price == sqrt_next:
            ticks_crossed += 1
            info = pool.ticks.get(next_tick)
            if info is not None:
                if zero_for_one:
                    liquidity -= info.liquidity_net
                else:
                    liquidity += info.liquidity_net
            current_tick = next_tick - 1 if zero_for_one else next_tick
        else:
            current_tick = get_tick_at_sqrt_ratio(sqrt_price)
            break

    return SwapResult(
        amount0=amount0_total,
        amount1=amount1_total,
        sqrt_price_x96=sqrt_price,
        tick=current_tick,
        liquidity=liquidity,
        crossed_ticks=ticks_crossed,
    )


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _saturating_i128(value: float) -> int:
    if math.isnan(value):
        return 0
    if value >= _I128_MAX:
        return _I128_MAX
    if value <= -_I128_MAX - 1:
        return -_I128_MAX - 1
    return int(value)


def simulate_exact_in_tokens(
    pool: PoolState,
    direction: SwapDirection,
    fee_ppm_override: int | None,
    amount_in_tokens: float,
    input_decimals: int,
    price_limit: int | None = None,
) -> SwapResult:
    """Simulate an exact-input swap given a human-unit input amount."""
    scale = 10.0 ** input_decimals
    amount_units = _round_half_away(amount_in_tokens * scale)
    if amount_units < 0:
        raise SwapError("amount_in_tokens must be >= 0")

    params = SwapParams(
        direction=direction,
        amount_specified=_saturating_i128(amount_units),
        sqrt_price_limit_x96=price_limit if price_limit is not None else default_limit(direction),
        fee_ppm=fee_ppm_override if fee_ppm_override is not None else pool.key.fee_ppm,
    )
    return simulate_swap(pool, params, NoHook())


def execution_price_out_per_in(res: SwapResult, direction: SwapDirection, in_decimals: int, out_decimals: int) -> float:
    """Output tokens received per input token spent, in human units."""
    si = 10.0 ** in_decimals
    so = 10.0 ** out_decimals
    if direction.zero_for_one:
        spent, received = -res.amount0, res.amount1
    else:
        spent, received = -res.amount1, res.amount0
    amount_in = float(spent) / si
    amount_out = float(received) / so
    return 0.0 if amount_in <= 0.0 else amount_out / amount_in