"""Exact integer tick, price and swap-step math for concentrated-liquidity pools."""

from __future__ import annotations

import enum

MIN_TICK = -887_272
MAX_TICK = 887_272
FEE_DENOMINATOR_PPM = 1_000_000
Q96 = 1 << 96

_MAX_UINT256 = (1 << 256) - 1

_ODD_TICK_RATIO = 0xFFFCB933BD6FAD37AA2D162D1A594001

_TICK_FACTORS = (
    (0x2, 0xFFF97272373D413259A46990580E213A),
    (0x4, 0xFFF2E50F5F656932EF12357CF3C7FDCC),
    (0x8, 0xFFE5CACA7E10E4E61C3624EAA0941CD0),
    (0x10, 0xFFCB9843D60F6159C9DB58835C926644),
    (0x20, 0xFF973B41FA98C081472E6896DFB254C0),
    (0x40, 0xFF2EA16466C96A3843EC78B326B52861),
    (0x80, 0xFE5DEE046A99A2A811C461F1969C3053),
    (0x100, 0xFCBE86C7900A88AEDCFFC83B479AA3A4),
    (0x200, 0xF987A7253AC413176F2B074CF7815E54),
    (0x400, 0xF3392B0822B70005940C7A398E4B70F3),
    (0x800, 0xE7159475A2C29B7443B29C7FA6E889D9),
    (0x1000, 0xD097F3BDFD2022B8845AD8F792AA5825),
    (0x2000, 0xA9F746462D870FDF8A65DC1F90E061E5),
    (0x4000, 0x70D869A156D2A1B890BB3DF62BAF32F7),
    (0x8000, 0x31BE135F97D08FD981231505542FCFA6),
    (0x10000, 0x09AA508B5B7A84E1C677DE54F3E99BC9),
    (0x20000, 0x05D6AF8DEDB81196699C329225EE604),
    (0x40000, 0x01DCDC6F2D7C3395A2ED4F8B7FEAF38),
    (0x80000, 0x48A170391F7DC42444E8FA2),
)


class SwapDirection(enum.Enum):
    """Which token is paid in: token0 -> token1 or token1 -> token0."""

    ZERO_FOR_ONE = "zero_for_one"
    ONE_FOR_ZERO = "one_for_zero"

    @property
    def zero_for_one(self) -> bool:
        return self is SwapDirection.ZERO_FOR_ONE


def _ceil_div(a: int, b: int) -> int:
    """Ceiling division for a >= 0 and b > 0."""
    if a == 0:
        return 0
    return (a + b - 1) // b


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """Return sqrt(1.0001^tick) as a Q64.96 integer."""
    if not MIN_TICK <= tick <= MAX_TICK:
        raise ValueError(f"tick out of range: {tick}")
    abs_tick = abs(tick)

    ratio = _ODD_TICK_RATIO if abs_tick & 0x1 else 1 << 128
    for bit, factor in _TICK_FACTORS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = _MAX_UINT256 // ratio
    # Q128.128 -> Q64.96, rounding up
    return (ratio + ((1 << 32) - 1)) >> 32


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """Return the largest tick whose sqrt ratio does not exceed the given price."""
    lo, hi = MIN_TICK, MAX_TICK
    while lo < hi:
        mid = lo + (hi - lo + 1) // 2
        if get_sqrt_ratio_at_tick(mid) <= sqrt_price_x96:
            lo = mid
        else:
            hi = mid - 1
    return lo


def amount0_delta(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int, round_up: bool) -> int:
    """Token0 amount between two prices, with two-step rounding."""
    if liquidity == 0:
        return 0
    sa, sb = sorted((sqrt_ratio_a_x96, sqrt_ratio_b_x96))
    if sa == 0 or sa == sb:
        return 0

    product = (liquidity << 96) * (sb - sa)
    if round_up:
        return _ceil_div(_ceil_div(product, sb), sa)
    return (product // sb) // sa


def amount1_delta(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int, round_up: bool) -> int:
    """Token1 amount between two prices."""
    if liquidity == 0:
        return 0
    sa, sb = sorted((sqrt_ratio_a_x96, sqrt_ratio_b_x96))
    if sa == sb:
        return 0

    num = liquidity * (sb - sa)
    return _ceil_div(num, Q96) if round_up else num // Q96


def default_limit(direction: SwapDirection) -> int:
    """Price limit used when none is given: one tick inside the valid range."""
    if direction.zero_for_one:
        return get_sqrt_ratio_at_tick(MIN_TICK + 1)
    return get_sqrt_ratio_at_tick(MAX_TICK - 1)


def next_sqrt_from_input_zero_for_one(liquidity: int, sqrt_p_x96: int, amount_in_net: int) -> int:
    """Next price after adding token0, rounded up."""
    if amount_in_net == 0 or liquidity == 0:
        return sqrt_p_x96
    numerator1 = liquidity << 96
    numerator = numerator1 * sqrt_p_x96
    denominator = numerator1 + amount_in_net * sqrt_p_x96
    return _ceil_div(numerator, denominator)


def next_sqrt_from_input_one_for_zero(liquidity: int, sqrt_p_x96: int, amount_in_net: int) -> int:
    """Next price after adding token1, rounded down."""
    if amount_in_net == 0 or liquidity == 0:
        return sqrt_p_x96
    return sqrt_p_x96 + (amount_in_net * Q96) // liquidity


def compute_swap_step(
    sqrt_price_x96: int,
    sqrt_price_target_x96: int,
    liquidity: int,
    amount_remaining: int,
    fee_ppm: int,
    zero_for_one: bool,
) -> tuple[int, int, int, int]:
    """One swap step within a single liquidity range.

    Returns (next sqrt price, net amount in, amount out, fee amount).
    """
    denom = FEE_DENOMINATOR_PPM
    fee_complement = denom - fee_ppm
    amount_remaining_less_fee = (amount_remaining * fee_complement) // denom

    if zero_for_one:
        amount_in_to_target = amount0_delta(sqrt_price_target_x96, sqrt_price_x96, liquidity, True)
        gross_to_target = _ceil_div(amount_in_to_target * denom, fee_complement)
        if gross_to_target <= amount_remaining:
            amount_out = amount1_delta(sqrt_price_target_x96, sqrt_price_x96, liquidity, False)
            return (
                sqrt_price_target_x96,
                amount_in_to_target,
                amount_out,
                gross_to_target - amount_in_to_target,
            )
        sqrt_q = next_sqrt_from_input_zero_for_one(liquidity, sqrt_price_x96, amount_remaining_less_fee)
        amount_in_used = amount0_delta(sqrt_q, sqrt_price_x96, liquidity, True)
        amount_out_recv = amount1_delta(sqrt_q, sqrt_price_x96, liquidity, False)
    else:
        amount_in_to_target = amount1_delta(sqrt_price_x96, sqrt_price_target_x96, liquidity, True)
        gross_to_target = _ceil_div(amount_in_to_target * denom, fee_complement)
        if gross_to_target <= amount_remaining:
            amount_out = amount0_delta(sqrt_price_x96, sqrt_price_target_x96, liquidity, False)
            return (
                sqrt_price_target_x96,
                amount_in_to_target,
                amount_out,
                gross_to_target - amount_in_to_target,
            )
        sqrt_q = next_sqrt_from_input_one_for_zero(liquidity, sqrt_price_x96, amount_remaining_less_fee)
        amount_in_used = amount1_delta(sqrt_price_x96, sqrt_q, liquidity, True)
        amount_out_recv = amount0_delta(sqrt_price_x96, sqrt_q, liquidity, False)

    gross_used = _ceil_div(amount_in_used * denom, fee_complement)
    return sqrt_q, amount_in_used, amount_out_recv, gross_used - amount_in_used