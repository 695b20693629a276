import pytest

from arbscan.uniswap_math import (
    MAX_TICK,
    MIN_TICK,
    SwapDirection,
    amount0_delta,
    amount1_delta,
    compute_swap_step,
    default_limit,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    next_sqrt_from_input_one_for_zero,
    next_sqrt_from_input_zero_for_one,
)

LIQUIDITY = 1000000000000000000000
SQRT_A = 4339357908326790765990283501801
SQRT_B = 4315791062650166323685528455962


def test_tick_zero_is_q96():
    assert get_sqrt_ratio_at_tick(0) == 2**96


def test_sqrt_ratio_strictly_increasing():
    values = [get_sqrt_ratio_at_tick(t) for t in range(-5, 6)]
    assert all(a < b for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("tick", [MIN_TICK - 1, MAX_TICK + 1])
def test_tick_out_of_range(tick):
    with pytest.raises(ValueError):
        get_sqrt_ratio_at_tick(tick)


@pytest.mark.parametrize("tick", [0, 1, -1, 60, -60, 12345, -191740])
def test_tick_round_trip(tick):
    assert get_tick_at_sqrt_ratio(get_sqrt_ratio_at_tick(tick)) == tick


def test_tick_between_grid_points_rounds_down():
    price = get_sqrt_ratio_at_tick(100) + 1
    assert get_tick_at_sqrt_ratio(price) == 100


def test_debug_scaling_deltas_positive_and_symmetric():
    a0 = amount0_delta(SQRT_A, SQRT_B, LIQUIDITY, True)
    a1 = amount1_delta(SQRT_A, SQRT_B, LIQUIDITY, False)
    assert a0 > 0
    assert a1 > 0
    assert amount0_delta(SQRT_B, SQRT_A, LIQUIDITY, True) == a0
    assert amount1_delta(SQRT_B, SQRT_A, LIQUIDITY, False) == a1


@pytest.mark.parametrize("delta", [amount0_delta, amount1_delta])
def test_round_up_exceeds_round_down_by_at_most_one(delta):
    up = delta(SQRT_A, SQRT_B, LIQUIDITY, True)
    down = delta(SQRT_A, SQRT_B, LIQUIDITY, False)
    assert 0 <= up - down <= 1


@pytest.mark.parametrize("delta", [amount0_delta, amount1_delta])
def test_zero_liquidity_and_equal_prices(delta):
    assert delta(SQRT_A, SQRT_B, 0, True) == 0
    assert delta(SQRT_A, SQRT_A, LIQUIDITY, True) == 0


def test_amount0_zero_lower_price():
    assert amount0_delta(0, SQRT_B, LIQUIDITY, False) == 0


def test_default_limits():
    assert default_limit(SwapDirection.ZERO_FOR_ONE) == get_sqrt_ratio_at_tick(MIN_TICK + 1)
    assert default_limit(SwapDirection.ONE_FOR_ZERO) == get_sqrt_ratio_at_tick(MAX_TICK - 1)


def test_next_sqrt_moves_in_expected_direction():
    p = 2**96
    assert next_sqrt_from_input_zero_for_one(LIQUIDITY, p, 10**18) < p
    assert next_sqrt_from_input_one_for_zero(LIQUIDITY, p, 10**18) > p
    assert next_sqrt_from_input_zero_for_one(LIQUIDITY, p, 0) == p
    assert next_sqrt_from_input_one_for_zero(0, p, 10**18) == p


def test_swap_step_reaches_target_with_large_input():
    p = get_sqrt_ratio_at_tick(0)
    target = get_sqrt_ratio_at_tick(-60)
    sqrt_q, amount_in, amount_out, fee = compute_swap_step(p, target, 10**18, 10**30, 3000, True)
    assert sqrt_q == target
    assert amount_in == amount0_delta(target, p, 10**18, True)
    assert amount_out == amount1_delta(target, p, 10**18, False)
    assert fee > 0


def test_swap_step_partial_fill_stays_within_budget():
    p = get_sqrt_ratio_at_tick(0)
    target = get_sqrt_ratio_at_tick(600)
    remaining = 10**12
    sqrt_q, amount_in, amount_out, fee = compute_swap_step(p, target, 10**18, remaining, 3000, False)
    assert p < sqrt_q < target
    assert amount_in + fee <= remaining
    assert amount_out > 0


def test_swap_step_without_fee_charges_nothing():
    p = get_sqrt_ratio_at_tick(0)
    target = get_sqrt_ratio_at_tick(-600)
    _, amount_in, _, fee = compute_swap_step(p, target, 10**18, 10**12, 0, True)
    assert fee == 0
    assert amount_in > 0