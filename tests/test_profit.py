import dataclasses

import pytest

from arbscan.aerodrome import VolatilePairState, to_raw, volatile_amount_out
from arbscan.aerodrome_pricing import aerodrome_buy_price_usdc_per_eth, aerodrome_sell_price_usdc_per_eth
from arbscan.profit import (
    ArbDirection,
    OptimizerInputs,
    aero_usdc_in_for_weth_out,
    aero_usdc_out_for_weth_in,
    profit,
    profit_with_snapshot,
    uni_usdc_in_for_weth_out,
    uni_usdc_out_for_weth_in,
)
from arbscan.uniswap_math import SwapDirection as UniDirection
from arbscan.uniswap_pools import mock_pool_with_addresses
from arbscan.uniswap_pricing import GasCost, uniswap_sell_price_usdc_per_eth
from arbscan.uniswap_swap import simulate_exact_in_tokens

WETH = "0x" + "11" * 20
USDC = "0x" + "22" * 20


@pytest.fixture
def uni_pool():
    return mock_pool_with_addresses(WETH, USDC, 3000.0, 3000, 60)


@pytest.fixture
def aero_pair():
    return VolatilePairState(
        token0=WETH,
        token1=USDC,
        reserve0=1000 * 10**18,
        reserve1=3_400_000 * 10**6,
        decimals0=18,
        decimals1=6,
        fee_bps=30,
    )


@pytest.fixture
def mirrored_pair(aero_pair):
    return VolatilePairState(
        token0=USDC,
        token1=WETH,
        reserve0=aero_pair.reserve1,
        reserve1=aero_pair.reserve0,
        decimals0=6,
        decimals1=18,
        fee_bps=aero_pair.fee_bps,
    )


@pytest.fixture
def inputs(uni_pool, aero_pair):
    return OptimizerInputs(
        uni_pool=uni_pool,
        uni_token0_is_weth=True,
        uni_fee_ppm_override=3000,
        aero_pair=aero_pair,
        aero_token0_is_weth=True,
        gas_eth=GasCost(total_usd=2.0),
        gas_base=GasCost(total_usd=0.5),
        bridge_cost_usd=5.0,
        hint_size_eth=1.0,
        max_size_eth=100.0,
    )


def test_gas_total_sums_both_chains(inputs):
    assert inputs.gas_total_usd == pytest.approx(2.5)


def test_aero_sell_matches_pricing(aero_pair):
    usdc_out, eff = aero_usdc_out_for_weth_in(aero_pair, True, 1.0)
    assert eff == aerodrome_sell_price_usdc_per_eth(aero_pair, True, 1.0)
    assert usdc_out == pytest.approx(eff)


def test_aero_sell_mirrored_pair_agrees(aero_pair, mirrored_pair):
    assert aero_usdc_out_for_weth_in(aero_pair, True, 2.0) == aero_usdc_out_for_weth_in(mirrored_pair, False, 2.0)


def test_aero_buy_is_minimal_input(aero_pair):
    usdc_in = aero_usdc_in_for_weth_out(aero_pair, True, 1.0)
    raw = to_raw(usdc_in, 6)
    target = to_raw(1.0, 18)
    assert volatile_amount_out(raw, aero_pair.reserve1, aero_pair.reserve0, 30) >= target
    assert volatile_amount_out(raw - 1, aero_pair.reserve1, aero_pair.reserve0, 30) < target


def test_aero_buy_matches_pricing(aero_pair):
    usdc_in = aero_usdc_in_for_weth_out(aero_pair, True, 3.0)
    assert usdc_in == pytest.approx(aerodrome_buy_price_usdc_per_eth(aero_pair, True, 3.0) * 3.0)


def test_aero_buy_mirrored_pair_agrees(aero_pair, mirrored_pair):
    assert aero_usdc_in_for_weth_out(aero_pair, True, 1.5) == aero_usdc_in_for_weth_out(mirrored_pair, False, 1.5)


def test_aero_buy_zero_target(aero_pair):
    assert aero_usdc_in_for_weth_out(aero_pair, True, 0.0) == 0.0


def test_uni_sell_matches_pricing(uni_pool):
    result = uni_usdc_out_for_weth_in(uni_pool, True, 3000, 1.0)
    assert result is not None
    usdc_out, eff = result
    assert eff == uniswap_sell_price_usdc_per_eth(uni_pool, True, 1.0, 3000)
    assert usdc_out == pytest.approx(eff, rel=1e-9)


def test_uni_sell_invalid_amount_gives_none(uni_pool):
    assert uni_usdc_out_for_weth_in(uni_pool, True, 3000, -1.0) is None


def test_uni_buy_zero_target(uni_pool):
    assert uni_usdc_in_for_weth_out(uni_pool, True, 3000, 0.0) == (0.0, 0.0)


def test_uni_buy_input_delivers_target(uni_pool):
    result = uni_usdc_in_for_weth_out(uni_pool, True, 3000, 1.0)
    assert result is not None
    usdc_in, buy_px = result
    assert buy_px == pytest.approx(usdc_in / 1.0)
    res = simulate_exact_in_tokens(uni_pool, UniDirection.ONE_FOR_ZERO, 3000, usdc_in, 6, None)
    assert res.amount0 / 1e18 >= 1.0
    _, sell_px = uni_usdc_out_for_weth_in(uni_pool, True, 3000, 1.0)
    assert buy_px > sell_px


def test_profit_non_positive_size(inputs):
    assert profit_with_snapshot(inputs, ArbDirection.SELL_AERO_BUY_UNI, 0.0) is None
    assert profit(inputs, ArbDirection.SELL_UNI_BUY_AERO, -1.0) is None


def test_snapshot_accounts_for_costs(inputs):
    snap = profit_with_snapshot(inputs, ArbDirection.SELL_AERO_BUY_UNI, 1.0)
    assert snap is not None
    assert snap.net_profit_usd == pytest.approx(snap.proceeds_usd - snap.costs_usd - 2.5 - 5.0)
    assert snap.proceeds_usd == pytest.approx(aero_usdc_out_for_weth_in(inputs.aero_pair, True, 1.0)[0])
    assert snap.buy_price_usdc_per_eth == pytest.approx(snap.costs_usd)


def test_sell_uni_snapshot_buy_price(inputs):
    snap = profit_with_snapshot(inputs, ArbDirection.SELL_UNI_BUY_AERO, 2.0)
    assert snap is not None
    assert snap.buy_price_usdc_per_eth == pytest.approx(snap.costs_usd / 2.0)
    assert snap.costs_usd == aero_usdc_in_for_weth_out(inputs.aero_pair, True, 2.0)


def test_profitable_direction_follows_price_gap(inputs):
    aero_higher = profit(inputs, ArbDirection.SELL_AERO_BUY_UNI, 1.0)
    uni_higher = profit(inputs, ArbDirection.SELL_UNI_BUY_AERO, 1.0)
    assert aero_higher is not None and uni_higher is not None
    assert aero_higher > 0.0
    assert uni_higher < 0.0


def test_bridge_cost_lowers_profit_one_for_one(inputs):
    costly = dataclasses.replace(inputs, bridge_cost_usd=105.0)
    base = profit(inputs, ArbDirection.SELL_AERO_BUY_UNI, 1.0)
    worse = profit(costly, ArbDirection.SELL_AERO_BUY_UNI, 1.0)
    assert base - worse == pytest.approx(100.0)


def test_profit_matches_snapshot(inputs):
    snap = profit_with_snapshot(inputs, ArbDirection.SELL_UNI_BUY_AERO, 1.0)
    assert profit(inputs, ArbDirection.SELL_UNI_BUY_AERO, 1.0) == snap.net_profit_usd


def test_infinite_cost_gives_none(inputs):
    broken = dataclasses.replace(inputs, bridge_cost_usd=float("nan"))
    assert profit(broken, ArbDirection.SELL_AERO_BUY_UNI, 1.0) is None