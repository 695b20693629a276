from datetime import datetime

import pytest

from arbscan.analysis import analyze_quotes, recommended_action, scale_amount_to_smallest_units
from arbscan.uniswap_pricing import SideQuote, VenueQuotes


def quotes(sell, buy, gas):
    return VenueQuotes(
        sell=SideQuote(price_usdc_per_eth=sell, estimated_gas_cost_usd=gas),
        buy=SideQuote(price_usdc_per_eth=buy, estimated_gas_cost_usd=gas),
    )


@pytest.mark.parametrize(
    "amount, decimals, expected",
    [
        (1.0, 18, "1000000000000000000"),
        (0.000001, 18, "1000000000000"),
        (1.5, 18, "1500000000000000000"),
        (1.0, 6, "1000000"),
        (1000.0, 6, "1000000000"),
        (0.000001, 6, "1"),
        (0.0, 18, "0"),
        (-10.0, 18, "0"),
        (float("nan"), 18, "0"),
        (float("inf"), 18, "0"),
        (1.4999999999, 6, "1500000"),
        (1.5000000001, 6, "1500000"),
    ],
)
def test_scale_amount_to_smallest_units(amount, decimals, expected):
    assert scale_amount_to_smallest_units(amount, decimals) == expected


def test_scale_amount_saturates():
    huge = scale_amount_to_smallest_units(1e40, 18)
    assert huge == str((1 << 128) - 1)


@pytest.mark.parametrize(
    "net_profit, expected",
    [
        (100.0, "ARBITRAGE_DETECTED"),
        (0.01, "ARBITRAGE_DETECTED"),
        (0.0, "NO_ARBITRAGE"),
        (-100.0, "NO_ARBITRAGE"),
    ],
)
def test_recommended_action(net_profit, expected):
    assert recommended_action(net_profit) == expected


def test_spreads_and_direction_selection():
    uni = quotes(3500.0, 3510.0, 2.0)
    aero = quotes(3480.0, 3490.0, 0.5)
    result = analyze_quotes(uni, aero, 10.0, 3500.0, 2.0, 0.5, 5.0, 7.0, -0.1, -0.2)

    assert result.gross_spread_sell_uni_buy_aero == 10.0
    assert result.gross_spread_sell_aero_buy_uni == -30.0
    assert result.gross_profit_uni_to_aero_usd == 100.0
    assert result.gross_profit_aero_to_uni_usd == -300.0
    assert result.bridge_cost_usd == 5.0
    assert result.total_gas_cost_usd == pytest.approx(2.0 + 0.5 + 5.0)
    assert result.net_profit_best_usd == pytest.approx(100.0 - 7.5)
    assert result.recommended_action == "ARBITRAGE_DETECTED"


def test_opposite_direction_picks_other_bridge_fee():
    uni = quotes(3400.0, 3410.0, 2.0)
    aero = quotes(3480.0, 3490.0, 0.5)
    result = analyze_quotes(uni, aero, 1.0, 3450.0, 2.0, 0.5, 5.0, 7.0, 0.0, 0.0)
    assert result.bridge_cost_usd == 7.0
    assert result.total_gas_cost_usd == pytest.approx(2.0 + 0.5 + 7.0)


def test_no_arbitrage_reports_zero_profit():
    uni = quotes(3500.0, 3510.0, 2.0)
    aero = quotes(3500.0, 3510.0, 0.5)
    result = analyze_quotes(uni, aero, 1.0, 3500.0, 2.0, 0.5, 5.0, 7.0, 0.0, 0.0)
    assert result.net_profit_best_usd == 0.0
    assert result.recommended_action == "NO_ARBITRAGE"


def test_details_are_carried_through():
    uni = quotes(3500.0, 3510.0, 2.0)
    aero = quotes(3480.0, 3490.0, 0.5)
    result = analyze_quotes(uni, aero, 10.0, 3505.0, 2.0, 0.5, 5.0, 7.0, -0.25, -0.5)
    assert result.reference_cex_price_usd == 3505.0
    assert result.trade_size_eth == 10.0
    assert result.uni_sell_price == 3500.0
    assert result.uni_buy_price == 3510.0
    assert result.aero_sell_price == 3480.0
    assert result.aero_buy_price == 3490.0
    assert result.uniswap_price_impact == -0.25
    assert result.aerodrome_price_impact == -0.5
    assert result.uni_gas_usd == 2.0
    assert result.aero_gas_usd == 0.5
    assert datetime.fromisoformat(result.timestamp_utc).utcoffset().total_seconds() == 0


def test_infinite_bridge_fee_is_prohibitive():
    uni = quotes(3500.0, 3510.0, 2.0)
    aero = quotes(3480.0, 3490.0, 0.5)
    inf = float("inf")
    result = analyze_quotes(uni, aero, 10.0, 3500.0, 2.0, 0.5, inf, inf, 0.0, 0.0)
    assert result.net_profit_best_usd == 0.0
    assert result.recommended_action == "NO_ARBITRAGE"