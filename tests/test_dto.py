import json

from arbscan.dto import (
    AerodromeDetails,
    ArbitrageQuery,
    ArbitrageResponse,
    ArbitrageSummary,
    OptimalArbitrageQuery,
    OptimalArbitrageResponse,
    UniswapDetails,
)


def test_queries_default_to_none():
    assert ArbitrageQuery().trade_size_eth is None
    assert OptimalArbitrageQuery().max_size_eth is None
    assert ArbitrageQuery(trade_size_eth=4.0).trade_size_eth == 4.0


def _response():
    return ArbitrageResponse(
        timestamp_utc="2024-05-01T00:00:00+00:00",
        trade_size_eth=1.5,
        reference_cex_price_usd=3000.0,
        uniswap_v4_details=UniswapDetails(3001.0, 3005.0, -0.05, 2.0),
        aerodrome_details=AerodromeDetails(2999.0, 3002.0, -0.07, 0.1),
        arbitrage_summary=ArbitrageSummary(-1.0, -6.0, -1.5, -9.0, 2.1, 4.0, 0.0, "NO_ARBITRAGE"),
    )


def test_arbitrage_response_nested_dict():
    data = _response().to_dict()
    assert set(data) == {
        "timestamp_utc",
        "trade_size_eth",
        "reference_cex_price_usd",
        "uniswap_v4_details",
        "aerodrome_details",
        "arbitrage_summary",
    }
    assert data["uniswap_v4_details"]["buy_price_usdc_per_eth"] == 3005.0
    assert data["aerodrome_details"]["sell_price_usdc_per_eth"] == 2999.0
    assert data["arbitrage_summary"]["recommended_action"] == "NO_ARBITRAGE"


def test_arbitrage_response_json_round_trip():
    resp = _response()
    data = json.loads(json.dumps(resp.to_dict()))
    rebuilt = ArbitrageResponse(
        timestamp_utc=data["timestamp_utc"],
        trade_size_eth=data["trade_size_eth"],
        reference_cex_price_usd=data["reference_cex_price_usd"],
        uniswap_v4_details=UniswapDetails(**data["uniswap_v4_details"]),
        aerodrome_details=AerodromeDetails(**data["aerodrome_details"]),
        arbitrage_summary=ArbitrageSummary(**data["arbitrage_summary"]),
    )
    assert rebuilt == resp


def test_optimal_response_round_trip():
    resp = OptimalArbitrageResponse(
        timestamp_utc="2024-05-01T00:00:00+00:00",
        reference_cex_price_usd=3000.0,
        optimal_trade_size_eth=7.0,
        optimal_direction="SELL_AERODROME_BUY_UNISWAP",
        net_profit_usd=12.5,
        gross_profit_usd=21000.0,
        total_costs_usd=20987.5,
        effective_sell_price_usdc_per_eth=3000.0,
        effective_buy_price_usdc_per_eth=2998.0,
        gas_cost_usd=2.5,
        bridge_cost_usd=3.0,
        recommended_action="PROFITABLE_ARBITRAGE_FOUND",
    )
    data = json.loads(json.dumps(resp.to_dict()))
    assert OptimalArbitrageResponse(**data) == resp
    assert data["optimal_direction"] == "SELL_AERODROME_BUY_UNISWAP"