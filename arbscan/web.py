"""Request handling for the HTTP API: parameter clamping and response building."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from arbscan.analysis import ArbitrageAnalysis
from arbscan.dto import (
    AerodromeDetails,
    ArbitrageResponse,
    ArbitrageSummary,
    OptimalArbitrageResponse,
    UniswapDetails,
)
from arbscan.optimal import OptimalArbitrageAnalysis

DEFAULT_TRADE_SIZE_ETH = 10.0
MAX_TRADE_SIZE_ETH = 10_000.0
DEFAULT_MAX_SIZE_ETH = 100.0
MIN_MAX_SIZE_ETH = 0.1
MAX_MAX_SIZE_ETH = 1000.0

ARBITRAGE_PATH = "/api/v1/arbitrage-opportunity"
OPTIMAL_ARBITRAGE_PATH = "/api/v1/optimal-arbitrage"
HEALTH_PATH = "/health"
METRICS_PATH = "/metrics"

_METRICS_TEXT = (
    "# TYPE arbscan_uptime_seconds counter\n"
    "arbscan_uptime_seconds 1\n"
    "# TYPE arbscan_requests_total counter\n"
    'arbscan_requests_total{endpoint="health"} 1\n'
    "# TYPE arbscan_info gauge\n"
    'arbscan_info{version="0.1.0",service="arbitrage"} 1\n'
)


def _now_utc() -> str:
    return datetime.now(timezone.utc).isoformat()


def _clamp(value: float, low: float, high: float) -> float:
    # NaN falls to the lower bound.
    if math.isnan(value):
        return low
    return min(max(value, low), high)


def clamp_trade_size(trade_size_eth: float | None) -> float:
    """Requested trade size, defaulting to 10 ETH and kept within [0, 10000]."""
    size = DEFAULT_TRADE_SIZE_ETH if trade_size_eth is None else trade_size_eth
    return _clamp(size, 0.0, MAX_TRADE_SIZE_ETH)


def clamp_max_size(max_size_eth: float | None) -> float:
    """Requested search cap, defaulting to 100 ETH and kept within [0.1, 1000]."""
    size = DEFAULT_MAX_SIZE_ETH if max_size_eth is None else max_size_eth
    return _clamp(size, MIN_MAX_SIZE_ETH, MAX_MAX_SIZE_ETH)


def arbitrage_response_from_analysis(analysis: ArbitrageAnalysis) -> ArbitrageResponse:
    """Response body for a fixed-size analysis."""
    return ArbitrageResponse(
        timestamp_utc=analysis.timestamp_utc,
        trade_size_eth=analysis.trade_size_eth,
        reference_cex_price_usd=analysis.reference_cex_price_usd,
        uniswap_v4_details=UniswapDetails(
            sell_price_usdc_per_eth=analysis.uni_sell_price,
            buy_price_usdc_per_eth=analysis.uni_buy_price,
            price_impact_percent=analysis.uniswap_price_impact,
            estimated_gas_cost_usd=analysis.uni_gas_usd,
        ),
        aerodrome_details=AerodromeDetails(
            sell_price_usdc_per_eth=analysis.aero_sell_price,
            buy_price_usdc_per_eth=analysis.aero_buy_price,
            price_impact_percent=analysis.aerodrome_price_impact,
            estimated_gas_cost_usd=analysis.aero_gas_usd,
        ),
        arbitrage_summary=ArbitrageSummary(
            spread_uni_to_aero=analysis.gross_spread_sell_uni_buy_aero,
            spread_aero_to_uni=analysis.gross_spread_sell_aero_buy_uni,
            gross_profit_uni_to_aero_usd=analysis.gross_profit_uni_to_aero_usd,
            gross_profit_aero_to_uni_usd=analysis.gross_profit_aero_to_uni_usd,
            total_gas_cost_usd=analysis.total_gas_cost_usd,
            bridge_cost_usd=analysis.bridge_cost_usd,
            net_profit_best_usd=analysis.net_profit_best_usd,
            recommended_action=analysis.recommended_action,
        ),
    )


def optimal_response_from_analysis(analysis: OptimalArbitrageAnalysis) -> OptimalArbitrageResponse:
    """Response body for an optimal-size analysis."""
    return OptimalArbitrageResponse(
        timestamp_utc=analysis.timestamp_utc,
        reference_cex_price_usd=analysis.reference_cex_price_usd,
        optimal_trade_size_eth=analysis.optimal_trade_size_eth,
        optimal_direction=analysis.optimal_direction,
        net_profit_usd=analysis.net_profit_usd,
        gross_profit_usd=analysis.gross_profit_usd,
        total_costs_usd=analysis.total_costs_usd,
        effective_sell_price_usdc_per_eth=analysis.effective_sell_price_usdc_per_eth,
        effective_buy_price_usdc_per_eth=analysis.effective_buy_price_usdc_per_eth,
        gas_cost_usd=analysis.gas_cost_usd,
        bridge_cost_usd=analysis.bridge_cost_usd,
        recommended_action=analysis.recommended_action,
    )


def arbitrage_error_response(message: str, trade_size_eth: float) -> ArbitrageResponse:
    """All-zero fixed-size response carrying an error message."""
    return ArbitrageResponse(
        timestamp_utc=_now_utc(),
        trade_size_eth=trade_size_eth,
        reference_cex_price_usd=0.0,
        uniswap_v4_details=UniswapDetails(0.0, 0.0, 0.0, 0.0),
        aerodrome_details=AerodromeDetails(0.0, 0.0, 0.0, 0.0),
        arbitrage_summary=ArbitrageSummary(
            spread_uni_to_aero=0.0,
            spread_aero_to_uni=0.0,
            gross_profit_uni_to_aero_usd=0.0,
            gross_profit_aero_to_uni_usd=0.0,
            total_gas_cost_usd=0.0,
            bridge_cost_usd=0.0,
            net_profit_best_usd=0.0,
            recommended_action=f"ERROR: {message}",
        ),
    )


def optimal_error_response(message: str) -> OptimalArbitrageResponse:
    """All-zero optimal-size response carrying an error message."""
    return OptimalArbitrageResponse(
        timestamp_utc=_now_utc(),
        reference_cex_price_usd=0.0,
        optimal_trade_size_eth=0.0,
        optimal_direction="ERROR",
        net_profit_usd=0.0,
        gross_profit_usd=0.0,
        total_costs_usd=0.0,
        effective_sell_price_usdc_per_eth=0.0,
        effective_buy_price_usdc_per_eth=0.0,
        gas_cost_usd=0.0,
        bridge_cost_usd=0.0,
        recommended_action=f"ERROR: {message}",
    )


def health() -> str:
    """Liveness check body."""
    return "OK"


def metrics() -> str:
    """Static metrics in the Prometheus text format."""
    return _METRICS_TEXT