"""Query parameters and JSON response bodies of the HTTP API."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class ArbitrageQuery:
    trade_size_eth: float | None = None


@dataclass
class OptimalArbitrageQuery:
    max_size_eth: float | None = None


@dataclass
class UniswapDetails:
    sell_price_usdc_per_eth: float
    buy_price_usdc_per_eth: float
    price_impact_percent: float
    estimated_gas_cost_usd: float


@dataclass
class AerodromeDetails:
    sell_price_usdc_per_eth: float
    buy_price_usdc_per_eth: float
    price_impact_percent: float
    estimated_gas_cost_usd: float


@dataclass
class ArbitrageSummary:
    spread_uni_to_aero: float
    spread_aero_to_uni: float
    gross_profit_uni_to_aero_usd: float
    gross_profit_aero_to_uni_usd: float
    total_gas_cost_usd: float
    bridge_cost_usd: float
    net_profit_best_usd: float
    recommended_action: str


@dataclass
class ArbitrageResponse:
    timestamp_utc: str
    trade_size_eth: float
    reference_cex_price_usd: float
    uniswap_v4_details: UniswapDetails
    aerodrome_details: AerodromeDetails
    arbitrage_summary: ArbitrageSummary

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class OptimalArbitrageResponse:
    timestamp_utc: str
    reference_cex_price_usd: float
    optimal_trade_size_eth: float
    optimal_direction: str
    net_profit_usd: float
    gross_profit_usd: float
    total_costs_usd: float
    effective_sell_price_usdc_per_eth: float
    effective_buy_price_usdc_per_eth: float
    gas_cost_usd: float
    bridge_cost_usd: float
    recommended_action: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)