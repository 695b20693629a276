"""Response and opportunity records reported by the service."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class DexDetails:
    effective_price_usd: float = 0.0
    price_impact_percent: float = 0.0
    estimated_gas_cost_usd: float = 0.0


@dataclass
class ArbitrageSummary:
    potential_profit_usd: float = 0.0
    total_gas_cost_usd: float = 0.0
    net_profit_usd: float = 0.0
    recommended_action: str = ""


@dataclass
class ArbitrageResponse:
    """Fixed-size arbitrage report across two venues."""

    timestamp_utc: datetime
    trade_size_eth: float
    reference_cex_price_usd: float
    uniswap_v4_details: DexDetails = field(default_factory=DexDetails)
    aerodrome_details: DexDetails = field(default_factory=DexDetails)
    arbitrage_summary: ArbitrageSummary = field(default_factory=ArbitrageSummary)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp_utc"] = _format_timestamp(self.timestamp_utc)
        return data


@dataclass
class ArbitrageOpportunity:
    """Optimised opportunity with free-form plan, market and gas details."""

    profitable: bool
    direction: str
    optimal_trade_size_eth: float
    expected_profit_usd: float
    confidence_score: float
    execution_plan: Any
    market_conditions: Any
    gas_estimates: Any
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = _format_timestamp(self.timestamp)
        return data


def error_response(message: str) -> ArbitrageResponse:
    """All-zero response whose recommended action carries the error message."""
    return ArbitrageResponse(
        timestamp_utc=datetime.now(timezone.utc),
        trade_size_eth=0.0,
        reference_cex_price_usd=0.0,
        uniswap_v4_details=DexDetails(),
        aerodrome_details=DexDetails(),
        arbitrage_summary=ArbitrageSummary(recommended_action=f"ERROR: {message}"),
    )