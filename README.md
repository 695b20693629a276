# arbscan

Pure-Python arbitrage analysis for WETH/USDC across two kinds of venue:

- a concentrated-liquidity pool (tick math and exact-input swap simulation in
  exact integer arithmetic with explicit rounding), and
- a volatile constant-product pool (`x * y = k` with a basis-point fee).

It quotes both sides of each venue, works out directional spreads, searches
for the trade size that maximises net profit after gas and bridge costs, and
builds the response objects for an HTTP API. It has no dependencies outside
the standard library.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Purpose |
| --- | --- |
| `arbscan.uniswap_math` | `SwapDirection`, tick ↔ sqrt-price conversion, amount deltas, `compute_swap_step` |
| `arbscan.uniswap_swap` | `PoolKey`, `PoolState`, `SwapParams`, `SwapResult`, `HookFee`, `simulate_swap`, `simulate_exact_in_tokens`, `SwapError` |
| `arbscan.uniswap_pools` | `create_pool_with_real_data`, `create_standard_weth_usdc_pools`, `best_pool_for_exact_in`, `tick_from_price`, `price_from_tick` |
| `arbscan.aerodrome` | `VolatilePairState`, `volatile_amount_out`, `simulate_exact_in_volatile`, `apply_swap_to_reserves`, `to_raw`, `from_raw` |
| `arbscan.uniswap_pricing` | `GasCost`, `SideQuote`, `VenueQuotes`, sell/buy quotes on the concentrated-liquidity pool |
| `arbscan.aerodrome_pricing` | Sell/buy quotes on the volatile pool |
| `arbscan.profit` | `ArbDirection`, `OptimizerInputs`, profit of one trade size in one direction |
| `arbscan.optimizer` | `optimize`: exponential bracketing followed by a section search over trade size |
| `arbscan.analysis` | `analyze_quotes`: fixed-size spread analysis and recommended action; `scale_amount_to_smallest_units` |
| `arbscan.optimal` | `OptimalArbitrageAnalysis` from an optimizer result, or when there is no opportunity |
| `arbscan.bridge` | `bridge_plan` (which transfers rebalance a trade) and `cheapest_bridge_fee_usd` |
| `arbscan.models`, `arbscan.dto` | Response dataclasses with `to_dict()` |
| `arbscan.web` | Query clamping, response building, `health()` and `metrics()` |

Sell quotes are exact-input ETH → USDC; buy quotes are the USDC needed to
receive a given amount of ETH, found by bisection. Prices are USDC per ETH.

## Example

```python
from arbscan.aerodrome import VolatilePairState, SwapDirection, simulate_exact_in_volatile, to_raw
from arbscan.aerodrome_pricing import quote_aerodrome_both
from arbscan.uniswap_pools import create_standard_weth_usdc_pools
from arbscan.uniswap_pricing import GasCost, quote_uniswap_v4_both

pair = VolatilePairState(
    token0="weth",
    token1="usdc",
    reserve0=to_raw(1000.0, 18),
    reserve1=to_raw(3_500_000.0, 6),
    decimals0=18,
    decimals1=6,
    fee_bps=30,
)

amount_in, amount_out, effective, spot, impact = simulate_exact_in_volatile(
    pair, SwapDirection.ZERO_FOR_ONE, 1.0
)
print(effective, spot, impact)

gas = GasCost(total_usd=2.0)
aero = quote_aerodrome_both(pair, True, 1.0, gas)

pools = create_standard_weth_usdc_pools("weth", "usdc", 3500.0)
uni = quote_uniswap_v4_both(pools[1], True, 1.0, gas, 3000)

print(uni.sell.price_usdc_per_eth - aero.buy.price_usdc_per_eth)
print(aero.sell.price_usdc_per_eth - uni.buy.price_usdc_per_eth)
```

To search for the best trade size, build an `arbscan.profit.OptimizerInputs`
with both pool snapshots, a `GasCost` per chain, a bridge cost, a starting
size and a maximum size, then call `arbscan.optimizer.optimize(inputs)`. It
returns an `OptimizeResult`, or `None` when the better direction does not
make a profit.

## What it does not do

- It fetches nothing: there is no blockchain, exchange-price, gas-price or
  bridge-fee client. Pool snapshots, gas figures, the reference price and
  bridge fees are supplied by the caller.
- It runs no HTTP server. `arbscan.web` provides the request handling pieces
  (clamping, response objects, `health()`, `metrics()`) for use with a web
  framework of your choice, and no command-line program is installed.