"""Uniswap V3 tick math and Ajna bucket mapping."""

from __future__ import annotations

from typing import Optional, Sequence

AJNA_MIN_BUCKET = 1
AJNA_MAX_BUCKET = 7388
# Ajna bucket 4156 sits at price 1.0; each bucket is 0.5% (~50 ticks) apart.
AJNA_PAR_BUCKET = 4156
TICKS_PER_BUCKET = 50


def tick_to_ajna_bucket(tick: int) -> int:
    idx = AJNA_PAR_BUCKET - (tick // TICKS_PER_BUCKET)
    return max(AJNA_MIN_BUCKET, min(AJNA_MAX_BUCKET, idx))


def token1_per_token0(tick: int, decimals0: int, decimals1: int) -> float:
    return (1.0001 ** tick) * (10 ** (decimals0 - decimals1))


def mean_tick(tick_cumulatives: Sequence[int], duration: int) -> Optional[int]:
    """Arithmetic mean tick over `duration` seconds, rounded toward negative infinity."""
    if len(tick_cumulatives) < 2 or duration <= 0:
        return None
    delta = int(tick_cumulatives[1]) - int(tick_cumulatives[0])
    return delta // duration


def usd_per_creator(tick: int, creator_is_token0: bool, creator_decimals: int, usd_decimals: int) -> float:
    if creator_is_token0:
        return token1_per_token0(tick, creator_decimals, usd_decimals)
    price = token1_per_token0(tick, usd_decimals, creator_decimals)
    return 1 / price if price > 0 else 0.0


def format_usd(value: Optional[float]) -> str:
    if value is None or value <= 0:
        return "—"
    if value >= 1:
        return f"${value:.4f}"
    return f"${value:.3g}"
