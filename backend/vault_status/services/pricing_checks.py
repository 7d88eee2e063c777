"""
Market pricing checks for a vault report.

Reads the CREATOR/USDC Uniswap V3 pool, derives spot and TWAP prices, and
suggests the Ajna bucket a lending strategy should sit in. Everything here is
best effort: an unreadable value becomes a local `warn` or `info` check.
A rate-limited read still raises `RateLimitedError` so the whole report
bails out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from vault_status.chain.abi import (
    DECIMALS,
    ORACLE_V3_CREATOR_TOKEN,
    ORACLE_V3_POOL,
    ORACLE_V3_POOL_CONFIGURED,
    ORACLE_V3_USD_TOKEN,
    OWNER,
    V3_FACTORY_GET_POOL,
    V3_POOL_OBSERVE,
    V3_POOL_SLOT0,
    V3_POOL_TOKEN0,
    V3_POOL_TOKEN1,
)
from vault_status.chain.pricing import format_usd, mean_tick, tick_to_ajna_bucket, usd_per_creator
from vault_status.chain.reader import CallResult, ChainReader, ContractCall, raise_if_rate_limited
from vault_status.core.config import ReportConfig
from vault_status.models.report_model import Check
from vault_status.services.report_service import make_check
from vault_status.validation.wiring import is_set_address, same_address

TWAP_WINDOW = 1800
SHORT_TWAP_WINDOW = 300
MIN_OBSERVATION_CARDINALITY = 16


@dataclass
class MarketSnapshot:
    pool: Optional[str] = None
    token0: Optional[str] = None
    token1: Optional[str] = None
    spot_tick: Optional[int] = None
    twap_tick: Optional[int] = None
    observation_cardinality: Optional[int] = None
    observation_cardinality_next: Optional[int] = None
    creator_decimals: int = 18
    usd_decimals: int = 6


@dataclass
class OracleSnapshot:
    owner: Optional[str] = None
    configured: Optional[bool] = None
    pool: Optional[str] = None
    creator_token: Optional[str] = None
    usd_token: Optional[str] = None


@dataclass
class LendingPosition:
    strategy: str
    owner: Optional[str] = None
    bucket_index: Optional[int] = None
    collateral: Optional[str] = None


def _observed_tick(result: CallResult, window: int) -> Optional[int]:
    if not result.ok:
        return None
    tick_cumulatives = result.value[0]
    return mean_tick(tick_cumulatives, window)


async def read_market(reader: ChainReader, config: ReportConfig, creator_token: str) -> MarketSnapshot:
    addresses = config.addresses
    lookup = await reader.read_one(
        ContractCall(addresses.uniswap_v3_factory, V3_FACTORY_GET_POOL, (creator_token, addresses.usdc, config.v3_fee_tier))
    )
    raise_if_rate_limited([lookup], "uniswap v3 pool lookup")
    pool = lookup.value_or()
    if not is_set_address(pool):
        return MarketSnapshot()

    meta = await reader.batch_read([
        ContractCall(pool, V3_POOL_TOKEN0),
        ContractCall(pool, V3_POOL_TOKEN1),
        ContractCall(pool, V3_POOL_SLOT0),
        ContractCall(creator_token, DECIMALS),
        ContractCall(addresses.usdc, DECIMALS),
        ContractCall(pool, V3_POOL_OBSERVE, ([TWAP_WINDOW, 0],)),
        ContractCall(pool, V3_POOL_OBSERVE, ([SHORT_TWAP_WINDOW, 0],)),
    ])
    raise_if_rate_limited(meta, "uniswap v3 pool state")

    snapshot = MarketSnapshot(
        pool=pool,
        token0=meta[0].value_or(),
        token1=meta[1].value_or(),
        creator_decimals=meta[3].value_or(18),
        usd_decimals=meta[4].value_or(6),
    )
    slot0 = meta[2].value_or()
    if slot0:
        snapshot.spot_tick = int(slot0[1])
        snapshot.observation_cardinality = int(slot0[3])
        snapshot.observation_cardinality_next = int(slot0[4])
    # Prefer the 30 min TWAP; a young pool may only cover 5 min.
    snapshot.twap_tick = _observed_tick(meta[5], TWAP_WINDOW)
    if snapshot.twap_tick is None:
        snapshot.twap_tick = _observed_tick(meta[6], SHORT_TWAP_WINDOW)
    return snapshot


async def read_oracle(reader: ChainReader, oracle: str) -> OracleSnapshot:
    results = await reader.batch_read([
        ContractCall(oracle, OWNER),
        ContractCall(oracle, ORACLE_V3_POOL_CONFIGURED),
        ContractCall(oracle, ORACLE_V3_POOL),
        ContractCall(oracle, ORACLE_V3_CREATOR_TOKEN),
        ContractCall(oracle, ORACLE_V3_USD_TOKEN),
    ])
    raise_if_rate_limited(results, "oracle v3 config")
    owner, configured, pool, creator_token, usd_token = (r.value_or() for r in results)
    return OracleSnapshot(owner=owner, configured=configured, pool=pool, creator_token=creator_token, usd_token=usd_token)


def _oracle_check(oracle: OracleSnapshot, market: MarketSnapshot, creator_token: str, usd_token: str) -> Check:
    label = "Oracle configured for V3 CREATOR/USDC TWAP"
    matches = (
        oracle.configured is True
        and same_address(oracle.pool, market.pool) is True
        and same_address(oracle.creator_token, creator_token) is True
        and same_address(oracle.usd_token, usd_token) is True
    )
    if matches:
        return make_check("oracle-v3", label, "pass", "oracle.v3PoolConfigured=true")
    if oracle.configured is False:
        return make_check(
            "oracle-v3",
            label,
            "warn",
            f"Not configured yet. Recommended: set oracle.setV3Pool(pool, creator, usdc, {TWAP_WINDOW}).",
        )
    if oracle.configured is None:
        return make_check("oracle-v3", label, "info", "oracle.v3PoolConfigured is not readable for this oracle version")
    return make_check("oracle-v3", label, "warn", f"oracle.v3Pool={oracle.pool or '—'} · pool={market.pool or '—'}")


def build_pricing_checks(
    config: ReportConfig,
    creator_token: str,
    market: MarketSnapshot,
    oracle: Optional[OracleSnapshot] = None,
    lending: Optional[LendingPosition] = None,
) -> Tuple[List[Check], Dict[str, Any]]:
    """Returns the pricing section checks and the context fields they resolved."""
    checks: List[Check] = []
    usd_token = config.addresses.usdc
    pool_label = f"Uniswap V3 CREATOR/USDC pool ({config.v3_fee_tier / 10000:g}%)"
    spot_usd = twap_usd = None
    suggested_bucket = None

    if not market.pool:
        checks.append(make_check(
            "v3-pool",
            pool_label,
            "warn",
            "No pool found yet. It may not have been created, or it uses a different fee tier.",
        ))
    else:
        checks.append(make_check("v3-pool", pool_label, "pass", market.pool, config.explorer_href(market.pool)))

        creator_is_token0 = same_address(market.token0, creator_token) is True
        creator_is_token1 = same_address(market.token1, creator_token) is True
        tick = market.twap_tick if market.twap_tick is not None else market.spot_tick

        if tick is not None and (creator_is_token0 or creator_is_token1):
            if market.spot_tick is not None:
                spot_usd = usd_per_creator(market.spot_tick, creator_is_token0, market.creator_decimals, market.usd_decimals)
            if market.twap_tick is not None:
                twap_usd = usd_per_creator(market.twap_tick, creator_is_token0, market.creator_decimals, market.usd_decimals)
            checks.append(make_check(
                "v3-price",
                "CREATOR price (Uniswap V3)",
                "info",
                f"spot≈{format_usd(spot_usd)} · twap≈{format_usd(twap_usd)}",
            ))

            if market.observation_cardinality_next is not None:
                ready = market.observation_cardinality_next >= MIN_OBSERVATION_CARDINALITY
                checks.append(make_check(
                    "v3-oracle-capacity",
                    "Uniswap V3 oracle capacity",
                    "pass" if ready else "warn",
                    f"observations={market.observation_cardinality} · next={market.observation_cardinality_next}",
                ))
                if not ready:
                    checks.append(make_check(
                        "v3-oracle-tip",
                        "TWAP readiness",
                        "warn",
                        "This pool may not serve a reliable TWAP yet. "
                        "Recommended: increase observation cardinality (e.g. to 64).",
                    ))

            # Ajna quotes CREATOR per USDC, so orient the tick with CREATOR as token1.
            oriented = tick if creator_is_token1 else -tick
            suggested_bucket = tick_to_ajna_bucket(oriented)
            checks.append(make_check(
                "ajna-bucket-suggested",
                "Suggested Ajna bucket (from V3 tick)",
                "info",
                f"bucket={suggested_bucket} (tick={oriented})",
            ))
        else:
            checks.append(make_check(
                "v3-price",
                "CREATOR price (Uniswap V3)",
                "warn",
                "Could not derive price tick (pool may be too new or unreadable).",
            ))

    if oracle is not None:
        checks.append(_oracle_check(oracle, market, creator_token, usd_token))

    if suggested_bucket is not None and lending is not None and lending.bucket_index is not None:
        details = f"current={lending.bucket_index} · suggested={suggested_bucket}"
        if lending.collateral:
            details += f" · collateral={lending.collateral}"
        checks.append(make_check(
            "ajna-bucket-match",
            "Ajna bucket matches suggestion",
            "pass" if lending.bucket_index == suggested_bucket else "warn",
            details,
            config.explorer_href(lending.strategy),
        ))

    context = {
        "v3PoolAddress": market.pool,
        "v3SpotTick": _str_or_none(market.spot_tick),
        "v3TwapTick": _str_or_none(market.twap_tick),
        "v3ObservationCardinality": _str_or_none(market.observation_cardinality),
        "v3ObservationCardinalityNext": _str_or_none(market.observation_cardinality_next),
        "v3SpotUsdPerCreator": _str_or_none(spot_usd),
        "v3TwapUsdPerCreator": _str_or_none(twap_usd),
        "ajnaSuggestedBucketIndex": _str_or_none(suggested_bucket),
        "oracleOwner": oracle.owner if oracle else None,
        "oracleV3PoolConfigured": oracle.configured if oracle else None,
        "oracleV3Pool": oracle.pool if oracle else None,
    }
    return checks, context


def _str_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)
