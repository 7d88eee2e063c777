"""Tick math and the market pricing section."""

import asyncio

import pytest

from fake_chain import FakeChain, addr, deploy_vault
from vault_status.chain import abi
from vault_status.chain.pricing import format_usd, mean_tick, tick_to_ajna_bucket, token1_per_token0, usd_per_creator
from vault_status.chain.reader import ChainReader
from vault_status.core.config import ReportConfig
from vault_status.services.pricing_checks import (
    LendingPosition,
    MarketSnapshot,
    OracleSnapshot,
    build_pricing_checks,
    read_market,
)
from vault_status.services.vault_report import VaultReportService

POOL = addr(0x9001)
AJNA_POOL = addr(0xA7A)
CREATOR = addr(0xCCC)


@pytest.mark.parametrize(
    "tick, bucket",
    [
        (0, 4156),
        (49, 4156),
        (50, 4155),
        (-1, 4157),
        (-50, 4157),
        (-51, 4158),
        (1000, 4136),
        (10_000_000, 1),
        (-10_000_000, 7388),
    ],
)
def test_tick_to_ajna_bucket(tick: int, bucket: int) -> None:
    assert tick_to_ajna_bucket(tick) == bucket


def test_mean_tick_rounds_toward_negative_infinity() -> None:
    assert mean_tick([0, 1800 * 7], 1800) == 7
    assert mean_tick([0, -1001], 2) == -501
    assert mean_tick([100], 300) is None
    assert mean_tick([0, 10], 0) is None


def test_prices() -> None:
    assert token1_per_token0(0, 18, 6) == pytest.approx(1e12)
    assert usd_per_creator(0, True, 6, 6) == pytest.approx(1.0)
    assert usd_per_creator(6932, False, 6, 6) == pytest.approx(0.5, rel=1e-3)
    assert format_usd(None) == "—"
    assert format_usd(0) == "—"
    assert format_usd(1.23456) == "$1.2346"
    assert format_usd(0.0012345) == "$0.00123"


def seed_pool(chain: FakeChain, config: ReportConfig, tick: int = -1000, cardinality_next: int = 100) -> None:
    usdc = config.addresses.usdc
    chain.deploy(config.addresses.uniswap_v3_factory)
    chain.deploy(POOL)
    chain.deploy(usdc)
    chain.set_view(
        config.addresses.uniswap_v3_factory,
        abi.V3_FACTORY_GET_POOL,
        lambda a, b, fee: POOL if fee == config.v3_fee_tier else abi.ZERO_ADDRESS,
    )
    chain.set_view(POOL, abi.V3_POOL_TOKEN0, CREATOR)
    chain.set_view(POOL, abi.V3_POOL_TOKEN1, usdc)
    chain.set_view(POOL, abi.V3_POOL_SLOT0, (2 ** 96, tick + 10, 0, 8, cardinality_next, 0, True))
    chain.set_view(
        POOL,
        abi.V3_POOL_OBSERVE,
        lambda seconds: ([0, tick * seconds[0]], [0, 0]),
    )
    chain.set_view(CREATOR, abi.DECIMALS, 6)
    chain.set_view(usdc, abi.DECIMALS, 6)


def test_read_market(chain: FakeChain, config: ReportConfig, reader: ChainReader) -> None:
    chain.deploy(CREATOR)
    seed_pool(chain, config)

    market = asyncio.run(read_market(reader, config, CREATOR))

    assert market.pool.lower() == POOL.lower()
    assert market.spot_tick == -990
    assert market.twap_tick == -1000
    assert market.observation_cardinality == 8
    assert market.observation_cardinality_next == 100
    assert market.creator_decimals == 6


def test_read_market_without_pool(chain: FakeChain, config: ReportConfig, reader: ChainReader) -> None:
    market = asyncio.run(read_market(reader, config, CREATOR))
    assert market == MarketSnapshot()


def test_pricing_checks_for_live_pool(config: ReportConfig) -> None:
    market = MarketSnapshot(
        pool=POOL, token0=CREATOR, token1=config.addresses.usdc,
        spot_tick=-990, twap_tick=-1000, observation_cardinality=8, observation_cardinality_next=100,
        creator_decimals=6, usd_decimals=6,
    )
    lending = LendingPosition(strategy=addr(0x5747), bucket_index=4136, collateral=CREATOR)
    oracle = OracleSnapshot(configured=True, pool=POOL.lower(), creator_token=CREATOR, usd_token=config.addresses.usdc)

    checks, context = build_pricing_checks(config, CREATOR, market, oracle, lending)

    by_id = {c.id: c for c in checks}
    assert [c.id for c in checks] == [
        "v3-pool", "v3-price", "v3-oracle-capacity", "ajna-bucket-suggested", "oracle-v3", "ajna-bucket-match",
    ]
    assert by_id["v3-pool"].status == "pass"
    assert by_id["v3-pool"].label == "Uniswap V3 CREATOR/USDC pool (0.3%)"
    assert by_id["v3-price"].details == "spot≈$0.906 · twap≈$0.905"
    assert by_id["ajna-bucket-suggested"].details == "bucket=4136 (tick=1000)"
    assert by_id["oracle-v3"].status == "pass"
    assert by_id["ajna-bucket-match"].status == "pass"
    assert context["v3TwapTick"] == "-1000"
    assert context["ajnaSuggestedBucketIndex"] == "4136"


def test_low_observation_capacity_warns(config: ReportConfig) -> None:
    market = MarketSnapshot(
        pool=POOL, token0=config.addresses.usdc, token1=CREATOR, spot_tick=50,
        observation_cardinality=1, observation_cardinality_next=1,
    )

    checks, context = build_pricing_checks(config, CREATOR, market)

    by_id = {c.id: c for c in checks}
    assert by_id["v3-oracle-capacity"].status == "warn"
    assert by_id["v3-oracle-tip"].status == "warn"
    # CREATOR is token1, so the tick is used as-is.
    assert by_id["ajna-bucket-suggested"].details == "bucket=4155 (tick=50)"
    assert context["v3TwapTick"] is None


def test_unconfigured_oracle_and_unrelated_pool(config: ReportConfig) -> None:
    market = MarketSnapshot(pool=POOL, token0=addr(0x1), token1=addr(0x2), spot_tick=0)
    oracle = OracleSnapshot(configured=False)

    checks, _ = build_pricing_checks(config, CREATOR, market, oracle)

    statuses = {c.id: c.status for c in checks}
    assert statuses == {"v3-pool": "pass", "v3-price": "warn", "oracle-v3": "warn"}


def test_missing_pool_warns(config: ReportConfig) -> None:
    checks, context = build_pricing_checks(config, CREATOR, MarketSnapshot(), OracleSnapshot())

    assert {c.id: c.status for c in checks} == {"v3-pool": "warn", "oracle-v3": "info"}
    assert context["v3PoolAddress"] is None


def test_vault_report_pricing_section(chain: FakeChain, config: ReportConfig, reader: ChainReader) -> None:
    d = deploy_vault(chain)
    seed_pool(chain, config)
    chain.set_view(d.strategy, abi.LP_STRATEGY_POOL_VAULT, abi.ZERO_ADDRESS)
    chain.set_view(d.strategy, abi.LENDING_STRATEGY_POOL, AJNA_POOL)
    chain.set_view(d.strategy, abi.LENDING_STRATEGY_BUCKET, 4100)
    chain.set_view(d.oracle, abi.ORACLE_V3_POOL_CONFIGURED, False)

    report = asyncio.run(VaultReportService(config, reader).build_vault_report(d.vault))

    pricing = {c.id: c.status for c in report.section("pricing").checks}
    assert pricing["v3-pool"] == "pass"
    assert pricing["oracle-v3"] == "warn"
    assert pricing["ajna-bucket-match"] == "warn"
    assert report.section("strategies").check("strategy-0").label == "Lending strategy (Ajna)"
    assert report.context["ajnaStrategyAddress"] == d.strategy
    assert report.context["ajnaBucketIndex"] == "4100"
    assert report.context["ajnaSuggestedBucketIndex"] == "4136"
    assert [c.id for c in report.all_checks() if c.status == "fail"] == []
