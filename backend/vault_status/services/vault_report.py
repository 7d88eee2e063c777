"""
VaultReportService: end-to-end verification of one deployed vault.

The report walks the contract role graph outward from the vault:

1. vault basics (owner, creator coin, gauge controller, name, symbol,
   strategy list);
2. gauge controller bytecode; without it nothing downstream is read;
3. share token, wrapper and oracle resolved from the gauge, then each of
   their own pointers;
4. the fixed wiring checklist;
5. CREATE2 predictions recomputed from the deployment salts;
6. yield strategies (plus market pricing for the creator coin).

Reads inside a step are batched; steps without a data dependency run
concurrently. A rate-limited read anywhere aborts the build and returns the
single-section "try again" report instead.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from eth_utils import to_checksum_address

from vault_status.chain.abi import (
    GAUGE_CREATOR_COIN,
    GAUGE_CREATOR_TREASURY,
    GAUGE_ORACLE,
    GAUGE_PROTOCOL_TREASURY,
    GAUGE_SHARE_OFT,
    GAUGE_VAULT,
    GAUGE_WRAPPER,
    LENDING_STRATEGY_BUCKET,
    LENDING_STRATEGY_COLLATERAL,
    LENDING_STRATEGY_FACTORY,
    LENDING_STRATEGY_POOL,
    LP_STRATEGY_POOL_VAULT,
    NAME,
    OWNER,
    SHARE_GAUGE_CONTROLLER,
    SHARE_IS_MINTER,
    SHARE_VAULT,
    STRATEGY_ASSET,
    STRATEGY_IS_ACTIVE,
    SYMBOL,
    VAULT_CREATOR_COIN,
    VAULT_GAUGE_CONTROLLER,
    VAULT_GET_STRATEGIES,
    VAULT_WHITELIST_GETTERS,
    WRAPPER_CREATOR_COIN,
    WRAPPER_SHARE_OFT,
    WRAPPER_VAULT,
    ZERO_ADDRESS,
)
from vault_status.chain.create2 import predict_contract
from vault_status.chain.reader import CallResult, ChainReader, ContractCall, raise_if_rate_limited
from vault_status.chain.salts import SaltSet, derive_oft_bootstrap_salt, derive_salts, derive_share_token_salt
from vault_status.chain.transport import RateLimitedError
from vault_status.core.config import ReportConfig
from vault_status.models.report_model import Check, Report
from vault_status.services.pricing_checks import LendingPosition, build_pricing_checks, read_market, read_oracle
from vault_status.services.report_service import (
    VAULT_SECTIONS,
    assemble_report,
    make_check,
    rate_limited_report,
)
from vault_status.validation.wiring import (
    classify_strategy,
    compare_address,
    evaluate_wiring,
    is_set_address,
    strategy_label,
    strategy_status,
)

logger = logging.getLogger(__name__)

STRATEGY_READS = (
    STRATEGY_IS_ACTIVE,
    STRATEGY_ASSET,
    LP_STRATEGY_POOL_VAULT,
    LENDING_STRATEGY_POOL,
    LENDING_STRATEGY_COLLATERAL,
    LENDING_STRATEGY_FACTORY,
    LENDING_STRATEGY_BUCKET,
    OWNER,
)


def _address_or_none(value: Any) -> Optional[str]:
    return value if is_set_address(value) else None


async def gather_reads(*aws) -> List[Any]:
    """
    Run sibling reads concurrently and let every one of them finish.

    A rate limit anywhere wins over other failures so the caller always
    degrades to the rate-limit report; otherwise the first error is raised.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    errors = [r for r in results if isinstance(r, BaseException)]
    for error in errors:
        if isinstance(error, RateLimitedError):
            raise error
    if errors:
        raise errors[0]
    return results


@dataclass
class VaultGraph:
    """Everything resolved about one vault's contract role graph."""

    vault: str
    owner: str
    creator_token: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    creator_symbol: Optional[str] = None

    gauge: Optional[str] = None
    gauge_has_code: bool = False
    gauge_vault: Optional[str] = None
    gauge_creator_coin: Optional[str] = None
    creator_treasury: Optional[str] = None
    protocol_treasury: Optional[str] = None

    share_oft: Optional[str] = None
    share_owner: Optional[str] = None
    share_name: Optional[str] = None
    share_symbol: Optional[str] = None
    share_vault: Optional[str] = None
    share_gauge: Optional[str] = None
    share_minter_ok: Optional[bool] = None

    wrapper: Optional[str] = None
    wrapper_owner: Optional[str] = None
    wrapper_vault: Optional[str] = None
    wrapper_coin: Optional[str] = None
    wrapper_share: Optional[str] = None
    wrapper_whitelisted: Optional[bool] = None

    oracle: Optional[str] = None

    # Bytecode presence for shareOFT / wrapper / oracle, keyed by role.
    has_code: Dict[str, bool] = field(default_factory=dict)

    def wiring_values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {
            "vault": self.vault,
            "creatorToken": self.creator_token,
            "gauge": self.gauge if self.gauge_has_code else None,
            "shareOFT": self.share_oft,
            "wrapper": self.wrapper,
            "gauge.vault": self.gauge_vault,
            "gauge.creatorCoin": self.gauge_creator_coin,
            "shareOFT.vault": self.share_vault,
            "shareOFT.gaugeController": self.share_gauge,
            "wrapper.vault": self.wrapper_vault,
            "wrapper.creatorCoin": self.wrapper_coin,
            "wrapper.shareOFT": self.wrapper_share,
            "shareOFT.isMinter(wrapper)": self.share_minter_ok,
            "vault.whitelist(wrapper)": self.wrapper_whitelisted,
        }
        return {k: v for k, v in values.items() if v is not None}


@dataclass
class StrategyState:
    address: str
    weight: int = 0
    is_active: Optional[bool] = None
    asset: Optional[str] = None
    pool_vault: Optional[str] = None
    lending_pool: Optional[str] = None
    collateral: Optional[str] = None
    factory: Optional[str] = None
    bucket_index: Optional[int] = None
    owner: Optional[str] = None

    @property
    def kind(self) -> str:
        return classify_strategy(self.pool_vault, self.lending_pool)


class VaultReportService:
    def __init__(self, config: ReportConfig, reader: ChainReader):
        self.config = config
        self.reader = reader

    async def build_vault_report(self, vault_address: str) -> Report:
        vault = to_checksum_address(vault_address)
        try:
            return await self._build(vault)
        except RateLimitedError as e:
            logger.warning("Vault report for %s aborted, RPC rate limited (%s)", vault, e)
            return rate_limited_report(self.config.chain_id)

    # ── Orchestration ────────────────────────────────────────────────────────

    async def _build(self, vault: str) -> Report:
        basics = raise_if_rate_limited(await self.reader.batch_read([
            ContractCall(vault, OWNER),
            ContractCall(vault, VAULT_CREATOR_COIN),
            ContractCall(vault, VAULT_GAUGE_CONTROLLER),
            ContractCall(vault, NAME),
            ContractCall(vault, SYMBOL),
            ContractCall(vault, VAULT_GET_STRATEGIES),
        ]), "vault basics")

        owner = _address_or_none(basics[0].value_or())
        creator_token = _address_or_none(basics[1].value_or())
        if owner is None or creator_token is None:
            return self._unreadable_vault_report(vault, basics)

        graph = VaultGraph(
            vault=vault,
            owner=owner,
            creator_token=creator_token,
            name=basics[3].value_or(),
            symbol=basics[4].value_or(),
            gauge=_address_or_none(basics[2].value_or()),
        )
        listing = basics[5]

        symbol_result, graph.gauge_has_code = await gather_reads(
            self.reader.read_one(ContractCall(creator_token, SYMBOL)),
            self._has_code(graph.gauge),
        )
        raise_if_rate_limited([symbol_result], "creator symbol")
        graph.creator_symbol = symbol_result.value_or()
        if graph.gauge and not graph.gauge_has_code:
            logger.info("Gauge controller %s has no bytecode; skipping gauge-dependent reads", graph.gauge)

        _, strategies, market = await gather_reads(
            self._resolve_graph(graph),
            self._read_strategies(listing),
            read_market(self.reader, self.config, creator_token),
        )
        oracle = await read_oracle(self.reader, graph.oracle) if graph.has_code.get("oracle") else None

        lending = next(
            (
                LendingPosition(s.address, s.owner, s.bucket_index, s.collateral)
                for s in strategies
                if s.kind == "lending"
            ),
            None,
        )
        pricing_checks, pricing_context = build_pricing_checks(self.config, creator_token, market, oracle, lending)
        deterministic_checks, deterministic_context = await self._deterministic_checks(graph)

        checks_by_section = {
            "core": self._core_checks(graph),
            "wiring": evaluate_wiring(graph.wiring_values()),
            "deterministic": deterministic_checks,
            "pricing": pricing_checks,
            "strategies": self._strategy_checks(listing, strategies, creator_token),
        }
        verification = "partial" if any(c.status == "warn" for c in deterministic_checks) else "full"

        context = self._graph_context(graph)
        context.update(pricing_context)
        context.update(deterministic_context)
        context.update({
            "ajnaStrategyAddress": lending.strategy if lending else None,
            "ajnaStrategyOwner": lending.owner if lending else None,
            "ajnaBucketIndex": None if lending is None or lending.bucket_index is None else str(lending.bucket_index),
            "verification": verification,
        })
        return assemble_report(self.config.chain_id, VAULT_SECTIONS, checks_by_section, context)

    async def _has_code(self, address: Optional[str]) -> bool:
        if not address:
            return False
        result = await self.reader.read_code(address)
        raise_if_rate_limited([result], f"bytecode at {address}")
        return result.ok and len(result.value) > 0

    async def _resolve_graph(self, graph: VaultGraph) -> None:
        if not graph.gauge_has_code:
            return
        gauge = graph.gauge
        pointers = raise_if_rate_limited(await self.reader.batch_read([
            ContractCall(gauge, GAUGE_SHARE_OFT),
            ContractCall(gauge, GAUGE_WRAPPER),
            ContractCall(gauge, GAUGE_ORACLE),
            ContractCall(gauge, GAUGE_VAULT),
            ContractCall(gauge, GAUGE_CREATOR_COIN),
            ContractCall(gauge, GAUGE_CREATOR_TREASURY),
            ContractCall(gauge, GAUGE_PROTOCOL_TREASURY),
        ]), "gauge pointers")
        graph.share_oft, graph.wrapper, graph.oracle = (_address_or_none(r.value_or()) for r in pointers[:3])
        graph.gauge_vault, graph.gauge_creator_coin, graph.creator_treasury, graph.protocol_treasury = (
            r.value_or() for r in pointers[3:]
        )

        await gather_reads(
            self._read_share_token(graph),
            self._read_wrapper(graph),
            self._read_whitelist(graph),
            self._read_component_code(graph),
        )

    async def _read_share_token(self, graph: VaultGraph) -> None:
        share = graph.share_oft
        if not share:
            return
        calls = [
            ContractCall(share, OWNER),
            ContractCall(share, NAME),
            ContractCall(share, SYMBOL),
            ContractCall(share, SHARE_VAULT),
            ContractCall(share, SHARE_GAUGE_CONTROLLER),
        ]
        if graph.wrapper:
            calls.append(ContractCall(share, SHARE_IS_MINTER, (graph.wrapper,)))
        results = raise_if_rate_limited(await self.reader.batch_read(calls), "share token")
        graph.share_owner, graph.share_name, graph.share_symbol, graph.share_vault, graph.share_gauge = (
            r.value_or() for r in results[:5]
        )
        if len(results) > 5:
            graph.share_minter_ok = results[5].value_or()

    async def _read_wrapper(self, graph: VaultGraph) -> None:
        wrapper = graph.wrapper
        if not wrapper:
            return
        results = raise_if_rate_limited(await self.reader.batch_read([
            ContractCall(wrapper, OWNER),
            ContractCall(wrapper, WRAPPER_VAULT),
            ContractCall(wrapper, WRAPPER_CREATOR_COIN),
            ContractCall(wrapper, WRAPPER_SHARE_OFT),
        ]), "wrapper")
        graph.wrapper_owner, graph.wrapper_vault, graph.wrapper_coin, graph.wrapper_share = (
            r.value_or() for r in results
        )

    async def _read_whitelist(self, graph: VaultGraph) -> None:
        if not graph.wrapper:
            return
        results = raise_if_rate_limited(await self.reader.batch_read(
            [ContractCall(graph.vault, getter, (graph.wrapper,)) for getter in VAULT_WHITELIST_GETTERS]
        ), "vault whitelist")
        graph.wrapper_whitelisted = next((r.value for r in results if r.ok), None)

    async def _read_component_code(self, graph: VaultGraph) -> None:
        roles = [(role, addr) for role, addr in (
            ("shareOFT", graph.share_oft),
            ("wrapper", graph.wrapper),
            ("oracle", graph.oracle),
        ) if addr]
        results = await self.reader.read_code_many([addr for _, addr in roles])
        raise_if_rate_limited(results, "component bytecode")
        for (role, _), result in zip(roles, results):
            graph.has_code[role] = result.ok and len(result.value) > 0

    async def _read_strategies(self, listing: CallResult) -> List[StrategyState]:
        if not listing.ok:
            return []
        addresses, weights = list(listing.value[0]), list(listing.value[1])
        if not addresses:
            return []
        calls = [ContractCall(s, fn) for s in addresses for fn in STRATEGY_READS]
        results = raise_if_rate_limited(await self.reader.batch_read(calls), "strategy details")

        stride = len(STRATEGY_READS)
        states = []
        for i, address in enumerate(addresses):
            values = [r.value_or() for r in results[i * stride:(i + 1) * stride]]
            is_active, asset, pool_vault, lending_pool, collateral, factory, bucket_index, owner = values
            states.append(StrategyState(
                address=to_checksum_address(address),
                weight=int(weights[i]) if i < len(weights) else 0,
                is_active=is_active,
                asset=asset,
                pool_vault=pool_vault,
                lending_pool=lending_pool,
                collateral=collateral,
                factory=factory,
                bucket_index=bucket_index,
                owner=owner,
            ))
        return states

    # ── Sections ─────────────────────────────────────────────────────────────

    def _core_checks(self, graph: VaultGraph) -> List[Check]:
        href = self.config.explorer_href
        return [
            make_check("vault", "Vault", "pass", f"{graph.name or 'Vault'} ({graph.symbol or '—'})", href(graph.vault)),
            make_check("owner", "Vault owner", "info", graph.owner, href(graph.owner)),
            make_check(
                "creatorToken",
                "Creator coin",
                "info",
                f"{graph.creator_symbol or '—'} · {graph.creator_token}",
                href(graph.creator_token),
            ),
            self._gauge_check(graph),
            self._component_check(graph, "shareOFT", "Share token (ShareOFT)", graph.share_oft, "fail"),
            self._component_check(graph, "wrapper", "Wrapper", graph.wrapper, "fail"),
            self._component_check(graph, "oracle", "Oracle", graph.oracle, "warn"),
        ]

    def _gauge_check(self, graph: VaultGraph) -> Check:
        if not graph.gauge:
            return make_check("gauge", "Gauge controller", "fail", "vault.gaugeController is unset")
        href = self.config.explorer_href(graph.gauge)
        if not graph.gauge_has_code:
            return make_check("gauge", "Gauge controller", "fail", f"No bytecode at {graph.gauge}", href)
        return make_check("gauge", "Gauge controller", "pass", graph.gauge, href)

    def _component_check(self, graph: VaultGraph, role: str, label: str, address: Optional[str], absent: str) -> Check:
        if not graph.gauge_has_code:
            return make_check(role, label, absent, "Not resolved (gauge controller unavailable)")
        if not address:
            return make_check(role, label, absent, f"gauge.{role}() returned no address")
        href = self.config.explorer_href(address)
        if not graph.has_code.get(role):
            return make_check(role, label, absent, f"No bytecode at {address}", href)
        return make_check(role, label, "pass", address, href)

    def _strategy_checks(self, listing: CallResult, strategies: List[StrategyState], creator_token: str) -> List[Check]:
        label = "Yield strategies configured"
        if not listing.ok:
            return [make_check("strategies-unreadable", label, "warn", f"Could not read vault.getStrategies(): {listing.error}")]
        if not strategies:
            return [make_check("no-strategies", label, "warn", "No strategies are configured yet. This is optional.")]

        checks = [make_check("strategy-count", label, "pass", f"{len(strategies)} strategies")]
        for i, s in enumerate(strategies):
            extras = [f"{s.address} · weight {s.weight}"]
            for key, value in (
                ("active", None if s.is_active is None else str(s.is_active).lower()),
                ("asset", s.asset),
                ("charmVault", s.pool_vault),
                ("ajnaPool", s.lending_pool),
                ("collateral", s.collateral),
                ("factory", s.factory),
                ("bucket", s.bucket_index),
                ("owner", s.owner),
            ):
                if value is not None:
                    extras.append(f"{key}={value}")
            checks.append(make_check(
                f"strategy-{i}",
                strategy_label(s.kind, i),
                strategy_status(s.is_active, s.asset, creator_token),
                " · ".join(extras),
                self.config.explorer_href(s.address),
            ))
        return checks

    async def _deterministic_checks(self, graph: VaultGraph) -> Tuple[List[Check], Dict[str, Any]]:
        addresses = self.config.addresses
        try:
            salts = derive_salts(graph.creator_token, graph.owner, self.config.chain_id, self.config.deployment_version)
        except Exception as e:
            logger.exception("Salt derivation failed for %s", graph.vault)
            check = make_check("create2-salts", "Deployment salts", "warn", f"Could not derive salts: {e}")
            return [check], {"predictedAddresses": {}, "salts": None}

        bootstrapper = self._bootstrapper(salts)
        predicted: Dict[str, Optional[str]] = {}
        checks = []

        def compare(kind, check_id, label, live, deployer, salt, args, missing):
            check, address = self._compare_prediction(check_id, kind, label, live, deployer, salt, args, missing)
            predicted[kind] = address
            checks.append(check)

        compare(
            "vault", "create2-vault", "Vault", graph.vault,
            addresses.create2_deployer, salts.vault_salt,
            (graph.creator_token, bootstrapper, graph.name, graph.symbol),
            [n for n, v in (("vault name", graph.name), ("vault symbol", graph.symbol)) if v is None],
        )
        compare(
            "wrapper", "create2-wrapper", "Wrapper", graph.wrapper,
            addresses.create2_deployer, salts.wrapper_salt,
            (graph.creator_token, graph.vault, bootstrapper),
            [] if graph.wrapper else ["wrapper"],
        )

        share_missing = [n for n, v in (
            ("shareOFT", graph.share_oft),
            ("share name", graph.share_name),
            ("share symbol", graph.share_symbol),
        ) if v is None]
        share_salt = None
        if graph.share_symbol is not None:
            share_salt = derive_share_token_salt(graph.owner, graph.share_symbol, self.config.share_salt_version)
        registry, registry_problem = self._oft_bootstrap_registry()
        predicted["oft_bootstrap_registry"] = registry
        if registry_problem and self.config.creation_code.get("share_token"):
            predicted["share_token"] = None
            checks.append(make_check(
                "create2-share-token", "Share token matches CREATE2 prediction", "warn", registry_problem
            ))
        else:
            compare(
                "share_token", "create2-share-token", "Share token", graph.share_oft,
                addresses.universal_create2_deployer, share_salt,
                (graph.share_name, graph.share_symbol, registry, bootstrapper),
                share_missing,
            )

        gauge_live = graph.gauge if graph.gauge_has_code else None
        compare(
            "gauge", "create2-gauge", "Gauge controller", gauge_live,
            addresses.create2_deployer, salts.gauge_salt,
            (
                graph.share_oft,
                _address_or_none(graph.creator_treasury) or graph.owner,
                _address_or_none(graph.protocol_treasury) or addresses.protocol_treasury,
                bootstrapper,
            ),
            [n for n, v in (("gauge controller", gauge_live), ("shareOFT", graph.share_oft)) if v is None],
        )
        compare(
            "oracle", "create2-oracle", "Oracle", graph.oracle,
            addresses.create2_deployer, salts.oracle_salt,
            (addresses.registry, addresses.price_feed, graph.creator_symbol, bootstrapper),
            [n for n, v in (("oracle", graph.oracle), ("creator symbol", graph.creator_symbol)) if v is None],
        )
        checks.append(await self._cca_check(graph, salts, bootstrapper, predicted))

        context = {
            "salts": salts.as_hex(),
            "predictedBootstrapper": bootstrapper,
            "predictedAddresses": predicted,
        }
        return checks, context

    def _bootstrapper(self, salts: SaltSet) -> str:
        """Predicted bootstrapper when its bytecode is known, else the activation batcher."""
        code = self.config.creation_code.get("bootstrapper")
        if code:
            try:
                return predict_contract(self.config.addresses.create2_deployer, salts.bootstrapper_salt, "bootstrapper", code)
            except ValueError as e:
                logger.warning("Could not predict bootstrapper address: %s", e)
        return self.config.addresses.vault_activation_batcher

    def _oft_bootstrap_registry(self) -> Tuple[Optional[str], Optional[str]]:
        """Predicted OFTBootstrapRegistry address, or None and the reason it is unknown."""
        code = self.config.creation_code.get("oft_bootstrap_registry")
        if not code:
            return None, "Creation bytecode for oft_bootstrap_registry not configured; not verified"
        try:
            address = predict_contract(
                self.config.addresses.universal_create2_deployer,
                derive_oft_bootstrap_salt(),
                "oft_bootstrap_registry",
                code,
            )
        except ValueError as e:
            logger.warning("Could not predict OFTBootstrapRegistry address: %s", e)
            return None, f"Could not derive oft_bootstrap_registry address: {e}"
        return address, None

    def _compare_prediction(self, check_id, kind, label, live, deployer, salt, args, missing) -> Tuple[Check, Optional[str]]:
        title = f"{label} matches CREATE2 prediction"
        code = self.config.creation_code.get(kind)
        if not code:
            return make_check(check_id, title, "warn", f"Creation bytecode for {kind} not configured; not verified"), None
        if missing:
            return make_check(check_id, title, "warn", f"{', '.join(missing)} not resolved; not verified"), None
        try:
            predicted = predict_contract(deployer, salt, kind, code, args)
        except Exception as e:
            logger.warning("CREATE2 prediction for %s failed: %s", kind, e)
            return make_check(check_id, title, "warn", f"Could not derive {kind} address: {e}"), None

        status = compare_address(live, predicted)
        if status == "pass":
            details = f"{predicted} (deployer {deployer})"
        else:
            details = f"live {live} · predicted {predicted}"
        return make_check(check_id, title, status, details, self.config.explorer_href(predicted)), predicted

    async def _cca_check(self, graph: VaultGraph, salts: SaltSet, bootstrapper: str, predicted: Dict) -> Check:
        title = "Launch strategy (CCA) deployed at CREATE2 prediction"
        code = self.config.creation_code.get("cca")
        predicted["cca"] = None
        if not code:
            return make_check("create2-cca", title, "warn", "Creation bytecode for cca not configured; not verified")
        if not graph.share_oft:
            return make_check("create2-cca", title, "warn", "shareOFT not resolved; not verified")
        try:
            address = predict_contract(
                self.config.addresses.create2_deployer,
                salts.cca_salt,
                "cca",
                code,
                (graph.share_oft, ZERO_ADDRESS, graph.vault, graph.vault, bootstrapper),
            )
        except Exception as e:
            logger.warning("CREATE2 prediction for cca failed: %s", e)
            return make_check("create2-cca", title, "warn", f"Could not derive cca address: {e}")
        predicted["cca"] = address
        href = self.config.explorer_href(address)
        if await self._has_code(address):
            return make_check("create2-cca", title, "pass", address, href)
        return make_check("create2-cca", title, "info", f"No contract at {address} (launch may not have started)", href)

    # ── Context ──────────────────────────────────────────────────────────────

    def _graph_context(self, graph: VaultGraph) -> Dict[str, Any]:
        return {
            "vault": graph.vault,
            "owner": graph.owner,
            "vaultOwner": graph.owner,
            "creatorToken": graph.creator_token,
            "vaultName": graph.name,
            "vaultSymbol": graph.symbol,
            "creatorSymbol": graph.creator_symbol,
            "gaugeAddress": graph.gauge,
            "gaugeHasCode": graph.gauge_has_code,
            "shareOFTAddress": graph.share_oft,
            "shareOftOwner": graph.share_owner,
            "shareVault": graph.share_vault,
            "shareGaugeController": graph.share_gauge,
            "shareMinterOk": graph.share_minter_ok,
            "shareName": graph.share_name,
            "shareSymbol": graph.share_symbol,
            "wrapperAddress": graph.wrapper,
            "wrapperOwner": graph.wrapper_owner,
            "wrapperWhitelisted": graph.wrapper_whitelisted,
            "oracleAddress": graph.oracle,
            "creatorTreasury": graph.creator_treasury,
            "protocolTreasury": graph.protocol_treasury,
        }

    def _unreadable_vault_report(self, vault: str, basics: List[CallResult]) -> Report:
        owner, creator_token = basics[0].value_or(), basics[1].value_or()
        check = make_check(
            "vault",
            "Vault",
            "fail",
            f"Vault is not readable (or not a CreatorOVault): owner={owner or '—'} · creatorCoin={creator_token or '—'}",
            self.config.explorer_href(vault),
        )
        context = {"vault": vault, "owner": owner, "creatorToken": creator_token, "verification": "partial"}
        return assemble_report(self.config.chain_id, VAULT_SECTIONS, {"core": [check]}, context)
