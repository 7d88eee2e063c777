"""Protocol report: bytecode presence for the protocol-wide singletons."""

from __future__ import annotations

import logging
from typing import List, Optional

from vault_status.chain.reader import ChainReader, any_rate_limited
from vault_status.core.config import PUBLIC_BASE_RPC, ReportConfig, Settings
from vault_status.models.report_model import Check, Report
from vault_status.services.report_service import (
    PROTOCOL_SECTIONS,
    assemble_report,
    make_check,
    rate_limited_report,
)
from vault_status.validation.wiring import is_set_address

logger = logging.getLogger(__name__)

# (ProtocolAddresses attribute, label) in display order.
INFRA_CONTRACTS = (
    ("registry", "Registry"),
    ("factory", "Factory"),
    ("create2_deployer", "CREATE2 deployer"),
    ("universal_create2_deployer", "Universal CREATE2 deployer (bytecode store)"),
    ("vault_activation_batcher", "VaultActivationBatcher"),
    ("pool_manager", "Uniswap V4 PoolManager"),
    ("tax_hook", "TaxHook"),
    ("price_feed", "Chainlink ETH/USD price feed"),
    ("usdc", "USDC (stable asset)"),
    ("lending_pool_factory", "Ajna ERC20 pool factory"),
)


def environment_checks(settings: Settings) -> List[Check]:
    read_rpc = settings.effective_read_rpc_url
    return [
        make_check(
            "base_rpc",
            "BASE_RPC_URL",
            "pass" if settings.rpc_url else "warn",
            "Configured" if settings.rpc_url else f"Not set (using fallback for reads: {read_rpc})",
        ),
        make_check(
            "base_read_rpc",
            "BASE_READ_RPC_URL",
            "pass" if settings.read_rpc_url else "info",
            "Configured" if settings.read_rpc_url else f"Not set (reads use: {read_rpc})",
        ),
        make_check(
            "base_logs_rpc",
            "BASE_LOGS_RPC_URL",
            "pass" if settings.logs_rpc_url else "warn",
            "Configured"
            if settings.logs_rpc_url
            else "Not set (log-heavy endpoints may be slower / rate-limited on public RPCs)",
        ),
        make_check(
            "public_rpc",
            "Read endpoint",
            "warn" if read_rpc == PUBLIC_BASE_RPC else "pass",
            "Public endpoint; expect rate limits" if read_rpc == PUBLIC_BASE_RPC else "Private endpoint",
        ),
        make_check(
            "creation_code",
            "CREATION_CODE_PATH",
            "pass" if settings.creation_code_path else "warn",
            "Configured"
            if settings.creation_code_path
            else "Not set (deterministic address checks will be skipped)",
        ),
    ]


class ProtocolReportService:
    def __init__(self, config: ReportConfig, reader: ChainReader, settings: Optional[Settings] = None):
        self.config = config
        self.reader = reader
        self.settings = settings

    async def build_protocol_report(self) -> Report:
        addresses = self.config.addresses
        items = [(attr, label, getattr(addresses, attr, "")) for attr, label in INFRA_CONTRACTS]
        readable = [value for _, _, value in items if is_set_address(value)]

        code_results = await self.reader.read_code_many(readable)
        if any_rate_limited(code_results):
            logger.warning("Protocol report aborted: RPC rate limited")
            return rate_limited_report(self.config.chain_id)
        code_by_address = dict(zip(readable, code_results))

        infra_checks = []
        for attr, label, value in items:
            if not is_set_address(value):
                infra_checks.append(
                    make_check(attr, label, "fail", f"Missing/invalid address: {value or '(empty)'}")
                )
                continue
            result = code_by_address[value]
            has_code = result.ok and len(result.value) > 0
            if has_code:
                details = value
            elif result.ok:
                details = f"No bytecode at {value}"
            else:
                details = f"Could not read bytecode at {value}: {result.error}"
            infra_checks.append(
                make_check(attr, label, "pass" if has_code else "fail", details, self.config.explorer_href(value))
            )

        checks_by_section = {"shared-infra": infra_checks}
        if self.settings is not None:
            checks_by_section["server-env"] = environment_checks(self.settings)
        return assemble_report(self.config.chain_id, PROTOCOL_SECTIONS, checks_by_section)
