"""Report assembly helpers shared by the protocol and vault reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from vault_status.models.report_model import Check, CheckSection, Report

# (id, title, description) in display order.
VAULT_SECTIONS = (
    ("core", "Vault overview", "Identity + core contract addresses."),
    ("wiring", "Wiring checks", "Read-only checks to confirm contracts are connected correctly."),
    (
        "deterministic",
        "Deterministic addresses",
        "Recomputes each CREATE2 address from the deployment salts and compares it to the live contract.",
    ),
    ("pricing", "Market pricing (V3) + Ajna bucket", "Reads the CREATOR/USDC Uniswap V3 pool and suggests an Ajna bucket."),
    ("strategies", "Yield strategy checks", "Verifies the vault's configured strategies and basic health signals."),
)

PROTOCOL_SECTIONS = (
    ("server-env", "Server environment", "RPC endpoints and settings the status reports depend on."),
    ("shared-infra", "Shared infrastructure", "Protocol-wide singleton contracts; each must have deployed bytecode."),
)

RATE_LIMIT_SECTION = ("rate-limit", "RPC rate limited", "The RPC endpoint throttled this report. Nothing was verified.")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def make_check(
    check_id: str,
    label: str,
    status: str,
    details: Optional[str] = None,
    href: Optional[str] = None,
) -> Check:
    return Check(id=check_id, label=label, status=status, details=details, href=href)


def assemble_sections(layout: Sequence[tuple], checks_by_section: Dict[str, List[Check]]) -> List[CheckSection]:
    """Order sections by `layout`; sections without checks are dropped."""
    sections = []
    for section_id, title, description in layout:
        checks = checks_by_section.get(section_id) or []
        if not checks:
            continue
        sections.append(CheckSection(id=section_id, title=title, description=description, checks=list(checks)))
    return sections


def assemble_report(
    chain_id: int,
    layout: Sequence[tuple],
    checks_by_section: Dict[str, List[Check]],
    context: Optional[Dict[str, Any]] = None,
) -> Report:
    return Report(
        chain_id=chain_id,
        generated_at=utc_now_iso(),
        sections=assemble_sections(layout, checks_by_section),
        context=context,
    )


def rate_limited_report(chain_id: int, detail: str = "") -> Report:
    section_id, title, description = RATE_LIMIT_SECTION
    message = "Rate limited by RPC. Try again shortly."
    if detail:
        message = f"{message} ({detail})"
    check = make_check("rate-limited", "RPC rate limit", "warn", message)
    return Report(
        chain_id=chain_id,
        generated_at=utc_now_iso(),
        sections=[CheckSection(id=section_id, title=title, description=description, checks=[check])],
    )
