"""
WiringValidator: the fixed checklist of contract-graph edges.

The checklist is data: every expected "A points to B" edge and every role
assertion is listed once below and evaluated against a flat mapping of
resolved values, e.g.::

    {"vault": "0x…", "gauge": "0x…", "gauge.vault": "0x…",
     "shareOFT.isMinter(wrapper)": True, ...}

A missing key (or None) means the value could not be read. Every entry is
evaluated; a failure never hides the entries after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from vault_status.chain.abi import ZERO_ADDRESS
from vault_status.models.report_model import Check


def same_address(a: Optional[str], b: Optional[str]) -> Optional[bool]:
    if not a or not b:
        return None
    return a.lower() == b.lower()


def is_zero_address(a: Optional[str]) -> bool:
    return bool(a) and a.lower() == ZERO_ADDRESS


def is_set_address(a: Any) -> bool:
    return isinstance(a, str) and a.startswith("0x") and len(a) == 42 and not is_zero_address(a)


def compare_address(actual: Optional[str], expected: Optional[str]) -> str:
    """pass/fail on case-insensitive equality; warn when either side is unknown."""
    verdict = same_address(actual, expected)
    if verdict is None:
        return "warn"
    return "pass" if verdict else "fail"


@dataclass(frozen=True)
class AddressEdge:
    id: str
    label: str
    actual: str
    expected: str
    # Legacy deployments may leave the pointer unset; report it as a warning.
    unset_is_warn: bool = False

    @property
    def subject(self) -> str:
        return self.actual.split(".", 1)[0]


@dataclass(frozen=True)
class FlagAssertion:
    id: str
    label: str
    key: str
    requires: tuple = ()


WIRING_EDGES = (
    AddressEdge("gauge-vault", "Gauge points to vault", "gauge.vault", "vault"),
    AddressEdge("gauge-coin", "Gauge points to creator coin", "gauge.creatorCoin", "creatorToken"),
    AddressEdge("share-vault", "Share token wired to vault", "shareOFT.vault", "vault", unset_is_warn=True),
    AddressEdge("share-gauge", "Share token wired to gauge", "shareOFT.gaugeController", "gauge", unset_is_warn=True),
    AddressEdge("wrapper-vault", "Wrapper points to vault", "wrapper.vault", "vault"),
    AddressEdge("wrapper-coin", "Wrapper points to creator coin", "wrapper.creatorCoin", "creatorToken"),
    AddressEdge("wrapper-share", "Wrapper points to share token", "wrapper.shareOFT", "shareOFT"),
)

ROLE_ASSERTIONS = (
    FlagAssertion(
        "share-minter",
        "Wrapper is approved minter on share token",
        "shareOFT.isMinter(wrapper)",
        requires=("shareOFT", "wrapper"),
    ),
    FlagAssertion(
        "vault-whitelist",
        "Wrapper is whitelisted on vault",
        "vault.whitelist(wrapper)",
        requires=("wrapper",),
    ),
)


def check_edge(edge: AddressEdge, values: Mapping[str, Any]) -> Check:
    actual = values.get(edge.actual)
    expected = values.get(edge.expected)

    if actual is None:
        if not is_set_address(values.get(edge.subject)):
            details = f"{edge.subject} not resolved; {edge.actual} not checked"
        else:
            details = f"Could not read {edge.actual}"
        return Check(id=edge.id, label=edge.label, status="warn", details=details)

    if edge.unset_is_warn and is_zero_address(actual):
        return Check(
            id=edge.id,
            label=edge.label,
            status="warn",
            details=f"{edge.actual} is unset. Recommended: set it to the {edge.expected} address.",
        )

    status = compare_address(actual, expected)
    if status == "warn":
        details = f"{edge.actual} = {actual} · {edge.expected} unknown"
    elif status == "fail":
        details = f"{edge.actual} = {actual} · expected {edge.expected} = {expected}"
    else:
        details = f"{edge.actual} = {actual}"
    return Check(id=edge.id, label=edge.label, status=status, details=details)


def check_flag(assertion: FlagAssertion, values: Mapping[str, Any]) -> Check:
    missing = [r for r in assertion.requires if not is_set_address(values.get(r))]
    if missing:
        return Check(
            id=assertion.id,
            label=assertion.label,
            status="warn",
            details=f"{', '.join(missing)} not resolved; {assertion.key} not checked",
        )
    flag = values.get(assertion.key)
    if flag is None:
        return Check(id=assertion.id, label=assertion.label, status="warn", details=f"Could not read {assertion.key}")
    return Check(
        id=assertion.id,
        label=assertion.label,
        status="pass" if flag else "fail",
        details=f"{assertion.key}={str(bool(flag)).lower()}",
    )


def evaluate_wiring(values: Mapping[str, Any]) -> List[Check]:
    checks = [check_edge(edge, values) for edge in WIRING_EDGES]
    checks.extend(check_flag(a, values) for a in ROLE_ASSERTIONS)
    return checks


# ── Strategies ────────────────────────────────────────────────────────────────

STRATEGY_KIND_LABELS = {
    "lp": "LP strategy (Charm)",
    "lending": "Lending strategy (Ajna)",
}


def classify_strategy(pool_vault: Optional[str], lending_pool: Optional[str]) -> str:
    """Label-only heuristic; never affects the verdict."""
    if is_set_address(pool_vault):
        return "lp"
    if is_set_address(lending_pool):
        return "lending"
    return "unclassified"


def strategy_label(kind: str, index: int) -> str:
    return STRATEGY_KIND_LABELS.get(kind, f"Strategy #{index + 1}")


def strategy_status(is_active: Optional[bool], asset: Optional[str], creator_token: str) -> str:
    asset_ok = same_address(asset, creator_token)
    if asset_ok is False:
        return "fail"
    if is_active is not True or asset_ok is None:
        return "warn"
    return "pass"
