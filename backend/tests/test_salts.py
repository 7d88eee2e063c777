"""Deployment salt derivation."""

import pytest
from eth_utils import keccak

from vault_status.chain.salts import (
    ROLE_LABELS,
    derive_base_salt,
    derive_oft_bootstrap_salt,
    derive_role_salt,
    derive_salts,
    derive_share_token_salt,
)

CREATOR = "0x00000000000000000000000000000000000CcCcC"
OWNER = "0x0000000000000000000000000000000000000AaA"
BASE_CHAIN = 8453


def _raw(address: str) -> bytes:
    return bytes.fromhex(address[2:])


def test_base_salt_is_packed_keccak() -> None:
    expected = keccak(_raw(CREATOR) + _raw(OWNER) + BASE_CHAIN.to_bytes(32, "big"))
    assert derive_base_salt(CREATOR, OWNER, BASE_CHAIN) == expected


def test_base_salt_appends_deploy_tag_when_configured() -> None:
    expected = keccak(_raw(CREATOR) + _raw(OWNER) + BASE_CHAIN.to_bytes(32, "big") + b"CreatorVault:deploy:v3")
    assert derive_base_salt(CREATOR, OWNER, BASE_CHAIN, "v3") == expected
    assert derive_base_salt(CREATOR, OWNER, BASE_CHAIN, "v3") != derive_base_salt(CREATOR, OWNER, BASE_CHAIN)


def test_salts_are_deterministic_and_case_insensitive() -> None:
    first = derive_salts(CREATOR, OWNER, BASE_CHAIN)
    again = derive_salts(CREATOR.lower(), OWNER.lower(), BASE_CHAIN)
    assert first == again
    assert first.as_hex() == again.as_hex()


def test_role_salts_follow_label_packing() -> None:
    salts = derive_salts(CREATOR, OWNER, BASE_CHAIN)
    for label in ROLE_LABELS:
        assert salts.for_role(label) == keccak(salts.base_salt + label.encode())
        assert derive_role_salt(salts.base_salt, label) == salts.for_role(label)
    assert len({salts.for_role(label) for label in ROLE_LABELS}) == len(ROLE_LABELS)


def test_chain_id_changes_every_salt() -> None:
    base = derive_salts(CREATOR, OWNER, BASE_CHAIN)
    other = derive_salts(CREATOR, OWNER, 1)
    assert base.base_salt != other.base_salt
    assert base.vault_salt != other.vault_salt


@pytest.mark.parametrize("label", ["Vault", "share", "", "bootstrap"])
def test_unknown_role_label_is_rejected(label: str) -> None:
    base = derive_base_salt(CREATOR, OWNER, BASE_CHAIN)
    with pytest.raises(ValueError):
        derive_role_salt(base, label)


def test_role_salt_requires_32_byte_base() -> None:
    with pytest.raises(ValueError):
        derive_role_salt(b"\x01" * 31, "vault")


def test_share_token_salt_lowercases_symbol() -> None:
    inner = keccak(_raw(OWNER) + b"wscrtr")
    expected = keccak(inner + b"CreatorShareOFT:v1")
    assert derive_share_token_salt(OWNER, "wsCRTR") == expected
    assert derive_share_token_salt(OWNER, "WSCRTR") == expected
    assert derive_share_token_salt(OWNER, "wsCRTR", "v2") != expected


def test_oft_bootstrap_salt_is_fixed() -> None:
    assert derive_oft_bootstrap_salt() == keccak(text="CreatorVault:OFTBootstrapRegistry:v1")
