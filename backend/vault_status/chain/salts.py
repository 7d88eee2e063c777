"""Deterministic deployment salts.

Two independent families:
  - vault family, keyed by (creator token, owner, chain id), one salt per role;
  - universal share-token family, keyed by (owner, lower-cased share symbol)
    and a versioned tag, so the share token lands on the same address on
    every chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from eth_abi.packed import encode_packed
from eth_utils import keccak, to_checksum_address

ROLE_LABELS = ("vault", "wrapper", "gauge", "cca", "oracle", "bootstrapper")

OFT_BOOTSTRAP_TAG = "CreatorVault:OFTBootstrapRegistry:v1"


@dataclass(frozen=True)
class SaltSet:
    base_salt: bytes
    vault_salt: bytes
    wrapper_salt: bytes
    gauge_salt: bytes
    cca_salt: bytes
    oracle_salt: bytes
    bootstrapper_salt: bytes

    def for_role(self, label: str) -> bytes:
        if label not in ROLE_LABELS:
            raise ValueError(f"unknown role label: {label!r}")
        return getattr(self, f"{label}_salt")

    def as_hex(self) -> dict:
        return {k: "0x" + v.hex() for k, v in self.__dict__.items()}


def derive_base_salt(
    creator_token: str, owner: str, chain_id: int, deploy_tag: Optional[str] = None
) -> bytes:
    """keccak256(abi.encodePacked(creatorToken, owner, chainId[, "CreatorVault:deploy:<tag>"]))"""
    types = ["address", "address", "uint256"]
    values = [to_checksum_address(creator_token), to_checksum_address(owner), int(chain_id)]
    if deploy_tag:
        types.append("string")
        values.append(f"CreatorVault:deploy:{deploy_tag}")
    return keccak(encode_packed(types, values))


def derive_role_salt(base_salt: bytes, label: str) -> bytes:
    if label not in ROLE_LABELS:
        raise ValueError(f"unknown role label: {label!r}")
    if len(base_salt) != 32:
        raise ValueError("base salt must be 32 bytes")
    return keccak(encode_packed(["bytes32", "string"], [base_salt, label]))


def derive_salts(
    creator_token: str, owner: str, chain_id: int, deploy_tag: Optional[str] = None
) -> SaltSet:
    base = derive_base_salt(creator_token, owner, chain_id, deploy_tag)
    return SaltSet(base_salt=base, **{f"{label}_salt": derive_role_salt(base, label) for label in ROLE_LABELS})


def derive_share_token_salt(owner: str, share_symbol: str, version: str = "v1") -> bytes:
    base = keccak(encode_packed(["address", "string"], [to_checksum_address(owner), share_symbol.lower()]))
    return keccak(encode_packed(["bytes32", "string"], [base, f"CreatorShareOFT:{version}"]))


def derive_oft_bootstrap_salt() -> bytes:
    return keccak(encode_packed(["string"], [OFT_BOOTSTRAP_TAG]))
