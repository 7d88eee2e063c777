"""CREATE2 address prediction and per-contract init code construction."""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Union

from eth_abi import encode
from eth_utils import decode_hex, keccak, to_canonical_address, to_checksum_address

# Constructor argument types per contract kind. The order is load-bearing: a
# swapped or retyped argument still produces a valid-looking, wrong address.
CONSTRUCTOR_TYPES: Mapping[str, tuple] = {
    "vault": ("address", "address", "string", "string"),        # token, bootstrapper, name, symbol
    "wrapper": ("address", "address", "address"),               # token, vault, owner
    "share_token": ("string", "string", "address", "address"),  # name, symbol, OFT bootstrap registry, owner
    "gauge": ("address", "address", "address", "address"),      # share token, creator treasury, protocol treasury, owner
    "oracle": ("address", "address", "string", "address"),      # registry, price feed, symbol, owner
    "cca": ("address", "address", "address", "address", "address"),  # share token, 0x0, vault, vault, owner
    "bootstrapper": (),
    "oft_bootstrap_registry": (),
}

HexOrBytes = Union[str, bytes]


def _as_bytes(value: HexOrBytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return decode_hex(value)


def predict_address(deployer: str, salt: HexOrBytes, init_code: HexOrBytes) -> str:
    """keccak256(0xff ++ deployer ++ salt ++ keccak256(init_code))[12:]"""
    salt_bytes = _as_bytes(salt)
    if len(salt_bytes) != 32:
        raise ValueError(f"salt must be 32 bytes, got {len(salt_bytes)}")
    code_hash = keccak(_as_bytes(init_code))
    digest = keccak(b"\xff" + to_canonical_address(deployer) + salt_bytes + code_hash)
    return to_checksum_address(digest[12:])


def encode_constructor_args(kind: str, args: Sequence[Any]) -> bytes:
    try:
        types = CONSTRUCTOR_TYPES[kind]
    except KeyError:
        raise ValueError(f"unknown contract kind: {kind!r}") from None
    if len(args) != len(types):
        raise ValueError(f"{kind} constructor takes {len(types)} args, got {len(args)}")
    if not types:
        return b""
    values = [to_checksum_address(a) if t == "address" else a for t, a in zip(types, args)]
    return encode(list(types), values)


def build_init_code(kind: str, creation_code: HexOrBytes, args: Sequence[Any] = ()) -> bytes:
    code = _as_bytes(creation_code)
    if not code:
        raise ValueError(f"creation bytecode for {kind} is empty")
    return code + encode_constructor_args(kind, args)


def predict_contract(deployer: str, salt: HexOrBytes, kind: str, creation_code: HexOrBytes, args: Sequence[Any] = ()) -> str:
    return predict_address(deployer, salt, build_init_code(kind, creation_code, args))
