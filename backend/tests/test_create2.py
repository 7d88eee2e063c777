"""CREATE2 address prediction against the published EIP-1014 vectors."""

import pytest
from eth_abi import encode
from eth_utils import keccak, to_checksum_address

from vault_status.chain.create2 import (
    CONSTRUCTOR_TYPES,
    build_init_code,
    encode_constructor_args,
    predict_address,
    predict_contract,
)

ZERO_SALT = "0x" + "00" * 32
CAFEBABE_SALT = "0x" + "00" * 28 + "cafebabe"

EIP1014_VECTORS = [
    ("0x0000000000000000000000000000000000000000", ZERO_SALT, "0x00",
     "0x4D1A2e2bB4F88F0250f26Ffff098B0b30B26BF38"),
    ("0xdeadbeef00000000000000000000000000000000", ZERO_SALT, "0x00",
     "0xB928f69Bb1D91Cd65274e3c79d8986362984fDA3"),
    ("0xdeadbeef00000000000000000000000000000000",
     "0x000000000000000000000000feed000000000000000000000000000000000000", "0x00",
     "0xD04116cDd17beBE565EB2422F2497E06cC1C9833"),
    ("0x0000000000000000000000000000000000000000", ZERO_SALT, "0xdeadbeef",
     "0x70f2b2914A2a4b783FaEFb75f459A580616Fcb5e"),
    ("0x00000000000000000000000000000000deadbeef", CAFEBABE_SALT, "0xdeadbeef",
     "0x60f3f640a8508fC6a86d45DF051962668E1e8AC7"),
    ("0x00000000000000000000000000000000deadbeef", CAFEBABE_SALT, "0x" + "deadbeef" * 11,
     "0x1d8bfDC5D46DC4f61D6b6115972536eBE6A8854C"),
    ("0x0000000000000000000000000000000000000000", ZERO_SALT, "0x",
     "0xE33C0C7F7df4809055C3ebA6c09CFe4BaF1BD9e0"),
]

DEPLOYER = "0xaBf645362104F34D9C3FE48440bE7c99aaDE58E7"
TOKEN = "0x00000000000000000000000000000000000CcCcC"
VAULT = "0x00000000000000000000000000000000000a11Ce"
OWNER = "0x6d796554698f5Ddd74Ff20d745304096aEf93CB6"
CODE = "0x6080604052348015600e575f80fd5b50"


@pytest.mark.parametrize("deployer, salt, init_code, expected", EIP1014_VECTORS)
def test_eip1014_vectors(deployer: str, salt: str, init_code: str, expected: str) -> None:
    assert predict_address(deployer, salt, init_code) == expected


def test_predict_address_accepts_bytes() -> None:
    deployer, salt, init_code, expected = EIP1014_VECTORS[4]
    assert predict_address(deployer, bytes.fromhex(salt[2:]), bytes.fromhex(init_code[2:])) == expected


def test_predict_address_rejects_short_salt() -> None:
    with pytest.raises(ValueError):
        predict_address(DEPLOYER, "0x1234", CODE)


def test_init_code_is_bytecode_plus_abi_args() -> None:
    init_code = build_init_code("wrapper", CODE, (TOKEN, VAULT, OWNER))
    expected_args = encode(
        ["address", "address", "address"],
        [to_checksum_address(TOKEN), to_checksum_address(VAULT), to_checksum_address(OWNER)],
    )
    assert init_code == bytes.fromhex(CODE[2:]) + expected_args


def test_predict_contract_matches_manual_formula() -> None:
    salt = keccak(text="salt")
    init_code = build_init_code("vault", CODE, (TOKEN, OWNER, "Creator Vault", "cvCRTR"))
    manual = keccak(b"\xff" + bytes.fromhex(DEPLOYER[2:]) + salt + keccak(init_code))[12:]
    assert predict_contract(DEPLOYER, salt, "vault", CODE, (TOKEN, OWNER, "Creator Vault", "cvCRTR")) == (
        to_checksum_address(manual)
    )


def test_argument_order_changes_address() -> None:
    salt = keccak(text="salt")
    straight = predict_contract(DEPLOYER, salt, "wrapper", CODE, (TOKEN, VAULT, OWNER))
    swapped = predict_contract(DEPLOYER, salt, "wrapper", CODE, (VAULT, TOKEN, OWNER))
    assert straight != swapped


def test_every_kind_has_constructor_types() -> None:
    assert set(CONSTRUCTOR_TYPES) == {
        "vault", "wrapper", "share_token", "gauge", "oracle", "cca", "bootstrapper", "oft_bootstrap_registry",
    }
    assert encode_constructor_args("bootstrapper", ()) == b""
    assert encode_constructor_args("oft_bootstrap_registry", ()) == b""
    assert len(encode_constructor_args("cca", (TOKEN, "0x" + "00" * 20, VAULT, VAULT, OWNER))) == 5 * 32


def test_constructor_args_are_validated() -> None:
    with pytest.raises(ValueError):
        encode_constructor_args("wrapper", (TOKEN, VAULT))
    with pytest.raises(ValueError):
        encode_constructor_args("router", ())


def test_empty_creation_code_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_init_code("vault", "0x", (TOKEN, OWNER, "n", "s"))
