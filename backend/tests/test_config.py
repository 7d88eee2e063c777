"""Environment-driven settings."""

import json

from vault_status.core.config import PUBLIC_BASE_RPC, ProtocolAddresses, Settings, load_creation_code


def test_defaults_without_environment() -> None:
    settings = Settings.from_env({})
    assert settings.chain_id == 8453
    assert settings.rpc_timeout_seconds == 20.0
    assert settings.effective_read_rpc_url == PUBLIC_BASE_RPC
    assert settings.addresses == ProtocolAddresses()


def test_read_endpoint_precedence() -> None:
    assert Settings.from_env({"BASE_RPC_URL": "https://a"}).effective_read_rpc_url == "https://a"
    both = Settings.from_env({"BASE_RPC_URL": "https://a", "BASE_READ_RPC_URL": " https://b "})
    assert both.effective_read_rpc_url == "https://b"


def test_overrides() -> None:
    settings = Settings.from_env({
        "STATUS_CHAIN_ID": "84532",
        "RPC_TIMEOUT_SECONDS": "5",
        "DEPLOYMENT_VERSION": "v3",
        "CREATOR_REGISTRY": "0x0000000000000000000000000000000000000001",
        "MULTICALL3": "",
    })
    assert settings.chain_id == 84532
    assert settings.rpc_timeout_seconds == 5.0
    assert settings.addresses.registry == "0x0000000000000000000000000000000000000001"
    # Blank values keep the default.
    assert settings.addresses.multicall3 == ProtocolAddresses().multicall3

    config = settings.report_config()
    assert config.chain_id == 84532
    assert config.deployment_version == "v3"
    assert config.creation_code == {}


def test_load_creation_code(tmp_path) -> None:
    path = tmp_path / "creation-code.json"
    path.write_text(json.dumps({"vault": "0x6001", "gauge": "0x6002", "notes": "ignored", "cca": 12}))

    assert load_creation_code(str(path)) == {"vault": "0x6001", "gauge": "0x6002"}
    assert load_creation_code(str(tmp_path / "missing.json")) == {}
    assert load_creation_code("") == {}

    settings = Settings.from_env({"CREATION_CODE_PATH": str(path)})
    assert settings.report_config().creation_code["vault"] == "0x6001"


def test_explorer_href() -> None:
    config = Settings.from_env({"EXPLORER_BASE_URL": "https://sepolia.basescan.org/"}).report_config()
    assert config.explorer_href("0xabc") == "https://sepolia.basescan.org/address/0xabc"
