"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

BASE_CHAIN_ID = 8453
PUBLIC_BASE_RPC = "https://mainnet.base.org"


def _env(key: str, default: str = "", environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    value = (env.get(key) or "").strip()
    return value or default


@dataclass(frozen=True)
class ProtocolAddresses:
    """Protocol-wide singleton addresses on the target chain (Base mainnet defaults)."""

    registry: str = "0x777e28d7617ADb6E2fE7b7C49864A173e36881EF"
    factory: str = "0x6205c91941A207A622fD00481b92cA04308a2819"
    create2_deployer: str = "0xaBf645362104F34D9C3FE48440bE7c99aaDE58E7"
    universal_create2_deployer: str = "0x6E01e598e450F07551200e7b2db333BEcC66b35e"
    vault_activation_batcher: str = "0x6d796554698f5Ddd74Ff20d745304096aEf93CB6"
    pool_manager: str = "0x498581fF718922c3f8e6A244956aF099B2652b2b"
    tax_hook: str = "0xca975B9dAF772C71161f3648437c3616E5Be0088"
    price_feed: str = "0x71041dddad3595F9CEd3DcCFBe3D1F4b0a16Bb70"
    usdc: str = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
    lending_pool_factory: str = "0x214f62B5836D83f3D6c4f71F174209097B1A779C"
    protocol_treasury: str = "0x7d429eCbdcE5ff516D6e0a93299cbBa97203f2d3"
    uniswap_v3_factory: str = "0x33128a8fC17869897dcE68Ed026d694621f6FDfD"
    multicall3: str = "0xcA11bde05977b3631167028862bE2a173976CA11"

    ENV_KEYS = {
        "registry": "CREATOR_REGISTRY",
        "factory": "CREATOR_FACTORY",
        "create2_deployer": "CREATE2_DEPLOYER",
        "universal_create2_deployer": "UNIVERSAL_CREATE2_FROM_STORE",
        "vault_activation_batcher": "VAULT_ACTIVATION_BATCHER",
        "pool_manager": "POOL_MANAGER",
        "tax_hook": "TAX_HOOK",
        "price_feed": "CHAINLINK_ETH_USD",
        "usdc": "USDC_TOKEN",
        "lending_pool_factory": "AJNA_ERC20_FACTORY",
        "protocol_treasury": "PROTOCOL_TREASURY",
        "uniswap_v3_factory": "UNISWAP_V3_FACTORY",
        "multicall3": "MULTICALL3",
    }

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProtocolAddresses":
        defaults = cls()
        return cls(**{
            name: _env(key, getattr(defaults, name), environ)
            for name, key in cls.ENV_KEYS.items()
        })


@dataclass(frozen=True)
class ReportConfig:
    """Everything the report services need, injected at construction time."""

    chain_id: int = BASE_CHAIN_ID
    explorer_base_url: str = "https://basescan.org"
    addresses: ProtocolAddresses = field(default_factory=ProtocolAddresses)
    # Creation bytecode per contract kind (vault, wrapper, share_token, gauge,
    # oracle, cca, bootstrapper, oft_bootstrap_registry). Kinds without bytecode skip prediction.
    creation_code: Mapping[str, str] = field(default_factory=dict)
    deployment_version: Optional[str] = None
    share_salt_version: str = "v1"
    v3_fee_tier: int = 3000

    def explorer_href(self, address: str) -> str:
        return f"{self.explorer_base_url.rstrip('/')}/address/{address}"


def load_creation_code(path: str) -> Dict[str, str]:
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    data = json.loads(p.read_text(encoding="utf-8"))
    return {str(k): str(v) for k, v in data.items() if isinstance(v, str) and v.startswith("0x")}


@dataclass(frozen=True)
class Settings:
    app_name: str = "Creator Vault Status"
    version: str = "1.0.0"
    cors_allow_origins: str = "*"
    api_prefix: str = "/api/v1"
    rpc_url: str = ""
    read_rpc_url: str = ""
    logs_rpc_url: str = ""
    chain_id: int = BASE_CHAIN_ID
    rpc_timeout_seconds: float = 20.0
    explorer_base_url: str = "https://basescan.org"
    deployment_version: str = ""
    share_salt_version: str = "v1"
    creation_code_path: str = ""
    log_level: str = "info"
    addresses: ProtocolAddresses = field(default_factory=ProtocolAddresses)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        return cls(
            rpc_url=_env("BASE_RPC_URL", "", environ),
            read_rpc_url=_env("BASE_READ_RPC_URL", "", environ),
            logs_rpc_url=_env("BASE_LOGS_RPC_URL", "", environ),
            chain_id=int(_env("STATUS_CHAIN_ID", str(BASE_CHAIN_ID), environ)),
            rpc_timeout_seconds=float(_env("RPC_TIMEOUT_SECONDS", "20", environ)),
            explorer_base_url=_env("EXPLORER_BASE_URL", "https://basescan.org", environ),
            deployment_version=_env("DEPLOYMENT_VERSION", "", environ),
            share_salt_version=_env("SHARE_SALT_VERSION", "v1", environ),
            creation_code_path=_env("CREATION_CODE_PATH", "", environ),
            log_level=_env("LOG_LEVEL", "info", environ),
            addresses=ProtocolAddresses.from_env(environ),
        )

    @property
    def effective_read_rpc_url(self) -> str:
        return self.read_rpc_url or self.rpc_url or PUBLIC_BASE_RPC

    def report_config(self) -> ReportConfig:
        return ReportConfig(
            chain_id=self.chain_id,
            explorer_base_url=self.explorer_base_url,
            addresses=self.addresses,
            creation_code=load_creation_code(self.creation_code_path),
            deployment_version=self.deployment_version or None,
            share_salt_version=self.share_salt_version,
        )


settings = Settings.from_env()
