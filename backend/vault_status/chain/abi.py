"""Minimal read-only ABI fragments used by the status reports.

Each view function is described by a `FunctionSpec`, which renders to a
one-entry JSON ABI for a web3 contract object. Only the fragments the
reports actually call are listed here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class FunctionSpec:
    name: str
    inputs: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def abi(self) -> List[Dict[str, Any]]:
        return [{
            "type": "function",
            "name": self.name,
            "stateMutability": "view",
            "inputs": [{"name": "", "type": t} for t in self.inputs],
            "outputs": [{"name": "", "type": t} for t in self.outputs],
        }]


# ── Common ────────────────────────────────────────────────────────────────────
OWNER = FunctionSpec("owner", (), ("address",))
NAME = FunctionSpec("name", (), ("string",))
SYMBOL = FunctionSpec("symbol", (), ("string",))
DECIMALS = FunctionSpec("decimals", (), ("uint8",))

# ── Vault ─────────────────────────────────────────────────────────────────────
VAULT_CREATOR_COIN = FunctionSpec("CREATOR_COIN", (), ("address",))
VAULT_GAUGE_CONTROLLER = FunctionSpec("gaugeController", (), ("address",))
VAULT_GET_STRATEGIES = FunctionSpec("getStrategies", (), ("address[]", "uint256[]", "uint256[]"))

# Older vault versions expose the whitelist under different getter names.
VAULT_WHITELIST_GETTERS = (
    FunctionSpec("whitelist", ("address",), ("bool",)),
    FunctionSpec("whitelisted", ("address",), ("bool",)),
    FunctionSpec("isWhitelisted", ("address",), ("bool",)),
)

# ── Gauge controller ──────────────────────────────────────────────────────────
GAUGE_SHARE_OFT = FunctionSpec("shareOFT", (), ("address",))
GAUGE_WRAPPER = FunctionSpec("wrapper", (), ("address",))
GAUGE_ORACLE = FunctionSpec("oracle", (), ("address",))
GAUGE_VAULT = FunctionSpec("vault", (), ("address",))
GAUGE_CREATOR_COIN = FunctionSpec("creatorCoin", (), ("address",))
GAUGE_CREATOR_TREASURY = FunctionSpec("creatorTreasury", (), ("address",))
GAUGE_PROTOCOL_TREASURY = FunctionSpec("protocolTreasury", (), ("address",))

# ── Wrapper ───────────────────────────────────────────────────────────────────
WRAPPER_VAULT = FunctionSpec("vault", (), ("address",))
WRAPPER_CREATOR_COIN = FunctionSpec("creatorCoin", (), ("address",))
WRAPPER_SHARE_OFT = FunctionSpec("shareOFT", (), ("address",))

# ── Share token ───────────────────────────────────────────────────────────────
SHARE_VAULT = FunctionSpec("vault", (), ("address",))
SHARE_GAUGE_CONTROLLER = FunctionSpec("gaugeController", (), ("address",))
SHARE_IS_MINTER = FunctionSpec("isMinter", ("address",), ("bool",))

# ── Strategies ────────────────────────────────────────────────────────────────
STRATEGY_IS_ACTIVE = FunctionSpec("isActive", (), ("bool",))
STRATEGY_ASSET = FunctionSpec("asset", (), ("address",))
LP_STRATEGY_POOL_VAULT = FunctionSpec("charmVault", (), ("address",))
LENDING_STRATEGY_POOL = FunctionSpec("ajnaPool", (), ("address",))
LENDING_STRATEGY_FACTORY = FunctionSpec("ajnaFactory", (), ("address",))
LENDING_STRATEGY_COLLATERAL = FunctionSpec("collateralToken", (), ("address",))
LENDING_STRATEGY_BUCKET = FunctionSpec("bucketIndex", (), ("uint256",))

# ── Oracle ────────────────────────────────────────────────────────────────────
ORACLE_V3_POOL_CONFIGURED = FunctionSpec("v3PoolConfigured", (), ("bool",))
ORACLE_V3_POOL = FunctionSpec("v3Pool", (), ("address",))
ORACLE_V3_CREATOR_TOKEN = FunctionSpec("v3CreatorToken", (), ("address",))
ORACLE_V3_USD_TOKEN = FunctionSpec("v3UsdToken", (), ("address",))

# ── Uniswap V3 ────────────────────────────────────────────────────────────────
V3_FACTORY_GET_POOL = FunctionSpec("getPool", ("address", "address", "uint24"), ("address",))
V3_POOL_TOKEN0 = FunctionSpec("token0", (), ("address",))
V3_POOL_TOKEN1 = FunctionSpec("token1", (), ("address",))
V3_POOL_SLOT0 = FunctionSpec(
    "slot0", (), ("uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool")
)
V3_POOL_OBSERVE = FunctionSpec("observe", ("uint32[]",), ("int56[]", "uint160[]"))

# ── Multicall3 ────────────────────────────────────────────────────────────────
MULTICALL3_ABI = [
    {
        "type": "function",
        "name": "aggregate3",
        "stateMutability": "payable",
        "inputs": [
            {
                "name": "calls",
                "type": "tuple[]",
                "components": [
                    {"name": "target", "type": "address"},
                    {"name": "allowFailure", "type": "bool"},
                    {"name": "callData", "type": "bytes"},
                ],
            }
        ],
        "outputs": [
            {
                "name": "returnData",
                "type": "tuple[]",
                "components": [
                    {"name": "success", "type": "bool"},
                    {"name": "returnData", "type": "bytes"},
                ],
            }
        ],
    }
]
