"""
ChainReader: batched read-only contract calls with graceful degradation.

Reads prefer a single Multicall3 `aggregate3` round-trip encoded by a web3
contract object. When the batching primitive is unavailable the same calls
are issued one by one with `eth_call`; both paths return the same ordered
list of `CallResult`s so callers never need to know which one ran.
Individual call failures are encoded in the results, never raised. Only an
unreachable endpoint raises (`RpcUnavailableError`).
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

import aiohttp
from eth_utils import decode_hex, to_checksum_address
from web3 import AsyncWeb3
from web3.exceptions import (
    ContractLogicError,
    ProviderConnectionError,
    RequestTimedOut,
    Web3Exception,
)

from .abi import MULTICALL3_ABI, FunctionSpec
from .transport import RateLimitedError, RpcUnavailableError

logger = logging.getLogger(__name__)

_RATE_LIMIT_RE = re.compile(r"429|rate limit|too many requests", re.IGNORECASE)
_REVERT_RE = re.compile(r"revert", re.IGNORECASE)
_RATE_LIMIT_CODES = {429, -32005}
_REVERT_CODES = {3}

REVERTED_MESSAGE = "execution reverted"

# Everything a single read can raise short of a programming error.
READ_ERRORS = (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError)


def is_rate_limit_error(message: str, code: Optional[int] = None) -> bool:
    """True when an error message/code carries the upstream "too many requests" signature."""
    if code in _RATE_LIMIT_CODES:
        return True
    return bool(_RATE_LIMIT_RE.search(message or ""))


@dataclass(frozen=True)
class ContractCall:
    address: str
    function: FunctionSpec
    args: tuple = ()


@dataclass(frozen=True)
class CallResult:
    status: str  # "success" | "failure"
    value: Any = None
    error: Optional[str] = None
    kind: str = "ok"  # ok | reverted | rate_limited | timeout | error

    @classmethod
    def success(cls, value: Any) -> "CallResult":
        return cls(status="success", value=value)

    @classmethod
    def failure(cls, error: str, kind: str = "error") -> "CallResult":
        return cls(status="failure", error=error, kind=kind)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def rate_limited(self) -> bool:
        return self.kind == "rate_limited"

    def value_or(self, default: Any = None) -> Any:
        return self.value if self.ok else default


def any_rate_limited(results: Iterable[CallResult]) -> bool:
    return any(r.rate_limited for r in results)


def raise_if_rate_limited(results: Sequence[CallResult], where: str = "") -> Sequence[CallResult]:
    for r in results:
        if r.rate_limited:
            raise RateLimitedError(f"{where}: {r.error}" if where else str(r.error))
    return results


def _error_fields(exc: BaseException) -> Tuple[Optional[int], str]:
    rpc_response = getattr(exc, "rpc_response", None)
    error = rpc_response.get("error") if isinstance(rpc_response, dict) else None
    if isinstance(error, dict):
        return error.get("code"), str(error.get("message") or "")
    if isinstance(exc, aiohttp.ClientResponseError):
        return exc.status, f"HTTP {exc.status} {exc.message}".strip()
    message = getattr(exc, "message", None)
    return None, str(message or exc)


def failure_from_error(exc: BaseException) -> CallResult:
    """
    Classify a failed read: rate-limit, timeout, revert, or generic error.

    Web3 surfaces node errors as `Web3RPCError` with the raw response
    attached, and HTTP-level failures arrive as aiohttp exceptions; both
    are reduced to a code and a message before classification. A dead
    endpoint is not a per-call outcome and raises `RpcUnavailableError`.
    """
    code, message = _error_fields(exc)
    if is_rate_limit_error(message, code):
        return CallResult.failure(message, "rate_limited")
    if isinstance(exc, (asyncio.TimeoutError, RequestTimedOut)):
        return CallResult.failure(message or "RPC request timed out", "timeout")
    if isinstance(exc, (aiohttp.ClientConnectionError, ProviderConnectionError)):
        raise RpcUnavailableError(f"RPC endpoint unreachable: {message}") from exc
    if isinstance(exc, ContractLogicError) or code in _REVERT_CODES or _REVERT_RE.search(message):
        return CallResult.failure(REVERTED_MESSAGE, "reverted")
    return CallResult.failure(message or type(exc).__name__, "error")


class _BatchUnavailable(Exception):
    pass


@dataclass
class ChainReader:
    w3: AsyncWeb3
    multicall_address: Optional[str] = None
    block: str = "latest"
    stats: dict = field(default_factory=lambda: {"batched": 0, "sequential": 0})

    # ── Contract reads ───────────────────────────────────────────────────────

    async def batch_read(self, calls: Sequence[ContractCall]) -> List[CallResult]:
        if not calls:
            return []
        if self.multicall_address:
            try:
                results = await self._read_batched(calls)
                self.stats["batched"] += 1
                return results
            except _BatchUnavailable as e:
                logger.info("Multicall batching unavailable (%s); reading sequentially", e)
        self.stats["sequential"] += 1
        return await self.read_sequential(calls)

    async def read_one(self, call: ContractCall) -> CallResult:
        return (await self.batch_read([call]))[0]

    async def read_sequential(self, calls: Sequence[ContractCall]) -> List[CallResult]:
        results: List[CallResult] = []
        limited: Optional[CallResult] = None
        for call in calls:
            if limited is not None:
                # Do not keep hammering an endpoint that already throttled us.
                results.append(limited)
                continue
            encoded = self._encode(call)
            if isinstance(encoded, CallResult):
                results.append(encoded)
                continue
            try:
                raw = await self.w3.eth.call(
                    {"to": to_checksum_address(call.address), "data": encoded}, self.block
                )
            except READ_ERRORS as e:
                result = failure_from_error(e)
                if result.rate_limited:
                    logger.warning("RPC rate limited during sequential reads: %s", result.error)
                    limited = result
                results.append(result)
                continue
            results.append(self._decode(call, True, raw))
        return results

    async def _read_batched(self, calls: Sequence[ContractCall]) -> List[CallResult]:
        encoded = [self._encode(c) for c in calls]
        batchable = [(i, c, data) for i, (c, data) in enumerate(zip(calls, encoded)) if isinstance(data, str)]
        results: List[Optional[CallResult]] = [e if isinstance(e, CallResult) else None for e in encoded]
        if not batchable:
            return results  # type: ignore[return-value]

        multicall = self.w3.eth.contract(address=to_checksum_address(self.multicall_address), abi=MULTICALL3_ABI)
        payload = multicall.encode_abi(
            "aggregate3", args=[[(to_checksum_address(c.address), True, decode_hex(data)) for _, c, data in batchable]]
        )
        try:
            raw = await self.w3.eth.call({"to": multicall.address, "data": payload}, self.block)
        except READ_ERRORS as e:
            failure = failure_from_error(e)
            if failure.kind in ("rate_limited", "timeout"):
                if failure.rate_limited:
                    logger.warning("RPC rate limited on multicall: %s", failure.error)
                for i, _, _ in batchable:
                    results[i] = failure
                return results  # type: ignore[return-value]
            raise _BatchUnavailable(failure.error) from e

        try:
            (entries,) = self.w3.codec.decode(["(bool,bytes)[]"], bytes(raw))
        except Exception as e:
            raise _BatchUnavailable(f"undecodable aggregate3 response: {e}") from e
        if len(entries) != len(batchable):
            raise _BatchUnavailable("aggregate3 returned a different number of results")

        for (i, call, _), (success, data) in zip(batchable, entries):
            results[i] = self._decode(call, success, data)
        return results  # type: ignore[return-value]

    def _encode(self, call: ContractCall) -> Union[str, CallResult]:
        try:
            contract = self.w3.eth.contract(address=to_checksum_address(call.address), abi=call.function.abi)
            args = [_normalize_arg(t, a) for t, a in zip(call.function.inputs, call.args)]
            return contract.encode_abi(call.function.name, args=args)
        except Exception as e:  # bad address/arg types must not sink the batch
            return CallResult.failure(f"could not encode {call.function.signature}: {e}")

    def _decode(self, call: ContractCall, success: bool, data: bytes) -> CallResult:
        if not success:
            return CallResult.failure(REVERTED_MESSAGE, "reverted")
        if not data:
            return CallResult.failure(f"{call.function.signature} returned no data")
        try:
            values = self.w3.codec.decode(list(call.function.outputs), bytes(data))
        except Exception as e:
            return CallResult.failure(f"could not decode {call.function.signature}: {e}")
        return CallResult.success(values[0] if len(values) == 1 else tuple(values))

    # ── Bytecode presence ────────────────────────────────────────────────────

    async def read_code(self, address: str) -> CallResult:
        try:
            code = await self.w3.eth.get_code(to_checksum_address(address), self.block)
        except READ_ERRORS as e:
            return failure_from_error(e)
        except ValueError as e:
            return CallResult.failure(str(e))
        return CallResult.success(bytes(code))

    async def get_bytecode_presence(self, address: str) -> bool:
        """Empty code and a failed read both count as absence."""
        result = await self.read_code(address)
        return result.ok and len(result.value) > 0

    async def read_code_many(self, addresses: Sequence[str]) -> List[CallResult]:
        return list(await asyncio.gather(*(self.read_code(a) for a in addresses)))


def _normalize_arg(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return to_checksum_address(value)
    if abi_type == "address[]":
        return [to_checksum_address(v) for v in value]
    return value
