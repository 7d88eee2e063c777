"""Web3 provider setup and read-failure classification."""

import asyncio

import aiohttp
import pytest
from web3 import AsyncHTTPProvider
from web3.exceptions import ContractLogicError, RequestTimedOut, Web3RPCError

from vault_status.chain.reader import failure_from_error
from vault_status.chain.transport import RpcUnavailableError, make_web3


def rpc_error(code: int, message: str) -> Web3RPCError:
    error = {"code": code, "message": message}
    return Web3RPCError(repr(error), rpc_response={"jsonrpc": "2.0", "id": 1, "error": error})


def test_make_web3_bounds_every_request() -> None:
    w3 = make_web3("https://rpc.example", timeout=7)

    assert isinstance(w3.provider, AsyncHTTPProvider)
    assert w3.provider.endpoint_uri == "https://rpc.example"
    assert w3.provider.get_request_kwargs()["timeout"].total == 7
    assert w3.provider.exception_retry_configuration is None
    assert len(w3.middleware_onion) == 0


def test_http_429_is_rate_limited() -> None:
    exc = aiohttp.ClientResponseError(None, (), status=429, message="Too Many Requests")
    failure = failure_from_error(exc)
    assert failure.kind == "rate_limited"
    assert "429" in failure.error


def test_provider_rate_limit_codes() -> None:
    assert failure_from_error(rpc_error(-32005, "limit exceeded")).rate_limited
    assert failure_from_error(rpc_error(-32000, "Too many requests, slow down")).rate_limited


def test_reverts() -> None:
    assert failure_from_error(ContractLogicError("execution reverted", data=None)).kind == "reverted"
    assert failure_from_error(rpc_error(3, "execution reverted")).kind == "reverted"


def test_node_errors_are_generic() -> None:
    failure = failure_from_error(rpc_error(-32000, "header not found"))
    assert (failure.kind, failure.error) == ("error", "header not found")
    assert failure_from_error(aiohttp.ClientResponseError(None, (), status=502, message="Bad Gateway")).kind == "error"


def test_timeouts() -> None:
    assert failure_from_error(asyncio.TimeoutError()).kind == "timeout"
    assert failure_from_error(aiohttp.ServerTimeoutError("read timed out")).kind == "timeout"
    error = {"code": -32002, "message": "request timed out"}
    node_timeout = RequestTimedOut(repr(error), rpc_response={"jsonrpc": "2.0", "id": 1, "error": error})
    assert failure_from_error(node_timeout).kind == "timeout"


def test_connection_failure_raises() -> None:
    with pytest.raises(RpcUnavailableError):
        failure_from_error(aiohttp.ClientConnectionError("refused"))
