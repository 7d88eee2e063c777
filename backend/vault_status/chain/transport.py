"""Web3 connection for read-only chain access."""

from __future__ import annotations

import logging

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3

logger = logging.getLogger(__name__)


class RpcUnavailableError(Exception):
    """The endpoint itself could not be reached."""


class RateLimitedError(Exception):
    """Raised inside a report build once any read comes back rate limited."""


def make_web3(url: str, timeout: float = 20.0) -> AsyncWeb3:
    """
    AsyncWeb3 over HTTP for one read endpoint.

    Every request is bounded by `timeout` seconds and is never retried. The
    default middleware is left out: the reports only issue `eth_call` and
    `eth_getCode`, and request validation would add an `eth_chainId`
    round-trip to every call.
    """
    provider = AsyncHTTPProvider(
        url,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)},
        exception_retry_configuration=None,
    )
    logger.debug("Web3 provider for %s (timeout %ss)", url, timeout)
    return AsyncWeb3(provider, middleware=[])
