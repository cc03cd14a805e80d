"""Shared fakes for handler and server tests."""

from unittest.mock import AsyncMock

import pytest

from xrpl_data_mcp.providers import (
    FetchResult,
    LosProvider,
    RippledProvider,
    UpstreamError,
    Upstreams,
    ValidatorHistoryProvider,
    XrplMetaProvider,
)


def _rpc_router(**responses):
    """side_effect for ``rippled.call`` answering by method name.

    A value that is an exception instance is raised instead of returned.
    """

    async def call(method, **params):
        value = responses[method]
        if isinstance(value, Exception):
            raise value
        return value

    return call


def _soft_rpc_router(**responses):
    """side_effect for ``rippled.try_call``; unlisted methods come back absent."""

    async def try_call(method, **params):
        if method not in responses:
            return FetchResult.absent(f"HTTP 404 Not Found: {method}")
        return FetchResult(value=responses[method])

    return try_call


def _upstream_failure(status=500):
    return UpstreamError(f"HTTP {status} Internal Server Error: upstream down", status=status)


@pytest.fixture
def rpc_router():
    return _rpc_router


@pytest.fixture
def soft_rpc_router():
    return _soft_rpc_router


@pytest.fixture
def upstream_failure():
    return _upstream_failure


@pytest.fixture
def upstreams():
    """Upstreams bundle whose providers are spec'd AsyncMocks.

    Soft fetches default to absent so each test only wires what it needs.
    """
    los = AsyncMock(spec=LosProvider)
    vhs = AsyncMock(spec=ValidatorHistoryProvider)
    rippled = AsyncMock(spec=RippledProvider)
    meta = AsyncMock(spec=XrplMetaProvider)

    missing = FetchResult.absent("HTTP 404 Not Found")
    los.try_fetch.return_value = missing
    los.try_get_token.return_value = missing
    los.try_get_transactions.return_value = missing
    los.try_get_ledger.return_value = missing
    rippled.try_call.side_effect = _soft_rpc_router()

    return Upstreams(los=los, vhs=vhs, rippled=rippled, meta=meta)
