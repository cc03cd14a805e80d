"""
End-to-end tool calls through an in-memory FastMCP client.
"""

import json

import pytest
from fastmcp import Client

from xrpl_data_mcp.providers import FetchResult
from xrpl_data_mcp.providers.rippled import DEFAULT_RPC_ID, RECOMMENDED_METHODS
from xrpl_data_mcp.server import create_server

PASSTHROUGH_TOOLS = {
    "los_get_token", "los_batch_get_tokens", "los_get_trusted_tokens", "los_get_transactions",
    "vh_list_networks", "vh_topology_nodes", "vh_topology_node", "vh_list_validators", "vh_get_validator",
    "vh_get_validator_manifests", "vh_get_validator_reports", "vh_get_daily_validator_reports",
    "vh_get_amendments_info", "vh_get_amendment_info", "vh_get_amendments_vote", "vh_get_amendment_vote",
    "vh_health", "vh_metrics", "validator_history_get",
    "xrpl_account_info", "xrpl_account_objects", "xrpl_account_lines", "xrpl_account_tx", "xrpl_ledger",
    "xrpl_ledger_data", "xrpl_ledger_entry", "xrpl_tx", "xrpl_book_offers", "xrpl_amm_info",
    "xrpl_nft_info", "xrpl_nft_history", "xrpl_nfts_by_issuer", "xrpl_server_info", "xrpl_fee",
    "xrpl_public_api_call", "xrplmeta_get", "xrpl_list_recommended_methods",
}

COMPOSITE_TOOLS = {
    "network_overview", "ledger_summary", "tx_explain", "account_overview", "token_overview",
    "market_snapshot", "amm_overview", "validator_set_overview", "validator_health",
    "amendment_status", "search_transactions", "resolve_entities",
}

ADDRESS = "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"


def payload_of(result):
    return json.loads(result.content[0].text)


@pytest.fixture
def server(upstreams):
    return create_server(upstreams)


# =============================================================================
# Registration
# =============================================================================

@pytest.mark.asyncio
async def test_every_tool_is_registered(server):
    async with Client(server) as client:
        tools = await client.list_tools()

    names = {tool.name for tool in tools}
    assert len(PASSTHROUGH_TOOLS) == 37
    assert names == PASSTHROUGH_TOOLS | COMPOSITE_TOOLS
    assert all(tool.description for tool in tools)


@pytest.mark.asyncio
async def test_schemas_mark_required_arguments(server):
    async with Client(server) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}

    assert tools["xrpl_book_offers"].inputSchema["required"] == ["taker_gets", "taker_pays"]
    assert tools["resolve_entities"].inputSchema["required"] == ["input"]
    assert "required" not in tools["network_overview"].inputSchema or not tools["network_overview"].inputSchema["required"]


# =============================================================================
# Pass-through tools
# =============================================================================

class TestPassthroughTools:

    @pytest.mark.asyncio
    async def test_rpc_tool_forwards_only_supplied_arguments(self, server, upstreams):
        upstreams.rippled.rpc.return_value = {"result": {"account_data": {"Account": ADDRESS}}}

        async with Client(server) as client:
            result = await client.call_tool("xrpl_account_info", {"account": ADDRESS, "ledger_index": "validated"})

        assert not result.is_error
        assert payload_of(result) == {"result": {"account_data": {"Account": ADDRESS}}}
        upstreams.rippled.rpc.assert_awaited_once_with("account_info", [{"account": ADDRESS, "ledger_index": "validated"}])

    @pytest.mark.asyncio
    async def test_passthrough_object_keeps_unknown_fields(self, server, upstreams):
        upstreams.rippled.rpc.return_value = {"result": {"offers": []}}
        gets = {"currency": "USD", "issuer": ADDRESS, "extra": {"nested": True}}

        async with Client(server) as client:
            await client.call_tool("xrpl_book_offers", {"taker_gets": gets, "taker_pays": {"currency": "XRP"}, "limit": 5})

        upstreams.rippled.rpc.assert_awaited_once_with(
            "book_offers", [{"taker_gets": gets, "taker_pays": {"currency": "XRP"}, "limit": 5}]
        )

    @pytest.mark.asyncio
    async def test_public_api_call_defaults(self, server, upstreams):
        upstreams.rippled.rpc.return_value = {"result": {"status": "success"}}

        async with Client(server) as client:
            await client.call_tool("xrpl_public_api_call", {"method": "ledger_closed"})

        upstreams.rippled.rpc.assert_awaited_once_with("ledger_closed", [], DEFAULT_RPC_ID)

    @pytest.mark.asyncio
    async def test_rpc_tool_returns_error_status_unchanged(self, server, upstreams):
        body = {"result": {"status": "error", "error": "actNotFound", "account": ADDRESS}}
        upstreams.rippled.rpc.return_value = body

        async with Client(server) as client:
            result = await client.call_tool("xrpl_account_info", {"account": ADDRESS}, raise_on_error=False)

        assert not result.is_error
        assert payload_of(result) == body

    @pytest.mark.asyncio
    async def test_los_transactions_query(self, server, upstreams):
        upstreams.los.get_transactions.return_value = {"transactions": []}

        async with Client(server) as client:
            await client.call_tool("los_get_transactions", {"token": "A.r1", "size": 10, "sort_order": "desc"})

        upstreams.los.get_transactions.assert_awaited_once_with({"token": "A.r1", "size": 10, "sort_order": "desc"})

    @pytest.mark.asyncio
    async def test_xrplmeta_get_is_enveloped(self, server, upstreams):
        upstreams.meta.get.return_value = {"tokens": [{"currency": "USD"}]}

        async with Client(server) as client:
            result = await client.call_tool("xrplmeta_get", {"path": "/tokens", "query": {"limit": 1}})

        payload = payload_of(result)
        assert payload["data"] == {"tokens": [{"currency": "USD"}]}
        assert payload["sources"][0]["system"] == "XRPLMeta"
        assert payload["sources"][0]["method"] == "GET /tokens"
        assert payload["warnings"] == []
        upstreams.meta.get.assert_awaited_once_with("/tokens", {"limit": 1})

    @pytest.mark.asyncio
    async def test_recommended_methods(self, server):
        async with Client(server) as client:
            result = await client.call_tool("xrpl_list_recommended_methods", {})

        assert payload_of(result) == {"methods": RECOMMENDED_METHODS}

    @pytest.mark.asyncio
    async def test_upstream_failure_is_an_error_result(self, server, upstreams, upstream_failure):
        upstreams.vhs.get_validator.side_effect = upstream_failure(502)

        async with Client(server) as client:
            result = await client.call_tool("vh_get_validator", {"pubkey": "nHB1"}, raise_on_error=False)

        assert result.is_error
        assert "HTTP 502" in result.content[0].text


# =============================================================================
# Composite tools
# =============================================================================

class TestCompositeTools:

    @pytest.mark.asyncio
    async def test_envelope_serialization(self, server):
        async with Client(server) as client:
            result = await client.call_tool("resolve_entities", {"input": "9" * 64})

        payload = payload_of(result)
        assert set(payload) == {"data", "sources", "freshness", "warnings"}
        assert set(payload["freshness"]) == {"asOfLedger", "asOfTime"}
        assert payload["data"]["entity"] == {"type": "tx_hash", "normalized": "9" * 64}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tool, arguments, mandatory",
        [
            ("network_overview", {}, "rippled.call"),
            ("ledger_summary", {"ledger_index": 1}, "rippled.call"),
            ("tx_explain", {"tx_hash": "A" * 64}, "rippled.call"),
            ("account_overview", {"account": ADDRESS}, "rippled.call"),
            ("token_overview", {"issuer": ADDRESS, "currency": "USD"}, "rippled.call"),
            ("market_snapshot", {"base": {"currency": "XRP"}, "quote": {"currency": "USD", "issuer": ADDRESS}}, "rippled.call"),
            ("amm_overview", {"amm_id": "rAMM"}, "rippled.call"),
            ("validator_set_overview", {}, "vhs.list_validators"),
            ("validator_health", {"pubkey_or_node": "nHBidG3pZK11"}, "vhs.get_validator"),
            ("amendment_status", {}, "vhs.get_amendments_info"),
            ("search_transactions", {"filters": {"token": "A.r1"}}, "los.get_transactions"),
        ],
    )
    async def test_mandatory_failure_yields_error_not_envelope(
        self, server, upstreams, upstream_failure, tool, arguments, mandatory
    ):
        provider, method = mandatory.split(".")
        getattr(getattr(upstreams, provider), method).side_effect = upstream_failure(500)
        # optional sources succeed so a partial envelope would be possible
        upstreams.los.try_fetch.return_value = FetchResult(value={"latestIndexedLedger": 1})
        upstreams.los.try_get_token.return_value = FetchResult(value={"metadata": {}})

        async with Client(server) as client:
            result = await client.call_tool(tool, arguments, raise_on_error=False)

        assert result.is_error
        text = result.content[0].text
        assert "HTTP 500" in text
        assert '"data"' not in text

    @pytest.mark.asyncio
    async def test_normalization_failure_is_an_error_result(self, server, upstreams):
        async with Client(server) as client:
            result = await client.call_tool(
                "token_overview", {"issuer": ADDRESS, "currency": "x" * 30}, raise_on_error=False
            )

        assert result.is_error
        assert "Unable to normalize currency to XRPL 160-bit code." in result.content[0].text
        upstreams.rippled.call.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_arguments_never_reach_upstreams(self, server, upstreams):
        async with Client(server) as client:
            short_hash = await client.call_tool("tx_explain", {"tx_hash": "ABC"}, raise_on_error=False)
            missing = await client.call_tool("xrpl_tx", {}, raise_on_error=False)
            too_big = await client.call_tool("search_transactions", {"filters": {}, "size": 5000}, raise_on_error=False)

        assert short_hash.is_error
        assert missing.is_error
        assert too_big.is_error
        upstreams.rippled.call.assert_not_awaited()
        upstreams.rippled.rpc.assert_not_awaited()
        upstreams.los.get_transactions.assert_not_awaited()
        upstreams.los.try_get_transactions.assert_not_awaited()
