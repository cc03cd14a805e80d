import pytest

from xrpl_data_mcp.providers import FetchResult, UpstreamError
from xrpl_data_mcp.tools import amendment_status, network_overview

SERVER_INFO = {
    "result": {
        "info": {
            "network_id": 0,
            "server_state": "full",
            "complete_ledgers": "32570-90000000",
            "load_factor": 1,
            "peers": 21,
            "validated_ledger": {"seq": 90000000, "close_time_human": "2024-Jan-01 00:00:00.000000000 UTC"},
        },
        "status": "success",
    }
}


def _watermark_at(path, body):
    async def try_fetch(requested, query=None):
        if requested == path:
            return FetchResult(value=body)
        return FetchResult.absent("HTTP 404 Not Found")

    return try_fetch


class TestNetworkOverview:

    @pytest.mark.asyncio
    async def test_merges_server_info_with_los_watermark(self, upstreams, rpc_router):
        upstreams.rippled.call.side_effect = rpc_router(server_info=SERVER_INFO)
        upstreams.los.try_fetch.side_effect = _watermark_at("/ingestion/status", {"latestIndexedLedger": 89999990})

        result = await network_overview(upstreams)

        data = result.data
        assert data["network"] == 0
        assert data["validatedLedgerIndex"] == 90000000
        assert data["serverHealthSummary"]["serverState"] == "full"
        assert data["serverHealthSummary"]["warnings"] == []
        assert data["keyRates"] == {"ledgerLagVsLos": 10, "loadFactor": 1, "peers": 21}
        assert data["dataFreshness"] == {"losLatestIndexedLedger": 89999990, "losSourcePath": "/ingestion/status"}
        assert result.freshness.as_of_ledger == 90000000
        assert [s.system for s in result.sources] == ["rippled", "LOS"]
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_missing_watermark_is_a_warning(self, upstreams, rpc_router):
        upstreams.rippled.call.side_effect = rpc_router(server_info=SERVER_INFO)

        result = await network_overview(upstreams)

        assert result.data["keyRates"]["ledgerLagVsLos"] is None
        assert result.data["dataFreshness"]["losSourcePath"] is None
        assert result.warnings == ["LOS ingestion watermark endpoint was not detected from known paths."]
        assert [s.system for s in result.sources] == ["rippled"]

    @pytest.mark.asyncio
    async def test_server_info_failure_propagates(self, upstreams, rpc_router, upstream_failure):
        upstreams.rippled.call.side_effect = rpc_router(server_info=upstream_failure())

        with pytest.raises(UpstreamError):
            await network_overview(upstreams)

        upstreams.los.try_fetch.assert_not_awaited()


class TestAmendmentStatus:

    @pytest.mark.asyncio
    async def test_with_network_votes(self, upstreams, rpc_router):
        upstreams.vhs.get_amendments_info.return_value = {"amendments": [{"name": "AMM", "enabled": True}]}
        upstreams.vhs.get_amendments_vote.return_value = {"amendments": [{"name": "XChainBridge"}]}
        upstreams.rippled.call.side_effect = rpc_router(server_info=SERVER_INFO)

        result = await amendment_status(upstreams, network="main")

        assert result.data["enabledAmendments"] == [{"name": "AMM", "enabled": True}]
        assert result.data["votingStatus"] == {"amendments": [{"name": "XChainBridge"}]}
        assert result.data["networkContext"] == {"requested": "main", "rippledNetwork": 0}
        assert result.freshness.as_of_ledger == 90000000
        upstreams.vhs.get_amendments_vote.assert_awaited_once_with("main")
        assert len(result.sources) == 3

    @pytest.mark.asyncio
    async def test_without_network_skips_votes(self, upstreams, rpc_router):
        upstreams.vhs.get_amendments_info.return_value = [{"name": "AMM"}]
        upstreams.rippled.call.side_effect = rpc_router(server_info=SERVER_INFO)

        result = await amendment_status(upstreams)

        assert result.data["enabledAmendments"] == [{"name": "AMM"}]
        assert result.data["votingStatus"] is None
        upstreams.vhs.get_amendments_vote.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_amendment_info_failure_propagates(self, upstreams, upstream_failure):
        upstreams.vhs.get_amendments_info.side_effect = upstream_failure(503)

        with pytest.raises(UpstreamError):
            await amendment_status(upstreams)
