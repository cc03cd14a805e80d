import pytest

from xrpl_data_mcp.providers import FetchResult, UpstreamError
from xrpl_data_mcp.tools import ledger_summary

LEDGER = {
    "result": {
        "ledger": {
            "ledger_index": "90000000",
            "ledger_hash": "A1B2",
            "close_time_human": "2024-Jan-01 00:00:00.000000000 UTC",
            "transactions": [f"HASH{n}" for n in range(7)],
        },
        "ledger_index": 90000000,
        "validated": True,
    }
}


@pytest.mark.asyncio
async def test_ledger_summary_with_los_artifacts(upstreams, rpc_router):
    upstreams.rippled.call.side_effect = rpc_router(ledger=LEDGER)
    upstreams.los.try_get_ledger.return_value = FetchResult(value={"artifacts": ["x"]})

    result = await ledger_summary(upstreams, ledger_index=90000000)

    data = result.data
    assert data["ledgerIndex"] == 90000000
    assert data["ledgerHash"] == "A1B2"
    assert data["closeTime"] == "2024-Jan-01 00:00:00.000000000 UTC"
    assert data["representativeTxHashes"] == ["HASH0", "HASH1", "HASH2", "HASH3", "HASH4"]
    assert data["losArtifacts"] == {"artifacts": ["x"]}
    assert result.warnings == []
    assert result.freshness.as_of_ledger == 90000000
    assert result.sources[-1].method == "GET /ledger/90000000"

    method, = upstreams.rippled.call.await_args.args
    assert method == "ledger"
    assert upstreams.rippled.call.await_args.kwargs == {
        "transactions": True,
        "expand": False,
        "ledger_index": 90000000,
    }
    upstreams.los.try_get_ledger.assert_awaited_once_with("90000000")


@pytest.mark.asyncio
async def test_ledger_summary_without_los_artifacts(upstreams, rpc_router):
    upstreams.rippled.call.side_effect = rpc_router(ledger=LEDGER)

    result = await ledger_summary(upstreams, ledger_hash="A1B2")

    assert result.data["losArtifacts"] is None
    assert result.warnings == ["No LOS artifact endpoint matched /ledger/{index|hash}."]
    assert [s.system for s in result.sources] == ["rippled"]
    assert upstreams.rippled.call.await_args.kwargs["ledger_hash"] == "A1B2"


@pytest.mark.asyncio
async def test_ledger_summary_rippled_failure(upstreams, rpc_router, upstream_failure):
    upstreams.rippled.call.side_effect = rpc_router(ledger=upstream_failure())

    with pytest.raises(UpstreamError):
        await ledger_summary(upstreams, ledger_index="validated")

    upstreams.los.try_get_ledger.assert_not_awaited()
