from typing import List, Optional

from ..providers import Upstreams
from ..services.documents import Number, as_dict, first_number, first_present, rpc_result, to_num
from ..services.freshness import ledger_lag, probe_ingestion_watermark
from ..types import Source, ToolEnvelope, envelope


def _server_info(payload) -> dict:
    result = rpc_result(payload)
    return as_dict(result.get("info")) or result


def _validated_ledger_index(info: dict) -> Optional[Number]:
    validated = as_dict(info.get("validated_ledger"))
    return first_number(validated.get("seq"), validated.get("ledger_index"), validated.get("index"))


async def network_overview(upstreams: Upstreams) -> ToolEnvelope:
    """Network identity, rippled health and LOS indexing lag in one payload."""
    warnings: List[str] = []
    sources: List[Source] = []

    server_info = await upstreams.rippled.call("server_info")
    sources.append(Source(system="rippled", method="server_info"))
    info = _server_info(server_info)
    validated = as_dict(info.get("validated_ledger"))
    validated_index = _validated_ledger_index(info)

    watermark = await probe_ingestion_watermark(upstreams.los)
    if watermark.found:
        sources.append(Source(system="LOS", method=f"ingestion watermark probe ({watermark.source_path})"))
    else:
        warnings.append("LOS ingestion watermark endpoint was not detected from known paths.")

    load_factor = to_num(info.get("load_factor"))
    peers = to_num(info.get("peers"))

    data = {
        "network": first_present(info.get("network_id"), info.get("network"), "mainnet"),
        "validatedLedgerIndex": validated_index,
        "validatedLedgerCloseTime": first_present(validated.get("close_time_human"), validated.get("close_time_iso")),
        "serverHealthSummary": {
            "serverState": info.get("server_state"),
            "completeLedgers": info.get("complete_ledgers"),
            "loadFactor": load_factor,
            "peers": peers,
            "warnings": info.get("warnings") or [],
        },
        "keyRates": {
            "ledgerLagVsLos": ledger_lag(validated_index, watermark.latest_indexed_ledger),
            "loadFactor": load_factor,
            "peers": peers,
        },
        "dataFreshness": {
            "losLatestIndexedLedger": watermark.latest_indexed_ledger,
            "losSourcePath": watermark.source_path,
        },
    }

    return envelope(data, sources=sources, as_of_ledger=validated_index, warnings=warnings)


async def amendment_status(upstreams: Upstreams, network: Optional[str] = None) -> ToolEnvelope:
    """Amendment history from VHS joined with the live rippled network context."""
    sources: List[Source] = []

    info = await upstreams.vhs.get_amendments_info()
    sources.append(Source(system="VHS", method="GET /v1/network/amendments/info"))

    votes = None
    if network:
        votes = await upstreams.vhs.get_amendments_vote(network)
        sources.append(Source(system="VHS", method="GET /v1/network/amendments/vote/{network}"))

    server_info = await upstreams.rippled.call("server_info")
    sources.append(Source(system="rippled", method="server_info"))
    node_info = _server_info(server_info)

    info_doc = as_dict(info)
    data = {
        "enabledAmendments": first_present(info_doc.get("enabled"), info_doc.get("amendments"), info),
        "votingStatus": votes,
        "networkContext": {
            "requested": network,
            "rippledNetwork": node_info.get("network_id"),
        },
    }

    return envelope(data, sources=sources, as_of_ledger=_validated_ledger_index(node_info))
