from typing import List, Optional, Union

from ..providers import Upstreams
from ..services.documents import as_dict, as_list, drops_to_xrp, first_number, first_present, rpc_result
from ..types import Source, ToolEnvelope, envelope

REPRESENTATIVE_TX_COUNT = 5


async def ledger_summary(
    upstreams: Upstreams,
    ledger_index: Optional[Union[str, int]] = None,
    ledger_hash: Optional[str] = None,
) -> ToolEnvelope:
    """Canonical ledger facts from rippled plus LOS artifacts when LOS has them."""
    warnings: List[str] = []
    sources: List[Source] = []

    # transactions=True without expand returns hashes only, enough for a sample.
    params = {"transactions": True, "expand": False}
    if ledger_index is not None:
        params["ledger_index"] = ledger_index
    if ledger_hash:
        params["ledger_hash"] = ledger_hash

    result = rpc_result(await upstreams.rippled.call("ledger", **params))
    sources.append(Source(system="rippled", method="ledger"))
    ledger = as_dict(result.get("ledger"))

    canonical_index = first_number(
        ledger.get("ledger_index"),
        ledger.get("ledger_index_min"),
        result.get("ledger_index"),
    )

    artifacts = None
    lookup = canonical_index if canonical_index is not None else ledger_hash
    if lookup is not None:
        fetched = await upstreams.los.try_get_ledger(str(lookup))
        if fetched.present:
            artifacts = fetched.value
            sources.append(Source(system="LOS", method=f"GET /ledger/{lookup}"))
    if artifacts is None:
        warnings.append("No LOS artifact endpoint matched /ledger/{index|hash}.")

    data = {
        "ledgerIndex": canonical_index,
        "ledgerHash": first_present(ledger.get("ledger_hash"), ledger.get("hash"), ledger_hash),
        "closeTime": first_present(
            ledger.get("close_time_human"),
            ledger.get("close_time_iso"),
            result.get("close_time_human"),
        ),
        "txCount": first_number(ledger.get("txn_count"), result.get("txn_count")),
        "feeMetrics": {
            "baseFeeXrp": drops_to_xrp(ledger.get("base_fee")),
            "reserveBaseXrp": drops_to_xrp(ledger.get("reserve_base")),
            "reserveIncrementXrp": drops_to_xrp(ledger.get("reserve_inc")),
        },
        "representativeTxHashes": [
            tx if isinstance(tx, str) else as_dict(tx).get("hash")
            for tx in as_list(ledger.get("transactions"))[:REPRESENTATIVE_TX_COUNT]
        ],
        "losArtifacts": artifacts,
    }

    return envelope(data, sources=sources, as_of_ledger=canonical_index, warnings=warnings)
