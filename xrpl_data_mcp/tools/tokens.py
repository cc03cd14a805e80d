from typing import Any, Dict, List, Optional

from ..providers import Upstreams
from ..services.documents import as_dict, as_list, first_number, first_present, rpc_result, to_num
from ..services.identifiers import require_token_key
from ..types import Source, ToolEnvelope, envelope
from .markets import amm_state

DEFAULT_TX_WINDOW = 200
ACTIVITY_SAMPLE_SIZE = 10
XRP = {"currency": "XRP"}


async def token_overview(
    upstreams: Upstreams,
    issuer: str,
    currency: str,
    options: Optional[Dict[str, Any]] = None,
) -> ToolEnvelope:
    """Issued-token overview merging LOS analytics with live book and AMM state.

    LOS metadata and transfer history are optional; ``book_offers`` against
    XRP is required; a failing ``amm_info`` means there is no XRP pool.
    """
    options = options or {}
    warnings: List[str] = []
    sources: List[Source] = []

    token_id = require_token_key(issuer, currency)

    token_meta = None
    fetched_meta = await upstreams.los.try_get_token(token_id)
    if fetched_meta.present:
        token_meta = fetched_meta.value
        sources.append(Source(system="LOS", method="GET /tokens/{tokenID}"))
    else:
        warnings.append("LOS token metadata not found for normalized tokenID.")

    window = first_number(options.get("tx_window_size"), DEFAULT_TX_WINDOW)
    token_tx = await upstreams.los.try_get_transactions({
        "token": token_id,
        "transactionType": "transfer",
        "size": window,
        "sort_field": "timestamp",
        "sort_order": "desc",
    })
    if token_tx.present:
        sources.append(Source(system="LOS", method="GET /transactions"))

    asset = {"currency": currency, "issuer": issuer}
    book = rpc_result(await upstreams.rippled.call("book_offers", taker_gets=asset, taker_pays=XRP))
    sources.append(Source(system="rippled", method="book_offers"))
    offers = as_list(book.get("offers"))

    amm = await upstreams.rippled.try_call("amm_info", asset=asset, asset2=XRP)
    if amm.present:
        sources.append(Source(system="rippled", method="amm_info"))

    meta_doc = as_dict(token_meta)
    rows = as_dict(token_tx.value).get("transactions")
    transfers = rows if isinstance(rows, list) else None

    data = {
        "token": {"issuer": issuer, "currency": currency, "tokenID": token_id},
        "metadata": first_present(meta_doc.get("metadata"), token_meta),
        "trustlineAndHolderStats": first_present(meta_doc.get("holderStats"), meta_doc.get("holders")),
        "liquiditySummary": {
            "orderbookBestAsk": offers[0] if offers else None,
            "amm": amm_state(amm.value) if amm.present else None,
        },
        "recentActivity": {
            "transferSampleSize": len(transfers) if transfers is not None else None,
            "sample": transfers[:ACTIVITY_SAMPLE_SIZE] if transfers is not None else token_tx.value,
        },
    }

    return envelope(data, sources=sources, as_of_ledger=to_num(book.get("ledger_index")), warnings=warnings)
