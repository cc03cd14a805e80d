from typing import Any, Dict, List, Optional

from ..providers import Upstreams
from ..providers.los import transactions_of
from ..services.analytics import affected_accounts, classify_transaction, tokens_involved, total_amount
from ..services.documents import as_dict, count_by, first_present, rpc_result, to_num
from ..types import Source, ToolEnvelope, envelope

DEFAULT_SEARCH_SIZE = 200


def _los_record(payload: Any) -> Optional[Dict[str, Any]]:
    """First row of a LOS transaction search, or the payload itself when it is a single record."""
    if isinstance(payload, dict) and "transactions" in payload:
        rows = transactions_of(payload)
        return as_dict(rows[0]) if rows else None
    if isinstance(payload, list):
        return as_dict(payload[0]) if payload else None
    return payload if isinstance(payload, dict) else None


async def tx_explain(upstreams: Upstreams, tx_hash: str) -> ToolEnvelope:
    """Classify and explain one transaction.

    LOS supplies enriched flags/AMM/offer context when it has the record;
    rippled ``tx`` is mandatory and provides the canonical tx and metadata.
    """
    warnings: List[str] = []
    sources: List[Source] = []

    los_tx = None
    fetched = await upstreams.los.try_get_transactions({"tx_hash": tx_hash, "hash": tx_hash, "size": 1})
    if fetched.present:
        los_tx = _los_record(fetched.value)
    if los_tx is not None:
        sources.append(Source(system="LOS", method="GET /transactions"))
    else:
        warnings.append("LOS enriched transaction record not found; classification is rippled-derived.")

    result = rpc_result(await upstreams.rippled.call("tx", transaction=tx_hash))
    sources.append(Source(system="rippled", method="tx"))
    tx = as_dict(result.get("tx_json")) or result
    meta = first_present(result.get("meta"), result.get("metaData"))
    meta = meta if isinstance(meta, dict) else None

    transaction_type = tx.get("TransactionType")
    tokens = tokens_involved(tx, meta)
    parties = {
        "sender": tx.get("Account"),
        "destination": tx.get("Destination"),
    }

    summary = f"{transaction_type or 'Transaction'} by {parties['sender'] or 'unknown'}"
    if parties["destination"]:
        summary = f"{summary} to {parties['destination']}"

    los = los_tx or {}
    data = {
        "txHash": tx_hash,
        "canonical": {"tx": tx, "meta": meta},
        "classification": {
            **classify_transaction(transaction_type),
            "tokensInvolved": tokens,
            "losFlags": los.get("flags"),
        },
        "humanExplanation": {
            "summary": summary,
            "amounts": {
                "in": first_present(tx.get("SendMax"), tx.get("Amount")),
                "out": first_present(as_dict(meta).get("delivered_amount"), tx.get("DeliverMax"), tx.get("Amount")),
            },
            "parties": parties,
        },
        "relatedObjects": {
            "affectedAccounts": affected_accounts(tx, meta),
            "tokens": tokens,
            "amm": los.get("amm"),
            "offers": los.get("offers"),
        },
        "losEnrichment": los_tx,
    }

    return envelope(data, sources=sources, as_of_ledger=to_num(result.get("ledger_index")), warnings=warnings)


async def search_transactions(
    upstreams: Upstreams,
    filters: Dict[str, Any],
    cursor: Optional[str] = None,
    size: Optional[int] = None,
) -> ToolEnvelope:
    """Open-ended LOS transaction query with an aggregate block."""
    query = {
        **filters,
        "marker": cursor or filters.get("marker"),
        "size": first_present(size, filters.get("size"), DEFAULT_SEARCH_SIZE),
    }
    payload = await upstreams.los.get_transactions(query)
    rows = [as_dict(row) for row in transactions_of(payload)]

    page = as_dict(payload)
    data = {
        "results": rows,
        "cursor": first_present(page.get("marker"), page.get("next")),
        "aggregates": {
            "count": len(rows),
            "txTypeHistogram": count_by(
                rows,
                lambda row: row.get("transactionType") or row.get("type") or row.get("tx_type") or "unknown",
            ),
            "totalAmount": total_amount(rows),
        },
    }

    warnings = [] if rows else ["LOS returned no transactions for these filters."]
    return envelope(data, sources=[Source(system="LOS", method="GET /transactions")], warnings=warnings)
