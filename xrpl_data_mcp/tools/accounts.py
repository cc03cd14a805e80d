from typing import Any, Dict, List, Optional

from ..providers import Upstreams
from ..services.analytics import (
    recent_counterparties,
    reserve_estimate_xrp,
    risk_indicators,
    top_trustlines,
    tx_type_histogram,
)
from ..services.documents import as_dict, as_list, drops_to_xrp, first_number, num_or_zero, rpc_result
from ..types import Source, ToolEnvelope, envelope

DEFAULT_TX_LIMIT = 100
DEFAULT_LINES_LIMIT = 400


async def account_overview(upstreams: Upstreams, account: str, options: Optional[Dict[str, Any]] = None) -> ToolEnvelope:
    """Account state, trustlines and recent activity profile.

    ``options`` may carry ``tx_limit`` (default 100) and ``lines_limit`` (default 400).
    All three rippled calls are required.
    """
    options = options or {}
    tx_limit = first_number(options.get("tx_limit"), DEFAULT_TX_LIMIT)
    lines_limit = first_number(options.get("lines_limit"), DEFAULT_LINES_LIMIT)
    sources: List[Source] = []

    info = rpc_result(await upstreams.rippled.call("account_info", account=account, ledger_index="validated"))
    sources.append(Source(system="rippled", method="account_info"))
    lines_result = rpc_result(
        await upstreams.rippled.call("account_lines", account=account, ledger_index="validated", limit=lines_limit)
    )
    sources.append(Source(system="rippled", method="account_lines"))
    tx_result = rpc_result(
        await upstreams.rippled.call("account_tx", account=account, ledger_index_min=-1, ledger_index_max=-1, limit=tx_limit)
    )
    sources.append(Source(system="rippled", method="account_tx"))

    account_data = as_dict(info.get("account_data"))
    lines = [as_dict(line) for line in as_list(lines_result.get("lines"))]
    transactions = as_list(tx_result.get("transactions"))

    trustline_count = len(lines)
    owner_count = num_or_zero(account_data.get("OwnerCount"))
    flags = num_or_zero(account_data.get("Flags"))

    data = {
        "account": account,
        "xrpBalance": drops_to_xrp(account_data.get("Balance")),
        "ownerCount": owner_count,
        "reserveEstimateXrp": reserve_estimate_xrp(owner_count),
        "flags": account_data.get("Flags", 0),
        "trustlines": {
            "count": trustline_count,
            "topTokensByBalance": top_trustlines(lines),
        },
        "recentActivity": {
            "txTypeHistogram": tx_type_histogram(transactions),
            "recentCounterparties": recent_counterparties(account, transactions),
        },
        "riskIndicators": risk_indicators(trustline_count, owner_count, flags),
    }

    as_of_ledger = first_number(info.get("ledger_current_index"), info.get("ledger_index"))
    warnings = [] if transactions else ["No recent transactions returned for this account."]
    return envelope(data, sources=sources, as_of_ledger=as_of_ledger, warnings=warnings)
