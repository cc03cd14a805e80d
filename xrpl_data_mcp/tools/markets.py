from typing import Any, Dict, List, Optional

from ..providers import Upstreams
from ..providers.los import transactions_of
from ..services.analytics import swap_volume, vwap
from ..services.documents import as_dict, as_list, first_number, rpc_result, to_num
from ..types import Source, ToolEnvelope, envelope

DEFAULT_TRADE_SAMPLE = 200
BOOK_DEPTH = 50
TRADE_SAMPLE_SIZE = 20

SPREAD_APPROXIMATION_NOTE = (
    "spread and mid both carry the best offer's quality; a true spread needs the opposite book."
)

DEX_TRADE_QUERY = {
    "transactionType": "dex-trade",
    "sort_field": "timestamp",
    "sort_order": "desc",
}


def amm_state(payload: Any) -> Any:
    """The ``amm`` object of an ``amm_info`` response, or the unwrapped result."""
    if payload is None:
        return None
    result = rpc_result(payload)
    return result.get("amm") or result or None


async def market_snapshot(
    upstreams: Upstreams,
    base: Dict[str, Any],
    quote: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None,
) -> ToolEnvelope:
    """Orderbook, AMM state and recent LOS DEX trades for one base/quote pair."""
    options = options or {}
    warnings: List[str] = []
    sources: List[Source] = []
    window = str(options.get("window") or "1h")
    size = first_number(options.get("size"), DEFAULT_TRADE_SAMPLE)

    book = rpc_result(await upstreams.rippled.call("book_offers", taker_gets=base, taker_pays=quote, limit=BOOK_DEPTH))
    sources.append(Source(system="rippled", method="book_offers"))
    offers = as_list(book.get("offers"))
    best = as_dict(offers[0]) if offers else None
    quality = to_num(best.get("quality")) if best else None

    amm = await upstreams.rippled.try_call("amm_info", asset=base, asset2=quote)
    if amm.present:
        sources.append(Source(system="rippled", method="amm_info"))

    trades_result = await upstreams.los.try_get_transactions({**DEX_TRADE_QUERY, "size": size})
    trades = [as_dict(t) for t in transactions_of(trades_result.value)] if trades_result.present else []
    if trades_result.present:
        sources.append(Source(system="LOS", method="GET /transactions?transactionType=dex-trade"))
    if not trades:
        warnings.append("No LOS trade samples returned for VWAP estimate.")

    data = {
        "orderbook": {
            "bestBidAskProxy": best,
            "spread": quality,
            "mid": quality,
            "approximation": SPREAD_APPROXIMATION_NOTE,
            "offerCount": len(offers),
        },
        "amm": amm_state(amm.value) if amm.present else None,
        "recentTrades": {
            "window": window,
            "count": len(trades),
            "vwap": vwap(trades),
            "sample": trades[:TRADE_SAMPLE_SIZE],
        },
    }

    return envelope(data, sources=sources, as_of_ledger=to_num(book.get("ledger_index")), warnings=warnings)


async def amm_overview(
    upstreams: Upstreams,
    amm_id: Optional[str] = None,
    asset_a: Optional[Dict[str, Any]] = None,
    asset_b: Optional[Dict[str, Any]] = None,
    options: Optional[Dict[str, Any]] = None,
) -> ToolEnvelope:
    """AMM pool state from rippled with sampled LOS swap activity."""
    options = options or {}
    warnings: List[str] = []
    sources: List[Source] = []

    if amm_id:
        params = {"amm_account": amm_id}
    elif asset_a and asset_b:
        params = {"asset": asset_a, "asset2": asset_b}
    else:
        raise ValueError("Provide amm_id or both assetA and assetB.")

    amm_raw = await upstreams.rippled.call("amm_info", **params)
    sources.append(Source(system="rippled", method="amm_info"))

    size = first_number(options.get("size"), DEFAULT_TRADE_SAMPLE)
    swaps_result = await upstreams.los.try_get_transactions({**DEX_TRADE_QUERY, "size": size})
    swaps = [as_dict(s) for s in transactions_of(swaps_result.value)] if swaps_result.present else []
    if swaps_result.present:
        sources.append(Source(system="LOS", method="GET /transactions?transactionType=dex-trade"))
    if not swaps:
        warnings.append("No LOS swap samples returned for this pool.")

    data = {
        "amm": amm_state(amm_raw),
        "recentSwaps": {
            "count": len(swaps),
            "volume": swap_volume(swaps),
            "vwap": vwap(swaps),
            "sample": swaps[:TRADE_SAMPLE_SIZE],
        },
        "priceImpactHooks": {
            "note": "Use reserves plus candidate trade size to estimate slippage.",
        },
    }

    return envelope(
        data,
        sources=sources,
        as_of_ledger=to_num(rpc_result(amm_raw).get("ledger_index")),
        warnings=warnings,
    )
