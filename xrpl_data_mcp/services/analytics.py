"""Deterministic derivations shared by the composite tools."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .documents import Number, as_dict, as_list, count_by, num_or_zero, to_num

TRUSTLINE_RISK_THRESHOLD = 250
OWNER_COUNT_RISK_THRESHOLD = 1000

# Approximate XRP reserve: 1 XRP base plus 0.2 XRP per owned object.
RESERVE_BASE_XRP = 1
RESERVE_PER_OBJECT_XRP = 0.2

RECENT_REPORT_WINDOW = 30
_REPORT_DATE_KEYS = ("date", "day", "timestamp", "time", "created")

DEX_TRADE_TYPES = frozenset({"OfferCreate", "AMMSwap", "OfferCancel"})
NATIVE_ASSET = "XRP"


def vwap(trades: Iterable[Dict[str, Any]]) -> Optional[float]:
    """Volume-weighted average price over ``price``/``amount`` rows; None when volume is zero."""
    numerator = 0.0
    denominator = 0.0
    for trade in trades:
        amount = num_or_zero(trade.get("amount"))
        numerator += num_or_zero(trade.get("price")) * amount
        denominator += amount
    if denominator <= 0:
        return None
    return numerator / denominator


def swap_volume(swaps: Iterable[Dict[str, Any]]) -> Number:
    return sum(abs(num_or_zero(row.get("amount"))) for row in swaps)


def total_amount(rows: Iterable[Dict[str, Any]]) -> Number:
    return sum(num_or_zero(row.get("amount")) for row in rows)


# -----------------------------------------------------------------------------
# Accounts
# -----------------------------------------------------------------------------

def risk_indicators(trustline_count: int, owner_count: Number, flags: Number) -> List[str]:
    """Independent threshold checks, always reported in the same order."""
    indicators: List[str] = []
    if trustline_count > TRUSTLINE_RISK_THRESHOLD:
        indicators.append("High trustline count may indicate hub/exchange behavior.")
    if owner_count > OWNER_COUNT_RISK_THRESHOLD:
        indicators.append("High owner count; reserve pressure likely high.")
    if flags != 0:
        indicators.append("Account has non-zero flags; inspect issuer permissions.")
    return indicators


def reserve_estimate_xrp(owner_count: Number) -> float:
    """Rough reserve; network reserve settings can differ, so never treat this as canonical."""
    return RESERVE_BASE_XRP + owner_count * RESERVE_PER_OBJECT_XRP


def top_trustlines(lines: Sequence[Dict[str, Any]], limit: int = 5) -> List[Dict[str, Any]]:
    rows = []
    for line in lines:
        balance = num_or_zero(line.get("balance"))
        rows.append({
            "currency": line.get("currency"),
            "issuer": line.get("account"),
            "balance": balance,
            "absBalance": abs(balance),
        })
    rows.sort(key=lambda row: row["absBalance"], reverse=True)
    return rows[:limit]


def tx_type_histogram(transactions: Sequence[Dict[str, Any]]) -> Dict[str, int]:
    return count_by(
        (_tx_body(row) for row in transactions),
        lambda tx: tx.get("TransactionType") or "Unknown",
    )


def recent_counterparties(account: str, transactions: Sequence[Dict[str, Any]], limit: int = 10) -> List[Dict[str, Any]]:
    counts: Dict[str, int] = {}
    for row in transactions:
        tx = _tx_body(row)
        counterparty = tx.get("Destination") or tx.get("Account")
        if counterparty and counterparty != account:
            counts[counterparty] = counts.get(counterparty, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [{"address": address, "interactions": count} for address, count in ranked]


def _tx_body(row: Any) -> Dict[str, Any]:
    row = as_dict(row)
    return as_dict(row.get("tx_json") or row.get("tx"))


# -----------------------------------------------------------------------------
# Transactions
# -----------------------------------------------------------------------------

def classify_transaction(transaction_type: Optional[str]) -> Dict[str, bool]:
    return {
        "isDexTrade": transaction_type in DEX_TRADE_TYPES,
        "isTransfer": transaction_type == "Payment",
        "isAmmRelated": str(transaction_type or "").startswith("AMM"),
    }


def _node_body(node: Any) -> Dict[str, Any]:
    node = as_dict(node)
    return as_dict(node.get("ModifiedNode") or node.get("CreatedNode") or node.get("DeletedNode"))


def affected_accounts(tx: Dict[str, Any], meta: Optional[Dict[str, Any]]) -> List[str]:
    """Accounts touched by the metadata nodes, then sender and destination."""
    seen: Dict[str, None] = {}
    for node in as_list(as_dict(meta).get("AffectedNodes")):
        body = _node_body(node)
        for fields in (as_dict(body.get("FinalFields")), as_dict(body.get("NewFields"))):
            account = fields.get("Account")
            if account:
                seen[account] = None
    for account in (tx.get("Account"), tx.get("Destination")):
        if account:
            seen[account] = None
    return list(seen)


def tokens_involved(tx: Dict[str, Any], meta: Optional[Dict[str, Any]]) -> List[str]:
    """Distinct ``currency.issuer`` pairs (or XRP) from amounts and balance changes."""
    tokens: Dict[str, None] = {}

    def add(amount: Any) -> None:
        if not amount:
            return
        if isinstance(amount, str):
            tokens[NATIVE_ASSET] = None
        elif isinstance(amount, dict) and amount.get("currency") and amount.get("issuer"):
            tokens[f"{amount['currency']}.{amount['issuer']}"] = None

    meta = as_dict(meta)
    add(tx.get("Amount"))
    add(tx.get("TakerGets"))
    add(tx.get("TakerPays"))
    add(meta.get("delivered_amount"))
    for node in as_list(meta.get("AffectedNodes")):
        body = _node_body(node)
        add(as_dict(body.get("FinalFields")).get("Balance"))
        add(as_dict(body.get("NewFields")).get("Balance"))
    return list(tokens)


# -----------------------------------------------------------------------------
# Validators
# -----------------------------------------------------------------------------

def _report_time(report: Dict[str, Any]) -> Optional[Tuple[int, Any]]:
    for key in _REPORT_DATE_KEYS:
        value = report.get(key)
        number = to_num(value)
        if number is not None:
            return (0, number)
        if isinstance(value, str):
            try:
                return (1, datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp())
            except ValueError:
                continue
    return None


def select_recent_reports(reports: Sequence[Any], window: int = RECENT_REPORT_WINDOW) -> Tuple[List[Dict[str, Any]], str]:
    """Pick the most recent ``window`` reports.

    When every report carries a parseable date the list is sorted oldest to
    newest first; otherwise upstream order is trusted. The second element
    names which selection was used.
    """
    rows = [as_dict(report) for report in reports]
    keys = [_report_time(row) for row in rows]
    if rows and all(key is not None for key in keys) and len({key[0] for key in keys}) == 1:
        ordered = [row for _, row in sorted(zip(keys, rows), key=lambda pair: pair[0][1])]
        return ordered[-window:], "chronological"
    return rows[-window:], "positional"


def validation_counts(reports: Iterable[Dict[str, Any]]) -> Tuple[Number, Number]:
    signed = 0
    missed = 0
    for report in reports:
        signed += num_or_zero(report.get("signed") or report.get("validations_signed"))
        missed += num_or_zero(report.get("missed") or report.get("validations_missed"))
    return signed, missed


def uptime_score(signed: Number, missed: Number) -> Optional[float]:
    total = signed + missed
    if total <= 0:
        return None
    return signed / total


def operator_breakdown(validators: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    return count_by(
        (as_dict(v) for v in validators),
        lambda v: v.get("domain") or v.get("operator") or v.get("owner") or "unknown",
    )
