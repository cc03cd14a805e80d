"""Pattern-based classification of free-form identifiers."""

import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..services.identifiers import ADDRESS_PATTERN
from ..types import Source, ToolEnvelope, envelope

UNKNOWN_WARNING = "Input did not match known XRPL identifier patterns."


def _token_id(value: str) -> str:
    currency, issuer = value.split(".", 1)
    return f"{currency.upper()}.{issuer}"


# (entity type, matcher, normalizer, suggested next tools); first match wins.
_RULES: List[Tuple[str, Callable[[str], bool], Callable[[str], Any], List[str]]] = [
    (
        "tx_hash",
        re.compile(r"^[A-Fa-f0-9]{64}$").match,
        str.upper,
        ["tx_explain", "xrpl_tx"],
    ),
    (
        "account",
        re.compile(rf"^{ADDRESS_PATTERN}$").match,
        str,
        ["account_overview", "xrpl_account_info"],
    ),
    (
        "token_id",
        re.compile(rf"^[A-Fa-f0-9]{{40}}\.{ADDRESS_PATTERN}$").match,
        _token_id,
        ["token_overview", "los_get_token"],
    ),
    (
        "ledger_index",
        re.compile(r"^[0-9]+$").match,
        int,
        ["ledger_summary", "xrpl_ledger"],
    ),
    (
        "domain_or_host",
        lambda value: "." in value,
        str.lower,
        ["xrplmeta_get", "validator_set_overview"],
    ),
]


def classify(value: str) -> Tuple[Dict[str, Any], List[str]]:
    """Return ``({type, normalized}, next_tools)`` for a trimmed input."""
    for entity_type, matches, normalize, next_tools in _RULES:
        if matches(value):
            return {"type": entity_type, "normalized": normalize(value)}, list(next_tools)
    return {"type": "unknown", "normalized": value}, []


def resolve_entities(value: str) -> ToolEnvelope:
    entity, next_tools = classify(value.strip())
    warnings: Optional[List[str]] = [UNKNOWN_WARNING] if entity["type"] == "unknown" else None
    return envelope(
        {"entity": entity, "nextTools": next_tools},
        sources=[Source(system="local-resolver", method="pattern-match")],
        warnings=warnings,
    )
