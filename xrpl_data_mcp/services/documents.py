"""Accessors for loosely-typed upstream JSON documents.

Upstream payloads are treated as plain dict/list/scalar values. These helpers
look fields up by alias lists and tolerate absence instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

Number = Union[int, float]

DROPS_PER_XRP = 1_000_000


def to_num(value: Any) -> Optional[Number]:
    """Coerce ints, floats and numeric strings; everything else is None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        # int() and float() accept digit grouping like "1_000"
        if not text or "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def num_or_zero(value: Any) -> Number:
    number = to_num(value)
    return 0 if number is None else number


def first_number(*values: Any) -> Optional[Number]:
    """First argument that coerces to a number."""
    for value in values:
        number = to_num(value)
        if number is not None:
            return number
    return None


def first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def pick_first_number(document: Any, keys: Sequence[str], depth: int = 1) -> Optional[Number]:
    """Search ``document`` for the first numeric field named in ``keys``.

    Top-level keys are checked in alias order first, then nested objects are
    searched the same way, descending at most ``depth`` levels.
    """
    if not isinstance(document, dict):
        return None
    for key in keys:
        if key in document:
            number = to_num(document[key])
            if number is not None:
                return number
    if depth <= 0:
        return None
    for nested in document.values():
        if isinstance(nested, dict):
            number = pick_first_number(nested, keys, depth - 1)
            if number is not None:
                return number
    return None


def rpc_result(payload: Any) -> Dict[str, Any]:
    """Unwrap the ``result`` object of a JSON-RPC response."""
    if not isinstance(payload, dict):
        return {}
    result = payload.get("result")
    if isinstance(result, dict):
        return result
    return payload


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def list_field(document: Any, key: str) -> List[Any]:
    """``document[key]`` when it is a list, the document itself when it is a list, else empty."""
    if isinstance(document, dict) and isinstance(document.get(key), list):
        return document[key]
    if isinstance(document, list):
        return document
    return []


def drops_to_xrp(value: Any) -> Optional[float]:
    drops = to_num(value)
    if drops is None:
        return None
    return drops / DROPS_PER_XRP


def count_by(items: Iterable[Any], key_fn) -> Dict[str, int]:
    """Histogram of ``key_fn(item)`` preserving first-seen order."""
    counts: Dict[str, int] = {}
    for item in items:
        key = key_fn(item)
        counts[key] = counts.get(key, 0) + 1
    return counts
