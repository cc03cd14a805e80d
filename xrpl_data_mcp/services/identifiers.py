"""Helpers for canonical XRPL token identifiers and address shapes."""

from __future__ import annotations

import re
from typing import Optional

CURRENCY_BYTES = 20
CURRENCY_HEX_LENGTH = CURRENCY_BYTES * 2

# XRPL base58 uses the same 58 characters as Bitcoin's alphabet in a different order.
ADDRESS_PATTERN = r"r[1-9A-HJ-NP-Za-km-z]{24,34}"

_HEX_CURRENCY_RE = re.compile(r"^[A-Fa-f0-9]{40}$")
_ISO_CURRENCY_RE = re.compile(r"^[A-Za-z0-9]{3}$")


class NormalizationError(ValueError):
    """Input cannot be expressed as a canonical XRPL identifier."""


def currency_to_canonical_hex(currency: str) -> Optional[str]:
    """Return the 160-bit (40 hex digit) currency code, or None if it cannot fit.

    Already-hex codes are upper-cased, three-character codes are ASCII encoded
    and zero padded, anything else is UTF-8 encoded and zero padded to 20 bytes.
    """
    raw = str(currency or "").strip()
    if _HEX_CURRENCY_RE.fullmatch(raw):
        return raw.upper()
    if _ISO_CURRENCY_RE.fullmatch(raw):
        return raw.encode("ascii").hex().upper().ljust(CURRENCY_HEX_LENGTH, "0")
    encoded = raw.encode("utf-8")
    if len(encoded) > CURRENCY_BYTES:
        return None
    return encoded.ljust(CURRENCY_BYTES, b"\x00").hex().upper()


def token_key(issuer: str, currency: str) -> Optional[str]:
    """Canonical LOS token id: ``<currency-hex>.<issuer>``."""
    currency_hex = currency_to_canonical_hex(currency)
    if currency_hex is None:
        return None
    return f"{currency_hex}.{issuer}"


def require_token_key(issuer: str, currency: str) -> str:
    key = token_key(issuer, currency)
    if key is None:
        raise NormalizationError("Unable to normalize currency to XRPL 160-bit code.")
    return key


__all__ = [
    "ADDRESS_PATTERN",
    "NormalizationError",
    "currency_to_canonical_hex",
    "require_token_key",
    "token_key",
]
