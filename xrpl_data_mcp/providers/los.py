"""LOS (ledger object service) token and transaction indexer."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from .base import FetchResult, HttpProvider


class LosProvider(HttpProvider):
    """Token metadata, trusted tokens and indexed transaction search."""

    name = "los"

    async def get_token(self, token_id: str) -> Any:
        return await self.fetch(f"/tokens/{quote(token_id, safe='')}")

    async def try_get_token(self, token_id: str) -> FetchResult:
        return await self.try_fetch(f"/tokens/{quote(token_id, safe='')}")

    async def batch_get_tokens(self, token_ids: List[str]) -> Any:
        return await self.fetch_with_body("/tokens/batch-get", "POST", {"tokenIds": token_ids})

    async def get_trusted_tokens(self) -> Any:
        return await self.fetch("/trusted-tokens")

    async def get_transactions(self, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.fetch("/transactions", query)

    async def try_get_transactions(self, query: Optional[Mapping[str, Any]] = None) -> FetchResult:
        return await self.try_fetch("/transactions", query)

    async def try_get_ledger(self, ledger: str) -> FetchResult:
        """Ledger artifacts keyed by index or hash; not every deployment serves them."""
        return await self.try_fetch(f"/ledger/{quote(str(ledger), safe='')}")


def transactions_of(payload: Any) -> List[Dict[str, Any]]:
    """Rows of a ``/transactions`` response, tolerating a bare list."""
    if isinstance(payload, dict) and isinstance(payload.get("transactions"), list):
        return payload["transactions"]
    if isinstance(payload, list):
        return payload
    return []
