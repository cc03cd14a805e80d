"""rippled / Clio JSON-RPC client."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from .base import FetchResult, HttpProvider, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_RPC_ID = "xrpl-data-mcp"

# Methods exposed as dedicated tools; anything else goes through xrpl_public_api_call.
RECOMMENDED_METHODS: List[str] = [
    "account_info",
    "account_objects",
    "account_lines",
    "account_tx",
    "ledger",
    "ledger_data",
    "ledger_entry",
    "tx",
    "book_offers",
    "amm_info",
    "nft_info",
    "nft_history",
    "nfts_by_issuer",
    "server_info",
    "fee",
]


class RippledProvider(HttpProvider):
    """Single JSON-RPC endpoint accepting ``{method, params, id}``."""

    name = "rippled"

    async def rpc(
        self,
        method: str,
        params: Optional[List[Dict[str, Any]]] = None,
        request_id: Union[str, int] = DEFAULT_RPC_ID,
    ) -> Any:
        payload = {"method": method, "params": params if params is not None else [], "id": request_id}
        return await self.fetch_with_body("", "POST", payload)

    async def call(self, method: str, **params: Any) -> Any:
        """Call ``method`` with one params object built from the keyword arguments.

        rippled answers method failures (``actNotFound``, ``lgrNotFound``...) with
        HTTP 200 and ``result.status == "error"``; those raise ``UpstreamError``.
        """
        payload = await self.rpc(method, [params])
        result = payload.get("result") if isinstance(payload, dict) else None
        if isinstance(result, dict) and result.get("status") == "error":
            code = result.get("error") or "error"
            detail = result.get("error_message") or result.get("error_exception")
            message = f"rippled {method} failed: {code}" + (f": {detail}" if detail else "")
            raise UpstreamError(message, body=payload)
        return payload

    async def try_call(self, method: str, **params: Any) -> FetchResult:
        try:
            return FetchResult(value=await self.call(method, **params))
        except UpstreamError as exc:
            logger.debug("soft_fetch_miss", extra={"provider": self.name, "method": method, "error": str(exc)})
            return FetchResult.absent(str(exc))
