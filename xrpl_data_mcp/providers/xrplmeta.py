"""XRPLMeta token/asset metadata API."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .base import HttpProvider


class XrplMetaProvider(HttpProvider):
    name = "xrplmeta"

    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.fetch(path, query)
