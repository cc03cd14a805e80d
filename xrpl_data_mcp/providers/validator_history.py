"""Validator history service (data.xrpl.org) client."""

from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote

from .base import HttpProvider


def _seg(value: str) -> str:
    return quote(str(value), safe="")


class ValidatorHistoryProvider(HttpProvider):
    """Networks, topology, validators, reports and amendment governance."""

    name = "validator_history"

    async def list_networks(self) -> Any:
        return await self.fetch("/v1/network/networks")

    async def topology_nodes(self, network: Optional[str] = None) -> Any:
        path = f"/v1/network/topology/nodes/{_seg(network)}" if network else "/v1/network/topology/nodes"
        return await self.fetch(path)

    async def topology_node(self, pubkey: str) -> Any:
        return await self.fetch(f"/v1/network/topology/node/{_seg(pubkey)}")

    async def list_validators(self, group: Optional[str] = None) -> Any:
        path = f"/v1/network/validators/{_seg(group)}" if group else "/v1/network/validators"
        return await self.fetch(path)

    async def get_validator(self, pubkey: str) -> Any:
        return await self.fetch(f"/v1/network/validator/{_seg(pubkey)}")

    async def get_validator_manifests(self, pubkey: str) -> Any:
        return await self.fetch(f"/v1/network/validator/{_seg(pubkey)}/manifests")

    async def get_validator_reports(self, pubkey: str) -> Any:
        return await self.fetch(f"/v1/network/validator/{_seg(pubkey)}/reports")

    async def get_daily_validator_reports(self) -> Any:
        return await self.fetch("/v1/network/validator_reports")

    async def get_amendments_info(self) -> Any:
        return await self.fetch("/v1/network/amendments/info")

    async def get_amendment_info(self, amendment: str) -> Any:
        return await self.fetch(f"/v1/network/amendment/info/{_seg(amendment)}")

    async def get_amendments_vote(self, network: str) -> Any:
        return await self.fetch(f"/v1/network/amendments/vote/{_seg(network)}")

    async def get_amendment_vote(self, network: str, identifier: str) -> Any:
        return await self.fetch(f"/v1/network/amendment/vote/{_seg(network)}/{_seg(identifier)}")

    async def health(self) -> Any:
        return await self.fetch("/v1/health")

    async def metrics(self) -> Any:
        """Prometheus exposition; comes back as text."""
        return await self.fetch("/v1/metrics")

    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.fetch(path, query)
