"""Upstream service providers and the per-process bundle handed to tool handlers."""

from dataclasses import dataclass
from typing import Optional

import httpx

from ..config import Settings
from .base import FetchResult, HttpProvider, UpstreamError, build_url, parse_body
from .los import LosProvider
from .rippled import RippledProvider
from .validator_history import ValidatorHistoryProvider
from .xrplmeta import XrplMetaProvider


@dataclass(frozen=True)
class Upstreams:
    """Immutable set of upstream clients built once from Settings."""

    los: LosProvider
    vhs: ValidatorHistoryProvider
    rippled: RippledProvider
    meta: XrplMetaProvider


def build_upstreams(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> Upstreams:
    timeout = settings.request_timeout_seconds
    return Upstreams(
        los=LosProvider(settings.los_base_url, timeout_s=timeout, transport=transport),
        vhs=ValidatorHistoryProvider(settings.data_xrpl_base_url, timeout_s=timeout, transport=transport),
        rippled=RippledProvider(settings.xrpl_rpc_url, timeout_s=timeout, transport=transport),
        meta=XrplMetaProvider(settings.xrplmeta_base_url, timeout_s=timeout, transport=transport),
    )


__all__ = [
    "FetchResult",
    "HttpProvider",
    "LosProvider",
    "RippledProvider",
    "UpstreamError",
    "Upstreams",
    "ValidatorHistoryProvider",
    "XrplMetaProvider",
    "build_upstreams",
    "build_url",
    "parse_body",
]
