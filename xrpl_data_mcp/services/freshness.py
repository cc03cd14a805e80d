"""LOS ingestion watermark probing and ledger lag."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..providers.los import LosProvider
from .documents import Number, pick_first_number

logger = logging.getLogger(__name__)

# Tried in order; the LOS status schema is not fixed across deployments.
WATERMARK_PATHS: Tuple[str, ...] = (
    "/ingestion-watermark",
    "/ingestion/status",
    "/status",
    "/health",
    "/meta",
)

LATEST_INDEXED_LEDGER_KEYS: Tuple[str, ...] = (
    "latestIndexedLedger",
    "latest_indexed_ledger",
    "indexed_ledger",
    "ledger_index",
    "ledger",
)


@dataclass(frozen=True)
class WatermarkProbe:
    latest_indexed_ledger: Optional[Number] = None
    source_path: Optional[str] = None
    raw: Any = None

    @property
    def found(self) -> bool:
        return self.latest_indexed_ledger is not None


async def probe_ingestion_watermark(los: LosProvider) -> WatermarkProbe:
    """Return the first recognizable "latest indexed ledger" across the candidate paths."""
    for path in WATERMARK_PATHS:
        result = await los.try_fetch(path)
        if not result.present:
            continue
        latest = pick_first_number(result.value, LATEST_INDEXED_LEDGER_KEYS, depth=1)
        if latest is not None:
            return WatermarkProbe(latest_indexed_ledger=latest, source_path=path, raw=result.value)

    logger.debug("watermark_probe_miss", extra={"paths": list(WATERMARK_PATHS)})
    return WatermarkProbe()


def ledger_lag(validated_ledger_index: Optional[Number], latest_indexed_ledger: Optional[Number]) -> Optional[Number]:
    """How far LOS ingestion trails the validated ledger; None unless both are known."""
    if validated_ledger_index is None or latest_indexed_ledger is None:
        return None
    return validated_ledger_index - latest_indexed_ledger
