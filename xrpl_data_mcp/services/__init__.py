"""Service layer helpers"""

from .freshness import WatermarkProbe, ledger_lag, probe_ingestion_watermark
from .identifiers import (
    NormalizationError,
    currency_to_canonical_hex,
    require_token_key,
    token_key,
)

__all__ = [
    "NormalizationError",
    "WatermarkProbe",
    "currency_to_canonical_hex",
    "ledger_lag",
    "probe_ingestion_watermark",
    "require_token_key",
    "token_key",
]
