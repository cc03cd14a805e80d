from .envelope import Freshness, Source, ToolEnvelope, envelope, utc_now

__all__ = [
    "Freshness",
    "Source",
    "ToolEnvelope",
    "envelope",
    "utc_now",
]
