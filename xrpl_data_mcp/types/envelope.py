from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

System = Literal["LOS", "VHS", "rippled", "XRPLMeta", "local-resolver"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Source(BaseModel):
    model_config = ConfigDict(frozen=True)

    system: System = Field(description="Upstream system that produced part of the data")
    method: str = Field(description="Call made against the system")
    at: datetime = Field(default_factory=utc_now, description="When the call completed")


class Freshness(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    as_of_ledger: Optional[Union[int, float]] = Field(
        default=None, alias="asOfLedger", description="Most authoritative ledger index seen"
    )
    as_of_time: datetime = Field(default_factory=utc_now, alias="asOfTime", description="Handler completion time")


class ToolEnvelope(BaseModel):
    data: Any = Field(description="Tool result data")
    sources: List[Source] = Field(default_factory=list, description="Data sources used")
    freshness: Freshness = Field(default_factory=Freshness, description="Ledger/time the data reflects")
    warnings: List[str] = Field(default_factory=list, description="Soft failures and caveats")

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase freshness keys."""
        return self.model_dump(mode="json", by_alias=True)


def envelope(
    data: Any,
    sources: Optional[Sequence[Source]] = None,
    as_of_ledger: Optional[Union[int, float]] = None,
    as_of_time: Optional[datetime] = None,
    warnings: Optional[Sequence[str]] = None,
) -> ToolEnvelope:
    """Wrap ``data`` with provenance, freshness and warnings; no shape checks on ``data``."""
    freshness = Freshness(as_of_ledger=as_of_ledger, as_of_time=as_of_time or utc_now())
    return ToolEnvelope(
        data=data,
        sources=list(sources or []),
        freshness=freshness,
        warnings=list(warnings or []),
    )
