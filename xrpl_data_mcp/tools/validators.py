from typing import Any, Dict, List, Optional

from ..providers import Upstreams
from ..services.analytics import (
    RECENT_REPORT_WINDOW,
    operator_breakdown,
    select_recent_reports,
    uptime_score,
    validation_counts,
)
from ..services.documents import as_dict, list_field
from ..types import Source, ToolEnvelope, envelope

CURRENT_SET_LIMIT = 200
DEFAULT_HEALTH_WINDOW = f"last-{RECENT_REPORT_WINDOW}-reports"


async def validator_set_overview(upstreams: Upstreams, options: Optional[Dict[str, Any]] = None) -> ToolEnvelope:
    """Validator set composition with a per-operator concentration count."""
    options = options or {}
    group = options.get("group")

    payload = await upstreams.vhs.list_validators(str(group) if group else None)
    validators = [as_dict(v) for v in list_field(payload, "validators")]

    data = {
        "validatorCount": len(validators),
        "byOperator": operator_breakdown(validators),
        "currentSet": validators[:CURRENT_SET_LIMIT],
        "notableEvents": {
            "note": "Use repeated snapshots of this tool for 7/30/90 day diffing.",
        },
    }

    return envelope(data, sources=[Source(system="VHS", method="GET /v1/network/validators")])


async def validator_health(upstreams: Upstreams, pubkey_or_node: str, window: Optional[str] = None) -> ToolEnvelope:
    """Signed/missed validation totals and an uptime score over the most recent reports.

    Reports are ordered by their date field when every row has one; the
    ``windowSelection`` field says whether that happened or upstream order was used.
    """
    warnings: List[str] = []
    sources: List[Source] = []

    validator = await upstreams.vhs.get_validator(pubkey_or_node)
    sources.append(Source(system="VHS", method="GET /v1/network/validator/{pubkey}"))
    reports_payload = await upstreams.vhs.get_validator_reports(pubkey_or_node)
    sources.append(Source(system="VHS", method="GET /v1/network/validator/{pubkey}/reports"))

    reports = list_field(reports_payload, "reports")
    recent, selection = select_recent_reports(reports, RECENT_REPORT_WINDOW)
    signed, missed = validation_counts(recent)

    if not reports:
        warnings.append("Validator report history is empty for this key.")

    data = {
        "validator": validator,
        "window": window or DEFAULT_HEALTH_WINDOW,
        "windowSelection": selection,
        "metrics": {
            "validationsSigned": signed,
            "validationsMissed": missed,
            "uptimeScore": uptime_score(signed, missed),
        },
        "recentReports": recent,
    }

    return envelope(data, sources=sources, warnings=warnings)
