from datetime import datetime, timezone

from xrpl_data_mcp.types import Source, envelope


def test_payload_uses_camel_case_freshness():
    at = datetime(2024, 1, 1, tzinfo=timezone.utc)

    payload = envelope(
        {"k": 1},
        sources=[Source(system="rippled", method="server_info", at=at)],
        as_of_ledger=90000000,
        as_of_time=at,
        warnings=["partial"],
    ).to_payload()

    assert payload == {
        "data": {"k": 1},
        "sources": [{"system": "rippled", "method": "server_info", "at": "2024-01-01T00:00:00Z"}],
        "freshness": {"asOfLedger": 90000000, "asOfTime": "2024-01-01T00:00:00Z"},
        "warnings": ["partial"],
    }


def test_defaults_are_empty_and_timestamped():
    result = envelope(None)

    assert result.sources == []
    assert result.warnings == []
    assert result.freshness.as_of_ledger is None
    assert result.freshness.as_of_time.tzinfo is not None


def test_data_shape_is_not_checked():
    assert envelope([1, "two"]).data == [1, "two"]
    assert envelope("text").to_payload()["data"] == "text"
