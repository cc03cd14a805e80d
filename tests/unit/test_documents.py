import math

import pytest

from xrpl_data_mcp.services.documents import (
    as_dict,
    count_by,
    drops_to_xrp,
    first_number,
    first_present,
    list_field,
    num_or_zero,
    pick_first_number,
    rpc_result,
    to_num,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 5),
        (2.5, 2.5),
        ("42", 42),
        (" 1.25 ", 1.25),
        ("abc", None),
        ("", None),
        ("1_000", None),
        ("2_5.0", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        ("inf", None),
        ({"a": 1}, None),
    ],
)
def test_to_num(value, expected):
    assert to_num(value) == expected


def test_num_or_zero_and_first_number():
    assert num_or_zero("x") == 0
    assert first_number(None, "n/a", "7", 9) == 7
    assert first_number(None, "n/a") is None


def test_first_present_only_skips_none():
    assert first_present(None, 0, 5) == 0
    assert first_present(None, "", "x") == ""
    assert first_present(None, None) is None


class TestPickFirstNumber:

    def test_top_level_aliases_checked_in_order(self):
        doc = {"ledger": 5, "latest_indexed_ledger": 9}
        assert pick_first_number(doc, ("latestIndexedLedger", "latest_indexed_ledger", "ledger")) == 9

    def test_non_numeric_alias_falls_through(self):
        doc = {"latestIndexedLedger": "pending", "ledger_index": "88"}
        assert pick_first_number(doc, ("latestIndexedLedger", "ledger_index")) == 88

    def test_one_nested_level_is_searched(self):
        doc = {"status": "ok", "ingestion": {"ledger_index": 123}}
        assert pick_first_number(doc, ("ledger_index",)) == 123

    def test_depth_is_bounded(self):
        doc = {"a": {"b": {"ledger_index": 1}}}
        assert pick_first_number(doc, ("ledger_index",), depth=1) is None
        assert pick_first_number(doc, ("ledger_index",), depth=2) == 1

    def test_non_mapping_documents(self):
        assert pick_first_number("text", ("ledger",)) is None
        assert pick_first_number([{"ledger": 1}], ("ledger",)) is None


def test_rpc_result_unwraps_result_object():
    assert rpc_result({"result": {"status": "success"}}) == {"status": "success"}
    assert rpc_result({"info": {}}) == {"info": {}}
    assert rpc_result("oops") == {}


def test_list_field_variants():
    assert list_field({"reports": [1, 2]}, "reports") == [1, 2]
    assert list_field([3], "reports") == [3]
    assert list_field({"reports": "none"}, "reports") == []
    assert list_field(None, "reports") == []


def test_drops_to_xrp():
    assert drops_to_xrp("25000000") == 25.0
    assert drops_to_xrp(None) is None
    assert math.isclose(drops_to_xrp(10), 0.00001)


def test_count_by_keeps_first_seen_order():
    counts = count_by(["b", "a", "b"], lambda item: item)
    assert list(counts.items()) == [("b", 2), ("a", 1)]


def test_as_dict_rejects_non_mappings():
    assert as_dict([1]) == {}
