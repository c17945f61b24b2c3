"""Tests for parameter flattening."""
import pytest

from common.paths import parse_path
from unfurl import ParameterFlattener, RootKey, extract_by_roots, flatten, merge


def _rows(document, roots, params):
    pre_rows = merge(extract_by_roots(document, roots), document=document)
    return flatten(pre_rows, params, roots=roots, document=document)


class TestRootRelativeResolution:
    """Parameters under a root resolve against the root's element"""

    def test_by_root_path(self, weather_document):
        roots = [RootKey("Stations", "data.stations")]
        rows = _rows(weather_document, roots, ["data.stations.id", "data.stations.location.city"])
        assert rows == [
            {"data.stations.id": "ST-1", "data.stations.location.city": "Oslo"},
            {"data.stations.id": "ST-2", "data.stations.location.city": "Bergen"},
        ]

    def test_by_root_label(self, weather_document):
        roots = [RootKey("Stations", "data.stations")]
        rows = _rows(weather_document, roots, ["Stations.id"])
        assert [row["Stations.id"] for row in rows] == ["ST-1", "ST-2"]

    def test_parameter_equal_to_root_is_the_element(self, scalar_array_document):
        rows = _rows(scalar_array_document, [RootKey("x")], ["x"])
        assert rows == [{"x": 1}, {"x": 2}, {"x": 3}]

    def test_index_below_root(self, weather_document):
        roots = [RootKey("data.stations")]
        rows = _rows(weather_document, roots, ["data.stations.readings.0.temp"])
        assert [row["data.stations.readings.0.temp"] for row in rows] == [4.5, None]

    def test_most_specific_root_wins(self):
        doc = {"data": {"items": [{"v": 1}], "more": [{"v": 2}]}}
        roots = [RootKey("data", "data"), RootKey("items", "data.items")]
        flattener = ParameterFlattener(roots, doc)
        owner, relative = flattener.owner(parse_path("data.items.v"))
        assert owner.label == "items"
        assert relative.segments == ("v",)


class TestFallbacks:
    """Absolute, document-level and descendant resolution"""

    def test_document_constant_broadcast(self, weather_document):
        roots = [RootKey("data.stations")]
        rows = _rows(weather_document, roots, ["data.stations.id", "meta.units"])
        assert [row["meta.units"] for row in rows] == ["metric", "metric"]

    def test_descendant_search_within_root(self, weather_document):
        roots = [RootKey("data.stations")]
        rows = _rows(weather_document, roots, ["data.stations.lat"])
        assert [row["data.stations.lat"] for row in rows] == [59.9, 60.4]

    def test_descendant_search_without_roots(self):
        doc = {"result": {"payload": {"temperature": 21}}}
        rows = _rows(doc, [], ["result.temperature"])
        assert rows == [{"result.temperature": 21}]

    def test_unresolvable_is_none(self, items_document):
        rows = _rows(items_document, [RootKey("items")], ["items.missing"])
        assert rows == [{"items.missing": None}, {"items.missing": None}]

    def test_scalar_elements_have_no_value_key(self, scalar_array_document):
        rows = _rows(scalar_array_document, [RootKey("x")], ["x.value"])
        assert rows == [{"x.value": None}] * 3

    def test_malformed_parameter_is_none(self, items_document):
        rows = _rows(items_document, [RootKey("items")], ["items..a"])
        assert rows == [{"items..a": None}, {"items..a": None}]

    def test_identity_rows_wrap_scalars(self):
        rows = _rows([5, 6], [], ["value"])
        assert rows == [{"value": 5}, {"value": 6}]


class TestColumnKeys:
    """Columns are keyed by the full parameter path"""

    def test_shared_terminal_segments_do_not_collide(self, two_root_document):
        rows = _rows(two_root_document, [RootKey("a"), RootKey("b")], ["a.value", "b.value"])
        assert rows[1] == {"a.value": 1, "b.value": 10}

    def test_every_row_has_every_column(self, two_root_document):
        params = ["a.name", "b.name", "a.value"]
        rows = _rows(two_root_document, [RootKey("a"), RootKey("b")], params)
        assert all(list(row) == params for row in rows)

    def test_invalid_parameter_entries_are_skipped(self, items_document):
        rows = _rows(items_document, [RootKey("items")], ["items.a", None, 3])
        assert rows == [{"items.a": 1}, {"items.a": 3}]

    def test_parameter_objects(self, items_document):
        rows = _rows(items_document, [RootKey("items")], [{"parameter": "items.b"}])
        assert rows == [{"items.b": 2}, {"items.b": 4}]


class TestMissingRootElements:
    """A root without an element for a row never borrows another root's field"""

    def test_shorter_root_is_none(self, two_root_document):
        rows = _rows(two_root_document, [RootKey("a"), RootKey("b")], ["a.value", "b.value"])
        assert rows[3] == {"a.value": None, "b.value": 30}
        assert rows[4] == {"a.value": None, "b.value": 40}

    @pytest.mark.parametrize("param", ["a.name", "a.deep.name"])
    def test_no_descendant_search_into_other_roots(self, two_root_document, param):
        rows = _rows(two_root_document, [RootKey("a"), RootKey("b")], [param])
        assert rows[4][param] is None
