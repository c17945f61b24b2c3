"""Tests for path parsing and resolution."""
import pytest

from common.paths import (
    Path,
    PathExtractor,
    escape_path_segment,
    extract_paths,
    format_path,
    parse_path,
)
from common.resolver import NOT_FOUND, find_descendant, resolve, resolve_path


class TestParsePath:
    """Textual paths to segments"""

    def test_dotted_keys(self):
        assert parse_path("header.action").segments == ("header", "action")

    def test_numeric_segment_is_index(self):
        assert parse_path("features.0.properties").segments == ("features", 0, "properties")

    def test_bracket_form_matches_dotted_form(self):
        assert parse_path("features[0].properties").segments == ("features", 0, "properties")
        assert parse_path("grid[1][2]").segments == ("grid", 1, 2)
        assert parse_path("[3].name").segments == (3, "name")

    def test_escaped_dot_stays_in_one_segment(self):
        assert parse_path(r"models.gpt-3\.5-turbo.score").segments == (
            "models", "gpt-3.5-turbo", "score"
        )

    def test_escaped_digits_stay_a_key(self):
        assert parse_path(r"years.\2020").segments == ("years", "2020")

    @pytest.mark.parametrize("text", [
        "", "a..b", ".a", "a.", "a[", "a[x]", "a[-1]", "a]b", "a[0]b", "a.[0]",
    ])
    def test_malformed_paths_are_invalid(self, text):
        path = parse_path(text)
        assert path.valid is False
        assert path.segments == ()

    @pytest.mark.parametrize("value", [None, 42, ["a"], {"a": 1}])
    def test_non_string_input_is_invalid(self, value):
        assert parse_path(value).valid is False

    def test_path_passthrough(self):
        path = parse_path("a.b")
        assert parse_path(path) is path

    def test_format_round_trip(self):
        segments = ("data", "gpt-3.5", 0, "a[b]")
        assert parse_path(format_path(segments)).segments == segments

    def test_escape_segment(self):
        assert escape_path_segment("a.b") == r"a\.b"
        assert escape_path_segment(r"back\slash") == r"back\\slash"


class TestPathRelations:
    """Prefix tests used to attribute parameters to roots"""

    def test_prefix(self):
        assert parse_path("data.items").is_prefix_of(parse_path("data.items.price"))
        assert parse_path("data.items").is_prefix_of(parse_path("data.items"))
        assert not parse_path("data.item").is_prefix_of(parse_path("data.items.price"))

    def test_relative_to(self):
        relative = parse_path("data.items.0.price").relative_to(parse_path("data.items"))
        assert relative.segments == (0, "price")
        assert relative.text == "0.price"

    def test_relative_to_unrelated_prefix_is_invalid(self):
        assert parse_path("a.b").relative_to(parse_path("c")).valid is False

    def test_terminal(self):
        assert parse_path("a.b.c").terminal == "c"
        assert parse_path("a.b.2").terminal == 2
        assert parse_path("a..b").terminal is None


class TestResolve:
    """Resolution is total and distinguishes misses from null"""

    @pytest.fixture
    def doc(self):
        return {
            "type": "FeatureCollection",
            "features": [
                {"properties": {"mag": 4.2, "place": "Offshore"}, "flags": None},
                {"properties": {"mag": 2.1, "place": "Inland"}},
            ],
            "counts": {"0": "zero"},
        }

    def test_nested_lookup(self, doc):
        assert resolve_path(doc, "features.1.properties.place") == "Inland"
        assert resolve_path(doc, "features[0].properties.mag") == 4.2

    def test_missing_key_is_not_found(self, doc):
        assert resolve_path(doc, "features.0.geometry") is NOT_FOUND

    def test_null_is_found(self, doc):
        assert resolve_path(doc, "features.0.flags") is None

    def test_index_out_of_range(self, doc):
        assert resolve_path(doc, "features.5") is NOT_FOUND

    def test_key_against_array_is_not_found(self, doc):
        assert resolve_path(doc, "features.properties") is NOT_FOUND

    def test_through_scalar_is_not_found(self, doc):
        assert resolve_path(doc, "type.length") is NOT_FOUND
        assert resolve_path(doc, "features.0.flags.x") is NOT_FOUND

    def test_numeric_segment_against_object_uses_key(self, doc):
        assert resolve_path(doc, "counts.0") == "zero"

    def test_malformed_path_is_not_found(self, doc):
        assert resolve_path(doc, "features..0") is NOT_FOUND
        assert resolve(doc, None) is NOT_FOUND

    def test_root_label_on_array_document(self):
        doc = [{"a": 1}, {"a": 2}]
        assert resolve_path(doc, "root") is doc

    def test_paths_under_root_label_on_array_document(self):
        doc = [{"a": 1, "tags": ["x", "y"]}, {"a": 2}]
        assert resolve_path(doc, "root.1.a") == 2
        assert resolve_path(doc, "root[0].tags[1]") == "y"
        assert resolve_path(doc, "root.5") is NOT_FOUND

    def test_root_label_on_object_document_is_a_key(self):
        assert resolve_path({"root": 5}, "root") == 5
        assert resolve_path({"data": 5}, "root") is NOT_FOUND

    def test_repeated_calls_agree(self, doc):
        first = resolve_path(doc, "features.0.properties")
        assert resolve_path(doc, "features.0.properties") == first
        assert resolve_path(doc, "features.0.properties") is first

    def test_not_found_is_falsy_singleton(self):
        assert not NOT_FOUND
        assert repr(NOT_FOUND) == "NOT_FOUND"
        assert type(NOT_FOUND)() is NOT_FOUND


class TestFindDescendant:
    """Pre-order depth-first key search"""

    def test_finds_nested_key(self):
        doc = {"a": {"b": {"target": 7}}}
        assert find_descendant(doc, "target") == 7

    def test_node_checked_before_children(self):
        doc = {"x": {"name": "deep"}, "name": "shallow"}
        assert find_descendant(doc, "name") == "shallow"

    def test_first_child_subtree_wins(self):
        doc = {"first": {"inner": {"name": "one"}}, "second": {"name": "two"}}
        assert find_descendant(doc, "name") == "one"

    def test_searches_arrays_in_order(self):
        doc = {"list": [{"other": 1}, {"name": "second"}, {"name": "third"}]}
        assert find_descendant(doc, "name") == "second"

    def test_null_value_is_found(self):
        assert find_descendant({"a": {"name": None}}, "name") is None

    def test_missing_key(self):
        assert find_descendant({"a": [1, 2, {"b": 3}]}, "name") is NOT_FOUND

    def test_scalar_and_index_keys(self):
        assert find_descendant(5, "name") is NOT_FOUND
        assert find_descendant({"a": {"0": "zero"}}, 0) == "zero"

    def test_deep_document_does_not_recurse(self):
        doc = current = {}
        for _ in range(5000):
            current["next"] = {}
            current = current["next"]
        current["leaf"] = 1
        assert find_descendant(doc, "leaf") == 1


class TestPathExtractor:
    """Leaf path listing for parameter choosers"""

    @pytest.fixture
    def extractor(self):
        return PathExtractor()

    def test_nested_object(self, extractor):
        doc = {"header": {"action": "test", "id": "123"}}
        assert extractor.extract(doc) == ["header.action", "header.id"]

    def test_arrays_are_transparent(self, extractor):
        doc = {"items": [{"sku": "A", "price": 10}, {"sku": "B", "note": "x"}]}
        assert extractor.extract(doc) == ["items.sku", "items.price", "items.note"]

    def test_array_of_primitives(self, extractor):
        assert extractor.extract({"tags": ["a", "b"]}) == ["tags"]

    def test_empty_containers(self, extractor):
        assert extractor.extract({"items": [], "data": {}}) == ["items"]

    def test_array_indices(self):
        doc = {"items": [{"sku": "A"}, {"sku": "B"}]}
        assert extract_paths(doc, include_array_indices=True) == ["items.0.sku", "items.1.sku"]

    def test_dotted_keys_are_escaped(self, extractor):
        paths = extractor.extract({"gpt-3.5": {"score": 1}})
        assert paths == [r"gpt-3\.5.score"]
        assert resolve_path({"gpt-3.5": {"score": 1}}, paths[0]) == 1
