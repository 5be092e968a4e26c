"""FilterNode tests: one shape per node, rendered to the filter DSL."""

import datetime

import pytest

from searchdsl.config.runtime import DslSettings
from searchdsl.domain.errors import PreconditionError, ShapeConflictError
from searchdsl.domain.filters import FilterNode, range_filter
from searchdsl.domain.query import QueryNode
from searchdsl.domain.serializer import serialize, to_json


class TestTermFilters:
    def test_term(self):
        assert serialize(FilterNode().term("user", "kimchy")) == {"term": {"user": "kimchy"}}

    def test_term_replaces_previous_term(self):
        f = FilterNode().term("user", "kimchy").term("name", "bob")
        assert serialize(f) == {"term": {"name": "bob"}}

    def test_terms_append_on_same_field(self):
        f = FilterNode().terms("user", "a").terms("user", "b")
        assert serialize(f) == {"terms": {"user": ["a", "b"]}}

    def test_terms_variadic_values(self):
        f = FilterNode().terms("user", "kimchy", "elasticsearch")
        assert to_json(f) == '{"terms":{"user":["kimchy","elasticsearch"]}}'

    def test_terms_keeps_distinct_fields(self):
        f = FilterNode().terms("user", "a").terms("tag", 1, 2)
        assert serialize(f) == {"terms": {"user": ["a"], "tag": [1, 2]}}

    def test_terms_without_values_is_rejected(self):
        with pytest.raises(PreconditionError):
            FilterNode().terms("user")

    def test_blank_field_is_rejected(self):
        with pytest.raises(PreconditionError):
            FilterNode().term("  ", "x")


class TestRangeFilters:
    def test_from_to_on_named_field(self):
        f = (
            range_filter()
            .from_("@timestamp", "2012-12-29T16:52:48+00:00")
            .to("@timestamp", "2012-12-29T17:52:48+00:00")
        )
        assert to_json(f) == (
            '{"range":{"@timestamp":{"from":"2012-12-29T16:52:48+00:00",'
            '"to":"2012-12-29T17:52:48+00:00"}}}'
        )

    def test_bound_keys_are_emitted_in_fixed_order(self):
        f = range_filter().lte("age", 65).gt("age", 18).to("age", 70).from_("age", 10)
        assert to_json(f) == '{"range":{"age":{"from":10,"gt":18,"lte":65,"to":70}}}'

    def test_range_keyword_form_skips_unset_bounds(self):
        f = FilterNode().range("price", gte=10, lt=20)
        assert serialize(f) == {"range": {"price": {"gte": 10, "lt": 20}}}

    def test_several_fields_in_one_range(self):
        f = range_filter().gte("age", 18).lt("price", 100)
        assert serialize(f) == {"range": {"age": {"gte": 18}, "price": {"lt": 100}}}

    def test_later_bound_overwrites_same_key(self):
        f = range_filter().gte("age", 18).gte("age", 21)
        assert serialize(f) == {"range": {"age": {"gte": 21}}}

    def test_datetime_bounds_render_as_iso_strings(self):
        start = datetime.datetime(2012, 12, 29, 16, 52, 48, tzinfo=datetime.timezone.utc)
        f = range_filter().gte("@timestamp", start).lt("@timestamp", datetime.date(2013, 1, 1))
        assert to_json(f) == (
            '{"range":{"@timestamp":{"gte":"2012-12-29T16:52:48+00:00","lt":"2013-01-01"}}}'
        )

    def test_bound_without_field_fails_fast(self):
        with pytest.raises(PreconditionError):
            range_filter().gt("", 5)
        with pytest.raises(PreconditionError):
            range_filter().from_(None, "2012-01-01")


class TestSingleFieldMatchers:
    def test_exists_last_call_wins(self):
        f = FilterNode().exists("repository.name").exists("repository.owner")
        assert serialize(f) == {"exists": {"field": "repository.owner"}}

    def test_missing(self):
        assert serialize(FilterNode().missing("repository.name")) == {
            "missing": {"field": "repository.name"}
        }

    def test_prefix(self):
        assert serialize(FilterNode().prefix("name.second", "ba")) == {"prefix": {"name.second": "ba"}}

    def test_regexp(self):
        assert serialize(FilterNode().regexp("name", "ki.*y")) == {"regexp": {"name": "ki.*y"}}

    def test_geo_distance_range(self):
        f = FilterNode().geo_distance_range("1km", "5km", "pin.location", "arc", 40.0, -70.0)
        assert to_json(f) == (
            '{"geo_distance_range":{"from":"1km","to":"5km",'
            '"pin.location":{"lat":40.0,"lon":-70.0},"distance_type":"arc"}}'
        )


class TestCompositeFilters:
    def test_bool_must_and_should(self):
        f = FilterNode().bool(
            must=[FilterNode().term("user", "kimchy")],
            should=[FilterNode().exists("tags"), FilterNode().missing("deleted")],
        )
        assert serialize(f) == {
            "bool": {
                "must": [{"term": {"user": "kimchy"}}],
                "should": [{"exists": {"field": "tags"}}, {"missing": {"field": "deleted"}}],
            }
        }

    def test_bool_omits_empty_lists(self):
        f = FilterNode().bool(must=[FilterNode().term("a", "b")])
        assert serialize(f) == {"bool": {"must": [{"term": {"a": "b"}}]}}

    def test_bool_replaces_wholesale(self):
        f = FilterNode().bool(must=[FilterNode().term("a", "b")]).bool(should=[FilterNode().exists("c")])
        assert serialize(f) == {"bool": {"should": [{"exists": {"field": "c"}}]}}

    def test_nested_without_inner_hits(self):
        f = FilterNode().nested("comments", FilterNode().term("comments.author", "bob"))
        assert to_json(f) == '{"nested":{"filter":{"term":{"comments.author":"bob"}},"path":"comments"}}'

    def test_nested_with_inner_hits_when_size_positive(self):
        f = FilterNode().nested("comments", FilterNode().exists("comments.body"), 5, 3)
        assert serialize(f) == {
            "nested": {
                "filter": {"exists": {"field": "comments.body"}},
                "path": "comments",
                "inner_hits": {"from": 5, "size": 3},
            }
        }

    def test_nested_requires_path(self):
        with pytest.raises(PreconditionError):
            FilterNode().nested("", FilterNode().exists("x"))

    def test_embedded_query(self):
        f = FilterNode().query(QueryNode().term("user", "kimchy"))
        assert serialize(f) == {"query": {"term": {"user": "kimchy"}}}

    def test_empty_filter_renders_empty_object(self):
        assert serialize(FilterNode()) == {}


class TestShapeSwitching:
    def test_switching_shape_raises_by_default(self):
        f = FilterNode().term("user", "kimchy")
        with pytest.raises(ShapeConflictError) as excinfo:
            f.exists("user")
        assert excinfo.value.current == "term"
        assert excinfo.value.requested == "exists"
        # node is left as it was
        assert serialize(f) == {"term": {"user": "kimchy"}}

    def test_relaxed_settings_let_last_shape_win(self):
        relaxed = DslSettings(strict_shapes=False)
        f = FilterNode(settings=relaxed).term("user", "kimchy").exists("user")
        assert serialize(f) == {"exists": {"field": "user"}}

    def test_relaxed_via_environment(self, monkeypatch):
        monkeypatch.setenv("SEARCHDSL_STRICT_SHAPES", "false")
        f = FilterNode().prefix("name", "ba").regexp("name", "b.*")
        assert serialize(f) == {"regexp": {"name": "b.*"}}


class TestAdd:
    def test_add_takes_over_exists(self):
        f = FilterNode().missing("a").add(FilterNode().exists("b"))
        assert serialize(f) == {"exists": {"field": "b"}}

    def test_add_replaces_range_wholesale(self):
        f = range_filter().gte("age", 18).add(range_filter().lt("price", 10))
        assert serialize(f) == {"range": {"price": {"lt": 10}}}

    def test_add_overrides_unrelated_shape(self):
        f = FilterNode().term("user", "kimchy").add(FilterNode().missing("deleted"))
        assert serialize(f) == {"missing": {"field": "deleted"}}

    def test_add_ignores_other_shapes(self):
        f = FilterNode().exists("a").add(FilterNode().term("user", "kimchy"))
        assert serialize(f) == {"exists": {"field": "a"}}

    def test_add_copies_the_shape(self):
        other = range_filter().gte("age", 18)
        f = FilterNode().add(other)
        other.lt("age", 30)
        assert serialize(f) == {"range": {"age": {"gte": 18}}}
