import pytest
from rest_framework import serializers

from neighborhub.utils.tags import TagListField
from neighborhub.utils.tags import decode_tags
from neighborhub.utils.tags import encode_tags
from neighborhub.utils.tags import normalize_tags
from neighborhub.utils.tags import tag_filter


def test_normalize_lowercases_strips_and_dedupes():
    assert normalize_tags([" Bikes", "kids", "bikes", ""]) == ["bikes", "kids"]


def test_normalize_accepts_comma_string():
    assert normalize_tags("Garden, tools ,,") == ["garden", "tools"]


def test_encoding_wraps_tags_in_separators():
    assert encode_tags(["a", "b"]) == ",a,b,"
    assert encode_tags([]) == ""
    assert decode_tags(",a,b,") == ["a", "b"]
    assert decode_tags("") == []


def test_tag_filter_matches_whole_tags_only():
    query = tag_filter("bike,kids")
    assert ("tags__contains", ",bike,") in query.children
    assert ("tags__contains", ",kids,") in query.children
    assert query.connector == "OR"


class TestTagListField:
    def test_round_trips_through_storage(self):
        field = TagListField()
        stored = field.run_validation(["Porch", "free"])
        assert stored == ",porch,free,"
        assert field.to_representation(stored) == ["porch", "free"]

    def test_accepts_comma_string(self):
        assert TagListField().run_validation("bike, Kids") == ",bike,kids,"

    def test_long_encoded_value_is_not_counted_as_elements(self):
        tags = [f"neighborhood-tag-{i}" for i in range(10)]
        stored = TagListField().run_validation(tags)
        assert decode_tags(stored) == tags

    def test_rejects_commas_inside_list_items(self):
        with pytest.raises(serializers.ValidationError):
            TagListField().run_validation(["a,b"])

    def test_rejects_too_many_tags(self):
        with pytest.raises(serializers.ValidationError) as exc:
            TagListField().run_validation([f"t{i}" for i in range(11)])
        assert "No more than 10 tags" in str(exc.value.detail)

    def test_duplicates_do_not_count_twice(self):
        stored = TagListField().run_validation([*(["same"] * 11), "other"])
        assert stored == ",same,other,"
