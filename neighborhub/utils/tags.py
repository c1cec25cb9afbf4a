"""Tag lists stored as a delimited string.

Tags are kept in a single ``CharField`` as ``",bikes,kids,"``: the leading and
trailing commas make ``tags__contains=",bikes,"`` an exact per-tag match on
every database backend.
"""

from __future__ import annotations

from collections.abc import Iterable

from django.db.models import Q
from rest_framework import serializers

TAG_SEPARATOR = ","
MAX_TAG_LENGTH = 30
MAX_TAGS = 10


def normalize_tags(values: Iterable[str] | str | None) -> list[str]:
    """Lowercase, strip and de-duplicate tags, keeping first-seen order."""
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(TAG_SEPARATOR)
    seen: list[str] = []
    for value in values:
        tag = str(value).strip().lower()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def encode_tags(values: Iterable[str] | str | None) -> str:
    tags = normalize_tags(values)
    if not tags:
        return ""
    return f"{TAG_SEPARATOR}{TAG_SEPARATOR.join(tags)}{TAG_SEPARATOR}"


def decode_tags(stored: str | None) -> list[str]:
    if not stored:
        return []
    return [tag for tag in stored.split(TAG_SEPARATOR) if tag]


def tag_filter(values: Iterable[str] | str | None, field: str = "tags") -> Q:
    """Match rows carrying any of the given tags."""
    query = Q()
    for tag in normalize_tags(values):
        query |= Q(**{f"{field}__contains": f"{TAG_SEPARATOR}{tag}{TAG_SEPARATOR}"})
    return query


class TagListField(serializers.ListField):
    """Serializer field exposing the stored tag string as a list.

    Accepts either a JSON list or a comma separated string on input.
    """

    child = serializers.CharField(max_length=MAX_TAG_LENGTH)

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.split(TAG_SEPARATOR)
        values = super().to_internal_value(data)
        if any(TAG_SEPARATOR in value for value in values):
            msg = "Tags cannot contain commas."
            raise serializers.ValidationError(msg)
        tags = normalize_tags(values)
        # Counted before encoding: field validators see the stored string
        if len(tags) > MAX_TAGS:
            msg = f"No more than {MAX_TAGS} tags are allowed."
            raise serializers.ValidationError(msg)
        return encode_tags(tags)

    def to_representation(self, data):
        if isinstance(data, str):
            return decode_tags(data)
        return normalize_tags(data)
