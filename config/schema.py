"""Custom OpenAPI schema hooks for drf-spectacular.

Every operation is put under exactly one feature tag so Swagger UI groups the
endpoints by domain instead of by URL prefix.
"""

from __future__ import annotations

from typing import Any

# Method names that contain operations in the OpenAPI path item
_HTTP_METHODS = {"get", "post", "put", "patch", "delete", "options", "head"}


PATTERN_TAGS = [
    ("/api/v1/auth/", "Authentication"),
    ("/api/v1/users", "Users"),
    ("/api/v1/neighborhoods", "Neighborhoods"),
    ("/api/v1/forum", "Forum"),
    ("/api/v1/marketplace", "Marketplace"),
    ("/api/v1/safety", "Safety"),
    ("/api/v1/messages", "Messages"),
    ("/api/v1/audit", "Audit"),
]

ALL_TAGS = [t for _, t in PATTERN_TAGS]


def assign_group_tag(path: str) -> str | None:
    """Return the first matching tag name for a given path."""
    for prefix, tag in PATTERN_TAGS:
        if path.startswith(prefix):
            return tag
    return None


def group_tags(result: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
    """Post-processing hook forcing one logical tag per operation."""
    paths = result.get("paths", {})
    for path, path_item in paths.items():
        tag = assign_group_tag(path)
        if not tag:
            continue
        for method, op_obj in path_item.items():
            if method.lower() not in _HTTP_METHODS or not isinstance(op_obj, dict):
                continue
            op_obj["tags"] = [tag]

    existing = {t.get("name") for t in result.get("tags", [])}
    tag_list = result.setdefault("tags", [])
    tag_list.extend({"name": tag} for tag in ALL_TAGS if tag not in existing)
    return result
