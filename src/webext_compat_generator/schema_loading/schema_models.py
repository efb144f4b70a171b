"""Schema loading entities."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

MANIFEST_NAMESPACE = "manifest"


class SchemaNodeKind(str, Enum):
    """Shape of one value inside a namespace definition tree."""

    IMPORT_PLACEHOLDER = "import_placeholder"
    REF_PLACEHOLDER = "ref_placeholder"
    NAMESPACE = "namespace"
    MEMBER = "member"
    CONTAINER = "container"
    SEQUENCE = "sequence"
    LEAF = "leaf"


def classify_schema_node(value: Any) -> SchemaNodeKind:
    """Return the kind of a schema value.

    Placeholders take precedence over the identity fields, so a parameter like
    `{"name": "tab", "$ref": "Tab"}` is a ref placeholder.
    """
    if isinstance(value, list):
        return SchemaNodeKind.SEQUENCE
    if not isinstance(value, Mapping):
        return SchemaNodeKind.LEAF
    if "$import" in value:
        return SchemaNodeKind.IMPORT_PLACEHOLDER
    if isinstance(value.get("$ref"), str) and value["$ref"]:
        return SchemaNodeKind.REF_PLACEHOLDER
    if isinstance(value.get("namespace"), str) and value["namespace"]:
        return SchemaNodeKind.NAMESPACE
    if node_label(value) is not None:
        return SchemaNodeKind.MEMBER
    return SchemaNodeKind.CONTAINER


def node_label(value: Mapping[str, Any]) -> str | None:
    """Return the path segment a schema object contributes: its name, else its id."""
    for key in ("name", "id"):
        label = value.get(key)
        if label and not isinstance(label, (Mapping, list)):
            return scalar_segment(label)
    return None


def scalar_segment(value: Any) -> str:
    """Render a scalar the way it appears inside a dotted entry path."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def find_definition(value: Any, search: str) -> Mapping[str, Any] | None:
    """Depth-first search for the first object whose `namespace` or `id` equals `search`."""
    if isinstance(value, list):
        for element in value:
            found = find_definition(element, search)
            if found is not None:
                return found
        return None
    if not isinstance(value, Mapping):
        return None
    if value.get("namespace") == search or value.get("id") == search:
        return value
    for element in value.values():
        found = find_definition(element, search)
        if found is not None:
            return found
    return None
