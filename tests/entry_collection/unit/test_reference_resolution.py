"""Entry collection and `$ref` resolution tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest
from webext_compat_generator.entry_collection.reference_resolution import (
    collect_namespace_entries,
    find_ref_target,
    is_unsupported_entry,
)


def _tabs_namespace() -> dict[str, Any]:
    return {
        "namespace": "tabs",
        "types": [
            {
                "id": "Tab",
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "status": {"type": "string", "enum": ["loading", "complete"]},
                },
            }
        ],
        "functions": [
            {
                "name": "get",
                "type": "function",
                "parameters": [
                    {"name": "tabId", "type": "integer"},
                    {
                        "name": "callback",
                        "type": "function",
                        "parameters": [{"name": "tab", "$ref": "Tab"}],
                    },
                ],
            }
        ],
    }


def _collect(namespace_obj: dict[str, Any], universe: list[dict[str, Any]]) -> dict[str, Any]:
    entries: dict[str, Any] = {}
    collect_namespace_entries(namespace_obj, entries, universe)
    return entries


def test_records_dotted_paths_for_members_and_enum_values() -> None:
    namespace_obj = _tabs_namespace()

    entries = _collect(namespace_obj, [namespace_obj])

    assert {
        "tabs",
        "tabs.types.Tab",
        "tabs.types.Tab.properties",
        "tabs.types.Tab.properties.id",
        "tabs.types.Tab.properties.status",
        "tabs.functions.get",
        "tabs.functions.get.parameters.tabId",
        "tabs.functions.get.parameters.callback",
        "tabs.functions.get.parameters.callback.parameters.tab",
    } <= set(entries)
    assert entries["tabs.types.Tab.properties.status.enum.loading"] == "loading"
    assert entries["tabs.types.Tab.properties.status.enum.complete"] == "complete"
    assert entries["tabs"] is namespace_obj


def test_resolved_ref_is_merged_and_walked() -> None:
    namespace_obj = _tabs_namespace()

    entries = _collect(namespace_obj, [namespace_obj])

    tab_parameter = entries["tabs.functions.get.parameters.callback.parameters.tab"]
    assert "$ref" not in tab_parameter
    assert "id" not in tab_parameter
    assert tab_parameter["name"] == "tab"
    assert tab_parameter["type"] == "object"
    tab_prefix = "tabs.functions.get.parameters.callback.parameters.tab"
    assert entries[f"{tab_prefix}.properties.status.enum.complete"] == "complete"


def test_each_ref_gets_an_independent_copy() -> None:
    namespace_obj = {
        "namespace": "windows",
        "types": [{"id": "Bounds", "type": "object", "properties": {"left": {"type": "integer"}}}],
        "functions": [
            {"name": "create", "parameters": [{"name": "bounds", "$ref": "Bounds"}]},
            {"name": "update", "parameters": [{"name": "bounds", "$ref": "Bounds"}]},
        ],
    }

    entries = _collect(namespace_obj, [namespace_obj])
    created = entries["windows.functions.create.parameters.bounds"]
    updated = entries["windows.functions.update.parameters.bounds"]
    created["properties"]["left"]["type"] = "number"

    assert created is not updated
    assert updated["properties"]["left"]["type"] == "integer"
    assert namespace_obj["types"][0]["properties"]["left"]["type"] == "integer"


def test_self_referential_type_terminates() -> None:
    namespace_obj = {
        "namespace": "bookmarks",
        "types": [
            {
                "id": "Node",
                "type": "object",
                "properties": {"children": {"type": "array", "items": {"$ref": "Node"}}},
            }
        ],
    }

    entries = _collect(namespace_obj, [namespace_obj])

    resolved_once = entries["bookmarks.types.Node.properties.children.items"]
    assert resolved_once["type"] == "object"
    nested = entries["bookmarks.types.Node.properties.children.items.properties.children.items"]
    assert nested == {"$ref": "Node"}


def test_ref_search_prefers_requested_then_current_namespace() -> None:
    manifest = {"namespace": "manifest", "types": [{"id": "Url", "type": "string"}]}
    other = {"namespace": "other", "types": [{"id": "Shared", "type": "boolean"}]}
    namespace_obj = {
        "namespace": "foo",
        "types": [{"id": "Url", "type": "integer"}],
        "properties": {
            "qualified": {"$ref": "manifest.Url"},
            "local": {"$ref": "Url"},
            "anywhere": {"$ref": "Shared"},
        },
    }

    entries = _collect(namespace_obj, [manifest, namespace_obj, other])

    assert entries["foo.properties.qualified"]["type"] == "string"
    assert entries["foo.properties.local"]["type"] == "integer"
    assert entries["foo.properties.anywhere"]["type"] == "boolean"


def test_missing_ref_is_reported_and_left_in_place(caplog: pytest.LogCaptureFixture) -> None:
    namespace_obj = {"namespace": "idle", "functions": [{"name": "query", "$ref": "Missing"}]}

    with caplog.at_level(logging.WARNING):
        entries = _collect(namespace_obj, [namespace_obj])

    assert entries["idle.functions.query"]["$ref"] == "Missing"
    assert "Missing requested $ref: Missing (Missing)" in caplog.text


def test_find_ref_target_returns_a_copy() -> None:
    namespace_obj = {"namespace": "tabs", "types": [{"id": "Tab", "type": "object"}]}

    found = find_ref_target("tabs.Tab", "windows.functions.get", [namespace_obj])

    assert found == {"id": "Tab", "type": "object"}
    assert found is not namespace_obj["types"][0]


def test_choices_do_not_add_a_path_segment() -> None:
    namespace_obj = {
        "namespace": "menus",
        "properties": {
            "icons": {"choices": [{"type": "string"}, {"type": "object", "properties": {}}]},
        },
    }

    entries = _collect(namespace_obj, [namespace_obj])

    assert "menus.properties.icons.properties" in entries
    assert not any("choices" in path for path in entries)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({"name": "discard", "unsupported": True}, True),
        ({"name": "discard", "unsupported": False}, False),
        ({"name": "discard"}, False),
        ("loading", False),
    ],
)
def test_is_unsupported_entry(value: object, expected: bool) -> None:
    assert is_unsupported_entry(value) is expected
