"""`$ref` resolution and schema entry collection service."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from webext_compat_generator.schema_loading.schema_models import (
    MANIFEST_NAMESPACE,
    SchemaNodeKind,
    classify_schema_node,
    find_definition,
    node_label,
    scalar_segment,
)

LOGGER = logging.getLogger(__name__)

EntryMap = MutableMapping[str, Any]


def collect_namespace_entries(
    namespace_obj: MutableMapping[str, Any],
    entries: EntryMap,
    universe: Sequence[Mapping[str, Any]],
) -> None:
    """Resolve `$ref` placeholders of one namespace and record its entries.

    The namespace tree is modified in place: every resolvable `$ref` node gets
    a deep copy of the referenced definition merged into it and loses its `$ref`
    and `id` keys. `entries` maps each reachable dotted path to the node itself
    (so later lookups see resolved content), and each enum value to the literal.

    A `$ref` already resolved further up the same branch is left in place,
    which keeps self-referential types finite.
    """
    _walk(
        namespace_obj,
        entries=entries,
        universe=universe,
        parent_key=None,
        handled_refs=frozenset(),
        path="",
    )


def is_unsupported_entry(value: Any) -> bool:
    """Return True when a collected entry is flagged `unsupported` in its schema."""
    return isinstance(value, Mapping) and bool(value.get("unsupported"))


def find_ref_target(
    ref: str, current_path: str, universe: Sequence[Mapping[str, Any]]
) -> dict[str, Any] | None:
    """Return a deep copy of the definition a `$ref` points to, or None.

    Namespaces are searched in order: the one named in the ref, the current
    one, `manifest`, then all others.
    """
    parts = ref.split(".")
    target_id = parts[-1]
    requested_namespace = parts[0] if len(parts) > 1 else None
    current_namespace = current_path.split(".")[0]
    search_order = dict.fromkeys(
        [
            requested_namespace,
            current_namespace,
            MANIFEST_NAMESPACE,
            *(namespace_obj.get("namespace") for namespace_obj in universe),
        ]
    )
    for search_namespace in search_order:
        if not search_namespace:
            continue
        for namespace_obj in universe:
            if namespace_obj.get("namespace") != search_namespace:
                continue
            found = find_definition(namespace_obj, target_id)
            if found is not None:
                return copy.deepcopy(dict(found))
    LOGGER.warning("Missing requested $ref: %s (%s)", target_id, ref)
    return None


def _walk(
    value: Any,
    *,
    entries: EntryMap,
    universe: Sequence[Mapping[str, Any]],
    parent_key: str | None,
    handled_refs: frozenset[str],
    path: str,
) -> None:
    match classify_schema_node(value):
        case SchemaNodeKind.LEAF:
            if parent_key == "enum":
                entries[f"{path}.{scalar_segment(value)}"] = value
            return
        case SchemaNodeKind.SEQUENCE:
            for element in value:
                _walk(
                    element,
                    entries=entries,
                    universe=universe,
                    parent_key=parent_key,
                    handled_refs=handled_refs,
                    path=path,
                )
            return
        case (
            SchemaNodeKind.REF_PLACEHOLDER
            | SchemaNodeKind.IMPORT_PLACEHOLDER
            | SchemaNodeKind.NAMESPACE
            | SchemaNodeKind.MEMBER
            | SchemaNodeKind.CONTAINER
        ):
            _walk_object(
                value,
                entries=entries,
                universe=universe,
                handled_refs=handled_refs,
                path=path,
            )


def _walk_object(
    value: MutableMapping[str, Any],
    *,
    entries: EntryMap,
    universe: Sequence[Mapping[str, Any]],
    handled_refs: frozenset[str],
    path: str,
) -> None:
    namespace_name = value.get("namespace")
    if isinstance(namespace_name, str) and namespace_name:
        path = namespace_name
    label = node_label(value)
    if label is not None:
        path = f"{path}.{label}"
    if path:
        entries[path] = value
        LOGGER.debug("%s", path)

    ref = value.get("$ref")
    if isinstance(ref, str) and ref and ref not in handled_refs:
        target = find_ref_target(ref, path, universe)
        if target is not None:
            handled_refs = handled_refs | {ref}
            value.update(target)
            value.pop("$ref", None)
            value.pop("id", None)

    for key in list(value):
        _walk(
            value[key],
            entries=entries,
            universe=universe,
            parent_key=key,
            handled_refs=handled_refs,
            path=path if key == "choices" else f"{path}.{key}",
        )
