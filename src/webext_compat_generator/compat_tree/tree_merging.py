"""Structural helpers for compat trees."""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from typing import Any


def overlay_compat_trees(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Return `base` with `overlay` merged on top.

    Objects present on both sides are merged recursively. Any other value from
    `overlay` replaces a non-object value of `base`; an object in `base` is never
    replaced by a non-object from `overlay`. Neither input is modified.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in overlay.items():
        current = merged.get(key)
        if not isinstance(current, Mapping):
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, Mapping):
            merged[key] = overlay_compat_trees(current, value)
    return merged


def sort_tree_keys(value: Any) -> Any:
    """Return a copy of `value` with all object keys sorted recursively."""
    if isinstance(value, Mapping):
        return {key: sort_tree_keys(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [sort_tree_keys(element) for element in value]
    return value


def canonical_json(value: Any) -> str:
    """Serialize `value` compactly with sorted keys, for equality comparisons."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"))
