"""Compat tree entities and node helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

COMPAT_KEY = "__compat"

VersionAdded = bool | str

CompatTree = dict[str, Any]


class Notation(str, Enum):
    """Physical encodings of a named sub-parameter in the compat tree."""

    NESTED = "nested"
    FLAT = "flat"
    VALUE_SUFFIX = "_value"
    PARAMETER_SUFFIX = "_parameter"


def new_compat_leaf(vendor: str, version_added: VersionAdded) -> CompatTree:
    """Return a fresh node carrying a single vendor support statement."""
    return {COMPAT_KEY: {"support": {vendor: {"version_added": version_added}}}}


def support_statement(node: Any, vendor: str) -> Mapping[str, Any] | None:
    """Return the support statement of `vendor` on a compat node, if any."""
    if not isinstance(node, Mapping):
        return None
    compat = node.get(COMPAT_KEY)
    if not isinstance(compat, Mapping):
        return None
    support = compat.get("support")
    if not isinstance(support, Mapping):
        return None
    statement = support.get(vendor)
    if isinstance(statement, list):
        statement = statement[0] if statement else None
    return statement if isinstance(statement, Mapping) else None


def version_added_of(node: Any, vendor: str) -> Any:
    """Return `__compat.support.<vendor>.version_added` of a node, or None."""
    statement = support_statement(node, vendor)
    return None if statement is None else statement.get("version_added")


def set_version_added(node: CompatTree, vendor: str, version_added: VersionAdded) -> None:
    """Store a vendor support value on a node, keeping other vendors' statements."""
    compat = node.get(COMPAT_KEY)
    if not isinstance(compat, dict):
        compat = node[COMPAT_KEY] = {}
    support = compat.get("support")
    if not isinstance(support, dict):
        support = compat["support"] = {}
    support[vendor] = {"version_added": version_added}
