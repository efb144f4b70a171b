"""Compat tree minimization service."""

from __future__ import annotations

import logging
from typing import Any

from .compat_models import COMPAT_KEY
from .tree_merging import canonical_json, sort_tree_keys

LOGGER = logging.getLogger(__name__)

# Paths are dotted from the `webextensions` root ("", ".api", ".api.tabs", ...).
# Only children of nodes deeper than namespace members are collapsed.
MIN_COLLAPSE_DEPTH = 3


def reduce_compat_tree(
    node: Any,
    *,
    vendor: str,
    path: str = "",
    min_depth: int = MIN_COLLAPSE_DEPTH,
) -> set[str]:
    """Delete children whose support data repeats their parent's, bottom-up.

    A child is removed only when the parent's own support lists `vendor` alone
    and the child subtree carries exactly that same support data. The tree is
    modified in place.

    Returns:
      The canonical JSON strings of every distinct support block in the subtree.
    """
    if not isinstance(node, dict):
        LOGGER.error("Should not find a non-object entry in compat data: %s", path)
        return set()

    compat_strings: set[str] = set()
    parent_vendors: list[str] = []
    parent_string = ""
    compat = node.get(COMPAT_KEY)
    support = compat.get("support") if isinstance(compat, dict) else None
    if support:
        sorted_support = sort_tree_keys(support)
        parent_vendors = list(sorted_support)
        parent_string = canonical_json(sorted_support)
        compat_strings.add(parent_string)

    for key in list(node):
        if key == COMPAT_KEY:
            continue
        child_strings = reduce_compat_tree(
            node[key], vendor=vendor, path=f"{path}.{key}", min_depth=min_depth
        )
        compat_strings |= child_strings
        if (
            len(path.split(".")) > min_depth
            and parent_vendors == [vendor]
            and child_strings == {parent_string}
        ):
            del node[key]

    return compat_strings
