"""Seeding of the generated compat tree from the baseline dataset."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from typing import Any

from .compat_models import COMPAT_KEY, CompatTree, new_compat_leaf, version_added_of

LOGGER = logging.getLogger(__name__)


def seed_compat_tree(
    baseline: Mapping[str, Any],
    *,
    target_vendor: str,
    baseline_vendor: str,
    independent_namespaces: Collection[str] = (),
) -> CompatTree:
    """Copy the baseline `webextensions` tree with target-vendor support only.

    Every `__compat` node becomes `support.<target_vendor>.version_added` set to
    the baseline vendor's value, or False when it has none. Namespaces under
    `api` listed in `independent_namespaces` are seeded as False throughout, so
    their support is asserted from the local schemas only.
    """
    seeded: CompatTree = {}
    _seed_node(
        baseline,
        seeded,
        target_vendor=target_vendor,
        baseline_vendor=baseline_vendor,
        independent_namespaces=frozenset(independent_namespaces),
        path=(),
        force_unsupported=False,
    )
    return seeded


def _seed_node(
    baseline_node: Any,
    seeded_node: CompatTree,
    *,
    target_vendor: str,
    baseline_vendor: str,
    independent_namespaces: frozenset[str],
    path: tuple[str, ...],
    force_unsupported: bool,
) -> None:
    if not isinstance(baseline_node, Mapping):
        LOGGER.error("Should not find a non-object entry in baseline data: %s", ".".join(path))
        return

    for key, child in baseline_node.items():
        if key == COMPAT_KEY:
            version_added = False if force_unsupported else version_added_of(
                baseline_node, baseline_vendor
            )
            seeded_node[key] = new_compat_leaf(target_vendor, version_added or False)[COMPAT_KEY]
            continue
        child_path = (*path, key)
        if not isinstance(child, Mapping):
            LOGGER.error(
                "Should not find a non-object entry in baseline data: %s", ".".join(child_path)
            )
            continue
        _seed_node(
            child,
            seeded_node.setdefault(key, {}),
            target_vendor=target_vendor,
            baseline_vendor=baseline_vendor,
            independent_namespaces=independent_namespaces,
            path=child_path,
            force_unsupported=force_unsupported
            or (path == ("api",) and key in independent_namespaces),
        )
