"""Final completeness check of the merged compat tree."""

from __future__ import annotations

import logging
from typing import Any

from .compat_models import COMPAT_KEY, version_added_of

LOGGER = logging.getLogger(__name__)


def find_missing_vendor_entries(node: Any, *, vendor: str, path: str = "") -> list[str]:
    """Report every support block listing other vendors but not `vendor`.

    Subtrees marked unsupported for `vendor` are not inspected. Findings are
    logged as errors and returned; they never abort the run.
    """
    if not isinstance(node, dict):
        LOGGER.error("Should not find a non-object entry in compat data: %s", path)
        return []

    if version_added_of(node, vendor) is False:
        return []

    missing: list[str] = []
    for key, child in node.items():
        if key == COMPAT_KEY:
            support = child.get("support") if isinstance(child, dict) else None
            if support and vendor not in support:
                vendors = ",".join(support)
                LOGGER.error("Missing %s entry in: %s (%s)", vendor, path, vendors)
                missing.append(path)
        else:
            missing.extend(find_missing_vendor_entries(child, vendor=vendor, path=f"{path}.{key}"))
    return missing
