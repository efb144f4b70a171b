"""Manual override application service."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from .compat_models import COMPAT_KEY, support_statement

LOGGER = logging.getLogger(__name__)


def apply_overrides(
    override: Any,
    generated: dict[str, Any],
    *,
    vendor: str,
    path: str = "webextensions",
) -> dict[str, Any] | None:
    """Force override values into the generated tree and return what changed.

    An override support value is skipped when it is missing, equal to the
    generated value, or `True` while the generated value is a version string.
    Subtrees missing from the generated tree are copied in whole.

    Returns:
      A sparse tree of the overrides actually applied, or None when nothing changed.
    """
    if not isinstance(override, Mapping):
        LOGGER.error("Should not find a non-object entry in override data: %s", path)
        return None

    applied: dict[str, Any] = {}
    for key, override_value in override.items():
        if key == COMPAT_KEY:
            override_statement = support_statement(override, vendor)
            if _should_replace(support_statement(generated, vendor), override_statement):
                applied[key] = copy.deepcopy(override_value)
                generated[key] = {
                    "support": {vendor: copy.deepcopy(override_value["support"][vendor])}
                }
        elif isinstance(generated.get(key), dict):
            child_applied = apply_overrides(
                override_value, generated[key], vendor=vendor, path=f"{path}.{key}"
            )
            if child_applied:
                applied[key] = child_applied
        else:
            generated[key] = copy.deepcopy(override_value)
            applied[key] = copy.deepcopy(override_value)

    return applied or None


def _should_replace(
    current: Mapping[str, Any] | None, override: Mapping[str, Any] | None
) -> bool:
    if override is None or "version_added" not in override:
        return False
    current_value = None if current is None else current.get("version_added")
    override_value = override["version_added"]
    if current_value == override_value and type(current_value) is type(override_value):
        return False
    return not (isinstance(current_value, str) and override_value is True)
