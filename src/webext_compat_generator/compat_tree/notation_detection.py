"""Detection of the parameter notation used in a compat tree scope.

The upstream dataset encodes "a named property of a function parameter" in four
different ways, sometimes mixed within one function:

- nested: `<param>.<prop>` (the default)
- flat: `<prop>` as a sibling of `<param>`
- `_value` suffix: `<prop>_value` as a sibling of `<param>`
- `_parameter` suffix: `<param>_<prop>_parameter` as a sibling of `<param>`

Checks run `_parameter`, then `_value`, then flat, and a later match
replaces an earlier one. Nested is the fallback. Flat notation is only acted
on for paths on the confirmed allow-list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from webext_compat_generator.configuration.runtime_settings import NotationRules

from .compat_models import CompatTree, Notation
from .update_diagnostics import UpdateDiagnostics

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotationTarget:
    """Where a logical sub-parameter lives: `container[key]`."""

    notation: Notation
    container: CompatTree
    key: str


def is_confirmed_flat_property(entry_path: str, rules: NotationRules) -> bool:
    """Return True when a path matches a confirmed flat prefix of the same depth."""
    depth = len(entry_path.split("."))
    return any(
        depth == len(prefix.split(".")) and entry_path.startswith(prefix)
        for prefix in rules.confirmed_flat_properties
    )


def is_known_false_positive_flat_property(entry_path: str, rules: NotationRules) -> bool:
    """Return True when a path starts with a known false-positive flat prefix."""
    return any(
        entry_path.startswith(prefix) for prefix in rules.known_false_positive_flat_properties
    )


def detect_notation(
    entry: CompatTree,
    item_name: str,
    parent: CompatTree | None,
    parent_item_name: str,
    entry_path: str,
    *,
    rules: NotationRules,
    diagnostics: UpdateDiagnostics,
    skip_flat_check: bool = False,
) -> NotationTarget:
    """Return the node holding `item_name` below `entry`.

    Args:
      entry: The current compat node, `parent[parent_item_name]`.
      item_name: Logical name of the sub-parameter being looked up.
      parent: The node containing `entry`.
      parent_item_name: The key of `entry` inside `parent`.
      entry_path: Dotted schema path of the sub-parameter, used for the
        allow-lists and diagnostics.
      rules: Flat notation allow-lists.
      diagnostics: Collector for mixed and unconfirmed notation findings.
      skip_flat_check: Do not report unconfirmed flat notation usage.
    """
    target: NotationTarget | None = None

    if parent is not None:
        parameter_keys = [
            key
            for key in parent
            if key.startswith(f"{parent_item_name}_") and key.endswith("_parameter")
        ]
        if parameter_keys:
            LOGGER.debug("Notation (_parameter): %s", ",".join(parameter_keys))
            target = NotationTarget(
                notation=Notation.PARAMETER_SUFFIX,
                container=parent,
                key=f"{parent_item_name}_{item_name}_parameter",
            )

        value_keys = [key for key in parent if key.endswith("_value")]
        if value_keys:
            LOGGER.debug("Notation (_value): %s", ",".join(value_keys))
            if target is not None:
                diagnostics.warning(f"Found MIXED notations for {entry_path}")
            target = NotationTarget(
                notation=Notation.VALUE_SUFFIX,
                container=parent,
                key=f"{item_name}_value",
            )

        if is_confirmed_flat_property(entry_path, rules):
            diagnostics.info(f"Accepted confirmed flat notation usage: {entry_path}")
            target = NotationTarget(
                notation=Notation.FLAT,
                container=parent,
                key=item_name,
            )
        elif not skip_flat_check and item_name in parent:
            LOGGER.debug("Notation (flat): %s", item_name)
            if target is not None:
                diagnostics.warning(f"Found MIXED notations: {entry_path}")
            if not is_known_false_positive_flat_property(entry_path, rules):
                diagnostics.info(f"Ignored unconfirmed flat notation usage: {entry_path}")

    if target is None:
        target = NotationTarget(notation=Notation.NESTED, container=entry, key=item_name)
    return target
