"""Compat tree update service."""

from __future__ import annotations

import logging

from webext_compat_generator.configuration.runtime_settings import NotationRules
from webext_compat_generator.schema_loading.schema_models import MANIFEST_NAMESPACE

from .compat_models import (
    CompatTree,
    VersionAdded,
    new_compat_leaf,
    set_version_added,
    version_added_of,
)
from .notation_detection import detect_notation
from .update_diagnostics import UpdateDiagnostics

LOGGER = logging.getLogger(__name__)

_MEMBER_TYPES = frozenset({"functions", "events", "properties", "types"})
_PARAMETERIZED_MEMBER_TYPES = frozenset({"functions", "events", "types"})
_SUB_ENTRY_TYPES = frozenset({"properties", "parameters", "enum"})


class CompatTreeUpdater:
    """Applies expected support values to the `api` subtree of a compat tree.

    The tree is modified in place. Unsupported is absorbing: a False terminal
    replaces the whole node, while False on the way down only creates missing
    nodes. Supported values overwrite missing or False values and never
    downgrade an existing truthy value.
    """

    def __init__(
        self,
        api_tree: CompatTree,
        *,
        vendor: str,
        notation_rules: NotationRules,
        diagnostics: UpdateDiagnostics | None = None,
    ) -> None:
        self.api_tree = api_tree
        self.vendor = vendor
        self.notation_rules = notation_rules
        self.diagnostics = diagnostics if diagnostics is not None else UpdateDiagnostics()

    def update(
        self,
        entry_path: str,
        version_added: VersionAdded,
        *,
        skip_flat_check: bool = False,
    ) -> None:
        """Apply `version_added` to the node addressed by a dotted schema entry path."""
        parts = entry_path.split(".")
        namespace, entry_type, entry_name = (parts + ["", ""])[:3]
        walked = [namespace]
        LOGGER.debug("Processing %s : %s", entry_path, version_added)

        if not namespace or namespace == MANIFEST_NAMESPACE:
            return
        if not self._apply(self.api_tree, namespace, walked, entry_path, version_added):
            return

        if entry_type in _MEMBER_TYPES and entry_name:
            walked += [entry_type, entry_name]
            namespace_node = self.api_tree[namespace]
            if not self._apply(namespace_node, entry_name, walked, entry_path, version_added):
                return
        else:
            LOGGER.debug("  skipped %s %s %s", namespace, entry_type, entry_name)

        if entry_type in _PARAMETERIZED_MEMBER_TYPES and entry_name and len(parts) > 3:
            parent_key = namespace
            parent = self.api_tree[namespace]
            entry = parent[entry_name]
            for index in range(3, len(parts), 2):
                sub_type = parts[index]
                sub_name = parts[index + 1] if index + 1 < len(parts) else ""
                walked += [sub_type, sub_name]
                if not sub_type or not sub_name or sub_name == "callback":
                    LOGGER.debug("  finished (not enough data or callback)")
                    return
                if sub_type not in _SUB_ENTRY_TYPES:
                    LOGGER.debug("  finished (ignore group: %s)", sub_type)
                    break

                target = detect_notation(
                    entry,
                    sub_name,
                    parent,
                    parent_key,
                    ".".join(walked),
                    rules=self.notation_rules,
                    diagnostics=self.diagnostics,
                    skip_flat_check=skip_flat_check,
                )
                if not self._apply(
                    target.container, target.key, walked, entry_path, version_added
                ):
                    return
                parent_key = target.key
                parent = target.container
                entry = parent[target.key]

        if len(parts) > 2:
            LOGGER.debug("IGNORED for expected %s : %s", version_added, entry_path)

    def _apply(
        self,
        container: CompatTree,
        key: str,
        walked: list[str],
        entry_path: str,
        version_added: VersionAdded,
    ) -> bool:
        """Update `container[key]`; return True when the walk continues below it."""
        walked_path = ".".join(walked)
        is_terminal = walked_path == entry_path
        LOGGER.debug("  handling: %s / %s", walked_path, entry_path)

        if not version_added:
            if is_terminal:
                LOGGER.debug("  replacing: %s", entry_path)
                container[key] = new_compat_leaf(self.vendor, False)
                return False
            if key in container:
                return True
            LOGGER.debug("  adding intermediate: %s", walked_path)
            container[key] = new_compat_leaf(self.vendor, False)
            return True

        if key not in container:
            LOGGER.debug("  adding: %s : %s", version_added, walked_path)
            container[key] = new_compat_leaf(self.vendor, version_added)
        elif not version_added_of(container[key], self.vendor):
            LOGGER.debug("  setting: %s : %s", version_added, walked_path)
            set_version_added(container[key], self.vendor, version_added)

        if is_terminal:
            LOGGER.debug("  finished: %s", entry_path)
            return False
        return True
