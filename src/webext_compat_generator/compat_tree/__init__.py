"""Compat tree exports."""

from .baseline_seeding import seed_compat_tree
from .compat_models import COMPAT_KEY, Notation, new_compat_leaf, version_added_of
from .consistency_check import find_missing_vendor_entries
from .dataset_export import extract_webextensions, replace_webextensions
from .notation_detection import NotationTarget, detect_notation
from .override_application import apply_overrides
from .tree_merging import canonical_json, overlay_compat_trees, sort_tree_keys
from .tree_reduction import reduce_compat_tree
from .tree_updater import CompatTreeUpdater
from .update_diagnostics import UpdateDiagnostics

__all__ = [
    "COMPAT_KEY",
    "CompatTreeUpdater",
    "Notation",
    "NotationTarget",
    "UpdateDiagnostics",
    "apply_overrides",
    "canonical_json",
    "detect_notation",
    "extract_webextensions",
    "find_missing_vendor_entries",
    "new_compat_leaf",
    "overlay_compat_trees",
    "reduce_compat_tree",
    "replace_webextensions",
    "seed_compat_tree",
    "sort_tree_keys",
    "version_added_of",
]
