"""Entry collection exports."""

from .reference_resolution import (
    EntryMap,
    collect_namespace_entries,
    find_ref_target,
    is_unsupported_entry,
)

__all__ = [
    "EntryMap",
    "collect_namespace_entries",
    "find_ref_target",
    "is_unsupported_entry",
]
