"""Per-tier treatment of namespaces and the support value expected for their entries."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from webext_compat_generator.configuration.runtime_settings import NamespaceClassification
from webext_compat_generator.entry_collection import is_unsupported_entry


class NamespaceTreatment(str, Enum):
    """How the target handles a namespace it shares with the baseline browser."""

    REUSED = "reused"
    REIMPLEMENTED = "reimplemented"
    UNSUPPORTED = "unsupported"


def toolkit_treatment(
    namespace: str, classification: NamespaceClassification
) -> NamespaceTreatment:
    """Toolkit namespaces are reused unless listed otherwise."""
    if namespace in classification.unsupported_toolkit:
        return NamespaceTreatment.UNSUPPORTED
    if namespace in classification.reimplemented_toolkit:
        return NamespaceTreatment.REIMPLEMENTED
    return NamespaceTreatment.REUSED


def browser_treatment(
    namespace: str, classification: NamespaceClassification
) -> NamespaceTreatment:
    """Browser namespaces are unsupported unless listed otherwise."""
    if namespace in classification.supported_browser:
        return NamespaceTreatment.REUSED
    if namespace in classification.reimplemented_browser:
        return NamespaceTreatment.REIMPLEMENTED
    return NamespaceTreatment.UNSUPPORTED


def expected_support(
    treatment: NamespaceTreatment,
    entry_path: str,
    mail_entries: Mapping[str, Any],
) -> bool | None:
    """Return the support to assert for one entry, or None to keep the baseline value."""
    match treatment:
        case NamespaceTreatment.REUSED:
            return None
        case NamespaceTreatment.UNSUPPORTED:
            return False
        case NamespaceTreatment.REIMPLEMENTED:
            return entry_path in mail_entries and not is_unsupported_entry(
                mail_entries[entry_path]
            )
