"""Merge of the schema tiers, the baseline and the overrides into one compat tree."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from webext_compat_generator.compat_tree import (
    CompatTreeUpdater,
    UpdateDiagnostics,
    apply_overrides,
    extract_webextensions,
    find_missing_vendor_entries,
    overlay_compat_trees,
    reduce_compat_tree,
    seed_compat_tree,
    sort_tree_keys,
)
from webext_compat_generator.configuration.runtime_settings import (
    Configuration,
    NamespaceClassification,
)
from webext_compat_generator.entry_collection import (
    collect_namespace_entries,
    is_unsupported_entry,
)

from .run_contracts import CompatBuildResult, SchemaTiers
from .tier_classification import (
    NamespaceTreatment,
    browser_treatment,
    expected_support,
    toolkit_treatment,
)

LOGGER = logging.getLogger(__name__)

TreatmentRule = Callable[[str, NamespaceClassification], NamespaceTreatment]


def build_compat_data(
    tiers: SchemaTiers,
    baseline: Mapping[str, Any],
    configuration: Configuration,
    *,
    override: Mapping[str, Any] | None = None,
    include_mail_extensions: bool = True,
    minimize: bool = True,
) -> CompatBuildResult:
    """Build the merged `webextensions` compat tree for the target vendor.

    Mail namespaces are collected first so reimplemented toolkit and browser
    namespaces can be checked against them. The namespace trees in `tiers` get
    their `$ref` placeholders resolved in place.
    """
    classification = configuration.namespaces
    vendor = configuration.target_vendor
    baseline_webextensions = extract_webextensions(baseline)

    generated = seed_compat_tree(
        baseline_webextensions,
        target_vendor=vendor,
        baseline_vendor=configuration.baseline_vendor,
        independent_namespaces=classification.reimplemented | classification.unsupported_toolkit,
    )
    diagnostics = UpdateDiagnostics()
    updater = CompatTreeUpdater(
        generated.setdefault("api", {}),
        vendor=vendor,
        notation_rules=configuration.notation,
        diagnostics=diagnostics,
    )

    LOGGER.debug("Scanning mail schema files")
    mail_entries = _collect_tier_entries(
        tiers.mail,
        universe=[
            *tiers.mail,
            *(
                namespace_obj
                for namespace_obj in tiers.toolkit
                if namespace_obj.get("namespace") not in classification.reimplemented_toolkit
            ),
        ],
    )

    shared_universe = [*tiers.browser, *tiers.toolkit]
    LOGGER.debug("Scanning toolkit schema files")
    _apply_shared_tier(
        tiers.toolkit,
        universe=shared_universe,
        treatment_rule=toolkit_treatment,
        mail_entries=mail_entries,
        updater=updater,
        classification=classification,
    )
    LOGGER.debug("Scanning browser schema files")
    _apply_shared_tier(
        tiers.browser,
        universe=shared_universe,
        treatment_rule=browser_treatment,
        mail_entries=mail_entries,
        updater=updater,
        classification=classification,
    )

    if include_mail_extensions:
        for namespace, entries in mail_entries.items():
            is_reimplemented = namespace in classification.reimplemented
            for entry_path, value in entries.items():
                updater.update(
                    entry_path,
                    not is_unsupported_entry(value),
                    skip_flat_check=not is_reimplemented,
                )

    diagnostics.emit(LOGGER)

    applied_overrides = None
    if override is not None:
        applied_overrides = apply_overrides(
            extract_webextensions(override), generated, vendor=vendor
        )

    webextensions = sort_tree_keys(overlay_compat_trees(baseline_webextensions, generated))
    if minimize:
        reduce_compat_tree(webextensions, vendor=vendor)
    missing = find_missing_vendor_entries(webextensions, vendor=vendor, path="webextensions")

    return CompatBuildResult(
        webextensions=webextensions,
        applied_overrides=applied_overrides,
        missing_vendor_entries=tuple(missing),
        diagnostics=diagnostics.messages,
    )


def _collect_tier_entries(
    namespaces: Sequence[dict[str, Any]], *, universe: Sequence[Mapping[str, Any]]
) -> dict[str, dict[str, Any]]:
    """Collect entries per namespace name, merging definitions split across files."""
    entries_by_namespace: dict[str, dict[str, Any]] = {}
    for namespace_obj in namespaces:
        entries = entries_by_namespace.setdefault(namespace_obj.get("namespace", ""), {})
        collect_namespace_entries(namespace_obj, entries, universe)
    return entries_by_namespace


def _apply_shared_tier(
    namespaces: Sequence[dict[str, Any]],
    *,
    universe: Sequence[Mapping[str, Any]],
    treatment_rule: TreatmentRule,
    mail_entries: Mapping[str, Mapping[str, Any]],
    updater: CompatTreeUpdater,
    classification: NamespaceClassification,
) -> None:
    for namespace_obj in namespaces:
        entries: dict[str, Any] = {}
        collect_namespace_entries(namespace_obj, entries, universe)
        namespace = namespace_obj.get("namespace", "")
        treatment = treatment_rule(namespace, classification)
        namespace_mail_entries = mail_entries.get(namespace, {})
        for entry_path in entries:
            expected = expected_support(treatment, entry_path, namespace_mail_entries)
            if expected is None:
                continue
            updater.update(entry_path, expected)
