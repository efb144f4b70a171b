"""Generation run use-case service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from webext_compat_generator.compat_tree import extract_webextensions, replace_webextensions
from webext_compat_generator.configuration import (
    ConfigurationError,
    SchemaSource,
    SourceLayout,
    load_configuration,
)
from webext_compat_generator.results_writing import output_stem, write_compat_data
from webext_compat_generator.results_writing.compat_data_writer import write_pretty_json
from webext_compat_generator.schema_loading import (
    JsonDocumentError,
    SchemaLoadError,
    load_json_document,
    load_namespaces,
    resolve_imports,
)

from .compat_data_builder import build_compat_data
from .run_contracts import GenerationOutcome, GenerationRequest, SchemaTiers


class GenerationError(Exception):
    """Raised when a generation run cannot be completed."""


def execute_compat_generation(request: GenerationRequest) -> GenerationOutcome:
    """Execute one full generation run and write its output files."""
    try:
        configuration = load_configuration(request.config_path)
        baseline = _load_compat_document(request.baseline_path, "baseline")
        override = (
            _load_compat_document(request.override_path, "override")
            if request.override_path
            else None
        )
        tiers = load_schema_tiers(Path(request.source_path), configuration.sources)
    except (ConfigurationError, SchemaLoadError, JsonDocumentError) as exc:
        raise GenerationError(str(exc)) from exc

    result = build_compat_data(
        tiers,
        baseline,
        configuration,
        override=override,
        include_mail_extensions=request.include_mail_extensions,
        minimize=request.minimize,
    )

    stem = output_stem(
        configuration.target_vendor, include_mail_extensions=request.include_mail_extensions
    )
    try:
        files = write_compat_data(result.webextensions, output_dir=request.output_dir, stem=stem)
    except OSError as exc:
        raise GenerationError(f"Failed to write compat data: {exc}") from exc

    return GenerationOutcome(
        aggregate_path=files.aggregate_path,
        namespace_dir=files.namespace_dir,
        namespace_count=len(files.namespace_paths),
        applied_overrides=result.applied_overrides,
        missing_vendor_entries=result.missing_vendor_entries,
    )


def execute_dataset_export(baseline_path: str, generated_path: str, output_path: str) -> Path:
    """Write a full dataset whose `webextensions` section comes from a generated file."""
    try:
        dataset = _load_compat_document(baseline_path, "baseline")
        generated = _load_compat_document(generated_path, "generated compat data")
        exported = replace_webextensions(dataset, generated)
    except (JsonDocumentError, ValueError) as exc:
        raise GenerationError(str(exc)) from exc
    try:
        return write_pretty_json(Path(output_path), exported).resolve()
    except OSError as exc:
        raise GenerationError(f"Failed to write dataset: {exc}") from exc


def load_schema_tiers(source_root: Path, layout: SourceLayout) -> SchemaTiers:
    """Load and import-resolve the toolkit, browser and mail schema directories."""
    return SchemaTiers(
        toolkit=_load_tier(source_root, layout.toolkit),
        browser=_load_tier(source_root, layout.browser),
        mail=_load_tier(source_root, layout.mail),
    )


def _load_tier(source_root: Path, source: SchemaSource) -> list[dict[str, Any]]:
    namespaces = load_namespaces([source_root / source.path], skip_files=source.skip_files)
    return resolve_imports(namespaces)


def _load_compat_document(path: str, label: str) -> Mapping[str, Any]:
    document = load_json_document(path)
    if not isinstance(document, Mapping):
        raise JsonDocumentError(f"The {label} file must contain a JSON object: {path}")
    try:
        extract_webextensions(document)
    except ValueError as exc:
        raise JsonDocumentError(f"Invalid {label} file {path}: {exc}") from exc
    return document
