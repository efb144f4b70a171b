"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .config_scaffold_builder import build_default_configuration
from .runtime_settings import (
    Configuration,
    NamespaceClassification,
    NotationRules,
    SchemaSource,
    SourceLayout,
)

_SECTIONED_KEYS = ("sources", "namespaces", "notation")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str | None = None) -> Configuration:
    """Load and validate the configuration, falling back to the packaged defaults.

    Sections present in the user file replace the matching default section; for
    `sources`, `namespaces` and `notation` the replacement happens per sub-key.
    """
    parsed = _parse_document(build_default_configuration(), "default configuration")
    path: Path | None = None
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
        user_document = _parse_document(path.read_text(encoding="utf-8"), str(path))
        parsed = _overlay_sections(parsed, user_document)

    return Configuration(
        path=path,
        target_vendor=_require_non_empty_string(parsed.get("target_vendor"), "target_vendor"),
        baseline_vendor=_require_non_empty_string(
            parsed.get("baseline_vendor"), "baseline_vendor"
        ),
        sources=_parse_sources_section(parsed.get("sources")),
        namespaces=_parse_namespaces_section(parsed.get("namespaces")),
        notation=_parse_notation_section(parsed.get("notation")),
    )


def _parse_document(text: str, label: str) -> Mapping[str, Any]:
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {label}: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    return parsed


def _overlay_sections(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any]
) -> dict[str, Any]:
    merged = dict(defaults)
    for key, value in overrides.items():
        if key in _SECTIONED_KEYS and isinstance(value, Mapping):
            section = dict(_require_mapping(defaults.get(key), key))
            section.update(value)
            merged[key] = section
        else:
            merged[key] = value
    return merged


def _parse_sources_section(value: Any) -> SourceLayout:
    section = _require_mapping(value, "sources")
    return SourceLayout(
        toolkit=_parse_schema_source(section.get("toolkit"), "sources.toolkit"),
        browser=_parse_schema_source(section.get("browser"), "sources.browser"),
        mail=_parse_schema_source(section.get("mail"), "sources.mail"),
    )


def _parse_schema_source(value: Any, section_name: str) -> SchemaSource:
    section = _require_mapping(value, section_name)
    raw_path = _require_non_empty_string(section.get("path"), f"{section_name}.path")
    candidate = Path(raw_path)
    if candidate.is_absolute():
        raise ConfigurationError(f"{section_name}.path must be relative to the source checkout.")
    skip_files = _normalize_string_sequence(
        section.get("skip_files"), f"{section_name}.skip_files"
    )
    return SchemaSource(path=candidate, skip_files=frozenset(skip_files))


def _parse_namespaces_section(value: Any) -> NamespaceClassification:
    section = _require_mapping(value, "namespaces")
    classification = NamespaceClassification(
        supported_browser=_namespace_set(section, "supported_browser"),
        reimplemented_browser=_namespace_set(section, "reimplemented_browser"),
        unsupported_toolkit=_namespace_set(section, "unsupported_toolkit"),
        reimplemented_toolkit=_namespace_set(section, "reimplemented_toolkit"),
    )
    for label, first, second in (
        ("browser", classification.supported_browser, classification.reimplemented_browser),
        ("toolkit", classification.unsupported_toolkit, classification.reimplemented_toolkit),
    ):
        overlap = sorted(first & second)
        if overlap:
            raise ConfigurationError(
                f"namespaces: {label} namespaces listed twice: {', '.join(overlap)}"
            )
    return classification


def _namespace_set(section: Mapping[str, Any], key: str) -> frozenset[str]:
    return frozenset(_normalize_string_sequence(section.get(key), f"namespaces.{key}"))


def _parse_notation_section(value: Any) -> NotationRules:
    section = _require_mapping(value, "notation")
    return NotationRules(
        confirmed_flat_properties=_normalize_string_sequence(
            section.get("confirmed_flat_properties"), "notation.confirmed_flat_properties"
        ),
        known_false_positive_flat_properties=_normalize_string_sequence(
            section.get("known_false_positive_flat_properties"),
            "notation.known_false_positive_flat_properties",
        ),
    )


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped
