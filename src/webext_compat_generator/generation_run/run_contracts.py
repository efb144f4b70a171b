"""Generation run entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for one generation run."""

    source_path: str
    baseline_path: str
    output_dir: str
    config_path: str | None = None
    override_path: str | None = None
    include_mail_extensions: bool = True
    minimize: bool = True


@dataclass(frozen=True)
class SchemaTiers:
    """Import-resolved namespace definitions of the three source tiers."""

    toolkit: list[dict[str, Any]]
    browser: list[dict[str, Any]]
    mail: list[dict[str, Any]]


@dataclass(frozen=True)
class CompatBuildResult:
    """In-memory outcome of merging the three tiers onto the baseline."""

    webextensions: dict[str, Any]
    applied_overrides: Mapping[str, Any] | None
    missing_vendor_entries: tuple[str, ...]
    diagnostics: tuple[str, ...]


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    aggregate_path: Path
    namespace_dir: Path
    namespace_count: int
    applied_overrides: Mapping[str, Any] | None
    missing_vendor_entries: tuple[str, ...]
