"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SchemaSource:
    """One schema directory inside the source checkout."""

    path: Path
    skip_files: frozenset[str]


@dataclass(frozen=True)
class SourceLayout:
    """Schema directories of the three source tiers."""

    toolkit: SchemaSource
    browser: SchemaSource
    mail: SchemaSource


@dataclass(frozen=True)
class NamespaceClassification:
    """Which namespaces are trusted, re-authored or dropped, per source tier."""

    supported_browser: frozenset[str]
    reimplemented_browser: frozenset[str]
    unsupported_toolkit: frozenset[str]
    reimplemented_toolkit: frozenset[str]

    @property
    def reimplemented(self) -> frozenset[str]:
        """Return namespaces reimplemented from either tier."""
        return self.reimplemented_browser | self.reimplemented_toolkit


@dataclass(frozen=True)
class NotationRules:
    """Allow-lists steering flat parameter notation detection."""

    confirmed_flat_properties: tuple[str, ...]
    known_false_positive_flat_properties: tuple[str, ...]


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    target_vendor: str
    baseline_vendor: str
    sources: SourceLayout
    namespaces: NamespaceClassification
    notation: NotationRules
