"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CompatDataFiles:
    """Files written for one generated compat tree."""

    aggregate_path: Path
    namespace_dir: Path
    namespace_paths: tuple[Path, ...]
