"""Serialization of generated compat data to JSON files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from .report_models import CompatDataFiles

_NAMESPACE_WRITERS = 8


def output_stem(target_vendor: str, *, include_mail_extensions: bool) -> str:
    """Return the base name shared by the aggregate file and the namespace directory."""
    suffix = "mailextensions" if include_mail_extensions else "webextensions"
    return f"{target_vendor}_{suffix}"


def render_pretty_json(value: Any) -> str:
    """Render JSON with 4-space indentation and recursively sorted keys."""
    return json.dumps(value, indent=4, sort_keys=True, ensure_ascii=False) + "\n"


def write_pretty_json(path: Path, value: Any) -> Path:
    """Write one JSON file, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_pretty_json(value), encoding="utf-8")
    return path


def write_compat_data(
    webextensions: Mapping[str, Any], *, output_dir: Path | str, stem: str
) -> CompatDataFiles:
    """Write the aggregate file and one file per `api` namespace.

    Layout below `output_dir`:
      `<stem>.json` holding `{"webextensions": ...}` and
      `<stem>/api/<namespace>.json` holding `{"<namespace>": ...}`.
    Files already present in the namespace directory are removed first.

    Raises:
      OSError: If any file cannot be written.
    """
    destination = Path(output_dir)
    aggregate_path = write_pretty_json(
        destination / f"{stem}.json", {"webextensions": webextensions}
    )

    namespace_dir = destination / stem / "api"
    namespace_dir.mkdir(parents=True, exist_ok=True)
    for stale in namespace_dir.iterdir():
        if stale.is_file():
            stale.unlink()

    api = webextensions.get("api") or {}
    with ThreadPoolExecutor(max_workers=_NAMESPACE_WRITERS) as executor:
        futures = [
            executor.submit(write_pretty_json, namespace_dir / f"{name}.json", {name: subtree})
            for name, subtree in api.items()
        ]
        namespace_paths = tuple(future.result() for future in futures)

    return CompatDataFiles(
        aggregate_path=aggregate_path.resolve(),
        namespace_dir=namespace_dir.resolve(),
        namespace_paths=namespace_paths,
    )
