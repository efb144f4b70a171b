"""Schema directory loading tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
from webext_compat_generator.schema_loading.schema_reader import (
    SchemaLoadError,
    list_schema_files,
    load_namespaces,
)


def _write_schema(directory: Path, name: str, document: Any) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("// License header\n" + json.dumps(document), encoding="utf-8")
    return path


def test_lists_json_files_in_name_order_without_skipped(tmp_path: Path) -> None:
    _write_schema(tmp_path, "windows.json", [])
    _write_schema(tmp_path, "alarms.json", [])
    _write_schema(tmp_path, "test.json", [])
    (tmp_path / "README.txt").write_text("ignored", encoding="utf-8")
    (tmp_path / "nested.json").mkdir()

    files = list_schema_files(tmp_path, {"test.json"})

    assert [path.name for path in files] == ["alarms.json", "windows.json"]


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(SchemaLoadError, match="Unable to read schema directory"):
        list_schema_files(tmp_path / "missing")


def test_merges_manifest_fragments_into_first_namespace(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    _write_schema(
        tmp_path / "toolkit",
        "alarms.json",
        [
            {
                "namespace": "manifest",
                "description": "dropped",
                "types": [{"$extend": "Permission", "choices": []}],
            },
            {"namespace": "alarms", "functions": [{"name": "create"}]},
        ],
    )
    _write_schema(
        tmp_path / "browser",
        "tabs.json",
        [
            {"namespace": "manifest", "types": [{"id": "TabId", "type": "integer"}]},
            {"namespace": "tabs", "functions": []},
        ],
    )

    with caplog.at_level(logging.ERROR):
        namespaces = load_namespaces([tmp_path / "toolkit", tmp_path / "browser"])

    assert [item["namespace"] for item in namespaces] == ["manifest", "alarms", "tabs"]
    assert namespaces[0] == {
        "namespace": "manifest",
        "types": [
            {"$extend": "Permission", "choices": []},
            {"id": "TabId", "type": "integer"},
        ],
    }
    assert "manifest.description cannot be merged" in caplog.text


def test_skips_non_array_files_and_non_object_entries(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    _write_schema(tmp_path, "broken.json", {"namespace": "broken"})
    _write_schema(tmp_path, "mixed.json", ["text", {"namespace": "idle"}])
    _write_schema(tmp_path, "skipped.json", [{"namespace": "skipped"}])

    with caplog.at_level(logging.ERROR):
        namespaces = load_namespaces([tmp_path], skip_files={"skipped.json"})

    assert namespaces == [{"namespace": "manifest"}, {"namespace": "idle"}]
    assert "broken.json must contain a JSON array" in caplog.text
    assert "mixed.json contains a non-object namespace" in caplog.text


def test_invalid_schema_file_raises(tmp_path: Path) -> None:
    (tmp_path / "bad.json").write_text("[{]", encoding="utf-8")

    with pytest.raises(SchemaLoadError, match="bad.json"):
        load_namespaces([tmp_path])
