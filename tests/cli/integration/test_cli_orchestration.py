"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
from webext_compat_generator.cli import cli


def _write_json(path: Path, document: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def _compat(vendor: str, version_added: Any) -> dict[str, Any]:
    return {"__compat": {"support": {vendor: {"version_added": version_added}}}}


def _write_checkout(root: Path) -> Path:
    _write_json(
        root / "toolkit/components/extensions/schemas/alarms.json",
        [{"namespace": "alarms", "functions": [{"name": "create", "type": "function"}]}],
    )
    _write_json(
        root / "browser/components/extensions/schemas/tabs.json",
        [{"namespace": "tabs", "functions": [{"name": "create", "type": "function"}]}],
    )
    _write_json(
        root / "comm/mail/components/extensions/schemas/tabs.json",
        [{"namespace": "tabs", "functions": [{"name": "create", "type": "function"}]}],
    )
    return root


def _write_baseline(path: Path) -> Path:
    return _write_json(
        path,
        {
            "browsers": {},
            "webextensions": {
                "api": {
                    "alarms": {**_compat("firefox", "45"), "create": _compat("firefox", "45")},
                    "tabs": {**_compat("firefox", "45"), "create": _compat("firefox", "45")},
                }
            },
        },
    )


def _generate_args(tmp_path: Path) -> list[str]:
    return [
        "generate",
        "--source",
        str(_write_checkout(tmp_path / "source")),
        "--baseline",
        str(_write_baseline(tmp_path / "data.json")),
        "--output-dir",
        str(tmp_path / "out"),
    ]


def test_generate_command_writes_compat_data(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, _generate_args(tmp_path))

    assert result.exit_code == 0, result.output
    aggregate_path = tmp_path / "out" / "thunderbird_mailextensions.json"
    assert result.stdout.strip() == str(aggregate_path.resolve())
    api = json.loads(aggregate_path.read_text(encoding="utf-8"))["webextensions"]["api"]
    assert api["alarms"]["__compat"]["support"]["thunderbird"] == {"version_added": "45"}
    assert api["tabs"]["create"]["__compat"]["support"]["thunderbird"] == {
        "version_added": True
    }
    assert (tmp_path / "out" / "thunderbird_mailextensions" / "api" / "tabs.json").exists()


def test_generate_command_prints_applied_overrides(tmp_path: Path) -> None:
    runner = CliRunner()
    override_path = _write_json(
        tmp_path / "override.json",
        {"webextensions": {"api": {"alarms": {"create": _compat("thunderbird", "66")}}}},
    )

    result = runner.invoke(
        cli,
        [*_generate_args(tmp_path), "--override", str(override_path), "--no-mailextensions"],
    )

    assert result.exit_code == 0, result.output
    printed, aggregate_line = result.stdout.rstrip("\n").rsplit("\n", 1)
    assert json.loads(printed) == {
        "webextensions": {"api": {"alarms": {"create": _compat("thunderbird", "66")}}}
    }
    assert aggregate_line.endswith("thunderbird_webextensions.json")


def test_generate_command_rejects_missing_override_file(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, [*_generate_args(tmp_path), "--override", str(tmp_path / "missing.json")]
    )

    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_generate_command_returns_error_for_invalid_config(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "compat-config.yaml"
    config_path.write_text("namespaces: [tabs]\n", encoding="utf-8")

    result = runner.invoke(cli, [*_generate_args(tmp_path), "--config", str(config_path)])

    assert result.exit_code != 0
    assert "Configuration section 'namespaces' must be a mapping." in str(result.exception)


def test_generate_config_command_writes_default_file_name(tmp_path: Path) -> None:
    runner = CliRunner()

    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("compat-config.yaml")

        assert result.exit_code == 0
        assert output_path.exists()
        assert "reimplemented_browser:" in output_path.read_text(encoding="utf-8")
        assert result.output.strip() == str(output_path.resolve())


def test_export_dataset_command_writes_full_dataset(tmp_path: Path) -> None:
    runner = CliRunner()
    generate_result = runner.invoke(cli, _generate_args(tmp_path))
    assert generate_result.exit_code == 0, generate_result.output
    output_path = tmp_path / "export" / "data.json"

    result = runner.invoke(
        cli,
        [
            "export-dataset",
            "--baseline",
            str(tmp_path / "data.json"),
            "--generated",
            str(tmp_path / "out" / "thunderbird_mailextensions.json"),
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.output
    exported = json.loads(output_path.read_text(encoding="utf-8"))
    assert exported["browsers"] == {}
    assert exported["webextensions"]["api"]["tabs"]["__compat"]["support"]["thunderbird"] == {
        "version_added": True
    }
