"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from webext_compat_generator.configuration.loader import ConfigurationError, load_configuration


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_builtin_defaults_without_a_file() -> None:
    configuration = load_configuration()

    assert configuration.path is None
    assert configuration.target_vendor == "thunderbird"
    assert configuration.baseline_vendor == "firefox"
    assert configuration.sources.toolkit.path == Path("toolkit/components/extensions/schemas")
    assert configuration.sources.mail.path == Path("comm/mail/components/extensions/schemas")
    assert "test.json" in configuration.sources.toolkit.skip_files
    assert configuration.sources.browser.skip_files == frozenset({"normandyAddonStudy.json"})
    assert configuration.sources.mail.skip_files == frozenset()
    assert configuration.namespaces.supported_browser == frozenset({"pkcs11"})
    assert configuration.namespaces.unsupported_toolkit == frozenset(
        {"pageAction", "captivePortal", "proxy"}
    )
    assert configuration.namespaces.reimplemented == frozenset(
        {"action", "browserAction", "theme", "commands", "menus", "sessions", "tabs", "windows"}
    )
    assert len(configuration.notation.confirmed_flat_properties) == 9
    assert (
        "tabs.functions.create.parameters.createProperties.properties."
        in configuration.notation.confirmed_flat_properties
    )


def test_user_sections_replace_defaults_per_key(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "compat-config.yaml",
        """
target_vendor: seamonkey
namespaces:
  unsupported_toolkit:
    - proxy
notation:
  confirmed_flat_properties: []
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.target_vendor == "seamonkey"
    assert configuration.baseline_vendor == "firefox"
    assert configuration.namespaces.unsupported_toolkit == frozenset({"proxy"})
    assert configuration.namespaces.reimplemented_toolkit == frozenset(
        {"action", "browserAction", "theme"}
    )
    assert configuration.notation.confirmed_flat_properties == ()
    assert len(configuration.notation.known_false_positive_flat_properties) == 10


def test_empty_file_keeps_defaults(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "compat-config.yaml", "")

    configuration = load_configuration(config_path)

    assert configuration.target_vendor == "thunderbird"
    assert configuration.namespaces.supported_browser == frozenset({"pkcs11"})


def test_errors_when_configuration_file_is_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_configuration(tmp_path / "missing.yaml")


def test_errors_when_configuration_root_is_not_mapping(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "compat-config.yaml", "[]")

    with pytest.raises(ConfigurationError, match="Configuration root must be a mapping"):
        load_configuration(config_path)


def test_errors_when_source_path_is_absolute(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "compat-config.json",
        json.dumps({"sources": {"mail": {"path": str(tmp_path.resolve())}}}),
    )

    with pytest.raises(ConfigurationError, match="sources.mail.path must be relative"):
        load_configuration(config_path)


def test_errors_when_namespace_is_classified_twice(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "compat-config.json",
        json.dumps({"namespaces": {"supported_browser": ["tabs"]}}),
    )

    with pytest.raises(ConfigurationError, match="browser namespaces listed twice: tabs"):
        load_configuration(config_path)


@pytest.mark.parametrize(
    ("document", "message"),
    [
        ({"namespaces": {"unsupported_toolkit": ["proxy", 7]}}, "entries must be strings"),
        ({"notation": {"confirmed_flat_properties": {"a": 1}}}, "must be a string or list"),
        ({"target_vendor": "  "}, "target_vendor must not be empty"),
        ({"sources": "toolkit"}, "Configuration section 'sources' must be a mapping"),
    ],
)
def test_errors_for_invalid_values(tmp_path: Path, document: dict, message: str) -> None:
    config_path = _write_file(tmp_path / "compat-config.json", json.dumps(document))

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(config_path)
