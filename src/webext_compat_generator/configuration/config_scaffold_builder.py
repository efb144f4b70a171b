"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "compat-config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generator configuration for webext-compat-generator.
# Every section is optional. Omitted sections fall back to the values below.

# Vendor key written into the generated compat data, and the vendor whose
# baseline entries are copied as a starting point.
target_vendor: thunderbird
baseline_vendor: firefox

# Schema directories, relative to the --source checkout.
sources:
  toolkit:
    path: toolkit/components/extensions/schemas
    skip_files:
      # Privileged extensions only.
      - activity_log.json
      - geckoProfiler.json
      - network_status.json
      - telemetry.json
      # Not usable by extensions.
      - test.json
  browser:
    path: browser/components/extensions/schemas
    skip_files:
      - normandyAddonStudy.json
  mail:
    path: comm/mail/components/extensions/schemas
    skip_files: []

namespaces:
  # Browser namespaces cloned as-is. Baseline data is trusted.
  supported_browser:
    - pkcs11
  # Browser namespaces re-authored by the target. Checked against the mail schemas.
  reimplemented_browser:
    - commands
    - menus
    - sessions
    - tabs
    - windows
  # Toolkit namespaces the target does not provide.
  unsupported_toolkit:
    - pageAction
    - captivePortal
    - proxy
  # Toolkit namespaces re-authored by the target. Checked against the mail schemas.
  reimplemented_toolkit:
    - action
    - browserAction
    - theme

notation:
  # Parameter paths accepted in flat notation (prefix and depth must match).
  confirmed_flat_properties:
    - action.functions.setIcon.parameters.details.properties.imageData
    - browserAction.functions.setIcon.parameters.details.properties.imageData
    - commands.functions.update.parameters.detail.properties.
    - menus.functions.create.parameters.createProperties.properties.
    - tabs.functions.create.parameters.createProperties.properties.
    - tabs.functions.executeScript.parameters.details.properties.
    - tabs.functions.insertCSS.parameters.details.properties.
    - windows.functions.update.parameters.updateInfo.properties.
    - windows.functions.getAll.parameters.getInfo.properties.
  # Parameter paths that only look like flat notation (prefix match).
  known_false_positive_flat_properties:
    - bookmarks.functions.search.parameters.query.properties.query
    - topSites.types.MostVisitedURL.properties.type.enum.url
    - bookmarks.events.onCreated.parameters.bookmark.properties.id
    - bookmarks.events.onRemoved.parameters.removeInfo.properties.node.properties.
    - menus.types.OnShowData.properties.selectedAccount.properties.rootFolder.properties.
    - menus.types.OnClickData.properties.selectedAccount.properties.rootFolder.properties.
    - menus.events.onShown.parameters.info.properties.selectedAccount.properties.rootFolder.properties.
    - menus.events.onClicked.parameters.info.properties.selectedAccount.properties.rootFolder.properties.
    - menus.functions.update.parameters.updateProperties.properties.onclick.parameters.info.properties.selectedAccount.properties.rootFolder.properties.
    - menus.functions.create.parameters.createProperties.properties.onclick.parameters.info.properties.selectedAccount.properties.rootFolder.properties.
"""


def build_default_configuration() -> str:
    """Build the default YAML generator configuration with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_default_configuration(output_path: Path | str) -> Path:
    """Write the default generator configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_default_configuration(), encoding="utf-8")
    return destination.resolve()
