"""Export of a complete compat dataset carrying the generated webextensions data."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

WEBEXTENSIONS_KEY = "webextensions"


def extract_webextensions(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return the `webextensions` section of a dataset, or the document itself."""
    section = document.get(WEBEXTENSIONS_KEY, document)
    if not isinstance(section, Mapping):
        raise ValueError(f"'{WEBEXTENSIONS_KEY}' section must be an object.")
    return dict(section)


def replace_webextensions(
    dataset: Mapping[str, Any], generated: Mapping[str, Any]
) -> dict[str, Any]:
    """Return a copy of a full dataset whose `webextensions` section is `generated`."""
    exported = copy.deepcopy(dict(dataset))
    exported[WEBEXTENSIONS_KEY] = copy.deepcopy(dict(extract_webextensions(generated)))
    return exported
