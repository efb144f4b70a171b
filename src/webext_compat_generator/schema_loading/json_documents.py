"""JSON reading with support for `//` and `/* */` comments."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

# String literals are matched first so comment markers inside strings survive.
_COMMENT_PATTERN = re.compile(r'("(?:\\.|[^"\\])*")|/\*.*?\*/|//[^\n]*', re.S)


class JsonDocumentError(Exception):
    """Raised when a JSON document cannot be read or parsed."""


def strip_json_comments(text: str) -> str:
    """Remove line and block comments outside of string literals."""
    return _COMMENT_PATTERN.sub(lambda match: match.group(1) or "", text)


def parse_json_document(text: str, label: str = "document") -> Any:
    """Parse JSON text that may carry comments."""
    try:
        return json.loads(strip_json_comments(text))
    except json.JSONDecodeError as exc:
        raise JsonDocumentError(f"Invalid JSON in {label}: {exc}") from exc


def load_json_document(path: Path | str) -> Any:
    """Read and parse one JSON file that may carry comments."""
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise JsonDocumentError(f"Unable to read JSON file '{source}': {exc}") from exc
    return parse_json_document(text, f"'{source}'")
