"""Schema loading exports."""

from .import_resolution import MANIFEST_BASE_IMPORT, merge_schema_fragments, resolve_imports
from .json_documents import JsonDocumentError, load_json_document, parse_json_document
from .schema_models import (
    MANIFEST_NAMESPACE,
    SchemaNodeKind,
    classify_schema_node,
    find_definition,
)
from .schema_reader import SchemaLoadError, list_schema_files, load_namespaces

__all__ = [
    "MANIFEST_BASE_IMPORT",
    "MANIFEST_NAMESPACE",
    "JsonDocumentError",
    "SchemaLoadError",
    "SchemaNodeKind",
    "classify_schema_node",
    "find_definition",
    "list_schema_files",
    "load_json_document",
    "load_namespaces",
    "merge_schema_fragments",
    "parse_json_document",
    "resolve_imports",
]
