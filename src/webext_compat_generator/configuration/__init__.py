"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_default_configuration,
    write_default_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    Configuration,
    NamespaceClassification,
    NotationRules,
    SchemaSource,
    SourceLayout,
)

__all__ = [
    "Configuration",
    "NamespaceClassification",
    "NotationRules",
    "SchemaSource",
    "SourceLayout",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_default_configuration",
    "write_default_configuration",
]
