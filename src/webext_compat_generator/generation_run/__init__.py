"""Generation run exports."""

from .compat_data_builder import build_compat_data
from .generation_use_case import (
    GenerationError,
    execute_compat_generation,
    execute_dataset_export,
    load_schema_tiers,
)
from .run_contracts import CompatBuildResult, GenerationOutcome, GenerationRequest, SchemaTiers

__all__ = [
    "CompatBuildResult",
    "GenerationError",
    "GenerationOutcome",
    "GenerationRequest",
    "SchemaTiers",
    "build_compat_data",
    "execute_compat_generation",
    "execute_dataset_export",
    "load_schema_tiers",
]
