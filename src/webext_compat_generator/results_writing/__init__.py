"""Results writing exports."""

from .compat_data_writer import output_stem, render_pretty_json, write_compat_data
from .report_models import CompatDataFiles

__all__ = ["CompatDataFiles", "output_stem", "render_pretty_json", "write_compat_data"]
