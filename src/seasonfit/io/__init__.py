"""I/O module for SeasonFit.

Handles file operations including:
- Configuration file loading/saving (TOML)
- Observation series loading (CSV, TSV, whitespace-delimited)
- Result file output (JSON, CSV)
"""

from seasonfit.io.config import generate_default_config, load_config, save_config
from seasonfit.io.series import load_series, load_series_groups
from seasonfit.io.writers import read_result_json, write_result_csv, write_result_json

__all__ = [
    "generate_default_config",
    "load_config",
    "load_series",
    "load_series_groups",
    "read_result_json",
    "save_config",
    "write_result_csv",
    "write_result_json",
]
