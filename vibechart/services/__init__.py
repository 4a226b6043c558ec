from .beautifier import beautify
from .chart_generator import ChartGenerator, apply_spacing_fixes, build_generation_prompt, fallback_config_for
from .config_validator import apply_fixed_defaults, validate_config, validate_with_repair
from .csv_loader import CSVLoader, LoadedTable
from .data_profile import DataProfiler, table_records
from .history import ConfigHistory
from .llm_client import LLMClient
from .merge import deep_merge
from .pipeline import VibePipeline
from .render import bin_rows, format_label, prepare_series
from .translator import Translator

__all__ = [
    "beautify",
    "ChartGenerator",
    "apply_spacing_fixes",
    "build_generation_prompt",
    "fallback_config_for",
    "apply_fixed_defaults",
    "validate_config",
    "validate_with_repair",
    "CSVLoader",
    "LoadedTable",
    "DataProfiler",
    "table_records",
    "ConfigHistory",
    "LLMClient",
    "deep_merge",
    "VibePipeline",
    "bin_rows",
    "format_label",
    "prepare_series",
    "Translator",
]
