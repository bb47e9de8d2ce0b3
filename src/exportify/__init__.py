# exportify/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
exportify - infer package.json exports maps from real import usage.

Two passes:
- evaluate: scan a codebase for imports of a repository's packages and
  record every subpath used (the usage dictionary)
- fix: turn each package's recorded usage plus its main/module/types/browser
  fields into an exports map and write it back
"""

from .config import BatchConfig, ExportifyConfig
from .errors import (
    BatchAbortedError,
    ConfigError,
    ExportifyError,
    PackageJsonError,
    PackageNotFoundError,
    UsageFileError,
)
from .models import ExportsMap, PackageDescriptor, PackageInfo, UsageDictionary, UsageRecord
from .paths import normalize_relative_path
from .exports import (
    ExportConditions,
    ExportEntryGenerator,
    assemble_exports_map,
    assemble_exports_map_async,
    generate_baseline_exports,
    generate_export_entry,
)

__version__ = "1.0.0"

__all__ = [
    "BatchConfig",
    "ExportifyConfig",
    "BatchAbortedError",
    "ConfigError",
    "ExportifyError",
    "PackageJsonError",
    "PackageNotFoundError",
    "UsageFileError",
    "ExportsMap",
    "PackageDescriptor",
    "PackageInfo",
    "UsageDictionary",
    "UsageRecord",
    "normalize_relative_path",
    "ExportConditions",
    "ExportEntryGenerator",
    "assemble_exports_map",
    "assemble_exports_map_async",
    "generate_baseline_exports",
    "generate_export_entry",
]
