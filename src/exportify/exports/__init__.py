# exportify/exports/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Exports map generation.

Components:
- ExportConditions: canonically ordered condition set
- parse_browser_field: browser field -> root replacement + per-file overrides
- expand_usage_with_pattern: dual-build (CJS/ESM) expansion of a usage path
- ExportEntryGenerator: strategy chain resolving one import path
- generate_baseline_exports: root entry from package.json fields
- assemble_exports_map: baseline or existing exports plus usage entries
"""

from .conditions import CONDITION_ORDER, ExportConditions, ExportValue
from .browser import BrowserFieldResult, parse_browser_field
from .pattern import BUILD_OUTPUT_EXTENSIONS, expand_usage_with_pattern
from .entry import (
    DEFAULT_STRATEGIES,
    EXACT_MATCH_EXTENSIONS,
    PATTERN_FIRST_STRATEGIES,
    EntryRequest,
    ExportEntryGenerator,
    assume_lib_output,
    exact_build_match,
    expand_with_pattern,
    first_result,
    generate_export_entry,
    predict_from_source,
)
from .baseline import FALLBACK_ROOT_EXPORT, generate_baseline_exports
from .assembler import assemble_exports_map, assemble_exports_map_async

__all__ = [
    "CONDITION_ORDER",
    "ExportConditions",
    "ExportValue",
    "BrowserFieldResult",
    "parse_browser_field",
    "BUILD_OUTPUT_EXTENSIONS",
    "expand_usage_with_pattern",
    "DEFAULT_STRATEGIES",
    "EXACT_MATCH_EXTENSIONS",
    "PATTERN_FIRST_STRATEGIES",
    "EntryRequest",
    "ExportEntryGenerator",
    "assume_lib_output",
    "exact_build_match",
    "expand_with_pattern",
    "first_result",
    "generate_export_entry",
    "predict_from_source",
    "FALLBACK_ROOT_EXPORT",
    "generate_baseline_exports",
    "assemble_exports_map",
    "assemble_exports_map_async",
]
