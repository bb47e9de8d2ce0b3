# exportify/commands/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""The evaluate and fix commands, independent of the click front end."""

from .evaluate import EvaluateOptions, EvaluateReport, collect_source_files, evaluate_usage
from .fix import FixOptions, FixReport, PackageFixResult, fix_exports, update_package_json

__all__ = [
    "EvaluateOptions",
    "EvaluateReport",
    "collect_source_files",
    "evaluate_usage",
    "FixOptions",
    "FixReport",
    "PackageFixResult",
    "fix_exports",
    "update_package_json",
]
