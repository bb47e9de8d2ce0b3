# exportify/analysis/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Static analysis of package layout and source files.

Components:
- classify_identifier / classify_extension: CJS vs ESM naming heuristics
- detect_module_type: ESM/CJS classification of a single file
- detect_build_pattern: dual-build convention from main/module fields
- analyze_file_imports: package import specifiers used by a source file
"""

from .identifiers import BuildFlavor, classify_extension, classify_identifier, assign_flavors
from .module_type import ModuleType, detect_module_type
from .build_pattern import (
    NO_PATTERN,
    BuildPattern,
    PathPattern,
    PatternType,
    detect_build_pattern,
)
from .imports import (
    ImportMatch,
    analyze_file_imports,
    extract_import_specifiers,
    extract_version_requirement,
    split_package_specifier,
)

__all__ = [
    # Identifiers
    "BuildFlavor",
    "assign_flavors",
    "classify_extension",
    "classify_identifier",
    # Module type
    "ModuleType",
    "detect_module_type",
    # Build pattern
    "NO_PATTERN",
    "BuildPattern",
    "PathPattern",
    "PatternType",
    "detect_build_pattern",
    # Imports
    "ImportMatch",
    "analyze_file_imports",
    "extract_import_specifiers",
    "extract_version_requirement",
    "split_package_specifier",
]
