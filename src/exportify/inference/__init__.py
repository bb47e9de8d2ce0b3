# exportify/inference/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Source file inference: from a compiled output path back to its source."""

from .source import (
    COMMON_MAPPINGS,
    EXTENSION_MAPPINGS,
    SOURCE_EXTENSIONS,
    SourceInferenceResult,
    SourceMapping,
    find_source_file,
    find_source_from_package_json,
    infer_source_for_output,
)

__all__ = [
    "COMMON_MAPPINGS",
    "EXTENSION_MAPPINGS",
    "SOURCE_EXTENSIONS",
    "SourceInferenceResult",
    "SourceMapping",
    "find_source_file",
    "find_source_from_package_json",
    "infer_source_for_output",
]
