# exportify/fs/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Filesystem probing for exports inference.

Components:
- probe: existence checks and first-match extension/index lookups
- batch: bounded-concurrency async fan-out with per-operation timeouts
- discovery: multi-extension discovery across search directories
- declarations: TypeScript declaration (.d.ts) mapping
- structure: build and source directory detection for a package
"""

from .probe import (
    FileExistsResult,
    directory_exists,
    file_exists,
    file_exists_async,
    file_exists_detail,
    find_file_or_index,
    find_files_with_extensions,
    find_index_file,
    find_with_extensions,
    find_with_extensions_async,
    is_package_file,
)
from .batch import (
    BatchItemResult,
    BatchOperationResult,
    BatchStats,
    FileCache,
    batch_check_exists,
    batch_discover_files,
    batch_find_declarations,
    batch_process,
    batch_validate_mappings,
    build_file_cache,
)
from .discovery import (
    DEFAULT_CONFIGS,
    DiscoveryResult,
    DiscoveryStats,
    FileDiscoveryConfig,
    analyze_discovery_stats,
    discover_files,
    find_best_match,
    get_file_variations,
    resolve_module_path,
)
from .declarations import (
    DeclarationResult,
    expected_declaration_path,
    find_all_declaration_files,
    find_declaration_file,
    find_sibling_declaration,
    map_source_to_declaration,
    validate_declaration_mapping,
)
from .structure import (
    COMMON_BUILD_DIRS,
    COMMON_SOURCE_DIRS,
    BuildStructure,
    detect_build_directories,
    detect_build_structure,
    detect_source_directories,
    get_recommended_config,
    read_tsconfig,
)

__all__ = [
    # Probes
    "FileExistsResult",
    "directory_exists",
    "file_exists",
    "file_exists_async",
    "file_exists_detail",
    "find_file_or_index",
    "find_files_with_extensions",
    "find_index_file",
    "find_with_extensions",
    "find_with_extensions_async",
    "is_package_file",
    # Batch
    "BatchItemResult",
    "BatchOperationResult",
    "BatchStats",
    "FileCache",
    "batch_check_exists",
    "batch_discover_files",
    "batch_find_declarations",
    "batch_process",
    "batch_validate_mappings",
    "build_file_cache",
    # Discovery
    "DEFAULT_CONFIGS",
    "DiscoveryResult",
    "DiscoveryStats",
    "FileDiscoveryConfig",
    "analyze_discovery_stats",
    "discover_files",
    "find_best_match",
    "get_file_variations",
    "resolve_module_path",
    # Declarations
    "DeclarationResult",
    "expected_declaration_path",
    "find_all_declaration_files",
    "find_declaration_file",
    "find_sibling_declaration",
    "map_source_to_declaration",
    "validate_declaration_mapping",
    # Structure
    "COMMON_BUILD_DIRS",
    "COMMON_SOURCE_DIRS",
    "BuildStructure",
    "detect_build_directories",
    "detect_build_structure",
    "detect_source_directories",
    "get_recommended_config",
    "read_tsconfig",
]
