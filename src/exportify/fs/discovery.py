# exportify/fs/discovery.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Multi-extension file discovery.

Given an extensionless (or extension-bearing) package-relative path, search a
list of directories for the first file matching any of a list of extensions,
falling back to index files. Presets cover compiled JavaScript, TypeScript
sources, declaration files, and a general "module" search.
"""

import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from ..paths import strip_relative_prefix
from .probe import PathLike, directory_exists, file_exists, find_index_file

DiscoveryType = Literal["exact", "extension", "index", "none"]


@dataclass(frozen=True)
class FileDiscoveryConfig:
    """Search configuration.

    Attributes:
        extensions: Extensions to try, in order of preference.
        try_index_files: Whether to look for index.<ext> inside directories.
        search_dirs: Base directories to search, in order.
        preserve_structure: Keep the target's directory below each search dir.
    """

    extensions: tuple[str, ...]
    try_index_files: bool = True
    search_dirs: tuple[str, ...] = ("lib", "dist", "build", "out")
    preserve_structure: bool = True


@dataclass
class DiscoveryResult:
    """Outcome of a discovery; file_path is package-relative without "./"."""

    discovery_type: DiscoveryType
    file_path: Optional[str] = None
    alternatives: list[str] = field(default_factory=list)
    matched_extension: Optional[str] = None


@dataclass
class DiscoveryStats:
    """Success statistics over a set of import paths."""

    total_paths: int = 0
    found_paths: int = 0
    success_rate: float = 0.0
    discovery_types: dict[str, int] = field(default_factory=dict)
    missing_paths: list[str] = field(default_factory=list)


DEFAULT_CONFIGS: dict[str, FileDiscoveryConfig] = {
    "javascript": FileDiscoveryConfig(
        extensions=(".js", ".mjs", ".cjs", ".jsx"),
        search_dirs=("lib", "dist", "build", "out"),
    ),
    "typescript": FileDiscoveryConfig(
        extensions=(".ts", ".tsx", ".js", ".jsx"),
        search_dirs=("src", "source", "lib", "dist"),
    ),
    "declarations": FileDiscoveryConfig(
        extensions=(".d.ts", ".d.mts", ".d.cts"),
        search_dirs=("types", "lib", "dist", "@types"),
    ),
    "module": FileDiscoveryConfig(
        extensions=(".js", ".mjs", ".cjs", ".ts", ".tsx", ".jsx"),
        search_dirs=("lib", "dist", "src", "build", "out"),
    ),
}


def _split_target(target_path: str) -> tuple[str, str]:
    """Split into (directory, basename without extension)."""
    directory, filename = posixpath.split(target_path)
    base_name = posixpath.splitext(filename)[0]
    return directory, base_name


def _search_path(search_dir: str, directory: str, preserve_structure: bool) -> str:
    """Directory to probe for a target living in `directory`."""
    if not (preserve_structure and directory):
        return search_dir
    # Target already names this search directory
    if directory == search_dir or directory.startswith(search_dir + "/"):
        return directory
    return posixpath.join(search_dir, directory)


def discover_files(
    target_path: str,
    package_dir: PathLike,
    config: FileDiscoveryConfig = DEFAULT_CONFIGS["module"],
) -> DiscoveryResult:
    """Find the file a package-relative path most plausibly refers to.

    Order: the exact path (when it carries an extension), then each search
    directory with each extension, then that directory's index file.
    """
    package_dir = Path(package_dir)
    clean_path = strip_relative_prefix(target_path)
    alternatives: list[str] = []

    ext = posixpath.splitext(clean_path)[1]
    if ext and file_exists(package_dir / clean_path):
        return DiscoveryResult(
            discovery_type="exact",
            file_path=clean_path,
            alternatives=[clean_path],
            matched_extension=ext,
        )

    directory, base_name = _split_target(clean_path)

    for search_dir in config.search_dirs:
        search_path = _search_path(search_dir, directory, config.preserve_structure)

        for extension in config.extensions:
            candidate = posixpath.join(search_path, f"{base_name}{extension}")
            alternatives.append(candidate)
            if file_exists(package_dir / candidate):
                return DiscoveryResult(
                    discovery_type="extension",
                    file_path=candidate,
                    alternatives=alternatives,
                    matched_extension=extension,
                )

        if config.try_index_files:
            dir_path = posixpath.join(search_path, base_name)
            index_file = find_index_file(package_dir / dir_path, config.extensions)
            if index_file is not None:
                relative = index_file.relative_to(package_dir).as_posix()
                alternatives.append(relative)
                return DiscoveryResult(
                    discovery_type="index",
                    file_path=relative,
                    alternatives=alternatives,
                    matched_extension=index_file.name[len("index"):],
                )

    return DiscoveryResult(discovery_type="none", alternatives=alternatives)


def find_best_match(
    import_path: str, package_dir: PathLike, preferred_type: str = "module"
) -> Optional[str]:
    """Shortcut for discover_files with a named preset."""
    result = discover_files(import_path, package_dir, DEFAULT_CONFIGS[preferred_type])
    return result.file_path


def resolve_module_path(
    module_path: str,
    package_dir: PathLike,
    config: FileDiscoveryConfig = DEFAULT_CONFIGS["module"],
) -> Optional[str]:
    """Resolve to a file, treating the whole path as a directory as a last resort.

    discover_files looks for index files next to the basename; this also tries
    `<search_dir>/<module_path>/index.<ext>` for paths like "components/forms".
    """
    direct = discover_files(module_path, package_dir, config)
    if direct.file_path:
        return direct.file_path

    package_dir = Path(package_dir)
    clean_path = strip_relative_prefix(module_path)
    for search_dir in config.search_dirs:
        dir_path = package_dir / search_dir / clean_path
        if directory_exists(dir_path):
            index_file = find_index_file(dir_path, config.extensions)
            if index_file is not None:
                return index_file.relative_to(package_dir).as_posix()
    return None


def get_file_variations(
    target_path: str, config: FileDiscoveryConfig = DEFAULT_CONFIGS["module"]
) -> list[str]:
    """Every candidate path discover_files could probe, in probe order."""
    clean_path = strip_relative_prefix(target_path)
    directory, base_name = _split_target(clean_path)
    variations = []

    for search_dir in config.search_dirs:
        search_path = _search_path(search_dir, directory, config.preserve_structure)
        for extension in config.extensions:
            variations.append(posixpath.join(search_path, f"{base_name}{extension}"))
        if config.try_index_files:
            for extension in config.extensions:
                variations.append(
                    posixpath.join(search_path, base_name, f"index{extension}")
                )

    return variations


def analyze_discovery_stats(
    package_dir: PathLike,
    import_paths: list[str],
    config: FileDiscoveryConfig = DEFAULT_CONFIGS["module"],
) -> DiscoveryStats:
    """How many import paths resolve, and by which discovery method."""
    stats = DiscoveryStats(total_paths=len(import_paths))

    for import_path in import_paths:
        result = discover_files(import_path, package_dir, config)
        if result.file_path:
            stats.found_paths += 1
            stats.discovery_types[result.discovery_type] = (
                stats.discovery_types.get(result.discovery_type, 0) + 1
            )
        else:
            stats.missing_paths.append(import_path)

    if stats.total_paths:
        stats.success_rate = stats.found_paths / stats.total_paths * 100
    return stats
