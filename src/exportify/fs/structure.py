# exportify/fs/structure.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Build output structure detection.

Looks at a package on disk and reports which build and source directories
it actually has, what its tsconfig.json says about output locations, and
whether the build mirrors the source tree. get_recommended_config turns the
report into an ExportifyConfig whose directory lists fit that package.
"""

import json
import logging
import os
import posixpath
import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config import ExportifyConfig
from ..packages import read_package_json
from ..paths import strip_relative_prefix
from .declarations import find_all_declaration_files
from .probe import PathLike, directory_exists, file_exists

logger = logging.getLogger(__name__)

COMMON_BUILD_DIRS = (
    "lib", "dist", "build", "out", "output", "compiled", "types", "esm", "cjs", "umd",
)
COMMON_SOURCE_DIRS = ("src", "source", "lib-src", "packages")

COMPILED_EXTENSIONS = (".js", ".mjs", ".cjs", ".d.ts")
SOURCE_FILE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")

STRUCTURE_SAMPLE_SIZE = 5

# Strings are matched so that comment markers inside them survive
_JSONC_NOISE = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/|,(?=\s*[}\]])', re.S)


@dataclass
class TypeScriptLayout:
    """Declaration and output locations, from disk and tsconfig.json."""

    has_declarations: bool = False
    declaration_dir: Optional[str] = None
    out_dir: Optional[str] = None
    root_dir: Optional[str] = None


@dataclass
class PackageFields:
    """The package.json fields that point at build output."""

    main: Optional[str] = None
    module: Optional[str] = None
    types: Optional[str] = None
    has_exports: bool = False


@dataclass
class FilePatterns:
    has_index_files: bool = False
    common_extensions: list[str] = field(default_factory=list)
    build_file_count: int = 0


@dataclass
class BuildStructure:
    """Everything detect_build_structure learned about a package."""

    build_dirs: list[str] = field(default_factory=list)
    source_dirs: list[str] = field(default_factory=list)
    preserves_structure: bool = False
    typescript: TypeScriptLayout = field(default_factory=TypeScriptLayout)
    package_fields: PackageFields = field(default_factory=PackageFields)
    patterns: FilePatterns = field(default_factory=FilePatterns)


def _list_dir(dir_path: Path) -> list[str]:
    try:
        return sorted(os.listdir(dir_path))
    except OSError:
        return []


def _has_file_ending(dir_path: Path, suffixes: tuple[str, ...]) -> bool:
    return any(name.endswith(suffixes) for name in _list_dir(dir_path))


def detect_build_directories(package_dir: PathLike) -> list[str]:
    """Common build directories that exist and hold compiled files."""
    package_dir = Path(package_dir)
    return [
        name for name in COMMON_BUILD_DIRS
        if directory_exists(package_dir / name)
        and _has_file_ending(package_dir / name, COMPILED_EXTENSIONS)
    ]


def detect_source_directories(package_dir: PathLike) -> list[str]:
    """Common source directories that exist and hold source files."""
    package_dir = Path(package_dir)
    return [
        name for name in COMMON_SOURCE_DIRS
        if directory_exists(package_dir / name)
        and _has_file_ending(package_dir / name, SOURCE_FILE_EXTENSIONS)
    ]


def read_tsconfig(package_dir: PathLike, log: Optional[logging.Logger] = None) -> dict:
    """Parse tsconfig.json, tolerating comments and trailing commas.

    A missing file gives {}. An unreadable or malformed one is logged and
    also gives {}.
    """
    log = log or logger
    tsconfig_path = Path(package_dir) / "tsconfig.json"
    if not file_exists(tsconfig_path):
        return {}

    try:
        text = tsconfig_path.read_text(encoding="utf-8")
        data = json.loads(_JSONC_NOISE.sub(lambda m: m.group(1) or "", text))
    except (OSError, ValueError) as e:
        log.warning(f"Could not parse {tsconfig_path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _top_level_dir(path: str) -> Optional[str]:
    """First segment of a package-relative directory, e.g. "./lib/esm" -> "lib"."""
    clean = posixpath.normpath(strip_relative_prefix(path))
    if clean in (".", "") or clean.startswith(".."):
        return None
    return clean.split("/", 1)[0]


def _analyze_package_json(package_dir: Path) -> PackageFields:
    try:
        data = read_package_json(package_dir / "package.json")
    except (OSError, ValueError):
        return PackageFields()

    def text(value) -> Optional[str]:
        return value if isinstance(value, str) and value else None

    return PackageFields(
        main=text(data.get("main")),
        module=text(data.get("module")),
        types=text(data.get("types")) or text(data.get("typings")),
        has_exports=bool(data.get("exports")),
    )


def _analyze_typescript(
    package_dir: Path, build_dirs: list[str], log: logging.Logger
) -> TypeScriptLayout:
    layout = TypeScriptLayout()

    declarations = find_all_declaration_files(package_dir, build_dirs)
    layout.has_declarations = bool(declarations)
    if declarations:
        counts = Counter(declaration.split("/", 1)[0] for declaration in declarations)
        layout.declaration_dir = counts.most_common(1)[0][0]

    options = read_tsconfig(package_dir, log).get("compilerOptions")
    if isinstance(options, dict):
        for key, attr in (
            ("outDir", "out_dir"),
            ("declarationDir", "declaration_dir"),
            ("rootDir", "root_dir"),
        ):
            value = options.get(key)
            if isinstance(value, str) and value:
                setattr(layout, attr, strip_relative_prefix(value))
    return layout


def _sample_files(dir_path: Path, limit: int) -> list[Path]:
    """Up to limit files below dir_path, depth first in name order."""
    files: list[Path] = []
    for name in _list_dir(dir_path)[:limit]:
        if len(files) >= limit:
            break
        entry = dir_path / name
        if file_exists(entry):
            files.append(entry)
        elif directory_exists(entry):
            files.extend(_sample_files(entry, limit - len(files)))
    return files


def _preserves_structure(
    package_dir: Path, source_dirs: list[str], build_dirs: list[str]
) -> bool:
    """True if sampled source files each have a .js at the same place in a build dir."""
    if not source_dirs or not build_dirs:
        return False

    for source_dir in source_dirs:
        source_root = package_dir / source_dir
        for sample in _sample_files(source_root, STRUCTURE_SAMPLE_SIZE):
            stem = posixpath.splitext(sample.relative_to(source_root).as_posix())[0]
            if not any(
                file_exists(package_dir / build_dir / f"{stem}.js") for build_dir in build_dirs
            ):
                return False
    return True


def _file_extension(name: str) -> str:
    if name.endswith(".d.ts"):
        return ".d.ts"
    return posixpath.splitext(name)[1]


def _analyze_file_patterns(package_dir: Path, build_dirs: list[str]) -> FilePatterns:
    patterns = FilePatterns()
    extensions: Counter = Counter()
    for build_dir in build_dirs:
        for _, _, filenames in os.walk(package_dir / build_dir):
            for name in filenames:
                patterns.build_file_count += 1
                extensions[_file_extension(name)] += 1
                if name.startswith("index."):
                    patterns.has_index_files = True
    patterns.common_extensions = [ext for ext, _ in extensions.most_common(5)]
    return patterns


def detect_build_structure(
    package_dir: PathLike, log: Optional[logging.Logger] = None
) -> BuildStructure:
    """Analyze the build output layout of one package.

    Args:
        package_dir: Package root.
        log: Receives tsconfig.json parse warnings.

    Returns:
        The detected directories, TypeScript layout, package.json fields,
        structure preservation and build file statistics.
    """
    log = log or logger
    package_dir = Path(package_dir)

    build_dirs = detect_build_directories(package_dir)
    source_dirs = detect_source_directories(package_dir)
    structure = BuildStructure(
        build_dirs=build_dirs,
        source_dirs=source_dirs,
        preserves_structure=_preserves_structure(package_dir, source_dirs, build_dirs),
        typescript=_analyze_typescript(package_dir, build_dirs, log),
        package_fields=_analyze_package_json(package_dir),
        patterns=_analyze_file_patterns(package_dir, build_dirs),
    )
    log.debug(
        f"Detected build structure for {package_dir}: "
        f"build={build_dirs} source={source_dirs}"
    )
    return structure


def _merge(preferred: list[Optional[str]], detected: list[str], fallback: list[str]) -> list[str]:
    merged: list[str] = []
    for name in preferred + detected:
        if name and name not in merged:
            merged.append(name)
    return merged or list(fallback)


def get_recommended_config(
    structure: BuildStructure, base: Optional[ExportifyConfig] = None
) -> ExportifyConfig:
    """Configuration whose directory lists match a detected structure.

    tsconfig.json output and root directories come first, then the
    directories found on disk. A list with nothing detected keeps the value
    from base. Every other setting is copied from base.
    """
    base = base or ExportifyConfig()
    typescript = structure.typescript
    build_dirs = _merge(
        [_top_level_dir(d) for d in (typescript.out_dir, typescript.declaration_dir) if d],
        structure.build_dirs,
        base.build_dirs,
    )
    source_dirs = _merge(
        [_top_level_dir(typescript.root_dir)] if typescript.root_dir else [],
        structure.source_dirs,
        base.source_dirs,
    )
    return base.model_copy(update={"build_dirs": build_dirs, "source_dirs": source_dirs})
