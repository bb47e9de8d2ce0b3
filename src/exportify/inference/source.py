# exportify/inference/source.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Source file inference.

Given a compiled output path such as "./lib/utils.js", guess the source file
it was built from ("./src/utils.ts"). Used to populate the `source` export
condition, including for outputs that have not been built yet.

Lookup order:
1. Substitute a build directory segment for its source counterpart
   (/lib/ -> /src/, /dist/ -> /src/, /build/ -> /source/, /out/ -> /src/)
2. Strip a leading build directory and retry under each source directory

TypeScript wins over JavaScript at the same base path. Nothing found is not
an error; the caller simply omits the `source` condition.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..config import DEFAULT_BUILD_DIRS, DEFAULT_SOURCE_DIRS
from ..fs.probe import PathLike, file_exists, find_file_or_index, is_package_file
from ..models import PackageDescriptor
from ..paths import normalize_relative_path, split_extension, strip_compiled_extension, strip_relative_prefix

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = (".ts", ".tsx", ".jsx", ".js")

# Build segment -> source segment, tried in order, first occurrence only
SOURCE_SEGMENT_MAPPINGS = (
    ("/lib/", "/src/"),
    ("/dist/", "/src/"),
    ("/build/", "/source/"),
    ("/out/", "/src/"),
)


@dataclass(frozen=True)
class SourceMapping:
    """A source directory and the output directory it compiles into."""

    source_dir: str
    output_dir: str
    preserve_structure: bool = True


COMMON_MAPPINGS = (
    SourceMapping("src", "lib"),
    SourceMapping("src", "dist"),
    SourceMapping("source", "lib"),
    SourceMapping("source", "dist"),
    SourceMapping("src", "build"),
    SourceMapping("src", "out"),
)

# Output extension -> source extensions that compile to it
EXTENSION_MAPPINGS = {
    ".js": (".ts", ".tsx", ".jsx", ".js"),
    ".mjs": (".ts", ".tsx", ".mts", ".mjs"),
    ".cjs": (".ts", ".tsx", ".cts", ".cjs"),
    ".d.ts": (".ts", ".tsx"),
}


@dataclass(frozen=True)
class SourceInferenceResult:
    """Outcome of infer_source_for_output."""

    target_exists: bool
    source_path: Optional[str] = None
    mapping: Optional[SourceMapping] = None
    suggested_output: Optional[str] = None


def _resolve_source(base: str, package_dir: Path) -> Optional[str]:
    """Try base + ext for every source extension, then base/index + ext."""
    found = find_file_or_index(package_dir / base, SOURCE_EXTENSIONS, direct_first=True)
    if found is None:
        return None
    return normalize_relative_path(found.relative_to(package_dir).as_posix())


def find_source_file(
    target_path: str,
    package_dir: PathLike,
    source_dirs: Sequence[str] = DEFAULT_SOURCE_DIRS,
    build_dirs: Sequence[str] = DEFAULT_BUILD_DIRS,
) -> Optional[str]:
    """Guess the source file a compiled output was built from.

    Args:
        target_path: Output path, e.g. "./lib/utils.js" or "dist/a/b.mjs".
        package_dir: Package root.
        source_dirs: Source directory names to try after the segment mappings.
        build_dirs: Output directory names stripped before that retry.

    Returns:
        A "./"-prefixed source path, or None.

    Example:
        "./lib/utils.js" with src/utils.ts on disk -> "./src/utils.ts"
        "./lib/button"   with src/button/index.tsx -> "./src/button/index.tsx"
    """
    package_dir = Path(package_dir)
    normalized = normalize_relative_path(target_path)
    stem = strip_compiled_extension(normalized)

    for build_segment, source_segment in SOURCE_SEGMENT_MAPPINGS:
        if build_segment in stem:
            mapped = strip_relative_prefix(stem.replace(build_segment, source_segment, 1))
            found = _resolve_source(mapped, package_dir)
            if found:
                return found

    relative = strip_relative_prefix(stem)
    if build_dirs:
        prefix = re.compile(r"^(%s)/" % "|".join(re.escape(d) for d in build_dirs))
        relative = prefix.sub("", relative, count=1)
    if not relative:
        return None

    for source_dir in source_dirs:
        found = _resolve_source(f"{source_dir}/{relative}", package_dir)
        if found:
            return found
    return None


def find_source_from_package_json(
    descriptor: PackageDescriptor, package_dir: PathLike
) -> Optional[str]:
    """The package.json `source` field, if it names an existing file."""
    if descriptor.source and is_package_file(package_dir, descriptor.source):
        return normalize_relative_path(descriptor.source)
    return None


def _find_source_for_target(
    relative_path: str, mapping: SourceMapping, package_dir: Path
) -> Optional[str]:
    base, extension = split_extension(relative_path)
    candidates = EXTENSION_MAPPINGS.get(extension, (extension,))

    for source_extension in candidates:
        source_path = f"{mapping.source_dir}/{base}{source_extension}"
        if file_exists(package_dir / source_path):
            return normalize_relative_path(source_path)

        if not base.endswith("/index") and base != "index":
            index_path = f"{mapping.source_dir}/{base}/index{source_extension}"
            if file_exists(package_dir / index_path):
                return normalize_relative_path(index_path)
    return None


def infer_source_for_output(
    target_path: str,
    package_dir: PathLike,
    custom_mappings: Sequence[SourceMapping] = (),
) -> SourceInferenceResult:
    """Explain where a not-yet-built output would come from.

    Unlike find_source_file this reports which source -> output directory
    mapping matched, and maps extensions per output type (a ".mjs" output
    may come from ".mts" but never from ".jsx").

    Args:
        target_path: Output path such as "./dist/index.mjs".
        package_dir: Package root.
        custom_mappings: Tried before COMMON_MAPPINGS.

    Returns:
        target_exists=True (and nothing else) when the output is already on
        disk; otherwise the first matching mapping, or an empty result.
    """
    package_dir = Path(package_dir)
    clean = strip_relative_prefix(target_path)

    if (package_dir / clean).exists():
        return SourceInferenceResult(target_exists=True)

    for mapping in (*custom_mappings, *COMMON_MAPPINGS):
        if not clean.startswith(f"{mapping.output_dir}/"):
            continue
        relative = clean[len(mapping.output_dir) + 1:]
        source_path = _find_source_for_target(relative, mapping, package_dir)
        if source_path:
            logger.debug(f"{target_path} inferred from {source_path} via {mapping.source_dir}->{mapping.output_dir}")
            return SourceInferenceResult(
                target_exists=False,
                source_path=source_path,
                mapping=mapping,
                suggested_output=normalize_relative_path(clean),
            )

    return SourceInferenceResult(target_exists=False)
