# exportify/exports/pattern.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Dual-build expansion of a usage path.

When main/module reveal separate CJS and ESM builds, a deep import such as
"./lib/utils.js" is rewritten once per build:

    directory  ./lib/utils.js -> ./lib/cjs/utils.js   + ./lib/esm/utils.js
    extension  ./lib/utils.js -> ./lib/utils.cjs      + ./lib/utils.mjs
    prefix     ./lib/utils.js -> ./lib/cjs.utils.js   + ./lib/esm.utils.js

Whichever rewrites exist on disk become `require`/`import`. The path as
written by the importer is looked up too and, if it exists, is the `default`.
Only compiled JavaScript counts as a build output here; a package whose
deep paths exist only as TypeScript is left to the exact build-directory
search.
"""

import logging
import posixpath
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..analysis.build_pattern import BuildPattern, PatternType
from ..config import DEFAULT_SOURCE_DIRS
from ..fs.declarations import find_sibling_declaration
from ..fs.probe import PathLike, file_exists, find_file_or_index
from ..inference.source import find_source_file
from ..paths import strip_compiled_extension, strip_relative_prefix
from .conditions import ExportConditions

logger = logging.getLogger(__name__)

BUILD_OUTPUT_EXTENSIONS = ("", ".js", ".mjs", ".cjs")


def _join(*parts: str) -> str:
    """Join path segments, dropping empty and "." segments."""
    return "/".join(part for part in parts if part and part != ".")


def _resolve_candidate(base: str, package_dir: Path, extensions: Sequence[str]) -> Optional[str]:
    """First existing `base + ext` or `base/index + ext`, as "./..."."""
    if not base:
        return None
    found = find_file_or_index(package_dir / base, extensions)
    if found is None:
        return None
    return f"./{found.relative_to(package_dir).as_posix()}"


def _directory_candidates(clean_path: str, pattern: BuildPattern) -> tuple[str, str]:
    cjs, esm = pattern.cjs_pattern, pattern.esm_pattern
    cjs_base = strip_relative_prefix(cjs.base_path)
    esm_base = strip_relative_prefix(esm.base_path)

    relative = clean_path
    for base in (cjs_base, esm_base):
        if base not in ("", ".") and clean_path.startswith(base + "/"):
            relative = clean_path[len(base) + 1:]
            break

    return (
        _join(cjs_base, cjs.identifier, relative),
        _join(esm_base, esm.identifier, relative),
    )


def _extension_candidates(clean_path: str, pattern: BuildPattern) -> tuple[str, str]:
    head, filename = posixpath.split(clean_path)
    base = _join(head, posixpath.splitext(filename)[0])
    return (
        f"{base}{pattern.cjs_pattern.identifier}",
        f"{base}{pattern.esm_pattern.identifier}",
    )


def _prefix_candidates(clean_path: str, pattern: BuildPattern) -> tuple[str, str]:
    head, filename = posixpath.split(clean_path)
    cjs, esm = pattern.cjs_pattern, pattern.esm_pattern
    return (
        _join(head, f"{cjs.identifier}{cjs.separator or '.'}{filename}"),
        _join(head, f"{esm.identifier}{esm.separator or '.'}{filename}"),
    )


_CANDIDATE_BUILDERS: dict[PatternType, Callable[[str, BuildPattern], tuple[str, str]]] = {
    PatternType.DIRECTORY: _directory_candidates,
    PatternType.EXTENSION: _extension_candidates,
    PatternType.PREFIX: _prefix_candidates,
}


def _types_for(original: str, resolved: str, package_dir: Path) -> Optional[str]:
    """Declaration for the original path, else beside the resolved file."""
    declaration = f"{strip_compiled_extension(original)}.d.ts"
    if file_exists(package_dir / declaration):
        return f"./{declaration}"
    return find_sibling_declaration(resolved, package_dir)


def expand_usage_with_pattern(
    usage_path: str,
    pattern: BuildPattern,
    package_dir: PathLike,
    extensions: Sequence[str] = BUILD_OUTPUT_EXTENSIONS,
    source_dirs: Sequence[str] = DEFAULT_SOURCE_DIRS,
) -> Optional[ExportConditions]:
    """Expand a usage path across a package's CJS and ESM builds.

    Args:
        usage_path: Import path from the usage dictionary, e.g. "./lib/utils.js".
        pattern: Result of detect_build_pattern for the package.
        package_dir: Package root.
        extensions: Extensions appended when resolving each candidate.
        source_dirs: Source directories for the `source` condition.

    Returns:
        Conditions with import/require for whichever builds exist and a
        default preferring the original path, then ESM, then CJS. None when
        the package has no dual build or no candidate exists.
    """
    builder = _CANDIDATE_BUILDERS.get(pattern.pattern_type)
    if builder is None or pattern.cjs_pattern is None or pattern.esm_pattern is None:
        return None

    package_dir = Path(package_dir)
    original = strip_relative_prefix(usage_path)
    if not original or original == ".":
        return None

    cjs_candidate, esm_candidate = builder(original, pattern)
    cjs_path = _resolve_candidate(cjs_candidate, package_dir, extensions)
    esm_path = _resolve_candidate(esm_candidate, package_dir, extensions)
    original_path = _resolve_candidate(original, package_dir, extensions)

    default = original_path or esm_path or cjs_path
    if default is None:
        return None

    logger.debug(f"Expanded {usage_path} with {pattern.pattern_type.value} pattern")
    return ExportConditions(
        source=find_source_file(f"./{original}", package_dir, source_dirs),
        types=_types_for(original, default, package_dir),
        import_=esm_path,
        require=cjs_path,
        default=default,
    )
