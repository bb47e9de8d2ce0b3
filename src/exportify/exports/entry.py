# exportify/exports/entry.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Export entry generation for a single import path.

Strategies are plain functions tried in order; the first to return
conditions wins:

1. exact_build_match     - the file already exists in a build directory
2. expand_with_pattern   - the file exists in the CJS and/or ESM build
3. predict_from_source   - only the source exists; predict the build output
4. assume_lib_output     - nothing found; guess ./lib/<path>.js and warn

The assembler reorders the list to try pattern expansion first, which is
why the order lives in data rather than in control flow.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..analysis.build_pattern import NO_PATTERN, BuildPattern
from ..config import DEFAULT_BUILD_DIRS, DEFAULT_SOURCE_DIRS
from ..fs.declarations import find_sibling_declaration
from ..fs.probe import PathLike, find_file_or_index
from ..inference.source import find_source_file
from ..paths import strip_compiled_extension, strip_relative_prefix
from .conditions import ExportConditions, ExportValue
from .pattern import expand_usage_with_pattern

logger = logging.getLogger(__name__)

EXACT_MATCH_EXTENSIONS = ("", ".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs")

_TYPESCRIPT_SUFFIX = re.compile(r"\.tsx?$")


@dataclass(frozen=True)
class EntryRequest:
    """Everything a strategy needs to resolve one import path."""

    import_path: str
    package_dir: Path
    build_pattern: BuildPattern = NO_PATTERN
    build_dirs: tuple[str, ...] = DEFAULT_BUILD_DIRS
    source_dirs: tuple[str, ...] = DEFAULT_SOURCE_DIRS
    log: logging.Logger = field(default=logger, compare=False)

    @property
    def clean_path(self) -> str:
        """Import path without "./"; the package root becomes "index"."""
        clean = strip_relative_prefix(self.import_path).rstrip("/")
        return "index" if clean in ("", ".") else clean

    @property
    def named_build_dir(self) -> Optional[str]:
        """The build directory the import path starts with, if any."""
        head = self.clean_path.split("/", 1)[0]
        return head if head in self.build_dirs else None

    @property
    def subpath(self) -> str:
        """The import path relative to its named build directory."""
        build_dir = self.named_build_dir
        if not build_dir:
            return self.clean_path
        return self.clean_path[len(build_dir) + 1:] or "index"

    @property
    def output_dir(self) -> str:
        """Where unbuilt output is predicted to land."""
        return self.named_build_dir or "lib"

    @property
    def output_stem(self) -> str:
        """Subpath with any compiled extension removed."""
        return strip_compiled_extension(self.subpath)


Strategy = Callable[[EntryRequest], Optional[ExportConditions]]


def _search_roots(request: EntryRequest) -> list[tuple[str, str]]:
    """(build_dir, relative_path) pairs to search, in priority order."""
    if request.named_build_dir:
        return [(request.named_build_dir, request.subpath)]
    return [(build_dir, request.clean_path) for build_dir in request.build_dirs]


def exact_build_match(request: EntryRequest) -> Optional[ExportConditions]:
    """Find the import path as a real file under a build directory."""
    package_dir = request.package_dir
    for build_dir, relative in _search_roots(request):
        build_root = package_dir / build_dir
        found = find_file_or_index(build_root / relative, EXACT_MATCH_EXTENSIONS)
        if found is None:
            continue

        candidate = found.relative_to(build_root).as_posix()
        is_typescript = bool(_TYPESCRIPT_SUFFIX.search(candidate))
        js_path = f"./{build_dir}/{_TYPESCRIPT_SUFFIX.sub('.js', candidate)}"
        return ExportConditions(
            source=find_source_file(
                js_path, package_dir, request.source_dirs, request.build_dirs
            ),
            types=find_sibling_declaration(f"{build_dir}/{candidate}", package_dir),
            # TypeScript in a build dir is compiled in place to .js
            import_=js_path if is_typescript else None,
            default=js_path,
        )
    return None


def expand_with_pattern(request: EntryRequest) -> Optional[ExportConditions]:
    """Resolve through the package's CJS/ESM dual build, if it has one."""
    if not request.build_pattern.has_multiple_builds:
        return None
    return expand_usage_with_pattern(
        request.import_path,
        request.build_pattern,
        request.package_dir,
        source_dirs=request.source_dirs,
    )


def predict_from_source(request: EntryRequest) -> Optional[ExportConditions]:
    """Predict build output for a TypeScript source that has not been built."""
    for source_dir in request.source_dirs:
        source_root = request.package_dir / source_dir
        found = find_file_or_index(source_root / request.output_stem, (".ts", ".tsx"))
        if found is None:
            continue

        candidate = found.relative_to(source_root).as_posix()
        output = _TYPESCRIPT_SUFFIX.sub("", candidate)
        js_path = f"./{request.output_dir}/{output}.js"
        return ExportConditions(
            source=f"./{source_dir}/{candidate}",
            types=f"./{request.output_dir}/{output}.d.ts",
            import_=js_path,
            default=js_path,
        )
    return None


def assume_lib_output(request: EntryRequest) -> ExportConditions:
    """Last resort: guess the conventional output location."""
    request.log.warning(
        f'Could not find file for import path "{request.import_path}" '
        f"in package at {request.package_dir}"
    )
    base = f"./{request.output_dir}/{request.output_stem}"
    js_path = f"{base}.js"
    return ExportConditions(
        source=find_source_file(
            js_path, request.package_dir, request.source_dirs, request.build_dirs
        ),
        types=f"{base}.d.ts",
        default=js_path,
    )


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    exact_build_match,
    expand_with_pattern,
    predict_from_source,
    assume_lib_output,
)

# Used when filling in usage paths for a package with a known build pattern
PATTERN_FIRST_STRATEGIES: tuple[Strategy, ...] = (
    expand_with_pattern,
    exact_build_match,
    predict_from_source,
    assume_lib_output,
)


def first_result(
    strategies: Sequence[Strategy], request: EntryRequest
) -> Optional[ExportConditions]:
    """Run strategies in order and return the first non-None result."""
    for strategy in strategies:
        result = strategy(request)
        if result is not None:
            request.log.debug(f"{request.import_path}: resolved by {strategy.__name__}")
            return result
    return None


class ExportEntryGenerator:
    """Resolves import paths of one package to export entries.

    Args:
        package_dir: Package root.
        build_pattern: Dual-build pattern from detect_build_pattern.
        build_dirs: Build directories, highest priority first.
        source_dirs: Source directories for the `source` condition.
        strategies: Ordered strategy list; see DEFAULT_STRATEGIES.
        log: Sink for warnings. Defaults to this module's logger.
    """

    def __init__(
        self,
        package_dir: PathLike,
        build_pattern: BuildPattern = NO_PATTERN,
        build_dirs: Sequence[str] = DEFAULT_BUILD_DIRS,
        source_dirs: Sequence[str] = DEFAULT_SOURCE_DIRS,
        strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
        log: Optional[logging.Logger] = None,
    ):
        self.package_dir = Path(package_dir)
        self.build_pattern = build_pattern
        self.build_dirs = tuple(build_dirs)
        self.source_dirs = tuple(source_dirs)
        self.strategies = tuple(strategies)
        self.log = log or logger

    def request(self, import_path: str) -> EntryRequest:
        return EntryRequest(
            import_path=import_path,
            package_dir=self.package_dir,
            build_pattern=self.build_pattern,
            build_dirs=self.build_dirs,
            source_dirs=self.source_dirs,
            log=self.log,
        )

    def conditions(self, import_path: str) -> ExportConditions:
        """Resolve an import path to its conditions."""
        result = first_result(self.strategies, self.request(import_path))
        if result is None:
            # Only reachable with a custom strategy list lacking a fallback
            return assume_lib_output(self.request(import_path))
        return result

    def generate(self, import_path: str) -> ExportValue:
        """Resolve an import path to its serialized exports map value."""
        return self.conditions(import_path).to_export_value()


def generate_export_entry(
    import_path: str,
    package_dir: PathLike,
    build_pattern: BuildPattern = NO_PATTERN,
    log: Optional[logging.Logger] = None,
) -> ExportValue:
    """Resolve one import path with the default strategy order.

    Example:
        With lib/utils.ts and lib/utils.d.ts on disk:
        generate_export_entry("./utils", pkg) ->
            {"types": "./lib/utils.d.ts", "import": "./lib/utils.js",
             "default": "./lib/utils.js"}
    """
    return ExportEntryGenerator(package_dir, build_pattern, log=log).generate(import_path)
