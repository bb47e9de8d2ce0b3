# exportify/analysis/build_pattern.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Dual-build detection from the main/module fields.

A package that ships both CommonJS and ES module builds usually names them
in one of three ways:

    directory   ./lib/cjs/index.js   vs ./lib/esm/index.js
    extension   ./lib/index.cjs      vs ./lib/index.mjs
    prefix      ./lib/cjs.index.js   vs ./lib/esm.index.js

The classifiers run in that order and the first match wins. Anything
unconventional yields NO_PATTERN, which disables pattern expansion.
"""

import posixpath
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..paths import normalize_relative_path
from .identifiers import BuildFlavor, assign_flavors, classify_extension, classify_identifier


class PatternType(str, Enum):
    DIRECTORY = "directory"
    EXTENSION = "extension"
    PREFIX = "prefix"
    NONE = "none"


@dataclass(frozen=True)
class PathPattern:
    """One side of a dual build.

    base_path is "./lib" for directory and prefix patterns and the
    extension-less path ("./lib/index") for extension patterns. identifier
    keeps its original case. separator is only set for prefix patterns.
    """

    base_path: str
    identifier: str
    separator: str = ""


@dataclass(frozen=True)
class BuildPattern:
    pattern_type: PatternType = PatternType.NONE
    cjs_pattern: Optional[PathPattern] = None
    esm_pattern: Optional[PathPattern] = None

    @property
    def has_multiple_builds(self) -> bool:
        return self.pattern_type != PatternType.NONE


NO_PATTERN = BuildPattern()

_PREFIX = re.compile(r"^([a-z]+)([.-])", re.IGNORECASE)


def _strip_last_extension(filename: str) -> str:
    return re.sub(r"\.[^.]*$", "", filename)


def _pair(
    pattern_type: PatternType,
    main: PathPattern,
    module: PathPattern,
    main_flavor: BuildFlavor,
    module_flavor: BuildFlavor,
) -> Optional[BuildPattern]:
    side = assign_flavors(main_flavor, module_flavor)
    if side is None:
        return None
    cjs, esm = (main, module) if side == 0 else (module, main)
    return BuildPattern(pattern_type=pattern_type, cjs_pattern=cjs, esm_pattern=esm)


def _detect_directory(main: str, module: str) -> Optional[BuildPattern]:
    main_parts = main.split("/")
    module_parts = module.split("/")
    if len(main_parts) != len(module_parts):
        return None

    if _strip_last_extension(main_parts[-1]) != _strip_last_extension(module_parts[-1]):
        return None

    differing = [
        i for i in range(len(main_parts) - 1) if main_parts[i] != module_parts[i]
    ]
    if len(differing) != 1:
        return None

    index = differing[0]
    main_dir, module_dir = main_parts[index], module_parts[index]
    return _pair(
        PatternType.DIRECTORY,
        PathPattern("/".join(main_parts[:index]), main_dir),
        PathPattern("/".join(module_parts[:index]), module_dir),
        classify_identifier(main_dir),
        classify_identifier(module_dir),
    )


def _detect_extension(main: str, module: str) -> Optional[BuildPattern]:
    main_base, main_ext = posixpath.splitext(main)
    module_base, module_ext = posixpath.splitext(module)
    if main_base != module_base or main_ext == module_ext:
        return None

    return _pair(
        PatternType.EXTENSION,
        PathPattern(main_base, main_ext),
        PathPattern(module_base, module_ext),
        classify_extension(main_ext),
        classify_extension(module_ext),
    )


def _detect_prefix(main: str, module: str) -> Optional[BuildPattern]:
    main_dir, main_file = posixpath.split(main)
    module_dir, module_file = posixpath.split(module)
    if main_dir != module_dir:
        return None

    main_match = _PREFIX.match(main_file)
    module_match = _PREFIX.match(module_file)
    if not main_match or not module_match:
        return None

    if main_file[main_match.end():] != module_file[module_match.end():]:
        return None

    return _pair(
        PatternType.PREFIX,
        PathPattern(main_dir, main_match.group(1), main_match.group(2)),
        PathPattern(module_dir, module_match.group(1), module_match.group(2)),
        classify_identifier(main_match.group(1)),
        classify_identifier(module_match.group(1)),
    )


_CLASSIFIERS: tuple[Callable[[str, str], Optional[BuildPattern]], ...] = (
    _detect_directory,
    _detect_extension,
    _detect_prefix,
)


def detect_build_pattern(main: Optional[str], module: Optional[str]) -> BuildPattern:
    """Classify how a package separates its CJS and ESM builds.

    Args:
        main: package.json "main" field.
        module: package.json "module" field.

    Returns:
        The first matching BuildPattern, or NO_PATTERN when either field is
        missing, both point to the same file, or the naming is unrecognized.

    Example:
        >>> detect_build_pattern("./lib/cjs/index.js", "./lib/esm/index.js")
        BuildPattern(pattern_type=<PatternType.DIRECTORY: 'directory'>, ...)
    """
    if not main or not module:
        return NO_PATTERN

    main = normalize_relative_path(main)
    module = normalize_relative_path(module)
    if main == module:
        return NO_PATTERN

    for classifier in _CLASSIFIERS:
        pattern = classifier(main, module)
        if pattern is not None:
            return pattern
    return NO_PATTERN
