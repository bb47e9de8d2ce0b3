# exportify/exports/assembler.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Exports map assembly.

Starts from the package's existing `exports` (kept verbatim) or, when there
is none, from the baseline derived from main/module/types/browser. Each
usage path without an entry is then resolved and appended. Existing keys
are never touched.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional

from ..analysis.build_pattern import detect_build_pattern
from ..config import ExportifyConfig
from ..fs.batch import batch_process
from ..fs.probe import PathLike
from ..models import ExportsMap, PackageDescriptor, UsageRecord
from .baseline import generate_baseline_exports
from .entry import PATTERN_FIRST_STRATEGIES, ExportEntryGenerator

logger = logging.getLogger(__name__)


def as_subpath_map(exports: Any) -> ExportsMap:
    """Bring every legal `exports` shape to a subpath-keyed dict.

    "./index.js", ["./a.js", "./b.js"] and {"import": ..., "require": ...}
    are all shorthands for the "." entry.
    """
    if isinstance(exports, dict):
        if exports and not any(key.startswith(".") for key in exports):
            return {".": copy.deepcopy(exports)}
        return copy.deepcopy(exports)
    return {".": copy.deepcopy(exports)}


def starting_exports_map(
    descriptor: PackageDescriptor,
    package_dir: PathLike,
    config: ExportifyConfig,
    log: logging.Logger,
) -> ExportsMap:
    """The existing exports field, or the baseline when there is none."""
    if descriptor.exports is not None:
        return as_subpath_map(descriptor.exports)
    return generate_baseline_exports(
        descriptor, package_dir, source_dirs=config.source_dirs, log=log
    )


def pending_import_paths(
    exports_map: ExportsMap, usage: UsageRecord, log: logging.Logger
) -> list[str]:
    """Usage paths that still need an entry, in usage order."""
    pending = []
    for import_path in usage.import_paths:
        if import_path in pending:
            continue
        if import_path in exports_map:
            if import_path != ".":
                log.info(f"Skipping {import_path} for {usage.package}: export already exists")
            continue
        pending.append(import_path)
    return pending


def _generator(
    descriptor: PackageDescriptor,
    package_dir: PathLike,
    config: ExportifyConfig,
    log: logging.Logger,
) -> ExportEntryGenerator:
    return ExportEntryGenerator(
        package_dir,
        build_pattern=detect_build_pattern(descriptor.main, descriptor.module),
        build_dirs=config.build_dirs,
        source_dirs=config.source_dirs,
        strategies=PATTERN_FIRST_STRATEGIES,
        log=log,
    )


def assemble_exports_map(
    descriptor: PackageDescriptor,
    package_dir: PathLike,
    usage: UsageRecord,
    config: Optional[ExportifyConfig] = None,
    log: Optional[logging.Logger] = None,
) -> ExportsMap:
    """Build the complete exports map for one package.

    Args:
        descriptor: The package's package.json fields.
        package_dir: Package root.
        usage: Import paths observed for this package.
        config: Build/source directory settings. Defaults to ExportifyConfig().
        log: Sink for warnings and skip messages.

    Returns:
        A new map. Keys from the existing exports field (or the baseline)
        come first and are unchanged; usage entries follow in usage order.
    """
    config = config or ExportifyConfig()
    log = log or logger
    package_dir = Path(package_dir)

    exports_map = starting_exports_map(descriptor, package_dir, config, log)
    generator = _generator(descriptor, package_dir, config, log)

    for import_path in pending_import_paths(exports_map, usage, log):
        exports_map[import_path] = generator.generate(import_path)
    return exports_map


async def assemble_exports_map_async(
    descriptor: PackageDescriptor,
    package_dir: PathLike,
    usage: UsageRecord,
    config: Optional[ExportifyConfig] = None,
    log: Optional[logging.Logger] = None,
) -> ExportsMap:
    """Same as assemble_exports_map, resolving usage paths concurrently.

    A path whose resolution fails or times out is left out of the map with
    a warning; the rest of the package is still assembled.
    """
    config = config or ExportifyConfig()
    log = log or logger
    package_dir = Path(package_dir)

    exports_map = starting_exports_map(descriptor, package_dir, config, log)
    generator = _generator(descriptor, package_dir, config, log)
    pending = pending_import_paths(exports_map, usage, log)

    outcome = await batch_process(pending, generator.generate, config.batch, log=log)
    for import_path, item in zip(pending, outcome.results):
        if not item.success:
            log.warning(f"Skipping {import_path} for {usage.package}: {item.error}")
            continue
        exports_map[import_path] = item.result
    return exports_map
