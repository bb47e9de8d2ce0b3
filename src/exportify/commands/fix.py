# exportify/commands/fix.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
The fix command: generate exports maps from the usage dictionary and write
them into each package.json.

A package.json is only rewritten when its exports actually change, so
running fix twice is a no-op the second time.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config import ExportifyConfig
from ..errors import PackageJsonError, PackageNotFoundError
from ..exports.assembler import as_subpath_map, assemble_exports_map_async
from ..fs.structure import detect_build_structure, get_recommended_config
from ..models import ExportsMap, PackageDescriptor, PackageInfo
from ..packages import find_packages, read_package_json
from ..usage import load_usage_file

logger = logging.getLogger(__name__)


@dataclass
class FixOptions:
    dry_run: bool = False
    package_name: Optional[str] = None
    detect_structure: bool = False  # per-package build/source dirs from disk


@dataclass
class PackageFixResult:
    name: str
    exports_map: ExportsMap
    updated: bool  # always False in dry-run mode


@dataclass
class FixReport:
    results: list[PackageFixResult] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)


def _read_target(package: PackageInfo) -> dict:
    try:
        return read_package_json(package.package_json_path)
    except (OSError, ValueError) as e:
        raise PackageJsonError(f"Cannot read {package.package_json_path}: {e}") from e


def _serialize(value: object) -> str:
    return json.dumps(value, ensure_ascii=False)


def update_package_json(package_json_path: Path, exports_map: ExportsMap) -> bool:
    """Replace the exports field if it differs. Returns True if written.

    Key order counts as a difference: Node resolves conditions in order.
    A shorthand field ("exports": "./index.js") equal to its expanded form
    is left as written.
    """
    data = read_package_json(package_json_path)
    if "exports" in data:
        current = as_subpath_map(data["exports"])
        if _serialize(current) == _serialize(exports_map):
            return False

    data["exports"] = exports_map
    Path(package_json_path).write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    return True


async def fix_exports(
    cwd: Path,
    usage_file: Path,
    options: Optional[FixOptions] = None,
    config: Optional[ExportifyConfig] = None,
    log: Optional[logging.Logger] = None,
) -> FixReport:
    """Generate and (unless dry-run) write exports maps for packages in cwd.

    Args:
        cwd: Repository containing the packages.
        usage_file: Usage dictionary produced by evaluate.
        options: Dry-run flag, optional single package name, and whether to
            derive each package's build and source directories from disk.
        config: Directory conventions and batch limits.
        log: Sink for progress and warnings.

    Returns:
        One result per package that had usage data.

    Raises:
        UsageFileError: If the usage file cannot be loaded.
        PackageNotFoundError: If options.package_name is not in cwd.
        PackageJsonError: If a target package.json cannot be read.
    """
    options = options or FixOptions()
    config = config or ExportifyConfig()
    log = log or logger
    cwd = Path(cwd)

    if options.package_name:
        log.info(f"Generating exports map for package: {options.package_name}")
    else:
        log.info(f"Generating exports maps for packages in: {cwd}")

    usage = load_usage_file(Path(usage_file), log)
    log.info(f"Loaded usage data for {len(usage)} packages")

    packages = find_packages(cwd, config.package_ignore, log)
    if options.package_name:
        packages = [p for p in packages if p.name == options.package_name]
        if not packages:
            raise PackageNotFoundError(
                f"Package '{options.package_name}' not found in the repository"
            )

    report = FixReport()
    for package in packages:
        record = usage.get(package.name)
        if record is None or not record.import_paths:
            if options.package_name:
                log.warning(f"No usage data found for package '{package.name}'")
            continue

        descriptor = PackageDescriptor.from_package_json(_read_target(package))
        package_config = config
        if options.detect_structure:
            structure = detect_build_structure(package.path, log)
            package_config = get_recommended_config(structure, config)
        exports_map = await assemble_exports_map_async(
            descriptor, package.path, record, package_config, log
        )

        updated = False
        if not options.dry_run:
            try:
                updated = update_package_json(package.package_json_path, exports_map)
            except (OSError, ValueError) as e:
                raise PackageJsonError(
                    f"Cannot update {package.package_json_path}: {e}"
                ) from e
        report.results.append(PackageFixResult(package.name, exports_map, updated))

    log.info(f"Processed exports for {report.processed} packages")
    return report
