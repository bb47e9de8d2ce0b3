# exportify/commands/evaluate.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
The evaluate command: scan a repository for imports of known packages and
merge them into the usage dictionary.

Merging is additive. Paths already recorded stay, new ones are appended,
and an existing versionRequirement is never replaced.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..analysis.imports import ImportMatch, analyze_file_imports, extract_version_requirement
from ..config import ExportifyConfig
from ..errors import UsageFileError
from ..fs.batch import batch_process
from ..models import UsageDictionary, UsageRecord
from ..packages import discover_main_repo_packages, read_package_json
from ..usage import load_usage_file, save_usage_file

logger = logging.getLogger(__name__)

DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


@dataclass
class EvaluateOptions:
    main_repo: Optional[Path] = None  # defaults to the scanned directory
    private_only: bool = False


@dataclass
class EvaluateReport:
    packages_tracked: int
    files_scanned: int
    imports_found: int
    failed_files: int


def collect_source_files(
    root: Path, extensions: Sequence[str], ignore: Sequence[str]
) -> list[Path]:
    """Source files under root, sorted, skipping ignored dirs and declarations."""
    ignored = set(ignore)
    wanted = tuple(extensions)
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        for filename in sorted(filenames):
            if filename.endswith(DECLARATION_SUFFIXES):
                continue
            if filename.endswith(wanted):
                files.append(Path(dirpath) / filename)
    return files


def load_dependencies(cwd: Path, log: logging.Logger) -> dict[str, str]:
    """dependencies, devDependencies and peerDependencies, later ones winning."""
    package_json_path = cwd / "package.json"
    if not package_json_path.exists():
        return {}
    try:
        data = read_package_json(package_json_path)
    except (OSError, ValueError) as e:
        log.warning(f"Could not read {package_json_path} for version information: {e}")
        return {}

    dependencies: dict[str, str] = {}
    for section in ("dependencies", "devDependencies", "peerDependencies"):
        values = data.get(section)
        if isinstance(values, dict):
            dependencies.update({k: v for k, v in values.items() if isinstance(v, str)})
    return dependencies


def load_existing_usage(usage_file: Path, log: logging.Logger) -> UsageDictionary:
    if not usage_file.exists():
        return {}
    try:
        records = load_usage_file(usage_file, log)
    except UsageFileError as e:
        log.warning(f"Could not read existing usage file, starting fresh: {e}")
        return {}
    log.info(f"Loaded existing usage data with {len(records)} packages")
    return records


def merge_imports(
    records: UsageDictionary,
    matches: Sequence[ImportMatch],
    dependencies: dict[str, str],
) -> int:
    """Fold import matches into the usage records. Returns matches seen."""
    for match in matches:
        record = records.get(match.package_name)
        if record is None:
            record = UsageRecord(package=match.package_name)
            records[match.package_name] = record
        record.add_path(match.import_path)
        if not record.version_requirement:
            record.version_requirement = extract_version_requirement(
                match.package_name, dependencies
            )
    return len(matches)


async def evaluate_usage(
    cwd: Path,
    usage_file: Path,
    options: Optional[EvaluateOptions] = None,
    config: Optional[ExportifyConfig] = None,
    log: Optional[logging.Logger] = None,
) -> EvaluateReport:
    """Scan cwd for package imports and update the usage file.

    Args:
        cwd: Repository to scan.
        usage_file: Usage dictionary to create or update.
        options: Main repository location and private-only filter.
        config: Scan extensions, ignored directories and batch limits.
        log: Sink for progress and warnings.

    Returns:
        Counts describing the scan.
    """
    options = options or EvaluateOptions()
    config = config or ExportifyConfig()
    log = log or logger
    cwd = Path(cwd)

    log.info(f"Scanning imports in: {cwd}")
    main_repo = Path(options.main_repo) if options.main_repo else cwd
    targets = discover_main_repo_packages(
        main_repo, options.private_only, config.package_ignore, log
    )
    log.info(f"Found {len(targets)} packages in main repo: {main_repo}")

    records = load_existing_usage(Path(usage_file), log)
    source_files = collect_source_files(cwd, config.scan_extensions, config.scan_ignore)
    log.info(f"Found {len(source_files)} source files to analyze")
    dependencies = load_dependencies(cwd, log)

    def analyze(file_path: Path) -> list[ImportMatch]:
        return analyze_file_imports(file_path, targets, log)

    outcome = await batch_process(source_files, analyze, config.batch, log=log)

    imports_found = 0
    for item in outcome.results:
        if item.success:
            imports_found += merge_imports(records, item.result, dependencies)

    save_usage_file(Path(usage_file), records)
    log.info(f"Updated usage data with {len(records)} packages")

    return EvaluateReport(
        packages_tracked=len(records),
        files_scanned=len(source_files),
        imports_found=imports_found,
        failed_files=outcome.failure_count,
    )
