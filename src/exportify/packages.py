# exportify/packages.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Package discovery.

Walks a repository for package.json files, pruning ignored directories
(node_modules, build output) before descending into them. A package.json
that cannot be parsed, or has no name, is skipped with a warning.
"""

import json
import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Sequence

from .models import PackageInfo

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_IGNORE = ("node_modules", "dist", "build")


def _package_json_paths(root: Path, ignore: Sequence[str]) -> Iterator[Path]:
    ignored = set(ignore)
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk never enters ignored trees
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        if "package.json" in filenames:
            yield Path(dirpath) / "package.json"


def read_package_json(package_json_path: Path) -> dict:
    """Parse a package.json file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If it is not JSON or not a JSON object.
    """
    with open(package_json_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("package.json must contain a JSON object")
    return data


def _iter_package_data(
    root: Path, ignore: Sequence[str], log: logging.Logger
) -> Iterator[tuple[Path, dict]]:
    for package_json_path in _package_json_paths(root, ignore):
        try:
            data = read_package_json(package_json_path)
        except (OSError, ValueError) as e:
            log.warning(f"Could not parse {package_json_path}: {e}")
            continue
        if not isinstance(data.get("name"), str) or not data["name"]:
            continue
        yield package_json_path, data


def find_packages(
    root: Path,
    ignore: Sequence[str] = DEFAULT_PACKAGE_IGNORE,
    log: Optional[logging.Logger] = None,
) -> list[PackageInfo]:
    """Find every named package under root, in path order."""
    log = log or logger
    return [
        PackageInfo(
            name=data["name"],
            path=package_json_path.parent,
            package_json_path=package_json_path,
        )
        for package_json_path, data in _iter_package_data(Path(root), ignore, log)
    ]


def discover_main_repo_packages(
    root: Path,
    private_only: bool = False,
    ignore: Sequence[str] = DEFAULT_PACKAGE_IGNORE,
    log: Optional[logging.Logger] = None,
) -> set[str]:
    """Names of the packages defined in a repository.

    Args:
        root: Repository root.
        private_only: Keep only packages with "private": true.
        ignore: Directory names not to descend into.
        log: Sink for parse warnings.
    """
    log = log or logger
    return {
        data["name"]
        for _, data in _iter_package_data(Path(root), ignore, log)
        if not private_only or data.get("private") is True
    }
