# exportify/analysis/module_type.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
ESM/CJS classification of a single JavaScript file.

Priority (first match wins):
1. Extension: .mjs is ESM, .cjs is CJS
2. "type" field of the nearest package.json between the file and the package root
3. Content sniffing: import/export syntax, then require/module.exports
4. Unknown

Unknown is never an error. Callers treat it like CJS, which is the safe
assumption for legacy packages.
"""

import json
import logging
import posixpath
import re
from enum import Enum
from pathlib import Path
from typing import Optional

from ..paths import strip_relative_prefix

logger = logging.getLogger(__name__)


class ModuleType(str, Enum):
    ESM = "esm"
    CJS = "cjs"
    UNKNOWN = "unknown"


_ESM_PATTERNS = (
    re.compile(r"\b(import|export)\s"),
    re.compile(r"\bimport\s*\("),
)
_CJS_PATTERNS = (
    re.compile(r"\brequire\s*\("),
    re.compile(r"module\.exports\s*="),
    re.compile(r"exports\s*\."),
)


def _type_from_package_json(package_json: Path) -> Optional[ModuleType]:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    declared = data.get("type")
    if declared == "module":
        return ModuleType.ESM
    if declared == "commonjs":
        return ModuleType.CJS
    return None


def _nearest_package_type(file_path: Path, package_dir: Path) -> Optional[ModuleType]:
    """Walk from the file's directory up to package_dir looking for a package.json."""
    root = package_dir.resolve()
    current = file_path.resolve().parent

    while True:
        candidate = current / "package.json"
        if candidate.is_file():
            # The nearest package.json decides, even when it has no "type"
            return _type_from_package_json(candidate)
        if current == root or root not in current.parents:
            return None
        current = current.parent


def sniff_module_type(content: str) -> ModuleType:
    """Classify source text by its import/export tokens."""
    if any(pattern.search(content) for pattern in _ESM_PATTERNS):
        return ModuleType.ESM
    if any(pattern.search(content) for pattern in _CJS_PATTERNS):
        return ModuleType.CJS
    return ModuleType.UNKNOWN


def detect_module_type(file_path: str, package_dir: Path) -> ModuleType:
    """Classify a package file as ESM, CJS or unknown.

    Args:
        file_path: Package-relative path, e.g. "./lib/index.js".
        package_dir: Package root directory.

    Returns:
        The detected ModuleType. Read failures yield UNKNOWN.
    """
    package_dir = Path(package_dir)
    relative = strip_relative_prefix(file_path)

    extension = posixpath.splitext(relative)[1]
    if extension == ".mjs":
        return ModuleType.ESM
    if extension == ".cjs":
        return ModuleType.CJS

    full_path = package_dir / relative

    declared = _nearest_package_type(full_path, package_dir)
    if declared is not None:
        return declared

    if not full_path.is_file():
        return ModuleType.UNKNOWN

    try:
        content = full_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Could not read {full_path} for module type detection: {e}")
        return ModuleType.UNKNOWN

    return sniff_module_type(content)
