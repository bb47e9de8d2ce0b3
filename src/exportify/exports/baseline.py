# exportify/exports/baseline.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Baseline exports from package.json fields.

Builds the root (".") entry from source/types/module/main/browser, plus one
entry per file-level browser override. Usage data is not consulted here.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from ..analysis.module_type import ModuleType, detect_module_type
from ..config import DEFAULT_SOURCE_DIRS
from ..fs.probe import PathLike
from ..inference.source import find_source_file, find_source_from_package_json
from ..models import ExportsMap, PackageDescriptor
from ..paths import normalize_relative_path
from .browser import parse_browser_field
from .conditions import ExportConditions

logger = logging.getLogger(__name__)

FALLBACK_ROOT_EXPORT = "./lib/index.js"


def _root_source(
    descriptor: PackageDescriptor,
    package_dir: Path,
    main: Optional[str],
    module: Optional[str],
    source_dirs: Sequence[str],
) -> Optional[str]:
    explicit = find_source_from_package_json(descriptor, package_dir)
    if explicit:
        return explicit
    for entry_point in (main, module):
        if entry_point:
            found = find_source_file(entry_point, package_dir, source_dirs)
            if found:
                return found
    return None


def generate_baseline_exports(
    descriptor: PackageDescriptor,
    package_dir: PathLike,
    source_dirs: Sequence[str] = DEFAULT_SOURCE_DIRS,
    log: Optional[logging.Logger] = None,
) -> ExportsMap:
    """Derive an exports map from the classic entry-point fields.

    Args:
        descriptor: The package's package.json fields.
        package_dir: Package root, used for existence checks and module
            type detection.
        source_dirs: Source directories for the `source` condition.
        log: Sink for progress messages.

    Returns:
        A map that always contains ".". Root conditions follow the order
        source, types, import, require, browser, default; `main` gets a
        `require` condition unless it is detected as ESM. A package with no
        entry-point fields gets "./lib/index.js".
    """
    log = log or logger
    package_dir = Path(package_dir)

    main = normalize_relative_path(descriptor.main) if descriptor.main else None
    module = normalize_relative_path(descriptor.module) if descriptor.module else None
    types = descriptor.types_field

    require = None
    if main:
        module_type = detect_module_type(main, package_dir)
        log.debug(f"{descriptor.name}: main {main} detected as {module_type.value}")
        if module_type in (ModuleType.CJS, ModuleType.UNKNOWN):
            require = main

    browser = parse_browser_field(descriptor.browser, descriptor.main, descriptor.module)

    root = ExportConditions(
        source=_root_source(descriptor, package_dir, main, module, source_dirs),
        types=normalize_relative_path(types) if types else None,
        import_=module,
        require=require,
        browser=browser.root_browser,
        default=main,
    )

    exports_map: ExportsMap = {}
    exports_map["."] = root.to_export_value() if root else FALLBACK_ROOT_EXPORT

    for key, target in browser.browser_mappings.items():
        entry = ExportConditions(
            source=find_source_file(key, package_dir, source_dirs),
            # False blocks the file in browsers: no browser condition at all
            browser=target if target is not False else None,
            default=key,
        )
        exports_map[key] = entry.to_export_value()

    return exports_map
