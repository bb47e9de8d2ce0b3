# exportify/exports/browser.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
package.json `browser` field parsing.

The string form replaces the package entry point in browsers. The object
form maps individual files to browser replacements, or to `false` to block
them. An object entry whose key is the `main` (or, failing that, the
`module`) file is really a root replacement and is lifted to root_browser.

Path matching is textual after "./" normalization; "./lib/index.js" and
"./lib/" are different keys even if a bundler would treat them alike.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from ..models import BrowserField
from ..paths import normalize_relative_path

BrowserTarget = Union[str, bool]  # replacement path, or False to block


@dataclass(frozen=True)
class BrowserFieldResult:
    root_browser: Optional[str] = None
    browser_mappings: dict[str, BrowserTarget] = field(default_factory=dict)


def _normalize_target(value: BrowserTarget) -> BrowserTarget:
    return False if value is False else normalize_relative_path(value)


def parse_browser_field(
    browser_field: Optional[BrowserField],
    main: Optional[str] = None,
    module: Optional[str] = None,
) -> BrowserFieldResult:
    """Split a browser field into a root replacement and per-file mappings.

    Args:
        browser_field: The raw `browser` value (string or object).
        main: package.json `main`, used to detect the root entry.
        module: package.json `module`, the root entry when main has none.

    Returns:
        BrowserFieldResult with normalized paths. Mapping values of False
        are kept as block markers.

    Example:
        >>> parse_browser_field({"./lib/index.js": "./lib/browser.js",
        ...                      "./lib/fs.js": False}, main="lib/index.js")
        BrowserFieldResult(root_browser='./lib/browser.js',
                           browser_mappings={'./lib/fs.js': False})
    """
    if browser_field is None:
        return BrowserFieldResult()
    if isinstance(browser_field, str):
        return BrowserFieldResult(root_browser=normalize_relative_path(browser_field))

    normalized_main = normalize_relative_path(main) if main else None
    normalized_module = normalize_relative_path(module) if module else None
    entries = [
        (normalize_relative_path(key), value) for key, value in browser_field.items()
    ]

    root_browser = None
    # main has priority regardless of where its key sits in the object
    for key, value in entries:
        if key == normalized_main and value is not False:
            root_browser = normalize_relative_path(value)

    mappings: dict[str, BrowserTarget] = {}
    for key, value in entries:
        if key == normalized_main:
            continue
        if key == normalized_module and root_browser is None:
            # Root replacement via module; a blocked module entry is dropped
            if value is not False:
                root_browser = normalize_relative_path(value)
            continue
        mappings[key] = _normalize_target(value)

    return BrowserFieldResult(root_browser=root_browser, browser_mappings=mappings)
