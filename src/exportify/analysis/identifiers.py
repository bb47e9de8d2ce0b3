# exportify/analysis/identifiers.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
CJS/ESM naming heuristics.

Build tools mark their CommonJS and ES module outputs with conventional
directory names ("cjs", "esm"), filename prefixes ("cjs.index.js") or
extensions (".cjs", ".mjs"). All of that knowledge lives here so the
detectors only ever ask "which flavor is this token?".
"""

import re
from enum import Enum
from typing import Optional


class BuildFlavor(str, Enum):
    """Which module system a naming token points to."""

    CJS = "cjs"
    ESM = "esm"
    EITHER = "either"  # plain ".js": decided by package type, not the name
    UNKNOWN = "unknown"


_CJS_IDENTIFIER = re.compile(r"^(cjs|commonjs|common|node)$", re.IGNORECASE)
_ESM_IDENTIFIER = re.compile(r"^(esm|es|module|modules|import)$", re.IGNORECASE)

_EXTENSION_FLAVORS = {
    ".cjs": BuildFlavor.CJS,
    ".mjs": BuildFlavor.ESM,
    ".js": BuildFlavor.EITHER,
}


def classify_identifier(token: str) -> BuildFlavor:
    """Classify a directory name or filename prefix.

    Example:
        "cjs"      -> CJS
        "CommonJS" -> CJS
        "es"       -> ESM
        "umd"      -> UNKNOWN
    """
    if _CJS_IDENTIFIER.match(token):
        return BuildFlavor.CJS
    if _ESM_IDENTIFIER.match(token):
        return BuildFlavor.ESM
    return BuildFlavor.UNKNOWN


def classify_extension(extension: str) -> BuildFlavor:
    """Classify a file extension (with leading dot)."""
    return _EXTENSION_FLAVORS.get(extension, BuildFlavor.UNKNOWN)


def _accepts(flavor: BuildFlavor, wanted: BuildFlavor) -> bool:
    return flavor == wanted or flavor == BuildFlavor.EITHER


def assign_flavors(first: BuildFlavor, second: BuildFlavor) -> Optional[int]:
    """Decide which of two tokens is the CommonJS side.

    Returns:
        0 if `first` is CJS and `second` ESM, 1 for the reverse, None when
        the pair is not a CJS/ESM pair. Swapping the arguments flips the
        answer.
    """
    if first == second:
        return None
    if _accepts(first, BuildFlavor.CJS) and _accepts(second, BuildFlavor.ESM):
        return 0
    if _accepts(second, BuildFlavor.CJS) and _accepts(first, BuildFlavor.ESM):
        return 1
    return None
