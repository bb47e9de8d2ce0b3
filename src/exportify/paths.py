# exportify/paths.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Relative path helpers shared by every resolver.

Package-relative paths are always written with a leading "./" in exports maps
and usage records. These helpers move between that form and the bare form
used for filesystem joins.
"""

# Compiled output extensions, longest first so ".d.ts" wins over ".ts"
COMPILED_EXTENSIONS = (".d.mts", ".d.cts", ".d.ts", ".mjs", ".cjs", ".js")


def normalize_relative_path(path: str) -> str:
    """Ensure a path starts with "./".

    Args:
        path: Package-relative path, with or without the "./" prefix.

    Returns:
        The path with a "./" prefix. An empty string becomes "./".

    Example:
        "lib/index.js"   -> "./lib/index.js"
        "./lib/index.js" -> "./lib/index.js"
    """
    return path if path.startswith("./") else f"./{path}"


def strip_relative_prefix(path: str) -> str:
    """Remove a leading "./" if present."""
    return path[2:] if path.startswith("./") else path


def split_extension(path: str) -> tuple[str, str]:
    """Split a path into (base, extension), treating ".d.ts" as one extension.

    Only the final path segment is inspected, so dots in directory names
    are never taken as an extension.
    """
    head, _, filename = path.rpartition("/")
    prefix = f"{head}/" if head or path.startswith("/") else ""

    for compound in (".d.ts", ".d.mts", ".d.cts"):
        if filename.endswith(compound) and len(filename) > len(compound):
            return prefix + filename[: -len(compound)], compound

    dot = filename.rfind(".")
    if dot <= 0:
        return path, ""
    return prefix + filename[:dot], filename[dot:]


def strip_compiled_extension(path: str) -> str:
    """Drop a trailing compiled-output extension (.js/.mjs/.cjs/.d.ts)."""
    for ext in COMPILED_EXTENSIONS:
        if path.endswith(ext) and len(path) > len(ext):
            return path[: -len(ext)]
    return path
