# exportify/analysis/imports.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Package import extraction using tree-sitter.

Handles every way a JS/TS file can pull in another package:
- import { Foo } from 'pkg' / import Foo from 'pkg' / import * as foo from 'pkg'
- import 'pkg' (side-effect import)
- export { Foo } from 'pkg' / export * from 'pkg'
- import foo = require('pkg')
- require('pkg')
- import('pkg') (dynamic import with a literal specifier)

Relative specifiers are skipped. Only the package name and the subpath
below it are kept; "pkg/lib/Button" becomes ("pkg", "./lib/Button").
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Mapping, Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser

logger = logging.getLogger(__name__)

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

# Extensions that cannot contain JSX; everything else goes through the TSX grammar
_TYPESCRIPT_ONLY = {".ts", ".mts", ".cts"}


@dataclass(frozen=True)
class ImportMatch:
    """A package referenced from a source file."""

    package_name: str
    import_path: str  # "." for the package root, "./sub/path" otherwise


def language_for(file_path: Path) -> Language:
    """Pick the grammar for a file by extension."""
    return TS_LANGUAGE if Path(file_path).suffix in _TYPESCRIPT_ONLY else TSX_LANGUAGE


def _walk_tree(node) -> Iterator:
    """Yield every node in the tree, depth first, without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _string_value(node) -> Optional[str]:
    """Literal value of a string node, or of a template string with no substitutions."""
    if node is None:
        return None
    if node.type == "string":
        return node.text.decode("utf-8", errors="replace")[1:-1]
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.children):
            return None
        return node.text.decode("utf-8", errors="replace")[1:-1]
    return None


def _call_specifier(node) -> Optional[str]:
    """Specifier of require('x') or import('x'), if node is such a call."""
    function = node.child_by_field_name("function")
    if function is None:
        return None

    is_import = function.type == "import"
    is_require = function.type == "identifier" and function.text == b"require"
    if not (is_import or is_require):
        return None

    arguments = node.child_by_field_name("arguments")
    if arguments is None or not arguments.named_children:
        return None
    # Only the first argument; import() may carry an options object after it
    return _string_value(arguments.named_children[0])


def _statement_specifier(node) -> Optional[str]:
    """Specifier of an import or re-export statement."""
    source = node.child_by_field_name("source")
    if source is not None:
        return _string_value(source)

    # import foo = require('pkg')
    for child in node.children:
        if child.type == "import_require_clause":
            return _string_value(child.child_by_field_name("source"))
    return None


def extract_import_specifiers(content: str, file_path: Path) -> list[str]:
    """Extract every module specifier referenced by a source file.

    Args:
        content: Source text.
        file_path: Used only to pick the TS or TSX grammar.

    Returns:
        Specifiers in source order, duplicates included.
    """
    # Parsers are not shared between threads
    parser = Parser(language_for(file_path))
    tree = parser.parse(content.encode("utf-8"))

    specifiers = []
    for node in _walk_tree(tree.root_node):
        if node.type in ("import_statement", "export_statement"):
            specifier = _statement_specifier(node)
        elif node.type == "call_expression":
            specifier = _call_specifier(node)
        else:
            continue
        if specifier:
            specifiers.append(specifier)
    return specifiers


def split_package_specifier(specifier: str) -> Optional[ImportMatch]:
    """Split a bare specifier into package name and package-relative path.

    Example:
        "react"                 -> ("react", ".")
        "@scope/ui/lib/Button"  -> ("@scope/ui", "./lib/Button")
        "./local"               -> None
    """
    if not specifier or specifier.startswith((".", "/")):
        return None

    parts = specifier.split("/")
    if specifier.startswith("@"):
        if len(parts) < 2 or not parts[1]:
            return None
        package_name = "/".join(parts[:2])
    else:
        package_name = parts[0]

    if specifier == package_name:
        return ImportMatch(package_name, ".")
    return ImportMatch(package_name, f"./{specifier[len(package_name) + 1:]}")


def analyze_file_imports(
    file_path: Path,
    target_packages: Optional[set[str]] = None,
    log: Optional[logging.Logger] = None,
) -> list[ImportMatch]:
    """Find the package imports of one source file.

    Args:
        file_path: File to read.
        target_packages: Package names to keep. Empty or None keeps all.
        log: Sink for the unreadable-file warning.

    Returns:
        Matches in source order. An unreadable file yields an empty list.
    """
    log = log or logger
    try:
        content = Path(file_path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.warning(f"Could not read file {file_path}: {e}")
        return []

    matches = []
    for specifier in extract_import_specifiers(content, file_path):
        match = split_package_specifier(specifier)
        if match is None:
            continue
        if target_packages and match.package_name not in target_packages:
            continue
        matches.append(match)
    return matches


def extract_version_requirement(
    package_name: str, dependencies: Mapping[str, str]
) -> Optional[str]:
    """Version range declared for a package, if any."""
    return dependencies.get(package_name)
