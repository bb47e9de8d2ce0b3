# exportify/fs/declarations.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
TypeScript declaration file mapping.

Locates the `.d.ts` that describes a compiled or source file, and predicts
where a compiler would emit one for a source file that has not been built.
"""

import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Sequence

from ..config import DEFAULT_BUILD_DIRS
from ..paths import split_extension, strip_relative_prefix
from .probe import PathLike, directory_exists, file_exists

MappingType = Literal["exact", "inferred", "none"]


@dataclass(frozen=True)
class DeclarationResult:
    """Outcome of a declaration lookup. Paths are package-relative without "./"."""

    exists: bool
    mapping_type: MappingType
    declaration_path: Optional[str] = None
    source_path: Optional[str] = None


def _split_dir_name(path: str) -> tuple[str, str]:
    base, _ = split_extension(path)
    directory, name = posixpath.split(base)
    return directory, name


def _in_dir(directory: str, top: str) -> bool:
    return directory == top or directory.startswith(top + "/")


def find_sibling_declaration(file_path: str, package_dir: PathLike) -> Optional[str]:
    """Return "./dir/name.d.ts" if it sits beside file_path, else None.

    This is the lookup used for the `types` condition: the declaration must
    live next to the file it describes.
    """
    clean = strip_relative_prefix(file_path)
    if clean.endswith(".d.ts"):
        return f"./{clean}" if file_exists(Path(package_dir) / clean) else None
    base, _ = split_extension(clean)
    candidate = f"{base}.d.ts"
    if file_exists(Path(package_dir) / candidate):
        return f"./{candidate}"
    return None


def find_declaration_file(
    file_path: str,
    package_dir: PathLike,
    build_dirs: Sequence[str] = DEFAULT_BUILD_DIRS,
) -> DeclarationResult:
    """Find the declaration file for a JavaScript or TypeScript file.

    Tries, in order: the file itself when it is already a declaration, a
    `.d.ts` in the same directory, the same relative location under each other
    build directory, and finally the location a compiler would emit to.
    """
    package_dir = Path(package_dir)
    clean = strip_relative_prefix(file_path)

    if clean.endswith(".d.ts"):
        exists = file_exists(package_dir / clean)
        return DeclarationResult(
            exists=exists,
            mapping_type="exact" if exists else "none",
            declaration_path=clean if exists else None,
        )

    directory, name = _split_dir_name(clean)

    same_dir = posixpath.join(directory, f"{name}.d.ts")
    if file_exists(package_dir / same_dir):
        return DeclarationResult(
            exists=True, mapping_type="exact", declaration_path=same_dir, source_path=clean
        )

    for build_dir in build_dirs:
        if not _in_dir(directory, build_dir):
            continue
        relative_dir = directory[len(build_dir) + 1:]
        for other_dir in build_dirs:
            if other_dir == build_dir:
                continue
            candidate = posixpath.join(other_dir, relative_dir, f"{name}.d.ts")
            if file_exists(package_dir / candidate):
                return DeclarationResult(
                    exists=True,
                    mapping_type="inferred",
                    declaration_path=candidate,
                    source_path=clean,
                )

    expected = expected_declaration_path(clean, build_dirs)
    exists = file_exists(package_dir / expected)
    return DeclarationResult(
        exists=exists,
        mapping_type="inferred" if exists else "none",
        declaration_path=expected if exists else None,
        source_path=clean,
    )


def expected_declaration_path(
    source_path: str, build_dirs: Sequence[str] = ("lib", "dist", "types")
) -> str:
    """Where a compiler would place the declaration for source_path.

    Files already under a build directory keep their directory. Files under
    src/ or source/ move to the first build directory. Anything else goes
    under lib/.
    """
    directory, name = _split_dir_name(strip_relative_prefix(source_path))

    for build_dir in build_dirs:
        if _in_dir(directory, build_dir):
            return posixpath.join(directory, f"{name}.d.ts")

    for source_dir in ("src", "source"):
        if _in_dir(directory, source_dir):
            relative_dir = directory[len(source_dir) + 1:]
            return posixpath.join(build_dirs[0], relative_dir, f"{name}.d.ts")

    return posixpath.join("lib", directory, f"{name}.d.ts")


def map_source_to_declaration(source_path: str, output_dir: str = "lib") -> str:
    """Map "./src/a/b.ts" to "lib/a/b.d.ts" (or under output_dir)."""
    directory, name = _split_dir_name(strip_relative_prefix(source_path))
    for source_dir in ("src", "source"):
        if _in_dir(directory, source_dir):
            directory = directory[len(source_dir) + 1:]
            break
    return posixpath.join(output_dir, directory, f"{name}.d.ts")


def find_all_declaration_files(
    package_dir: PathLike,
    build_dirs: Sequence[str] = ("lib", "dist", "build", "out", "types"),
) -> list[str]:
    """Every .d.ts below the given build directories, package-relative."""
    package_dir = Path(package_dir)
    found = []
    for build_dir in build_dirs:
        root = package_dir / build_dir
        if not directory_exists(root):
            continue
        for dirpath, _, filenames in os.walk(root):
            for filename in sorted(filenames):
                if filename.endswith(".d.ts"):
                    found.append((Path(dirpath) / filename).relative_to(package_dir).as_posix())
    return sorted(found)


def validate_declaration_mapping(
    declaration_path: str, source_path: str, package_dir: PathLike
) -> bool:
    """True if both files exist and share a base name."""
    package_dir = Path(package_dir)
    declaration = strip_relative_prefix(declaration_path)
    source = strip_relative_prefix(source_path)
    if not (file_exists(package_dir / declaration) and file_exists(package_dir / source)):
        return False
    return _split_dir_name(declaration)[1] == _split_dir_name(source)[1]
