# exportify/fs/probe.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
File existence probes.

Every probe is read-only and total: permission errors, broken symlinks and
similar OS failures are reported as "does not exist", never raised.
Extension lists are tried in the caller's order and the first hit wins.
"""

import asyncio
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Sequence, Union

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class FileExistsResult:
    """Detailed result of an existence check."""

    exists: bool
    path: Optional[Path] = None
    kind: Optional[Literal["file", "directory"]] = None


def file_exists_detail(path: PathLike) -> FileExistsResult:
    """Check a path and report whether it is a file or a directory."""
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return FileExistsResult(exists=False)

    p = Path(path)
    if stat.S_ISREG(st.st_mode):
        return FileExistsResult(exists=True, path=p, kind="file")
    if stat.S_ISDIR(st.st_mode):
        return FileExistsResult(exists=True, path=p, kind="directory")
    # Sockets, fifos and the like exist but are neither
    return FileExistsResult(exists=True, path=p)


def file_exists(path: PathLike) -> bool:
    """True if path is an existing regular file."""
    return file_exists_detail(path).kind == "file"


def directory_exists(path: PathLike) -> bool:
    """True if path is an existing directory."""
    return file_exists_detail(path).kind == "directory"


def is_package_file(package_dir: PathLike, relative_path: str) -> bool:
    """True if a package-relative path ("./lib/x.js" or "lib/x.js") is a file."""
    clean = relative_path[2:] if relative_path.startswith("./") else relative_path
    if not clean:
        return False
    return file_exists(Path(package_dir) / clean)


def find_with_extensions(base_path: PathLike, extensions: Sequence[str]) -> Optional[Path]:
    """Return the first `base_path + ext` that is a file.

    Args:
        base_path: Path without extension (may already carry one; pass "" to
            test it unchanged).
        extensions: Extensions with leading dot, in priority order.

    Returns:
        The first existing file, or None.
    """
    base = os.fspath(base_path)
    for extension in extensions:
        candidate = Path(f"{base}{extension}")
        if file_exists(candidate):
            return candidate
    return None


def find_files_with_extensions(
    base_dir: PathLike, file_name: str, extensions: Sequence[str]
) -> list[Path]:
    """Return every `base_dir/file_name + ext` that exists, in extension order."""
    found = []
    for extension in extensions:
        candidate = Path(base_dir) / f"{file_name}{extension}"
        if file_exists(candidate):
            found.append(candidate)
    return found


def find_index_file(dir_path: PathLike, extensions: Sequence[str]) -> Optional[Path]:
    """Return `dir_path/index + ext` for the first extension that exists."""
    if not directory_exists(dir_path):
        return None
    for extension in extensions:
        index_path = Path(dir_path) / f"index{extension}"
        if file_exists(index_path):
            return index_path
    return None


def find_file_or_index(
    base_path: PathLike, extensions: Sequence[str], direct_first: bool = False
) -> Optional[Path]:
    """Resolve a module-style path to a file.

    For each extension in turn, `base_path + ext` is tried and then
    `base_path/index + ext`. With direct_first, every direct candidate is
    tried before any index file.

    Returns:
        The first existing file, or None.
    """
    if direct_first:
        return find_with_extensions(base_path, extensions) or find_index_file(
            base_path, extensions
        )

    base = os.fspath(base_path)
    for extension in extensions:
        for candidate in (Path(f"{base}{extension}"), Path(base) / f"index{extension}"):
            if file_exists(candidate):
                return candidate
    return None


async def file_exists_async(path: PathLike) -> bool:
    """Async variant of file_exists; the stat runs in a worker thread."""
    return await asyncio.to_thread(file_exists, path)


async def find_with_extensions_async(
    base_path: PathLike, extensions: Sequence[str]
) -> Optional[Path]:
    """Async variant of find_with_extensions."""
    return await asyncio.to_thread(find_with_extensions, base_path, extensions)
