# tests/conftest.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Pytest configuration for exportify tests.

Ensures the src package is importable and provides a factory for throwaway
JavaScript packages on disk.
"""

import json
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

# Add src directory to path for local packages
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


def write_files(root: Path, files: dict[str, str]) -> None:
    """Create files (and their parent directories) below root."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def make_package(tmp_path: Path) -> Callable[..., Path]:
    """Factory building a package directory with a package.json and files.

    Usage:
        pkg = make_package({"main": "./lib/index.js"}, {"lib/index.js": ""})
    """

    def _make(
        package_json: Optional[dict] = None,
        files: Optional[dict[str, str]] = None,
        directory: str = "pkg",
    ) -> Path:
        root = tmp_path / directory
        root.mkdir(parents=True, exist_ok=True)
        if package_json is not None:
            (root / "package.json").write_text(json.dumps(package_json, indent=2))
        write_files(root, files or {})
        return root

    return _make


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], None]:
    """The write_files helper, for tests that build loose directory trees."""
    return write_files
