# tests/unit/exportify/fs/test_probe.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Unit tests for file existence probes."""

import pytest

from exportify.fs.probe import (
    directory_exists,
    file_exists,
    file_exists_async,
    file_exists_detail,
    find_file_or_index,
    find_files_with_extensions,
    find_index_file,
    find_with_extensions,
    find_with_extensions_async,
    is_package_file,
)


@pytest.fixture
def tree(tmp_path, write_tree):
    write_tree(tmp_path, {
        "lib/index.js": "",
        "lib/index.d.ts": "",
        "lib/utils.mjs": "",
        "lib/components/index.ts": "",
    })
    return tmp_path


class TestFileExists:
    """Tests for the basic probes."""

    def test_file(self, tree):
        assert file_exists(tree / "lib/index.js")

    def test_directory_is_not_a_file(self, tree):
        assert not file_exists(tree / "lib")
        assert directory_exists(tree / "lib")

    def test_missing(self, tree):
        assert not file_exists(tree / "lib/nope.js")
        assert not directory_exists(tree / "nope")

    def test_detail(self, tree):
        detail = file_exists_detail(tree / "lib/index.js")
        assert detail.exists and detail.kind == "file"
        assert file_exists_detail(tree / "lib").kind == "directory"
        assert file_exists_detail(tree / "missing").exists is False

    def test_invalid_path_is_missing(self):
        """A NUL byte is an OS error, reported as absent."""
        assert not file_exists("bad\0path")

    def test_broken_symlink(self, tree):
        link = tree / "dangling.js"
        link.symlink_to(tree / "does-not-exist.js")
        assert not file_exists(link)


class TestIsPackageFile:
    """Tests for is_package_file."""

    def test_with_and_without_prefix(self, tree):
        assert is_package_file(tree, "./lib/index.js")
        assert is_package_file(tree, "lib/index.js")

    def test_empty_path(self, tree):
        assert not is_package_file(tree, "./")


class TestExtensionSearch:
    """Tests for extension and index lookups."""

    def test_first_extension_wins(self, tree):
        found = find_with_extensions(tree / "lib/index", [".d.ts", ".js"])
        assert found == tree / "lib/index.d.ts"

    def test_no_match(self, tree):
        assert find_with_extensions(tree / "lib/index", [".cjs"]) is None

    def test_empty_extension_tests_as_is(self, tree):
        assert find_with_extensions(tree / "lib/utils.mjs", [""]) == tree / "lib/utils.mjs"

    def test_find_all(self, tree):
        found = find_files_with_extensions(tree / "lib", "index", [".js", ".cjs", ".d.ts"])
        assert found == [tree / "lib/index.js", tree / "lib/index.d.ts"]

    def test_index_file(self, tree):
        found = find_index_file(tree / "lib/components", [".js", ".ts"])
        assert found == tree / "lib/components/index.ts"

    def test_index_file_missing_dir(self, tree):
        assert find_index_file(tree / "lib/nothing", [".js"]) is None


class TestFindFileOrIndex:
    """Tests for module-style file or index resolution."""

    def test_direct_file(self, tree):
        assert find_file_or_index(tree / "lib/utils", [".js", ".mjs"]) == tree / "lib/utils.mjs"

    def test_index_file(self, tree):
        found = find_file_or_index(tree / "lib/components", [".js", ".ts"])
        assert found == tree / "lib/components/index.ts"

    def test_index_wins_for_earlier_extension(self, tree, write_tree):
        """Each extension tries the file and then the index before moving on."""
        write_tree(tree, {"lib/components.ts": ""})
        found = find_file_or_index(tree / "lib/components", [".js", ".ts"])
        assert found == tree / "lib/components.ts"
        write_tree(tree, {"lib/components/index.js": ""})
        found = find_file_or_index(tree / "lib/components", [".js", ".ts"])
        assert found == tree / "lib/components/index.js"

    def test_direct_first(self, tree, write_tree):
        write_tree(tree, {"lib/components.ts": "", "lib/components/index.js": ""})
        found = find_file_or_index(tree / "lib/components", [".js", ".ts"], direct_first=True)
        assert found == tree / "lib/components.ts"

    def test_empty_extension(self, tree):
        assert find_file_or_index(tree / "lib/index.js", [""]) == tree / "lib/index.js"

    def test_no_match(self, tree):
        assert find_file_or_index(tree / "lib/missing", [".js", ".ts"]) is None


class TestAsyncProbes:
    """Tests for the async variants."""

    @pytest.mark.asyncio
    async def test_file_exists_async(self, tree):
        assert await file_exists_async(tree / "lib/index.js")
        assert not await file_exists_async(tree / "lib/missing.js")

    @pytest.mark.asyncio
    async def test_find_with_extensions_async(self, tree):
        found = await find_with_extensions_async(tree / "lib/utils", [".js", ".mjs"])
        assert found == tree / "lib/utils.mjs"
