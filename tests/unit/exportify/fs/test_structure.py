# tests/unit/exportify/fs/test_structure.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Unit tests for build output structure detection."""

import json
import logging

from exportify.config import DEFAULT_BUILD_DIRS, DEFAULT_SOURCE_DIRS, BatchConfig, ExportifyConfig
from exportify.fs.structure import (
    BuildStructure,
    TypeScriptLayout,
    detect_build_directories,
    detect_build_structure,
    detect_source_directories,
    get_recommended_config,
    read_tsconfig,
)


class TestDetectDirectories:
    """Tests for build and source directory detection."""

    def test_build_dirs_with_compiled_files(self, make_package):
        pkg = make_package(
            {"name": "p"},
            {"lib/index.js": "", "dist/index.mjs": "", "types/index.d.ts": "", "esm/a.cjs": ""},
        )
        assert detect_build_directories(pkg) == ["lib", "dist", "types", "esm"]

    def test_build_dir_without_compiled_files_ignored(self, make_package):
        pkg = make_package({"name": "p"}, {"lib/README.md": "", "out/notes.txt": ""})
        assert detect_build_directories(pkg) == []

    def test_source_dirs(self, make_package):
        pkg = make_package(
            {"name": "p"},
            {"src/index.ts": "", "source/a.jsx": "", "lib-src/b.txt": ""},
        )
        assert detect_source_directories(pkg) == ["src", "source"]

    def test_missing_package_dir(self, tmp_path):
        assert detect_build_directories(tmp_path / "nope") == []
        assert detect_source_directories(tmp_path / "nope") == []


class TestReadTsconfig:
    """Tests for read_tsconfig."""

    def test_missing(self, make_package):
        assert read_tsconfig(make_package({"name": "p"})) == {}

    def test_comments_and_trailing_commas(self, make_package):
        tsconfig = """{
  // compiler settings
  "compilerOptions": {
    "outDir": "./dist", /* emitted js */
    "paths": {"@/*": ["src/*"]},
    "baseUrl": "http://example.com/x",
  },
}
"""
        pkg = make_package({"name": "p"}, {"tsconfig.json": tsconfig})
        options = read_tsconfig(pkg)["compilerOptions"]
        assert options["outDir"] == "./dist"
        assert options["paths"] == {"@/*": ["src/*"]}
        assert options["baseUrl"] == "http://example.com/x"

    def test_malformed_is_logged(self, make_package, caplog):
        pkg = make_package({"name": "p"}, {"tsconfig.json": "{ not json"})
        with caplog.at_level(logging.WARNING):
            assert read_tsconfig(pkg) == {}
        assert "Could not parse" in caplog.text


class TestDetectBuildStructure:
    """Tests for detect_build_structure."""

    def test_complete_structure(self, make_package):
        pkg = make_package(
            {
                "name": "p",
                "main": "./lib/index.js",
                "module": "./lib/index.mjs",
                "typings": "./lib/index.d.ts",
                "exports": {".": "./lib/index.js"},
            },
            {
                "src/index.ts": "",
                "src/utils/format.ts": "",
                "lib/index.js": "",
                "lib/index.d.ts": "",
                "lib/utils/format.js": "",
                "lib/utils/format.d.ts": "",
                "tsconfig.json": json.dumps(
                    {"compilerOptions": {"outDir": "./lib", "rootDir": "./src"}}
                ),
            },
        )
        structure = detect_build_structure(pkg)

        assert structure.build_dirs == ["lib"]
        assert structure.source_dirs == ["src"]
        assert structure.preserves_structure is True
        assert structure.typescript.has_declarations is True
        assert structure.typescript.declaration_dir == "lib"
        assert structure.typescript.out_dir == "lib"
        assert structure.typescript.root_dir == "src"
        assert structure.package_fields.types == "./lib/index.d.ts"
        assert structure.package_fields.has_exports is True
        assert structure.patterns.build_file_count == 4
        assert structure.patterns.has_index_files is True
        assert set(structure.patterns.common_extensions) == {".js", ".d.ts"}

    def test_declaration_dir_from_tsconfig(self, make_package):
        pkg = make_package(
            {"name": "p"},
            {
                "lib/index.d.ts": "",
                "tsconfig.json": json.dumps({"compilerOptions": {"declarationDir": "types"}}),
            },
        )
        assert detect_build_structure(pkg).typescript.declaration_dir == "types"

    def test_structure_not_preserved(self, make_package):
        pkg = make_package({"name": "p"}, {"src/a.ts": "", "dist/bundle.js": ""})
        assert detect_build_structure(pkg).preserves_structure is False

    def test_minimal_structure(self, make_package):
        structure = detect_build_structure(make_package({"name": "p"}))
        assert structure.build_dirs == []
        assert structure.source_dirs == []
        assert structure.preserves_structure is False
        assert structure.typescript.has_declarations is False
        assert structure.patterns.build_file_count == 0


class TestGetRecommendedConfig:
    """Tests for get_recommended_config."""

    def test_detected_directories(self):
        structure = BuildStructure(build_dirs=["dist", "esm"], source_dirs=["source"])
        config = get_recommended_config(structure)
        assert config.build_dirs == ["dist", "esm"]
        assert config.source_dirs == ["source"]

    def test_tsconfig_directories_first(self):
        structure = BuildStructure(
            build_dirs=["lib", "dist"],
            source_dirs=["src"],
            typescript=TypeScriptLayout(out_dir="dist/esm", declaration_dir="types", root_dir="app"),
        )
        config = get_recommended_config(structure)
        assert config.build_dirs == ["dist", "types", "lib"]
        assert config.source_dirs == ["app", "src"]

    def test_outside_directories_ignored(self):
        structure = BuildStructure(typescript=TypeScriptLayout(out_dir="../build"))
        assert get_recommended_config(structure).build_dirs == list(DEFAULT_BUILD_DIRS)

    def test_defaults_for_minimal_structure(self):
        config = get_recommended_config(BuildStructure())
        assert config.build_dirs == list(DEFAULT_BUILD_DIRS)
        assert config.source_dirs == list(DEFAULT_SOURCE_DIRS)

    def test_other_settings_kept(self):
        base = ExportifyConfig(batch=BatchConfig(concurrency=3), scan_ignore=["vendor"])
        config = get_recommended_config(BuildStructure(build_dirs=["out"]), base)
        assert config.build_dirs == ["out"]
        assert config.batch.concurrency == 3
        assert config.scan_ignore == ["vendor"]
        assert base.build_dirs == list(DEFAULT_BUILD_DIRS)
