# tests/unit/exportify/exports/test_entry.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Unit tests for single import path resolution."""

import logging
from pathlib import Path

import pytest

from exportify.analysis.build_pattern import detect_build_pattern
from exportify.exports.entry import (
    DEFAULT_STRATEGIES,
    PATTERN_FIRST_STRATEGIES,
    EntryRequest,
    ExportEntryGenerator,
    assume_lib_output,
    exact_build_match,
    first_result,
    generate_export_entry,
    predict_from_source,
)

DIRECTORY = detect_build_pattern("./lib/cjs/index.js", "./lib/esm/index.js")


class TestEntryRequest:
    """Tests for the derived path properties."""

    @pytest.mark.parametrize(
        "import_path,clean,named,subpath,output_dir,stem",
        [
            (".", "index", None, "index", "lib", "index"),
            ("./utils", "utils", None, "utils", "lib", "utils"),
            ("./lib/utils.js", "lib/utils.js", "lib", "utils.js", "lib", "utils"),
            ("./dist/a/b", "dist/a/b", "dist", "a/b", "dist", "a/b"),
            ("./lib/", "lib", "lib", "index", "lib", "index"),
            ("./src/x", "src/x", None, "src/x", "lib", "src/x"),
        ],
    )
    def test_properties(self, import_path, clean, named, subpath, output_dir, stem):
        request = EntryRequest(import_path, Path("/pkg"))
        assert request.clean_path == clean
        assert request.named_build_dir == named
        assert request.subpath == subpath
        assert request.output_dir == output_dir
        assert request.output_stem == stem


class TestExactBuildMatch:
    """Tests for files already present in a build directory."""

    def test_bare_path_in_lib(self, make_package):
        pkg = make_package({"name": "p"}, {"lib/utils.js": "", "lib/utils.d.ts": ""})
        result = exact_build_match(EntryRequest("./utils", pkg))
        assert result.to_export_value() == {
            "types": "./lib/utils.d.ts",
            "default": "./lib/utils.js",
        }

    def test_typescript_in_build_dir(self, make_package):
        """A .ts file in lib/ is exported as its compiled .js with an import condition."""
        pkg = make_package({"name": "p"}, {"lib/utils.ts": "", "lib/utils.d.ts": ""})
        result = exact_build_match(EntryRequest("./lib/utils", pkg))
        assert result.to_export_value() == {
            "types": "./lib/utils.d.ts",
            "import": "./lib/utils.js",
            "default": "./lib/utils.js",
        }

    def test_index_file(self, make_package):
        pkg = make_package({"name": "p"}, {"lib/components/index.js": ""})
        result = exact_build_match(EntryRequest("./components", pkg))
        assert result.default == "./lib/components/index.js"

    def test_root_path(self, make_package):
        pkg = make_package({"name": "p"}, {"dist/index.js": ""})
        assert exact_build_match(EntryRequest(".", pkg)).default == "./dist/index.js"

    def test_named_build_dir_only(self, make_package):
        """./dist/foo is not looked up under lib/."""
        pkg = make_package({"name": "p"}, {"lib/foo.js": ""})
        assert exact_build_match(EntryRequest("./dist/foo", pkg)) is None

    def test_source_condition(self, make_package):
        pkg = make_package({"name": "p"}, {"lib/utils.js": "", "src/utils.ts": ""})
        result = exact_build_match(EntryRequest("./lib/utils.js", pkg))
        assert result.source == "./src/utils.ts"
        assert result.default == "./lib/utils.js"

    def test_missing(self, make_package):
        pkg = make_package({"name": "p"}, {"src/utils.ts": ""})
        assert exact_build_match(EntryRequest("./lib/utils", pkg)) is None


class TestPredictFromSource:
    """Tests for predicting outputs of unbuilt sources."""

    def test_unbuilt_typescript(self, make_package):
        pkg = make_package({"name": "p"}, {"src/utils.ts": ""})
        result = predict_from_source(EntryRequest("./lib/utils", pkg))
        assert result.to_export_value() == {
            "source": "./src/utils.ts",
            "types": "./lib/utils.d.ts",
            "import": "./lib/utils.js",
            "default": "./lib/utils.js",
        }

    def test_index_source(self, make_package):
        pkg = make_package({"name": "p"}, {"src/components/index.tsx": ""})
        result = predict_from_source(EntryRequest("./components", pkg))
        assert result.source == "./src/components/index.tsx"
        assert result.types == "./lib/components/index.d.ts"
        assert result.default == "./lib/components/index.js"

    def test_named_output_dir(self, make_package):
        pkg = make_package({"name": "p"}, {"source/a.ts": ""})
        result = predict_from_source(EntryRequest("./dist/a.js", pkg))
        assert result.source == "./source/a.ts"
        assert result.default == "./dist/a.js"

    def test_javascript_source_ignored(self, make_package):
        pkg = make_package({"name": "p"}, {"src/utils.js": ""})
        assert predict_from_source(EntryRequest("./utils", pkg)) is None


class TestAssumeLibOutput:
    """Tests for the last-resort guess."""

    def test_warns_and_guesses(self, make_package, caplog):
        pkg = make_package({"name": "p"})
        with caplog.at_level(logging.WARNING):
            result = assume_lib_output(EntryRequest("./lib/missing", pkg))
        assert result.to_export_value() == {
            "types": "./lib/missing.d.ts",
            "default": "./lib/missing.js",
        }
        assert 'Could not find file for import path "./lib/missing"' in caplog.text

    def test_compiled_extension_not_doubled(self, make_package):
        pkg = make_package({"name": "p"})
        result = assume_lib_output(EntryRequest("./utils.js", pkg))
        assert result.default == "./lib/utils.js"

    def test_injected_logger(self, make_package):
        messages = []

        class Sink(logging.Handler):
            def emit(self, record):
                messages.append(record.getMessage())

        log = logging.getLogger("test.entry.sink")
        log.addHandler(Sink())
        log.propagate = False
        pkg = make_package({"name": "p"})

        assume_lib_output(EntryRequest("./gone", pkg, log=log))

        assert len(messages) == 1
        assert "./gone" in messages[0]


class TestStrategies:
    """Tests for strategy ordering."""

    @pytest.fixture
    def dual_build(self, make_package):
        return make_package(
            {"name": "p"},
            {"lib/utils.js": "", "lib/cjs/utils.js": "", "lib/esm/utils.js": ""},
        )

    def test_exact_first(self, dual_build):
        generator = ExportEntryGenerator(dual_build, DIRECTORY, strategies=DEFAULT_STRATEGIES)
        assert generator.generate("./lib/utils.js") == "./lib/utils.js"

    def test_pattern_first(self, dual_build):
        generator = ExportEntryGenerator(dual_build, DIRECTORY, strategies=PATTERN_FIRST_STRATEGIES)
        assert generator.generate("./lib/utils.js") == {
            "import": "./lib/esm/utils.js",
            "require": "./lib/cjs/utils.js",
            "default": "./lib/utils.js",
        }

    def test_first_result_none(self, tmp_path):
        assert first_result([lambda request: None], EntryRequest("./x", tmp_path)) is None

    def test_generator_without_fallback(self, make_package):
        pkg = make_package({"name": "p"})
        generator = ExportEntryGenerator(pkg, strategies=())
        assert generator.conditions("./x").default == "./lib/x.js"

    def test_generate_export_entry_scenario(self, make_package):
        """An unbuilt TypeScript source yields a predicted entry."""
        pkg = make_package({"name": "p"}, {"src/utils.ts": ""})
        assert generate_export_entry("./lib/utils", pkg) == {
            "source": "./src/utils.ts",
            "types": "./lib/utils.d.ts",
            "import": "./lib/utils.js",
            "default": "./lib/utils.js",
        }

    def test_generate_export_entry_dual_build(self, make_package):
        pkg = make_package({"name": "p"}, {"lib/cjs/utils.js": "", "lib/esm/utils.js": ""})
        assert generate_export_entry("./lib/utils.js", pkg, DIRECTORY) == {
            "import": "./lib/esm/utils.js",
            "require": "./lib/cjs/utils.js",
            "default": "./lib/esm/utils.js",
        }
