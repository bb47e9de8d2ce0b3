# tests/unit/exportify/exports/test_browser.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Unit tests for browser field parsing."""

from exportify.exports.browser import BrowserFieldResult, parse_browser_field


class TestParseBrowserField:
    """Tests for parse_browser_field."""

    def test_missing(self):
        assert parse_browser_field(None) == BrowserFieldResult()

    def test_string_form(self):
        result = parse_browser_field("dist/browser.js")
        assert result.root_browser == "./dist/browser.js"
        assert result.browser_mappings == {}

    def test_main_entry_lifted(self):
        result = parse_browser_field(
            {"./lib/index.js": "./lib/browser.js"}, main="./lib/index.js"
        )
        assert result.root_browser == "./lib/browser.js"
        assert result.browser_mappings == {}

    def test_main_matched_after_normalization(self):
        result = parse_browser_field({"lib/index.js": "lib/browser.js"}, main="./lib/index.js")
        assert result.root_browser == "./lib/browser.js"

    def test_main_wins_regardless_of_key_order(self):
        result = parse_browser_field(
            {"./lib/index.mjs": "./lib/esm-browser.js", "./lib/index.js": "./lib/browser.js"},
            main="./lib/index.js",
            module="./lib/index.mjs",
        )
        assert result.root_browser == "./lib/browser.js"
        assert result.browser_mappings == {"./lib/index.mjs": "./lib/esm-browser.js"}

    def test_module_entry_when_no_main_match(self):
        result = parse_browser_field(
            {"./lib/index.mjs": "./lib/browser.mjs"},
            main="./lib/index.js",
            module="./lib/index.mjs",
        )
        assert result.root_browser == "./lib/browser.mjs"
        assert result.browser_mappings == {}

    def test_blocked_main_not_root(self):
        result = parse_browser_field({"./lib/index.js": False}, main="./lib/index.js")
        assert result.root_browser is None
        assert result.browser_mappings == {}

    def test_file_mappings(self):
        result = parse_browser_field(
            {"./lib/fs.js": False, "lib/node-stream.js": "lib/browser-stream.js"},
            main="./lib/index.js",
        )
        assert result.root_browser is None
        assert result.browser_mappings == {
            "./lib/fs.js": False,
            "./lib/node-stream.js": "./lib/browser-stream.js",
        }

    def test_textual_matching(self):
        """A differently spelled path to main is a separate mapping."""
        result = parse_browser_field({"./lib/": "./lib/browser.js"}, main="./lib/index.js")
        assert result.root_browser is None
        assert result.browser_mappings == {"./lib/": "./lib/browser.js"}
