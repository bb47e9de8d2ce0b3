# tests/unit/exportify/exports/test_conditions.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Unit tests for ExportConditions."""

import dataclasses

import pytest

from exportify.exports.conditions import CONDITION_ORDER, ExportConditions


class TestExportConditions:
    """Tests for ordering and serialization of export conditions."""

    def test_canonical_order(self):
        """Keys come out in resolution order regardless of argument order."""
        conditions = ExportConditions(
            default="./lib/a.js",
            browser="./lib/a.browser.js",
            require="./lib/a.cjs",
            import_="./lib/a.mjs",
            types="./lib/a.d.ts",
            source="./src/a.ts",
        )
        assert list(conditions.to_dict()) == list(CONDITION_ORDER)

    def test_absent_values_skipped(self):
        conditions = ExportConditions(types="", import_=None, default="./lib/a.js", require="./lib/a.cjs")
        assert conditions.to_dict() == {"require": "./lib/a.cjs", "default": "./lib/a.js"}

    def test_lone_default_collapses(self):
        assert ExportConditions(default="./lib/a.js").to_export_value() == "./lib/a.js"

    def test_single_other_condition_stays_object(self):
        assert ExportConditions(types="./lib/a.d.ts").to_export_value() == {"types": "./lib/a.d.ts"}

    def test_multiple_conditions_object(self):
        value = ExportConditions(types="./lib/a.d.ts", default="./lib/a.js").to_export_value()
        assert value == {"types": "./lib/a.d.ts", "default": "./lib/a.js"}

    def test_empty(self):
        conditions = ExportConditions()
        assert not conditions
        assert conditions.to_export_value() == {}

    def test_with_values(self):
        base = ExportConditions(default="./lib/a.js")
        updated = base.with_values(import_="./lib/a.mjs")
        assert updated.to_dict() == {"import": "./lib/a.mjs", "default": "./lib/a.js"}
        assert base.import_ is None

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ExportConditions().default = "./x.js"
