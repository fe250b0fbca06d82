"""Tests for the rule compiler."""

import re

from paramguard.validators import ArrayType, Constraint, FieldType, compile_rule


class TestCompileRuleSkips:
    def test_missing_type_is_skipped(self):
        assert compile_rule({"required": True}) is None

    def test_unknown_type_is_skipped(self):
        assert compile_rule({"type": "uuid", "required": True}) is None

    def test_non_string_type_is_skipped(self):
        assert compile_rule({"type": 5}) is None

    def test_non_mapping_entry_is_skipped(self):
        assert compile_rule(True) is None
        assert compile_rule(None) is None
        assert compile_rule(["string"]) is None


class TestCompileRuleDefaults:
    def test_defaults(self):
        rule = compile_rule({"type": "string"})
        assert rule.type == FieldType.STRING
        assert rule.required is False
        assert rule.min == 1
        assert rule.max is None
        assert rule.length is None
        assert rule.array_type is None
        assert rule.values is None
        assert rule.regex is None
        assert rule.format is None
        assert rule.terminal is False
        assert rule.is_terminal is False

    def test_boolean_min_defaults_to_zero(self):
        assert compile_rule({"type": "boolean"}).min == 0

    def test_every_supported_type_compiles(self):
        for name in ("string", "number", "boolean", "numeric", "date", "array", "object"):
            assert compile_rule({"type": name}).type == FieldType(name)


class TestCompileRuleProperties:
    def test_well_formed_properties_are_copied(self):
        pattern = re.compile(r"^\d+$")
        rule = compile_rule(
            {
                "type": "array",
                "required": True,
                "min": 2,
                "max": 5.5,
                "length": 3,
                "arrayType": "numeric",
                "values": ["1", "2"],
                "regex": pattern,
                "format": sorted,
            }
        )
        assert rule.required is True
        assert rule.min == 2
        assert rule.max == 5.5
        assert rule.length == 3
        assert rule.array_type == ArrayType.NUMERIC
        assert rule.values == ("1", "2")
        assert rule.regex is pattern
        assert rule.format is sorted

    def test_snake_case_array_type(self):
        assert compile_rule({"type": "array", "array_type": "string"}).array_type == ArrayType.STRING

    def test_mistyped_properties_fall_back_to_defaults(self):
        rule = compile_rule(
            {
                "type": "string",
                "required": "yes",
                "min": "3",
                "max": True,
                "length": None,
                "arrayType": "date",
                "values": "a,b",
                "regex": r"^\d+$",
                "format": "upper",
                "terminal": "always",
            }
        )
        assert rule.required is False
        assert rule.min == 1
        assert rule.max is None
        assert rule.length is None
        assert rule.array_type is None
        assert rule.values is None
        assert rule.regex is None
        assert rule.format is None
        assert rule.terminal is False


class TestCompileTerminal:
    def test_terminal_true(self):
        rule = compile_rule({"type": "string", "terminal": True})
        assert rule.terminal is True
        assert rule.is_terminal is True
        assert rule.terminal_constraints == frozenset()

    def test_terminal_constraint_list(self):
        rule = compile_rule({"type": "numeric", "terminal": ["type", "length"]})
        assert rule.is_terminal is True
        assert rule.terminal_constraints == {Constraint.TYPE, Constraint.LENGTH}

    def test_unknown_terminal_names_are_dropped(self):
        rule = compile_rule({"type": "numeric", "terminal": ["type", "bogus"]})
        assert rule.terminal_constraints == {Constraint.TYPE}

    def test_terminal_list_without_known_names_is_false(self):
        rule = compile_rule({"type": "numeric", "terminal": ["bogus"]})
        assert rule.terminal is False
        assert rule.is_terminal is False
