"""
Tests for the validation engine: object traversal, presence/nullability,
scalar and list checks, and field validator gating.
"""
import copy

import pytest

from payload_validator import error_codes
from payload_validator.engine import StepValidator, validate
from payload_validator.exceptions import PayloadShapeError, SchemaDefinitionError
from payload_validator.examples import BAR, FOO, FOO_BAR
from payload_validator.models import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    STRING,
    ListType,
    ObjectSchema,
    ReferenceType,
    ValidatorSpec,
    declare_field,
)


# ---------------------------------------------------------------------------
# Valid payloads
# ---------------------------------------------------------------------------

class TestValidPayloads:
    def test_valid_payload_has_empty_report(self, engine, foo_payload):
        assert engine.validate("", foo_payload, FOO) == {}

    def test_module_level_validate_matches_engine(self, foo_payload):
        assert validate("", foo_payload, FOO) == {}

    def test_extra_keys_are_ignored_by_default(self, engine, foo_payload):
        foo_payload["unexpected"] = {"anything": [1, "two"]}
        foo_payload["bar"]["extra"] = True
        assert engine.validate("", foo_payload, FOO) == {}

    def test_empty_list_is_valid(self, engine, foo_payload):
        foo_payload["messages"] = []
        foo_payload["bar"]["foo"]["list"] = []
        assert engine.validate("", foo_payload, FOO) == {}

    def test_tuple_counts_as_sequence(self, engine):
        assert engine.validate("", {"list": (1, 2)}, FOO_BAR) == {}

    def test_root_path_prefixes_every_key(self, engine):
        report = engine.validate("/payload", {"name": 3, "foo": {"list": []}}, BAR)
        assert report == {"/payload/name": [error_codes.WRONG_TYPE]}


# ---------------------------------------------------------------------------
# Presence and nullability
# ---------------------------------------------------------------------------

class TestPresence:
    @pytest.mark.parametrize("key", ["bar", "bool", "messages"])
    def test_missing_required_field(self, engine, foo_payload, key):
        del foo_payload[key]
        assert engine.validate("", foo_payload, FOO) == {f"/{key}": [error_codes.REQUIRED]}

    def test_explicit_null_is_treated_as_missing(self, engine, foo_payload):
        foo_payload["bool"] = None
        assert engine.validate("", foo_payload, FOO) == {"/bool": [error_codes.REQUIRED]}

    def test_missing_nullable_field_is_not_an_error(self, engine, foo_payload):
        del foo_payload["age"]
        assert engine.validate("", foo_payload, FOO) == {}

    def test_null_nullable_field_skips_validators(self, engine, foo_payload):
        foo_payload["age"] = None
        assert engine.validate("", foo_payload, FOO) == {}

    def test_missing_nested_field_reports_nested_path(self, engine, foo_payload):
        del foo_payload["bar"]["foo"]["list"]
        assert engine.validate("", foo_payload, FOO) == {"/bar/foo/list": [error_codes.REQUIRED]}

    def test_empty_object_reports_every_required_field(self, engine):
        report = engine.validate("", {}, FOO)
        assert report == {
            "/bar": [error_codes.REQUIRED],
            "/bool": [error_codes.REQUIRED],
            "/messages": [error_codes.REQUIRED],
        }


# ---------------------------------------------------------------------------
# Type mismatches
# ---------------------------------------------------------------------------

class TestTypeMismatch:
    def test_string_for_integer(self, engine, foo_payload):
        foo_payload["age"] = "six"
        assert engine.validate("", foo_payload, FOO) == {"/age": [error_codes.WRONG_TYPE]}

    def test_integer_for_string(self, engine, foo_payload):
        foo_payload["bar"]["name"] = 42
        assert engine.validate("", foo_payload, FOO) == {"/bar/name": [error_codes.WRONG_TYPE]}

    def test_boolean_does_not_satisfy_integer(self, engine, foo_payload):
        foo_payload["age"] = True
        assert engine.validate("", foo_payload, FOO) == {"/age": [error_codes.WRONG_TYPE]}

    def test_integer_does_not_satisfy_boolean(self, engine, foo_payload):
        foo_payload["bool"] = 0
        assert engine.validate("", foo_payload, FOO) == {"/bool": [error_codes.WRONG_TYPE]}

    def test_scalar_where_object_expected(self, engine, foo_payload):
        foo_payload["bar"] = "not an object"
        assert engine.validate("", foo_payload, FOO) == {"/bar": [error_codes.WRONG_TYPE]}

    def test_object_where_list_expected(self, engine, foo_payload):
        foo_payload["bar"]["foo"]["list"] = {"0": 1}
        assert engine.validate("", foo_payload, FOO) == {"/bar/foo/list": [error_codes.WRONG_TYPE]}

    def test_string_is_not_a_list(self, engine, foo_payload):
        foo_payload["bar"]["foo"]["list"] = "123"
        assert engine.validate("", foo_payload, FOO) == {"/bar/foo/list": [error_codes.WRONG_TYPE]}

    def test_float_field_accepts_integral_numbers(self, engine):
        schema = ObjectSchema(name="Reading", fields=[declare_field("value", FLOAT)])
        assert engine.validate("", {"value": 3}, schema) == {}
        assert engine.validate("", {"value": 3.5}, schema) == {}
        assert engine.validate("", {"value": "3.5"}, schema) == {"/value": [error_codes.WRONG_TYPE]}

    def test_unrelated_fields_are_each_diagnosed(self, engine, foo_payload):
        foo_payload["age"] = "x"
        foo_payload["bool"] = "yes"
        del foo_payload["bar"]["name"]
        report = engine.validate("", foo_payload, FOO)
        assert report == {
            "/age": [error_codes.WRONG_TYPE],
            "/bar/name": [error_codes.REQUIRED],
            "/bool": [error_codes.WRONG_TYPE],
        }

    def test_report_follows_declaration_order(self, engine):
        report = engine.validate("", {"bool": 1, "bar": 2}, FOO)
        assert list(report) == ["/bar", "/bool", "/messages"]


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class TestLists:
    def test_only_failing_element_is_reported(self, engine):
        report = engine.validate("", {"list": [1, "x", 3]}, FOO_BAR)
        assert report == {"/list[1]": [error_codes.WRONG_TYPE]}

    def test_null_element_is_wrong_type(self, engine):
        report = engine.validate("", {"list": [None, 2]}, FOO_BAR)
        assert report == {"/list[0]": [error_codes.WRONG_TYPE]}

    def test_nested_lists_index_every_level(self, engine):
        schema = ObjectSchema(name="Grid", fields=[declare_field("cells", ListType(ListType(INTEGER)))])
        report = engine.validate("", {"cells": [[1, 2], [3, "four"], "row"]}, schema)
        assert report == {
            "/cells[1][1]": [error_codes.WRONG_TYPE],
            "/cells[2]": [error_codes.WRONG_TYPE],
        }

    def test_list_of_objects_reports_inside_elements(self, engine):
        schema = ObjectSchema(name="Bars", fields=[declare_field("bars", ListType(ReferenceType(BAR)))])
        payload = {"bars": [{"name": "a", "foo": {"list": []}}, {"foo": {"list": [1, False]}}]}
        report = engine.validate("", payload, schema)
        assert report == {
            "/bars[1]/name": [error_codes.REQUIRED],
            "/bars[1]/foo/list[1]": [error_codes.WRONG_TYPE],
        }


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------

class TestFieldValidators:
    def test_value_above_minimum_passes(self, engine, foo_payload):
        foo_payload["age"] = 6
        assert engine.validate("", foo_payload, FOO) == {}

    def test_value_equal_to_minimum_passes(self, engine, foo_payload):
        foo_payload["age"] = 5
        assert engine.validate("", foo_payload, FOO) == {}

    def test_value_below_minimum_fails(self, engine, foo_payload):
        foo_payload["age"] = 3
        assert engine.validate("", foo_payload, FOO) == {"/age": [error_codes.MIN_LENGTH]}

    def test_validators_skipped_when_type_is_wrong(self, engine, foo_payload):
        foo_payload["age"] = "3"
        assert engine.validate("", foo_payload, FOO) == {"/age": [error_codes.WRONG_TYPE]}

    def test_first_failing_validator_wins(self, engine):
        schema = ObjectSchema(
            name="Account",
            fields=[
                declare_field(
                    "handle",
                    STRING,
                    validators=[ValidatorSpec.of("min_length", 3), ValidatorSpec.of("pattern", r"[a-z]+")],
                ),
            ],
        )
        assert engine.validate("", {"handle": "A"}, schema) == {"/handle": [error_codes.MIN_LENGTH]}
        assert engine.validate("", {"handle": "ABCD"}, schema) == {"/handle": [error_codes.PATTERN_MISMATCH]}
        assert engine.validate("", {"handle": "abcd"}, schema) == {}

    def test_validators_run_on_lists_after_element_checks(self, engine):
        schema = ObjectSchema(
            name="Batch",
            fields=[declare_field("items", ListType(INTEGER), validators=[ValidatorSpec.of("min_length", 2)])],
        )
        assert engine.validate("", {"items": [1]}, schema) == {"/items": [error_codes.MIN_LENGTH]}
        assert engine.validate("", {"items": ["x"]}, schema) == {"/items[0]": [error_codes.WRONG_TYPE]}
        assert engine.validate("", {"items": [1, 2]}, schema) == {}

    def test_mistyped_validator_reports_unhandled_exception(self, engine, caplog):
        schema = ObjectSchema(
            name="Label",
            fields=[declare_field("text", STRING, validators=[ValidatorSpec.of("min_value", 1)])],
        )
        with caplog.at_level("WARNING", logger="payload_validator.engine.step_validator"):
            report = engine.validate("", {"text": "hello"}, schema)
        assert report == {"/text": [error_codes.UNHANDLED_EXCEPTION]}
        assert "min_value" in caplog.text


# ---------------------------------------------------------------------------
# Closed schemas
# ---------------------------------------------------------------------------

class TestClosedSchemas:
    def test_unknown_keys_are_reported_when_extra_is_disallowed(self, engine):
        schema = ObjectSchema(
            name="Point",
            fields=[declare_field("x", INTEGER), declare_field("y", INTEGER)],
            allow_extra=False,
        )
        report = engine.validate("", {"x": 1, "y": 2, "z": 3}, schema)
        assert report == {"/z": [error_codes.UNKNOWN_FIELD]}

    def test_unknown_keys_and_field_errors_combine(self, engine):
        schema = ObjectSchema(name="Flag", fields=[declare_field("on", BOOLEAN)], allow_extra=False)
        report = engine.validate("", {"on": "yes", "colour": "red"}, schema)
        assert report == {"/on": [error_codes.WRONG_TYPE], "/colour": [error_codes.UNKNOWN_FIELD]}


# ---------------------------------------------------------------------------
# Fatal errors and statelessness
# ---------------------------------------------------------------------------

class TestEngineContract:
    @pytest.mark.parametrize("root", [None, [], "payload", 3, True])
    def test_non_object_root_raises(self, engine, root):
        with pytest.raises(PayloadShapeError):
            engine.validate("", root, FOO)

    def test_undefined_schema_raises(self, engine):
        shell = ObjectSchema.declare("Pending")
        with pytest.raises(SchemaDefinitionError):
            engine.validate("", {}, shell)

    def test_validation_is_idempotent(self, engine, foo_payload):
        foo_payload["age"] = 1
        foo_payload["bar"]["foo"]["list"].append("oops")
        first = engine.validate("", foo_payload, FOO)
        second = engine.validate("", foo_payload, FOO)
        assert first == second
        assert first == {"/age": [error_codes.MIN_LENGTH], "/bar/foo/list[3]": [error_codes.WRONG_TYPE]}

    def test_validation_does_not_mutate_payload(self, engine, foo_payload):
        before = copy.deepcopy(foo_payload)
        engine.validate("", foo_payload, FOO)
        assert foo_payload == before

    def test_separate_engines_agree(self, foo_payload):
        foo_payload["bool"] = "no"
        assert StepValidator().validate("", foo_payload, FOO) == StepValidator().validate("", foo_payload, FOO)
