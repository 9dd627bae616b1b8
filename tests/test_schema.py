"""Tests for parameter specs and argument validation."""

import pytest

from script_controller.errors import (
    InvalidArgumentsError,
    InvalidParameterTypeError,
    MissingParameterError,
    UnknownParameterError,
)
from script_controller.schema import (
    NO_DEFAULT,
    ParamKind,
    ParamSpec,
    describe_type,
    parse_schema,
    to_json_schema,
    validate_arguments,
)

NOTE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Note title"},
        "content": {"type": "string"},
        "folder": {"type": "string", "default": "Notes"},
    },
    "required": ["title", "content"],
}


class TestParseSchema:
    """Test suite for parse_schema()."""

    def test_none_means_no_parameters(self):
        """Test that a missing schema yields no specs."""
        assert parse_schema(None) == ()

    def test_properties_in_declared_order(self):
        """Test that specs keep property order and required/default flags."""
        specs = parse_schema(NOTE_SCHEMA)
        assert [spec.name for spec in specs] == ["title", "content", "folder"]
        assert specs[0].required is True
        assert specs[0].description == "Note title"
        assert specs[2].required is False
        assert specs[2].default == "Notes"
        assert specs[1].default is NO_DEFAULT

    def test_missing_type_defaults_to_string(self):
        """Test that untyped properties are treated as strings."""
        specs = parse_schema({"properties": {"x": {}}})
        assert specs[0].kind is ParamKind.STRING

    def test_rejects_unsupported_type(self):
        """Test that array/object parameters are refused at declaration time."""
        with pytest.raises(ValueError):
            parse_schema({"type": "object", "properties": {"x": {"type": "array"}}})

    def test_rejects_non_object_schema(self):
        """Test that the top-level schema must describe an object."""
        with pytest.raises(ValueError):
            parse_schema({"type": "string"})

    def test_rejects_required_without_property(self):
        """Test that required names must be declared properties."""
        with pytest.raises(ValueError):
            parse_schema({"type": "object", "properties": {}, "required": ["ghost"]})

    def test_rejects_default_of_wrong_type(self):
        """Test that a default must match its declared type."""
        with pytest.raises(ValueError):
            parse_schema({"properties": {"n": {"type": "integer", "default": "3"}}})

    def test_round_trip_to_json_schema(self):
        """Test that rendering specs reproduces the discovery schema."""
        rendered = to_json_schema(parse_schema(NOTE_SCHEMA))
        assert rendered["type"] == "object"
        assert rendered["required"] == ["title", "content"]
        assert rendered["properties"]["folder"] == {"type": "string", "default": "Notes"}
        assert rendered["properties"]["title"] == {"type": "string", "description": "Note title"}

    def test_json_schema_omits_empty_required(self):
        """Test that optional-only schemas do not list a required key."""
        rendered = to_json_schema([ParamSpec("folder", default="Notes")])
        assert "required" not in rendered


class TestParamKind:
    """Test suite for runtime type checks."""

    def test_bool_is_not_a_number(self):
        """Test that True/False are rejected for integer and number."""
        assert ParamKind.INTEGER.accepts(True) is False
        assert ParamKind.NUMBER.accepts(False) is False
        assert ParamKind.BOOLEAN.accepts(True) is True

    def test_number_accepts_int_and_float(self):
        """Test that number covers both int and float."""
        assert ParamKind.NUMBER.accepts(3)
        assert ParamKind.NUMBER.accepts(2.5)
        assert ParamKind.INTEGER.accepts(2.5) is False

    def test_describe_type(self):
        """Test JSON-style type names used in error messages."""
        assert describe_type(None) == "null"
        assert describe_type(True) == "boolean"
        assert describe_type(1) == "integer"
        assert describe_type(1.5) == "number"
        assert describe_type("x") == "string"
        assert describe_type({}) == "object"
        assert describe_type([]) == "array"


class TestValidateArguments:
    """Test suite for validate_arguments()."""

    def setup_method(self):
        self.params = parse_schema(NOTE_SCHEMA)

    def test_defaults_applied(self):
        """Test that an omitted defaulted parameter gets its default."""
        record = validate_arguments(self.params, {"title": "T", "content": "C"})
        assert record == {"title": "T", "content": "C", "folder": "Notes"}

    def test_supplied_value_wins_over_default(self):
        """Test that a caller value replaces the default."""
        record = validate_arguments(
            self.params, {"title": "T", "content": "C", "folder": "Work"}
        )
        assert record["folder"] == "Work"

    def test_missing_required(self):
        """Test that an omitted required parameter is named in the error."""
        with pytest.raises(MissingParameterError) as exc_info:
            validate_arguments(self.params, {"title": "T"})
        assert exc_info.value.parameter == "content"
        assert exc_info.value.code == "missing_parameter"

    def test_null_counts_as_missing(self):
        """Test that an explicit null is treated as omitted."""
        with pytest.raises(MissingParameterError):
            validate_arguments(self.params, {"title": None, "content": "C"})
        record = validate_arguments(
            self.params, {"title": "T", "content": "C", "folder": None}
        )
        assert record["folder"] == "Notes"

    def test_wrong_type(self):
        """Test that a value of the wrong shape is rejected with details."""
        with pytest.raises(InvalidParameterTypeError) as exc_info:
            validate_arguments(self.params, {"title": 7, "content": "C"})
        err = exc_info.value
        assert (err.parameter, err.expected, err.actual) == ("title", "string", "integer")

    def test_unknown_rejected_when_strict(self):
        """Test that undeclared names are rejected in strict mode."""
        with pytest.raises(UnknownParameterError) as exc_info:
            validate_arguments(
                self.params, {"title": "T", "content": "C", "tags": "x", "color": "y"}
            )
        assert exc_info.value.parameters == ["color", "tags"]

    def test_unknown_dropped_when_lenient(self):
        """Test that undeclared names are dropped in lenient mode."""
        record = validate_arguments(
            self.params, {"title": "T", "content": "C", "tags": "x"}, strict=False
        )
        assert "tags" not in record

    def test_none_raw_args(self):
        """Test that None is accepted as an empty argument object."""
        params = parse_schema({"properties": {"folder": {"default": "Notes"}}})
        assert validate_arguments(params, None) == {"folder": "Notes"}

    def test_non_mapping_rejected(self):
        """Test that a list or scalar argument payload is refused."""
        with pytest.raises(InvalidArgumentsError):
            validate_arguments(self.params, ["title"])

    def test_input_not_mutated(self):
        """Test that validation returns a new record and leaves input alone."""
        raw = {"title": "T", "content": "C"}
        record = validate_arguments(self.params, raw)
        assert raw == {"title": "T", "content": "C"}
        assert record is not raw
