"""Parameter specs for actions and validation of caller arguments."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from script_controller.errors import (
    InvalidArgumentsError,
    InvalidParameterTypeError,
    MissingParameterError,
    UnknownParameterError,
)


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


class ParamKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"

    def accepts(self, value: Any) -> bool:
        # bool is an int subclass; never let True/False through as a number.
        if self is ParamKind.STRING:
            return isinstance(value, str)
        if self is ParamKind.BOOLEAN:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if self is ParamKind.INTEGER:
            return isinstance(value, int)
        return isinstance(value, (int, float))


@dataclass(frozen=True)
class ParamSpec:
    name: str
    kind: ParamKind = ParamKind.STRING
    required: bool = False
    default: Any = NO_DEFAULT
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("parameter name must be non-empty")
        if self.has_default and not self.kind.accepts(self.default):
            raise ValueError(
                f"default for '{self.name}' does not match type {self.kind.value}"
            )

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def to_json_schema(self) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": self.kind.value}
        if self.description:
            prop["description"] = self.description
        if self.has_default:
            prop["default"] = self.default
        return prop


def parse_schema(schema: Mapping[str, Any] | None) -> tuple[ParamSpec, ...]:
    """Convert a JSON-schema object declaration into ordered parameter specs."""
    if schema is None:
        return ()
    if not isinstance(schema, Mapping):
        raise ValueError("schema must be an object")
    schema_type = schema.get("type", "object")
    if schema_type != "object":
        raise ValueError(f"schema type must be 'object', got '{schema_type}'")
    properties = schema.get("properties") or {}
    required = set(schema.get("required") or [])
    unknown_required = required - set(properties)
    if unknown_required:
        raise ValueError(
            f"required lists undeclared properties: {', '.join(sorted(unknown_required))}"
        )

    specs: list[ParamSpec] = []
    for name, prop in properties.items():
        prop = prop or {}
        raw_kind = prop.get("type", "string")
        try:
            kind = ParamKind(raw_kind)
        except ValueError:
            raise ValueError(f"unsupported type '{raw_kind}' for parameter '{name}'")
        specs.append(
            ParamSpec(
                name=name,
                kind=kind,
                required=name in required,
                default=prop.get("default", NO_DEFAULT),
                description=str(prop.get("description", "")),
            )
        )
    return tuple(specs)


def to_json_schema(params: Iterable[ParamSpec]) -> dict[str, Any]:
    """Render parameter specs back into the JSON-schema shape used for discovery."""
    params = list(params)
    schema: dict[str, Any] = {
        "type": "object",
        "properties": {spec.name: spec.to_json_schema() for spec in params},
    }
    required = [spec.name for spec in params if spec.required]
    if required:
        schema["required"] = required
    return schema


def describe_type(value: Any) -> str:
    """Return the JSON-ish type name of a runtime value for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def validate_arguments(
    params: Iterable[ParamSpec],
    raw_args: Mapping[str, Any] | None,
    *,
    strict: bool = True,
) -> dict[str, Any]:
    """Validate raw arguments against specs and return a fully defaulted copy.

    A ``None`` value counts as omitted. With ``strict`` set, names that no
    spec declares raise ``UnknownParameterError``; otherwise they are dropped.
    """
    if raw_args is None:
        raw_args = {}
    if not isinstance(raw_args, Mapping):
        raise InvalidArgumentsError(describe_type(raw_args))

    params = list(params)
    declared = {spec.name for spec in params}
    if strict:
        unknown = [name for name in raw_args if name not in declared]
        if unknown:
            raise UnknownParameterError(unknown)

    cleaned: dict[str, Any] = {}
    for spec in params:
        value = raw_args.get(spec.name)
        if value is None:
            if spec.has_default:
                cleaned[spec.name] = copy.deepcopy(spec.default)
            elif spec.required:
                raise MissingParameterError(spec.name)
            continue
        if not spec.kind.accepts(value):
            raise InvalidParameterTypeError(
                spec.name, spec.kind.value, describe_type(value)
            )
        cleaned[spec.name] = value
    return cleaned
