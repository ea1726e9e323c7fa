# =============================================================================
# core/schema.py  —  Declarative argument schemas + one generic validator
# =============================================================================
#
# Each tool declares its arguments as a mapping of name → FieldSpec.  A
# single function, validate_arguments(), checks any raw argument bundle
# against any schema.  Adding a tool means adding a declaration, never a new
# validator.
#
# Rules:
#   - required field missing (or null)         → violation
#   - wrong type (bools are NOT integers)      → violation
#   - integer outside [minimum, maximum]       → violation
#   - string / array shorter than min_length   → violation
#   - optional field missing                   → filled with its default
#   - keys not in the schema                   → dropped
#
# All violations are collected so the caller sees every problem at once.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.exceptions import InvalidArguments, Violation

STRING = "string"
INTEGER = "integer"
STRING_ARRAY = "string_array"

_KINDS = (STRING, INTEGER, STRING_ARRAY)


@dataclass(frozen=True)
class FieldSpec:
    """Constraint description for a single tool argument."""
    kind: str
    required: bool = True
    default: Any = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    min_length: Optional[int] = None
    description: str = ""

    def __post_init__(self):
        if self.kind not in _KINDS:
            raise ValueError(f"Unsupported field kind: {self.kind!r}")

    def json_schema(self) -> dict[str, Any]:
        """Render this field as a JSON Schema property."""
        if self.kind == STRING:
            prop: dict[str, Any] = {"type": "string"}
            if self.min_length is not None:
                prop["minLength"] = self.min_length
        elif self.kind == INTEGER:
            prop = {"type": "integer"}
            if self.minimum is not None:
                prop["minimum"] = self.minimum
            if self.maximum is not None:
                prop["maximum"] = self.maximum
        else:
            prop = {"type": "array", "items": {"type": "string"}}
            if self.min_length is not None:
                prop["minItems"] = self.min_length
        if self.default is not None:
            prop["default"] = self.default
        if self.description:
            prop["description"] = self.description
        return prop


Schema = Mapping[str, FieldSpec]


def to_json_schema(schema: Schema) -> dict[str, Any]:
    """Render a whole schema as a JSON Schema ``object``."""
    return {
        "type": "object",
        "properties": {name: spec.json_schema() for name, spec in schema.items()},
        "required": [name for name, spec in schema.items() if spec.required],
    }


def _check(spec: FieldSpec, value: Any) -> tuple[Any, Optional[str]]:
    """Check one present value.  Returns (normalized value, error message)."""
    if spec.kind == STRING:
        if not isinstance(value, str):
            return value, f"expected string, got {type(value).__name__}"
        if spec.min_length is not None and len(value) < spec.min_length:
            return value, f"must be at least {spec.min_length} character(s)"
        return value, None

    if spec.kind == INTEGER:
        if isinstance(value, bool):
            return value, "expected integer, got bool"
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if not isinstance(value, int):
            return value, f"expected integer, got {type(value).__name__}"
        if spec.minimum is not None and value < spec.minimum:
            return value, f"must be >= {spec.minimum}"
        if spec.maximum is not None and value > spec.maximum:
            return value, f"must be <= {spec.maximum}"
        return value, None

    # STRING_ARRAY
    if not isinstance(value, (list, tuple)):
        return value, f"expected array of strings, got {type(value).__name__}"
    bad = [i for i, item in enumerate(value) if not isinstance(item, str)]
    if bad:
        return value, f"item {bad[0]} is not a string"
    if spec.min_length is not None and len(value) < spec.min_length:
        return value, f"must contain at least {spec.min_length} item(s)"
    return list(value), None


def validate_arguments(tool: str, schema: Schema, raw: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Validate ``raw`` against ``schema`` and return typed arguments.

    Raises:
        InvalidArguments: with every field-level violation found.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise InvalidArguments(tool, [Violation("<arguments>", "expected an object")])

    violations: list[Violation] = []
    arguments: dict[str, Any] = {}
    for name, spec in schema.items():
        value = raw.get(name)
        if value is None:
            if spec.required:
                violations.append(Violation(name, "required field missing"))
            else:
                arguments[name] = spec.default
            continue
        value, error = _check(spec, value)
        if error:
            violations.append(Violation(name, error))
        else:
            arguments[name] = value

    if violations:
        raise InvalidArguments(tool, violations)
    return arguments
