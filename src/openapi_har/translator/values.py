"""Runtime values for operation parameters.

Priority: caller value > default > example > first of examples > a
`SOME_<TYPE>_VALUE` placeholder. Path parameters never get a placeholder,
so an unresolved `{name}` token stays in the URL.
"""

from typing import Any

from openapi_har.parser.base import NameValue, Parameter
from openapi_har.translator.serializer import serialize

MISSING = object()


def placeholder(param: Parameter) -> str:
    schema = param.schema_ or {}
    type_ = param.type or schema.get("type")
    if isinstance(type_, list):
        type_ = next((t for t in type_ if t != "null"), None)
    if not type_:
        type_ = "object" if "properties" in schema else "string"
    return f"SOME_{type_.upper()}_VALUE"


def _first_example(examples: dict | None) -> Any:
    for example in (examples or {}).values():
        if isinstance(example, dict) and "value" in example:
            return example["value"]
        if not isinstance(example, dict):
            return example
    return MISSING


def resolve_value(param: Parameter, values: dict | None = None) -> Any:
    """Pick the value for `param`, or MISSING for an unresolvable path parameter."""
    schema = param.schema_ or {}
    if values and param.name in values:
        return values[param.name]
    if param.has("default"):
        return param.default
    if "default" in schema:
        return schema["default"]
    if param.has("example"):
        return param.example
    if "example" in schema:
        return schema["example"]
    example = _first_example(param.examples)
    if example is not MISSING:
        return example
    if param.location == "path":
        return MISSING
    return placeholder(param)


def parameter_values(param: Parameter, values: dict | None = None) -> list[NameValue] | None:
    """Serialized name/value pairs for `param`; None when it has no value."""
    value = resolve_value(param, values)
    if value is MISSING:
        return None
    return serialize(param.name, value, param.location, param.style, param.explode)
