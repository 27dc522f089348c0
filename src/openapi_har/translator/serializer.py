"""Parameter serialization for path, query, header and cookie parameters.

Implements the `style` / `explode` rules of the OpenAPI specification:

    style           location        primitive   array          object
    simple          path, header    5           3,4,5          role,admin  (explode: role=admin)
    label           path            .5          .3,4,5         .role,admin (explode: .role=admin)
    matrix          path            ;id=5       ;id=3,4,5      ;id=role,admin (explode: ;role=admin)
    form            query, cookie   id=5        id=3&id=4      role=admin (non-explode: id=role,admin)
    spaceDelimited  query                       id=3 4 5
    pipeDelimited   query                       id=3|4|5
    deepObject      query                                      id[role]=admin

Every encoder returns a list of NameValue pairs. For path parameters the
pair values are fragments that get concatenated into the URL.
"""

import json
import logging
from typing import Any, Callable

from openapi_har.parser.base import NameValue

logger = logging.getLogger(__name__)

ERROR_VALUE = "ERROR"

DEFAULT_STYLES = {
    "query": "form",
    "cookie": "form",
    "path": "simple",
    "header": "simple",
}

# Combinations that have no meaningful rendering.
INVALID_COMBINATIONS = {("form", "path"), ("simple", "query")}

Encoder = Callable[[str, Any], list[NameValue]]


def stringify(value: Any) -> str:
    """Render a leaf value the way it appears on the wire."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def shape_of(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return "primitive"


def _pair(name: str, value: str) -> list[NameValue]:
    return [NameValue(name=name, value=value)]


def _items(value: list) -> list[str]:
    return [stringify(v) for v in value]


def _flat(value: dict) -> list[str]:
    """Alternate keys and values: {a: 1, b: 2} -> [a, 1, b, 2]."""
    result = []
    for key, item in value.items():
        result.extend([str(key), stringify(item)])
    return result


def _assigned(value: dict) -> list[str]:
    return [f"{key}={stringify(item)}" for key, item in value.items()]


# primitives

def _primitive(name, value):
    return _pair(name, stringify(value))


def _primitive_label(name, value):
    return _pair(name, "." + stringify(value))


def _primitive_matrix(name, value):
    return _pair(name, f";{name}={stringify(value)}")


# arrays

def _joined(separator: str, prefix: str = "") -> Encoder:
    def encode(name, value):
        return _pair(name, prefix + separator.join(_items(value)))
    return encode


def _array_per_element(name, value):
    return [NameValue(name=name, value=item) for item in _items(value)]


def _array_label_explode(name, value):
    return _pair(name, "".join("." + item for item in _items(value)))


def _array_matrix(name, value):
    return _pair(name, f";{name}=" + ",".join(_items(value)))


def _array_matrix_explode(name, value):
    return [NameValue(name=name, value=f";{name}={item}") for item in _items(value)]


# objects

def _object_flat(separator: str, prefix: str = "") -> Encoder:
    def encode(name, value):
        return _pair(name, prefix + separator.join(_flat(value)))
    return encode


def _object_matrix(name, value):
    return _pair(name, f";{name}=" + ",".join(_flat(value)))


def _object_assigned(separator: str, leading: bool = False) -> Encoder:
    def encode(name, value):
        parts = _assigned(value)
        if leading:
            return _pair(name, "".join(separator + part for part in parts))
        return _pair(name, separator.join(parts))
    return encode


def _object_per_key(name, value):
    return [NameValue(name=str(key), value=stringify(item)) for key, item in value.items()]


def _object_deep(name, value):
    return [NameValue(name=f"{name}[{key}]", value=stringify(item)) for key, item in value.items()]


def _build_table() -> dict[tuple[str, str, bool], Encoder]:
    table: dict[tuple[str, str, bool], Encoder] = {}

    def both(shape: str, style: str, encoder: Encoder) -> None:
        table[shape, style, False] = encoder
        table[shape, style, True] = encoder

    for style in ("simple", "form", "spaceDelimited", "pipeDelimited", "deepObject"):
        both("primitive", style, _primitive)
    both("primitive", "label", _primitive_label)
    both("primitive", "matrix", _primitive_matrix)

    both("array", "simple", _joined(","))
    table["array", "form", False] = _joined(",")
    table["array", "form", True] = _array_per_element
    table["array", "label", False] = _joined(",", prefix=".")
    table["array", "label", True] = _array_label_explode
    table["array", "matrix", False] = _array_matrix
    table["array", "matrix", True] = _array_matrix_explode
    table["array", "spaceDelimited", False] = _joined(" ")
    table["array", "spaceDelimited", True] = _array_per_element
    table["array", "pipeDelimited", False] = _joined("|")
    table["array", "pipeDelimited", True] = _array_per_element
    both("array", "deepObject", _array_per_element)

    table["object", "simple", False] = _object_flat(",")
    table["object", "simple", True] = _object_assigned(",")
    table["object", "label", False] = _object_flat(",", prefix=".")
    table["object", "label", True] = _object_assigned(".", leading=True)
    table["object", "matrix", False] = _object_matrix
    table["object", "matrix", True] = _object_assigned(";", leading=True)
    table["object", "form", False] = _object_flat(",")
    table["object", "form", True] = _object_per_key
    table["object", "spaceDelimited", False] = _object_flat(" ")
    table["object", "spaceDelimited", True] = _object_per_key
    table["object", "pipeDelimited", False] = _object_flat("|")
    table["object", "pipeDelimited", True] = _object_per_key
    both("object", "deepObject", _object_deep)
    return table


ENCODERS = _build_table()


def serialize(
    name: str,
    value: Any,
    location: str,
    style: str | None = None,
    explode: bool | None = None,
) -> list[NameValue]:
    """Encode one parameter value into name/value pairs.

    `style` defaults to 'form' for query and cookie parameters and to
    'simple' for path and header parameters; `explode` defaults to true
    for 'form' only.
    """
    if style is None:
        style = DEFAULT_STYLES.get(location, "simple")
    if explode is None:
        explode = style == "form"

    if (style, location) in INVALID_COMBINATIONS:
        logger.warning("Style %r is not valid for %s parameter %r", style, location, name)
        return _pair(name, ERROR_VALUE)

    encoder = ENCODERS.get((shape_of(value), style, bool(explode)))
    if encoder is None:
        logger.warning("Unknown style %r for parameter %r", style, name)
        return _pair(name, ERROR_VALUE)
    return encoder(name, value)


def render_path_value(pairs: list[NameValue]) -> str:
    """Concatenate serialized path fragments."""
    return "".join(pair.value for pair in pairs)
