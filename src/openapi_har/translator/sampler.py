"""Default schema sampler: builds one example value from a JSON schema.

This is the `sample(schema, options, root)` collaborator the payload
synthesizer calls. Any callable with the same signature can replace it.

Supported options:
    skipReadOnly      leave out properties marked readOnly
    skipWriteOnly     leave out properties marked writeOnly
    skipNonRequired   leave out properties not listed in `required`
"""

import copy
from typing import Any

from openapi_har.parser.refs import RefResolver, is_local_ref, is_ref

STRING_FORMATS = {
    "date-time": "2019-08-24T14:15:22Z",
    "date": "2019-08-24",
    "time": "14:15:22Z",
    "email": "user@example.com",
    "uuid": "095be615-a8ad-4c33-8e9c-c7612fbf6c9f",
    "uri": "http://example.com",
    "hostname": "example.com",
    "ipv4": "192.168.0.1",
    "ipv6": "2001:0db8:85a3:0000:0000:8a2e:0370:7334",
    "password": "pa$$word",
    "byte": "ZXhhbXBsZQ==",
    "binary": "",
}


class SchemaSamplingError(ValueError):
    """The schema cannot be turned into a sample value."""


def sample(schema: Any, options: dict | None = None, root: dict | None = None) -> Any:
    """Return one sample value for `schema`, resolving `$ref`s against `root`."""
    return _Sampler(options or {}, root or {}).sample(schema, ())


def _type_of(schema: dict) -> str | None:
    type_ = schema.get("type")
    if isinstance(type_, list):
        non_null = [t for t in type_ if t != "null"]
        return non_null[0] if non_null else "null"
    if type_:
        return type_
    if "properties" in schema or "additionalProperties" in schema:
        return "object"
    if "items" in schema:
        return "array"
    return None


def _empty(schema: Any) -> Any:
    if not isinstance(schema, dict):
        return None
    type_ = _type_of(schema)
    if type_ == "object":
        return {}
    if type_ == "array":
        return []
    return None


class _Sampler:
    def __init__(self, options: dict, root: dict):
        self.options = options
        self.refs = RefResolver(root)

    def sample(self, schema: Any, seen: tuple) -> Any:
        if not isinstance(schema, dict):
            return None

        if is_ref(schema):
            ref = schema["$ref"]
            if not is_local_ref(ref):
                return None
            target = self.refs.resolve(ref)
            if ref in seen:
                # recursive schema: stop at the second visit
                return _empty(target)
            return self.sample(target, (*seen, ref))

        if "const" in schema:
            return copy.deepcopy(schema["const"])
        if "example" in schema:
            return copy.deepcopy(schema["example"])
        if isinstance(schema.get("examples"), list) and schema["examples"]:
            return copy.deepcopy(schema["examples"][0])
        if "default" in schema:
            return copy.deepcopy(schema["default"])
        if schema.get("enum"):
            return copy.deepcopy(schema["enum"][0])

        if "allOf" in schema:
            return self.sample(self._merge_all_of(schema, seen), seen)
        for key in ("oneOf", "anyOf"):
            if schema.get(key):
                return self.sample(schema[key][0], seen)

        type_ = _type_of(schema)
        if type_ is None:
            return None
        if type_ == "object":
            return self._object(schema, seen)
        if type_ == "array":
            return self._array(schema, seen)
        if type_ == "string":
            return _string(schema)
        if type_ in ("integer", "number"):
            return _number(schema, type_)
        if type_ == "boolean":
            return True
        if type_ == "null":
            return None
        if type_ == "file":
            return ""
        raise SchemaSamplingError(f"Unsupported schema type: {type_!r}")

    def _merge_all_of(self, schema: dict, seen: tuple) -> dict:
        merged = {k: v for k, v in schema.items() if k != "allOf"}
        for sub in schema["allOf"]:
            if is_ref(sub) and is_local_ref(sub["$ref"]):
                if sub["$ref"] in seen:
                    continue
                sub = self.refs.resolve(sub["$ref"])
            if not isinstance(sub, dict):
                continue
            if "allOf" in sub:
                sub = self._merge_all_of(sub, seen)
            _merge_into(merged, sub)
        return merged

    def _object(self, schema: dict, seen: tuple) -> dict:
        result = {}
        required = set(schema.get("required") or [])
        for name, prop in (schema.get("properties") or {}).items():
            if self.options.get("skipNonRequired") and name not in required:
                continue
            target = self.refs.deref(prop)
            if isinstance(target, dict):
                if self.options.get("skipReadOnly") and target.get("readOnly"):
                    continue
                if self.options.get("skipWriteOnly") and target.get("writeOnly"):
                    continue
            result[name] = self.sample(prop, seen)
        return result

    def _array(self, schema: dict, seen: tuple) -> list:
        items = schema.get("items")
        if isinstance(items, list):
            return [self.sample(item, seen) for item in items]
        if not items:
            return []
        count = schema.get("minItems") or 1
        return [self.sample(items, seen) for _ in range(count)]


def _merge_into(merged: dict, sub: dict) -> None:
    if "type" in sub:
        if "type" in merged and merged["type"] != sub["type"]:
            raise SchemaSamplingError(
                f"Incompatible types in allOf: {merged['type']!r} and {sub['type']!r}"
            )
        merged["type"] = sub["type"]
    if "properties" in sub:
        merged["properties"] = {**merged.get("properties", {}), **sub["properties"]}
    if "required" in sub:
        merged["required"] = [*merged.get("required", []), *sub["required"]]
    for key, value in sub.items():
        if key not in ("type", "properties", "required"):
            merged[key] = value


def _string(schema: dict) -> str:
    value = STRING_FORMATS.get(schema.get("format"), "string")
    min_length = schema.get("minLength") or 0
    max_length = schema.get("maxLength")
    if value and len(value) < min_length:
        value = (value * (min_length // len(value) + 1))[:min_length]
    if max_length is not None and len(value) > max_length:
        value = value[:max_length]
    return value


def _number(schema: dict, type_: str) -> int | float:
    exclusive_min = schema.get("exclusiveMinimum")
    minimum = schema.get("minimum")
    maximum = schema.get("maximum")
    if isinstance(exclusive_min, (int, float)) and not isinstance(exclusive_min, bool):
        value = exclusive_min + 1
    elif minimum is not None:
        value = minimum + 1 if exclusive_min is True else minimum
    elif maximum is not None and maximum < 0:
        value = maximum - 1 if schema.get("exclusiveMaximum") is True else maximum
    else:
        value = 0
    return int(value) if type_ == "integer" else value
