"""Swagger 2.0 document adapter.

Maps Swagger-only constructs (collectionFormat, body/formData parameters,
consumes/produces, securityDefinitions) onto the shapes the translator
works with.
"""

from openapi_har.parser.base import BodySpec, DocumentSource, Parameter

# collectionFormat -> (style in path/header, style in query, explode)
COLLECTION_FORMATS = {
    "csv": ("simple", "form", False),
    "ssv": (None, "spaceDelimited", False),
    "pipes": (None, "pipeDelimited", False),
    "multi": (None, "form", True),
}


class SwaggerSource(DocumentSource):
    """Adapter for `swagger: "2.0"` documents."""

    version = "2.0"

    def adapt_parameter(self, node: dict) -> dict:
        if node.get("type") != "array" or "style" in node:
            return node
        fmt = node.get("collectionFormat", "csv")
        if fmt not in COLLECTION_FORMATS:
            return node
        simple_style, query_style, explode = COLLECTION_FORMATS[fmt]
        style = simple_style if node.get("in") in ("path", "header") else query_style
        if style is None:
            return node
        return {**node, "style": style, "explode": explode}

    def security_scheme(self, name: str) -> dict | None:
        scheme = self.document.get("securityDefinitions", {}).get(name)
        return self.refs.deref(scheme) if scheme is not None else None

    def request_bodies(self, path: str, method: str) -> list[BodySpec]:
        params = self.parameters(path, method)
        for param in params:
            if param.location == "body" and param.schema_ is not None:
                return [BodySpec(mime_type="application/json", schema=param.schema_)]

        form = [p for p in params if p.location == "formData"]
        if not form:
            return []
        return [BodySpec(mime_type=self._form_mime_type(path, method, form), schema=_form_schema(form))]

    def declared_content_types(self, path: str, method: str) -> list[str]:
        return self.operation(path, method).get("consumes") or self.document.get("consumes") or []

    def accepted_types(self, path: str, method: str) -> list[str]:
        return self.operation(path, method).get("produces") or self.document.get("produces") or []

    def _form_mime_type(self, path: str, method: str, form: list[Parameter]) -> str:
        consumes = self.declared_content_types(path, method)
        if "multipart/form-data" in consumes or any(p.type == "file" for p in form):
            return "multipart/form-data"
        return "application/x-www-form-urlencoded"


def _form_schema(form: list[Parameter]) -> dict:
    """Fold formData parameters into one object schema for the sampler."""
    properties = {}
    for param in form:
        if param.type == "file":
            prop = {"type": "string", "format": "binary"}
        else:
            prop = {"type": param.type or "string"}
        if param.items is not None:
            prop["items"] = param.items
        if param.enum:
            prop["enum"] = param.enum
        if param.has("default"):
            prop["default"] = param.default
        if param.has("example"):
            prop["example"] = param.example
        properties[param.name] = prop

    schema = {"type": "object", "properties": properties}
    required = [p.name for p in form if p.required]
    if required:
        schema["required"] = required
    return schema
