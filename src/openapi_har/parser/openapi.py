"""OpenAPI 3.x document adapter."""

from openapi_har.parser.base import BodySpec, DocumentSource

# Request-body content types that get a sampled payload, in priority order.
PAYLOAD_TYPES = (
    "application/json",
    "application/x-www-form-urlencoded",
    "multipart/form-data",
)


class OpenApiSource(DocumentSource):
    """Adapter for `openapi: 3.x` documents."""

    version = "3"

    def security_scheme(self, name: str) -> dict | None:
        schemes = self.document.get("components", {}).get("securitySchemes", {})
        scheme = schemes.get(name)
        return self.refs.deref(scheme) if scheme is not None else None

    def request_body(self, path: str, method: str) -> dict:
        body = self.operation(path, method).get("requestBody")
        return self.refs.deref(body) if body else {}

    def request_bodies(self, path: str, method: str) -> list[BodySpec]:
        content = self.request_body(path, method).get("content") or {}
        bodies = []
        for mime_type in PAYLOAD_TYPES:
            media = content.get(mime_type)
            if media and media.get("schema") is not None:
                bodies.append(BodySpec(mime_type=mime_type, schema=media["schema"]))
        return bodies

    def declared_content_types(self, path: str, method: str) -> list[str]:
        return list(self.request_body(path, method).get("content") or {})

    def accepted_types(self, path: str, method: str) -> list[str]:
        return []
