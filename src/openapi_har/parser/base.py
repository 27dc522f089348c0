"""Unified data models for translated API descriptions.

Both document adapters (Swagger 2.0 and OpenAPI 3.x) expose their input
through `DocumentSource`, and the translator turns what they return into
HAR request records.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from openapi_har.parser.refs import RefResolver, is_ref

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class NameValue(BaseModel):
    """A single name/value pair (header, query string entry, cookie, form field)."""

    name: str
    value: str


class Parameter(BaseModel):
    """A single operation parameter with its `$ref` already dereferenced."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    location: str = Field(alias="in")  # path / query / header / cookie / body / formData
    style: str | None = None
    explode: bool | None = None
    schema_: dict | None = Field(default=None, alias="schema")
    type: str | None = None  # Swagger 2.0 only
    items: dict | None = None  # Swagger 2.0 only
    enum: list | None = None
    default: Any = None
    example: Any = None
    examples: dict | None = None
    required: bool = False
    description: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return self.name, self.location

    def has(self, field: str) -> bool:
        """True when `field` was present in the source document, even as null."""
        return field in self.model_fields_set


class BodySpec(BaseModel):
    """A request-body schema declared for one content type."""

    model_config = ConfigDict(populate_by_name=True)

    mime_type: str
    schema_: dict = Field(alias="schema")


class PostData(BaseModel):
    """HAR postData object."""

    model_config = ConfigDict(populate_by_name=True)

    mime_type: str = Field(alias="mimeType")
    text: str | None = None
    params: list[NameValue] | None = None


class HarRequest(BaseModel):
    """HAR 1.2 request object for one operation and content type."""

    model_config = ConfigDict(populate_by_name=True)

    method: str
    url: str
    http_version: str = Field(default="HTTP/1.1", alias="httpVersion")
    cookies: list[NameValue] = []
    headers: list[NameValue] = []
    query_string: list[NameValue] = Field(default=[], alias="queryString")
    post_data: PostData | None = Field(default=None, alias="postData")
    headers_size: int = Field(default=0, alias="headersSize")
    body_size: int = Field(default=0, alias="bodySize")
    comment: str | None = None

    def to_har(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class TranslatedEndpoint(BaseModel):
    """All request variants for one path + method pair."""

    method: str
    path: str
    url: str
    description: str
    requests: list[HarRequest]


class DocumentSource(ABC):
    """Version-specific view over an API description.

    Subclasses answer the questions the translator asks (parameters, request
    bodies, servers, security schemes) without the translator having to know
    which format version it is looking at.
    """

    version: str = ""

    def __init__(self, document: dict):
        self.document = document
        self.refs = RefResolver(document)

    def operations(self) -> list[tuple[str, str]]:
        """All (path, method) pairs in document order."""
        pairs = []
        for path in self.document["paths"]:
            for method in self.path_item(path):
                if method.lower() in HTTP_METHODS:
                    pairs.append((path, method))
        return pairs

    def path_item(self, path: str) -> dict:
        return self.refs.deref(self.document["paths"][path])

    def operation(self, path: str, method: str) -> dict:
        item = self.path_item(path)
        if method in item:
            return item[method]
        for key, operation in item.items():
            if key.lower() == method.lower():
                return operation
        raise KeyError(f"{method.upper()} {path}")

    def parameters(self, path: str, method: str) -> list[Parameter]:
        """Effective parameters: operation-level entries shadow path-level ones."""
        merged: dict[tuple[str, str], Parameter] = {}
        raws = [
            *self.path_item(path).get("parameters", []),
            *self.operation(path, method).get("parameters", []),
        ]
        for raw in raws:
            node = self.refs.deref(raw)
            if is_ref(node):
                logger.debug("Skipping unresolved parameter %s", node["$ref"])
                continue
            param = self._parameter(node)
            merged[param.key] = param
        return list(merged.values())

    def parameters_in(self, path: str, method: str, location: str) -> list[Parameter]:
        return [p for p in self.parameters(path, method) if p.location == location]

    def description(self, path: str, method: str) -> str:
        operation = self.operation(path, method)
        return operation.get("description") or operation.get("summary") or "No description available"

    def security_requirements(self, path: str, method: str) -> list[dict]:
        operation = self.operation(path, method)
        if "security" in operation:
            return operation["security"] or []
        return self.document.get("security") or []

    def servers(self, path: str, method: str) -> list[dict]:
        """Server list with operation > path item > document precedence."""
        for node in (self.operation(path, method), self.path_item(path), self.document):
            if node.get("servers"):
                return node["servers"]
        return []

    def _parameter(self, node: dict) -> Parameter:
        node = dict(node)
        if isinstance(node.get("schema"), dict) and "$ref" in node["schema"]:
            schema = dict(self.refs.deref(node["schema"]))
            # untyped value schemas count as objects; body schemas stay as declared
            if node.get("in") != "body":
                schema.setdefault("type", "object")
            node["schema"] = schema
        if isinstance(node.get("examples"), dict):
            node["examples"] = {key: self.refs.deref(ex) for key, ex in node["examples"].items()}
        return Parameter.model_validate(self.adapt_parameter(node))

    def adapt_parameter(self, node: dict) -> dict:
        """Hook for version-specific parameter fields."""
        return node

    @abstractmethod
    def security_scheme(self, name: str) -> dict | None:
        ...

    @abstractmethod
    def request_bodies(self, path: str, method: str) -> list[BodySpec]:
        ...

    @abstractmethod
    def declared_content_types(self, path: str, method: str) -> list[str]:
        ...

    @abstractmethod
    def accepted_types(self, path: str, method: str) -> list[str]:
        ...
