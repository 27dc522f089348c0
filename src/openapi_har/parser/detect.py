"""Load API descriptions and pick the adapter for their format version."""

from pathlib import Path

import yaml

from openapi_har.parser.base import DocumentSource
from openapi_har.parser.openapi import OpenApiSource
from openapi_har.parser.swagger import SwaggerSource


class UnsupportedDocumentError(ValueError):
    """The document is neither Swagger 2.0 nor OpenAPI 3.x."""


def load_document(file_path: Path) -> dict:
    """Read a YAML or JSON API description from disk."""
    text = file_path.read_text(encoding="utf-8")
    # JSON is a subset of YAML, one loader covers both
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise UnsupportedDocumentError(f"{file_path} does not contain an API description")
    return data


LEGACY_KEYS = ("host", "basePath", "schemes", "definitions", "securityDefinitions")


def detect_format(document: dict) -> str:
    """Return 'swagger' for Swagger 2.0 documents and 'openapi' for OpenAPI 3.x.

    Documents without a version marker are classified by their top-level keys.
    """
    if "swagger" in document:
        if not str(document["swagger"]).startswith("2"):
            raise UnsupportedDocumentError(f"Unsupported Swagger version: {document['swagger']}")
        return "swagger"
    if "openapi" in document:
        if not str(document["openapi"]).startswith("3"):
            raise UnsupportedDocumentError(f"Unsupported OpenAPI version: {document['openapi']}")
        return "openapi"
    if any(key in document for key in LEGACY_KEYS):
        return "swagger"
    return "openapi"


def source_for(document: dict) -> DocumentSource:
    """Wrap `document` in the adapter matching its format version."""
    if detect_format(document) == "swagger":
        return SwaggerSource(document)
    return OpenApiSource(document)
