"""Base URL resolution and path template materialization."""

import re

from openapi_har.parser.base import DocumentSource, Parameter
from openapi_har.translator.serializer import render_path_value
from openapi_har.translator.values import parameter_values

SERVER_VARIABLE = re.compile(r"\{([^}]+)\}")


def _server_url(server: dict) -> str:
    variables = server.get("variables") or {}

    def substitute(match: re.Match) -> str:
        variable = variables.get(match.group(1))
        if variable and "default" in variable:
            return str(variable["default"])
        return match.group(0)

    return SERVER_VARIABLE.sub(substitute, server.get("url", ""))


def legacy_base_url(document: dict) -> str:
    """Swagger 2.0 base URL from schemes, host and basePath."""
    schemes = document.get("schemes") or ["http"]
    host = document.get("host") or "localhost"
    base_path = document.get("basePath") or ""
    if base_path == "/":
        base_path = ""
    return f"{schemes[0]}://{host}{base_path}"


def base_url(source: DocumentSource, path: str, method: str) -> str:
    """Effective base URL: operation > path item > document servers > legacy fields."""
    servers = source.servers(path, method)
    if servers:
        url = _server_url(servers[0])
    else:
        url = legacy_base_url(source.document)
    return url.rstrip("/")


def materialize_path(template: str, parameters: list[Parameter], values: dict | None = None) -> str:
    """Substitute serialized path parameters into `{name}` tokens."""
    path = template
    for param in parameters:
        if param.location != "path":
            continue
        pairs = parameter_values(param, values)
        if pairs is None:
            continue
        path = path.replace("{" + param.name + "}", render_path_value(pairs))
    return path
