"""Authorization header selection from security requirements."""

from openapi_har.parser.base import DocumentSource, NameValue

BASIC_AUTH_VALUE = "Basic REPLACE_BASIC_AUTH"
BEARER_AUTH_VALUE = "Bearer REPLACE_BEARER_TOKEN"
API_KEY_VALUE = "REPLACE_KEY_VALUE"


def _auth_kind(scheme: dict) -> str | None:
    type_ = str(scheme.get("type", "")).lower()
    if type_ == "basic":
        return "basic"
    if type_ == "oauth2":
        return "bearer"
    if type_ == "http":
        http_scheme = str(scheme.get("scheme", "")).lower()
        if http_scheme in ("basic", "bearer"):
            return http_scheme
        return None
    if type_ == "apikey" and scheme.get("in") == "header":
        return "apikey"
    return None


def auth_header(source: DocumentSource, path: str, method: str) -> NameValue | None:
    """At most one auth header for the operation.

    Basic and bearer schemes are taken in declaration order; an apiKey
    header is used only when neither is declared. Operation-level
    `security` (even an empty list) replaces the document's.
    """
    api_key = None
    for requirement in source.security_requirements(path, method):
        for name in requirement:
            scheme = source.security_scheme(name)
            if scheme is None:
                continue
            kind = _auth_kind(scheme)
            if kind == "basic":
                return NameValue(name="Authorization", value=BASIC_AUTH_VALUE)
            if kind == "bearer":
                return NameValue(name="Authorization", value=BEARER_AUTH_VALUE)
            if kind == "apikey" and api_key is None:
                api_key = NameValue(name=scheme.get("name", "Authorization"), value=API_KEY_VALUE)
    return api_key
