"""Built-in snippet renderers, one per (language, library) target."""

import shlex
from typing import Callable
from urllib.parse import quote, urlencode, urlsplit

from openapi_har.parser.base import HarRequest

MULTIPART_BOUNDARY = "---011000010111000001101001"

Renderer = Callable[[HarRequest], str]


def full_url(request: HarRequest) -> str:
    """The request URL with its query string appended."""
    if not request.query_string:
        return request.url
    query = urlencode([(q.name, q.value) for q in request.query_string], safe="[],|", quote_via=quote)
    separator = "&" if "?" in request.url else "?"
    return f"{request.url}{separator}{query}"


def _cookie_header(request: HarRequest) -> str:
    return "; ".join(f"{c.name}={c.value}" for c in request.cookies)


def _multipart_body(request: HarRequest) -> str:
    parts = []
    for param in request.post_data.params or []:
        parts.append(
            f"--{MULTIPART_BOUNDARY}\r\n"
            f'Content-Disposition: form-data; name="{param.name}"\r\n\r\n'
            f"{param.value}\r\n"
        )
    parts.append(f"--{MULTIPART_BOUNDARY}--\r\n")
    return "".join(parts)


def render_curl(request: HarRequest) -> str:
    lines = [f"curl --request {request.method}", f"--url {shlex.quote(full_url(request))}"]
    for header in request.headers:
        lines.append(f"--header {shlex.quote(f'{header.name}: {header.value}')}")
    if request.cookies:
        lines.append(f"--cookie {shlex.quote(_cookie_header(request))}")

    post_data = request.post_data
    if post_data is not None:
        if post_data.mime_type == "multipart/form-data":
            for param in post_data.params or []:
                lines.append(f"--form {shlex.quote(f'{param.name}={param.value}')}")
        elif post_data.text is not None:
            lines.append(f"--data {shlex.quote(post_data.text)}")
    return " \\\n  ".join(lines)


def render_python_requests(request: HarRequest) -> str:
    lines = ["import requests", "", f"url = {request.url!r}", ""]
    arguments = [repr(request.method), "url"]

    if request.query_string:
        pairs = [(q.name, q.value) for q in request.query_string]
        names = [name for name, _ in pairs]
        querystring = dict(pairs) if len(set(names)) == len(names) else pairs
        lines.append(f"querystring = {querystring!r}")
        arguments.append("params=querystring")

    post_data = request.post_data
    if post_data is not None:
        if post_data.mime_type == "multipart/form-data":
            files = {p.name: (None, p.value) for p in post_data.params or []}
            lines.append(f"files = {files!r}")
            arguments.append("files=files")
        else:
            lines.append(f"payload = {post_data.text!r}")
            arguments.append("data=payload")

    headers = {h.name: h.value for h in request.headers}
    if post_data is not None and post_data.mime_type == "multipart/form-data":
        # requests sets the multipart content-type itself, boundary included
        headers = {k: v for k, v in headers.items() if k.lower() != "content-type"}
    if headers:
        lines.append(f"headers = {headers!r}")
        arguments.append("headers=headers")
    if request.cookies:
        cookies = {c.name: c.value for c in request.cookies}
        lines.append(f"cookies = {cookies!r}")
        arguments.append("cookies=cookies")

    lines += ["", f"response = requests.request({', '.join(arguments)})", "", "print(response.text)"]
    return "\n".join(lines)


def render_http(request: HarRequest) -> str:
    url = urlsplit(full_url(request))
    target = url.path or "/"
    if url.query:
        target += "?" + url.query
    lines = [f"{request.method} {target} {request.http_version}", f"Host: {url.netloc}"]

    body = ""
    post_data = request.post_data
    if post_data is not None:
        if post_data.mime_type == "multipart/form-data":
            body = _multipart_body(request)
        else:
            body = post_data.text or ""

    for header in request.headers:
        value = header.value
        if post_data is not None and post_data.mime_type == "multipart/form-data" and header.name.lower() == "content-type":
            value = f"{value}; boundary={MULTIPART_BOUNDARY}"
        lines.append(f"{header.name}: {value}")
    if request.cookies:
        lines.append(f"Cookie: {_cookie_header(request)}")
    if body:
        lines.append(f"Content-Length: {len(body.encode('utf-8'))}")
    return "\r\n".join(lines) + "\r\n\r\n" + body


RENDERERS: dict[tuple[str, str], Renderer] = {
    ("shell", "curl"): render_curl,
    ("python", "requests"): render_python_requests,
    ("http", "http1.1"): render_http,
}
