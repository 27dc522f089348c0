"""Snippet generator: renders translated requests for a list of targets."""

from pydantic import BaseModel

from openapi_har.generator.renderers import RENDERERS
from openapi_har.generator.targets import Target, format_target
from openapi_har.parser.base import HarRequest
from openapi_har.parser.detect import source_for
from openapi_har.translator.har import enumerate_endpoints, translate_one
from openapi_har.translator.payload import Sampler
from openapi_har.translator.sampler import sample
from openapi_har.translator.urls import base_url

METHOD_ORDER = ("get", "post", "put", "delete", "patch")


class Snippet(BaseModel):
    id: str
    title: str
    mime_type: str | None = None
    content: str


class EndpointSnippets(BaseModel):
    method: str
    url: str
    description: str
    resource: str | None
    snippets: list[Snippet]


def resource_name(url: str) -> str | None:
    """Last path segment that is not a template: ../users/{userId} -> users."""
    for segment in reversed(url.split("/")):
        if segment and not segment.startswith("{"):
            return segment
    return None


def method_rank(method: str) -> int:
    method = method.lower()
    return METHOD_ORDER.index(method) if method in METHOD_ORDER else len(METHOD_ORDER)


def _render(requests: list[HarRequest], targets: list[str]) -> list[Snippet]:
    formatted: list[tuple[str, Target]] = [(t, format_target(t)) for t in targets]
    snippets = []
    for target_id, target in formatted:
        renderer = RENDERERS[target.language, target.library]
        for request in requests:
            snippets.append(
                Snippet(
                    id=target_id,
                    title=target.title,
                    mime_type=request.post_data.mime_type if request.post_data else None,
                    content=renderer(request),
                )
            )
    return snippets


def get_endpoint_snippets(
    document: dict,
    path: str,
    method: str,
    targets: list[str],
    values: dict | None = None,
    sampler: Sampler = sample,
) -> EndpointSnippets:
    """Snippets for one operation in every requested target."""
    source = source_for(document)
    requests = translate_one(document, path, method, values, sampler)
    url = base_url(source, path, method) + path
    return EndpointSnippets(
        method=method.upper(),
        url=url,
        description=source.description(path, method),
        resource=resource_name(url),
        snippets=_render(requests, targets),
    )


def get_snippets(document: dict, targets: list[str], sampler: Sampler = sample) -> list[EndpointSnippets]:
    """Snippets for all operations, sorted by resource name then method."""
    # fail on a bad target before doing any work
    for target in targets:
        format_target(target)

    results = [
        EndpointSnippets(
            method=endpoint.method,
            url=endpoint.url,
            description=endpoint.description,
            resource=resource_name(endpoint.url),
            snippets=_render(endpoint.requests, targets),
        )
        for endpoint in enumerate_endpoints(document, sampler)
    ]
    results.sort(key=lambda r: (r.resource or "", method_rank(r.method)))
    return results
