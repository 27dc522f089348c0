"""Translate API descriptions into HAR request objects.

See:
  - https://swagger.io/specification/
  - http://www.softwareishard.com/blog/har-12-spec/#request
"""

from openapi_har.parser.base import DocumentSource, HarRequest, NameValue, TranslatedEndpoint
from openapi_har.parser.detect import source_for
from openapi_har.translator.payload import Sampler, payloads
from openapi_har.translator.sampler import sample
from openapi_har.translator.security import auth_header
from openapi_har.translator.urls import base_url, materialize_path
from openapi_har.translator.values import parameter_values


def _serialized(source: DocumentSource, path: str, method: str, location: str, values: dict | None) -> list[NameValue]:
    pairs = []
    for param in source.parameters_in(path, method, location):
        pairs.extend(parameter_values(param, values) or [])
    return pairs


def _headers(source: DocumentSource, path: str, method: str, values: dict | None, has_payload: bool) -> list[NameValue]:
    headers = [NameValue(name="accept", value=t) for t in source.accepted_types(path, method)]
    if not has_payload:
        headers += [NameValue(name="content-type", value=t) for t in source.declared_content_types(path, method)]
    headers += _serialized(source, path, method, "header", values)
    auth = auth_header(source, path, method)
    if auth is not None:
        headers.append(auth)
    return headers


def build_requests(
    source: DocumentSource,
    path: str,
    method: str,
    values: dict | None = None,
    sampler: Sampler = sample,
) -> list[HarRequest]:
    """HAR requests for one operation, one per sampled request-body content type."""
    parameters = source.parameters(path, method)
    url = base_url(source, path, method) + materialize_path(path, parameters, values)
    post_datas = payloads(source, path, method, sampler=sampler)

    base = HarRequest(
        method=method.upper(),
        url=url,
        headers=_headers(source, path, method, values, bool(post_datas)),
        query_string=_serialized(source, path, method, "query", values),
        cookies=_serialized(source, path, method, "cookie", values),
    )
    if not post_datas:
        return [base]

    requests = []
    for post_data in post_datas:
        variant = base.model_copy(deep=True)
        variant.post_data = post_data
        variant.comment = post_data.mime_type
        variant.headers.append(NameValue(name="content-type", value=post_data.mime_type))
        requests.append(variant)
    return requests


def enumerate_endpoints(document: dict, sampler: Sampler = sample) -> list[TranslatedEndpoint]:
    """Translate every path + method pair in document order."""
    source = source_for(document)
    endpoints = []
    for path, method in source.operations():
        requests = build_requests(source, path, method, sampler=sampler)
        endpoints.append(
            TranslatedEndpoint(
                method=method.upper(),
                path=path,
                url=base_url(source, path, method) + path,
                description=source.description(path, method),
                requests=requests,
            )
        )
    return endpoints


def translate(document: dict, sampler: Sampler = sample) -> list[HarRequest]:
    """HAR requests for every operation in `document`."""
    return [request for endpoint in enumerate_endpoints(document, sampler) for request in endpoint.requests]


def translate_one(
    document: dict,
    path: str,
    method: str,
    values: dict | None = None,
    sampler: Sampler = sample,
) -> list[HarRequest]:
    """HAR requests for a single operation, with optional caller-supplied parameter values."""
    return build_requests(source_for(document), path, method, values, sampler)
