"""Request-body payloads: one HAR postData per sampled content type."""

import json
import logging
from typing import Any, Callable
from urllib.parse import quote

from openapi_har.parser.base import BodySpec, DocumentSource, NameValue, PostData
from openapi_har.translator.sampler import sample

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_OPTIONS = {"skipReadOnly": True}

Sampler = Callable[[Any, dict, dict], Any]


def form_encode(value: Any) -> str:
    """Percent-encode like encodeURIComponent, with '+' for spaces."""
    if not isinstance(value, str):
        value = json.dumps(value, separators=(",", ":"))
    return quote(value, safe="!~*'()").replace("%20", "+")


def _json_payload(mime_type: str, sample_value: Any) -> PostData:
    return PostData(mime_type=mime_type, text=json.dumps(sample_value, separators=(",", ":")))


def _urlencoded_payload(mime_type: str, sample_value: Any) -> PostData | None:
    if not isinstance(sample_value, dict):
        return None
    params = [NameValue(name=form_encode(str(k)), value=form_encode(v)) for k, v in sample_value.items()]
    text = "&".join(f"{p.name}={p.value}" for p in params)
    return PostData(mime_type=mime_type, params=params, text=text)


def _multipart_payload(mime_type: str, sample_value: Any) -> PostData | None:
    if not isinstance(sample_value, dict):
        return None
    params = []
    for key, value in sample_value.items():
        if not isinstance(value, str):
            value = json.dumps(value, separators=(",", ":"))
        params.append(NameValue(name=str(key), value=value))
    return PostData(mime_type=mime_type, params=params)


SHAPERS = {
    "application/json": _json_payload,
    "application/x-www-form-urlencoded": _urlencoded_payload,
    "multipart/form-data": _multipart_payload,
}


def build_payload(body: BodySpec, sample_value: Any) -> PostData | None:
    """Shape a sampled value into postData for the body's content type."""
    shaper = SHAPERS.get(body.mime_type, _json_payload)
    return shaper(body.mime_type, sample_value)


def payloads(
    source: DocumentSource,
    path: str,
    method: str,
    sampler: Sampler = sample,
    options: dict | None = None,
) -> list[PostData]:
    """Sample every request body the operation declares.

    A sampler failure drops that content type only.
    """
    options = DEFAULT_SAMPLE_OPTIONS if options is None else options
    results = []
    for body in source.request_bodies(path, method):
        try:
            sample_value = sampler(body.schema_, dict(options), source.document)
        except Exception:
            logger.warning(
                "Could not sample %s body for %s %s", body.mime_type, method.upper(), path, exc_info=True
            )
            continue
        payload = build_payload(body, sample_value)
        if payload is not None:
            results.append(payload)
    return results
