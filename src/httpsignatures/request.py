"""
Request adapters

The verifier only needs three things from a request: its method, its path with
query string and case-insensitive header lookup. This module turns the request
objects callers commonly hold into a VerifiableRequest.
"""

from typing import Any, Mapping

import requests

from .types import VerifiableRequest, request_target_path
from .exceptions import InvalidRequestError


def from_prepared_request(request: requests.PreparedRequest) -> VerifiableRequest:
    """Build a VerifiableRequest from a requests.PreparedRequest"""
    return VerifiableRequest.from_url(request.method or "", request.url or "/", dict(request.headers))


def from_mapping(data: Mapping[str, Any]) -> VerifiableRequest:
    """
    Build a VerifiableRequest from a mapping.

    The mapping needs ``method``, ``headers`` and either ``path`` or ``url``.
    """
    target = data.get("path") or data.get("url")
    if not data.get("method") or not target:
        raise InvalidRequestError(
            "Request mapping needs 'method' and 'path' or 'url'",
            {"keys": sorted(data.keys())}
        )
    return VerifiableRequest.from_url(data["method"], target, dict(data.get("headers") or {}))


def _path_with_query(obj: Any) -> str:
    path = getattr(obj, "path", None)
    if path is None:
        return request_target_path(str(getattr(obj, "url")))

    query = getattr(obj, "query_string", None)
    if query is None:
        query = getattr(obj, "query", None)
    if isinstance(query, bytes):
        query = query.decode("latin-1")
    if query and isinstance(query, str) and "?" not in path:
        return f"{path}?{query}"
    return path


def as_verifiable_request(request: Any) -> VerifiableRequest:
    """
    Adapt a request object for verification.

    Args:
        request: A VerifiableRequest, requests.PreparedRequest, requests.Request,
            a mapping, or any object exposing ``method``, ``headers`` and
            ``path`` or ``url``

    Returns:
        VerifiableRequest: Adapted request

    Raises:
        InvalidRequestError: If the object cannot be read as a request
    """
    if isinstance(request, VerifiableRequest):
        return request

    try:
        if isinstance(request, requests.Request):
            request = request.prepare()

        if isinstance(request, requests.PreparedRequest):
            return from_prepared_request(request)

        if isinstance(request, Mapping):
            return from_mapping(request)

        if hasattr(request, "method") and hasattr(request, "headers") and (
                hasattr(request, "path") or hasattr(request, "url")):
            return VerifiableRequest(
                method=str(request.method),
                path=_path_with_query(request),
                headers=dict(request.headers.items()),
            )
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidRequestError(
            f"Cannot read request: {e}",
            {"request_type": type(request).__name__, "original_error": str(e)}
        )

    raise InvalidRequestError(
        "Unsupported request object",
        {"request_type": type(request).__name__}
    )
