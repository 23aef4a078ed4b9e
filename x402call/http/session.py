"""Shared request plumbing for the negotiation and authentication engines."""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

import httpx

from ..schemas import InvalidRequestError
from .constants import DEFAULT_HTTP_TIMEOUT


@asynccontextmanager
async def open_session(
    http: httpx.AsyncClient | None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client untouched, or a fresh one closed on exit."""
    if http is not None:
        yield http
        return
    async with httpx.AsyncClient(timeout=timeout) as client:
        yield client


def initial_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Caller headers over a JSON content type."""
    return {"Content-Type": "application/json", **(headers or {})}


async def send(
    http: httpx.AsyncClient,
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: Any = None,
) -> httpx.Response:
    """Issue one request, JSON-encoding the body when there is one.

    Raises:
        InvalidRequestError: If the URL is invalid or the body cannot be
            encoded as JSON.
        httpx.HTTPError: On transport failure.
    """
    try:
        request = http.build_request(method, url, headers=dict(headers), json=body)
    except httpx.InvalidURL as e:
        raise InvalidRequestError(f"Invalid URL: {e}") from e
    except (TypeError, ValueError) as e:
        raise InvalidRequestError(f"Request body is not JSON-serializable: {e}") from e
    return await http.send(request)


def read_body(response: httpx.Response) -> Any:
    """Response payload as JSON if it parses, else raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def read_json(response: httpx.Response) -> Any:
    """Response payload as JSON, or None when absent or unparsable."""
    try:
        return response.json()
    except ValueError:
        return None
