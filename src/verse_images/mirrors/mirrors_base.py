"""Abstract mirror adapter and shared HTTP helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, ClassVar, Mapping

import httpx

from ..errors import AdapterNetworkError

REQUEST_HEADERS: Mapping[str, str] = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Content-Type": "application/json",
}


class MirrorId(IntEnum):
    """Identifiers callers use to pick a mirror."""

    CAPTION = 0
    CRAIYON = 1
    SVGIO = 2


class MirrorAdapter(ABC):
    """Translate a prompt into one mirror's API and back into image URIs."""

    mirror_id: ClassVar[MirrorId]
    name: ClassVar[str]

    @abstractmethod
    async def generate(self, prompt: str) -> list[str]:
        """Return image URIs for ``prompt`` or raise :class:`AdapterError`."""


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    body: Mapping[str, Any],
    *,
    mirror: str,
) -> str:
    """POST ``body`` as JSON and return the raw response text."""
    try:
        response = await client.post(url, headers=dict(REQUEST_HEADERS), json=dict(body))
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        # Request building (URL parsing, JSON body encoding) fails before any I/O.
        raise AdapterNetworkError(mirror, exc) from exc
    if not 200 <= response.status_code < 300:
        raise AdapterNetworkError(mirror, f"unexpected status {response.status_code}")
    return response.text
