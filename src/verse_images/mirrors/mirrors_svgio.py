"""svg.io mirror (id 2): fans one prompt out into several requests.

The host serves a certificate that does not validate, so this adapter uses
its own client with verification disabled. Only that client is affected;
every other mirror keeps verifying certificates.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import ClassVar

import httpx

from ..errors import ResponseParseFailedError
from .mirrors_base import MirrorAdapter, MirrorId, post_json
from .mirrors_schemas import SvgIoResponse, decode_response

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"\r?\n")
_DISALLOWED = re.compile(r"[^\w ]", re.ASCII)


def sanitize_prompt(prompt: str) -> str:
    """Reduce ``prompt`` to ASCII word characters and spaces.

    Line breaks become spaces so words on adjacent lines stay separated;
    every other character outside ``[A-Za-z0-9_ ]`` is dropped.
    """
    return _DISALLOWED.sub("", _LINE_BREAKS.sub(" ", prompt))


@dataclass(slots=True)
class SvgIoMirror(MirrorAdapter):
    """Issue ``fan_out`` concurrent requests and concatenate their images."""

    mirror_id: ClassVar[MirrorId] = MirrorId.SVGIO
    name: ClassVar[str] = "svgio"

    endpoint: str = "https://api.svg.io:10003/api/createimg/ai"
    fan_out: int = 3
    timeout_seconds: float | None = None
    verify_tls: bool = False
    log: logging.Logger = field(default_factory=lambda: logger)

    async def generate(self, prompt: str) -> list[str]:
        body = {"prompt": sanitize_prompt(prompt)}
        self.log.info(
            "mirror.request.start",
            extra={"mirror": self.name, "fan_out": self.fan_out},
        )
        async with httpx.AsyncClient(verify=self.verify_tls, timeout=self.timeout_seconds) as client:
            outcomes = await asyncio.gather(
                *(post_json(client, self.endpoint, body, mirror=self.name) for _ in range(self.fan_out)),
                return_exceptions=True,
            )
        # All requests have settled here; surface the first failure, if any.
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        images: list[str] = []
        for raw in outcomes:
            try:
                response = decode_response(SvgIoResponse, raw, mirror=self.name)
            except ResponseParseFailedError:
                self.log.error("mirror.response.parse_failed", extra={"mirror": self.name})
                raise
            images.extend(f"data:image/png;base64,{image}" for image in response.images)
        return images
