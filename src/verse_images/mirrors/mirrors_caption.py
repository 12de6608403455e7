"""Default mirror (id 0): single POST with a caption payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar

import httpx

from .mirrors_base import MirrorAdapter, MirrorId, post_json
from .mirrors_schemas import CaptionResponse, decode_response

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CaptionMirror(MirrorAdapter):
    """Call the caption-to-image endpoint used as the default mirror."""

    mirror_id: ClassVar[MirrorId] = MirrorId.CAPTION
    name: ClassVar[str] = "caption"

    endpoint: str = "https://chat-gpt.pictures/api/generateImage"
    timeout_seconds: float | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    async def generate(self, prompt: str) -> list[str]:
        self.log.info("mirror.request.start", extra={"mirror": self.name})
        body = {"captionInput": prompt, "captionModel": "default"}
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            raw = await post_json(client, self.endpoint, body, mirror=self.name)
        return decode_response(CaptionResponse, raw, mirror=self.name).imgs
