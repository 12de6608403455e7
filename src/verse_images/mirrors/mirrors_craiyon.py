"""Craiyon mirror (id 1)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar

import httpx

from ..errors import ResponseParseFailedError
from .mirrors_base import MirrorAdapter, MirrorId, post_json
from .mirrors_schemas import CraiyonResponse, decode_response

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CraiyonMirror(MirrorAdapter):
    """Call the Craiyon v3 API and expand image paths into full URLs."""

    mirror_id: ClassVar[MirrorId] = MirrorId.CRAIYON
    name: ClassVar[str] = "craiyon"

    endpoint: str = "https://api.craiyon.com/v3"
    image_base: str = "https://img.craiyon.com/"
    version: str = "c4ue22fb7kb6wlac"
    model: str = "art"
    timeout_seconds: float | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    async def generate(self, prompt: str) -> list[str]:
        self.log.info("mirror.request.start", extra={"mirror": self.name})
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            raw = await post_json(client, self.endpoint, self.build_payload(prompt), mirror=self.name)
        try:
            response = decode_response(CraiyonResponse, raw, mirror=self.name)
        except ResponseParseFailedError:
            self.log.error("mirror.response.parse_failed", extra={"mirror": self.name})
            raise
        return [f"{self.image_base}{image}" for image in response.images]

    def build_payload(self, prompt: str) -> dict[str, object]:
        return {
            "prompt": prompt,
            "version": self.version,
            "token": None,
            "model": self.model,
            "negative_prompt": "",
        }
