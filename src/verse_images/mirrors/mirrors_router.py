"""Select a mirror adapter by identifier."""

from __future__ import annotations

import logging
from typing import Mapping

from ..config import GeneratorConfig
from .mirrors_base import MirrorAdapter, MirrorId
from .mirrors_caption import CaptionMirror
from .mirrors_craiyon import CraiyonMirror
from .mirrors_svgio import SvgIoMirror

logger = logging.getLogger(__name__)


class MirrorRouter:
    """Total dispatch from any mirror id to an adapter.

    Ids without a registered adapter, and values that are neither integers
    nor integral floats (JSON clients may send ``1.0``), fall back to the
    default adapter.
    """

    def __init__(
        self,
        adapters: Mapping[int, MirrorAdapter],
        *,
        default_id: int = MirrorId.CAPTION,
    ) -> None:
        if default_id not in adapters:
            raise ValueError(f"default mirror {default_id} has no adapter")
        self._adapters = dict(adapters)
        self._default_id = int(default_id)

    def resolve(self, mirror_id: object) -> MirrorAdapter:
        if isinstance(mirror_id, float) and mirror_id.is_integer():
            mirror_id = int(mirror_id)
        if isinstance(mirror_id, bool) or not isinstance(mirror_id, int):
            return self._adapters[self._default_id]
        return self._adapters.get(int(mirror_id), self._adapters[self._default_id])

    async def route(self, mirror_id: object, prompt: str) -> list[str]:
        adapter = self.resolve(mirror_id)
        logger.debug(
            "mirror.route",
            extra={"requested_mirror": mirror_id, "mirror": adapter.name},
        )
        return await adapter.generate(prompt)


def create_router(config: GeneratorConfig) -> MirrorRouter:
    """Build the router over the three public mirrors."""
    timeout = config.request_timeout_seconds
    return MirrorRouter(
        {
            MirrorId.CAPTION: CaptionMirror(endpoint=config.caption_endpoint, timeout_seconds=timeout),
            MirrorId.CRAIYON: CraiyonMirror(
                endpoint=config.craiyon_endpoint,
                image_base=config.craiyon_image_base,
                version=config.craiyon_version,
                model=config.craiyon_model,
                timeout_seconds=timeout,
            ),
            MirrorId.SVGIO: SvgIoMirror(
                endpoint=config.svgio_endpoint,
                fan_out=config.svgio_fan_out,
                timeout_seconds=timeout,
            ),
        }
    )
