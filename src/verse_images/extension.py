"""Activation and deactivation of the verse image generator."""

from __future__ import annotations

import logging

from .config import GeneratorConfig
from .host import CommandBus, ExecutionContext
from .mirrors.mirrors_router import MirrorRouter, create_router
from .services.generation_service import ImageGenerationService
from .storage.storage_base import UserDataStore

GENERATE_IMAGES_COMMAND = "verseImageGenerator.generateImages"

logger = logging.getLogger(__name__)


async def activate(
    context: ExecutionContext,
    bus: CommandBus,
    store: UserDataStore,
    config: GeneratorConfig,
    *,
    router: MirrorRouter | None = None,
) -> ImageGenerationService:
    """Restore the cache and expose the generate command on ``bus``.

    The snapshot is merged before the command is registered, so the first
    invocation already sees every persisted prompt.
    """
    logger.info("extension.activating", extra={"token": context.execution_token})

    service = ImageGenerationService(
        router=router or create_router(config),
        store=store,
        execution_token=context.execution_token,
        storage_key=config.storage_key,
        coalesce_inflight=config.coalesce_inflight_requests,
    )
    await service.load_snapshot()

    async def generate_images(prompt: str | None = None, mirror: object = 0) -> list[str]:
        return await service.request_images(prompt, 0 if mirror is None else mirror)

    context.add(bus.register(GENERATE_IMAGES_COMMAND, generate_images))
    return service


async def deactivate(context: ExecutionContext, service: ImageGenerationService | None = None) -> bool:
    """Unregister commands and flush pending cache writes."""
    logger.info("extension.deactivating", extra={"token": context.execution_token})
    context.dispose()
    if service is not None:
        await service.drain()
    return True
