"""Generation orchestrator: cache lookup, mirror dispatch and persistence."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..cache import ImageCache
from ..errors import AdapterError, InvalidPromptError, PersistenceError
from ..mirrors.mirrors_router import MirrorRouter
from ..storage.storage_base import UserDataStore

logger = logging.getLogger(__name__)


def normalize_result(value: Any) -> list[str]:
    """Return ``value`` as a list of strings, or an empty list if it is not one."""
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        return []
    return list(value)


@dataclass(slots=True)
class ImageGenerationService:
    """Public entry point for generating images from a prompt.

    Mirror failures never reach the caller: they are logged and turned into
    an empty result. Only an empty prompt raises.
    """

    router: MirrorRouter
    store: UserDataStore
    execution_token: str
    storage_key: str = "imageUrls"
    coalesce_inflight: bool = True
    cache: ImageCache = field(default_factory=ImageCache)
    log: logging.Logger = field(default_factory=lambda: logger)

    _inflight: dict[str, asyncio.Task[list[str]]] = field(default_factory=dict, init=False, repr=False)
    _pending_writes: set[asyncio.Task[None]] = field(default_factory=set, init=False, repr=False)
    _write_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def request_images(self, prompt: str | None, mirror: object = 0) -> list[str]:
        """Return image URIs for ``prompt``, generating them on a cache miss."""
        if not prompt or not isinstance(prompt, str):
            raise InvalidPromptError("prompt required")

        cached = self.cache.get(prompt)
        if cached is not None:
            self.log.info("generation.cache.hit", extra={"prompt": prompt})
            return cached

        if not self.coalesce_inflight:
            return await self._generate(prompt, mirror)

        pending = self._inflight.get(prompt)
        if pending is None:
            pending = asyncio.create_task(self._generate(prompt, mirror))
            self._inflight[prompt] = pending
            pending.add_done_callback(lambda _task: self._inflight.pop(prompt, None))
        else:
            self.log.info("generation.inflight.joined", extra={"prompt": prompt})
        return list(await asyncio.shield(pending))

    async def load_snapshot(self) -> int:
        """Merge the persisted snapshot into the cache.

        Prompts already present in memory keep their value. Read and decode
        failures are logged and treated as an empty snapshot.
        """
        try:
            blob = await self.store.read_user_data(self.execution_token, self.storage_key)
            if blob is None:
                self.log.info("generation.snapshot.missing")
                return 0
            snapshot = ImageCache.decode_blob(blob)
        except PersistenceError as exc:
            self.log.warning("generation.snapshot.load_failed: %s", exc)
            return 0
        except Exception:
            # Stores outside this package are not bound to PersistenceError.
            self.log.exception("generation.snapshot.load_failed")
            return 0

        added = self.cache.merge(snapshot)
        self.log.info(
            "generation.snapshot.loaded",
            extra={"snapshot_size": len(snapshot), "added": added},
        )
        return added

    async def drain(self) -> None:
        """Wait for every scheduled persistence write to finish."""
        while self._pending_writes:
            await asyncio.gather(*tuple(self._pending_writes))

    async def _generate(self, prompt: str, mirror: object) -> list[str]:
        self.log.info(
            "generation.request.start",
            extra={"prompt": prompt, "requested_mirror": mirror},
        )
        try:
            raw = await self.router.route(mirror, prompt)
        except (AdapterError, httpx.HTTPError) as exc:
            self.log.error(
                "generation.request.failed: %s",
                exc,
                extra={"prompt": prompt, "requested_mirror": mirror},
            )
            raw = []

        images = normalize_result(raw)
        if images:
            self.cache.store(prompt, images)
        self.log.info(
            "generation.request.finished",
            extra={"prompt": prompt, "image_count": len(images)},
        )

        self._schedule_persist(prompt)
        return images

    def _schedule_persist(self, prompt: str) -> None:
        task = asyncio.create_task(self._persist(prompt))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _persist(self, prompt: str) -> None:
        async with self._write_lock:
            # Serialize under the lock so the newest state is always written last.
            blob = self.cache.to_blob()
            try:
                await self.store.write_user_data(self.execution_token, self.storage_key, blob)
            except PersistenceError as exc:
                self.log.warning(
                    "generation.persist.failed: saving images for prompt %r failed: %s",
                    prompt,
                    exc,
                )
            except Exception:
                self.log.exception(
                    "generation.persist.failed: saving images for prompt %r failed",
                    prompt,
                )
