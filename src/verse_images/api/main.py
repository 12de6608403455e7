"""FastAPI application entry point."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..config import GeneratorConfig, load_config
from ..extension import activate, deactivate
from ..host import CommandBus, ExecutionContext
from ..logging import configure_logging
from ..mirrors.mirrors_router import MirrorRouter
from ..storage.storage_base import UserDataStore
from ..storage.storage_sql import SqlUserDataStore
from .commands_api import router as commands_router


def create_app(
    config: GeneratorConfig | None = None,
    *,
    store: UserDataStore | None = None,
    mirror_router: MirrorRouter | None = None,
) -> FastAPI:
    """Build the FastAPI instance; the extension is activated on startup."""
    configure_logging()
    cfg = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        user_data = store
        if user_data is None:
            sql_store = SqlUserDataStore.from_url(cfg.database_url)
            sql_store.init()
            user_data = sql_store
        bus = CommandBus()
        context = ExecutionContext(execution_token=cfg.execution_token)
        service = await activate(context, bus, user_data, cfg, router=mirror_router)
        app.state.command_bus = bus
        app.state.generation_service = service
        try:
            yield
        finally:
            await deactivate(context, service)

    app = FastAPI(title="Verse Image Generator", lifespan=lifespan)
    app.include_router(commands_router)
    return app


app = create_app()
