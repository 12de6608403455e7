"""User-data store backed by a SQL database."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..errors import handle_storage_errors
from .storage_base import UserDataStore
from .storage_models import Base, UserDataModel

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlUserDataStore(UserDataStore):
    """Store blobs in the ``user_data`` table, one row per (token, key).

    Sessions are synchronous; each call runs in a worker thread so the
    event loop is never blocked on the database.
    """

    def __init__(self, engine: Engine, session_factory: Callable[[], Session] | None = None) -> None:
        self._engine = engine
        self._session_factory = session_factory or sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlUserDataStore":
        engine = create_engine(database_url, future=True)
        return cls(engine)

    def init(self) -> None:
        """Create the schema if it does not exist."""
        with handle_storage_errors(operation="write"):
            Base.metadata.create_all(self._engine)

    async def read_user_data(self, token: str, key: str) -> str | None:
        return await asyncio.to_thread(self._read, token, key)

    async def write_user_data(self, token: str, key: str, blob: str) -> None:
        await asyncio.to_thread(self._write, token, key, blob)

    def _read(self, token: str, key: str) -> str | None:
        with handle_storage_errors(operation="read"):
            with self._session_factory() as session:
                record = session.get(UserDataModel, (token, key))
                return None if record is None else record.blob

    def _write(self, token: str, key: str, blob: str) -> None:
        with handle_storage_errors(operation="write"):
            with self._session_factory() as session:
                record = session.get(UserDataModel, (token, key))
                if record is None:
                    session.add(UserDataModel(token=token, key=key, blob=blob, updated_at=_utcnow()))
                else:
                    record.blob = blob
                    record.updated_at = _utcnow()
                session.commit()
        logger.debug("storage.user_data.written", extra={"token": token, "key": key, "size": len(blob)})
