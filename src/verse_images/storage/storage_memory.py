"""Process-local user-data store."""

from __future__ import annotations

from dataclasses import dataclass, field

from .storage_base import UserDataStore


@dataclass(slots=True)
class InMemoryUserDataStore(UserDataStore):
    """Dictionary backed store; contents vanish with the process."""

    data: dict[tuple[str, str], str] = field(default_factory=dict)

    async def read_user_data(self, token: str, key: str) -> str | None:
        return self.data.get((token, key))

    async def write_user_data(self, token: str, key: str, blob: str) -> None:
        self.data[(token, key)] = blob
