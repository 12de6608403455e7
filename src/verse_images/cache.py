"""Prompt-keyed cache of generated image URIs."""

from __future__ import annotations

import json
from typing import Iterator, Mapping

from pydantic import TypeAdapter, ValidationError

from .errors import SnapshotDecodeError

_SNAPSHOT_ADAPTER: TypeAdapter[dict[str, list[str] | None]] = TypeAdapter(
    dict[str, list[str] | None]
)


class ImageCache:
    """In-memory prompt -> image URI mapping.

    Keys are compared by exact string equality. Entries are never evicted;
    only the generation service writes to it.
    """

    def __init__(self, entries: Mapping[str, list[str]] | None = None) -> None:
        self._entries: dict[str, list[str]] = {}
        for prompt, uris in (entries or {}).items():
            self._entries[prompt] = list(uris)

    def __contains__(self, prompt: object) -> bool:
        return prompt in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, prompt: str) -> list[str] | None:
        """Return a copy of the cached URIs for ``prompt``."""
        uris = self._entries.get(prompt)
        return None if uris is None else list(uris)

    def store(self, prompt: str, uris: list[str]) -> None:
        self._entries[prompt] = list(uris)

    def merge(self, snapshot: Mapping[str, list[str]]) -> int:
        """Fill gaps from ``snapshot`` without overwriting present prompts.

        Empty results are skipped so those prompts are generated again.

        Returns the number of prompts added.
        """
        added = 0
        for prompt, uris in snapshot.items():
            if not uris or prompt in self._entries:
                continue
            self._entries[prompt] = list(uris)
            added += 1
        return added

    def to_blob(self) -> str:
        """Serialize every entry as a JSON object."""
        return json.dumps(self._entries, ensure_ascii=False)

    @staticmethod
    def decode_blob(blob: str | bytes) -> dict[str, list[str]]:
        """Parse a serialized snapshot, skipping null and empty entries."""
        try:
            raw = _SNAPSHOT_ADAPTER.validate_json(blob)
        except ValidationError as exc:
            raise SnapshotDecodeError(f"malformed image cache snapshot: {exc}") from exc
        return {prompt: uris for prompt, uris in raw.items() if uris}
