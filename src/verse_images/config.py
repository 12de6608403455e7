"""Runtime configuration.

Endpoints and protocol constants default to the values the public mirrors
expect; every field can be overridden with a ``VERSE_IMAGES_`` prefixed
environment variable.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorConfig(BaseSettings):
    """Pydantic settings container for mirrors, cache and storage."""

    model_config = SettingsConfigDict(env_prefix="VERSE_IMAGES_")

    caption_endpoint: str = Field(
        default="https://chat-gpt.pictures/api/generateImage",
        description="Endpoint of the default mirror (id 0).",
    )
    craiyon_endpoint: str = Field(
        default="https://api.craiyon.com/v3",
        description="Endpoint of the Craiyon mirror (id 1).",
    )
    craiyon_image_base: str = Field(
        default="https://img.craiyon.com/",
        description="Prefix turning Craiyon image identifiers into URLs.",
    )
    craiyon_version: str = Field(default="c4ue22fb7kb6wlac")
    craiyon_model: str = Field(default="art")
    svgio_endpoint: str = Field(
        default="https://api.svg.io:10003/api/createimg/ai",
        description="Endpoint of the fan-out mirror (id 2).",
    )
    svgio_fan_out: int = Field(
        default=3,
        ge=1,
        description="Number of concurrent requests issued by the fan-out mirror.",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout for mirror calls; None waits forever.",
    )
    coalesce_inflight_requests: bool = Field(
        default=True,
        description="Share one outstanding generation between concurrent callers of a prompt.",
    )
    storage_key: str = Field(default="imageUrls", min_length=1)
    execution_token: str = Field(default="verse-image-generator", min_length=1)
    database_url: str = Field(
        default="sqlite:///verse_images.db",
        description="SQLAlchemy URL of the user-data store.",
    )


def load_config(**overrides: object) -> GeneratorConfig:
    """Load configuration from the environment, applying explicit overrides."""
    return GeneratorConfig(**overrides)  # type: ignore[arg-type]


__all__ = ["GeneratorConfig", "load_config"]
