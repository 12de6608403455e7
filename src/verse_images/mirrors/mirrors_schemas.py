"""Expected response shapes of each mirror.

Decoding fails closed: anything that is not JSON of the expected shape
raises :class:`ResponseParseFailedError` instead of leaking half-parsed data.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import ResponseParseFailedError


class CaptionResponse(BaseModel):
    """``{"imgs": [...]}`` returned by the default mirror."""

    imgs: list[str]


class CraiyonResponse(BaseModel):
    """``{"images": [...]}`` of image paths relative to the Craiyon host."""

    images: list[str]


class SvgIoResponse(BaseModel):
    """``{"images": [...]}`` of base64 encoded PNG payloads."""

    images: list[str]


ResponseT = TypeVar("ResponseT", bound=BaseModel)


def decode_response(schema: type[ResponseT], raw: str, *, mirror: str) -> ResponseT:
    """Validate ``raw`` JSON against ``schema``."""
    try:
        return schema.model_validate_json(raw)
    except ValidationError as exc:
        raise ResponseParseFailedError(mirror, exc) from exc
