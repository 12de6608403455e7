"""Mirror adapters: one per third-party image-generation service."""

from .mirrors_base import MirrorAdapter, MirrorId
from .mirrors_caption import CaptionMirror
from .mirrors_craiyon import CraiyonMirror
from .mirrors_router import MirrorRouter, create_router
from .mirrors_svgio import SvgIoMirror, sanitize_prompt

__all__ = [
    "CaptionMirror",
    "CraiyonMirror",
    "MirrorAdapter",
    "MirrorId",
    "MirrorRouter",
    "SvgIoMirror",
    "create_router",
    "sanitize_prompt",
]
