"""Verse image generator.

Turns a short text prompt into generated images through one of several
third-party mirrors and keeps a per-prompt cache that survives restarts.
The host (command bus and user-data storage) is injected, so everything
here runs without it.
"""

from .cache import ImageCache
from .errors import InvalidPromptError, VerseImagesError
from .extension import GENERATE_IMAGES_COMMAND, activate, deactivate
from .services.generation_service import ImageGenerationService

__all__ = [
    "GENERATE_IMAGES_COMMAND",
    "ImageCache",
    "ImageGenerationService",
    "InvalidPromptError",
    "VerseImagesError",
    "activate",
    "deactivate",
]
