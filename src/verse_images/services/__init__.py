"""Domain services."""

from .generation_service import ImageGenerationService

__all__ = ["ImageGenerationService"]
