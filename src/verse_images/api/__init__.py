"""HTTP surface exposing the host command bus."""

from .commands_api import router

__all__ = ["router"]
