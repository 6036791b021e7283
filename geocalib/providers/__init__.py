"""Collaborator implementations for geocalib."""

from .static import StaticMapProvider, StaticRenderHost

__all__ = [
    "StaticMapProvider",
    "StaticRenderHost"
]
