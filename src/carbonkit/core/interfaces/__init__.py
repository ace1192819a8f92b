"""Storage interfaces."""

from .repository import GraphRepository, Repository

__all__ = ["GraphRepository", "Repository"]
