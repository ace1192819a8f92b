"""Domain interfaces."""

from .notation_generator import NotationGenerator

__all__ = ["NotationGenerator"]
