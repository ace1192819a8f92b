"""Repository implementations."""

from .template_repository import MoleculeTemplate, TemplateRepository

__all__ = ["MoleculeTemplate", "TemplateRepository"]
