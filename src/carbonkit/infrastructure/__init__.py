"""Infrastructure implementations of core interfaces."""

from .repositories.template_repository import MoleculeTemplate, TemplateRepository
from .templates import TEMPLATE_CATALOG, TemplateParams, TemplateType, create_template

__all__ = [
    "MoleculeTemplate",
    "TemplateRepository",
    "TEMPLATE_CATALOG",
    "TemplateParams",
    "TemplateType",
    "create_template",
]
