# src/carbonkit/infrastructure/repositories/template_repository.py
"""Repository of named starting molecules."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ...config import DEFAULT_SETTINGS, EngineSettings
from ...core.domain.models.molecule_graph import MoleculeGraph, recompute_derived
from ...core.interfaces.repository import GraphRepository
from ...exceptions import TemplateNotFoundError
from ..templates import TEMPLATE_CATALOG, TemplateParams, TemplateType, create_template


@dataclass(frozen=True)
class MoleculeTemplate:
    """A named molecule graph that new editing sessions can start from."""

    name: str
    graph: MoleculeGraph
    description: str = ""
    template_type: Optional[TemplateType] = None
    params: TemplateParams = field(default_factory=TemplateParams)

    @property
    def is_builtin(self) -> bool:
        return self.template_type is not None


class TemplateRepository(GraphRepository[MoleculeTemplate, TemplateParams]):
    """
    Built-in catalog templates plus custom templates saved at runtime.

    Built-ins are keyed by their ``TemplateType`` value (e.g. ``"alkane-chain"``)
    and rebuilt on every ``get`` so callers never share atom ids. Custom
    templates are kept in memory under their name.
    """

    not_found = TemplateNotFoundError

    def __init__(
        self,
        settings: EngineSettings = DEFAULT_SETTINGS,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = settings
        self._custom: Dict[str, MoleculeTemplate] = {}
        self.logger = logger or logging.getLogger(__name__)
        self._builtin = {meta.template_type.value: meta for meta in TEMPLATE_CATALOG}

    def get(self, id: str) -> Optional[MoleculeTemplate]:
        if id in self._custom:
            return self._custom[id]
        meta = self._builtin.get(id)
        if meta is None:
            return None
        return MoleculeTemplate(
            name=meta.name,
            graph=create_template(meta.template_type, meta.default_params, self._settings),
            description=meta.description,
            template_type=meta.template_type,
            params=meta.default_params,
        )

    def build(self, id: str, params: Optional[TemplateParams] = None) -> MoleculeGraph:
        """
        Build a graph from a template with optional size parameters.

        Args:
            id: Built-in template type value or custom template name
            params: Sizes for built-ins; ignored for custom templates

        Returns:
            New molecule graph

        Raises:
            TemplateNotFoundError: If no template is stored under ``id``
        """
        template = self.require(id)
        if not template.is_builtin:
            return template.graph
        return create_template(
            template.template_type, params or template.params, self._settings
        )

    def list(self) -> List[MoleculeTemplate]:
        templates = [self.get(key) for key in self._builtin]
        return templates + list(self._custom.values())

    def create(self, entity: MoleculeTemplate) -> MoleculeTemplate:
        """Save a custom template.

        Raises:
            ValueError: If the name is already taken
        """
        if self.exists(entity.name):
            raise ValueError(f"Template {entity.name} already exists")
        stored = self._normalized(entity)
        self._custom[entity.name] = stored
        self.logger.info(f"Saved template {entity.name} ({len(entity.graph)} atoms)")
        return stored

    def update(self, entity: MoleculeTemplate) -> MoleculeTemplate:
        """Replace a custom template.

        Raises:
            TemplateNotFoundError: If no template has this name
            ValueError: If the name belongs to a built-in
        """
        if self.require(entity.name).is_builtin:
            raise ValueError(f"Built-in template {entity.name} cannot be updated")
        stored = self._normalized(entity)
        self._custom[entity.name] = stored
        return stored

    def delete(self, id: str) -> None:
        if id in self._builtin:
            raise ValueError(f"Built-in template {id} cannot be deleted")
        if self._custom.pop(id, None) is None:
            raise TemplateNotFoundError(id)
        self.logger.info(f"Deleted template {id}")

    @staticmethod
    def _normalized(entity: MoleculeTemplate) -> MoleculeTemplate:
        # Custom templates are stored as plain graphs, never as built-ins
        return MoleculeTemplate(
            name=entity.name,
            graph=recompute_derived(entity.graph),
            description=entity.description,
        )
