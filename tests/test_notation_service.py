import logging

import pytest
from conftest import chain

from carbonkit.core.domain.interfaces.notation_generator import NotationGenerator
from carbonkit.core.domain.models.molecule_graph import MoleculeGraph
from carbonkit.core.services.notation_service import (
    DEFAULT_FORMULA_SMILES,
    NotationService,
    compute_iupac_name,
    generate_smiles,
    get_smiles_by_formula,
    is_valid_smiles,
)
from carbonkit.exceptions import MoleculeGraphError


class FailingGenerator(NotationGenerator):
    def generate(self, graph):
        raise MoleculeGraphError("traversal broke")


class EmptyGenerator(NotationGenerator):
    def generate(self, graph):
        return ""


class FixedNameGenerator(NotationGenerator):
    def generate(self, graph):
        return "fixed"


def test_formula_lookup():
    assert get_smiles_by_formula("CH₄") == "C"
    assert get_smiles_by_formula("C2H5OH") == "CCO"
    assert get_smiles_by_formula("C₂H₆O") == "CCO"
    assert get_smiles_by_formula("C6H6") == "c1ccccc1"
    assert get_smiles_by_formula("C99") == DEFAULT_FORMULA_SMILES


@pytest.mark.parametrize("smiles", ["C", "CCO", "c1ccccc1", "CC(=O)O", "C1CCCCC=1"])
def test_valid_smiles(smiles):
    assert is_valid_smiles(smiles)


@pytest.mark.parametrize("smiles", ["", "   ", "C(", "C1CC"])
def test_invalid_smiles(smiles):
    assert not is_valid_smiles(smiles)


def test_module_level_helpers(ethanol):
    assert compute_iupac_name(ethanol) == "ethanol"
    assert generate_smiles(ethanol) == "CCO"


def test_smiles_for_uses_traversal(acetic_acid):
    assert NotationService().smiles_for(acetic_acid) == "CC(=O)O"


def test_smiles_for_empty_graph():
    assert NotationService().smiles_for(MoleculeGraph.empty()) == ""


def test_smiles_for_falls_back_to_formula_table(ethanol, caplog):
    service = NotationService(smiles_generator=FailingGenerator())
    with caplog.at_level(logging.WARNING, logger="carbonkit.core.services.notation_service"):
        assert service.smiles_for(ethanol) == "CCO"
    assert "SMILES traversal failed: traversal broke" in caplog.text


def test_smiles_for_falls_back_on_empty_result():
    service = NotationService(smiles_generator=EmptyGenerator())
    assert service.smiles_for(chain(3)) == "CCC"
    assert service.smiles_for(chain(7)) == DEFAULT_FORMULA_SMILES


def test_injected_name_generator(ethanol):
    service = NotationService(name_generator=FixedNameGenerator())
    assert service.iupac_name(ethanol) == "fixed"


def test_generated_smiles_parse(benzene, isobutane, acetic_acid):
    service = NotationService()
    for graph in (benzene, isobutane, acetic_acid):
        assert is_valid_smiles(service.smiles_for(graph))
