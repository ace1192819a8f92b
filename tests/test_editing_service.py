import logging

import pytest
from conftest import chain

from carbonkit.core.domain.models.molecule_graph import MoleculeGraph
from carbonkit.core.domain.models.substituent import SubstituentKind
from carbonkit.core.services import mutations
from carbonkit.core.services.editing_service import MoleculeEditingService


@pytest.fixture
def session(methane):
    return MoleculeEditingService(methane)


def test_starts_empty_by_default():
    service = MoleculeEditingService()
    assert service.current == MoleculeGraph.empty()
    assert not service.can_undo


def test_apply_and_undo(session):
    result = session.apply(mutations.extend_chain, "a0")
    assert result.success
    assert len(session.current) == 2
    assert session.can_undo

    assert session.undo()
    assert len(session.current) == 1
    assert not session.undo()


def test_failed_mutation_keeps_graph(session, caplog):
    before = session.current
    with caplog.at_level(logging.INFO, logger="carbonkit.core.services.editing_service"):
        result = session.apply(mutations.shorten_chain, "missing")
    assert not result.success
    assert session.current is before
    assert not session.can_undo
    assert "shorten_chain failed: Atom missing not found" in caplog.text


def test_keyword_arguments_are_forwarded(session):
    result = session.apply(
        mutations.attach_substituent, "a0", SubstituentKind.HALOGEN, halogen="F"
    )
    assert result.success
    assert session.properties().molecular_formula == "CH₃F"


def test_reset_returns_to_snapshot(session):
    session.apply(mutations.extend_chain, "a0")
    session.save_snapshot()
    session.apply(mutations.extend_chain, session.current.atoms[-1].atom_id)
    assert len(session.current) == 3

    session.reset()
    assert len(session.current) == 2
    assert not session.can_undo


def test_load_replaces_session(session):
    session.apply(mutations.extend_chain, "a0")
    session.load(chain(4))
    assert session.iupac_name() == "butane"
    assert not session.can_undo
    session.apply(mutations.extend_chain, "a0")
    session.reset()
    assert session.smiles() == "CCCC"


def test_history_limit():
    service = MoleculeEditingService(chain(1), history_limit=2)
    for _ in range(4):
        service.apply(mutations.extend_chain, service.current.atoms[-1].atom_id)
    assert service.undo()
    assert service.undo()
    assert not service.undo()
    assert len(service.current) == 3


def test_queries(session):
    session.apply(mutations.attach_substituent, "a0", SubstituentKind.HYDROXYL)
    assert session.iupac_name() == "methanol"
    assert session.smiles() == "CO"
    assert session.validate().is_valid
