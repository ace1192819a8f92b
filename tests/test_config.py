import dataclasses
import logging

import pytest

from carbonkit.config import DEFAULT_SETTINGS, LOG_FORMAT, EngineSettings, configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("carbonkit")
    saved = (logger.handlers[:], logger.level)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])


def test_default_settings():
    assert DEFAULT_SETTINGS.bond_length == 50.0
    assert DEFAULT_SETTINGS.substituent_bond_length == 40.0
    assert DEFAULT_SETTINGS.nitro_oxygen_offset == 20.0
    assert DEFAULT_SETTINGS.chain_length_limits == (1, 20)
    assert DEFAULT_SETTINGS.ring_size_limits == (3, 8)
    assert DEFAULT_SETTINGS.large_ring_threshold == 8


def test_settings_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_SETTINGS.bond_length = 1.0
    assert EngineSettings(ring_radius=10.0).ring_radius == 10.0


def test_configure_logging_console(package_logger):
    logger = configure_logging(level=logging.DEBUG)
    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_configure_logging_file(package_logger, tmp_path):
    log_file = tmp_path / "logs" / "carbonkit.log"
    logger = configure_logging(log_file=log_file, verbose=False)
    logger.info("hello from the test")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text()
    assert len(logger.handlers) == 1


def test_configure_logging_replaces_handlers(package_logger):
    configure_logging()
    configure_logging()
    assert len(package_logger.handlers) == 1
