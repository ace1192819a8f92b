"""Engine settings and logging setup."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class EngineSettings:
    """Tunable constants shared by the mutation, template and validation code.

    Layout values are in canvas units and carry no chemical meaning.
    """

    bond_length: float = 50.0
    substituent_bond_length: float = 40.0
    nitro_oxygen_offset: float = 20.0
    chain_length_limits: Tuple[int, int] = (1, 20)
    ring_size_limits: Tuple[int, int] = (3, 8)
    large_ring_threshold: int = 8
    canvas_center: Tuple[float, float] = (400.0, 300.0)
    ring_radius: float = 80.0


DEFAULT_SETTINGS = EngineSettings()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    verbose: bool = True,
) -> logging.Logger:
    """Configure the ``carbonkit`` logger.

    Args:
        level: Logging level for the package logger
        log_file: Optional path of a log file to write alongside the console
        verbose: Whether to attach a console handler

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("carbonkit")

    # Clear existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.setLevel(level)
    return logger
