from __future__ import annotations

"""Logging helpers for shoeboxrir.

Library modules only obtain loggers through :func:`get_logger`; handlers are
attached by applications via :func:`setup_logging`. Simulation workers run on
named threads, so the default format includes the thread name.
"""

from dataclasses import dataclass, replace
import logging
from typing import Optional

ROOT_LOGGER_NAME = "shoeboxrir"


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for shoeboxrir logging.

    Example:
        >>> config = LoggingConfig(level="DEBUG")
        >>> logger = setup_logging(config)
    """

    level: str | int = "INFO"
    format: str = "%(levelname)s:%(name)s[%(threadName)s]:%(message)s"
    datefmt: Optional[str] = None
    propagate: bool = False

    def resolve_level(self) -> int:
        """Resolve level to a logging integer constant."""
        if isinstance(self.level, int):
            return self.level
        if not isinstance(self.level, str):
            raise TypeError("level must be str or int")
        level = logging.getLevelName(self.level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {self.level}")
        return level

    def replace(self, **kwargs) -> "LoggingConfig":
        """Return a new config with updated fields."""
        return replace(self, **kwargs)


def setup_logging(
    config: Optional[LoggingConfig] = None, *, name: str = ROOT_LOGGER_NAME
) -> logging.Logger:
    """Configure and return the base shoeboxrir logger.

    Calling it again only updates the level; the stream handler is attached once.

    Example:
        >>> logger = setup_logging(LoggingConfig(level="DEBUG"))
        >>> logger.debug("ready")
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(name)
    level = config.resolve_level()
    logger.setLevel(level)
    logger.propagate = config.propagate
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.format, datefmt=config.datefmt))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger namespaced under the shoeboxrir root.

    Example:
        >>> logger = get_logger("sim.ism")
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
