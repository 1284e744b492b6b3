"""Configuration classes for DWGraph components."""

import logging
from dataclasses import dataclass
from typing import Tuple


@dataclass
class PersistenceConfig:
    """Settings for reading and writing persisted graph documents."""

    # Indentation used by the pretty JSON/YAML encoders
    indent: int = 4

    # Text encoding for graph files
    encoding: str = "utf-8"

    # File suffixes that select the YAML encoding; anything else is JSON
    yaml_suffixes: Tuple[str, ...] = (".yaml", ".yml")

    # Document layout version written by ``dumps`` and accepted by ``loads``
    format_version: int = 1

    def format_for_suffix(self, suffix: str) -> str:
        """Return ``"yaml"`` or ``"json"`` for a file suffix."""
        return "yaml" if suffix.lower() in self.yaml_suffixes else "json"


@dataclass
class LoggingConfig:
    """Defaults for the package log handler."""

    level: int = logging.INFO
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Global configuration instances
PERSISTENCE_CONFIG = PersistenceConfig()
LOGGING_CONFIG = LoggingConfig()
