# Core package initialization
# Configuration, logging setup and application exceptions

from . import config, exceptions, logging_config

__all__ = [
    "config",
    "exceptions",
    "logging_config",
]
