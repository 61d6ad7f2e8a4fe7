"""Utility modules for configuration, logging, and error handling."""

from .config import Config
from .errors import (
    ConfigurationError,
    MappingError,
    PayloadError,
    RoboticsError,
    RoboticsValidationError,
    TransportError,
)

__all__ = [
    'Config',
    'ConfigurationError',
    'MappingError',
    'PayloadError',
    'RoboticsError',
    'RoboticsValidationError',
    'TransportError'
]
