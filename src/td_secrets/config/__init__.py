"""
Configuration management for the secrets operator.

Task parameters, system configuration, logging bootstrap and the
configuration exceptions shared across the package.
"""

from .exceptions import (
    ConfigException, InvalidConfigFileError, InvalidEndpointError, InvalidParameterError, RemoteCallError
)
from .params import TaskParams
from .system import SystemConfig, DEFAULT_ENDPOINT_KEY
from .logging import bootstrap_logging

__all__ = [
    'ConfigException',
    'InvalidConfigFileError',
    'InvalidEndpointError',
    'InvalidParameterError',
    'RemoteCallError',
    'TaskParams',
    'SystemConfig',
    'DEFAULT_ENDPOINT_KEY',
    'bootstrap_logging'
]
