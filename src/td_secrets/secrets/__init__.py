"""
Secret lookup for the secrets operator.

Provides namespace-scoped secret stores backed by an in-memory mapping or
by environment variables.
"""

from .interface import SecretProvider, SecretStore
from .stores import MappingSecretStore, EnvSecretStore, secret_env_var_name

# Namespace the operator reads its own settings (e.g. 'endpoint') from
TD_NAMESPACE = 'td'

__all__ = [
    'SecretProvider',
    'SecretStore',
    'MappingSecretStore',
    'EnvSecretStore',
    'secret_env_var_name',
    'TD_NAMESPACE'
]
