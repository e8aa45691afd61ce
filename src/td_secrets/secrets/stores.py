"""
Secret store implementations.

MappingSecretStore serves secrets from an in-process mapping (hosts that
already resolved their secrets, tests). EnvSecretStore reads them from an
environment snapshot, the way the CLI runs the operator.
"""
import logging
import re
from typing import Any, Dict, Mapping, Optional

from .interface import SecretProvider, SecretStore

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = 'SECRET_'


class _MappingSecretProvider(SecretProvider):
    def __init__(self, namespace: str, values: Mapping[str, str]):
        self.namespace = namespace
        self._values = values

    def get_secret_optional(self, key: str) -> Optional[str]:
        value = self._values.get(key)
        if value is None:
            logger.debug(f"Secret '{self.namespace}.{key}' not set")
            return None
        return str(value)


class MappingSecretStore(SecretStore):
    """Secrets held in memory.

    Accepts either flat ``namespace.key`` entries or a nested
    ``{namespace: {key: value}}`` mapping; flat entries win on conflict.
    """

    def __init__(self, secrets: Optional[Mapping[str, Any]] = None):
        self._namespaces: Dict[str, Dict[str, str]] = {}
        flat = {}
        for name, value in (secrets or {}).items():
            if isinstance(value, Mapping):
                self._namespaces.setdefault(name, {}).update(value)
            elif '.' in name:
                flat[name] = value
            else:
                raise ValueError(f"Secret '{name}' must be qualified with a namespace")
        for name, value in flat.items():
            namespace, key = name.split('.', 1)
            self._namespaces.setdefault(namespace, {})[key] = value

    def get_secrets(self, namespace: str) -> SecretProvider:
        return _MappingSecretProvider(namespace, self._namespaces.get(namespace, {}))

    @property
    def store_type(self) -> str:
        return "mapping"


def secret_env_var_name(namespace: str, key: str, prefix: str = DEFAULT_ENV_PREFIX) -> str:
    """Map a namespaced secret to its environment variable, e.g. td/endpoint -> SECRET_TD_ENDPOINT."""
    normalized = re.sub(r'[^A-Za-z0-9]', '_', f"{namespace}_{key}").upper()
    return f"{prefix}{normalized}"


class _EnvSecretProvider(SecretProvider):
    def __init__(self, namespace: str, env: Mapping[str, str], prefix: str):
        self.namespace = namespace
        self._env = env
        self._prefix = prefix

    def get_secret_optional(self, key: str) -> Optional[str]:
        env_var = secret_env_var_name(self.namespace, key, self._prefix)
        value = self._env.get(env_var)
        if not value or not value.strip():
            logger.debug(f"Secret '{self.namespace}.{key}' not set (environment variable: {env_var})")
            return None
        return value.strip()


class EnvSecretStore(SecretStore):
    """Secrets read from environment variables named PREFIX + NAMESPACE_KEY."""

    def __init__(self, env: Mapping[str, str], prefix: str = DEFAULT_ENV_PREFIX):
        self._env = env
        self._prefix = prefix

    def get_secrets(self, namespace: str) -> SecretProvider:
        return _EnvSecretProvider(namespace, self._env, self._prefix)

    @property
    def store_type(self) -> str:
        return "env"
