"""
Abstract interface for secret lookup.

A SecretStore hands out SecretProviders scoped to a namespace; the secrets
operator only ever reads from the ``td`` namespace.
"""

from abc import ABC, abstractmethod
from typing import Optional


class SecretProvider(ABC):
    """Opaque key -> value lookup within one namespace."""

    @abstractmethod
    def get_secret_optional(self, key: str) -> Optional[str]:
        """Get a secret value by key.

        Args:
            key: Name of the secret within the namespace

        Returns:
            Secret value if found, None otherwise
        """
        pass

    def get_secret(self, key: str) -> str:
        """Get a secret value by key, raising KeyError when absent."""
        value = self.get_secret_optional(key)
        if value is None:
            raise KeyError(key)
        return value


class SecretStore(ABC):
    """Abstract base class for namespace-scoped secret stores."""

    @abstractmethod
    def get_secrets(self, namespace: str) -> SecretProvider:
        """Return a provider scoped to the given namespace."""
        pass

    @property
    @abstractmethod
    def store_type(self) -> str:
        """Return the type of secret store (e.g., 'mapping', 'env')."""
        pass
