"""
Base secrets client abstract class.

Provides a consistent interface whether secrets are pushed over HTTP or
recorded in memory.
"""
from abc import ABC, abstractmethod
from typing import Optional

from .models import ClientConfig


class SecretsAPIClient(ABC):
    """Abstract base class for project secrets clients.

    Constructed with the same arguments regardless of implementation, so the
    client builder can create any of them.
    """

    def __init__(self, host: str, port: int, use_ssl: bool,
                 proxy_host: Optional[str] = None, proxy_port: Optional[int] = None,
                 proxy_scheme: Optional[str] = None):
        self.config = ClientConfig(
            host=host,
            port=port,
            use_ssl=use_ssl,
            proxy_host=proxy_host,
            proxy_port=proxy_port,
            proxy_scheme=proxy_scheme,
        )

    @property
    def endpoint(self) -> str:
        return self.config.base_url

    @abstractmethod
    def set_project_secret(self, project_id: str, key: str, value: str) -> None:
        """Store one secret for a project."""
        pass

    def close(self) -> None:
        """Release any transport resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
