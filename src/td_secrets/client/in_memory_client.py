"""
In-memory secrets client.

Records set-secret calls instead of sending them. Used by the unit test suite
and by dry runs of the CLI.
"""
import logging
from typing import List

from .base_client import SecretsAPIClient
from .models import SecretCall

logger = logging.getLogger(__name__)


class InMemorySecretsClient(SecretsAPIClient):
    """Secrets client that keeps calls in a list."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: List[SecretCall] = []

    def set_project_secret(self, project_id: str, key: str, value: str) -> None:
        logger.debug(f"Recording secret '{key}' for project '{project_id}' at {self.endpoint}")
        self.calls.append(SecretCall(project_id=str(project_id), key=key, value=value))
