"""
Remote HTTP secrets client using requests library.

Pushes project secrets to the workflow server's REST API.
"""
import logging
from typing import Optional
from urllib.parse import quote

import requests

from ..config.exceptions import RemoteCallError
from .base_client import SecretsAPIClient

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


def _error_message(response: requests.Response) -> str:
    """Pull the server's message out of an error response."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get('message'):
        return f"{response.status_code} {data['message']}"
    text = response.text.strip()
    if text:
        return f"{response.status_code} {text}"
    return f"{response.status_code} {response.reason}"


def _path_segment(value) -> str:
    """Percent-encode one URL path segment, including '.' and '..' which would otherwise be collapsed."""
    segment = quote(str(value), safe='')
    if segment in ('.', '..'):
        return segment.replace('.', '%2E')
    return segment


class SecretsClient(SecretsAPIClient):
    """Remote HTTP secrets client.

    Only the proxy resolved by the client builder is used: the session does
    not read proxy settings from the process environment on its own.
    """

    def __init__(self, host: str, port: int, use_ssl: bool,
                 proxy_host: Optional[str] = None, proxy_port: Optional[int] = None,
                 proxy_scheme: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(host, port, use_ssl, proxy_host, proxy_port, proxy_scheme)
        self.timeout = timeout
        self.session = requests.Session()
        self.session.trust_env = False
        self.session.headers.update({'Accept': 'application/json'})

        proxy_url = self.config.proxy_url
        if proxy_url:
            scheme = "https" if use_ssl else "http"
            self.session.proxies = {scheme: proxy_url}

    def set_project_secret(self, project_id: str, key: str, value: str) -> None:
        """PUT /api/projects/{id}/secrets/{key} with the value as JSON."""
        url = f"{self.endpoint}/api/projects/{_path_segment(project_id)}/secrets/{_path_segment(key)}"
        logger.debug(f"Setting secret '{key}' for project '{project_id}'")

        try:
            response = self.session.put(url, json={'value': value}, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteCallError(str(e), project_id=project_id, endpoint=self.endpoint, key=key) from e

        if not response.ok:
            raise RemoteCallError(
                _error_message(response),
                project_id=project_id,
                endpoint=self.endpoint,
                key=key,
                status_code=response.status_code,
            )

    def close(self) -> None:
        self.session.close()
