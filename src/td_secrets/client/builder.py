"""
Client construction from an endpoint string and the process environment.
"""
import logging
from typing import Mapping, Optional, Type

from .base_client import SecretsAPIClient
from .endpoint import parse_endpoint
from .models import ClientConfig
from .proxy import proxy_config_from_env
from .remote_client import SecretsClient

logger = logging.getLogger(__name__)


def build_client_config(endpoint: str, env: Mapping[str, str]) -> ClientConfig:
    """Resolve endpoint and proxy into client-construction arguments.

    Raises:
        InvalidEndpointError: endpoint or proxy URL is malformed
    """
    parsed = parse_endpoint(endpoint)
    logger.debug(f"Using endpoint {parsed.url}")

    proxy = proxy_config_from_env(parsed.scheme, env, target_host=f"{parsed.host}:{parsed.port}")
    if proxy is None:
        return ClientConfig(host=parsed.host, port=parsed.port, use_ssl=parsed.use_ssl)

    if proxy.has_credentials:
        logger.warning("HTTP proxy authentication not supported. Ignoring proxy username and password.")

    return ClientConfig(
        host=parsed.host,
        port=parsed.port,
        use_ssl=parsed.use_ssl,
        proxy_host=proxy.host,
        proxy_port=proxy.port,
        proxy_scheme=proxy.scheme,
    )


def build_client(endpoint: str, env: Mapping[str, str],
                 client_class: Optional[Type[SecretsAPIClient]] = None) -> SecretsAPIClient:
    """Build a ready-to-use secrets client for endpoint.

    Args:
        endpoint: Raw endpoint string (see parse_endpoint)
        env: Environment variables to read proxy settings from
        client_class: Client implementation, SecretsClient by default
    """
    config = build_client_config(endpoint, env)
    client_class = client_class or SecretsClient
    return client_class(
        config.host,
        config.port,
        config.use_ssl,
        proxy_host=config.proxy_host,
        proxy_port=config.proxy_port,
        proxy_scheme=config.proxy_scheme,
    )
