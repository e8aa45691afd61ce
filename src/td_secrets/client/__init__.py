"""
Secrets client package.

Endpoint parsing, proxy detection and the clients that push project secrets.
"""

from .models import Endpoint, ProxyConfig, ClientConfig, SecretCall
from .endpoint import parse_endpoint
from .proxy import proxy_config_from_env, is_proxy_bypassed
from .base_client import SecretsAPIClient
from .in_memory_client import InMemorySecretsClient
from .remote_client import SecretsClient
from .builder import build_client, build_client_config

__all__ = [
    'Endpoint',
    'ProxyConfig',
    'ClientConfig',
    'SecretCall',
    'parse_endpoint',
    'proxy_config_from_env',
    'is_proxy_bypassed',
    'SecretsAPIClient',
    'InMemorySecretsClient',
    'SecretsClient',
    'build_client',
    'build_client_config'
]
