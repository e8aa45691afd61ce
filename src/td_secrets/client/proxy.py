"""
Proxy detection from environment variables.

Follows the common convention: ``<scheme>_proxy`` in lowercase wins over
``<SCHEME>_PROXY``, and ``no_proxy`` / ``NO_PROXY`` lists hosts that must be
reached directly.
"""
import logging
from typing import Mapping, Optional, Tuple
from urllib.parse import unquote
from urllib.request import proxy_bypass_environment

from ..config.exceptions import InvalidEndpointError
from .endpoint import parse_endpoint
from .models import ProxyConfig

logger = logging.getLogger(__name__)


def _get_env(env: Mapping[str, str], name: str) -> Tuple[Optional[str], Optional[str]]:
    """Look up name in lowercase, then uppercase. Returns (variable, value)."""
    for variable in (name.lower(), name.upper()):
        value = env.get(variable)
        if value and value.strip():
            return variable, value.strip()
    return None, None


def _split_credentials(proxy_url: str) -> Tuple[str, Optional[str], Optional[str]]:
    """Separate user[:password]@ from a proxy URL and drop any path.

    Returns:
        (url without credentials or path, user, password)
    """
    prefix = ''
    rest = proxy_url
    if '://' in proxy_url:
        scheme, rest = proxy_url.split('://', 1)
        prefix = f"{scheme}://"

    authority = rest.split('/', 1)[0]
    user = password = None
    if '@' in authority:
        userinfo, authority = authority.rsplit('@', 1)
        if ':' in userinfo:
            user, password = userinfo.split(':', 1)
            password = unquote(password)
        else:
            user = userinfo
        user = unquote(user)

    return f"{prefix}{authority}", user, password


def is_proxy_bypassed(target_host: Optional[str], env: Mapping[str, str]) -> bool:
    """Check whether no_proxy excludes target_host (``host`` or ``host:port``)."""
    _, no_proxy = _get_env(env, 'no_proxy')
    if not no_proxy:
        return False
    if no_proxy == '*':
        return True
    if not target_host:
        return False
    return bool(proxy_bypass_environment(target_host, proxies={'no': no_proxy}))


def proxy_config_from_env(scheme: str, env: Mapping[str, str],
                          target_host: Optional[str] = None) -> Optional[ProxyConfig]:
    """Derive proxy settings for scheme from an environment snapshot.

    Args:
        scheme: Scheme of the endpoint being called ('http' or 'https')
        env: Environment variables
        target_host: Endpoint ``host`` or ``host:port`` to check against no_proxy

    Returns:
        ProxyConfig, or None when no proxy applies

    Raises:
        InvalidEndpointError: the proxy variable holds a malformed URL
    """
    variable, proxy_url = _get_env(env, f"{scheme}_proxy")
    if proxy_url is None:
        return None

    if is_proxy_bypassed(target_host, env):
        logger.debug(f"Not using {variable} for {target_host}: excluded by no_proxy")
        return None

    address, user, password = _split_credentials(proxy_url)
    try:
        endpoint = parse_endpoint(address)
    except InvalidEndpointError as e:
        raise InvalidEndpointError(f"Invalid proxy in {variable}: {e}", endpoint=address) from e

    logger.debug(f"Using proxy {endpoint.url} from {variable}")
    return ProxyConfig(
        host=endpoint.host,
        port=endpoint.port,
        scheme=endpoint.scheme,
        user=user,
        password=password,
    )
