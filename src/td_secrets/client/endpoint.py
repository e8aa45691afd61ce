"""
Endpoint string parsing.

Endpoints are loosely formatted: an optional ``http://`` or ``https://``
prefix, a host, an optional port and an optional path suffix that is
ignored. Without a prefix the endpoint is plain http.
"""
import re

from ..config.exceptions import InvalidEndpointError
from .models import Endpoint

SCHEMES = {
    'http': False,
    'https': True,
}
DEFAULT_PORTS = {
    False: 80,
    True: 443,
}

_PORT_PATTERN = re.compile(r'^[0-9]+$')


def _parse_port(port_spec: str, raw: str) -> int:
    # Anything after the first '/' is a path and is dropped
    port_string = port_spec.split('/', 1)[0]
    if not _PORT_PATTERN.match(port_string):
        raise InvalidEndpointError(f"Endpoint port must be a number: {raw}", endpoint=raw)
    port = int(port_string)
    if not 1 <= port <= 65535:
        raise InvalidEndpointError(f"Endpoint port must be between 1 and 65535: {raw}", endpoint=raw)
    return port


def parse_endpoint(raw: str) -> Endpoint:
    """Parse an endpoint string into scheme, host and port.

    Examples:
        host                         -> http://host:80
        host:1234                    -> http://host:1234
        https://host                 -> https://host:443
        https://host:1234/extra/path -> https://host:1234

    Raises:
        InvalidEndpointError: unknown scheme, empty host or malformed port
    """
    if raw is None:
        raise InvalidEndpointError("Endpoint must not be empty", endpoint=raw)

    fragments = raw.split(':', 1)

    use_ssl = False
    if len(fragments) == 2 and fragments[1].startswith('//'):
        scheme = fragments[0]
        if scheme not in SCHEMES:
            raise InvalidEndpointError(f"Endpoint must start with http:// or https://: {raw}", endpoint=raw)
        use_ssl = SCHEMES[scheme]
        fragments = fragments[1][2:].split(':', 1)

    host = fragments[0]
    if not host:
        raise InvalidEndpointError(f"Endpoint host must not be empty: {raw}", endpoint=raw)

    if len(fragments) == 1:
        port = DEFAULT_PORTS[use_ssl]
    else:
        port = _parse_port(fragments[1], raw)

    return Endpoint(scheme='https' if use_ssl else 'http', host=host, port=port)
