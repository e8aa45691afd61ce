"""Pydantic models for remote client configuration.

Endpoint and ProxyConfig are parsed descriptors; ClientConfig is the full set
of client-construction arguments derived from them.
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


Scheme = Literal["http", "https"]


class Endpoint(BaseModel):
    """Network address of the remote API."""
    model_config = ConfigDict(frozen=True)

    scheme: Scheme
    host: str
    port: int = Field(ge=1, le=65535)

    @property
    def use_ssl(self) -> bool:
        return self.scheme == "https"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


class ProxyConfig(BaseModel):
    """Proxy settings derived from the environment.

    Credentials are kept so callers can detect them, but they are never sent.
    """
    model_config = ConfigDict(frozen=True)

    host: str
    port: int = Field(ge=1, le=65535)
    scheme: Scheme
    user: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)

    @property
    def has_credentials(self) -> bool:
        return self.user is not None or self.password is not None

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


class ClientConfig(BaseModel):
    """Arguments for constructing a secrets client."""
    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    use_ssl: bool
    proxy_host: Optional[str] = None
    proxy_port: Optional[int] = None
    proxy_scheme: Optional[Scheme] = None

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def proxy_url(self) -> Optional[str]:
        if self.proxy_host is None:
            return None
        scheme = self.proxy_scheme or "http"
        if self.proxy_port is None:
            return f"{scheme}://{self.proxy_host}"
        return f"{scheme}://{self.proxy_host}:{self.proxy_port}"


class SecretCall(BaseModel):
    """A single set-project-secret call."""
    project_id: str
    key: str
    value: str = Field(repr=False)
