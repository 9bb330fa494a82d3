"""
Client configuration for the POPSigner SDK.

The client only ever receives an already-resolved :class:`ClientConfig`.
Precedence between flags, config files and the environment belongs to the
caller; :meth:`ClientConfig.from_env` is a small helper for the common case.
"""
import os
import logging
import urllib.parse
from dataclasses import dataclass, field
from typing import Optional, Any

from .version import __version__

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.popsigner.com"
DEFAULT_TIMEOUT = 30.0

ENV_API_KEY = "POPSIGNER_API_KEY"
ENV_API_URL = "POPSIGNER_API_URL"
ENV_TIMEOUT = "POPSIGNER_TIMEOUT"

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable connection settings for a client instance.

    Args:
        api_key: Bearer credential sent with every request
        base_url: API root, defaults to the production endpoint
        timeout: Per-request timeout in seconds
        user_agent: Client identifier header value
        allow_insecure: Permit plain http:// for non-loopback hosts
    """
    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = f"popsigner-sdk/{__version__}"
    allow_insecure: bool = False

    def __post_init__(self):
        if not self.api_key or not self.api_key.strip():
            raise ValueError("api_key must be provided")
        if self.timeout is None or self.timeout <= 0:
            raise ValueError(f"timeout must be positive (got: {self.timeout})")

        base_url = (self.base_url or DEFAULT_BASE_URL).rstrip("/")
        self._validate_base_url(base_url, self.allow_insecure)
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "base_url", base_url)

    @staticmethod
    def _validate_base_url(url: str, allow_insecure: bool) -> None:
        """
        Validate the base URL is well-formed and secure.

        Raises:
            ValueError: If the URL is malformed or uses http:// for a remote host
        """
        parsed = urllib.parse.urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid base URL '{url}': expected http(s)://host")

        host = parsed.hostname or ""
        is_local = host in _LOCAL_HOSTS
        if parsed.scheme != "https" and not is_local:
            if not allow_insecure:
                raise ValueError(
                    f"base_url must use https:// for security (got: {parsed.scheme}://). "
                    "Pass allow_insecure=True to allow HTTP for development."
                )
            logger.warning(f"Using insecure HTTP connection to {host}")

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """
        Build a configuration from ``POPSIGNER_*`` environment variables.

        Explicit keyword arguments take precedence over the environment.

        Args:
            **overrides: Any ClientConfig field; ``None`` values are ignored

        Returns:
            Resolved ClientConfig

        Raises:
            ValueError: If no API key is available or the timeout is not a number
        """
        values = {k: v for k, v in overrides.items() if v is not None}

        if "api_key" not in values and os.environ.get(ENV_API_KEY):
            values["api_key"] = os.environ[ENV_API_KEY]
        if "base_url" not in values and os.environ.get(ENV_API_URL):
            values["base_url"] = os.environ[ENV_API_URL]
        if "timeout" not in values and os.environ.get(ENV_TIMEOUT):
            raw = os.environ[ENV_TIMEOUT]
            try:
                values["timeout"] = float(raw)
            except ValueError:
                raise ValueError(f"{ENV_TIMEOUT} must be a number of seconds (got: {raw!r})")

        if "api_key" not in values:
            raise ValueError(f"api_key must be provided (or set {ENV_API_KEY})")

        return cls(**values)
