"""
AppBuilder Stream SDK - Client Configuration

Resolves the token, gateway and timeout from explicit arguments or the
environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError


TOKEN_ENV = "APPBUILDER_TOKEN"
GATEWAY_V2_ENV = "GATEWAY_URL_V2"
TIMEOUT_ENV = "APPBUILDER_TIMEOUT"

DEFAULT_GATEWAY_V2 = "https://qianfan.baidubce.com"
DEFAULT_TIMEOUT = 60.0


@dataclass
class ClientConfig:
    """Connection settings for ``AppBuilderClient``."""
    token: str
    gateway_url: str = DEFAULT_GATEWAY_V2
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not self.token.startswith("Bearer"):
            self.token = f"Bearer {self.token}"
        self.gateway_url = self.gateway_url.rstrip("/")

    @classmethod
    def from_env(
        cls,
        token: Optional[str] = None,
        gateway_url: Optional[str] = None,
        timeout: Optional[float] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        """
        Build a config; explicit arguments win over the environment.

        Raises:
            ConfigurationError: if no token is given and APPBUILDER_TOKEN is unset.
        """
        env = os.environ if env is None else env

        token = token or env.get(TOKEN_ENV, "").strip()
        if not token:
            raise ConfigurationError(
                f"Token required. Set {TOKEN_ENV} environment variable or pass token parameter."
            )

        gateway_url = gateway_url or env.get(GATEWAY_V2_ENV, "").strip() or DEFAULT_GATEWAY_V2

        if timeout is None:
            raw_timeout = env.get(TIMEOUT_ENV, "").strip()
            try:
                timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
            except ValueError:
                raise ConfigurationError(
                    f"{TIMEOUT_ENV} must be a number, got `{raw_timeout}`."
                ) from None

        return cls(token=token, gateway_url=gateway_url, timeout=timeout)
