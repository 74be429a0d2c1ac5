"""
Client configuration and credential loading.

:class:`ClientConfig` is the only place the client reads credentials
from; nothing in the package consults the process environment on its own.
:meth:`ClientConfig.from_env` is a convenience for operators: it reads the
API key and secret through a secrets manager, which by default looks at
environment variables and optional ``*_FILE`` paths so that secrets can be
mounted as files in containers without leaking them into the environment.

Example usage::

    from bitflyer_client import BitflyerClient, ClientConfig

    config = ClientConfig.from_env()
    async with BitflyerClient(config) as client:
        balances = await client.send(GetBalance())
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from .errors import ConfigError
from .request import ENTRY_POINT

logger = logging.getLogger(__name__)

DEFAULT_KEY_NAME = "API_KEY"
DEFAULT_SECRET_NAME = "API_SECRET"


class BaseSecretsManager:
    """Where :meth:`ClientConfig.from_env` looks up credentials by name."""

    def get_secret(self, name: str) -> Optional[str]:  # pragma: no cover - override
        raise NotImplementedError


class EnvFileSecretsManager(BaseSecretsManager):
    """Credentials from ``environ`` or from the file named by ``<NAME>_FILE``.

    The file wins when both are set; relative file names resolve against
    ``base_path``.  Each name is looked up once per manager, and empty
    values count as missing.
    """

    FILE_SUFFIX = "_FILE"

    def __init__(
        self,
        base_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.base_path = base_path
        self._environ = os.environ if environ is None else environ
        self._cache: Dict[str, Optional[str]] = {}

    def _secret_file(self, pointer: str) -> Path:
        path = Path(pointer)
        if self.base_path is not None and not path.is_absolute():
            return self.base_path / path
        return path

    def _lookup(self, name: str) -> Optional[str]:
        pointer = self._environ.get(name + self.FILE_SUFFIX)
        if not pointer:
            return self._environ.get(name) or None
        path = self._secret_file(pointer)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Secret %s: cannot read %s: %s", name, path, exc)
            return None
        return text.strip() or None

    def get_secret(self, name: str) -> Optional[str]:
        if name not in self._cache:
            self._cache[name] = self._lookup(name)
        return self._cache[name]


class ClientConfig(BaseModel):
    """Immutable settings for :class:`~bitflyer_client.client.BitflyerClient`.

    Attributes:
        api_key: Public API key, sent verbatim in the ``ACCESS-KEY`` header.
        api_secret: Shared signing secret.  Without it only public
            endpoints can be called.
        base_url: Origin of the REST API.
        timeout: Default per-call timeout in seconds; ``None`` leaves
            timeouts to the transport.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    api_secret: Optional[SecretStr] = None
    base_url: str = ENTRY_POINT
    timeout: Optional[float] = Field(default=None, gt=0)

    @property
    def has_credentials(self) -> bool:
        return self.api_secret is not None and bool(self.api_secret.get_secret_value())

    @classmethod
    def from_env(
        cls,
        secrets: Optional[BaseSecretsManager] = None,
        *,
        key_name: str = DEFAULT_KEY_NAME,
        secret_name: str = DEFAULT_SECRET_NAME,
    ) -> "ClientConfig":
        """Build a config from a secrets manager and the environment.

        ``BITFLYER_BASE_URL`` and ``BITFLYER_TIMEOUT`` override the origin
        and the default timeout when set.

        Raises:
            ConfigError: a value does not validate, e.g. a non-numeric or
                non-positive ``BITFLYER_TIMEOUT``.
        """
        secrets = secrets or EnvFileSecretsManager(base_path=Path(os.getenv("SECRETS_BASE_PATH", "/")))
        api_key = secrets.get_secret(key_name) or ""
        api_secret = secrets.get_secret(secret_name)
        try:
            return cls(
                api_key=api_key,
                api_secret=SecretStr(api_secret) if api_secret else None,
                base_url=os.getenv("BITFLYER_BASE_URL", ENTRY_POINT),
                timeout=os.getenv("BITFLYER_TIMEOUT") or None,
            )
        except ValidationError as exc:
            raise ConfigError(f"invalid client configuration: {exc}") from exc


__all__ = [
    "DEFAULT_KEY_NAME",
    "DEFAULT_SECRET_NAME",
    "BaseSecretsManager",
    "EnvFileSecretsManager",
    "ClientConfig",
]
