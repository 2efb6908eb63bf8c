"""Process configuration.

The env file is loaded once at startup with ``python-dotenv`` (variables
already present in the environment win), then a frozen ``Settings`` object
is built and handed to the app factory. Nothing reads ``os.environ`` after
that point.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from .models import PaymentsConfig


DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_ENV_FILE = ".env"


def _get(env: Mapping[str, str], key: str, default: str) -> str:
    # Empty strings count as unset.
    value = (env.get(key) or "").strip()
    return value or default


def payments_config_from_env(env: Mapping[str, str]) -> PaymentsConfig:
    defaults = PaymentsConfig()
    return PaymentsConfig(
        provider=_get(env, "PAYMENTS_PROVIDER", defaults.provider),
        public_key=_get(env, "PAYMENTS_PUBLIC_KEY", defaults.public_key),
        return_url=_get(env, "PAYMENTS_RETURN_URL", defaults.return_url),
        currency=_get(env, "PAYMENTS_DEFAULT_CURRENCY", defaults.currency),
        locale=_get(env, "PAYMENTS_LOCALE", defaults.locale),
    )


@dataclass(frozen=True, slots=True)
class Settings:
    """Application settings, immutable for the lifetime of the process."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    static_root: Path = field(default_factory=Path.cwd)
    log_level: str = "INFO"
    payments: PaymentsConfig = field(default_factory=PaymentsConfig)

    @classmethod
    def from_env(cls, env: Mapping[str, str], *, cwd: Path | None = None) -> "Settings":
        base = cwd if cwd is not None else Path.cwd()

        raw_port = _get(env, "PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"PORT out of range: {port}")

        static_root = Path(_get(env, "STATIC_ROOT", str(base)))
        if not static_root.is_absolute():
            static_root = base / static_root

        return cls(
            port=port,
            host=_get(env, "HOST", DEFAULT_HOST),
            static_root=static_root.resolve(),
            log_level=_get(env, "LOG_LEVEL", "INFO").upper(),
            payments=payments_config_from_env(env),
        )


def load_env_file(path: str | os.PathLike[str] | None = None) -> bool:
    """Load a ``KEY=value`` file into ``os.environ`` without overriding.

    Returns ``False`` when the file does not exist.
    """

    env_path = Path(path if path is not None else os.getenv("ENV_FILE", DEFAULT_ENV_FILE))
    if not env_path.is_file():
        return False
    return load_dotenv(env_path, override=False)


def load_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    load_env_file(env_file)
    return Settings.from_env(os.environ)
