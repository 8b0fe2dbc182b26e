from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from nineladies.constants import (
    BACKEND_OLLAMA,
    BACKEND_OPENAI,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_BACKEND,
    ENV_LOG_LEVEL,
    ENV_MODEL,
    ENV_TIMEOUT,
    ENV_URL,
    MSG_BAD_TIMEOUT,
    MSG_UNKNOWN_BACKEND,
)
from nineladies.errors import ConfigError


@dataclass(frozen=True)
class Settings:
    base_url: Optional[str]
    backend: str
    model: Optional[str]
    timeout: float
    log_level: str

    @classmethod
    def from_env(
        cls,
        *,
        base_url: Optional[str] = None,
        backend: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        log_level: Optional[str] = None,
    ) -> "Settings":
        """Environment settings with any given override in place of its variable, validated once."""
        load_dotenv()

        base_url = base_url or os.getenv(ENV_URL) or None
        backend = backend or os.getenv(ENV_BACKEND, BACKEND_OPENAI)
        model = model or os.getenv(ENV_MODEL) or None
        timeout = str(timeout) if timeout is not None else os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT_SECONDS))
        log_level = log_level or os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)

        return cls._validate(
            base_url=base_url,
            backend=backend,
            model=model,
            timeout=timeout,
            log_level=log_level,
        )

    @staticmethod
    def _validate(
        base_url: Optional[str],
        backend: str,
        model: Optional[str],
        timeout: str,
        log_level: str,
    ) -> "Settings":
        kind = backend.strip().lower()
        if kind not in (BACKEND_OPENAI, BACKEND_OLLAMA):
            raise ConfigError(MSG_UNKNOWN_BACKEND % backend)

        try:
            seconds = float(timeout)
        except ValueError as exc:
            raise ConfigError(MSG_BAD_TIMEOUT % timeout) from exc
        if not seconds >= 0:
            raise ConfigError(MSG_BAD_TIMEOUT % timeout)

        return Settings(
            base_url=base_url.rstrip("/") if base_url else None,
            backend=kind,
            model=model,
            timeout=seconds,
            log_level=log_level,
        )
