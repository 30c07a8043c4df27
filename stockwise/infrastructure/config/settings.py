"""
Runtime configuration read from environment variables.

load_dotenv() is applied by from_env(), so a local ``.env`` file works for
development. When STOCKWISE_SECRET_ARN is set, bootstrap_secrets() copies that
AWS Secrets Manager secret into the environment first.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "a-very-strong-default-secret-key"


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_ttl_seconds: int = 3600
    mongodb_uri: str = "mongodb://localhost:27017/stockwiseDB"
    model_timeout_seconds: float = 30.0
    model_max_attempts: int = 1
    langfuse_enabled: bool = False
    log_level: str = "INFO"
    port: int = 8000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *environ* (defaults to os.environ after load_dotenv()).

        Raises:
            ValueError: if a numeric variable cannot be parsed.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        jwt_secret = environ.get("JWT_SECRET") or DEFAULT_JWT_SECRET
        if jwt_secret == DEFAULT_JWT_SECRET:
            logger.warning("JWT_SECRET is not set; falling back to the built-in default secret.")

        return cls(
            gemini_api_key=environ.get("GEMINI_API_KEY") or None,
            gemini_model=environ.get("GEMINI_MODEL") or cls.gemini_model,
            jwt_secret=jwt_secret,
            jwt_ttl_seconds=_number(environ, "JWT_TTL_SECONDS", int, cls.jwt_ttl_seconds),
            mongodb_uri=environ.get("MONGODB_URI") or cls.mongodb_uri,
            model_timeout_seconds=_number(
                environ, "MODEL_TIMEOUT_SECONDS", float, cls.model_timeout_seconds
            ),
            model_max_attempts=_number(environ, "MODEL_MAX_ATTEMPTS", int, cls.model_max_attempts),
            langfuse_enabled=bool(environ.get("LANGFUSE_PUBLIC_KEY")),
            log_level=(environ.get("LOG_LEVEL") or cls.log_level).upper(),
            port=_number(environ, "PORT", int, cls.port),
        )


def _number(environ: Mapping[str, str], name: str, cast, default):
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def bootstrap_secrets(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Load STOCKWISE_SECRET_ARN into os.environ when it is set. Returns the keys loaded."""
    environ = os.environ if environ is None else environ
    secret_arn = environ.get("STOCKWISE_SECRET_ARN")
    if not secret_arn:
        return []
    from stockwise.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
    return SecretsManagerAdapter().load_into_env(secret_arn)
