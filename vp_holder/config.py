"""
Holder configuration, read from the environment or a ``.env`` file.
"""

import logging
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationInvalid, ConfigurationMissing

REQUIRED_SETTINGS = ("VC_VERIFIER_TOKEN_URL", "CONTEXT_BROKER_URL", "CONTEXT_URL")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Holder settings"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Endpoints
    VC_VERIFIER_TOKEN_URL: str = ""
    CONTEXT_BROKER_URL: str = ""
    CONTEXT_URL: str = ""

    # Signing key, inline PEM or a path to one
    PRIVATE_KEY: str = ""
    PRIVATE_KEY_FILE: str = ""

    CREDENTIAL_FILE: str = "verifiable-credential.json"

    # Seconds; unset waits forever
    HTTP_TIMEOUT: Optional[float] = None

    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return value

    @property
    def log_level(self) -> int:
        return getattr(logging, self.LOG_LEVEL)


def load_settings(**overrides) -> Settings:
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationInvalid({
            ".".join(str(part) for part in err["loc"]): err["msg"]
            for err in e.errors()
        }) from e

    missing = [name for name in REQUIRED_SETTINGS if not getattr(settings, name).strip()]
    if not settings.PRIVATE_KEY.strip() and not settings.PRIVATE_KEY_FILE.strip():
        missing.append("PRIVATE_KEY")
    if missing:
        raise ConfigurationMissing(missing)

    return settings
