"""Backend configuration loaded from environment variables."""

from __future__ import annotations

import socket

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    port: int = 3000

    # Instance identity, first non-empty wins (see resolve_instance_id)
    instance_id: str = ""
    hostname: str = ""

    log_level: str = "INFO"


def resolve_instance_id(settings: Settings) -> str:
    """Return the identifier reported by /api/hello and the seed item.

    An explicit INSTANCE_ID beats the platform's HOSTNAME, which beats the
    machine's network hostname.
    """
    for candidate in (settings.instance_id, settings.hostname):
        if candidate and candidate.strip():
            return candidate.strip()
    return socket.gethostname()


settings = Settings()
