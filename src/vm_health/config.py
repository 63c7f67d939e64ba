from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Process plumbing loaded from VM_HEALTH_* environment variables."""

    model_config = {"env_prefix": "VM_HEALTH_", "extra": "ignore"}

    # Logging (stderr); WARNING keeps a normal run silent
    log_level: str = "WARNING"


settings = Settings()
