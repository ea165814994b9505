from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DislikeSettings(BaseSettings):
    """Configuration for the dislike service.

    Environment variables are prefixed with TUIT_DISLIKES_.
    """

    model_config = SettingsConfigDict(env_prefix="TUIT_DISLIKES_", extra="ignore")

    # Logging
    log_level: str = Field(default="INFO", description="Python logging level")

    # Storage
    db_path: str = Field(default="~/.tuit_dislikes/dislikes.db")
    sqlite_timeout: float = Field(
        default=5.0, gt=0, description="Seconds to wait on a locked database"
    )

    # Identity
    self_alias: str = Field(default="me", min_length=1, description="User reference meaning the caller")

    # Toggle
    serialize_toggles: bool = Field(
        default=True,
        description="Hold a per-tuit lock around read-decide-write. If False, concurrent toggles race.",
    )


settings = DislikeSettings()
