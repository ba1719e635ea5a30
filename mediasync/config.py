"""Client configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HISTORY_FILE = "immich_upload_history.json"
DEFAULT_LOG_FILE = "immich_backup.log"


class Settings(BaseSettings):
    """mediasync settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Source
    screenshots_path: str = ""

    # Server
    immich_api_key: str = ""
    immich_album_name: str = ""
    immich_local_url: str = ""
    immich_external_url: str = ""

    # State
    history_file: Path = Path(DEFAULT_HISTORY_FILE)
    log_file: str = DEFAULT_LOG_FILE

    # Timeouts (seconds)
    request_timeout: float = Field(default=60.0, gt=0)
    probe_timeout: float = Field(default=2.0, gt=0)

    debug: bool = False

    @property
    def source_dir(self) -> Path:
        """Return the source directory as a path."""
        return Path(self.screenshots_path).expanduser()

    def validate_required(self) -> None:
        """Validate that every value needed for a sync run is present."""
        violations: list[str] = []
        if not self.screenshots_path.strip():
            violations.append("SCREENSHOTS_PATH not set")
        if not self.immich_api_key.strip():
            violations.append("IMMICH_API_KEY not set")
        if not self.immich_album_name.strip():
            violations.append("IMMICH_ALBUM_NAME not set")
        if not self.immich_local_url.strip() and not self.immich_external_url.strip():
            violations.append("IMMICH_LOCAL_URL or IMMICH_EXTERNAL_URL must be set")

        if violations:
            joined = "; ".join(violations)
            raise ValueError(f"Invalid configuration: {joined}")
