# formgate/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    app_name: str = "formgate"
    env: str = "local"

    # =========================
    # Uploads
    # =========================
    UPLOAD_PATH: str = "./"
    UPLOAD_MAX_SIZE: int = 2048         # kilobytes, 0 = no limit
    UPLOAD_INPUT_NAME: str = "file"
    UPLOAD_OVERWRITE: bool = False

    # Comma separated MIME types and/or extensions, e.g. "pdf,image/png".
    # Empty means every type is accepted.
    UPLOAD_ALLOWED_TYPES: str = ""

    # HTTP
    CORS_ALLOW_ORIGINS: str | None = None

    model_config = SettingsConfigDict(
        env_file=os.path.join(PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def upload_allowed_types(self) -> list[str]:
        return split_csv(self.UPLOAD_ALLOWED_TYPES)


def split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


settings = Settings()
