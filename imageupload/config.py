from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMAGEUPLOAD_",
        extra="ignore",
    )

    app_name: str = "Image Upload"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000
    upload_dir: str = "uploads"
    max_file_size: int = Field(default=5 * 1024 * 1024, ge=1)
    allowed_mime_prefixes: tuple[str, ...] = ("image/",)
    upload_field: str = "avatar"
    chunk_size: int = Field(default=64 * 1024, ge=1)

    @property
    def upload_path(self) -> Path:
        path = Path(self.upload_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path
