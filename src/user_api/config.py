"""Application configuration helpers."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_PUBLIC_DIR = PACKAGE_ROOT / "public"


class Settings(BaseSettings):
    """Runtime configuration read from environment variables."""

    app_name: str = Field(default="user-api")
    environment: str = Field(default="local")
    log_level: str = Field(default="INFO")
    log_file: Path | None = Field(default=None)
    public_dir: Path = Field(default=DEFAULT_PUBLIC_DIR)

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    # MongoDB settings
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    database_name: str = Field(default="userDB")
    collection_name: str = Field(default="users")

    model_config = SettingsConfigDict(
        env_prefix="USER_API_",
        case_sensitive=False,
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings object so the environment is only parsed once."""

    return Settings()
