import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings, overridable through MD2PNG_* variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="MD2PNG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "md2png"
    app_version: str = "1.0.0"

    base_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[1])
    storage_dir: Optional[Path] = None
    public_dir: Optional[Path] = None
    temp_dir: Optional[Path] = None
    default_css_path: Optional[Path] = None

    viewport_height_px: int = 800
    settle_ms: int = 800
    ready_timeout_ms: int = 5000
    browser_args: list[str] = Field(default_factory=list)

    def configure_paths(self) -> None:
        """Fill in default locations and create the working directories."""
        self.storage_dir = (self.storage_dir or (Path(tempfile.gettempdir()) / "md2png")).resolve()
        self.public_dir = (self.public_dir or (self.storage_dir / "public")).resolve()
        self.temp_dir = (self.temp_dir or (self.storage_dir / "tmp")).resolve()
        self.default_css_path = (self.default_css_path or (self.base_dir / "static" / "default.css")).resolve()

        for directory in (self.storage_dir, self.temp_dir, self.public_dir):
            directory.mkdir(parents=True, exist_ok=True)

        (self.public_dir / "downloads").mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
