"""Settings file model (YAML, validated with Pydantic)."""

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field

from src.core.config import (
    DEFAULT_PUBLIC_DIR,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    DEFAULT_SOURCE_ROOT,
)


class ServerConfig(BaseModel):
    """Development server settings."""

    model_config = ConfigDict(extra="forbid")

    host: str = DEFAULT_SERVER_HOST
    port: int = Field(default=DEFAULT_SERVER_PORT, ge=1, le=65535)
    open: bool = True
    strict_port: bool = False


class AppConfig(BaseModel):
    """Top-level settings for staging, viewing and serving."""

    model_config = ConfigDict(extra="forbid")

    source_root: Path = Path(DEFAULT_SOURCE_ROOT)
    public_dir: Path = Path(DEFAULT_PUBLIC_DIR)
    asset_base: Optional[str] = None
    title: Optional[str] = None
    server: ServerConfig = Field(default_factory=ServerConfig)

    def resolve_paths(self, config_dir: Path) -> "AppConfig":
        """
        Resolve relative paths against the directory of the settings file.

        Args:
            config_dir: Directory containing the settings file

        Returns:
            New AppConfig with absolute local paths
        """
        updates = {}
        if not self.source_root.is_absolute():
            updates["source_root"] = config_dir / self.source_root
        if not self.public_dir.is_absolute():
            updates["public_dir"] = config_dir / self.public_dir
        if self.asset_base and urlparse(self.asset_base).scheme not in ("http", "https"):
            if not Path(self.asset_base).is_absolute():
                updates["asset_base"] = str(config_dir / self.asset_base)
        return self.model_copy(update=updates)

    @property
    def effective_asset_base(self) -> str:
        """Asset base used by the viewer: explicit setting or the public directory."""
        return self.asset_base or str(self.public_dir)
