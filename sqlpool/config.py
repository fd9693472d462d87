"""sqlpool configuration: loads from environment and an optional .env file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

from . import __version__


def _find_repo_root() -> Path:
    """Walk up from this file to find the repo root (where pyproject.toml lives)."""
    p = Path(__file__).resolve().parent
    while p != p.parent:
        if (p / "pyproject.toml").exists():
            return p
        p = p.parent
    return Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings: populated from env vars or .env file."""

    # App
    app_name: str = "sqlpool"
    app_version: str = __version__
    environment: str = "development"
    debug: bool = False

    # Azure: leave the service principal fields empty to fall back to
    # DefaultAzureCredential (az login, managed identity, env vars)
    subscription_id: str = ""
    tenant_id: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    # Paths
    repo_root: Path = _find_repo_root()

    model_config = {"env_prefix": "SQLPOOL_", "env_file": ".env", "extra": "ignore"}

    @property
    def local_dir(self) -> Path:
        return self.repo_root / "local"

    @property
    def log_dir(self) -> Path:
        return self.local_dir / "logs"

    @property
    def has_service_principal(self) -> bool:
        return bool(self.tenant_id and self.client_id and self.client_secret)


settings = Settings()
