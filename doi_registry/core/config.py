"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Registry settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App Info
    app_name: str = "DOI Server Registry"
    debug: bool = False

    # Database
    data_save_folder: str = "./data"
    db_file: str = "doi_registry.db"

    @property
    def database_url(self) -> str:
        """SQLite database URL."""
        db_path = Path(self.data_save_folder) / self.db_file
        return f"sqlite+aiosqlite:///{db_path}"

    # Encryption at rest for DOI server passwords
    secret_key: str = Field(
        default="b7Jq2kT0xVfN3sRmW8yLcE5uHzP1aGdK",
        alias="DOI_SECRET_KEY",
    )
    secret_salt: str = Field(default="doiserver-password", alias="DOI_SECRET_SALT")
    secret_kdf_iterations: int = 390_000

    # DOI defaults
    default_identifier_pattern: str = "{{uuid}}"
    default_public_url: str = Field(
        default="https://doi.org/",
        alias="DOI_PUBLIC_URL",
    )

    # DataCite MDS
    datacite_timeout: float = 30.0

    # Seed file with groups and DOI servers
    servers_file: str = Field(
        default="./config/doiservers.yaml",
        alias="DOI_SERVERS_FILE",
    )

    @field_validator("default_public_url", mode="before")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Public URL is used as a prefix, keep the trailing slash."""
        if v and not v.endswith("/"):
            return v + "/"
        return v


class ServersFile:
    """Groups and DOI servers loaded from a YAML file.

    Expected layout::

        groups:
          - name: editors
        servers:
          - name: datacite-test
            api_url: https://mds.test.datacite.org
            prefix: "10.5072"
            publication_groups: [editors]
    """

    def __init__(self, config_path: str | None = None):
        self._config: dict[str, Any] = {}
        if config_path:
            self.load(config_path)

    def load(self, config_path: str) -> None:
        """Load configuration from YAML file."""
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                self._config = yaml.safe_load(f) or {}

    @property
    def groups(self) -> list[str]:
        """Group names, entries may be plain strings or mappings with a name."""
        names = []
        for entry in self._config.get("groups") or []:
            if isinstance(entry, dict):
                names.append(entry["name"])
            else:
                names.append(str(entry))
        return names

    @property
    def servers(self) -> list[dict[str, Any]]:
        """DOI server definitions."""
        return list(self._config.get("servers") or [])


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_servers_file() -> ServersFile:
    """Get cached seed file instance."""
    settings = get_settings()
    return ServersFile(settings.servers_file)
