import os
import zoneinfo
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Type

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_FILE = Path("config.yml")


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False  # Auto-reload on code changes (dev only)


class AuthHeaderSettings(BaseModel):
    value: Optional[SecretStr] = None  # Expected Authorization header, compared verbatim


class RetentionSettings(BaseModel):
    enabled: bool = True
    days: int = Field(default=7, ge=1)
    timezone: str = "Asia/Jakarta"  # Sweeps run at local midnight in this zone

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a valid IANA identifier."""
        try:
            zoneinfo.ZoneInfo(v)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Invalid timezone '{v}': {e}") from e
        return v


class PlainEnvOverrides(PydanticBaseSettingsSource):
    """
    Unprefixed PORT and AUTH_HEADER variables.

    Container platforms commonly inject PORT, and existing deployments set
    AUTH_HEADER; both win over the YAML file.
    """

    def get_field_value(self, field, field_name: str) -> Tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        port = os.environ.get("PORT")
        if port:
            values["server"] = {"port": port}
        auth_header = os.environ.get("AUTH_HEADER")
        if auth_header:
            values["auth_header"] = {"value": auth_header}
        return values


class Settings(BaseSettings):

    # ---- storage ----
    data_dir: Path = Path("data")

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ---- API server configuration ----
    server: ServerSettings = ServerSettings()
    auth_header: AuthHeaderSettings = AuthHeaderSettings()
    cors_origins: List[str] = ["*"]  # Allowed CORS origins (restrict in prod)

    # ---- item lifecycle ----
    retention: RetentionSettings = RetentionSettings()
    restamp_on_update: bool = False  # True re-stamps createdAt on every PUT/PATCH

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="APP_",      # APP_DATA_DIR, APP_RETENTION__DAYS, etc.
        env_nested_delimiter='__',
        extra = "ignore"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            PlainEnvOverrides(settings_cls),
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=config_file_path()),
            file_secret_settings,
        )

    @property
    def auth_secret(self) -> Optional[str]:
        if self.auth_header.value is None:
            return None
        return self.auth_header.value.get_secret_value()


def config_file_path() -> Path:
    """YAML config location, overridable through APP_CONFIG_FILE."""
    return Path(os.environ.get("APP_CONFIG_FILE") or DEFAULT_CONFIG_FILE)


def get_settings() -> Settings:
    """Accessor kept as a function so tests can patch it."""
    return Settings()
