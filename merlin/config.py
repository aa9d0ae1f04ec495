from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """
    Process-wide configuration. Read once at startup and never changed.

    Sources, highest priority first: keyword arguments, MERLIN_* environment
    variables, `.env`, then `config.json` in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="MERLIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        json_file="config.json",
        extra="ignore",
        frozen=True,
    )

    secret: str
    host: str = "0.0.0.0"
    port: int = 8080
    admin_path: str = "/admin"
    log_level: str = "info"

    @field_validator("secret")
    @classmethod
    def secret_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("admin secret is empty; refusing to run without one")
        return value

    @field_validator("admin_path")
    @classmethod
    def admin_path_is_sub_path(cls, value: str) -> str:
        value = value.rstrip("/")
        if not value.startswith("/"):
            raise ValueError("admin_path must start with '/' and differ from '/'")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
