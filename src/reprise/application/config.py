from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from reprise.domain.constants import DEFAULT_MAX_NEW, DEFAULT_MAX_REVIEW, SECONDS_PER_CARD


def config_file_path() -> Path:
    return Path.home() / ".config/reprise/config.toml"


class AppConfig(BaseSettings):
    """
    Configuration model for reprise.
    Supports loading from:
    1. Config file (~/.config/reprise/config.toml)
    2. Environment variables (REPRISE_*)
    3. Manual overrides (CLI)
    Later sources win.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPRISE_",
        extra="ignore",
    )

    # Paths
    deck_file: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/reprise/decks.yaml"
    )

    # Sessions
    max_new: int = Field(default=DEFAULT_MAX_NEW, ge=0)
    max_review: int = Field(default=DEFAULT_MAX_REVIEW, ge=0)

    # Statistics
    seconds_per_card: int = Field(default=SECONDS_PER_CARD, ge=1)

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        toml_file = config_file_path()
        if toml_file.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("deck_file", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/reprise/config.toml (if exists)
    3. Environment variables (REPRISE_*)
    4. cli_overrides (passed from Typer, None values dropped)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
