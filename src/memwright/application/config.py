from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

from memwright.application.scheduling.options import SRSOptions
from memwright.application.scheduling.sm2 import SM2Config
from memwright.domain import constants
from memwright.domain.scheduling.errors import InvalidConfigError


def config_files() -> list[Path]:
    """Candidate config files, highest priority first."""
    return [
        Path.home() / ".config/memwright/config.toml",
        Path.home() / ".memwright.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for memwright.
    Supports loading from:
    1. Environment variables (MEMWRIGHT_*, nested with "__")
    2. Config file (~/.config/memwright/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMWRIGHT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Scheduling
    default_algorithm: str = constants.DEFAULT_ALGORITHM
    sm2: SM2Config = Field(default_factory=SM2Config.standard)

    # CLI
    timezone: str = "UTC"
    verbose: int = 1

    @field_validator("default_algorithm", mode="before")
    @classmethod
    def normalize_algorithm(cls, v: Any) -> str:
        if v is None:
            return constants.DEFAULT_ALGORITHM
        return str(v).strip().lower() or constants.DEFAULT_ALGORITHM

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

        toml_file = None
        for f in config_files():
            if f.exists():
                toml_file = f
                break

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    def fallback_options(self) -> SRSOptions:
        """Options used for decks that store no scheduling section of their own."""
        return SRSOptions(sm2=self.sm2)


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/memwright/config.toml (if exists)
    3. Environment variables (MEMWRIGHT_*)
    4. cli_overrides (None values are ignored)

    Raises:
        InvalidConfigError: If any layer holds an invalid or incomplete value.
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    try:
        return AppConfig(**overrides)
    except (ValidationError, SettingsError) as e:
        raise InvalidConfigError(f"Invalid memwright configuration: {e}") from e
