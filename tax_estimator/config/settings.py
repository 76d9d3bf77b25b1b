from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from process + optionally from .env
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="tax_estimator", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Bracket tables
    TAX_YEAR: int = Field(default=2024, validation_alias=AliasChoices("TAX_YEAR", "tax_year"))
    TAX_BRACKETS_FILE: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("TAX_BRACKETS_FILE", "tax_brackets_file"),
    )

    # Credit defaults (used when the caller does not supply its own)
    DEFAULT_PERSONAL_AMOUNT: float = Field(
        default=15705, ge=0,
        validation_alias=AliasChoices("DEFAULT_PERSONAL_AMOUNT", "default_personal_amount"),
    )
    DEFAULT_OTHER_CREDITS: float = Field(
        default=0, ge=0,
        validation_alias=AliasChoices("DEFAULT_OTHER_CREDITS", "default_other_credits"),
    )

    # Instalment payment detection
    INSTALMENT_MATCH_WINDOW_DAYS: int = Field(
        default=7, ge=0,
        validation_alias=AliasChoices("INSTALMENT_MATCH_WINDOW_DAYS", "instalment_match_window_days"),
    )
    INSTALMENT_MIN_AMOUNT: float = Field(
        default=100, ge=0,
        validation_alias=AliasChoices("INSTALMENT_MIN_AMOUNT", "instalment_min_amount"),
    )


settings = Settings()


@lru_cache()
def get_settings() -> Settings:
    """The process-wide ``settings`` instance, for use with ``Depends``."""
    return settings
