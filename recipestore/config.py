"""
Store configuration with Pydantic Settings for validation and type safety.
Settings are read from environment variables or a .env file.
"""

import logging
from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Deployment environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Data store settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    app_name: str = Field(default="recipestore", description="Application name")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Deployment environment"
    )

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/recipestore",
        description="SQLAlchemy connection URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_timeout_sec: float = Field(
        default=10.0,
        gt=0,
        description="Bound on connect, pool checkout and statement execution",
    )
    db_pool_size: int = Field(default=5, ge=1, description="Connection pool size")
    db_init_attempts: int = Field(
        default=5, ge=1, description="Schema creation attempts at startup"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between schema creation attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    return settings


def configure_logging(config: Settings = None) -> None:
    """Setup logging with configured level and format"""
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()), format=config.log_format
    )
