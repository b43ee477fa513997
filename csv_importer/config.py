from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
# Load environment variables from .env file
from dotenv import load_dotenv

load_dotenv()

ENV_PREFIX = "CSV_IMPORTER_"


def _env(name: str) -> AliasChoices:
    """Accept both the prefixed and the bare environment variable name."""
    return AliasChoices(f"{ENV_PREFIX}{name}", name)


class Settings(BaseSettings):
    """Application settings configuration using Pydantic.

    The five database values have no defaults: a missing or malformed one
    raises ``pydantic.ValidationError`` when the settings are first built,
    which stops the process before it starts serving.
    """
    # Database settings
    DB_HOST: str = Field(validation_alias=_env("DB_HOST"))
    DB_PORT: int = Field(validation_alias=_env("DB_PORT"))
    DB_USER: str = Field(validation_alias=_env("DB_USER"))
    DB_PASSWORD: str = Field(validation_alias=_env("DB_PASSWORD"))
    DB_NAME: str = Field(validation_alias=_env("DB_NAME"))

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "CSV Importer API"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # CORS settings
    CORS_ORIGINS: list[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:8080",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"  # empty disables the JSON log file

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in validation

    @property
    def DATABASE_URL(self) -> str:
        """Async PostgreSQL URL built from the DB_* values."""
        url = URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )
        return url.render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    """Create cached instance of settings.

    Returns:
        Settings: Application settings
    """
    return Settings()
