from functools import lru_cache

from fastapi import Request
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Server
    PORT: int = 5000
    DEBUG: bool = False
    CORS_ORIGINS: list[str] = ["*"]

    # Database
    DATABASE_URL: str = Field(
        default="postgresql+asyncpg://localhost:5432/auth",
        validation_alias=AliasChoices("DATABASE_URL", "MONGO_URI"),
    )

    # Auth
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12

    @classmethod
    def for_testing(cls, **overrides):
        """Создание тестовых настроек"""
        values = {
            "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
            "JWT_SECRET": "test_secret_key",
            "BCRYPT_ROUNDS": 4,
        }
        values.update(overrides)
        return cls(**values)


@lru_cache()
def get_settings():
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Настройки, с которыми собрано приложение"""
    return request.app.state.settings
