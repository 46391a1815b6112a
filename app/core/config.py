"""
Application settings.
Loaded from environment variables and an optional .env file.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Database. DATABASE_URL wins over the individual parts when set.
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "novatech"
    DB_USER: str = "postgres"
    DB_PASS: str = "postgres"

    # Email granted the admin role when the user first registers
    ADMIN_EMAIL: str = "admin@novatech.com"

    # Chat
    MESSAGE_MAX_LENGTH: int = 10_000

    # Optional
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PROJECT_NAME: str = "NovaTech Backend"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASS}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
