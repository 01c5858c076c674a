import os
from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    APP_NAME: str = "Warehouse Service API"
    LOG_LEVEL: str = "INFO"

    # Full URL wins over the DB_* parts (used for SQLite in dev/tests)
    DATABASE_URL: Optional[str] = None

    DB_USER: str = "postgres"
    DB_PASS: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"
    DB_NAME: str = "warehouse"

    DB_POOL_SIZE: int = 2
    DB_MAX_OVERFLOW: int = 2
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300

    # Initial connect only; once connected, failures propagate immediately
    DB_CONNECT_RETRIES: int = 5
    DB_CONNECT_BACKOFF: float = 1.0
    DB_CONNECT_BACKOFF_FACTOR: float = 1.5
    DB_CONNECT_MAX_BACKOFF: float = 5.0

    LOW_STOCK_THRESHOLD: int = 50
    CORS_ORIGINS: List[str] = [
        "http://localhost:8080",
        "http://127.0.0.1:8002",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
