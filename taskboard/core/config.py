import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEV_SECRET_KEY = "dev-only-secret-change-me-with-a-long-random-string"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


class Settings:
    """
    Application settings.

    Values come from the environment (and .env), keyword overrides win.
    The object is built once by the caller and handed to create_app().
    """

    def __init__(self, **overrides: Any):
        self.POSTGRES_USER: Optional[str] = os.getenv("POSTGRES_USER")
        self.POSTGRES_PASSWORD: Optional[str] = os.getenv("POSTGRES_PASSWORD")
        self.POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
        self.POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
        self.POSTGRES_DB: Optional[str] = os.getenv("POSTGRES_DB")

        self.DATABASE_URL: str = (
            os.getenv("DATABASE_URL")
            or self._postgres_url()
            or "sqlite:///./taskboard.db"
        )

        self.SECRET_KEY: Optional[str] = os.getenv("SECRET_KEY")
        self.ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
        self.ACCESS_TOKEN_EXPIRE_MINUTES: int = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60)

        self.BCRYPT_ROUNDS: int = _env_int("BCRYPT_ROUNDS", 10)
        self.MAX_LOGIN_ATTEMPTS: int = _env_int("MAX_LOGIN_ATTEMPTS", 3)

        self.DEFAULT_PAGE_LIMIT: int = _env_int("DEFAULT_PAGE_LIMIT", 20)
        self.MAX_PAGE_LIMIT: int = _env_int("MAX_PAGE_LIMIT", 100)

        self.CLIENT_URL: str = os.getenv("CLIENT_URL", "http://localhost:3000")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise ValueError(f"Unknown setting: {key}")
            setattr(self, key, value)

        if not self.SECRET_KEY:
            logger.warning("SECRET_KEY is not set, falling back to an insecure development key")
            self.SECRET_KEY = DEV_SECRET_KEY

    def _postgres_url(self) -> Optional[str]:
        if not self.POSTGRES_USER or not self.POSTGRES_PASSWORD or not self.POSTGRES_DB:
            return None
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )
