"""Application configuration.

Settings are managed with Pydantic Settings and loaded from environment
variables or a `.env` file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # JWT
    SECRET_KEY: str = "change-me-in-production"  # override through the environment
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Application
    APP_TITLE: str = "Roaster Ordering"
    APP_DESCRIPTION: str = "Wholesale coffee ordering API"
    APP_VERSION: str = "1.0.0"
    SESSION_MAX_AGE: int = 3600  # seconds
    LOG_LEVEL: str = "INFO"

    # Bootstrap admin account (scripts/manage_admin.py, scripts/seed_catalog.py)
    ADMIN_EMAIL: str = "admin@roasterordering.com"
    ADMIN_PASSWORD: str = "password"

    # IANA zone used to render order-number dates; empty means server local time
    ORDER_NUMBER_TIMEZONE: Optional[str] = None

    # MySQL
    MYSQL_USER: Optional[str] = None
    MYSQL_PASSWORD: str = ""
    MYSQL_HOST: str = "127.0.0.1"
    MYSQL_PORT: str = "3306"
    MYSQL_DB: str = "roaster_db"

    # Database: DATABASE_URL wins, otherwise it is built from the MySQL settings
    DATABASE_URL: str = ""
    ECHO_SQL: bool = False  # log emitted SQL

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.DATABASE_URL:
            if self.MYSQL_USER:
                self.DATABASE_URL = (
                    f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}"
                    f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
                )
            else:
                # local development fallback
                self.DATABASE_URL = "sqlite:///./dev.db"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
