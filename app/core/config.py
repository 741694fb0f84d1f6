"""
Application settings.
Database secrets loaded from AWS Secrets Manager at startup when not in env.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # AWS
    AWS_REGION: str = "us-east-1"

    # Database (loaded from Secrets Manager unless DB_HOST or DATABASE_URL is set)
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_NAME: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASS: Optional[str] = None

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    SESSION_TTL: int = 86400  # 24 hours in seconds

    # Time-lock sweep
    TIME_LOCK_SWEEPER_ENABLED: bool = True
    TIME_LOCK_SWEEP_INTERVAL_SECONDS: int = 600  # 10 minutes

    # Geo-lock
    DEFAULT_UNLOCK_RADIUS_M: float = 50.0

    # SNS (when set, notifications are also published for mobile push fan-out)
    SNS_TOPIC_ARN: Optional[str] = None

    # Optional
    DEBUG: bool = False
    PROJECT_NAME: str = "Time Capsule Postcards"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

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

# Load secrets from AWS Secrets Manager only when DB creds aren't already
# provided via environment variables (e.g. in Docker / local dev).
if not settings.DB_HOST and not settings.DATABASE_URL:
    from app.aws.secrets import get_secret

    _db_secret = get_secret("capsule-backend/db", region_name=settings.AWS_REGION)
    settings.DB_HOST = _db_secret["host"]
    settings.DB_PORT = int(_db_secret.get("port", 5432))
    settings.DB_NAME = _db_secret["database"]
    settings.DB_USER = _db_secret["username"]
    settings.DB_PASS = _db_secret["password"]
