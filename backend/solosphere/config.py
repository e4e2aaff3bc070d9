from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+psycopg://user:password@db/solosphere"

    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 9000

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:5174",
        "https://solosphere.web.app",
    ]

    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_DAYS: int = 365
    AUTH_COOKIE_NAME: str = "token"

    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "solosphere-backend"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"

settings = Settings()
