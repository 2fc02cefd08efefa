from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "ContentHub API"
    VERSION: str = "0.1.0"
    DATABASE_URL: str = "sqlite:///./contenthub.db" # Default to SQLite for simplicity, can be changed
    SECRET_KEY: str = "supersecretkey" # Change in production
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    API_KEY_DEFAULT_EXPIRE_DAYS: int = 365
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "http://localhost:3001"
    STORAGE_PROVIDER: str = "local" # local | s3 | minio
    UPLOADS_DIR: str = "uploads"
    APP_URL: str = "http://localhost:8000"
    SEED_ON_STARTUP: bool = True
    ADMIN_EMAIL: str = "admin@contenthub.io"
    ADMIN_PASSWORD: Optional[str] = "admin123" # Change in production
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
