# app/core/config.py
import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

def _default_database_url() -> str:
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(data_dir, 'field_maintenance.db')}")

def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}

def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]

class Settings(BaseModel):

    DATABASE_URL: str = Field(default_factory=_default_database_url)

    # JWT
    ACCESS_SECRET: str = Field(default_factory=lambda: os.getenv("ACCESS_SECRET", ""))
    REFRESH_SECRET: str = Field(default_factory=lambda: os.getenv("REFRESH_SECRET", ""))
    ACCESS_TTL: str = Field(default_factory=lambda: os.getenv("ACCESS_TTL", "15m"))
    REFRESH_TTL: str = Field(default_factory=lambda: os.getenv("REFRESH_TTL", "7d"))
    JWT_ISSUER: str = Field(default_factory=lambda: os.getenv("JWT_ISSUER", "field-maintenance-api"))
    JWT_AUDIENCE: str = Field(default_factory=lambda: os.getenv("JWT_AUDIENCE", "field-maintenance-app"))
    JWT_ALGORITHM: str = Field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    BLACKLIST_MAX_SIZE: int = Field(default_factory=lambda: int(os.getenv("BLACKLIST_MAX_SIZE", "10000")))
    BLACKLIST_KEEP: int = Field(default_factory=lambda: int(os.getenv("BLACKLIST_KEEP", "5000")))

    # Uploads
    UPLOAD_PATH: str = Field(default_factory=lambda: os.path.abspath(os.getenv("UPLOAD_PATH", "./uploads")))
    MAX_FILE_SIZE: int = Field(default_factory=lambda: int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024))))
    ALLOWED_FILE_TYPES: List[str] = Field(
        default_factory=lambda: _env_list("ALLOWED_FILE_TYPES", "image/jpeg,image/png,image/gif,application/pdf")
    )
    MAX_FILES_PER_REQUEST: int = Field(default_factory=lambda: int(os.getenv("MAX_FILES_PER_REQUEST", "10")))

    # Runtime
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    LOG_FORMAT: str = Field(default_factory=lambda: os.getenv("LOG_FORMAT", "dev"))
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))
    RUN_MIGRATIONS: bool = Field(default_factory=lambda: _env_bool("RUN_MIGRATIONS", "true"))
    SEED_DEMO_DATA: bool = Field(default_factory=lambda: _env_bool("SEED_DEMO_DATA", "false"))
    DEFAULT_MAINTENANCE_FREQUENCY_DAYS: int = 90

settings = Settings()
