# ratings_api/config.py
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Entorno
    ENV: str = "dev"  # dev | prod
    DEBUG: bool = False

    # App
    PROJECT_NAME: str = "Employee Ratings API"
    CORS_ORIGINS: List[str] = ["*"]

    # Base de datos
    DATABASE_URL: str = "sqlite:///./ratings.db"

    # Seguridad (sin valor por defecto: si falta, la app no arranca)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # Archivos públicos (SPA + imágenes subidas)
    PUBLIC_DIR: str = "public"
    IMAGES_SUBDIR: str = "images"
    MAX_UPLOAD_MB: int = 8

    # Super admin inicial (solo lo usa init_db)
    SUPERADMIN_USERNAME: Optional[str] = None
    SUPERADMIN_PASSWORD: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
