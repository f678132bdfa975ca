# backend/app/core/config.py
"""
Configuración del servicio de gestión del menú.

Todos los valores se pueden sobrescribir con variables de entorno o con el
fichero .env; los secretos (base de datos, Cloudinary) no tienen valor real
por defecto.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path
import os

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Ajustes del API de menú cargados con pydantic-settings.
    Los nombres coinciden con las variables de entorno (sin distinguir mayúsculas).
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Menu Manager API"
    PROJECT_VERSION: str = "0.1.0"

    # Configuración de la base de datos
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "postgres")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "menu_db")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")

    # Si se define, reemplaza a la URL construida con las variables POSTGRES_*
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión a la base de datos asíncrona."""
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Reconexión - intervalo fijo, sin límite de intentos por defecto
    DB_RECONNECT_DELAY: float = 5.0
    DB_RECONNECT_MAX_ATTEMPTS: Optional[int] = None
    DB_CREATE_TABLES: bool = True

    # Cloudinary - Del .env (sensibles)
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_API_BASE_URL: str = "https://api.cloudinary.com/v1_1"

    # Subida de imágenes
    IMAGE_MAX_BYTES: int = 5 * 1024 * 1024
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/jpg", "image/png", "image/webp"]
    CATEGORY_IMAGE_FOLDER: str = "menu_categories"
    SUBCATEGORY_IMAGE_FOLDER: str = "menu_subcategories"
    ITEM_IMAGE_FOLDER: str = "menu_items"

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: str = "logs/app.log"

    # App Info - Del .env con defaults
    APP_ENVIRONMENT: str = "development"

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Build del cliente web, servido solo en producción
    FRONTEND_DIST_DIR: Path = BASE_DIR.parent / "frontend" / "dist"

    @property
    def is_production(self) -> bool:
        return self.APP_ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()
