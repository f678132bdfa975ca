# backend/app/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación FastAPI completa,
incluyendo la configuración de rutas, manejo de errores, documentación
automática y el ciclo de vida de la aplicación.

Características principales:
- create_app construye la aplicación con sus recursos (base de datos y
  servicio de imágenes), que pueden sustituirse en los tests
- Registro de routers de la API con prefijos
- Formato uniforme de errores
- En producción, sirve el frontend compilado con fallback a index.html
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.errors import register_exception_handlers
from app.api.v1.api_router import api_router_v1  # Router principal de la API v1
from app.core.config import Settings, settings  # Configuración centralizada de la aplicación
from app.core.logging_config import setup_logging
from app.db.database import Database
from app.services.image_service import CloudinaryImageStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings = settings,
    database: Optional[Database] = None,
    image_store: Optional[CloudinaryImageStore] = None,
) -> FastAPI:
    database = database or Database.from_settings(settings)
    image_store = image_store or CloudinaryImageStore.from_settings(settings)

    # ========================================
    # CICLO DE VIDA DE LA APLICACIÓN
    # ========================================

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        logger.info(f"🚀 Iniciando {settings.PROJECT_NAME} v{settings.PROJECT_VERSION} ({settings.APP_ENVIRONMENT})")
        await database.connect(create_tables=settings.DB_CREATE_TABLES)
        if not image_store.is_configured:
            logger.warning("⚠️ Cloudinary no configurado: las subidas de imágenes fallarán")
        yield
        await database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        version=settings.PROJECT_VERSION,
        description="API para la gestión del menú: categorías, subcategorías e ítems",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.image_store = image_store

    register_exception_handlers(app, settings)

    # ========================================
    # REGISTRO DE ROUTERS DE LA API
    # ========================================

    app.include_router(api_router_v1, prefix=settings.API_V1_STR)

    @app.get("/", tags=["Root"])
    async def read_root():
        """
        Endpoint raíz para verificación básica del estado de la API.

        Returns:
            dict: Mensaje de bienvenida con información del proyecto

        Example:
            GET /
            Response: {"success": true, "message": "Welcome to Menu Manager API v0.1.0"}
        """
        return {"success": True, "message": f"Welcome to {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

    if settings.is_production and Path(settings.FRONTEND_DIST_DIR).is_dir():
        mount_frontend(app, Path(settings.FRONTEND_DIST_DIR), settings.API_V1_STR)

    return app


def mount_frontend(app: FastAPI, dist_dir: Path, api_prefix: str) -> None:
    """
    Sirve los ficheros del frontend compilado. Cualquier ruta GET que no
    sea del API y no corresponda a un fichero devuelve index.html para que
    el enrutado lo resuelva el cliente.
    """
    root = dist_dir.resolve()
    index_file = root / "index.html"
    logger.info(f"📦 Sirviendo frontend desde {root}")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        if full_path.startswith(api_prefix.strip("/")):
            raise StarletteHTTPException(status_code=404)
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)
        if not index_file.is_file():
            raise StarletteHTTPException(status_code=404)
        return FileResponse(index_file)


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
