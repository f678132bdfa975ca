# backend/app/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API. Los recursos (base de datos, servicio de
imágenes) los crea la aplicación al arrancar y se guardan en app.state,
de modo que los tests pueden sustituirlos sin tocar variables globales.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.services.image_service import CloudinaryImageStore


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with request.app.state.database.session_factory() as session:
        yield session


def get_image_store(request: Request) -> CloudinaryImageStore:
    """Dependencia que devuelve el cliente del servicio de imágenes."""
    return request.app.state.image_store


def get_settings(request: Request) -> Settings:
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return request.app.state.settings
