# backend/app/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo define los componentes básicos del almacenamiento:
- Clase base para modelos (Base)
- ReconnectStrategy: reintentos de conexión con intervalo fijo
- Database: cliente explícito que agrupa motor y fábrica de sesiones

No hay una conexión global: la aplicación construye un Database al arrancar
y lo inyecta en los endpoints a través de app/api/deps.py.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from app.core.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


class ReconnectStrategy:
    """
    Reintenta una operación de conexión con un intervalo fijo.

    Con max_attempts=None se reintenta indefinidamente, que es el
    comportamiento por defecto al arrancar el servicio.
    """

    def __init__(
        self,
        delay: float = 5.0,
        max_attempts: Optional[int] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.delay = delay
        self.max_attempts = max_attempts
        self._sleep = sleep

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except (OSError, SQLAlchemyError) as e:
                if self.max_attempts is not None and attempt >= self.max_attempts:
                    logger.error(f"❌ BD: Conexión fallida tras {attempt} intentos: {e}")
                    raise
                logger.error(f"❌ BD: Error de conexión (intento {attempt}): {e}. Reintentando en {self.delay}s")
                await self._sleep(self.delay)


class Database:
    """Cliente del almacén de entidades: motor asíncrono y sesiones."""

    def __init__(self, url: str, reconnect: Optional[ReconnectStrategy] = None, **engine_kwargs):
        self.url = url
        self.reconnect = reconnect or ReconnectStrategy()
        self.engine = create_async_engine(url, pool_pre_ping=True, **engine_kwargs)
        # expire_on_commit=False para que los objetos sigan siendo utilizables
        # después de confirmar la transacción.
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            reconnect=ReconnectStrategy(
                delay=settings.DB_RECONNECT_DELAY,
                max_attempts=settings.DB_RECONNECT_MAX_ATTEMPTS,
            ),
        )

    async def _ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self, create_tables: bool = False) -> None:
        """Espera a que la base de datos responda y opcionalmente crea el esquema."""
        await self.reconnect.run(self._ping)
        logger.info("✅ BD: Conexión establecida")
        if create_tables:
            await self.create_tables()

    async def create_tables(self) -> None:
        # Registra las tablas en Base.metadata
        from app.db.models import category_model, item_model, subcategory_model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("BD: Conexión cerrada")
