# backend/app/api/errors.py
"""
Formateo centralizado de errores.

Todos los errores terminan aquí y se devuelven con el mismo formato:

    {"success": false, "message": "...", "errors": [...], "error": "..."}

- errors: solo en errores de validación, una entrada por campo
- error: traza de la excepción, solo fuera de producción
"""

import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings
from app.core.exceptions import AppError

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"
LOCATION_PREFIXES = ("body", "query", "path")


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    formatted = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in LOCATION_PREFIXES]
        formatted.append({"field": ".".join(location), "message": error.get("msg", "")})
    return formatted


def error_response(
    settings: Settings,
    status_code: int,
    message: str,
    errors: Optional[List[Dict[str, str]]] = None,
    exc: Optional[BaseException] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    if exc is not None and not settings.is_production:
        content["error"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Registra los manejadores que traducen cada tipo de error a su respuesta."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"❌ ERROR: {request.method} {request.url.path}: {exc.message}", exc_info=exc)
            return error_response(settings, exc.status_code, exc.message, exc=exc)
        logger.warning(f"⚠️ {request.method} {request.url.path}: {exc.message}")
        return error_response(settings, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            settings,
            status.HTTP_400_BAD_REQUEST,
            VALIDATION_FAILED,
            errors=format_validation_errors(exc.errors()),
        )

    @app.exception_handler(ValidationError)
    async def schema_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return error_response(
            settings,
            status.HTTP_400_BAD_REQUEST,
            VALIDATION_FAILED,
            errors=format_validation_errors(exc.errors()),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Route not found" if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
        return error_response(settings, exc.status_code, message)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"❌ ERROR inesperado en {request.method} {request.url.path}")
        message = "Internal server error" if settings.is_production else str(exc)
        return error_response(settings, status.HTTP_500_INTERNAL_SERVER_ERROR, message, exc=exc)
