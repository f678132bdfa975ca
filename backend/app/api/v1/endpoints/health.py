# backend/app/api/v1/endpoints/health.py
"""
Endpoint de verificación de estado del servicio.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.schemas.common_schema import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Comprueba que la API responde. No consulta la base de datos."""
    return HealthResponse(
        message="Menu Manager API is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
