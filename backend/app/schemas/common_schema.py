# backend/app/schemas/common_schema.py
"""
Esquemas Pydantic compartidos por todos los recursos del menú.

- CamelModel: base con alias camelCase en el formato de intercambio
  (taxApplicability, categoryId, ...) y nombres snake_case en Python.
- DataResponse / ListResponse: sobre uniforme de las respuestas correctas.
- NameQuery: validación de los parámetros de búsqueda por nombre.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base para los esquemas del API con alias camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        # "inf" y "nan" no son importes ni impuestos válidos
        allow_inf_nan=False,
    )


def blank_to_none(value):
    """En formularios multipart un campo vacío significa 'no informado'."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ========================================
# SOBRES DE RESPUESTA
# ========================================

class DataResponse(BaseModel, Generic[T]):
    """Respuesta con un único registro."""
    success: bool = True
    message: Optional[str] = None
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Respuesta con una colección de registros y su tamaño."""
    success: bool = True
    count: int
    data: List[T]


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str


# ========================================
# PARÁMETROS DE BÚSQUEDA
# ========================================

class NameQuery(CamelModel):
    """Nombre (o fragmento) a buscar; no puede quedar vacío tras recortar espacios."""
    name: str = Field(..., min_length=1)
