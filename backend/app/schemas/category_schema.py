# backend/app/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Los esquemas definen la estructura de datos que fluye a través de la API:
- Validación automática de tipos de datos
- Serialización/deserialización JSON
- Separación entre modelo de base de datos y API

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST)
- CategoryUpdate: Para actualizar categorías existentes (PUT)
- CategoryResponse: Para respuestas de la API (GET)
"""

import enum
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from app.schemas.common_schema import CamelModel, blank_to_none


class TaxType(str, enum.Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(CamelModel):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    """Esquema para crear una nueva categoría. El tax solo es obligatorio con taxApplicability."""
    tax_applicability: bool = False
    tax: Optional[float] = Field(None, ge=0)
    tax_type: TaxType = TaxType.PERCENTAGE

    @field_validator("tax", mode="before")
    @classmethod
    def blank_tax(cls, value):
        return blank_to_none(value)

    @field_validator("tax_applicability", mode="before")
    @classmethod
    def blank_applicability(cls, value):
        value = blank_to_none(value)
        return False if value is None else value

    @field_validator("tax_type", mode="before")
    @classmethod
    def blank_tax_type(cls, value):
        value = blank_to_none(value)
        return TaxType.PERCENTAGE if value is None else value


class CategoryUpdate(CamelModel):
    """Esquema para actualizar una categoría. Todos los campos son opcionales."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    tax_applicability: Optional[bool] = None
    tax: Optional[float] = Field(None, ge=0)
    tax_type: Optional[TaxType] = None

    @field_validator("tax", "tax_type", "tax_applicability", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        return blank_to_none(value)


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class CategorySummary(CamelModel):
    """Referencia resumida a la categoría padre, embebida en subcategorías e ítems."""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(CategoryBase):
    """Esquema para las respuestas de la API al leer categorías."""
    id: int
    image: Optional[str] = None
    tax_applicability: bool
    tax: Optional[float] = None
    tax_type: TaxType
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
