# backend/app/schemas/subcategory_schema.py

"""
Esquemas Pydantic para el modelo Subcategory.

Los campos de impuestos son opcionales: si no se informan al crear, la
subcategoría copia los valores de su categoría padre.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from app.schemas.common_schema import CamelModel, blank_to_none
from app.schemas.category_schema import CategorySummary


class SubcategoryBase(CamelModel):
    """Propiedades comunes compartidas entre esquemas de subcategoría."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class SubcategoryCreate(SubcategoryBase):
    """Esquema para crear una subcategoría bajo una categoría existente."""
    category_id: int
    tax_applicability: Optional[bool] = None
    tax: Optional[float] = Field(None, ge=0)

    @field_validator("tax", "tax_applicability", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        return blank_to_none(value)


class SubcategoryUpdate(CamelModel):
    """Esquema para actualizar una subcategoría. Todos los campos son opcionales."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category_id: Optional[int] = None
    tax_applicability: Optional[bool] = None
    tax: Optional[float] = Field(None, ge=0)

    @field_validator("category_id", "tax", "tax_applicability", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        return blank_to_none(value)


class SubcategorySummary(CamelModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class SubcategoryResponse(SubcategoryBase):
    """Esquema de respuesta, con la categoría padre embebida."""
    id: int
    image: Optional[str] = None
    category_id: int
    category: Optional[CategorySummary] = None
    tax_applicability: Optional[bool] = None
    tax: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
