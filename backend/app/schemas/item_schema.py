# backend/app/schemas/item_schema.py
"""
Esquemas Pydantic para el modelo Item.

Un ítem pertenece a una categoría o a una subcategoría, nunca a ambas.
En el formato de intercambio el id de subcategoría se llama subCategoryId.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from app.schemas.common_schema import CamelModel, blank_to_none
from app.schemas.category_schema import CategorySummary
from app.schemas.subcategory_schema import SubcategorySummary


# ========================================
# ESQUEMA BASE
# ========================================

class ItemBase(CamelModel):
    """Propiedades comunes compartidas entre esquemas de ítem."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ItemCreate(ItemBase):
    """Esquema para crear un ítem. taxApplicability y baseAmount son obligatorios."""
    tax_applicability: bool
    tax: Optional[float] = Field(None, ge=0)
    base_amount: float = Field(..., ge=0)
    discount: float = Field(0, ge=0)
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = Field(None, alias="subCategoryId")

    @field_validator("tax", "category_id", "subcategory_id", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        return blank_to_none(value)

    @field_validator("discount", mode="before")
    @classmethod
    def blank_discount(cls, value):
        value = blank_to_none(value)
        return 0 if value is None else value


class ItemUpdate(CamelModel):
    """
    Esquema para actualizar un ítem. Todos los campos son opcionales.

    Enviar categoryId o subCategoryId vacío (o null) lo marca como informado
    y sin valor, lo que permite mover el ítem de un padre a otro.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    tax_applicability: Optional[bool] = None
    tax: Optional[float] = Field(None, ge=0)
    base_amount: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0)
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = Field(None, alias="subCategoryId")

    @field_validator(
        "tax", "tax_applicability", "base_amount", "discount", "category_id", "subcategory_id",
        mode="before",
    )
    @classmethod
    def blank_as_none(cls, value):
        return blank_to_none(value)


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class ItemResponse(ItemBase):
    """Esquema de respuesta de un ítem, con sus padres embebidos."""
    id: int
    image: Optional[str] = None
    tax_applicability: bool
    tax: Optional[float] = None
    base_amount: float
    discount: float
    total_amount: float
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = Field(None, alias="subCategoryId")
    category: Optional[CategorySummary] = None
    subcategory: Optional[SubcategorySummary] = Field(None, alias="subCategory")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
