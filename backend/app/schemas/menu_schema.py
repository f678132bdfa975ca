# backend/app/schemas/menu_schema.py
"""
Esquema de respuesta del árbol de menú (categorías > subcategorías > ítems).
"""

from typing import List, Literal, Optional

from pydantic import ConfigDict

from app.schemas.common_schema import CamelModel


class MenuTreeNodeResponse(CamelModel):
    id: int
    type: Literal["category", "subcategory", "item"]
    name: str
    children: List["MenuTreeNodeResponse"] = []
    sub_category_count: Optional[int] = None
    item_count: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


MenuTreeNodeResponse.model_rebuild()
