# backend/app/api/v1/endpoints/menu.py
"""
Endpoint del árbol de menú: categorías > subcategorías > ítems con sus contadores.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.common_schema import ListResponse
from app.schemas.menu_schema import MenuTreeNodeResponse
from app.services.category_service import category_service
from app.services.item_service import item_service
from app.services.menu_tree import build_menu_tree
from app.services.subcategory_service import subcategory_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/tree", response_model=ListResponse[MenuTreeNodeResponse])
async def read_menu_tree(db: AsyncSession = Depends(deps.get_db)) -> ListResponse[MenuTreeNodeResponse]:
    """Devuelve un nodo raíz por categoría con sus subcategorías e ítems anidados."""
    categories = await category_service.get_all_categories(db)
    subcategories = await subcategory_service.get_all_subcategories(db)
    items = await item_service.get_all_items(db)

    tree = build_menu_tree(categories, subcategories, items)
    logger.info(f"🌳 MENÚ: Árbol con {len(tree)} categorías, {len(subcategories)} subcategorías, {len(items)} ítems")
    data = [MenuTreeNodeResponse.model_validate(node) for node in tree]
    return ListResponse(count=len(data), data=data)
