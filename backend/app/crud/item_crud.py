# backend/app/crud/item_crud.py

"""
Operaciones CRUD para el modelo Item.

Funcionalidades principales:
- Consultas con eager loading de categoría y subcategoría (evita N+1)
- Ítems de una categoría incluyendo los de sus subcategorías
- Búsqueda por nombre exacto o por fragmento, sin distinguir mayúsculas
- Escritura con normalización previa (total_amount e invariantes)
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.item_model import Item
from app.db.models.subcategory_model import Subcategory
from app.services.item_rules import normalize_item

logger = logging.getLogger(__name__)


def _item_query():
    return select(Item).options(selectinload(Item.category), selectinload(Item.subcategory))


def _newest_first(query):
    return query.order_by(Item.created_at.desc(), Item.id.desc())


# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_item(db: AsyncSession, item_id: int) -> Optional[Item]:
    """Obtiene un ítem por su ID, con relaciones precargadas."""
    result = await db.execute(
        _item_query()
        .filter(Item.id == item_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_item_by_name(db: AsyncSession, name: str) -> Optional[Item]:
    """Obtiene un ítem por su nombre exacto, sin distinguir mayúsculas."""
    result = await db.execute(_item_query().filter(func.lower(Item.name) == func.lower(name)))
    return result.scalars().first()


async def get_items(db: AsyncSession) -> List[Item]:
    """Obtiene todos los ítems, del más reciente al más antiguo."""
    result = await db.execute(_newest_first(_item_query()))
    return result.scalars().all()


async def get_items_by_category(db: AsyncSession, category_id: int) -> List[Item]:
    """
    Obtiene los ítems de una categoría: los que cuelgan directamente de ella
    y los que cuelgan de cualquiera de sus subcategorías.
    """
    subcategory_ids = select(Subcategory.id).filter(Subcategory.category_id == category_id)
    query = _item_query().filter(
        or_(
            Item.category_id == category_id,
            Item.subcategory_id.in_(subcategory_ids),
        )
    )
    result = await db.execute(_newest_first(query))
    return result.scalars().all()


async def get_items_by_subcategory(db: AsyncSession, subcategory_id: int) -> List[Item]:
    """Obtiene los ítems de una subcategoría."""
    query = _item_query().filter(Item.subcategory_id == subcategory_id)
    result = await db.execute(_newest_first(query))
    return result.scalars().all()


async def search_items_by_name(db: AsyncSession, search_term: str) -> List[Item]:
    """
    Búsqueda de ítems cuyo nombre contiene el término, sin distinguir mayúsculas.
    Los comodines SQL (% y _) del término se tratan como texto literal.
    """
    query = _item_query().filter(Item.name.icontains(search_term, autoescape=True))
    result = await db.execute(_newest_first(query))
    items = result.scalars().all()
    logger.info(f"Búsqueda por término '{search_term}' encontró {len(items)} ítems.")
    return items


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE)
# ========================================

async def create_item(db: AsyncSession, item_data: Dict[str, Any]) -> Item:
    """Crea un ítem. total_amount se calcula justo antes de persistir."""
    db_item = normalize_item(Item(**item_data))
    db.add(db_item)
    await db.commit()
    return await get_item(db, db_item.id)


async def update_item(db: AsyncSession, db_item: Item, update_data: Dict[str, Any]) -> Item:
    """Actualiza un ítem y vuelve a calcular total_amount antes del commit."""
    for key, value in update_data.items():
        setattr(db_item, key, value)

    normalize_item(db_item)
    db.add(db_item)
    await db.commit()
    return await get_item(db, db_item.id)
