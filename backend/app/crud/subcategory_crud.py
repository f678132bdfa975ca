# backend/app/crud/subcategory_crud.py

"""
Operaciones CRUD para el modelo Subcategory.

Todas las consultas precargan la categoría padre con selectinload(), ya que
las respuestas del API la incluyen y en modo asíncrono no hay lazy loading.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.subcategory_model import Subcategory


def _subcategory_query():
    return select(Subcategory).options(selectinload(Subcategory.category))


# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_subcategory(db: AsyncSession, subcategory_id: int) -> Optional[Subcategory]:
    """Obtiene una subcategoría por su ID, con su categoría precargada."""
    result = await db.execute(
        _subcategory_query()
        .filter(Subcategory.id == subcategory_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_subcategory_by_name(db: AsyncSession, name: str) -> Optional[Subcategory]:
    """Obtiene una subcategoría por su nombre exacto, sin distinguir mayúsculas."""
    result = await db.execute(
        _subcategory_query().filter(func.lower(Subcategory.name) == func.lower(name))
    )
    return result.scalars().first()


async def get_subcategories(db: AsyncSession, category_id: Optional[int] = None) -> List[Subcategory]:
    """
    Obtiene las subcategorías, de la más reciente a la más antigua.

    Args:
        db: Sesión de SQLAlchemy
        category_id: si se indica, solo las subcategorías de esa categoría
    """
    query = _subcategory_query()
    if category_id is not None:
        query = query.filter(Subcategory.category_id == category_id)
    result = await db.execute(query.order_by(Subcategory.created_at.desc(), Subcategory.id.desc()))
    return result.scalars().all()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE)
# ========================================

async def create_subcategory(db: AsyncSession, subcategory_data: Dict[str, Any]) -> Subcategory:
    """Crea una subcategoría. El servicio ya ha comprobado que el padre existe."""
    db_subcategory = Subcategory(**subcategory_data)
    db.add(db_subcategory)
    await db.commit()
    return await get_subcategory(db, db_subcategory.id)


async def update_subcategory(
    db: AsyncSession, db_subcategory: Subcategory, update_data: Dict[str, Any]
) -> Subcategory:
    """Actualiza una subcategoría existente con los campos proporcionados."""
    for key, value in update_data.items():
        setattr(db_subcategory, key, value)

    db.add(db_subcategory)
    await db.commit()
    return await get_subcategory(db, db_subcategory.id)
