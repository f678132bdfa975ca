# backend/app/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de lectura y escritura de categorías,
proporcionando una capa de abstracción entre los servicios y la base de datos.

Funcionalidades principales:
- Consultas por ID y por nombre (exacto, sin distinguir mayúsculas)
- Listado completo ordenado de más reciente a más antigua
- Creación y actualización con commit inmediato

Las reglas de negocio (impuestos, duplicados) viven en la capa de servicios.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.category_model import Category

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Obtiene una categoría por su ID.

    Args:
        db: Sesión de SQLAlchemy
        category_id: ID único de la categoría

    Returns:
        Objeto Category si existe, None si no se encuentra
    """
    result = await db.execute(
        select(Category)
        .filter(Category.id == category_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_category_by_name(db: AsyncSession, name: str) -> Optional[Category]:
    """
    Obtiene una categoría por su nombre exacto, sin distinguir mayúsculas.

    "drinks", "Drinks" y "DRINKS" encuentran la misma categoría, pero
    "Drink" no encuentra "Drinks".

    Ambos lados se pasan por lower() de la base de datos: en SQLite solo
    pliega ASCII, así que "ÑAMES" y "ñames" no coinciden allí, pero un nombre
    siempre se encuentra a sí mismo.
    """
    result = await db.execute(
        select(Category).filter(func.lower(Category.name) == func.lower(name))
    )
    return result.scalars().first()


async def get_categories(db: AsyncSession) -> List[Category]:
    """Obtiene todas las categorías, de la más reciente a la más antigua."""
    result = await db.execute(
        select(Category).order_by(Category.created_at.desc(), Category.id.desc())
    )
    return result.scalars().all()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE)
# ========================================

async def create_category(db: AsyncSession, category_data: Dict[str, Any]) -> Category:
    """
    Crea una nueva categoría en la base de datos.

    Los datos llegan ya validados y con los impuestos resueltos por el servicio.
    La unicidad del nombre la garantiza la constraint de la tabla.
    """
    db_category = Category(**category_data)
    db.add(db_category)
    await db.commit()
    return await get_category(db, db_category.id)


async def update_category(db: AsyncSession, db_category: Category, update_data: Dict[str, Any]) -> Category:
    """
    Actualiza una categoría existente con los campos proporcionados.
    """
    for key, value in update_data.items():
        setattr(db_category, key, value)

    db.add(db_category)  # Marca el objeto como modificado
    await db.commit()
    return await get_category(db, db_category.id)
