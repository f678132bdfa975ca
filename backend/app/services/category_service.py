# backend/app/services/category_service.py
"""
Servicio para operaciones de negocio relacionadas con categorías.

Este servicio se encarga de gestionar la lógica de negocio para el manejo de
categorías: resolución de impuestos, unicidad del nombre y gestión de la
imagen asociada.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import DuplicateError, NotFoundError
from app.crud import category_crud
from app.db.models.category_model import Category
from app.schemas import category_schema
from app.services.image_service import CloudinaryImageStore, ImageUpload, discard_image, replace_image
from app.services.tax_rules import TaxSettings, apply_tax_change, resolve_new_tax

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Características:
    - El tax es obligatorio cuando tax_applicability está activo
    - Desactivar tax_applicability borra el tax guardado
    - Nombre único (la colisión se informa como error de duplicado)
    - Subida y reemplazo de la imagen en el servicio externo
    """

    async def _ensure_unique_name(self, db: AsyncSession, name: str, category_id: Optional[int] = None) -> None:
        """El nombre se comprueba antes de tocar imágenes; la constraint única queda como respaldo."""
        existing = await category_crud.get_category_by_name(db, name=name)
        if existing and existing.id != category_id:
            logger.warning(f"⚠️ CATEGORÍA: Nombre duplicado '{name}'")
            raise DuplicateError("name")

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_category_by_id(self, db: AsyncSession, category_id: int) -> Category:
        category = await category_crud.get_category(db, category_id=category_id)
        if not category:
            logger.warning(f"⚠️ CATEGORÍA: No encontrada id={category_id}")
            raise NotFoundError("Category not found")
        return category

    async def get_category_by_name(self, db: AsyncSession, name: str) -> Category:
        category = await category_crud.get_category_by_name(db, name=name)
        if not category:
            logger.warning(f"⚠️ CATEGORÍA: No encontrada nombre='{name}'")
            raise NotFoundError("Category not found")
        return category

    async def get_all_categories(self, db: AsyncSession) -> List[Category]:
        return await category_crud.get_categories(db)

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_category(
        self,
        db: AsyncSession,
        category_in: category_schema.CategoryCreate,
        image_store: CloudinaryImageStore,
        image: Optional[ImageUpload] = None,
    ) -> Category:
        """
        Crea una nueva categoría.

        Primero se resuelven los impuestos (puede rechazar la petición), después
        se sube la imagen si la hay y por último se persiste.
        """
        tax_settings = resolve_new_tax(category_in.tax_applicability, category_in.tax)
        await self._ensure_unique_name(db, category_in.name)

        image_url = None
        if image is not None:
            image_url = await image_store.upload(image, settings.CATEGORY_IMAGE_FOLDER)

        category_data = {
            "name": category_in.name,
            "description": category_in.description,
            "image": image_url,
            "tax_applicability": tax_settings.applicability,
            "tax": tax_settings.tax,
            "tax_type": category_in.tax_type.value,
        }
        try:
            category = await category_crud.create_category(db, category_data)
        except IntegrityError as e:
            await db.rollback()
            await discard_image(image_store, image_url)
            raise DuplicateError("name") from e

        logger.info(f"✅ CATEGORÍA: Creada '{category.name}' (id={category.id})")
        return category

    async def update_existing_category(
        self,
        db: AsyncSession,
        category_id: int,
        category_in: category_schema.CategoryUpdate,
        image_store: CloudinaryImageStore,
        image: Optional[ImageUpload] = None,
    ) -> Category:
        """
        Actualiza una categoría existente.

        Solo se modifican los campos informados. Los cambios de impuestos siguen
        la máquina de estados de tax_rules.apply_tax_change.
        """
        db_category = await self.get_category_by_id(db, category_id)
        if category_in.name is not None:
            await self._ensure_unique_name(db, category_in.name, category_id)

        update_data = {}
        if category_in.name is not None:
            update_data["name"] = category_in.name
        if "description" in category_in.model_fields_set:
            update_data["description"] = category_in.description
        if category_in.tax_type is not None:
            update_data["tax_type"] = category_in.tax_type.value

        tax_settings = apply_tax_change(
            TaxSettings.of(db_category),
            applicability=category_in.tax_applicability,
            tax=category_in.tax,
        )
        update_data["tax_applicability"] = tax_settings.applicability
        update_data["tax"] = tax_settings.tax

        if image is not None:
            update_data["image"] = await replace_image(
                image_store, db_category.image, image, settings.CATEGORY_IMAGE_FOLDER
            )

        try:
            category = await category_crud.update_category(db, db_category, update_data)
        except IntegrityError as e:
            await db.rollback()
            await discard_image(image_store, update_data.get("image"))
            raise DuplicateError("name") from e

        logger.info(f"🔄 CATEGORÍA: Actualizada '{category.name}' (id={category.id})")
        return category

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

# Instancia única del servicio para uso en endpoints
category_service = CategoryService()
