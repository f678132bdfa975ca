# backend/app/services/subcategory_service.py
"""
Servicio para operaciones de negocio relacionadas con subcategorías.

Una subcategoría siempre cuelga de una categoría existente. Si al crearla no
se informan sus impuestos, se copian los de la categoría padre en ese
momento; cambios posteriores en el padre no se propagan.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.crud import category_crud, subcategory_crud
from app.db.models.category_model import Category
from app.db.models.subcategory_model import Subcategory
from app.schemas import subcategory_schema
from app.services.image_service import CloudinaryImageStore, ImageUpload, discard_image, replace_image
from app.services.tax_rules import TaxSettings, apply_tax_change, inherit_tax

logger = logging.getLogger(__name__)


class SubcategoryService:
    """Servicio para operaciones de negocio relacionadas con subcategorías."""

    async def _get_parent_category(self, db: AsyncSession, category_id: int, message: str) -> Category:
        parent = await category_crud.get_category(db, category_id=category_id)
        if not parent:
            logger.warning(f"⚠️ SUBCATEGORÍA: Categoría padre no encontrada id={category_id}")
            raise NotFoundError(message)
        return parent

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_subcategory_by_id(self, db: AsyncSession, subcategory_id: int) -> Subcategory:
        subcategory = await subcategory_crud.get_subcategory(db, subcategory_id=subcategory_id)
        if not subcategory:
            logger.warning(f"⚠️ SUBCATEGORÍA: No encontrada id={subcategory_id}")
            raise NotFoundError("Subcategory not found")
        return subcategory

    async def get_subcategory_by_name(self, db: AsyncSession, name: str) -> Subcategory:
        subcategory = await subcategory_crud.get_subcategory_by_name(db, name=name)
        if not subcategory:
            logger.warning(f"⚠️ SUBCATEGORÍA: No encontrada nombre='{name}'")
            raise NotFoundError("Subcategory not found")
        return subcategory

    async def get_all_subcategories(self, db: AsyncSession) -> List[Subcategory]:
        return await subcategory_crud.get_subcategories(db)

    async def get_subcategories_by_category(self, db: AsyncSession, category_id: int) -> List[Subcategory]:
        """Subcategorías de una categoría; la categoría debe existir."""
        await self._get_parent_category(db, category_id, "Category not found")
        return await subcategory_crud.get_subcategories(db, category_id=category_id)

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_subcategory(
        self,
        db: AsyncSession,
        subcategory_in: subcategory_schema.SubcategoryCreate,
        image_store: CloudinaryImageStore,
        image: Optional[ImageUpload] = None,
    ) -> Subcategory:
        """
        Crea una subcategoría bajo una categoría existente.

        Los impuestos no informados se heredan de la categoría padre.
        """
        parent = await self._get_parent_category(db, subcategory_in.category_id, "Parent category not found")

        tax_settings = inherit_tax(
            subcategory_in.tax_applicability,
            subcategory_in.tax,
            TaxSettings.of(parent),
        )

        image_url = None
        if image is not None:
            image_url = await image_store.upload(image, settings.SUBCATEGORY_IMAGE_FOLDER)

        try:
            subcategory = await subcategory_crud.create_subcategory(db, {
                "name": subcategory_in.name,
                "description": subcategory_in.description,
                "image": image_url,
                "category_id": parent.id,
                "tax_applicability": tax_settings.applicability,
                "tax": tax_settings.tax,
            })
        except Exception:
            await db.rollback()
            await discard_image(image_store, image_url)
            raise
        logger.info(
            f"✅ SUBCATEGORÍA: Creada '{subcategory.name}' (id={subcategory.id}) "
            f"en categoría {parent.id}, impuesto={tax_settings.tax}"
        )
        return subcategory

    async def update_existing_subcategory(
        self,
        db: AsyncSession,
        subcategory_id: int,
        subcategory_in: subcategory_schema.SubcategoryUpdate,
        image_store: CloudinaryImageStore,
        image: Optional[ImageUpload] = None,
    ) -> Subcategory:
        """
        Actualiza una subcategoría existente.

        Si se cambia de categoría padre, la nueva debe existir. Al activar el
        impuesto sin valor propio se toma el tax actual de la categoría padre.
        """
        db_subcategory = await self.get_subcategory_by_id(db, subcategory_id)

        update_data = {}
        if subcategory_in.name is not None:
            update_data["name"] = subcategory_in.name
        if "description" in subcategory_in.model_fields_set:
            update_data["description"] = subcategory_in.description

        parent_id = db_subcategory.category_id
        if subcategory_in.category_id is not None and subcategory_in.category_id != parent_id:
            await self._get_parent_category(db, subcategory_in.category_id, "New parent category not found")
            parent_id = subcategory_in.category_id
            update_data["category_id"] = parent_id

        fallback_tax = None
        if subcategory_in.tax_applicability and subcategory_in.tax is None and db_subcategory.tax is None:
            parent = await self._get_parent_category(db, parent_id, "Parent category not found")
            fallback_tax = parent.tax

        tax_settings = apply_tax_change(
            TaxSettings.of(db_subcategory),
            applicability=subcategory_in.tax_applicability,
            tax=subcategory_in.tax,
            fallback_tax=fallback_tax,
        )
        update_data["tax_applicability"] = tax_settings.applicability
        update_data["tax"] = tax_settings.tax

        if image is not None:
            update_data["image"] = await replace_image(
                image_store, db_subcategory.image, image, settings.SUBCATEGORY_IMAGE_FOLDER
            )

        try:
            subcategory = await subcategory_crud.update_subcategory(db, db_subcategory, update_data)
        except Exception:
            await db.rollback()
            await discard_image(image_store, update_data.get("image"))
            raise
        logger.info(f"🔄 SUBCATEGORÍA: Actualizada '{subcategory.name}' (id={subcategory.id})")
        return subcategory

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

subcategory_service = SubcategoryService()
