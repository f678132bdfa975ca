# backend/app/services/item_service.py
"""
Capa de servicios para operaciones de negocio relacionadas con ítems.

Orden de comprobaciones en cada escritura:
1. Padre exclusivo (categoría XOR subcategoría) y existencia del padre
2. Impuestos (tax obligatorio con tax_applicability)
3. Descuento no superior al importe base
4. Subida de la imagen, si la hay
5. Normalización (total_amount) y persistencia

Ninguna comprobación modifica el registro guardado: si alguna falla, el
ítem queda como estaba.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.crud import category_crud, item_crud, subcategory_crud
from app.db.models.item_model import Item
from app.schemas import item_schema
from app.services.image_service import CloudinaryImageStore, ImageUpload, discard_image, replace_image
from app.services.item_rules import check_discount, check_exclusive_parent, resolve_parent_update
from app.services.tax_rules import TaxSettings, apply_tax_change, resolve_new_tax

logger = logging.getLogger(__name__)


class ItemService:
    """
    Servicio para operaciones de negocio relacionadas con ítems.

    Los ítems no heredan impuestos en el servidor: el cliente envía los
    valores ya resueltos y aquí solo se exige que sean coherentes.
    """

    async def _ensure_parent_exists(
        self, db: AsyncSession, category_id: Optional[int], subcategory_id: Optional[int]
    ) -> None:
        if category_id is not None and not await category_crud.get_category(db, category_id=category_id):
            logger.warning(f"⚠️ ÍTEM: Categoría no encontrada id={category_id}")
            raise NotFoundError("Category not found")
        if subcategory_id is not None and not await subcategory_crud.get_subcategory(db, subcategory_id=subcategory_id):
            logger.warning(f"⚠️ ÍTEM: Subcategoría no encontrada id={subcategory_id}")
            raise NotFoundError("Subcategory not found")

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_item_by_id(self, db: AsyncSession, item_id: int) -> Item:
        item = await item_crud.get_item(db, item_id=item_id)
        if not item:
            logger.warning(f"⚠️ ÍTEM: No encontrado id={item_id}")
            raise NotFoundError("Item not found")
        return item

    async def get_item_by_name(self, db: AsyncSession, name: str) -> Item:
        item = await item_crud.get_item_by_name(db, name=name)
        if not item:
            logger.warning(f"⚠️ ÍTEM: No encontrado nombre='{name}'")
            raise NotFoundError("Item not found")
        return item

    async def get_all_items(self, db: AsyncSession) -> List[Item]:
        return await item_crud.get_items(db)

    async def get_items_by_category(self, db: AsyncSession, category_id: int) -> List[Item]:
        """Ítems de la categoría y de todas sus subcategorías."""
        await self._ensure_parent_exists(db, category_id, None)
        return await item_crud.get_items_by_category(db, category_id=category_id)

    async def get_items_by_subcategory(self, db: AsyncSession, subcategory_id: int) -> List[Item]:
        await self._ensure_parent_exists(db, None, subcategory_id)
        return await item_crud.get_items_by_subcategory(db, subcategory_id=subcategory_id)

    async def search_items(self, db: AsyncSession, search_term: str) -> List[Item]:
        return await item_crud.search_items_by_name(db, search_term=search_term)

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_item(
        self,
        db: AsyncSession,
        item_in: item_schema.ItemCreate,
        image_store: CloudinaryImageStore,
        image: Optional[ImageUpload] = None,
    ) -> Item:
        check_exclusive_parent(item_in.category_id, item_in.subcategory_id)
        await self._ensure_parent_exists(db, item_in.category_id, item_in.subcategory_id)

        tax_settings = resolve_new_tax(item_in.tax_applicability, item_in.tax)
        check_discount(item_in.base_amount, item_in.discount)

        image_url = None
        if image is not None:
            image_url = await image_store.upload(image, settings.ITEM_IMAGE_FOLDER)

        try:
            item = await item_crud.create_item(db, {
                "name": item_in.name,
                "description": item_in.description,
                "image": image_url,
                "tax_applicability": tax_settings.applicability,
                "tax": tax_settings.tax,
                "base_amount": item_in.base_amount,
                "discount": item_in.discount,
                "category_id": item_in.category_id,
                "subcategory_id": item_in.subcategory_id,
            })
        except Exception:
            await db.rollback()
            await discard_image(image_store, image_url)
            raise
        logger.info(f"✅ ÍTEM: Creado '{item.name}' (id={item.id}) total={item.total_amount}")
        return item

    async def update_existing_item(
        self,
        db: AsyncSession,
        item_id: int,
        item_in: item_schema.ItemUpdate,
        image_store: CloudinaryImageStore,
        image: Optional[ImageUpload] = None,
    ) -> Item:
        """
        Actualiza un ítem existente.

        Todos los cambios se calculan y validan antes de tocar el registro.
        total_amount se recalcula siempre, aunque no cambien los importes.
        """
        db_item = await self.get_item_by_id(db, item_id)
        fields_set = item_in.model_fields_set

        update_data = {}
        if item_in.name is not None:
            update_data["name"] = item_in.name
        if "description" in fields_set:
            update_data["description"] = item_in.description

        if "category_id" in fields_set or "subcategory_id" in fields_set:
            category_id, subcategory_id = resolve_parent_update(
                db_item.category_id,
                db_item.subcategory_id,
                item_in.category_id,
                item_in.subcategory_id,
                fields_set,
            )
            await self._ensure_parent_exists(
                db,
                category_id if category_id != db_item.category_id else None,
                subcategory_id if subcategory_id != db_item.subcategory_id else None,
            )
            update_data["category_id"] = category_id
            update_data["subcategory_id"] = subcategory_id

        tax_settings = apply_tax_change(
            TaxSettings.of(db_item),
            applicability=item_in.tax_applicability,
            tax=item_in.tax,
        )
        update_data["tax_applicability"] = tax_settings.applicability
        update_data["tax"] = tax_settings.tax

        base_amount = db_item.base_amount if item_in.base_amount is None else item_in.base_amount
        discount = db_item.discount if item_in.discount is None else item_in.discount
        check_discount(base_amount, discount)
        update_data["base_amount"] = base_amount
        update_data["discount"] = discount

        if image is not None:
            update_data["image"] = await replace_image(
                image_store, db_item.image, image, settings.ITEM_IMAGE_FOLDER
            )

        try:
            item = await item_crud.update_item(db, db_item, update_data)
        except Exception:
            await db.rollback()
            await discard_image(image_store, update_data.get("image"))
            raise
        logger.info(f"🔄 ÍTEM: Actualizado '{item.name}' (id={item.id}) total={item.total_amount}")
        return item

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

item_service = ItemService()
