# backend/app/api/v1/endpoints/items.py
"""
Endpoints REST para operaciones CRUD y consultas de ítems del menú.

Las rutas fijas (search, category, subcategory, name) se declaran antes
de /{item_id} para que no se interpreten como un id.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.payload import read_payload
from app.core.config import Settings
from app.schemas import item_schema
from app.schemas.common_schema import DataResponse, ListResponse, NameQuery
from app.services.image_service import CloudinaryImageStore
from app.services.item_service import item_service

logger = logging.getLogger(__name__)
router = APIRouter()

ItemResponse = item_schema.ItemResponse


def to_list_response(items) -> ListResponse[ItemResponse]:
    data = [ItemResponse.model_validate(item) for item in items]
    return ListResponse(count=len(data), data=data)


# ========================================
# ESCRITURA
# ========================================

@router.post("/", response_model=DataResponse[ItemResponse], status_code=status.HTTP_201_CREATED)
async def create_item(
    request: Request,
    db: AsyncSession = Depends(deps.get_db),
    image_store: CloudinaryImageStore = Depends(deps.get_image_store),
    settings: Settings = Depends(deps.get_settings),
) -> DataResponse[ItemResponse]:
    """
    Crea un ítem bajo una categoría o una subcategoría (exactamente una).

    totalAmount no se acepta del cliente: se calcula como baseAmount - discount.
    """
    payload, image = await read_payload(request, settings)
    item_in = item_schema.ItemCreate.model_validate(payload)
    logger.info(f"🆕 ÍTEM: Creando '{item_in.name}'")

    item = await item_service.create_new_item(db, item_in, image_store, image)
    return DataResponse(message="Item created successfully", data=ItemResponse.model_validate(item))


@router.put("/{item_id}", response_model=DataResponse[ItemResponse])
async def update_item(
    item_id: int,
    request: Request,
    db: AsyncSession = Depends(deps.get_db),
    image_store: CloudinaryImageStore = Depends(deps.get_image_store),
    settings: Settings = Depends(deps.get_settings),
) -> DataResponse[ItemResponse]:
    payload, image = await read_payload(request, settings)
    item_in = item_schema.ItemUpdate.model_validate(payload)
    logger.info(f"🔄 ÍTEM: Actualizando ítem id={item_id}")

    item = await item_service.update_existing_item(db, item_id, item_in, image_store, image)
    return DataResponse(message="Item updated successfully", data=ItemResponse.model_validate(item))


# ========================================
# CONSULTAS
# ========================================

@router.get("/", response_model=ListResponse[ItemResponse])
async def read_items(db: AsyncSession = Depends(deps.get_db)) -> ListResponse[ItemResponse]:
    """Obtiene todos los ítems, del más reciente al más antiguo."""
    return to_list_response(await item_service.get_all_items(db))


@router.get("/search", response_model=ListResponse[ItemResponse])
async def search_items(
    name: str = Query(""),
    db: AsyncSession = Depends(deps.get_db),
) -> ListResponse[ItemResponse]:
    """Búsqueda por fragmento del nombre, sin distinguir mayúsculas."""
    query = NameQuery.model_validate({"name": name})
    return to_list_response(await item_service.search_items(db, query.name))


@router.get("/category/{category_id}", response_model=ListResponse[ItemResponse])
async def read_items_by_category(
    category_id: int,
    db: AsyncSession = Depends(deps.get_db),
) -> ListResponse[ItemResponse]:
    """Ítems directos de la categoría más los de todas sus subcategorías."""
    return to_list_response(await item_service.get_items_by_category(db, category_id))


@router.get("/subcategory/{subcategory_id}", response_model=ListResponse[ItemResponse])
async def read_items_by_subcategory(
    subcategory_id: int,
    db: AsyncSession = Depends(deps.get_db),
) -> ListResponse[ItemResponse]:
    return to_list_response(await item_service.get_items_by_subcategory(db, subcategory_id))


@router.get("/name/{name}", response_model=DataResponse[ItemResponse])
async def read_item_by_name(
    name: str,
    db: AsyncSession = Depends(deps.get_db),
) -> DataResponse[ItemResponse]:
    query = NameQuery.model_validate({"name": name})
    item = await item_service.get_item_by_name(db, query.name)
    return DataResponse(data=ItemResponse.model_validate(item))


@router.get("/{item_id}", response_model=DataResponse[ItemResponse])
async def read_item(
    item_id: int,
    db: AsyncSession = Depends(deps.get_db),
) -> DataResponse[ItemResponse]:
    item = await item_service.get_item_by_id(db, item_id)
    return DataResponse(data=ItemResponse.model_validate(item))
