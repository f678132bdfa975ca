# backend/app/api/v1/endpoints/categories.py
"""
Endpoints REST para operaciones CRUD de categorías.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.payload import read_payload
from app.core.config import Settings
from app.schemas import category_schema
from app.schemas.common_schema import DataResponse, ListResponse, NameQuery
from app.services.category_service import category_service
from app.services.image_service import CloudinaryImageStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=DataResponse[category_schema.CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(
    request: Request,
    db: AsyncSession = Depends(deps.get_db),
    image_store: CloudinaryImageStore = Depends(deps.get_image_store),
    settings: Settings = Depends(deps.get_settings),
) -> DataResponse[category_schema.CategoryResponse]:
    """Crea una nueva categoría. Acepta JSON o multipart con el campo 'image'."""
    payload, image = await read_payload(request, settings)
    category_in = category_schema.CategoryCreate.model_validate(payload)
    logger.info(f"🆕 CATEGORÍA: Creando categoría '{category_in.name}'")

    category = await category_service.create_new_category(db, category_in, image_store, image)
    return DataResponse(
        message="Category created successfully",
        data=category_schema.CategoryResponse.model_validate(category),
    )


@router.get("/", response_model=ListResponse[category_schema.CategoryResponse])
async def read_categories(
    db: AsyncSession = Depends(deps.get_db),
) -> ListResponse[category_schema.CategoryResponse]:
    """Obtiene todas las categorías, de la más reciente a la más antigua."""
    categories = await category_service.get_all_categories(db)
    data = [category_schema.CategoryResponse.model_validate(c) for c in categories]
    return ListResponse(count=len(data), data=data)


@router.get("/search/{name}", response_model=DataResponse[category_schema.CategoryResponse])
async def read_category_by_name(
    name: str,
    db: AsyncSession = Depends(deps.get_db),
) -> DataResponse[category_schema.CategoryResponse]:
    """Obtiene una categoría por su nombre exacto (sin distinguir mayúsculas)."""
    query = NameQuery.model_validate({"name": name})
    category = await category_service.get_category_by_name(db, query.name)
    return DataResponse(data=category_schema.CategoryResponse.model_validate(category))


@router.get("/{category_id}", response_model=DataResponse[category_schema.CategoryResponse])
async def read_category(
    category_id: int,
    db: AsyncSession = Depends(deps.get_db),
) -> DataResponse[category_schema.CategoryResponse]:
    """Obtiene los detalles de una categoría específica por su ID."""
    category = await category_service.get_category_by_id(db, category_id)
    return DataResponse(data=category_schema.CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=DataResponse[category_schema.CategoryResponse])
async def update_category(
    category_id: int,
    request: Request,
    db: AsyncSession = Depends(deps.get_db),
    image_store: CloudinaryImageStore = Depends(deps.get_image_store),
    settings: Settings = Depends(deps.get_settings),
) -> DataResponse[category_schema.CategoryResponse]:
    """Actualiza una categoría existente."""
    payload, image = await read_payload(request, settings)
    category_in = category_schema.CategoryUpdate.model_validate(payload)
    logger.info(f"🔄 CATEGORÍA: Actualizando categoría id={category_id}")

    category = await category_service.update_existing_category(db, category_id, category_in, image_store, image)
    return DataResponse(
        message="Category updated successfully",
        data=category_schema.CategoryResponse.model_validate(category),
    )
