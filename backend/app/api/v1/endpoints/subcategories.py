# backend/app/api/v1/endpoints/subcategories.py
"""
Endpoints REST para operaciones CRUD de subcategorías.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.payload import read_payload
from app.core.config import Settings
from app.schemas import subcategory_schema
from app.schemas.common_schema import DataResponse, ListResponse, NameQuery
from app.services.image_service import CloudinaryImageStore
from app.services.subcategory_service import subcategory_service

logger = logging.getLogger(__name__)
router = APIRouter()

SubcategoryResponse = subcategory_schema.SubcategoryResponse


@router.post("/", response_model=DataResponse[SubcategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_subcategory(
    request: Request,
    db: AsyncSession = Depends(deps.get_db),
    image_store: CloudinaryImageStore = Depends(deps.get_image_store),
    settings: Settings = Depends(deps.get_settings),
) -> DataResponse[SubcategoryResponse]:
    """Crea una subcategoría bajo una categoría existente."""
    payload, image = await read_payload(request, settings)
    subcategory_in = subcategory_schema.SubcategoryCreate.model_validate(payload)
    logger.info(f"🆕 SUBCATEGORÍA: Creando '{subcategory_in.name}' en categoría {subcategory_in.category_id}")

    subcategory = await subcategory_service.create_new_subcategory(db, subcategory_in, image_store, image)
    return DataResponse(
        message="Subcategory created successfully",
        data=SubcategoryResponse.model_validate(subcategory),
    )


@router.get("/", response_model=ListResponse[SubcategoryResponse])
async def read_subcategories(
    db: AsyncSession = Depends(deps.get_db),
) -> ListResponse[SubcategoryResponse]:
    """Obtiene todas las subcategorías, de la más reciente a la más antigua."""
    subcategories = await subcategory_service.get_all_subcategories(db)
    data = [SubcategoryResponse.model_validate(s) for s in subcategories]
    return ListResponse(count=len(data), data=data)


@router.get("/category/{category_id}", response_model=ListResponse[SubcategoryResponse])
async def read_subcategories_by_category(
    category_id: int,
    db: AsyncSession = Depends(deps.get_db),
) -> ListResponse[SubcategoryResponse]:
    """Obtiene las subcategorías de una categoría."""
    subcategories = await subcategory_service.get_subcategories_by_category(db, category_id)
    data = [SubcategoryResponse.model_validate(s) for s in subcategories]
    return ListResponse(count=len(data), data=data)


@router.get("/search/{name}", response_model=DataResponse[SubcategoryResponse])
async def read_subcategory_by_name(
    name: str,
    db: AsyncSession = Depends(deps.get_db),
) -> DataResponse[SubcategoryResponse]:
    """Obtiene una subcategoría por su nombre exacto (sin distinguir mayúsculas)."""
    query = NameQuery.model_validate({"name": name})
    subcategory = await subcategory_service.get_subcategory_by_name(db, query.name)
    return DataResponse(data=SubcategoryResponse.model_validate(subcategory))


@router.get("/{subcategory_id}", response_model=DataResponse[SubcategoryResponse])
async def read_subcategory(
    subcategory_id: int,
    db: AsyncSession = Depends(deps.get_db),
) -> DataResponse[SubcategoryResponse]:
    """Obtiene una subcategoría por su ID."""
    subcategory = await subcategory_service.get_subcategory_by_id(db, subcategory_id)
    return DataResponse(data=SubcategoryResponse.model_validate(subcategory))


@router.put("/{subcategory_id}", response_model=DataResponse[SubcategoryResponse])
async def update_subcategory(
    subcategory_id: int,
    request: Request,
    db: AsyncSession = Depends(deps.get_db),
    image_store: CloudinaryImageStore = Depends(deps.get_image_store),
    settings: Settings = Depends(deps.get_settings),
) -> DataResponse[SubcategoryResponse]:
    """Actualiza una subcategoría existente."""
    payload, image = await read_payload(request, settings)
    subcategory_in = subcategory_schema.SubcategoryUpdate.model_validate(payload)
    logger.info(f"🔄 SUBCATEGORÍA: Actualizando subcategoría id={subcategory_id}")

    subcategory = await subcategory_service.update_existing_subcategory(
        db, subcategory_id, subcategory_in, image_store, image
    )
    return DataResponse(
        message="Subcategory updated successfully",
        data=SubcategoryResponse.model_validate(subcategory),
    )
