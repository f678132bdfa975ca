# backend/app/api/v1/endpoints/search.py
"""
Endpoint de búsqueda global del menú.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.common_schema import ListResponse, NameQuery
from app.schemas.item_schema import ItemResponse
from app.services.item_service import item_service

router = APIRouter()


@router.get("/items", response_model=ListResponse[ItemResponse])
async def search_items(
    name: str = Query(""),
    db: AsyncSession = Depends(deps.get_db),
) -> ListResponse[ItemResponse]:
    """Busca ítems cuyo nombre contenga el texto dado (sin distinguir mayúsculas)."""
    query = NameQuery.model_validate({"name": name})
    items = await item_service.search_items(db, query.name)
    data = [ItemResponse.model_validate(item) for item in items]
    return ListResponse(count=len(data), data=data)
