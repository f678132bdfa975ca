# backend/app/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por recurso del menú
from app.api.v1.endpoints import (
    categories,
    health,
    items,
    menu,
    search,
    subcategories,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

# Contenedor para todos los sub-routers de la v1
api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR RECURSO
# ========================================

# ESTADO DEL SERVICIO
api_router_v1.include_router(health.router, tags=["Health"])

# ROUTER DE CATEGORÍAS
# Nivel superior del menú; define los impuestos por defecto
api_router_v1.include_router(
    categories.router,              # Router con endpoints de categorías
    prefix="/categories",           # Prefijo: /api/v1/categories
    tags=["Categories"]             # Tag para documentación OpenAPI/Swagger
)

# ROUTER DE SUBCATEGORÍAS
# Heredan los impuestos de su categoría al crearse
api_router_v1.include_router(
    subcategories.router,
    prefix="/subcategories",
    tags=["Subcategories"]
)

# ROUTER DE ÍTEMS
api_router_v1.include_router(
    items.router,
    prefix="/items",
    tags=["Items"]
)

# BÚSQUEDA GLOBAL
api_router_v1.include_router(
    search.router,
    prefix="/search",
    tags=["Search"]
)

# ÁRBOL DE MENÚ
api_router_v1.include_router(
    menu.router,
    prefix="/menu",
    tags=["Menu"]
)
