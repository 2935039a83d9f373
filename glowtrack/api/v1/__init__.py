"""
API v1 routes
"""

from fastapi import APIRouter
from glowtrack.api.v1 import products, tracking, catalog

api_router = APIRouter()

api_router.include_router(products.router)
api_router.include_router(tracking.router)
api_router.include_router(catalog.router)

__all__ = ["api_router"]
