from fastapi import APIRouter
from typing import List

from glowtrack.core.config import settings
from glowtrack.models.product import ProductCategory
from glowtrack.schemas.product import CategoryResponse, PaoOptionsResponse

router = APIRouter(tags=["Catalog"])


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories():
    return [
        CategoryResponse(value=category, label=category.label)
        for category in ProductCategory
    ]


@router.get("/pao-options", response_model=PaoOptionsResponse)
def list_pao_options():
    return PaoOptionsResponse(
        options=settings.PAO_OPTIONS, max_months=settings.PAO_MAX_MONTHS
    )
