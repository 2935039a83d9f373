from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime

from glowtrack.core.config import settings
from glowtrack.models.product import ProductCategory
from glowtrack.services.expiration import FreshnessTier
from glowtrack.utils.date_helpers import to_utc_naive
from glowtrack.utils.validators import validate_pao_months


def _check_pao_months(v: Optional[int]) -> Optional[int]:
    if not validate_pao_months(v, settings.PAO_MAX_MONTHS):
        raise ValueError(
            f"pao_months must be between 1 and {settings.PAO_MAX_MONTHS}"
        )
    return v


class ProductCreate(BaseModel):
    name: str = Field("", max_length=200)
    category: ProductCategory = ProductCategory.LIPS
    pao_months: Optional[int] = None
    expiry_date: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return v.strip()

    @field_validator("pao_months")
    @classmethod
    def validate_pao_months(cls, v):
        return _check_pao_months(v)

    @field_validator("expiry_date")
    @classmethod
    def normalize_expiry_date(cls, v):
        return to_utc_naive(v)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    category: Optional[ProductCategory] = None
    pao_months: Optional[int] = None
    expiry_date: Optional[datetime] = None

    @field_validator("name", "category")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return v.strip()

    @field_validator("pao_months")
    @classmethod
    def validate_pao_months(cls, v):
        return _check_pao_months(v)

    @field_validator("expiry_date")
    @classmethod
    def normalize_expiry_date(cls, v):
        return to_utc_naive(v)


class ExpirationStatusResponse(BaseModel):
    governing_expiration: Optional[datetime]
    freshness_tier: FreshnessTier
    label: str
    days_remaining: Optional[int]
    tracking_method: str
    formatted_expiry_date: Optional[str]


class ProductResponse(BaseModel):
    id: str
    name: str
    display_name: str
    category: ProductCategory
    date_added: datetime
    pao_months: Optional[int]
    expiry_date: Optional[datetime]

    status: Optional[ExpirationStatusResponse] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(BaseModel):
    value: ProductCategory
    label: str


class PaoOptionsResponse(BaseModel):
    options: List[int]
    max_months: int
