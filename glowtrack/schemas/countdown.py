from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from glowtrack.schemas.product import ExpirationStatusResponse


class CountdownResponse(BaseModel):
    months: int = Field(..., ge=0)
    weeks: int = Field(..., ge=0)
    days: int = Field(..., ge=0)
    expired: bool

    model_config = ConfigDict(from_attributes=True)


class TrackingResponse(BaseModel):
    product_id: str
    governing_expiration: Optional[datetime]
    countdown: CountdownResponse


class ProductStatusResponse(ExpirationStatusResponse):
    product_id: str
    countdown: CountdownResponse


class FreshnessSummaryResponse(BaseModel):
    FRESH: int
    EXPIRY_SOON: int
    EXPIRED: int
    UNTRACKED: int
    total: int
