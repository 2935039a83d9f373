from glowtrack.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ExpirationStatusResponse,
    CategoryResponse,
    PaoOptionsResponse,
)
from glowtrack.schemas.countdown import (
    CountdownResponse,
    TrackingResponse,
    ProductStatusResponse,
    FreshnessSummaryResponse,
)

__all__ = [
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ExpirationStatusResponse",
    "CategoryResponse",
    "PaoOptionsResponse",
    "CountdownResponse",
    "TrackingResponse",
    "ProductStatusResponse",
    "FreshnessSummaryResponse",
]
