from glowtrack.utils.date_helpers import (
    to_utc_naive,
    add_months,
    start_of_day,
    calendar_days_between,
    whole_months_between,
    format_short_date,
)
from glowtrack.utils.validators import (
    validate_pao_months,
    escape_like,
)
from glowtrack.utils.exceptions import (
    ProductNotFoundException,
    TrackingNotFoundException,
    ProductNotFoundError,
    ProductAlreadyExistsError,
)

__all__ = [
    "to_utc_naive",
    "add_months",
    "start_of_day",
    "calendar_days_between",
    "whole_months_between",
    "format_short_date",
    "validate_pao_months",
    "escape_like",
    "ProductNotFoundException",
    "TrackingNotFoundException",
    "ProductNotFoundError",
    "ProductAlreadyExistsError",
]
