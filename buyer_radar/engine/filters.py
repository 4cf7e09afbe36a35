import calendar
import math
from datetime import date
from typing import List, Union

from ..core.errors import DataIntegrityError, InvalidArgument
from ..data.base import (
    ALL_CATEGORIES,
    BuyerCategory,
    EventType,
    GeoPoint,
    PurchaseEvent,
    ReferenceDataset,
)
from .geo import distance_miles

CategoryFilter = Union[BuyerCategory, str]

CATEGORY_CHOICES = tuple(c.value for c in BuyerCategory) + (ALL_CATEGORIES,)


def since_date(today: date, months: int) -> date:
    """
    `today` minus `months` calendar months.

    If today's day-of-month does not exist in the target month the day is
    clamped to that month's last day: 2025-03-31 minus 1 month is 2025-02-28.
    A lookback reaching before year 1 is date.min, i.e. no lower bound.
    """
    if months is None or months < 0:
        raise InvalidArgument("months must be a non-negative integer", {"months": months})
    total = today.year * 12 + (today.month - 1) - int(months)
    year, month = divmod(total, 12)
    if year < 1:
        return date.min
    month += 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def normalize_category(category: CategoryFilter) -> str:
    """Lowercased category value, or InvalidArgument if it isn't one we know."""
    value = category.value if isinstance(category, BuyerCategory) else str(category).strip().lower()
    if value not in CATEGORY_CHOICES:
        raise InvalidArgument(
            "unknown category", {"category": category, "allowed": list(CATEGORY_CHOICES)}
        )
    return value


def filter_events(
    dataset: ReferenceDataset,
    center: GeoPoint,
    radius_miles: float,
    since: date,
    category: CategoryFilter = ALL_CATEGORIES,
) -> List[PurchaseEvent]:
    """
    Purchase events on or after `since`, at properties within `radius_miles`
    of `center`, bought by a buyer of `category` ("all" for any).
    """
    if radius_miles is None or not (math.isfinite(radius_miles) and radius_miles > 0):
        raise InvalidArgument("radius_miles must be a positive finite number", {"radius_miles": radius_miles})
    wanted = normalize_category(category)

    out: List[PurchaseEvent] = []
    for ev in dataset.events:
        # Resolve both references up front so corrupt rows fail the query
        # no matter which predicate would have rejected them first.
        buyer = dataset.buyers.get(ev.buyer_id)
        if buyer is None:
            raise DataIntegrityError(
                "event references unknown buyer", {"event_id": ev.id, "buyer_id": ev.buyer_id}
            )
        prop = dataset.properties.get(ev.property_id)
        if prop is None:
            raise DataIntegrityError(
                "event references unknown property",
                {"event_id": ev.id, "property_id": ev.property_id},
            )

        if ev.event_type is not EventType.PURCHASE:
            continue
        if ev.event_date < since:
            continue
        if wanted != ALL_CATEGORIES and buyer.category.value != wanted:
            continue
        if distance_miles(center, prop.location) > radius_miles:
            continue
        out.append(ev)
    return out
