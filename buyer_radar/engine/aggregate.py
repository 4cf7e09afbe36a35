from dataclasses import dataclass, field
from datetime import date
from statistics import median
from typing import Dict, Iterable, List, Tuple

from ..core.errors import DataIntegrityError
from ..data.base import BuyerCategory, Contact, PurchaseEvent, ReferenceDataset


@dataclass(frozen=True)
class BuyerSummary:
    buyer_id: str
    name: str
    category: BuyerCategory
    contacts: Tuple[Contact, ...]
    deal_count: int
    most_recent_deal_date: date
    median_price: float
    latest_property_id: str


@dataclass
class _Accumulator:
    events: List[PurchaseEvent] = field(default_factory=list)

    def add(self, ev: PurchaseEvent) -> None:
        self.events.append(ev)

    def latest(self) -> PurchaseEvent:
        # Same-day deals: lowest event id wins so markers are stable
        return min(self.events, key=lambda e: (-e.event_date.toordinal(), e.id))


def median_price(prices: Iterable[float]) -> float:
    """Middle price, or the mean of the two middle prices for even counts."""
    values = sorted(prices)
    if not values:
        raise ValueError("median_price() needs at least one price")
    return median(values)


def rank_key(summary: BuyerSummary):
    """Most deals first, then most recent deal, then buyer id ascending."""
    return (-summary.deal_count, -summary.most_recent_deal_date.toordinal(), summary.buyer_id)


def aggregate(events: Iterable[PurchaseEvent], dataset: ReferenceDataset) -> List[BuyerSummary]:
    """
    One ranked BuyerSummary per buyer appearing in `events`.
    Empty input gives an empty list.
    """
    groups: Dict[str, _Accumulator] = {}
    for ev in events:
        groups.setdefault(ev.buyer_id, _Accumulator()).add(ev)

    out: List[BuyerSummary] = []
    for buyer_id, acc in groups.items():
        buyer = dataset.buyers.get(buyer_id)
        if buyer is None:
            raise DataIntegrityError("event references unknown buyer", {"buyer_id": buyer_id})
        latest = acc.latest()
        out.append(BuyerSummary(
            buyer_id=buyer.id,
            name=buyer.name,
            category=buyer.category,
            contacts=buyer.contacts,
            deal_count=len(acc.events),
            most_recent_deal_date=latest.event_date,
            median_price=median_price(e.price for e in acc.events),
            latest_property_id=latest.property_id,
        ))

    out.sort(key=rank_key)
    return out
