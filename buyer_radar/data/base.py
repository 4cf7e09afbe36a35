from typing import Protocol, Optional, Tuple, Mapping, Any
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType

from ..core.errors import InvalidArgument, ReferenceDataError

# ----- Enumerations -----

class BuyerCategory(str, Enum):
    FLIPPER = "flipper"
    LANDLORD = "landlord"
    CASH = "cash"
    UNKNOWN = "unknown"

class EventType(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"

class EventSource(str, Enum):
    COUNTY = "county"
    MLS = "mls"
    MANUAL = "manual"

# Category filter value meaning "no category restriction"
ALL_CATEGORIES = "all"

# ----- Data shapes (thin & explicit) -----

@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidArgument("latitude out of range", {"latitude": self.latitude})
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidArgument("longitude out of range", {"longitude": self.longitude})

@dataclass(frozen=True)
class Contact:
    phone: Optional[str] = None
    email: Optional[str] = None

@dataclass(frozen=True)
class Buyer:
    id: str
    name: str
    category: BuyerCategory
    contacts: Tuple[Contact, ...] = ()

@dataclass(frozen=True)
class Property:
    id: str
    addr1: str
    city: str
    state: str
    zip: str
    location: GeoPoint

@dataclass(frozen=True)
class PurchaseEvent:
    id: str
    buyer_id: str
    property_id: str
    event_type: EventType
    event_date: date
    price: float
    source: EventSource

@dataclass(frozen=True)
class ReferenceDataset:
    """
    Immutable snapshot of the reference collections a query reads.
    Buyers and properties are indexed by id; events keep load order.
    """
    buyers: Mapping[str, Buyer] = field(default_factory=lambda: MappingProxyType({}))
    properties: Mapping[str, Property] = field(default_factory=lambda: MappingProxyType({}))
    events: Tuple[PurchaseEvent, ...] = ()

    def counts(self) -> dict:
        return {
            "buyers": len(self.buyers),
            "properties": len(self.properties),
            "events": len(self.events),
        }

# ----- Parsing raw documents -----

def _index(items, kind: str) -> Mapping[str, Any]:
    out: dict = {}
    for item in items:
        if item.id in out:
            raise ReferenceDataError(f"duplicate {kind} id", {"id": item.id})
        out[item.id] = item
    return MappingProxyType(out)

def parse_buyer(raw: dict) -> Buyer:
    return Buyer(
        id=str(raw["id"]),
        name=raw["name"],
        category=BuyerCategory(raw.get("buyer_type", raw.get("category", "unknown"))),
        contacts=tuple(
            Contact(phone=c.get("phone"), email=c.get("email"))
            for c in raw.get("contacts") or []
        ),
    )

def parse_property(raw: dict) -> Property:
    return Property(
        id=str(raw["id"]),
        addr1=raw.get("addr1", ""),
        city=raw.get("city", ""),
        state=raw.get("state", ""),
        zip=str(raw.get("zip", "")),
        location=GeoPoint(latitude=float(raw["lat"]), longitude=float(raw["lon"])),
    )

def parse_event(raw: dict) -> PurchaseEvent:
    price = float(raw["price"])
    if price <= 0:
        raise ValueError(f"price must be positive, got {price}")
    return PurchaseEvent(
        id=str(raw["id"]),
        buyer_id=str(raw["buyer_id"]),
        property_id=str(raw["property_id"]),
        event_type=EventType(raw["event_type"]),
        event_date=date.fromisoformat(raw["event_date"]),
        price=price,
        source=EventSource(raw.get("source", "manual")),
    )

def parse_dataset(doc: dict) -> ReferenceDataset:
    """
    Build a snapshot from a raw document shaped like
    {"buyers": [...], "properties": [...], "events": [...]}.

    References between collections are NOT checked here; a dangling
    buyer_id/property_id is reported by the query that trips over it.
    """
    if not isinstance(doc, dict):
        raise ReferenceDataError(
            "reference data must be a JSON object", {"type": type(doc).__name__}
        )
    try:
        buyers = [parse_buyer(b) for b in doc.get("buyers", [])]
        properties = [parse_property(p) for p in doc.get("properties", [])]
        events = [parse_event(e) for e in doc.get("events", [])]
    except (AttributeError, KeyError, TypeError, ValueError, InvalidArgument) as exc:
        raise ReferenceDataError("malformed reference data", {"error": str(exc)}) from exc

    event_ids = set()
    for ev in events:
        if ev.id in event_ids:
            raise ReferenceDataError("duplicate event id", {"id": ev.id})
        event_ids.add(ev.id)

    return ReferenceDataset(
        buyers=_index(buyers, "buyer"),
        properties=_index(properties, "property"),
        events=tuple(events),
    )

# ----- Protocols (interfaces) -----

class ReferenceDataClient(Protocol):
    async def load(self) -> ReferenceDataset: ...
