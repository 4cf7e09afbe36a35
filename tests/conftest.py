"""Shared fixtures: the bundled seed dataset and a compact San Antonio scenario."""

from datetime import date

import pytest

from buyer_radar.core.cache import cache
from buyer_radar.data.base import GeoPoint, parse_dataset
from buyer_radar.data.seed import SEED_DOCUMENT

SAN_ANTONIO = GeoPoint(latitude=29.4241, longitude=-98.4936)

# A "now" for which a 12-month lookback starts at 2025-02-01: the 2025
# events are inside the window and every 2024 event falls outside it.
TODAY = date(2026, 2, 1)


def scenario_document() -> dict:
    """
    b1 bought three houses 0.2–0.5 mi from downtown (two in 2025, one in
    2024); b3 bought b1's first house back in 2024. b2 sold a house nearby,
    which must never count as buying activity.
    """
    return {
        "buyers": [
            {"id": "b1", "name": "Evergreen Residential LLC", "buyer_type": "flipper",
             "contacts": [{"phone": "210-555-0187"}]},
            {"id": "b2", "name": "Alamo Rentals Group", "buyer_type": "landlord",
             "contacts": [{"phone": "210-555-0142"}]},
            {"id": "b3", "name": "River City Capital", "buyer_type": "cash",
             "contacts": [{"phone": "210-555-0199"}]},
        ],
        "properties": [
            # ~0.21 mi north of center
            {"id": "q1", "addr1": "300 Main Ave", "city": "San Antonio", "state": "TX",
             "zip": "78205", "lat": 29.4271, "lon": -98.4936},
            # ~0.48 mi west of center
            {"id": "q2", "addr1": "600 W Commerce St", "city": "San Antonio", "state": "TX",
             "zip": "78207", "lat": 29.4241, "lon": -98.5016},
            # ~0.48 mi north of center
            {"id": "q3", "addr1": "800 N Flores St", "city": "San Antonio", "state": "TX",
             "zip": "78212", "lat": 29.4311, "lon": -98.4936},
        ],
        "events": [
            {"id": "e1", "buyer_id": "b1", "property_id": "q1", "event_type": "purchase",
             "event_date": "2025-07-21", "price": 275000, "source": "county"},
            {"id": "e2", "buyer_id": "b1", "property_id": "q2", "event_type": "purchase",
             "event_date": "2025-05-10", "price": 245000, "source": "county"},
            {"id": "e3", "buyer_id": "b1", "property_id": "q3", "event_type": "purchase",
             "event_date": "2024-12-19", "price": 310000, "source": "mls"},
            {"id": "e4", "buyer_id": "b2", "property_id": "q3", "event_type": "sale",
             "event_date": "2025-06-01", "price": 330000, "source": "mls"},
            {"id": "e6", "buyer_id": "b3", "property_id": "q1", "event_type": "purchase",
             "event_date": "2024-09-20", "price": 260000, "source": "county"},
        ],
    }


@pytest.fixture
def seed_dataset():
    return parse_dataset(SEED_DOCUMENT)


@pytest.fixture
def scenario_dataset():
    return parse_dataset(scenario_document())


@pytest.fixture
def center():
    return SAN_ANTONIO


@pytest.fixture
def today():
    return TODAY


@pytest.fixture(autouse=True)
def _clear_query_cache():
    cache.clear()
    yield
    cache.clear()
