"""Tests for the caching query service."""

import json
from unittest.mock import MagicMock, patch

import pytest

from buyer_radar.core.errors import DataIntegrityError, InvalidArgument
from buyer_radar.data.base import parse_dataset
from buyer_radar.data.reference_client import SeedReferenceData
from buyer_radar.data.store import ReferenceStore
from buyer_radar.services import radar_service as radar_service_module
from buyer_radar.services.radar_service import EMPTY_MESSAGE, RadarService


def _stub_store(dataset, version=1):
    store = MagicMock(spec=ReferenceStore)
    store.current.return_value = (version, dataset)
    return store


class TestSearch:
    def test_payload_shape(self, scenario_dataset, center, today):
        svc = RadarService(_stub_store(scenario_dataset))
        payload, from_cache, etag = svc.search(center, 2.0, 12, "all", 64, today=today)

        assert from_cache is False
        assert etag.startswith('W/"')
        assert payload["count"] == 1
        assert payload["since_date"] == "2025-02-01"
        assert payload["message"] is None
        (b1,) = payload["buyers"]
        assert b1 == {
            "buyer_id": "b1",
            "name": "Evergreen Residential LLC",
            "category": "flipper",
            "contacts": [{"phone": "210-555-0187", "email": None}],
            "deal_count": 2,
            "most_recent_deal_date": "2025-07-21",
            "median_price": 260000,
        }
        assert len(payload["boundary"]) == 65
        assert payload["boundary"][0] == payload["boundary"][-1]
        assert payload["boundary_geojson"]["geometry"]["type"] == "Polygon"
        assert len(payload["markers"]["features"]) == 1
        json.dumps(payload)

    def test_repeat_query_hits_cache_with_same_etag(self, scenario_dataset, center, today):
        svc = RadarService(_stub_store(scenario_dataset))
        first, cached_first, etag_first = svc.search(center, 2.0, 12, "all", 64, today=today)
        second, cached_second, etag_second = svc.search(center, 2.0, 12, "all", 64, today=today)
        assert (cached_first, cached_second) == (False, True)
        assert etag_first == etag_second
        assert second["buyers"] == first["buyers"]

    def test_new_snapshot_version_misses_cache(self, scenario_dataset, center, today):
        store = _stub_store(scenario_dataset, version=1)
        svc = RadarService(store)
        svc.search(center, 2.0, 12, "all", 64, today=today)
        store.current.return_value = (2, scenario_dataset)
        _, from_cache, _ = svc.search(center, 2.0, 12, "all", 64, today=today)
        assert from_cache is False

    def test_cache_can_be_disabled(self, scenario_dataset, center, today):
        svc = RadarService(_stub_store(scenario_dataset))
        with patch.object(radar_service_module.settings, "QUERY_CACHE_ENABLED", False):
            svc.search(center, 2.0, 12, "all", 64, today=today)
            _, from_cache, _ = svc.search(center, 2.0, 12, "all", 64, today=today)
        assert from_cache is False

    def test_empty_result_message(self, scenario_dataset, center, today):
        svc = RadarService(_stub_store(scenario_dataset))
        payload, _, _ = svc.search(center, 2.0, 12, "landlord", 64, today=today)
        assert payload["count"] == 0
        assert payload["buyers"] == []
        assert payload["message"] == EMPTY_MESSAGE

    def test_category_is_normalized_in_payload(self, scenario_dataset, center, today):
        svc = RadarService(_stub_store(scenario_dataset))
        payload, _, _ = svc.search(center, 2.0, 12, "Flipper", 64, today=today)
        assert payload["category"] == "flipper"
        assert payload["count"] == 1

    def test_invalid_argument_propagates(self, scenario_dataset, center, today):
        svc = RadarService(_stub_store(scenario_dataset))
        with pytest.raises(InvalidArgument):
            svc.search(center, -3.0, 12, "all", 64, today=today)

    def test_integrity_error_propagates(self, center, today):
        broken = parse_dataset({
            "buyers": [{"id": "b1", "name": "A", "buyer_type": "cash"}],
            "events": [{
                "id": "e1", "buyer_id": "b1", "property_id": "gone",
                "event_type": "purchase", "event_date": "2025-06-01", "price": 5,
            }],
        })
        svc = RadarService(_stub_store(broken))
        with pytest.raises(DataIntegrityError):
            svc.search(center, 2.0, 12, "all", 64, today=today)

    @pytest.mark.asyncio
    async def test_with_real_store(self, center, today):
        store = ReferenceStore(SeedReferenceData())
        await store.reload()
        payload, _, _ = RadarService(store).search(center, 3.0, 12, "all", 64, today=today)
        assert [b["buyer_id"] for b in payload["buyers"]] == ["b1", "b4", "b2"]


class TestBoundary:
    def test_boundary_payload(self, scenario_dataset, center):
        svc = RadarService(_stub_store(scenario_dataset))
        payload = svc.boundary(center, 1.0, 8)
        assert payload["segments"] == 8
        assert len(payload["boundary"]) == 9
        assert payload["boundary_geojson"]["geometry"]["coordinates"][0][0] == [
            payload["boundary"][0]["longitude"], payload["boundary"][0]["latitude"],
        ]

    def test_boundary_uses_configured_segments(self, scenario_dataset, center):
        svc = RadarService(_stub_store(scenario_dataset))
        with patch.object(radar_service_module.settings, "BOUNDARY_SEGMENTS", 12):
            payload = svc.boundary(center, 1.0)
        assert len(payload["boundary"]) == 13
