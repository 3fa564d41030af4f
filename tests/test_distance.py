"""Unit tests for the geodesic and heuristic layers."""

import random

import pytest

from distance_engine.domain.distance import haversine_km, round1
from distance_engine.domain.enums import RegionBucket
from distance_engine.domain.estimation import (
    DOMESTIC_CITIES,
    ESTIMATE_RANGES,
    classify,
    estimate_km,
)


class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine_km(50.0, 8.0, 50.0, 8.0) == 0.0

    def test_known_distance(self):
        # Frankfurt -> Munich, straight line ~304 km
        d = haversine_km(50.1109, 8.6821, 48.1351, 11.5820)
        assert 300.0 < d < 310.0

    def test_symmetric(self):
        d1 = haversine_km(50.1109, 8.6821, 52.5200, 13.4050)
        d2 = haversine_km(52.5200, 13.4050, 50.1109, 8.6821)
        assert abs(d1 - d2) < 1e-9

    def test_equator_degrees(self):
        # One degree of longitude on the equator = 2*pi*R/360
        assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(111.195, abs=1e-3)

    def test_antipodes(self):
        assert haversine_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(20015.09, abs=0.01)


class TestRound1:
    @pytest.mark.parametrize(
        "value, expected",
        [(392.04, 392.0), (0.25, 0.3), (0.0, 0.0), (877.96, 878.0), (12.349, 12.3)],
    )
    def test_one_decimal(self, value, expected):
        assert round1(value) == pytest.approx(expected)


class TestEstimation:
    def test_classify(self):
        assert classify("Berlin") is RegionBucket.DOMESTIC
        assert classify("Lisbon") is RegionBucket.INTERNATIONAL

    def test_classify_is_case_sensitive(self):
        assert classify("berlin") is RegionBucket.INTERNATIONAL

    def test_reference_list_size(self):
        assert len(DOMESTIC_CITIES) == 25

    @pytest.mark.parametrize(
        "origin, destination, domestic",
        [
            ("Kiel", "Freiburg", 2),
            ("Kiel", "Lisbon", 1),
            ("Lisbon", "Kiel", 1),
            ("Lisbon", "Oslo", 0),
        ],
    )
    def test_range_by_bucket(self, origin, destination, domestic):
        low, high = ESTIMATE_RANGES[domestic]
        rng = random.Random(7)
        for _ in range(200):
            km = estimate_km(origin, destination, rng)
            assert low <= km < high
            assert km == int(km)

    def test_estimates_stay_below_cap(self):
        assert max(high for _, high in ESTIMATE_RANGES.values()) <= 3500
