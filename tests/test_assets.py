"""Tests for packaged assets, table generation and the seed script."""

import json

import httpx
import pytest

import seed
from distance_engine.domain.catalog import LocationCatalog
from distance_engine.domain.engine import DistanceEngine
from distance_engine.domain.cache import DistanceCache
from distance_engine.domain.entities import Coordinate
from distance_engine.infrastructure.assets import (
    extend_table,
    load_catalog,
    load_coordinates,
    load_table,
    save_table,
)
from distance_engine.infrastructure.storage import MemoryStore
from tests.conftest import StubProvider


class TestPackagedAssets:
    def test_coordinates_load(self):
        coords = load_coordinates()
        assert coords["Frankfurt"] == Coordinate("Frankfurt", 50.1109, 8.6821)
        assert all(-90 <= c.lat <= 90 and -180 <= c.lon <= 180 for c in coords.values())

    def test_table_load(self):
        assert load_table()["Frankfurt"]["Munich"] == 392.0

    def test_catalog_scenarios(self):
        engine = DistanceEngine(load_catalog(), DistanceCache(MemoryStore()))
        assert engine.resolve_distance("Frankfurt", "Munich") == 392
        assert engine.resolve_distance("Munich", "Frankfurt") == 392

    def test_table_destinations_are_known(self):
        catalog = load_catalog()
        assert catalog.is_known("Luxembourg")
        assert not catalog.has_coordinates("Luxembourg")

    def test_domestic_reference_cities_have_coordinates(self):
        from distance_engine.domain.estimation import DOMESTIC_CITIES

        assert DOMESTIC_CITIES <= set(load_coordinates())

    def test_override_paths(self, tmp_path):
        coords = tmp_path / "coords.json"
        table = tmp_path / "table.json"
        coords.write_text(json.dumps({"A": {"lat": 1, "lon": 2}}), encoding="utf-8")
        table.write_text(json.dumps({"A": {"B": 12}}), encoding="utf-8")

        catalog = load_catalog(coords, table)
        assert catalog.known_locations() == ["A", "B"]
        assert catalog.table_lookup("B", "A") == 12.0

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_table(path)


class TestExtendTable:
    @pytest.fixture
    def catalog(self):
        return LocationCatalog(
            {
                "Null Island": Coordinate("Null Island", 0.0, 0.0),
                "East": Coordinate("East", 0.0, 1.0),
            },
            {},
        )

    @pytest.mark.asyncio
    async def test_provider_value_preferred(self, catalog):
        table = {}
        provider = StubProvider(km=150.0)
        added = await extend_table(table, ["Null Island", "East"], provider, catalog, "eu")
        assert added == 1
        assert table == {"Null Island": {"East": 150.0}}
        assert provider.calls == [("Null Island", "East", "eu")]

    @pytest.mark.asyncio
    async def test_haversine_fallback(self, catalog):
        table = {}
        added = await extend_table(table, ["Null Island", "East"], StubProvider(km=None), catalog)
        assert added == 1
        assert table["Null Island"]["East"] == 111.2

    @pytest.mark.asyncio
    async def test_provider_error_falls_back_to_haversine(self, catalog):
        table = {}
        provider = StubProvider(exc=httpx.InvalidURL("bad url"))
        names = ["Null Island", "East", "Atlantis"]
        added = await extend_table(table, names, provider, catalog)
        assert added == 1
        assert table == {"Null Island": {"East": 111.2}}
        assert len(provider.calls) == 3

    @pytest.mark.asyncio
    async def test_existing_pairs_skipped_in_either_direction(self, catalog):
        table = {"East": {"Null Island": 99.0}}
        provider = StubProvider(km=150.0)
        assert await extend_table(table, ["Null Island", "East"], provider, catalog) == 0
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_unresolvable_pair_skipped(self, catalog):
        table = {}
        added = await extend_table(table, ["Null Island", "Atlantis", "Null Island"], None, catalog)
        assert added == 0
        assert table == {}


class TestSaveTable:
    def test_roundtrip(self, tmp_path):
        path = tmp_path / "distances.json"
        save_table({"München": {"Berlin": 585.0}}, path)
        assert load_table(path) == {"München": {"Berlin": 585.0}}
        assert "München" in path.read_text(encoding="utf-8")


class TestSeedScript:
    @pytest.mark.asyncio
    async def test_offline_run(self, tmp_path):
        output = tmp_path / "distances.json"
        code = await seed.main(["Paris", "Vienna", "Atlantis", "--offline", "--output", str(output)])
        assert code == 0

        table = load_table(output)
        assert 1000 < table["Paris"]["Vienna"] < 1050
        assert table["Frankfurt"]["Munich"] == 392.0
        assert "Atlantis" not in table

    @pytest.mark.asyncio
    async def test_needs_two_locations(self, tmp_path):
        code = await seed.main(["Paris", "--offline", "--output", str(tmp_path / "x.json")])
        assert code == 2
