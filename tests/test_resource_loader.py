"""Tests for best-effort GeoJSON loading."""

import asyncio

import pytest

from src.core.resource_loader import (
    LoadStatus,
    ResourceLoader,
    ResourceLoadError,
    ResourceSlot,
    build_resource_slots,
    parse_geojson,
)
from tests.geojson_samples import BOUNDARY_GEOJSON, CITIES_GEOJSON


async def _load(slots, on_update=None):
    async with ResourceLoader(slots, timeout=5) as loader:
        return await loader.load_all(on_update=on_update)


def test_slots_start_not_loaded():
    slots = build_resource_slots("boundary.geojson", "cities.geojson")
    assert [slot.name for slot in slots] == ["boundary", "cities"]
    assert all(slot.status is LoadStatus.NOT_LOADED for slot in slots)
    assert all(slot.data is None for slot in slots)


def test_loads_both_over_http(geojson_server):
    geojson_server.write("drc_admin_wei.geojson", BOUNDARY_GEOJSON)
    geojson_server.write("drc_cities_filtered.geojson", CITIES_GEOJSON)

    slots = build_resource_slots(
        geojson_server.url_for("drc_admin_wei.geojson"),
        geojson_server.url_for("drc_cities_filtered.geojson"),
    )
    reported = []
    asyncio.run(_load(slots, on_update=lambda slot: reported.append(slot.name)))

    boundary, cities = slots
    assert boundary.status is LoadStatus.LOADED
    assert boundary.data == BOUNDARY_GEOJSON
    assert cities.status is LoadStatus.LOADED
    assert len(cities.data["features"]) == 2
    assert sorted(reported) == ["boundary", "cities"]


def test_boundary_failure_does_not_block_cities(geojson_server):
    """A non-success status for the boundary leaves only the boundary absent."""
    geojson_server.write("drc_cities_filtered.geojson", CITIES_GEOJSON)

    slots = build_resource_slots(
        geojson_server.url_for("drc_admin_wei.geojson"),  # not written: 404
        geojson_server.url_for("drc_cities_filtered.geojson"),
    )
    asyncio.run(_load(slots))

    boundary, cities = slots
    assert boundary.status is LoadStatus.FAILED
    assert boundary.data is None
    assert "404" in boundary.error
    assert cities.status is LoadStatus.LOADED


def test_loads_from_local_directory(tmp_path):
    boundary_path = tmp_path / "drc_admin_wei.geojson"
    boundary_path.write_text('{"type": "FeatureCollection", "features": []}', encoding="utf-8")

    slots = build_resource_slots(boundary_path.as_uri(), str(tmp_path / "missing.geojson"))
    asyncio.run(_load(slots))

    boundary, cities = slots
    assert boundary.status is LoadStatus.LOADED
    assert boundary.data == {"type": "FeatureCollection", "features": []}
    assert cities.status is LoadStatus.FAILED
    assert cities.error


def test_malformed_document_fails(tmp_path):
    bad = tmp_path / "bad.geojson"
    bad.write_text("not json", encoding="utf-8")
    not_geojson = tmp_path / "list.geojson"
    not_geojson.write_text("[1, 2, 3]", encoding="utf-8")

    slots = [ResourceSlot(name="bad", url=str(bad)), ResourceSlot(name="list", url=str(not_geojson))]
    asyncio.run(_load(slots))

    assert all(slot.status is LoadStatus.FAILED for slot in slots)


def test_non_utf8_document_fails_and_is_reported(tmp_path, geojson_server):
    """Undecodable bytes mark the slot FAILED on both the disk and HTTP paths."""
    payload = b'{"type": "FeatureCollection", "name": "\xff", "features": []}'
    boundary_path = tmp_path / "drc_admin_wei.geojson"
    boundary_path.write_bytes(payload)
    (geojson_server.fixtures_dir / "drc_cities_filtered.geojson").write_bytes(payload)

    slots = build_resource_slots(
        str(boundary_path),
        geojson_server.url_for("drc_cities_filtered.geojson"),
    )
    reported = []
    asyncio.run(_load(slots, on_update=lambda slot: reported.append(slot.name)))

    assert [slot.status for slot in slots] == [LoadStatus.FAILED, LoadStatus.FAILED]
    assert all("UTF-8" in slot.error for slot in slots)
    assert sorted(reported) == ["boundary", "cities"]


def test_parse_geojson_bytes():
    assert parse_geojson(b'{"type": "FeatureCollection", "features": []}', "inline")["features"] == []
    with pytest.raises(ResourceLoadError):
        parse_geojson(b"\xff\xfe", "inline")


def test_connection_error_fails_slot():
    # Port 9 (discard) on localhost is expected to refuse connections
    slots = [ResourceSlot(name="boundary", url="http://127.0.0.1:9/drc_admin_wei.geojson")]
    asyncio.run(_load(slots))
    assert slots[0].status is LoadStatus.FAILED


def test_parse_geojson():
    assert parse_geojson('{"type": "Point", "coordinates": [0, 0]}', "inline")["type"] == "Point"
    with pytest.raises(ResourceLoadError):
        parse_geojson('{"features": []}', "inline")


def test_cancel_leaves_slots_not_loaded(tmp_path):
    """Cancelled loads stay NOT_LOADED."""

    class SlowLoader(ResourceLoader):
        async def fetch(self, url):
            await asyncio.sleep(10)
            return {"type": "FeatureCollection", "features": []}

    async def run():
        slots = build_resource_slots("a.geojson", "b.geojson")
        async with SlowLoader(slots) as loader:
            pending = asyncio.create_task(loader.load_all())
            await asyncio.sleep(0.05)
            loader.cancel()
            return await pending

    slots = asyncio.run(run())
    assert all(slot.status is LoadStatus.NOT_LOADED for slot in slots)
