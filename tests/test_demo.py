"""The demo script keeps going, or stops cleanly, whatever the catalog answers."""

import httpx
import pytest

import demo

from conftest import FakeCatalog


@pytest.mark.asyncio
async def test_demo_stops_when_load_fails():
    catalog = FakeCatalog()
    catalog.status["GET"] = 500

    await demo.run("http://catalog.test", transport=httpx.MockTransport(catalog))

    assert [r.method for r in catalog.requests] == ["GET"]


@pytest.mark.asyncio
async def test_demo_stops_on_empty_catalog():
    catalog = FakeCatalog(products=[])

    await demo.run("http://catalog.test", transport=httpx.MockTransport(catalog))

    assert [r.method for r in catalog.requests] == ["GET"]


@pytest.mark.asyncio
async def test_demo_walks_through_crud():
    catalog = FakeCatalog()

    await demo.run("http://catalog.test", transport=httpx.MockTransport(catalog))

    assert [r.method for r in catalog.requests] == ["GET", "POST", "PUT", "DELETE"]
    assert sorted(catalog.products) == [2, 3, 4]
    assert catalog.products[4]["title"] == "Pen"


@pytest.mark.asyncio
async def test_demo_survives_failed_writes():
    catalog = FakeCatalog()
    for method in ("POST", "PUT", "DELETE"):
        catalog.status[method] = 503

    await demo.run("http://catalog.test", transport=httpx.MockTransport(catalog))

    assert [r.method for r in catalog.requests] == ["GET", "POST", "PUT", "DELETE"]
