"""Pytest fixtures for the product store."""

import json

import httpx
import pytest
import pytest_asyncio

from catalog_api.database import seed_catalog
from catalog_api.main import app
from shopmanage.client import CatalogClient
from shopmanage.store import ProductStore

SAMPLE = [
    {"id": 1, "title": "Mascara", "price": 9.99, "category": "beauty", "stock": 5,
     "description": "Volumizing mascara.", "thumbnail": "https://cdn.example/1.png", "brand": "Essence"},
    {"id": 2, "title": "Palette", "price": 19.99, "category": "beauty", "stock": 44,
     "description": "Eye shadow shades.", "thumbnail": "https://cdn.example/2.png", "brand": "Glamour"},
    {"id": 3, "title": "Lipstick", "price": 12.99, "category": "beauty", "stock": 68,
     "description": "Classic red.", "thumbnail": "https://cdn.example/3.png", "brand": "Chic"},
]


class FakeCatalog:
    """Callable handler for httpx.MockTransport mimicking the demo catalog.

    ``status`` forces an answer per HTTP method, ``body`` forces a raw
    (status, bytes) answer per method, ``error`` is raised as a transport
    failure, ``echo_fields`` trims PUT answers to those keys.
    """

    def __init__(self, products=SAMPLE):
        self.products = {p["id"]: dict(p) for p in products}
        self.next_id = max(self.products, default=0) + 1
        self.requests = []
        self.status = {}
        self.body = {}
        self.error = None
        self.echo_fields = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(f"{request.method} {request.url} failed", request=request)
        raw = self.body.get(request.method)
        if raw is not None:
            return httpx.Response(raw[0], content=raw[1])
        forced = self.status.get(request.method)
        if forced is not None:
            return httpx.Response(forced, json={"message": "forced answer"})

        path = request.url.path
        if request.method == "GET" and path == "/products":
            limit = int(request.url.params.get("limit", 30))
            page = list(self.products.values())[:limit]
            return httpx.Response(200, json={"products": page, "total": len(self.products), "skip": 0, "limit": len(page)})
        if request.method == "POST" and path == "/products/add":
            created = {"id": self.next_id, **json.loads(request.content)}
            self.products[created["id"]] = created
            self.next_id += 1
            return httpx.Response(201, json=created)

        product_id = int(path.rsplit("/", 1)[1])
        product = self.products.get(product_id)
        if product is None:
            return httpx.Response(404, json={"message": f"Product with id '{product_id}' not found"})
        if request.method == "GET":
            return httpx.Response(200, json=product)
        if request.method == "PUT":
            body = json.loads(request.content)
            product.update(body)
            if self.echo_fields is not None:
                echo = {"id": product_id, **{k: v for k, v in body.items() if k in self.echo_fields}}
                return httpx.Response(200, json=echo)
            return httpx.Response(200, json=product)
        if request.method == "DELETE":
            del self.products[product_id]
            return httpx.Response(200, json={**product, "isDeleted": True, "deletedOn": "2024-01-01T00:00:00Z"})
        return httpx.Response(405)


@pytest.fixture()
def catalog():
    return FakeCatalog()


@pytest_asyncio.fixture()
async def store(catalog):
    """ProductStore talking to the FakeCatalog handler."""
    client = CatalogClient(base_url="http://catalog.test", timeout=5, transport=httpx.MockTransport(catalog))
    try:
        yield ProductStore(client, page_limit=10, delete_success_status=200)
    finally:
        await client.close()


@pytest_asyncio.fixture()
async def api_store():
    """ProductStore talking to the in-memory FastAPI catalog."""
    seed_catalog()
    client = CatalogClient(base_url="http://testserver", timeout=5, transport=httpx.ASGITransport(app=app))
    try:
        yield ProductStore(client, page_limit=10, delete_success_status=200)
    finally:
        await client.close()
        seed_catalog()
