#!/usr/bin/env python
import argparse
import asyncio
import threading
import time

import uvicorn
from rich import print

from shopmanage.client import CatalogClient
from shopmanage.config import get_settings
from shopmanage.errors import StoreError
from shopmanage.store import ProductStore


def start_local_catalog(port: int = 8085) -> str:
    # Spins up the in-memory catalog API in a background thread for demos
    config = uvicorn.Config("catalog_api.main:app", host="127.0.0.1", port=port, log_level="error")
    server = uvicorn.Server(config)
    t = threading.Thread(target=server.run, daemon=True)
    t.start()
    while not server.started:
        time.sleep(0.05)
    base_url = f"http://127.0.0.1:{port}"
    print(f"[cyan]Local catalog running at {base_url}[/cyan]")
    return base_url


async def run(base_url: str, transport=None):
    async with CatalogClient(base_url=base_url, transport=transport) as client:
        store = ProductStore(client)
        store.on_event(lambda e: print(f"[{'green' if e.ok else 'red'}]{e.message}[/]"))

        # -----------------------------
        # Load the first page
        # -----------------------------
        print("\nLoading products...")
        try:
            await store.load()
        except StoreError:
            return
        print([(p.id, p.title) for p in store.products])
        if not store.products:
            print("[yellow]The catalog is empty, nothing to demo[/yellow]")
            return
        first = store.products[0]

        # -----------------------------
        # Add a product
        # -----------------------------
        print("\nAdding a product...")
        try:
            print(await store.create({"title": "Pen", "price": 1.5, "category": "stationery", "stock": 10}))
        except StoreError:
            pass

        # -----------------------------
        # Update the first loaded product
        # -----------------------------
        print(f"\nMarking product {first.id} out of stock...")
        try:
            print(await store.update(first.id, {"stock": 0}))
        except StoreError:
            pass

        # -----------------------------
        # Invalid draft never reaches the API
        # -----------------------------
        print("\nTrying a negative price...")
        try:
            await store.create({"title": "Broken", "price": -1})
        except StoreError:
            pass

        # -----------------------------
        # Delete, declined then confirmed
        # -----------------------------
        print(f"\nDeleting product {first.id} (declined)...")
        await store.delete(first.id, confirm=lambda message: False)
        print(f"Deleting product {first.id} (confirmed)...")
        try:
            await store.delete(first.id, confirm=lambda message: True)
        except StoreError:
            pass

        print("\nFinal products:")
        print([(p.id, p.title, p.stock) for p in store.products])


def main():
    parser = argparse.ArgumentParser(description="ShopManage demo")
    parser.add_argument("--local", action="store_true", help="Run against the in-memory catalog API")
    parser.add_argument("--port", type=int, default=8085, help="Port for the local catalog API")
    args = parser.parse_args()

    base_url = start_local_catalog(args.port) if args.local else get_settings().base_url
    asyncio.run(run(base_url))


if __name__ == "__main__":
    main()
