from datetime import datetime, timezone
from fastapi import HTTPException

# Import from other modules
from .core import ProductIn, ProductUpdateIn, _make_product_dict
from .database import PRODUCTS, _allocate_id, seed_catalog

# This file contains the core logic for all API endpoints.

def _not_found(product_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Product with id '{product_id}' not found")

# Product endpoints
async def list_products_logic(limit: int = 30, skip: int = 0):
    items = list(PRODUCTS.values())
    page = items[skip:] if limit == 0 else items[skip:skip + limit]
    return {"products": page, "total": len(items), "skip": skip, "limit": len(page)}

async def search_products_logic(q: str, limit: int = 30, skip: int = 0):
    term = q.lower()
    items = [p for p in PRODUCTS.values() if term in (p.get("title") or "").lower()]
    page = items[skip:skip + limit]
    return {"products": page, "total": len(items), "skip": skip, "limit": len(page)}

async def get_product_logic(product_id: int):
    p = PRODUCTS.get(product_id)
    if not p:
        raise _not_found(product_id)
    return p

async def add_product_logic(payload: ProductIn):
    pid = _allocate_id()
    PRODUCTS[pid] = _make_product_dict(pid, payload)
    return PRODUCTS[pid]

async def update_product_logic(product_id: int, payload: ProductUpdateIn):
    p = PRODUCTS.get(product_id)
    if not p:
        raise _not_found(product_id)
    p.update(payload.model_dump(exclude_unset=True))
    return p

async def delete_product_logic(product_id: int):
    p = PRODUCTS.pop(product_id, None)
    if not p:
        raise _not_found(product_id)
    deleted_on = datetime.now(timezone.utc).isoformat()
    return {**p, "isDeleted": True, "deletedOn": deleted_on}

# Utility: reset (for tests/demo)
async def reset_all_logic():
    seed_catalog()
    return {"status": "reset", "total": len(PRODUCTS)}
