# catalog_api/main.py
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from .core import ProductIn, ProductUpdateIn
from .catalog import (
    list_products_logic, search_products_logic, get_product_logic,
    add_product_logic, update_product_logic, delete_product_logic,
    reset_all_logic
)

app = FastAPI(title="catalog-api (in-memory demo)")

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# The public demo service reports errors as {"message": ...}
@app.exception_handler(HTTPException)
async def message_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products")
async def list_products(limit: int = Query(30, ge=0), skip: int = Query(0, ge=0)):
    return await list_products_logic(limit, skip)

@app.get("/products/search")
async def search_products(q: str = Query(..., min_length=1), limit: int = Query(30, ge=0), skip: int = Query(0, ge=0)):
    return await search_products_logic(q, limit, skip)

@app.post("/products/add", status_code=201)
async def add_product(payload: ProductIn):
    return await add_product_logic(payload)

@app.get("/products/{product_id}")
async def get_product(product_id: int):
    return await get_product_logic(product_id)

@app.put("/products/{product_id}")
async def update_product(product_id: int, payload: ProductUpdateIn):
    return await update_product_logic(product_id, payload)

@app.delete("/products/{product_id}")
async def delete_product(product_id: int):
    return await delete_product_logic(product_id)

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    return await reset_all_logic()
