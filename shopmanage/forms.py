"""Add/edit state of the product form.

Raw text comes in exactly as typed; ``submit`` trims and parses it, then
routes the payload to ``create`` or ``update`` depending on the mode.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from .errors import ValidationError
from .models import Product
from .store import ProductStore

logger = logging.getLogger(__name__)

FIELDS = ("title", "price", "category", "description", "thumbnail", "stock")


class ProductForm:
    def __init__(self) -> None:
        self.edit_id: Optional[int] = None
        self.values: dict[str, str] = {}
        self.reset()

    @property
    def is_edit_mode(self) -> bool:
        return self.edit_id is not None

    @property
    def title(self) -> str:
        return "Edit Product" if self.is_edit_mode else "Add Product"

    def reset(self) -> None:
        self.edit_id = None
        self.values = {name: "" for name in FIELDS}

    def open_add(self) -> None:
        self.reset()
        logger.debug("Opening Add Product form")

    async def open_edit(self, store: ProductStore, product_id: int) -> Product:
        """Pre-fill the form from the catalog's current copy of the product."""
        product = await store.fetch_one(product_id)
        self.values = {
            "title": product.title or "",
            "price": _number_text(product.price),
            "category": product.category or "",
            "description": product.description or "",
            "thumbnail": product.thumbnail or "",
            "stock": _number_text(product.stock),
        }
        self.edit_id = product_id
        logger.debug("Form pre-filled for editing product %s", product_id)
        return product

    def payload(self, fields: Mapping[str, str]) -> dict:
        price = _parse("price", fields.get("price", ""), float)
        stock_text = fields.get("stock", "").strip()
        return {
            "title": fields.get("title", "").strip(),
            "price": price,
            "category": fields.get("category", "").strip(),
            "description": fields.get("description", "").strip(),
            "thumbnail": fields.get("thumbnail", "").strip(),
            "stock": _parse("stock", stock_text, int) if stock_text else 0,
        }

    async def submit(self, store: ProductStore, fields: Mapping[str, str]) -> Optional[Product]:
        operation = "update" if self.is_edit_mode else "create"
        try:
            data = self.payload(fields)
        except ValidationError as exc:
            exc.operation = operation
            raise
        if self.is_edit_mode:
            result = await store.update(self.edit_id, data)
        else:
            result = await store.create(data)
        self.reset()
        return result


def _number_text(value) -> str:
    # zero shows as an empty field, like a cleared input
    return str(value) if value else ""


def _parse(name: str, text: str, kind):
    try:
        return kind(text.strip())
    except ValueError as exc:
        raise ValidationError("submit", f"{name} must be a number, got {text!r}", exc) from exc
