"""Turn a product sequence into a view description.

Nothing here touches the store or the terminal; the front end decides how a
``ProductGridView`` is drawn.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from rich.markup import escape

from .models import Product

LOW_STOCK_THRESHOLD = 5


@dataclass(frozen=True)
class ProductCard:
    id: int
    title: str
    category: str
    price_label: str
    description: Optional[str]
    thumbnail: Optional[str]
    stock_label: str
    stock_class: str


@dataclass(frozen=True)
class ProductGridView:
    cards: tuple[ProductCard, ...]

    @property
    def empty(self) -> bool:
        """The front end shows its empty-state instead of a grid."""
        return not self.cards


def stock_class(stock: int) -> str:
    if stock <= 0:
        return "out-of-stock"
    if stock <= LOW_STOCK_THRESHOLD:
        return "low-stock"
    return "in-stock"


def stock_label(stock: int) -> str:
    return f"{stock} units" if stock > 0 else "Out of Stock"


def price_label(price: float) -> str:
    return f"${price:.2f}"


def render_card(product: Product) -> ProductCard:
    return ProductCard(
        id=product.id,
        title=escape(product.title),
        category=escape(product.category or ""),
        price_label=price_label(product.price),
        description=escape(product.description) if product.description else None,
        thumbnail=product.thumbnail or None,
        stock_label=stock_label(product.stock),
        stock_class=stock_class(product.stock),
    )


def render_products(products: Iterable[Product]) -> ProductGridView:
    return ProductGridView(cards=tuple(render_card(p) for p in products))
