"""Local product list kept in sync with the remote catalog."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Optional, TypeVar, Union

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .client import CatalogClient
from .config import get_settings
from .errors import FetchError, NotFoundError, StoreError, SyncError, ValidationError
from .models import Product, ProductDraft, ProductPatch

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this product? This action cannot be undone."

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class StoreEvent:
    """Outcome of one store operation, for the front end to present."""

    operation: str
    ok: bool
    message: str
    error: Optional[StoreError] = None


Listener = Callable[[tuple[Product, ...]], None]
EventHandler = Callable[[StoreEvent], None]
ConfirmGate = Callable[[str], bool]


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _status_error(response: httpx.Response) -> str:
    return f"HTTP error! status: {response.status_code}"


class ProductStore:
    """Ordered in-memory product list mirroring the remote catalog.

    The remote service is authoritative: the local list only changes after a
    call succeeds, and every change is pushed to subscribed listeners as the
    full new sequence. Overlapping calls are not queued; whichever response
    arrives last is what the list ends up reflecting.
    """

    def __init__(
        self,
        client: CatalogClient,
        page_limit: Optional[int] = None,
        delete_success_status: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self._client = client
        self.page_limit = page_limit if page_limit is not None else settings.page_limit
        self.delete_success_status = (
            delete_success_status
            if delete_success_status is not None
            else settings.delete_success_status
        )
        self._products: list[Product] = []
        self._pending = 0
        self._listeners: list[Listener] = []
        self._handlers: list[EventHandler] = []

    # ------------------------------------------------------------------
    # Read-only view and subscriptions
    # ------------------------------------------------------------------

    @property
    def products(self) -> tuple[Product, ...]:
        return tuple(self._products)

    @property
    def loading(self) -> bool:
        """True while any request issued by the store is in flight."""
        return self._pending > 0

    def find(self, product_id: int) -> Optional[Product]:
        index = self._index_of(product_id)
        return None if index is None else self._products[index]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the full sequence after every change."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def on_event(self, handler: EventHandler) -> Callable[[], None]:
        """Call ``handler`` with the outcome of every operation."""
        self._handlers.append(handler)
        return lambda: self._handlers.remove(handler)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self) -> tuple[Product, ...]:
        """Replace the local list with the first page of the catalog."""
        prefix = "Failed to fetch products"
        response = await self._send("load", FetchError, prefix, self._client.list_products(self.page_limit))
        if not response.is_success:
            raise self._fail(FetchError("load", f"{prefix}: {_status_error(response)}"))

        data = self._json("load", FetchError, prefix, response)
        items = data.get("products") if isinstance(data, dict) else None
        try:
            products = [Product.model_validate(item) for item in items or []]
        except PydanticValidationError as exc:
            raise self._fail(FetchError("load", f"{prefix}: {_describe(exc)}", exc)) from exc

        self._products = products
        logger.info("Fetched %d products", len(products))
        self._notify()
        self._emit(StoreEvent("load", True, f"Loaded {len(products)} products"))
        return self.products

    async def fetch_one(self, product_id: int) -> Product:
        """Read a single product, e.g. to pre-fill an edit form."""
        prefix = "Failed to load product"
        response = await self._send("fetch_one", SyncError, prefix, self._client.get_product(product_id))
        if response.status_code == httpx.codes.NOT_FOUND:
            raise self._fail(NotFoundError("fetch_one", product_id))
        if not response.is_success:
            raise self._fail(SyncError("fetch_one", f"{prefix}: {_status_error(response)}"))

        product = self._product("fetch_one", prefix, self._json("fetch_one", SyncError, prefix, response))
        logger.debug("Product fetched for editing: %s", product.id)
        self._emit(StoreEvent("fetch_one", True, f"Loaded product {product.id}"))
        return product

    async def create(self, draft: Union[ProductDraft, Mapping[str, Any]]) -> Product:
        """Send a draft; on success the created product goes to the front."""
        prefix = "Failed to add product"
        draft = self._validate("create", prefix, ProductDraft, draft)
        response = await self._send("create", SyncError, prefix, self._client.add_product(draft.model_dump()))
        if not response.is_success:
            raise self._fail(SyncError("create", f"{prefix}: {_status_error(response)}"))

        product = self._product("create", prefix, self._json("create", SyncError, prefix, response))
        stale = self._index_of(product.id)
        if stale is not None:
            # the demo service hands out the same id for every add
            logger.warning("Catalog reused id %s; replacing the local entry", product.id)
            del self._products[stale]
        self._products.insert(0, product)
        logger.info("Product added successfully: %s", product.id)
        self._notify()
        self._emit(StoreEvent("create", True, "Product Added Successfully!"))
        return product

    async def update(
        self, product_id: int, patch: Union[ProductPatch, Mapping[str, Any]]
    ) -> Optional[Product]:
        """Send a patch and merge the answer into the matching local entry.

        Fields missing from the answer keep their local value. Returns the
        merged product, or None when no local entry has ``product_id``; the
        answer is then dropped rather than inserted.
        """
        prefix = "Failed to update product"
        patch = self._validate("update", prefix, ProductPatch, patch)
        response = await self._send(
            "update", SyncError, prefix, self._client.update_product(product_id, patch.payload())
        )
        if not response.is_success:
            raise self._fail(SyncError("update", f"{prefix}: {_status_error(response)}"))

        fields = self._json("update", SyncError, prefix, response)
        if not isinstance(fields, dict):
            raise self._fail(SyncError("update", f"{prefix}: unexpected response body"))

        index = self._index_of(product_id)
        merged = None
        if index is None:
            logger.info("Product %s is not in the local list; update result discarded", product_id)
        else:
            current = self._products[index]
            merged = self._product("update", prefix, {**current.model_dump(), **fields, "id": current.id})
            self._products[index] = merged
            logger.info("Product updated successfully: %s", product_id)
            self._notify()
        self._emit(StoreEvent("update", True, "Product Updated Successfully!"))
        return merged

    async def delete(self, product_id: int, confirm: ConfirmGate) -> bool:
        """Delete after the caller's yes/no gate agrees.

        Returns False without touching the network when the gate declines.
        Only the exact ``delete_success_status`` counts as success.
        """
        if not confirm(DELETE_PROMPT):
            logger.info("Delete operation cancelled")
            return False

        prefix = "Failed to delete product"
        response = await self._send("delete", SyncError, prefix, self._client.delete_product(product_id))
        if response.status_code != self.delete_success_status:
            raise self._fail(SyncError("delete", f"{prefix}: {_status_error(response)}"))

        index = self._index_of(product_id)
        if index is not None:
            del self._products[index]
            self._notify()
        logger.info("Product deleted successfully: %s", product_id)
        self._emit(StoreEvent("delete", True, "Product Deleted Successfully!"))
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _index_of(self, product_id: int) -> Optional[int]:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        return None

    @asynccontextmanager
    async def _in_flight(self):
        self._pending += 1
        try:
            yield
        finally:
            self._pending -= 1

    async def _send(
        self,
        operation: str,
        failure: type[StoreError],
        prefix: str,
        request: Awaitable[httpx.Response],
    ) -> httpx.Response:
        try:
            async with self._in_flight():
                return await request
        except httpx.HTTPError as exc:
            raise self._fail(failure(operation, f"{prefix}: {_describe(exc)}", exc)) from exc

    def _json(self, operation: str, failure: type[StoreError], prefix: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise self._fail(failure(operation, f"{prefix}: invalid JSON in response", exc)) from exc

    def _product(self, operation: str, prefix: str, data: Any) -> Product:
        try:
            return Product.model_validate(data)
        except PydanticValidationError as exc:
            raise self._fail(SyncError(operation, f"{prefix}: {_describe(exc)}", exc)) from exc

    def _validate(
        self, operation: str, prefix: str, model: type[ModelT], data: Union[ModelT, Mapping[str, Any]]
    ) -> ModelT:
        if isinstance(data, model):
            return data
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" if err["loc"] else err["msg"]
                for err in exc.errors()
            )
            raise self._fail(ValidationError(operation, f"{prefix}: {details}", exc)) from exc

    def _fail(self, error: StoreError) -> StoreError:
        logger.error("%s failed: %s", error.operation, error.message)
        self._emit(StoreEvent(error.operation, False, error.message, error))
        return error

    def _notify(self) -> None:
        snapshot = self.products
        for listener in list(self._listeners):
            listener(snapshot)

    def _emit(self, event: StoreEvent) -> None:
        for handler in list(self._handlers):
            handler(event)
