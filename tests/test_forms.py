"""Tests for the add/edit product form."""

import pytest

from shopmanage.errors import NotFoundError, ValidationError
from shopmanage.forms import ProductForm

RAW = {
    "title": "  Pen ",
    "price": "1.5",
    "category": " stationery ",
    "description": "",
    "thumbnail": "",
    "stock": "",
}


def test_payload_trims_and_parses():
    payload = ProductForm().payload(RAW)

    assert payload == {
        "title": "Pen",
        "price": 1.5,
        "category": "stationery",
        "description": "",
        "thumbnail": "",
        "stock": 0,
    }


@pytest.mark.parametrize("field, value", [("price", ""), ("price", "abc"), ("stock", "ten")])
def test_payload_rejects_unparseable_numbers(field, value):
    with pytest.raises(ValidationError):
        ProductForm().payload({**RAW, field: value})


@pytest.mark.asyncio
async def test_submit_in_add_mode_creates(store, catalog):
    await store.load()
    form = ProductForm()
    form.open_add()

    created = await form.submit(store, {**RAW, "stock": "10"})

    assert created.id == 4
    assert [p.id for p in store.products] == [4, 1, 2, 3]
    assert catalog.requests[-1].method == "POST"
    assert not form.is_edit_mode


@pytest.mark.asyncio
async def test_open_edit_prefills_and_submit_updates(store, catalog):
    await store.load()
    form = ProductForm()

    await form.open_edit(store, 2)

    assert form.is_edit_mode
    assert form.title == "Edit Product"
    assert form.values["title"] == "Palette"
    assert form.values["stock"] == "44"

    updated = await form.submit(store, {**form.values, "stock": "0"})

    assert updated.stock == 0
    assert catalog.requests[-1].method == "PUT"
    assert form.edit_id is None
    assert form.values["title"] == ""


@pytest.mark.asyncio
async def test_open_edit_unknown_product_keeps_add_mode(store):
    form = ProductForm()

    with pytest.raises(NotFoundError):
        await form.open_edit(store, 99)

    assert not form.is_edit_mode


@pytest.mark.asyncio
async def test_failed_submit_keeps_edit_mode(store, catalog):
    await store.load()
    form = ProductForm()
    await form.open_edit(store, 2)

    with pytest.raises(ValidationError):
        await form.submit(store, {**form.values, "price": "-3"})

    assert form.edit_id == 2
