"""Tests for the terminal front end helpers."""

import pytest

import cli
from shopmanage.store import DELETE_PROMPT


class RecordingProgress:
    active = False

    def __init__(self, *columns, **kwargs):
        pass

    def __enter__(self):
        RecordingProgress.active = True
        return self

    def __exit__(self, *exc_info):
        RecordingProgress.active = False

    def add_task(self, description, total=None):
        return 0


@pytest.fixture(autouse=True)
def quiet_spinner(monkeypatch):
    monkeypatch.setattr(cli, "Progress", RecordingProgress)
    RecordingProgress.active = False


@pytest.mark.asyncio
async def test_delete_asks_before_spinner_starts(store, catalog):
    await store.load()
    asked = []

    def ask(message):
        asked.append((message, RecordingProgress.active, len(catalog.requests)))
        return True

    assert await cli.delete_product(store, 1, ask=ask) is True

    # the prompt ran with no spinner on screen and no delete request yet
    assert asked == [(DELETE_PROMPT, False, 1)]
    assert [p.id for p in store.products] == [2, 3]


@pytest.mark.asyncio
async def test_declined_delete_sends_nothing(store, catalog):
    await store.load()

    assert await cli.delete_product(store, 1, ask=lambda message: False) is False

    assert len(catalog.requests) == 1
    assert [p.id for p in store.products] == [1, 2, 3]


@pytest.mark.asyncio
async def test_failed_delete_comes_back_as_none(store, catalog):
    await store.load()
    catalog.status["DELETE"] = 500

    assert await cli.delete_product(store, 1, ask=lambda message: True) is None
    assert [p.id for p in store.products] == [1, 2, 3]
