"""Tests for the deferred API client loader."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from betportal.auth.loader import ApiClientLoader
from betportal.config import Settings
from betportal.storage.memory import InMemoryStorage


@pytest.mark.asyncio
async def test_nothing_loaded_before_first_call(
    loader: ApiClientLoader, client_factory: AsyncMock
) -> None:
    assert loader.is_loaded is False
    assert loader.client is None
    client_factory.assert_not_called()


@pytest.mark.asyncio
async def test_load_is_memoized(
    loader: ApiClientLoader, client_factory: AsyncMock, api_client: MagicMock
) -> None:
    first = await loader.load()
    second = await loader.load()

    assert first is api_client
    assert second is api_client
    assert client_factory.await_count == 1
    assert loader.is_loaded is True


@pytest.mark.asyncio
async def test_concurrent_loads_share_one_build(settings: Settings, api_client: MagicMock) -> None:
    builds = 0

    async def factory() -> MagicMock:
        nonlocal builds
        builds += 1
        await asyncio.sleep(0)
        return api_client

    loader = ApiClientLoader(settings=settings, factory=factory)

    results = await asyncio.gather(loader.load(), loader.load(), loader.load())

    assert all(r is api_client for r in results)
    assert builds == 1


@pytest.mark.asyncio
async def test_separate_loaders_are_independent(settings: Settings) -> None:
    factory_a = AsyncMock(return_value=MagicMock(name="a"))
    factory_b = AsyncMock(return_value=MagicMock(name="b"))

    a = await ApiClientLoader(settings=settings, factory=factory_a).load()
    b = await ApiClientLoader(settings=settings, factory=factory_b).load()

    assert a is not b


@pytest.mark.asyncio
async def test_default_factory_imports_api_client(settings: Settings) -> None:
    storage = InMemoryStorage({"auth_token": "abc"})
    loader = ApiClientLoader(settings=settings, storage=storage)

    client = await loader.load()

    from betportal.auth.client import ApiClient

    assert isinstance(client, ApiClient)
    assert storage.reads == []
    assert client.get_token() == "abc"
    await loader.aclose()
    assert loader.client is None


@pytest.mark.asyncio
async def test_aclose_closes_loaded_client(
    loader: ApiClientLoader, api_client: MagicMock
) -> None:
    await loader.load()

    await loader.aclose()

    api_client.aclose.assert_awaited_once()
    assert loader.is_loaded is False
