"""测试命名空间键值存储."""

from itertools import permutations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rin.storage import (
    CACHE_NAMESPACE,
    CLIENT_CONFIG_NAMESPACE,
    SERVER_CONFIG_NAMESPACE,
    DatabaseStore,
    KeyValueStore,
    MemoryStore,
)

NAMESPACES = (CACHE_NAMESPACE, SERVER_CONFIG_NAMESPACE, CLIENT_CONFIG_NAMESPACE)


@pytest.fixture(params=["database", "memory"])
def store(
    request: pytest.FixtureRequest,
    session_factory: async_sessionmaker[AsyncSession],
) -> KeyValueStore:
    if request.param == "database":
        return DatabaseStore(session_factory, CACHE_NAMESPACE)
    return MemoryStore(CACHE_NAMESPACE)


class TestKeyValueStore:
    """两种实现的共同行为."""

    async def test_get_missing_returns_none(self, store: KeyValueStore) -> None:
        assert await store.get("missing") is None

    async def test_set_and_get_structured_value(self, store: KeyValueStore) -> None:
        value = {"query": "test", "results": [1, 2], "ok": True}
        await store.set("search_results", value)
        assert await store.get("search_results") == value

    async def test_get_or_default(self, store: KeyValueStore) -> None:
        assert await store.get_or_default("theme", "light") == "light"
        await store.set("theme", "dark")
        assert await store.get_or_default("theme", "light") == "dark"

    async def test_buffered_writes_until_save(self, store: KeyValueStore) -> None:
        await store.set("a", 1, auto_save=False)
        await store.set("b", 2, auto_save=False)
        assert await store.get("a") == 1
        assert await store.all() == {"a": 1, "b": 2}

        await store.save()
        assert await store.all() == {"a": 1, "b": 2}

    async def test_delete(self, store: KeyValueStore) -> None:
        await store.set("a", 1)
        await store.delete("a")
        assert await store.get("a") is None

    async def test_delete_prefix_is_literal(self, store: KeyValueStore) -> None:
        """_ 不作为通配符."""
        await store.set("moments_1_20", "page 1")
        await store.set("moments_2_20", "page 2")
        await store.set("momentsX1", "other")
        await store.set("feed_1", "feed")

        await store.delete_prefix("moments_")

        assert await store.all() == {"momentsX1": "other", "feed_1": "feed"}

    async def test_clear(self, store: KeyValueStore) -> None:
        await store.set("a", 1)
        await store.set("b", 2, auto_save=False)
        await store.clear()
        assert await store.all() == {}

    async def test_get_or_set_computes_once_on_miss(self, store: KeyValueStore) -> None:
        calls = 0

        def compute() -> str:
            nonlocal calls
            calls += 1
            return "computed"

        assert await store.get_or_set("k", compute) == "computed"
        assert await store.get_or_set("k", compute) == "computed"
        assert calls == 1

    async def test_get_or_set_accepts_coroutine(self, store: KeyValueStore) -> None:
        async def compute() -> list[int]:
            return [1, 2, 3]

        assert await store.get_or_set("k", compute) == [1, 2, 3]
        assert await store.get("k") == [1, 2, 3]


class TestDatabaseStore:
    """cache 表上的命名空间隔离."""

    @pytest.mark.parametrize(("cleared", "kept"), list(permutations(NAMESPACES, 2)))
    async def test_clear_is_isolated(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cleared: str,
        kept: str,
    ) -> None:
        target = DatabaseStore(session_factory, cleared)
        other = DatabaseStore(session_factory, kept)

        await target.set("shared_key", "target")
        await other.set("shared_key", "other")
        await other.set("only_other", {"nested": True})

        await target.clear()

        assert await target.all() == {}
        assert await other.all() == {"shared_key": "other", "only_other": {"nested": True}}

    async def test_delete_prefix_is_isolated(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        cache = DatabaseStore(session_factory, CACHE_NAMESPACE)
        config = DatabaseStore(session_factory, SERVER_CONFIG_NAMESPACE)
        await cache.set("moments_1_20", "cached")
        await config.set("moments_enabled", True)

        await cache.delete_prefix("moments_")

        assert await cache.get("moments_1_20") is None
        assert await config.get("moments_enabled") is True

    async def test_unsaved_writes_invisible_to_other_instances(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        writer = DatabaseStore(session_factory, CLIENT_CONFIG_NAMESPACE)
        reader = DatabaseStore(session_factory, CLIENT_CONFIG_NAMESPACE)

        await writer.set("site.name", "My Site", auto_save=False)
        assert await reader.get("site.name") is None

        await writer.save()
        assert await reader.get("site.name") == "My Site"

    async def test_overwrite(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        store = DatabaseStore(session_factory, SERVER_CONFIG_NAMESPACE)
        await store.set("webhook_url", "https://a.example.com")
        await store.set("webhook_url", "https://b.example.com")
        assert await store.all() == {"webhook_url": "https://b.example.com"}
