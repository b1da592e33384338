"""基于 cache 表的键值存储."""

import json
import logging
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from rin.models.base import utcnow
from rin.models.cache_entry import CacheEntry
from rin.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class DatabaseStore(KeyValueStore):
    """每个命名空间对应 cache 表中 type 相同的行."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        namespace: str,
    ) -> None:
        super().__init__(namespace)
        self.session_factory = session_factory
        self._pending: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        if key in self._pending:
            return self._pending[key]

        async with self.session_factory() as session:
            entry = await session.get(CacheEntry, (self.namespace, key))
            if entry is None:
                return None
            return json.loads(entry.value)

    async def set(self, key: str, value: Any, auto_save: bool = True) -> None:
        self._pending[key] = value
        if auto_save:
            await self.save()

    async def save(self) -> None:
        if not self._pending:
            return

        pending, self._pending = self._pending, {}
        async with self.session_factory() as session:
            for key, value in pending.items():
                await session.merge(
                    CacheEntry(
                        type=self.namespace,
                        key=key,
                        value=json.dumps(value, ensure_ascii=False),
                        updated_at=utcnow(),
                    )
                )
            await session.commit()
        logger.debug(f"[{self.namespace}] 已保存 {len(pending)} 个键")

    async def all(self) -> dict[str, Any]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(CacheEntry).where(CacheEntry.type == self.namespace)
            )
            data = {entry.key: json.loads(entry.value) for entry in result.scalars()}
        data.update(self._pending)
        return data

    async def delete(self, key: str) -> None:
        self._pending.pop(key, None)
        async with self.session_factory() as session:
            await session.execute(
                delete(CacheEntry).where(
                    CacheEntry.type == self.namespace,
                    CacheEntry.key == key,
                )
            )
            await session.commit()

    async def delete_prefix(self, prefix: str) -> None:
        for key in [k for k in self._pending if k.startswith(prefix)]:
            del self._pending[key]

        async with self.session_factory() as session:
            result = await session.execute(
                delete(CacheEntry).where(
                    CacheEntry.type == self.namespace,
                    CacheEntry.key.startswith(prefix, autoescape=True),
                )
            )
            await session.commit()
        logger.debug(f"[{self.namespace}] 按前缀 {prefix!r} 删除 {result.rowcount} 个键")

    async def clear(self) -> None:
        self._pending.clear()
        async with self.session_factory() as session:
            result = await session.execute(
                delete(CacheEntry).where(CacheEntry.type == self.namespace)
            )
            await session.commit()
        logger.info(f"[{self.namespace}] 已清空 {result.rowcount} 个键")
