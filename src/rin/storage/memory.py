"""进程内键值存储."""

import copy
from typing import Any

from rin.storage.base import KeyValueStore


class MemoryStore(KeyValueStore):
    """基于 dict 的存储，进程重启后丢失."""

    def __init__(self, namespace: str) -> None:
        super().__init__(namespace)
        self._data: dict[str, Any] = {}
        self._pending: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        if key in self._pending:
            return copy.deepcopy(self._pending[key])
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any, auto_save: bool = True) -> None:
        self._pending[key] = copy.deepcopy(value)
        if auto_save:
            await self.save()

    async def save(self) -> None:
        self._data.update(self._pending)
        self._pending.clear()

    async def all(self) -> dict[str, Any]:
        return copy.deepcopy({**self._data, **self._pending})

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        self._pending.pop(key, None)

    async def delete_prefix(self, prefix: str) -> None:
        for store in (self._data, self._pending):
            for key in [k for k in store if k.startswith(prefix)]:
                del store[key]

    async def clear(self) -> None:
        self._data.clear()
        self._pending.clear()
