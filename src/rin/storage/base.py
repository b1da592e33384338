"""键值存储抽象基类."""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

CACHE_NAMESPACE = "cache"
SERVER_CONFIG_NAMESPACE = "server.config"
CLIENT_CONFIG_NAMESPACE = "client.config"


class KeyValueStore(ABC):
    """按命名空间隔离的键值存储.

    同一张表可以承载多个命名空间，任何操作都只作用于 ``namespace`` 自身。
    """

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """读取值，不存在返回 None."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any, auto_save: bool = True) -> None:
        """写入值；auto_save=False 时暂存，等待 save() 统一落盘."""
        ...

    @abstractmethod
    async def save(self) -> None:
        """持久化暂存的写入."""
        ...

    @abstractmethod
    async def all(self) -> dict[str, Any]:
        """返回命名空间内的全部键值."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """删除单个键."""
        ...

    @abstractmethod
    async def delete_prefix(self, prefix: str) -> None:
        """删除所有以 prefix 开头的键（按字面匹配）."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """清空当前命名空间."""
        ...

    async def get_or_default(self, key: str, default: Any) -> Any:
        value = await self.get(key)
        return default if value is None else value

    async def get_or_set(
        self,
        key: str,
        compute: Callable[[], Any | Awaitable[Any]],
    ) -> Any:
        """命中直接返回，否则调用 compute 一次并写入."""
        value = await self.get(key)
        if value is not None:
            return value

        value = compute()
        if inspect.isawaitable(value):
            value = await value
        await self.set(key, value)
        return value
