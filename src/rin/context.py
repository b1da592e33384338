"""应用上下文：显式传递给每个请求处理函数的依赖集合."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rin.config import Settings
from rin.storage import (
    CACHE_NAMESPACE,
    CLIENT_CONFIG_NAMESPACE,
    SERVER_CONFIG_NAMESPACE,
    DatabaseStore,
    KeyValueStore,
    MemoryStore,
)

if TYPE_CHECKING:
    from rin.auth import TokenVerifier

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """请求处理所需的全部协作者."""

    session_factory: async_sessionmaker[AsyncSession]
    cache: KeyValueStore
    server_config: KeyValueStore
    client_config: KeyValueStore
    jwt: "TokenVerifier"
    settings: Settings


def build_context(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
) -> AppContext:
    """按配置组装上下文."""
    from rin.auth import JoseTokenVerifier

    if settings.cache_storage == "memory":
        cache: KeyValueStore = MemoryStore(CACHE_NAMESPACE)
    else:
        cache = DatabaseStore(session_factory, CACHE_NAMESPACE)
    logger.info(f"缓存存储: {settings.cache_storage}")

    return AppContext(
        session_factory=session_factory,
        cache=cache,
        server_config=DatabaseStore(session_factory, SERVER_CONFIG_NAMESPACE),
        client_config=DatabaseStore(session_factory, CLIENT_CONFIG_NAMESPACE),
        jwt=JoseTokenVerifier(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_days=settings.jwt_expire_days,
        ),
        settings=settings,
    )


def get_context(request: Request) -> AppContext:
    """获取当前应用上下文（用于依赖注入）."""
    ctx: AppContext | None = getattr(request.app.state, "context", None)
    if ctx is None:
        msg = "应用上下文未初始化"
        raise RuntimeError(msg)
    return ctx
