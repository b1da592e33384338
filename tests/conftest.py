"""测试配置和 fixtures."""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from rin.auth import TokenVerifier
from rin.config import Settings
from rin.context import AppContext
from rin.main import create_app
from rin.models import Moment, User
from rin.storage import (
    CACHE_NAMESPACE,
    CLIENT_CONFIG_NAMESPACE,
    SERVER_CONFIG_NAMESPACE,
    DatabaseStore,
    MemoryStore,
)

ADMIN_HEADERS = {"Authorization": "Bearer mock_token_1"}
USER_HEADERS = {"Authorization": "Bearer mock_token_2"}


class FakeTokenVerifier(TokenVerifier):
    """mock_token_<id> 形式的令牌."""

    async def sign(self, payload: dict[str, Any]) -> str:
        return f"mock_token_{payload['id']}"

    async def verify(self, token: str) -> dict[str, Any] | None:
        if not token.startswith("mock_token_"):
            return None
        return {"id": int(token.removeprefix("mock_token_"))}


class RecordingStore(MemoryStore):
    """记录 delete_prefix 调用的缓存."""

    def __init__(self, namespace: str = CACHE_NAMESPACE) -> None:
        super().__init__(namespace)
        self.deleted_prefixes: list[str] = []

    async def delete_prefix(self, prefix: str) -> None:
        self.deleted_prefixes.append(prefix)
        await super().delete_prefix(prefix)


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """创建测试用的内存数据库会话工厂."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def users(session_factory: async_sessionmaker[AsyncSession]) -> list[User]:
    """管理员 id=1，普通用户 id=2."""
    users = [
        User(id=1, username="admin", openid="gh_admin", avatar="admin.png", permission=1),
        User(id=2, username="regular", openid="gh_regular", avatar="regular.png", permission=0),
    ]
    async with session_factory() as session:
        session.add_all(users)
        await session.commit()
    return users


@pytest.fixture
def context(
    session_factory: async_sessionmaker[AsyncSession], users: list[User]
) -> AppContext:
    return AppContext(
        session_factory=session_factory,
        cache=MemoryStore(CACHE_NAMESPACE),
        server_config=DatabaseStore(session_factory, SERVER_CONFIG_NAMESPACE),
        client_config=DatabaseStore(session_factory, CLIENT_CONFIG_NAMESPACE),
        jwt=FakeTokenVerifier(),
        settings=Settings(jwt_secret="test-secret"),
    )


@pytest_asyncio.fixture
async def client(context: AppContext) -> AsyncGenerator[AsyncClient, None]:
    """创建测试用的 HTTP 客户端."""
    transport = ASGITransport(app=create_app(context))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def add_moments(session_factory: async_sessionmaker[AsyncSession]) -> Any:
    """按顺序插入动态，越靠后创建时间越新."""

    async def _add(contents: list[str], uid: int = 1) -> list[Moment]:
        base = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        moments = [
            Moment(
                id=i + 1,
                content=content,
                uid=uid,
                created_at=base + timedelta(seconds=i * 10),
                updated_at=base + timedelta(seconds=i * 10),
            )
            for i, content in enumerate(contents)
        ]
        async with session_factory() as session:
            session.add_all(moments)
            await session.commit()
        return moments

    return _add
