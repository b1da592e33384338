"""JWT 校验与权限依赖."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from rin.context import AppContext, get_context
from rin.errors import Forbidden, Unauthenticated
from rin.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class TokenVerifier(ABC):
    """令牌签发与校验."""

    @abstractmethod
    async def sign(self, payload: dict[str, Any]) -> str: ...

    @abstractmethod
    async def verify(self, token: str) -> dict[str, Any] | None:
        """校验令牌，无效时返回 None."""
        ...


class JoseTokenVerifier(TokenVerifier):
    """基于 python-jose 的 HS256 令牌."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = 30) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.expire_days = expire_days

    async def sign(self, payload: dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            **payload,
            "iat": now,
            "exp": now + timedelta(days=self.expire_days),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    async def verify(self, token: str) -> dict[str, Any] | None:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"令牌校验失败: {e}")
            return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    ctx: AppContext = Depends(get_context),
) -> User | None:
    """解析 Bearer 令牌并加载用户，任何一步失败都返回 None."""
    if credentials is None:
        return None

    payload = await ctx.jwt.verify(credentials.credentials)
    if not payload or payload.get("id") is None:
        return None

    try:
        uid = int(payload["id"])
    except (TypeError, ValueError):
        return None

    async with ctx.session_factory() as session:
        return await session.get(User, uid)


def ensure_admin(user: User | None, non_admin_status: int = 403) -> User:
    """未登录抛 401；已登录但不是管理员时抛 ``non_admin_status``（403 或 401）."""
    if user is None:
        raise Unauthenticated()
    if not user.is_admin:
        if non_admin_status == 401:
            raise Unauthenticated("需要管理员权限")
        raise Forbidden()
    return user


def require_admin(non_admin_status: int = 403) -> Callable[..., Awaitable[User]]:
    """管理员权限依赖."""

    async def dependency(user: User | None = Depends(get_current_user)) -> User:
        return ensure_admin(user, non_admin_status)

    return dependency
