"""User 用户模型."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from rin.models.base import timestamp_type, utcnow

ADMIN_PERMISSION = 1


class User(SQLModel, table=True):
    """站点用户."""

    __tablename__ = "users"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(description="用户名")
    openid: str = Field(index=True, description="外部身份 ID")
    avatar: str | None = Field(default=None, description="头像 URL")
    permission: int = Field(default=0, description="权限: 1=管理员, 0=普通用户")
    created_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type())

    @property
    def is_admin(self) -> bool:
        return self.permission == ADMIN_PERMISSION
