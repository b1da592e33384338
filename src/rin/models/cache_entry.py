"""命名空间键值存储模型."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from rin.models.base import timestamp_type, utcnow


class CacheEntry(SQLModel, table=True):
    """键值条目，按 type 区分命名空间."""

    __tablename__ = "cache"  # type: ignore[assignment]

    type: str = Field(primary_key=True, description="命名空间: cache|server.config|client.config")
    key: str = Field(primary_key=True, description="键")
    value: str = Field(description="JSON 编码的值")
    updated_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type())
