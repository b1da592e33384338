"""Moment 动态模型."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from rin.models.base import timestamp_type, utcnow


class Moment(SQLModel, table=True):
    """短动态."""

    __tablename__ = "moments"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    content: str = Field(description="动态内容")
    uid: int = Field(foreign_key="users.id", index=True, description="作者 ID")
    created_at: datetime = Field(
        default_factory=utcnow, sa_type=timestamp_type(), index=True
    )
    updated_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type())
