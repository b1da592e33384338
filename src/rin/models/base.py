"""模型公共字段."""

from datetime import datetime, timezone

from sqlalchemy import DateTime


def utcnow() -> datetime:
    """带时区的当前 UTC 时间."""
    return datetime.now(timezone.utc)


def timestamp_type() -> DateTime:
    return DateTime(timezone=True)
