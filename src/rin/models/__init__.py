"""数据模型."""

from rin.models.cache_entry import CacheEntry
from rin.models.database import init_db
from rin.models.info import Info
from rin.models.moment import Moment
from rin.models.user import ADMIN_PERMISSION, User

__all__ = [
    "ADMIN_PERMISSION",
    "CacheEntry",
    "Info",
    "Moment",
    "User",
    "init_db",
]
