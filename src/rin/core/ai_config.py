"""AI 摘要配置（存储在 info 表）."""

import logging
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from rin.core.config_keys import AI_SUMMARY_GROUP, MASK
from rin.models.info import Info

logger = logging.getLogger(__name__)

PREFIX = f"{AI_SUMMARY_GROUP}."


class AISummaryConfig(BaseModel):
    """AI 摘要配置."""

    enabled: bool = False
    provider: str = "openai"
    model: str = "gpt-4o-mini"
    api_url: str = ""
    api_key: str = ""


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


async def get_ai_config_entries(session: AsyncSession) -> dict[str, str]:
    """读取 info 表中所有 ai_summary.* 原始行."""
    stmt = select(Info).where(Info.key.startswith(PREFIX, autoescape=True))
    result = await session.execute(stmt)
    return {row.key: row.value for row in result.scalars()}


async def get_ai_config(session: AsyncSession) -> AISummaryConfig:
    entries = await get_ai_config_entries(session)
    data: dict[str, Any] = {
        key.removeprefix(PREFIX): value
        for key, value in entries.items()
        if key.removeprefix(PREFIX) in AISummaryConfig.model_fields
    }
    if "enabled" in data:
        data["enabled"] = _to_bool(data["enabled"])
    return AISummaryConfig(**data)


async def set_ai_config(session: AsyncSession, updates: dict[str, Any]) -> AISummaryConfig:
    """合并更新并整组写回.

    updates 的键可以带 ``ai_summary.`` 前缀。值为掩码或空的 api_key 会被忽略，
    避免前端回传掩码覆盖真实密钥。
    """
    current = await get_ai_config(session)
    merged = current.model_dump()

    for raw_key, value in updates.items():
        field = raw_key.removeprefix(PREFIX)
        if field not in AISummaryConfig.model_fields:
            logger.warning(f"忽略未知的 AI 配置项: {raw_key}")
            continue
        if field == "api_key" and (not value or value == MASK):
            continue
        merged[field] = _to_bool(value) if field == "enabled" else str(value)

    config = AISummaryConfig(**merged)
    for field, value in config.model_dump().items():
        stored = "true" if value is True else "false" if value is False else value
        await session.merge(Info(key=f"{PREFIX}{field}", value=stored))
    await session.commit()

    logger.info(f"AI 摘要配置已保存: provider={config.provider}, model={config.model}")
    return config
