"""站点配置 API."""

import logging
from typing import Any, Literal

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict, Field

from rin.auth import ensure_admin, get_current_user, require_admin
from rin.context import AppContext, get_context
from rin.core.ai_config import get_ai_config, get_ai_config_entries, set_ai_config
from rin.core.config_keys import (
    AI_SUMMARY_GROUP,
    MASK,
    is_sensitive,
    mask_sensitive,
    split_groups,
)
from rin.errors import BadRequest, UpstreamFailure
from rin.llm import LLMProvider, Message, create_llm_provider
from rin.models.user import User
from rin.storage import KeyValueStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/config", tags=["config"])

ConfigType = Literal["server", "client"]

# 配置接口对非管理员也返回 401
admin_only = require_admin(non_admin_status=401)


def _validate_type(config_type: str) -> ConfigType:
    if config_type not in ("server", "client"):
        raise BadRequest(f"无效的配置类型: {config_type}")
    return config_type  # type: ignore[return-value]


def _store_for(ctx: AppContext, config_type: ConfigType) -> KeyValueStore:
    return ctx.server_config if config_type == "server" else ctx.client_config


class TestAIRequest(BaseModel):
    """AI 连接测试请求."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str
    model: str
    api_url: str | None = None
    api_key: str | None = None
    test_prompt: str = Field(default="Hello", alias="testPrompt")


class TestAIResult(BaseModel):
    """AI 连接测试结果."""

    success: bool
    response: str


@router.post("/test-ai")
async def test_ai(
    request: TestAIRequest,
    _admin: User = Depends(admin_only),
    ctx: AppContext = Depends(get_context),
) -> TestAIResult:
    """测试 AI Provider 连通性（未填写的字段使用已保存配置）."""
    async with ctx.session_factory() as session:
        stored = await get_ai_config(session)

    api_key = request.api_key or stored.api_key
    api_url = request.api_url or (
        stored.api_url if stored.provider == request.provider else None
    )

    provider: LLMProvider | None = None
    try:
        provider = create_llm_provider(
            provider=request.provider,
            model=request.model,
            api_url=api_url,
            api_key=api_key,
        )
        response = await provider.chat(
            [Message(role="user", content=request.test_prompt)]
        )
    except BadRequest:
        raise
    except Exception as e:
        logger.warning(f"AI 连接测试失败 ({request.provider}/{request.model}): {e}")
        raise UpstreamFailure(f"AI 服务调用失败: {e}") from e
    finally:
        if provider is not None:
            await provider.close()

    if not response:
        raise UpstreamFailure("AI 服务返回空响应")

    return TestAIResult(success=True, response=response)


@router.delete("/cache")
async def clear_cache(
    _admin: User = Depends(admin_only),
    ctx: AppContext = Depends(get_context),
) -> dict:
    """清空缓存（不影响配置）."""
    await ctx.cache.clear()
    logger.info("缓存已清空")
    return {"success": True}


@router.get("/{config_type}")
async def get_config(
    config_type: str,
    user: User | None = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
) -> dict[str, Any]:
    """获取配置；server 配置需要管理员，敏感字段打码."""
    config_type = _validate_type(config_type)

    if config_type == "client":
        return await ctx.client_config.all()

    ensure_admin(user, non_admin_status=401)
    data = await ctx.server_config.all()
    async with ctx.session_factory() as session:
        data.update(await get_ai_config_entries(session))
    return mask_sensitive(data)


@router.post("/{config_type}")
async def update_config(
    config_type: str,
    payload: dict[str, Any] = Body(...),
    user: User | None = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
) -> dict:
    """批量更新配置，ai_summary.* 作为一组写入 info 表."""
    config_type = _validate_type(config_type)
    ensure_admin(user, non_admin_status=401)

    plain, groups = split_groups(payload)

    store = _store_for(ctx, config_type)
    for key, value in plain.items():
        # 前端回传的掩码不覆盖已保存的敏感值
        if value == MASK and is_sensitive(key):
            continue
        await store.set(key, value, auto_save=False)
    await store.save()

    ai_updates = groups.get(AI_SUMMARY_GROUP)
    if ai_updates:
        async with ctx.session_factory() as session:
            await set_ai_config(session, ai_updates)

    logger.info(f"{config_type} 配置已更新: {sorted(payload)}")
    return {"success": True}
