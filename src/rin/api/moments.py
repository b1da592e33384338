"""动态（Moments）API."""

import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy import func
from sqlmodel import select

from rin.auth import require_admin
from rin.context import AppContext, get_context
from rin.errors import BadRequest, NotFound
from rin.models.base import utcnow
from rin.models.moment import Moment
from rin.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/moments", tags=["moments"])

CACHE_PREFIX = "moments_"
DEFAULT_LIMIT = 20
MAX_LIMIT = 50

admin_only = require_admin(non_admin_status=403)


class MomentBody(BaseModel):
    """创建/更新动态请求."""

    content: str = ""


def _clamp(page: int, limit: int) -> tuple[int, int]:
    return max(page, 1), min(max(limit, 1), MAX_LIMIT)


def _serialize(moment: Moment, user: User | None) -> dict:
    return {
        "id": moment.id,
        "content": moment.content,
        "uid": moment.uid,
        "createdAt": moment.created_at.isoformat(),
        "updatedAt": moment.updated_at.isoformat(),
        "user": {
            "id": user.id,
            "username": user.username,
            "avatar": user.avatar,
        }
        if user
        else None,
    }


def _require_content(body: MomentBody) -> str:
    content = body.content.strip()
    if not content:
        raise BadRequest("内容不能为空")
    return content


@router.get("")
async def list_moments(
    page: int = Query(1, description="页码"),
    limit: int = Query(DEFAULT_LIMIT, description="每页数量（最多 50）"),
    ctx: AppContext = Depends(get_context),
) -> dict:
    """获取动态列表（按创建时间倒序）."""
    page, limit = _clamp(page, limit)
    cache_key = f"{CACHE_PREFIX}{page}_{limit}"

    cached = await ctx.cache.get(cache_key)
    if cached is not None:
        logger.debug(f"命中缓存: {cache_key}")
        return cached

    async with ctx.session_factory() as session:
        total = (await session.execute(select(func.count()).select_from(Moment))).scalar_one()

        stmt = (
            select(Moment, User)
            .outerjoin(User, Moment.uid == User.id)
            .order_by(Moment.created_at.desc(), Moment.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        rows = (await session.execute(stmt)).all()

    payload = {
        "data": [_serialize(moment, user) for moment, user in rows],
        "hasNext": total > page * limit,
        "size": total,
    }
    await ctx.cache.set(cache_key, payload)
    return payload


@router.post("")
async def create_moment(
    body: MomentBody,
    admin: User = Depends(admin_only),
    ctx: AppContext = Depends(get_context),
) -> dict:
    """发布动态."""
    content = _require_content(body)

    async with ctx.session_factory() as session:
        moment = Moment(content=content, uid=admin.id)
        session.add(moment)
        await session.commit()
        await session.refresh(moment)

    await ctx.cache.delete_prefix(CACHE_PREFIX)
    logger.info(f"动态已发布: id={moment.id}, uid={admin.id}")
    return {"insertedId": moment.id}


@router.post("/{moment_id}")
async def update_moment(
    moment_id: int,
    body: MomentBody,
    _admin: User = Depends(admin_only),
    ctx: AppContext = Depends(get_context),
) -> dict:
    """修改动态内容."""
    content = _require_content(body)

    async with ctx.session_factory() as session:
        moment = await session.get(Moment, moment_id)
        if not moment:
            raise NotFound("动态不存在")

        moment.content = content
        moment.updated_at = utcnow()
        await session.commit()

    await ctx.cache.delete_prefix(CACHE_PREFIX)
    logger.info(f"动态已更新: id={moment_id}")
    return {"success": True}


@router.delete("/{moment_id}")
async def delete_moment(
    moment_id: int,
    _admin: User = Depends(admin_only),
    ctx: AppContext = Depends(get_context),
) -> dict:
    """删除动态."""
    async with ctx.session_factory() as session:
        moment = await session.get(Moment, moment_id)
        if not moment:
            raise NotFound("动态不存在")

        await session.delete(moment)
        await session.commit()

    await ctx.cache.delete_prefix(CACHE_PREFIX)
    logger.info(f"动态已删除: id={moment_id}")
    return {"success": True}
