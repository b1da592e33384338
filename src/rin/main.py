"""Rin 主应用入口."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rin import __version__
from rin.api import config, moments
from rin.config import get_settings
from rin.context import AppContext, build_context
from rin.models.database import init_db

# 配置日志
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """应用生命周期管理."""
    if getattr(app.state, "context", None) is not None:
        yield
        return

    app_settings = get_settings()

    logger.info("正在初始化数据库...")
    engine, session_factory = await init_db(app_settings.database_url)

    app.state.context = build_context(app_settings, session_factory)
    logger.info("Rin 启动完成！")
    yield

    logger.info("正在关闭...")
    await engine.dispose()
    logger.info("Rin 已关闭")


def create_app(context: AppContext | None = None) -> FastAPI:
    """创建应用；传入 context 时直接使用（测试），否则在启动时按配置组装."""
    application = FastAPI(
        title="Rin",
        description="站点配置与动态服务",
        version=__version__,
        lifespan=lifespan,
    )
    if context is not None:
        application.state.context = context

    settings = context.settings if context is not None else get_settings()
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(config.router)
    application.include_router(moments.router)

    @application.get("/")
    async def root() -> dict:
        """根路径."""
        return {"name": "Rin", "version": __version__}

    @application.get("/health")
    async def health() -> dict:
        """健康检查."""
        return {"status": "ok"}

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
