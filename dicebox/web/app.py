"""FastAPI 应用工厂"""
from typing import TYPE_CHECKING, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from loguru import logger

from .. import __version__
from .middleware import BodySizeLimitMiddleware, ErrorHandlerMiddleware, RequestLoggingMiddleware

if TYPE_CHECKING:
    from ..config import Settings
    from ..services import RollService


def create_app(
    roll_service: Optional["RollService"] = None,
    settings: Optional["Settings"] = None,
) -> FastAPI:
    """
    创建 FastAPI 应用

    Args:
        roll_service: 骰点服务（可选，不传则按配置创建）
        settings: 配置（可选，默认使用全局配置）

    Returns:
        配置好的 FastAPI 应用实例
    """
    if settings is None:
        from ..config import settings

    app = FastAPI(
        title="Dicebox",
        description="骰点表达式求值服务",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # 添加中间件（后添加的在外层）
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(ErrorHandlerMiddleware, debug=settings.debug)
    app.add_middleware(RequestLoggingMiddleware)

    # 客户端约定 422 一律为纯文本原因，请求体格式错误也不例外
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid request body: {request.method} {request.url.path}: {exc.errors()}")
        return PlainTextResponse('请求体格式错误，应为 {"roll": "<表达式>"}', status_code=422)

    if roll_service is None:
        from ..services import RollService
        roll_service = RollService.from_settings(settings)

    # 存储到 app.state 供依赖注入使用
    app.state.roll_service = roll_service
    app.state.settings = settings

    # 注册路由
    from .routers import dice_router, health_router

    app.include_router(dice_router, prefix="/dice", tags=["dice"])
    app.include_router(health_router, prefix="/health", tags=["health"])

    return app
