"""Web 中间件：错误处理、请求日志、请求体大小限制"""
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class ErrorResponse:
    """统一错误响应"""

    def __init__(self, code: int, message: str, detail: str = None):
        self.code = code
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        result = {"code": self.code, "message": self.message}
        if self.detail:
            result["detail"] = self.detail
        return result


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """全局错误处理中间件，debug 模式下返回异常信息"""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error: {request.method} {request.url.path}")
            error = ErrorResponse(
                code=500,
                message="服务器内部错误",
                detail=f"{type(e).__name__}: {e}" if self.debug else None,
            )
            return JSONResponse(status_code=500, content=error.to_dict())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """请求日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger.debug(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"Response: {request.method} {request.url.path} -> {response.status_code}")
        return response


class BodySizeLimitMiddleware:
    """
    拒绝过大的请求体

    先检查 Content-Length，再在读取时累计实际字节数，
    分块传输（没有 Content-Length）的请求同样受限。
    读完的请求体会原样回放给下游应用。
    """

    def __init__(self, app: ASGIApp, max_bytes: int = 16 * 1024):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                response = PlainTextResponse("Content-Length 无效", status_code=400)
                await response(scope, receive, send)
                return
            if size > self.max_bytes:
                await self._reject(request, size, scope, receive, send)
                return

        body = b""
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] != "http.request":
                # 客户端已断开
                return
            body += message.get("body", b"")
            if len(body) > self.max_bytes:
                await self._reject(request, len(body), scope, receive, send)
                return
            more_body = message.get("more_body", False)

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, request: Request, size: int, scope: Scope, receive: Receive, send: Send):
        logger.warning(
            f"Body too large: {request.method} {request.url.path} "
            f"size={size} limit={self.max_bytes}"
        )
        response = PlainTextResponse(
            f"请求体过大: {size} 字节 (最多 {self.max_bytes})",
            status_code=413,
        )
        await response(scope, receive, send)
