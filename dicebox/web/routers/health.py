"""健康检查 API 路由"""
import time
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()

# 应用启动时间
_start_time: Optional[float] = None


def set_start_time():
    """设置启动时间"""
    global _start_time
    _start_time = time.time()


def get_uptime() -> float:
    """获取运行时间（秒）"""
    if _start_time is None:
        return 0.0
    return time.time() - _start_time


class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str  # "healthy" | "unhealthy"
    uptime_seconds: float
    version: str


@router.get("", response_model=HealthResponse)
async def health_check(request: Request):
    """基础健康检查"""
    service = getattr(request.app.state, "roll_service", None)
    return {
        "status": "healthy" if service is not None else "unhealthy",
        "uptime_seconds": get_uptime(),
        "version": request.app.version,
    }
