"""依赖注入模块"""
from fastapi import HTTPException, Request

from ..services import RollService


def get_roll_service(request: Request) -> RollService:
    """获取骰点服务"""
    service = getattr(request.app.state, "roll_service", None)
    if not service:
        raise HTTPException(status_code=500, detail="骰点服务未初始化")
    return service
