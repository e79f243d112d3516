"""骰点 API 路由"""
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ...services import RollService
from ..dependencies import get_roll_service

router = APIRouter()


# ===== Pydantic 模型 =====

class DiceRequest(BaseModel):
    """骰点请求"""
    roll: str


class DiceResponse(BaseModel):
    """骰点响应"""
    roll: str


# ===== API 端点 =====

@router.post(
    "",
    response_model=DiceResponse,
    responses={422: {"description": "表达式无效，响应体为纯文本原因"}},
)
def roll_dice(
    body: DiceRequest,
    service: RollService = Depends(get_roll_service),
):
    """执行骰点表达式（同步函数，由 FastAPI 放入线程池执行）"""
    outcome = service.handle_roll(body.roll)
    if not outcome.accepted:
        return PlainTextResponse(outcome.reason, status_code=422)
    return DiceResponse(roll=outcome.display_text)
