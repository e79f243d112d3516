"""路由模块"""
from .dice import router as dice_router
from .health import router as health_router

__all__ = [
    "dice_router",
    "health_router",
]
