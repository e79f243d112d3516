"""日志装饰器

为骰点服务记录请求表达式、处理结果和耗时。

日志格式:
- 开始: ROLL | expr=xxx
- 接受: ROLL_OK | expr=xxx | duration=xxxms
- 拒绝: ROLL_REJECT | expr=xxx | reason=xxx | duration=xxxms
- 异常: ROLL_ERR | expr=xxx | error=xxx
"""
import time
from functools import wraps
from typing import Any, Callable

from loguru import logger


def log_roll(func: Callable) -> Callable:
    """骰点处理日志装饰器

    用于装饰 RollService.handle_roll，返回值需带有 accepted 属性，
    被拒绝时还需带有 reason 属性。
    """
    @wraps(func)
    def wrapper(self, expression: str, *args, **kwargs) -> Any:
        start_time = time.perf_counter()
        logger.info(f"ROLL | expr={expression!r}")

        try:
            outcome = func(self, expression, *args, **kwargs)
        except Exception as e:
            duration = (time.perf_counter() - start_time) * 1000
            logger.exception(
                f"ROLL_ERR | expr={expression!r} | "
                f"duration={duration:.2f}ms | error={type(e).__name__}: {e}"
            )
            raise

        duration = (time.perf_counter() - start_time) * 1000
        if outcome.accepted:
            logger.info(f"ROLL_OK | expr={expression!r} | duration={duration:.2f}ms")
        else:
            logger.info(
                f"ROLL_REJECT | expr={expression!r} | reason={outcome.reason} | "
                f"duration={duration:.2f}ms"
            )
        return outcome

    return wrapper
