"""骰点服务

对外唯一的骰点入口：接收原始表达式字符串，依次做词法分析、语法分析、
资源限制检查和掷骰，返回 Accepted(结果文本) 或 Rejected(拒绝原因)。
"""
import random
from dataclasses import dataclass
from typing import Optional, Union

from ..dice import DiceError, DiceParser, DiceRoller, RollLimits, SortMode
from ..logging import log_roll


@dataclass(frozen=True)
class Accepted:
    """表达式有效，已掷骰"""

    display_text: str
    final_value: int = 0

    accepted = True


@dataclass(frozen=True)
class Rejected:
    """表达式无效，附带可直接展示给用户的原因"""

    reason: str

    accepted = False


RollOutcome = Union[Accepted, Rejected]


class RollService:
    """
    骰点服务

    本身无状态，多个请求可以共享同一个实例。
    """

    def __init__(
        self,
        roller: Optional[DiceRoller] = None,
        limits: Optional[RollLimits] = None,
    ):
        self.roller = roller or DiceRoller()
        self.limits = limits or RollLimits()

    @classmethod
    def from_settings(cls, settings) -> "RollService":
        """根据配置创建服务"""
        rng = random.Random(settings.rng_seed) if settings.rng_seed is not None else None
        return cls(
            roller=DiceRoller(rng=rng, sort_mode=SortMode(settings.sort_mode)),
            limits=RollLimits(
                max_total_dice=settings.max_total_dice,
                max_sides=settings.max_sides,
                max_repeat=settings.max_repeat,
                max_result=settings.max_result,
            ),
        )

    @log_roll
    def handle_roll(self, expression: str) -> RollOutcome:
        """处理一次骰点请求"""
        try:
            expr = DiceParser.parse(expression)
            self.limits.check(expr)
        except DiceError as e:
            return Rejected(reason=str(e))

        result = self.roller.evaluate(expr)
        return Accepted(display_text=result.display_text, final_value=result.final_value)
