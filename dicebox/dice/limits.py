"""骰点资源限制，防止恶意表达式占满 CPU / 内存"""
from dataclasses import dataclass

from .errors import ResourceLimitError
from .parser import Add, DiceSegment, Multiply, RollExpression, SortKeep


@dataclass(frozen=True)
class RollLimits:
    """单次请求允许的上限"""

    max_total_dice: int = 10000  # 所有重复次数加起来的骰子总数
    max_sides: int = 1000000  # 单个骰子面数
    max_repeat: int = 100  # Nx 的 N
    max_result: int = 10 ** 15  # 修正过程中的值和最终结果的上限

    def check(self, expr: RollExpression) -> None:
        """超出任一限制时抛出 ResourceLimitError"""
        if expr.repeat_count > self.max_repeat:
            raise ResourceLimitError(
                f"重复次数过多: {expr.repeat_count} (最多 {self.max_repeat})"
            )

        for seg in expr.segments:
            if seg.sides > self.max_sides:
                raise ResourceLimitError(
                    f"骰子面数过多: {seg.sides} (最多 {self.max_sides})"
                )

        total_dice = expr.repeat_count * expr.dice_per_repeat
        if total_dice > self.max_total_dice:
            raise ResourceLimitError(
                f"骰子总数过多: {total_dice} (最多 {self.max_total_dice})"
            )

        bound = expr.repeat_count * sum(self.segment_bound(seg) for seg in expr.segments)
        self._check_result(bound)

    def segment_bound(self, seg: DiceSegment) -> int:
        """按修饰符顺序估算该段 running_total 的上界，逐步检查"""
        bound = seg.count * seg.sides
        self._check_result(bound)
        for modifier in seg.modifiers:
            if isinstance(modifier, Multiply):
                bound *= modifier.factor
            elif isinstance(modifier, Add):
                bound += modifier.addend
            elif isinstance(modifier, SortKeep):
                bound = seg.count * seg.sides
            self._check_result(bound)
        return bound

    def _check_result(self, bound: int) -> None:
        if bound > self.max_result:
            raise ResourceLimitError(f"结果可能过大 (最多 {self.max_result})")


def check_limits(
    expr: RollExpression,
    max_total_dice: int = RollLimits.max_total_dice,
    max_sides: int = RollLimits.max_sides,
    max_repeat: int = RollLimits.max_repeat,
    max_result: int = RollLimits.max_result,
) -> None:
    """按给定上限检查表达式"""
    RollLimits(max_total_dice, max_sides, max_repeat, max_result).check(expr)
