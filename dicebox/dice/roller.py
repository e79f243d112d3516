"""骰点执行器"""
import enum
import random
from dataclasses import dataclass, field
from typing import List

from .parser import Add, DiceSegment, Modifier, Multiply, RollExpression, SortKeep


class SortMode(str, enum.Enum):
    """sN 修正的语义"""

    KEEP_HIGHEST = "keep_highest"  # 保留最大的 N 个
    DROP_LOWEST = "drop_lowest"  # 去掉最小的 N 个


@dataclass
class EvaluatedDie:
    """一次具体的掷骰"""

    sides: int
    face_value: int

    def __post_init__(self):
        if not 1 <= self.face_value <= self.sides:
            raise ValueError(f"骰值越界: {self.face_value} 不在 1..{self.sides}")


@dataclass
class SegmentResult:
    """一组骰子的结果"""

    segment: DiceSegment
    throws: List[EvaluatedDie] = field(default_factory=list)
    running_total: int = 0

    @property
    def faces(self) -> List[int]:
        return [die.face_value for die in self.throws]

    def __str__(self) -> str:
        faces = ", ".join(map(str, self.faces))
        return f"{self.segment} = [{faces}] = {self.running_total}"


@dataclass
class RollResult:
    """骰点结果"""

    expression: RollExpression
    repeats: List[List[SegmentResult]] = field(default_factory=list)
    final_value: int = 0

    @property
    def repeat_values(self) -> List[int]:
        return [sum(seg.running_total for seg in rep) for rep in self.repeats]

    @property
    def display_text(self) -> str:
        """
        可读的结果明细，例如 "2x 2d6 +1 1d4":
            #1: 2d6 +1 = [3, 5] = 9; 1d4 = [2] = 2 => 11
            #2: 2d6 +1 = [1, 6] = 8; 1d4 = [4] = 4 => 12
            Total: 23
        """
        lines = []
        numbered = self.expression.repeat_count > 1
        for index, (rep, value) in enumerate(
            zip(self.repeats, self.repeat_values), start=1
        ):
            line = "; ".join(str(seg) for seg in rep)
            if len(rep) > 1:
                line += f" => {value}"
            if numbered:
                line = f"#{index}: {line}"
            lines.append(line)

        lines.append(f"Total: {self.final_value}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.display_text


class DiceRoller:
    """
    骰点执行器

    rng 只需要提供 randint(a, b)，默认使用独立的 random.Random 实例，
    测试中可以传入固定序列。
    """

    def __init__(self, rng=None, sort_mode: SortMode = SortMode.KEEP_HIGHEST):
        self.rng = rng if rng is not None else random.Random()
        self.sort_mode = SortMode(sort_mode)

    def evaluate(self, expr: RollExpression) -> RollResult:
        """执行整个表达式，每次重复都重新掷所有骰子"""
        repeats = [
            [self.roll_segment(seg) for seg in expr.segments]
            for _ in range(expr.repeat_count)
        ]
        result = RollResult(expression=expr, repeats=repeats)
        result.final_value = sum(result.repeat_values)
        return result

    def roll_segment(self, segment: DiceSegment) -> SegmentResult:
        """掷一组骰子并按书写顺序应用修正"""
        throws = [
            EvaluatedDie(segment.sides, self.rng.randint(1, segment.sides))
            for _ in range(segment.count)
        ]
        result = SegmentResult(
            segment=segment,
            throws=throws,
            running_total=sum(die.face_value for die in throws),
        )

        for mod in segment.modifiers:
            self.apply_modifier(result, mod)

        return result

    def apply_modifier(self, result: SegmentResult, mod: Modifier) -> None:
        if isinstance(mod, Multiply):
            result.running_total *= mod.factor
        elif isinstance(mod, Add):
            result.running_total += mod.addend
        elif isinstance(mod, SortKeep):
            result.throws.sort(key=lambda die: die.face_value)
            result.running_total = self.sort_total(result.faces, mod.count)
        else:
            raise TypeError(f"未知的修正项: {mod!r}")

    def sort_total(self, faces: List[int], n: int) -> int:
        """faces 已升序排列，N 超过骰子数量时按骰子数量处理"""
        n = min(n, len(faces))
        if self.sort_mode is SortMode.KEEP_HIGHEST:
            return sum(faces[len(faces) - n:])
        return sum(faces[n:])
