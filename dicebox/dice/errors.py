"""骰点表达式错误类型"""
import enum
from typing import Optional


class DiceError(ValueError):
    """骰点表达式无效时抛出的基类异常"""


class LexErrorKind(enum.Enum):
    """词法错误类型"""

    EMPTY_INPUT = "empty_input"
    INVALID_CHARACTER = "invalid_character"
    NUMBER_TOO_LONG = "number_too_long"


class ParseErrorKind(enum.Enum):
    """语法错误类型"""

    MALFORMED = "malformed"
    INVALID_DICE_SPEC = "invalid_dice_spec"
    INVALID_REPEAT = "invalid_repeat"


class LexError(DiceError):
    """词法分析失败"""

    def __init__(
        self,
        kind: LexErrorKind,
        position: int,
        character: Optional[str] = None,
    ):
        self.kind = kind
        self.position = position
        self.character = character

        if kind is LexErrorKind.EMPTY_INPUT:
            message = "骰点表达式为空"
        elif kind is LexErrorKind.NUMBER_TOO_LONG:
            message = f"第 {position + 1} 个字符开始的数字过长"
        else:
            message = f"第 {position + 1} 个字符 {character!r} 无法识别"
        super().__init__(message)


class ParseError(DiceError):
    """语法分析失败"""

    MESSAGES = {
        ParseErrorKind.MALFORMED: "表达式格式错误",
        ParseErrorKind.INVALID_DICE_SPEC: "骰子数量和面数必须大于 0",
        ParseErrorKind.INVALID_REPEAT: "重复次数必须大于 0",
    }

    def __init__(self, kind: ParseErrorKind, position: int, detail: str = ""):
        self.kind = kind
        self.position = position
        self.detail = detail

        message = f"{self.MESSAGES[kind]} (位置 {position + 1})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ResourceLimitError(DiceError):
    """表达式超出资源限制"""
