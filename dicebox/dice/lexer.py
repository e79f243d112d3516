"""骰点表达式词法分析器

把原始字符串切分为扁平的 Token 序列，例如:
    "3x 3d20 *4 +1 s2" -> 3 x 3 d 20 * 4 + 1 s 2 <END>
空格只用来分隔数字，本身不产生 Token。
"""
import enum
from dataclasses import dataclass
from typing import List, Optional

from .errors import LexError, LexErrorKind


class TokenType(enum.Enum):
    """Token 类型"""

    NUMBER = "number"
    REPEAT = "x"
    DICE = "d"
    MULTIPLY = "*"
    ADD = "+"
    SORT = "s"
    END = "end"


# 单字符标记（不区分大小写）
MARKERS = {
    "x": TokenType.REPEAT,
    "d": TokenType.DICE,
    "*": TokenType.MULTIPLY,
    "+": TokenType.ADD,
    "s": TokenType.SORT,
}

DIGITS = "0123456789"
SEPARATOR = " "

# 单个数字最多 9 位，避免超长数字拖慢 int() 和后续计算
MAX_DIGITS = 9


@dataclass(frozen=True)
class Token:
    """单个 Token"""

    type: TokenType
    position: int  # 在原始字符串中的起始下标
    value: Optional[int] = None  # 仅 NUMBER 有值

    def __str__(self) -> str:
        if self.type is TokenType.NUMBER:
            return str(self.value)
        if self.type is TokenType.END:
            return "<结束>"
        return self.type.value


def tokenize(expression: str) -> List[Token]:
    """将表达式切分为 Token 列表，末尾总是一个 END"""
    if not expression.strip(SEPARATOR):
        raise LexError(LexErrorKind.EMPTY_INPUT, 0)

    tokens: List[Token] = []
    i = 0
    length = len(expression)

    while i < length:
        c = expression[i]

        if c == SEPARATOR:
            i += 1
            continue

        if c in DIGITS:
            start = i
            while i < length and expression[i] in DIGITS:
                i += 1
            if i - start > MAX_DIGITS:
                raise LexError(LexErrorKind.NUMBER_TOO_LONG, start)
            tokens.append(Token(TokenType.NUMBER, start, int(expression[start:i])))
            continue

        token_type = MARKERS.get(c.lower())
        if token_type is None:
            raise LexError(LexErrorKind.INVALID_CHARACTER, i, c)

        tokens.append(Token(token_type, i))
        i += 1

    tokens.append(Token(TokenType.END, length))
    return tokens
