"""骰点表达式解析器

语法:
    RollExpression := [ Number "x" ] Segment ( Segment )* END
    Segment        := Number "d" Number ( ("*" | "+" | "s") Number )*

例如 "3x 3d20 *4 +1 s2" 表示把 3d20、乘 4、加 1、保留 2 个骰子整体执行 3 次。
"""
from dataclasses import dataclass, field
from typing import List, Sequence

from .errors import DiceError, ParseError, ParseErrorKind
from .lexer import Token, TokenType, tokenize


@dataclass(frozen=True)
class Modifier:
    """骰点修正项基类"""

    value: int

    symbol = ""

    def __str__(self) -> str:
        return f"{self.symbol}{self.value}"


@dataclass(frozen=True)
class Multiply(Modifier):
    """乘法修正: *N"""

    symbol = "*"

    @property
    def factor(self) -> int:
        return self.value


@dataclass(frozen=True)
class Add(Modifier):
    """加法修正: +N"""

    symbol = "+"

    @property
    def addend(self) -> int:
        return self.value


@dataclass(frozen=True)
class SortKeep(Modifier):
    """排序保留: sN，具体语义由 DiceRoller 的 sort_mode 决定"""

    symbol = "s"

    @property
    def count(self) -> int:
        return self.value


MODIFIER_TYPES = {
    TokenType.MULTIPLY: Multiply,
    TokenType.ADD: Add,
    TokenType.SORT: SortKeep,
}


@dataclass
class DiceSegment:
    """一组骰子及其修正项"""

    count: int  # 骰子数量
    sides: int  # 骰子面数
    modifiers: List[Modifier] = field(default_factory=list)  # 按书写顺序

    def __str__(self) -> str:
        parts = [f"{self.count}d{self.sides}"]
        parts.extend(str(mod) for mod in self.modifiers)
        return " ".join(parts)


@dataclass
class RollExpression:
    """解析后的骰点表达式"""

    segments: List[DiceSegment]
    repeat_count: int = 1

    def __str__(self) -> str:
        body = " ".join(str(seg) for seg in self.segments)
        if self.repeat_count != 1:
            return f"{self.repeat_count}x {body}"
        return body

    @property
    def dice_per_repeat(self) -> int:
        return sum(seg.count for seg in self.segments)


class Parser:
    """递归下降解析器，要么返回完整表达式，要么抛出一个 ParseError"""

    def __init__(self, tokens: Sequence[Token]):
        if not tokens or tokens[-1].type is not TokenType.END:
            raise ValueError("Token 序列必须以 END 结尾")
        self._tokens = tokens
        self._index = 0

    @property
    def current(self) -> Token:
        return self._tokens[self._index]

    def peek(self, offset: int = 1) -> Token:
        index = min(self._index + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def advance(self) -> Token:
        token = self.current
        if token.type is not TokenType.END:
            self._index += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        token = self.current
        if token.type is not token_type:
            raise ParseError(
                ParseErrorKind.MALFORMED,
                token.position,
                f"期望 {_describe(token_type)}，实际为 {token}",
            )
        return self.advance()

    def parse(self) -> RollExpression:
        repeat_count = 1
        if (
            self.current.type is TokenType.NUMBER
            and self.peek().type is TokenType.REPEAT
        ):
            repeat_token = self.advance()
            self.advance()
            if repeat_token.value < 1:
                raise ParseError(ParseErrorKind.INVALID_REPEAT, repeat_token.position)
            repeat_count = repeat_token.value

        segments = [self.parse_segment()]
        # 修正项之后出现的数字只能是下一组骰子的开头
        while self.current.type is TokenType.NUMBER:
            segments.append(self.parse_segment())

        self.expect(TokenType.END)
        return RollExpression(segments=segments, repeat_count=repeat_count)

    def parse_segment(self) -> DiceSegment:
        count_token = self.expect(TokenType.NUMBER)
        self.expect(TokenType.DICE)
        sides_token = self.expect(TokenType.NUMBER)

        if count_token.value == 0:
            raise ParseError(
                ParseErrorKind.INVALID_DICE_SPEC, count_token.position, "骰子数量为 0"
            )
        if sides_token.value == 0:
            raise ParseError(
                ParseErrorKind.INVALID_DICE_SPEC, sides_token.position, "骰子面数为 0"
            )

        modifiers: List[Modifier] = []
        while self.current.type in MODIFIER_TYPES:
            klass = MODIFIER_TYPES[self.advance().type]
            modifiers.append(klass(self.expect(TokenType.NUMBER).value))

        return DiceSegment(
            count=count_token.value, sides=sides_token.value, modifiers=modifiers
        )


def _describe(token_type: TokenType) -> str:
    if token_type is TokenType.NUMBER:
        return "数字"
    if token_type is TokenType.END:
        return "表达式结束"
    return repr(token_type.value)


def parse(tokens: Sequence[Token]) -> RollExpression:
    """把 Token 序列解析为 RollExpression"""
    return Parser(tokens).parse()


class DiceParser:
    """骰点表达式解析器"""

    @classmethod
    def parse(cls, expression: str) -> RollExpression:
        """解析原始表达式，失败时抛出 LexError 或 ParseError"""
        return parse(tokenize(expression))

    @classmethod
    def is_valid(cls, expression: str) -> bool:
        """检查表达式是否有效"""
        try:
            cls.parse(expression)
        except DiceError:
            return False
        return True
