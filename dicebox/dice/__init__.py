"""骰点模块"""
from .errors import (
    DiceError,
    LexError,
    LexErrorKind,
    ParseError,
    ParseErrorKind,
    ResourceLimitError,
)
from .lexer import Token, TokenType, tokenize
from .limits import RollLimits, check_limits
from .parser import (
    Add,
    DiceParser,
    DiceSegment,
    Modifier,
    Multiply,
    RollExpression,
    SortKeep,
    parse,
)
from .roller import DiceRoller, EvaluatedDie, RollResult, SegmentResult, SortMode

__all__ = [
    "DiceError", "LexError", "LexErrorKind", "ParseError", "ParseErrorKind",
    "ResourceLimitError",
    "Token", "TokenType", "tokenize",
    "RollLimits", "check_limits",
    "DiceParser", "RollExpression", "DiceSegment",
    "Modifier", "Multiply", "Add", "SortKeep", "parse",
    "DiceRoller", "RollResult", "SegmentResult", "EvaluatedDie", "SortMode",
]
