"""骰点表达式求值服务"""

__version__ = "1.0.0"
