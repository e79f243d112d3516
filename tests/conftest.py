"""测试公共夹具"""
import pytest


class ScriptedRandom:
    """按预设序列返回骰值的随机源"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        if not self.values:
            raise AssertionError("预设骰值已用完")
        return self.values.pop(0)


@pytest.fixture
def scripted():
    """返回一个构造 ScriptedRandom 的工厂"""
    return ScriptedRandom
